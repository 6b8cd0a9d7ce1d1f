__version__ = "1.0.0"

import logging

from . import errors
from .errors import (
    EndOfStream,
    FormatError,
    LasDecoderException,
    PointFormatNotSupported,
    TruncatedHeaderError,
    TruncatedRecordError,
)
from .header import LasHeader, Version
from .lasdata import LasData
from .lasreader import LasReader
from .lib import open_las as open
from .lib import read_las as read
from .point import PointFormat, PointRecord, ScaleAwarePointRecord
from .point.dims import supported_point_formats
from .point.packing import unpack_return_byte

logging.getLogger(__name__).addHandler(logging.NullHandler())
