import logging
import struct
from datetime import date, timedelta
from typing import BinaryIO, NamedTuple, Optional

import numpy as np

from .errors import FormatError, TruncatedHeaderError
from .point.dims import LAS_HEADER_SIZE
from .point.format import PointFormat
from .utils import decode_fixed_width_string, read_exact, skip_bytes

logger = logging.getLogger(__name__)

GENERATING_SOFTWARE_LEN = 32
SYSTEM_IDENTIFIER_LEN = 32

# File signature, file source id, global encoding and project id
FILE_IDENTIFICATION_LEN = 24
# Number of points by return, for the 5 first returns
POINTS_BY_RETURN_LEN = 20


class Version(NamedTuple):
    major: int
    minor: int

    def __eq__(self, other):
        if isinstance(other, str):
            return str(self) == other
        else:
            return other.major == self.major and other.minor == self.minor

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash(tuple(self))

    def __str__(self):
        return f"{self.major}.{self.minor}"


def _read_field(stream: BinaryIO, length: int, field: str) -> bytes:
    data = read_exact(stream, length)
    if len(data) < length:
        raise TruncatedHeaderError(field, length, len(data))
    return data


def _read_uint(stream: BinaryIO, length: int, field: str) -> int:
    return int.from_bytes(
        _read_field(stream, length, field), byteorder="little", signed=False
    )


def _read_f64(stream: BinaryIO, field: str) -> float:
    return struct.unpack("<d", _read_field(stream, 8, field))[0]


def _read_only_array(values) -> np.ndarray:
    array = np.array(values, dtype=np.float64)
    array.flags.writeable = False
    return array


class LasHeader:
    """Contains the information from the fixed size header of a LAS file.

    The header is created once when the file is opened
    and cannot be modified afterwards.

    >>> header = LasHeader(point_format_id=1, point_count=3)
    >>> header
    <LasHeader(1.2, <PointFormat(1, 0 bytes of extra dims)>, 3 points)>
    >>> header.point_count = 4
    Traceback (most recent call last):
    AttributeError: LasHeader is read-only, cannot set 'point_count'
    """

    #: The version used when None is given to init
    DEFAULT_VERSION = Version(1, 2)

    def __init__(
        self,
        *,
        version: Optional[Version] = None,
        system_identifier: str = "",
        generating_software: str = "",
        creation_day_of_year: int = 0,
        creation_year: int = 0,
        header_size: int = LAS_HEADER_SIZE,
        offset_to_point_data: int = LAS_HEADER_SIZE,
        number_of_vlrs: int = 0,
        point_format_id: int = 0,
        point_record_length: Optional[int] = None,
        point_count: int = 0,
        scales=(0.01, 0.01, 0.01),
        offsets=(0.0, 0.0, 0.0),
        maxs=(0.0, 0.0, 0.0),
        mins=(0.0, 0.0, 0.0),
    ) -> None:
        if version is None:
            version = LasHeader.DEFAULT_VERSION
        if offset_to_point_data < LAS_HEADER_SIZE:
            raise FormatError(
                f"Offset to point data ({offset_to_point_data}) is smaller "
                f"than the header size ({LAS_HEADER_SIZE})"
            )
        point_format = PointFormat(point_format_id, point_record_length)

        set_ = super().__setattr__
        set_("version", version)
        set_("system_identifier", system_identifier)
        set_("generating_software", generating_software)
        set_("creation_day_of_year", creation_day_of_year)
        set_("creation_year", creation_year)
        set_("header_size", header_size)
        set_("offset_to_point_data", offset_to_point_data)
        set_("number_of_vlrs", number_of_vlrs)
        set_("point_format", point_format)
        set_("point_record_length", point_format.size)
        set_("point_count", point_count)
        set_("scales", _read_only_array(scales))
        set_("offsets", _read_only_array(offsets))
        set_("maxs", _read_only_array(maxs))
        set_("mins", _read_only_array(mins))

    @property
    def point_format_id(self) -> int:
        return self.point_format.id

    @property
    def creation_date(self) -> Optional[date]:
        """The creation date, None if the day of year and year
        stored in the file do not form a valid date
        """
        try:
            return date(self.creation_year, 1, 1) + timedelta(
                self.creation_day_of_year - 1
            )
        except (ValueError, OverflowError):
            return None

    @property
    def vlr_bytes_size(self) -> int:
        """Number of bytes between the end of the header and the first point"""
        return self.offset_to_point_data - LAS_HEADER_SIZE

    # scale properties
    @property
    def x_scale(self) -> float:
        return self.scales[0]

    @property
    def y_scale(self) -> float:
        return self.scales[1]

    @property
    def z_scale(self) -> float:
        return self.scales[2]

    # offset properties
    @property
    def x_offset(self) -> float:
        return self.offsets[0]

    @property
    def y_offset(self) -> float:
        return self.offsets[1]

    @property
    def z_offset(self) -> float:
        return self.offsets[2]

    # max properties
    @property
    def x_max(self) -> float:
        return self.maxs[0]

    @property
    def y_max(self) -> float:
        return self.maxs[1]

    @property
    def z_max(self) -> float:
        return self.maxs[2]

    # min properties
    @property
    def x_min(self) -> float:
        return self.mins[0]

    @property
    def y_min(self) -> float:
        return self.mins[1]

    @property
    def z_min(self) -> float:
        return self.mins[2]

    @classmethod
    def read_from(cls, stream: BinaryIO) -> "LasHeader":
        """
        Reads the header from the stream

        Leaves the stream pos right before the first point,
        the bytes between the end of the header and the first point
        are read and discarded, so the stream does not need to be seekable.
        """
        _read_field(stream, FILE_IDENTIFICATION_LEN, "file_identification")

        version = Version(
            _read_uint(stream, 1, "version_major"),
            _read_uint(stream, 1, "version_minor"),
        )

        system_identifier = decode_fixed_width_string(
            _read_field(stream, SYSTEM_IDENTIFIER_LEN, "system_identifier")
        )
        generating_software = decode_fixed_width_string(
            _read_field(stream, GENERATING_SOFTWARE_LEN, "generating_software")
        )

        creation_day_of_year = _read_uint(stream, 2, "creation_day_of_year")
        creation_year = _read_uint(stream, 2, "creation_year")

        header_size = _read_uint(stream, 2, "header_size")
        offset_to_point_data = _read_uint(stream, 4, "offset_to_point_data")
        number_of_vlrs = _read_uint(stream, 4, "number_of_vlrs")

        point_format_id = _read_uint(stream, 1, "point_format_id")
        point_record_length = _read_uint(stream, 2, "point_record_length")
        point_count = _read_uint(stream, 4, "point_count")

        _read_field(stream, POINTS_BY_RETURN_LEN, "number_of_points_by_return")

        scales = [_read_f64(stream, f"{axis}_scale") for axis in "xyz"]
        offsets = [_read_f64(stream, f"{axis}_offset") for axis in "xyz"]
        maxs, mins = [], []
        for axis in "xyz":
            maxs.append(_read_f64(stream, f"{axis}_max"))
            mins.append(_read_f64(stream, f"{axis}_min"))

        if header_size != LAS_HEADER_SIZE:
            logger.warning(
                f"Header size is {header_size}, expected {LAS_HEADER_SIZE}, "
                f"the {header_size - LAS_HEADER_SIZE} bytes after the standard "
                f"header will be skipped"
            )

        header = cls(
            version=version,
            system_identifier=system_identifier,
            generating_software=generating_software,
            creation_day_of_year=creation_day_of_year,
            creation_year=creation_year,
            header_size=header_size,
            offset_to_point_data=offset_to_point_data,
            number_of_vlrs=number_of_vlrs,
            point_format_id=point_format_id,
            point_record_length=point_record_length,
            point_count=point_count,
            scales=scales,
            offsets=offsets,
            maxs=maxs,
            mins=mins,
        )

        num_to_skip = header.vlr_bytes_size
        logger.debug(
            f"Read header of LAS {version}, point format {point_format_id}, "
            f"{point_count} points, skipping {num_to_skip} bytes "
            f"({number_of_vlrs} vlrs)"
        )
        num_skipped = skip_bytes(stream, num_to_skip)
        if num_skipped < num_to_skip:
            raise TruncatedHeaderError("vlrs", num_to_skip, num_skipped)

        return header

    def __setattr__(self, key, value):
        raise AttributeError(f"LasHeader is read-only, cannot set '{key}'")

    def __delattr__(self, key):
        raise AttributeError(f"LasHeader is read-only, cannot delete '{key}'")

    def __repr__(self) -> str:
        return (
            f"<LasHeader({self.version.major}.{self.version.minor}, "
            f"{self.point_format}, {self.point_count} points)>"
        )
