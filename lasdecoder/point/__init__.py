from .format import PointFormat
from .packing import ReturnByte, unpack_return_byte
from .record import PointRecord, ScaleAwarePointRecord
