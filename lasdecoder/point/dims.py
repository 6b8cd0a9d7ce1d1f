"""  This module contains the definitions of the point formats dimensions,
the mapping between dimension names and their type, and the layout of
the sub-fields packed in the 'bit_fields' byte
"""

from collections import UserDict
from typing import Dict, Generic, List, NamedTuple, Tuple, TypeVar

import numpy as np

from .. import errors

ValueType = TypeVar("ValueType")


class PointFormatDict(UserDict, Generic[ValueType]):
    """Simple wrapper around a dict that changes
    the exception raised when accessing a key that is not-present

    """

    def __init__(self, wrapped_dict: Dict[int, ValueType]):
        super().__init__(wrapped_dict)

    def __getitem__(self, key: int) -> ValueType:
        try:
            return self.data[key]
        except KeyError:
            raise errors.PointFormatNotSupported(
                f"Point format {key} is not supported"
            ) from None


class SubField(NamedTuple):
    name: str
    mask: int


# X, Y, Z are signed on purpose, as the LAS definition stores them
DIMENSIONS_TO_TYPE: Dict[str, np.dtype] = {
    "X": np.dtype("<i4"),
    "Y": np.dtype("<i4"),
    "Z": np.dtype("<i4"),
    "intensity": np.dtype("<u2"),
    "bit_fields": np.dtype("u1"),
    "classification": np.dtype("u1"),
    "scan_angle_rank": np.dtype("i1"),
    "user_data": np.dtype("u1"),
    "point_source_id": np.dtype("<u2"),
    "gps_time": np.dtype("<f8"),
}

POINT_FORMAT_0: Tuple[str, ...] = (
    "X",
    "Y",
    "Z",
    "intensity",
    "bit_fields",
    "classification",
    "scan_angle_rank",
    "user_data",
    "point_source_id",
)

POINT_FORMAT_DIMENSIONS = PointFormatDict(
    {
        0: POINT_FORMAT_0,
        1: POINT_FORMAT_0 + ("gps_time",),
    }
)

# sub fields of the 'bit_fields' dimension,
# the return number sits in the most significant bits
RETURN_NUMBER_MASK = 0b11100000
NUMBER_OF_RETURNS_MASK = 0b00011100
SCAN_DIRECTION_FLAG_MASK = 0b00000010
EDGE_OF_FLIGHT_LINE_MASK = 0b00000001

BIT_FIELDS_SUB_FIELDS: List[SubField] = [
    SubField("return_number", RETURN_NUMBER_MASK),
    SubField("number_of_returns", NUMBER_OF_RETURNS_MASK),
    SubField("scan_direction_flag", SCAN_DIRECTION_FLAG_MASK),
    SubField("edge_of_flight_line", EDGE_OF_FLIGHT_LINE_MASK),
]

COMPOSED_FIELDS = PointFormatDict(
    {
        0: {"bit_fields": BIT_FIELDS_SUB_FIELDS},
        1: {"bit_fields": BIT_FIELDS_SUB_FIELDS},
    }
)

SCALED_DIMENSIONS: Dict[str, str] = {"x": "X", "y": "Y", "z": "Z"}

# Size of the header block that comes before the VLRs
LAS_HEADER_SIZE = 227


def point_format_dtype(point_format_id: int, num_extra_bytes: int = 0) -> np.dtype:
    """build the numpy.dtype of a point record

    Bit fields are still packed in the returned dtype.
    Unmodelled trailing bytes, if any, are kept in an opaque
    'extra_bytes' field so that the itemsize matches the record length.
    """
    fields = [
        (dim_name, DIMENSIONS_TO_TYPE[dim_name])
        for dim_name in POINT_FORMAT_DIMENSIONS[point_format_id]
    ]
    if num_extra_bytes > 0:
        fields.append(("extra_bytes", np.dtype("u1"), (num_extra_bytes,)))
    return np.dtype(fields)


def get_sub_fields_dict(point_format_id: int) -> Dict[str, Tuple[str, SubField]]:
    sub_fields_dict = {}
    for composed_dim_name, sub_fields in COMPOSED_FIELDS[point_format_id].items():
        for sub_field in sub_fields:
            sub_fields_dict[sub_field.name] = (composed_dim_name, sub_field)
    return sub_fields_dict


def supported_point_formats() -> Tuple[int, ...]:
    """Returns a tuple of the point formats that can be decoded"""
    return tuple(POINT_FORMAT_DIMENSIONS.keys())
