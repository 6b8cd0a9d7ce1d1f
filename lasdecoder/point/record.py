""" Contains the classes that hold decoded points

A single decoded point is a PointRecord (a NamedTuple of plain python values),
a chunk of points is a ScaleAwarePointRecord, which wraps the numpy structured
array read from the file and unpacks / scales dimensions when accessed
"""

from typing import Iterator, NamedTuple, Optional

import numpy as np

from . import dims
from .format import PointFormat
from .packing import unpack, unpack_return_byte


def scale_dimension(array_dim, scale, offset):
    return (array_dim * scale) + offset


class PointRecord(NamedTuple):
    """One decoded point, with its coordinates already scaled"""

    x: float
    y: float
    z: float
    intensity: int
    return_number: int
    number_of_returns: int
    scan_direction_flag: int
    edge_of_flight_line: int
    classification: int
    scan_angle_rank: int
    user_data: int
    point_source_id: int
    #: Only present in point format 1
    gps_time: Optional[float] = None

    @classmethod
    def from_raw(cls, raw: np.void, scales, offsets) -> "PointRecord":
        """Builds the point from one element of a structured array
        using the point format dtype
        """
        gps_time = None
        if "gps_time" in raw.dtype.names:
            gps_time = float(raw["gps_time"])

        return cls(
            float(scale_dimension(int(raw["X"]), scales[0], offsets[0])),
            float(scale_dimension(int(raw["Y"]), scales[1], offsets[1])),
            float(scale_dimension(int(raw["Z"]), scales[2], offsets[2])),
            int(raw["intensity"]),
            *unpack_return_byte(raw["bit_fields"]),
            int(raw["classification"]),
            int(raw["scan_angle_rank"]),
            int(raw["user_data"]),
            int(raw["point_source_id"]),
            gps_time,
        )


class ScaleAwarePointRecord:
    """A chunk of points that knows the scales and offsets
    to use, and is thus able to give the scaled x, y, z coordinates

    Raw dimensions are accessed by name: ``record["X"]``, ``record["intensity"]``,
    sub-fields of the bit fields are unpacked when accessed: ``record["return_number"]``.
    Every dimension is also reachable as an attribute.
    """

    def __init__(self, array: np.ndarray, point_format: PointFormat, scales, offsets):
        self.array = array
        self.point_format = point_format
        self.sub_fields_dict = dims.get_sub_fields_dict(point_format.id)
        self.scales = np.array(scales, dtype=np.float64)
        self.offsets = np.array(offsets, dtype=np.float64)

        if self.scales.shape != (3,):
            raise ValueError("scales must be an array of 3 elements")

        if self.offsets.shape != (3,):
            raise ValueError("offsets must be an array of 3 elements")

    @classmethod
    def from_buffer(cls, buffer, point_format, scales, offsets, count=-1, offset=0):
        data = np.frombuffer(
            buffer, dtype=point_format.dtype(), offset=offset, count=count
        )
        return cls(data, point_format, scales, offsets)

    @classmethod
    def empty(cls, point_format, scales, offsets):
        """Creates an empty point record."""
        return cls(np.zeros(0, point_format.dtype()), point_format, scales, offsets)

    def __len__(self):
        return self.array.shape[0]

    def __getitem__(self, item):
        if isinstance(item, (int, slice, np.ndarray, list)):
            return ScaleAwarePointRecord(
                np.atleast_1d(self.array[item]),
                self.point_format,
                self.scales,
                self.offsets,
            )

        try:
            raw_name = dims.SCALED_DIMENSIONS[item]
        except KeyError:
            pass
        else:
            axis = "xyz".index(item)
            return scale_dimension(
                self.array[raw_name], self.scales[axis], self.offsets[axis]
            )

        try:
            composed_dim, sub_field = self.sub_fields_dict[item]
        except KeyError:
            pass
        else:
            return unpack(self.array[composed_dim], sub_field.mask)

        return self.array[item]

    def __getattr__(self, item):
        if item in ("array", "point_format", "sub_fields_dict", "scales", "offsets"):
            # not yet set, happens during unpickling
            raise AttributeError(item)
        try:
            return self[item]
        except (ValueError, KeyError):
            raise AttributeError("{} is not a valid dimension".format(item)) from None

    def __iter__(self) -> Iterator[PointRecord]:
        for raw in self.array:
            yield PointRecord.from_raw(raw, self.scales, self.offsets)

    def __repr__(self):
        return "<{}(fmt: {}, len: {}, point size: {})>".format(
            self.__class__.__name__,
            self.point_format,
            len(self),
            self.point_format.size,
        )
