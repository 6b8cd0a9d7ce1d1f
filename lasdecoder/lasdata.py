from typing import Iterator

import numpy as np

from .header import LasHeader
from .point.format import PointFormat
from .point.record import PointRecord, ScaleAwarePointRecord


class LasData:
    """Holds the header and all the points of a LAS file.

    To access points dimensions using this class you have two possibilities

    .. code:: python

        las = lasdecoder.read('some_file.las')
        las.classification
        # or
        las['classification']
    """

    def __init__(self, header: LasHeader, points: ScaleAwarePointRecord) -> None:
        self.header = header
        self.points = points

    @property
    def point_format(self) -> PointFormat:
        """Shortcut to get the point format"""
        return self.points.point_format

    @property
    def xyz(self) -> np.ndarray:
        """Returns a **new** 2D numpy array with the x,y,z coordinates"""
        return np.vstack((self.points.x, self.points.y, self.points.z)).transpose()

    def __getattr__(self, item):
        if item in ("header", "points"):
            raise AttributeError(item)
        return getattr(self.points, item)

    def __getitem__(self, item):
        return self.points[item]

    def __len__(self):
        return len(self.points)

    def __iter__(self) -> Iterator[PointRecord]:
        return iter(self.points)

    def __repr__(self) -> str:
        return "<LasData({}.{}, point fmt: {}, {} points)>".format(
            self.header.version.major,
            self.header.version.minor,
            self.points.point_format,
            len(self.points),
        )
