import io
import logging
from typing import BinaryIO, Iterator

import numpy as np

from . import errors
from .header import LasHeader
from .lasdata import LasData
from .point.record import PointRecord, ScaleAwarePointRecord
from .utils import read_exact

logger = logging.getLogger(__name__)


class LasReader:
    """Decodes the points of a LAS file, one at a time or by chunks.

    The header is read when the reader is created, the source
    is then positioned on the first point record.

    Points are decoded lazily, and only once: to start again from the first
    point the source has to be re-opened (or :meth:`seek` used, if the
    source is seekable).
    """

    def __init__(self, source: BinaryIO, closefd: bool = True):
        """
        Initialize the LasReader

        Parameters
        ----------
        source: file_object
            binary stream positioned on the start of the file
        closefd: bool, default True
            whether :meth:`close` closes the source
        """
        self.closefd = closefd
        # Position of the start of the file in the source, which may not be 0
        # when the LAS file is embedded in a bigger stream
        self._start = source.tell() if source.seekable() else 0
        self.header = LasHeader.read_from(source)
        self._source = source

        self.points_read = 0
        # Set after a truncated record, the position in the source
        # is not known anymore
        self._broken = False

    @property
    def source(self) -> BinaryIO:
        return self._source

    @property
    def points_left(self) -> int:
        return max(self.header.point_count - self.points_read, 0)

    def decode_next(self) -> PointRecord:
        """Decodes the next point

        Raises
        ------
        EndOfStream
            when all the points announced by the header were decoded,
            or when the source has no more bytes at the start of a record
        TruncatedRecordError
            when the source ends in the middle of a record, the reader
            cannot be used anymore after that
        """
        self._raise_if_broken()
        if self.points_left == 0:
            raise errors.EndOfStream()

        point_size = self.header.point_format.size
        data = read_exact(self._source, point_size)
        if not data:
            self._warn_missing_points()
            raise errors.EndOfStream()
        if len(data) < point_size:
            self._broken = True
            raise errors.TruncatedRecordError(self.points_read, point_size, len(data))

        raw = np.frombuffer(data, dtype=self.header.point_format.dtype(), count=1)[0]
        self.points_read += 1
        return PointRecord.from_raw(raw, self.header.scales, self.header.offsets)

    def read_points(self, n: int) -> ScaleAwarePointRecord:
        """Read n points from the file


        Will only read as many points as the header advertise.
        That is, if you ask to read 50 points and there are only 45 points left
        this function will only read 45 points.

        If there are no points left to read, returns an empty point record.

        Parameters
        ----------
        n: The number of points to read
           if n is less than 0, this function will read the remaining points
        """
        self._raise_if_broken()
        if n < 0:
            n = self.points_left
        else:
            n = min(n, self.points_left)

        point_format = self.header.point_format
        data = read_exact(self._source, n * point_format.size)
        num_complete, num_trailing = divmod(len(data), point_format.size)
        if num_trailing != 0:
            self._broken = True
            raise errors.TruncatedRecordError(
                self.points_read + num_complete, point_format.size, num_trailing
            )
        if num_complete < n:
            self.points_read += num_complete
            self._warn_missing_points()
        else:
            self.points_read += n

        if not data:
            return ScaleAwarePointRecord.empty(
                point_format, self.header.scales, self.header.offsets
            )
        return ScaleAwarePointRecord.from_buffer(
            data, point_format, self.header.scales, self.header.offsets
        )

    def read(self) -> LasData:
        """
        Reads all the points that are not read and returns a LasData object
        """
        points = self.read_points(-1)
        return LasData(header=self.header, points=points)

    def seek(self, pos: int, whence: int = io.SEEK_SET) -> int:
        """Seeks to the start of the point at the given pos

        Only possible when the source is seekable.

        Parameters
        ----------
        pos: index of the point to seek to
        whence: optional, controls how the pos parameter is interpreted:
                io.SEEK_SET: (default) pos is the index of the point from the beginning
                io.SEEK_CUR: pos is the point_index relative to the point_index of the last point read
                io.SEEK_END: pos is the point_index relative to last point
        Returns
        -------
        The index of the point the reader seeked to, relative to the first point
        """
        if whence == io.SEEK_SET:
            allowed_range = range(0, self.header.point_count)
            point_index = pos
        elif whence == io.SEEK_CUR:
            allowed_range = range(
                -self.points_read, self.header.point_count - self.points_read
            )
            point_index = self.points_read + pos
        elif whence == io.SEEK_END:
            allowed_range = range(-self.header.point_count, 0)
            point_index = self.header.point_count + pos
        else:
            raise ValueError(f"Invalid value for whence: {whence}")

        if pos not in allowed_range:
            whence_str = ["start", "current point", "end"]
            raise IndexError(
                f"When seeking from the {whence_str[whence]}, pos must be in {allowed_range}"
            )

        self._source.seek(
            self._start
            + self.header.offset_to_point_data
            + (point_index * self.header.point_format.size)
        )
        self.points_read = point_index
        self._broken = False
        return point_index

    def chunk_iterator(self, points_per_iteration: int) -> "PointChunkIterator":
        """Returns an iterator, that will read points by chunks
        of the requested size

        :param points_per_iteration: number of points to be read with each iteration
        :return:
        """
        return PointChunkIterator(self, points_per_iteration)

    def close(self) -> None:
        """closes the file object used by the reader"""
        if self.closefd:
            self._source.close()

    def _raise_if_broken(self) -> None:
        if self._broken:
            raise errors.LasDecoderException(
                "A previous point record was truncated, the reader cannot be used anymore"
            )

    def _warn_missing_points(self) -> None:
        logger.warning(
            f"Source ended after {self.points_read} points, "
            f"header announced {self.header.point_count}"
        )

    def __iter__(self) -> Iterator[PointRecord]:
        while True:
            try:
                point = self.decode_next()
            except errors.EndOfStream:
                return
            yield point

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class PointChunkIterator:
    def __init__(self, reader: LasReader, points_per_iteration: int) -> None:
        if points_per_iteration <= 0:
            raise ValueError("points_per_iteration must be a positive number")
        self.reader = reader
        self.points_per_iteration = points_per_iteration

    def __next__(self) -> ScaleAwarePointRecord:
        points = self.reader.read_points(self.points_per_iteration)
        if not len(points):
            raise StopIteration
        return points

    def __iter__(self) -> "PointChunkIterator":
        return self
