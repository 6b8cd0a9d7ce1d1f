from typing import Iterable, Optional

import numpy as np

from ..errors import FormatError
from . import dims


class PointFormat:
    """Class that contains the informations about the layout of the
    point records of a file.

    The standard dimensions are fixed by the point format id, the header may
    however declare a record length bigger than what the standard dimensions
    need, these trailing bytes are not interpreted and are only skipped.

    >>> fmt = PointFormat(1)
    >>> fmt.size
    28
    >>> fmt = PointFormat(0, record_length=26)
    >>> fmt.num_standard_bytes, fmt.num_extra_bytes
    (20, 6)
    """

    def __init__(self, point_format_id: int, record_length: Optional[int] = None):
        """
        Parameters
        ----------
        point_format_id: int
            point format id
        record_length: int, optional
            the record length declared in the header,
            defaults to the size of the standard dimensions
        """
        self.id: int = point_format_id
        self.dimension_names: Iterable[str] = dims.POINT_FORMAT_DIMENSIONS[self.id]
        self.num_standard_bytes: int = dims.point_format_dtype(self.id).itemsize

        if record_length is None:
            record_length = self.num_standard_bytes
        if record_length < self.num_standard_bytes:
            raise FormatError(
                f"Incoherent point size, header says {record_length} "
                f"point format {self.id} needs at least {self.num_standard_bytes}"
            )
        self.num_extra_bytes: int = record_length - self.num_standard_bytes
        self._dtype = dims.point_format_dtype(self.id, self.num_extra_bytes)

    @property
    def size(self) -> int:
        """Returns the number of bytes (standard + extra) a point takes"""
        return self._dtype.itemsize

    @property
    def has_gps_time(self) -> bool:
        return "gps_time" in self.dimension_names

    @property
    def sub_field_names(self) -> Iterable[str]:
        return (
            sub_field.name
            for sub_fields in dims.COMPOSED_FIELDS[self.id].values()
            for sub_field in sub_fields
        )

    def dtype(self) -> np.dtype:
        """Returns the numpy.dtype used to store the point records in a numpy array

        .. note::

            The dtype corresponds to the dtype with sub_fields *packed* into their
            composed fields

        """
        return self._dtype

    def __eq__(self, other):
        if not isinstance(other, PointFormat):
            return NotImplemented
        return self.id == other.id and self.size == other.size

    def __repr__(self):
        return f"<PointFormat({self.id}, {self.num_extra_bytes} bytes of extra dims)>"
