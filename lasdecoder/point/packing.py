""" This module contains functions to unpack the sub-fields
stored on less than a byte
"""
from typing import NamedTuple

import numpy as np

from . import dims


def least_significant_bit_set(mask: int) -> int:
    """Return the least significant bit set

    The index is 0-indexed.
    Returns -1 is no bit is set

    >>> least_significant_bit_set(0b0000_0001)
    0
    >>> least_significant_bit_set(0b0001_0000)
    4
    >>> least_significant_bit_set(0b0000_0000)
    -1
    """
    return (mask & -mask).bit_length() - 1


def unpack(source, mask: int):
    """Extracts the sub-field defined by `mask` from `source`

    Works on plain ints as well as on numpy arrays.

    >>> unpack(0b1010_0000, 0b1110_0000)
    5
    >>> unpack(np.array([0xFF, 0x00], np.uint8), 0b0001_1100)
    array([7, 0], dtype=uint8)
    """
    lsb = least_significant_bit_set(mask)
    return (source & mask) >> lsb


class ReturnByte(NamedTuple):
    return_number: int
    number_of_returns: int
    scan_direction_flag: int
    edge_of_flight_line: int


def unpack_return_byte(byte: int) -> ReturnByte:
    """Splits the 'return byte' of a point record into its four sub-fields,
    most significant bits first: 3 bits of return number, 3 bits of number
    of returns, 1 bit of scan direction and 1 bit of edge of flight line.

    >>> unpack_return_byte(0xD6)
    ReturnByte(return_number=6, number_of_returns=5, scan_direction_flag=1, edge_of_flight_line=0)
    >>> unpack_return_byte(0xFF)
    ReturnByte(return_number=7, number_of_returns=7, scan_direction_flag=1, edge_of_flight_line=1)
    """
    byte = int(byte)
    if not 0 <= byte <= 0xFF:
        raise ValueError(f"{byte} does not fit in a byte")
    return ReturnByte(
        unpack(byte, dims.RETURN_NUMBER_MASK),
        unpack(byte, dims.NUMBER_OF_RETURNS_MASK),
        unpack(byte, dims.SCAN_DIRECTION_FLAG_MASK),
        unpack(byte, dims.EDGE_OF_FLIGHT_LINE_MASK),
    )
