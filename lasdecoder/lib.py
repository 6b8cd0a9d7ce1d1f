""" 'Entry point' of the library, Contains the various functions meant to be
used directly by a user
"""

import io
from pathlib import Path

from .lasdata import LasData
from .lasreader import LasReader


def open_las(source, closefd=True) -> LasReader:
    """The lasdecoder.open opens a LAS file for reading,
    and returns a :class:`lasdecoder.LasReader` positioned on the first point.

    The header is read right away, so errors in it are raised by this function.

    Parameters
    ----------
    source: str or Path or bytes or binary file object
        if source is a str or Path it must be a filename,
        the file is opened in read-only mode

    closefd: optional, bool, True by default
        Whether the stream/file object shall be closed when the reader is closed.
        An exception is raised if closefd is False and the source is a filename
    """
    if isinstance(source, (str, Path)):
        stream = open(source, mode="rb", closefd=closefd)
    elif isinstance(source, bytes):
        stream = io.BytesIO(source)
    else:
        stream = source

    try:
        return LasReader(stream, closefd=closefd)
    except BaseException:
        if closefd:
            stream.close()
        raise


def read_las(source, closefd=True) -> LasData:
    """Entry point for reading las data

    Reads the whole file into memory.

    Parameters
    ----------
    source : str or Path or bytes or binary file object
        The source to read data from

    closefd: bool
            if True and the source is a stream, the function will close it
            after it is done reading

    Returns
    -------
    lasdecoder.LasData
        The header and all the points of the file
    """
    with open_las(source, closefd=closefd) as reader:
        return reader.read()
