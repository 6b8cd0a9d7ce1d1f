from typing import BinaryIO

SKIP_CHUNK_SIZE = 64 * 1024


def read_exact(stream: BinaryIO, length: int) -> bytes:
    """
    Reads `length` bytes from the stream.

    Unbuffered and non-seekable sources are allowed to return less than
    asked for, so this keeps reading until either `length` bytes were read
    or the source returned nothing. The returned bytes are shorter than
    `length` only when the source is exhausted.
    """
    data = stream.read(length)
    if data is None:
        data = b""
    if len(data) == length:
        return data

    parts = [data]
    received = len(data)
    while received < length:
        chunk = stream.read(length - received)
        if not chunk:
            break
        parts.append(chunk)
        received += len(chunk)
    return b"".join(parts)


def skip_bytes(stream: BinaryIO, length: int) -> int:
    """
    Discards `length` bytes by reading them, which works
    for sources that cannot seek.

    Returns the number of bytes that could actually be skipped.
    """
    skipped = 0
    while skipped < length:
        chunk = read_exact(stream, min(SKIP_CHUNK_SIZE, length - skipped))
        skipped += len(chunk)
        if not chunk:
            break
    return skipped


def decode_fixed_width_string(raw_string: bytes, encoding: str = "ascii") -> str:
    """
    Decodes a fixed width text field.

    The field may be padded with null bytes, spaces or both,
    everything after the first null byte is dropped and surrounding
    whitespace is trimmed.

    >>> decode_fixed_width_string(b"TerraScan\\0\\0\\0")
    'TerraScan'
    >>> decode_fixed_width_string(b"  OTHER    ")
    'OTHER'
    >>> decode_fixed_width_string(b"\\0" * 32)
    ''
    """
    first_null_byte_pos = raw_string.find(b"\0")
    if first_null_byte_pos >= 0:
        raw_string = raw_string[:first_null_byte_pos]
    return raw_string.decode(encoding, errors="replace").strip()
