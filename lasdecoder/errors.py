""" All the custom exceptions types
"""


class LasDecoderException(Exception):
    pass


class TruncatedHeaderError(LasDecoderException):
    """The source ended before the header (or the region that follows it
    up to the first point) could be read entirely
    """

    def __init__(self, field: str, expected: int, received: int) -> None:
        super().__init__(
            f"Header truncated while reading '{field}': "
            f"expected {expected} bytes, got {received}"
        )
        self.field = field
        self.expected = expected
        self.received = received


class FormatError(LasDecoderException):
    pass


class PointFormatNotSupported(FormatError):
    pass


class TruncatedRecordError(LasDecoderException):
    def __init__(self, point_index: int, expected: int, received: int) -> None:
        super().__init__(
            f"Point record {point_index} is truncated: "
            f"expected {expected} bytes, got {received}"
        )
        self.point_index = point_index
        self.expected = expected
        self.received = received


class EndOfStream(Exception):
    """Raised when there are no more points to decode.

    This is not an error, and thus does not derive from LasDecoderException
    """
