import io
import struct
from typing import Dict, List, Optional, Sequence

import pytest

LAS_HEADER_SIZE = 227

POINT_FORMAT_0_STRUCT = struct.Struct("<iiiHBBbBH")
GPS_TIME_STRUCT = struct.Struct("<d")

SIMPLE_SCALES = (0.01, 0.01, 0.01)
SIMPLE_OFFSETS = (500.0, 1000.0, -20.0)
SIMPLE_MAXS = (520.5, 1030.25, 15.75)
SIMPLE_MINS = (505.0, 1001.5, -19.5)

# (X, Y, Z, intensity, return byte, classification,
#  scan angle rank, user data, point source id, gps time)
SIMPLE_RAW_POINTS: List[Dict] = [
    dict(
        X=1000,
        Y=150,
        Z=50,
        intensity=1200,
        return_byte=0xD6,
        classification=2,
        scan_angle_rank=-12,
        user_data=7,
        point_source_id=31,
        gps_time=245678.5,
    ),
    dict(
        X=2050,
        Y=3025,
        Z=3575,
        intensity=65535,
        return_byte=0xFF,
        classification=255,
        scan_angle_rank=90,
        user_data=255,
        point_source_id=65535,
        gps_time=245679.25,
    ),
    dict(
        X=500,
        Y=2000,
        Z=-50,
        intensity=0,
        return_byte=0x00,
        classification=0,
        scan_angle_rank=-128,
        user_data=0,
        point_source_id=0,
        gps_time=0.0,
    ),
]


def make_header_bytes(
    *,
    version=(1, 2),
    system_identifier: bytes = b"MODIFICATION",
    generating_software: bytes = b"TerraScan",
    creation_day_of_year: int = 117,
    creation_year: int = 2016,
    header_size: int = LAS_HEADER_SIZE,
    offset_to_point_data: int = LAS_HEADER_SIZE,
    number_of_vlrs: int = 0,
    point_format_id: int = 0,
    point_record_length: int = 20,
    point_count: int = 0,
    scales: Sequence[float] = SIMPLE_SCALES,
    offsets: Sequence[float] = SIMPLE_OFFSETS,
    maxs: Sequence[float] = SIMPLE_MAXS,
    mins: Sequence[float] = SIMPLE_MINS,
) -> bytes:
    """Builds the 227 bytes of a LAS 1.0 - 1.2 header"""
    stream = io.BytesIO()
    stream.write(b"LASF")
    stream.write(bytes(20))  # file source id, global encoding, project id
    stream.write(struct.pack("<BB", *version))
    stream.write(system_identifier.ljust(32, b"\0"))
    stream.write(generating_software.ljust(32, b"\0"))
    stream.write(struct.pack("<HH", creation_day_of_year, creation_year))
    stream.write(struct.pack("<H", header_size))
    stream.write(struct.pack("<I", offset_to_point_data))
    stream.write(struct.pack("<I", number_of_vlrs))
    stream.write(struct.pack("<B", point_format_id))
    stream.write(struct.pack("<H", point_record_length))
    stream.write(struct.pack("<I", point_count))
    stream.write(struct.pack("<5I", point_count, 0, 0, 0, 0))
    stream.write(struct.pack("<3d", *scales))
    stream.write(struct.pack("<3d", *offsets))
    for axis in range(3):
        stream.write(struct.pack("<dd", maxs[axis], mins[axis]))

    data = stream.getvalue()
    assert len(data) == LAS_HEADER_SIZE
    return data


def make_point_bytes(raw_point: Dict, point_format_id: int = 0, num_extra_bytes=0):
    data = POINT_FORMAT_0_STRUCT.pack(
        raw_point["X"],
        raw_point["Y"],
        raw_point["Z"],
        raw_point["intensity"],
        raw_point["return_byte"],
        raw_point["classification"],
        raw_point["scan_angle_rank"],
        raw_point["user_data"],
        raw_point["point_source_id"],
    )
    if point_format_id == 1:
        data += GPS_TIME_STRUCT.pack(raw_point["gps_time"])
    return data + bytes(range(1, num_extra_bytes + 1))


def make_las_bytes(
    raw_points: Sequence[Dict] = SIMPLE_RAW_POINTS,
    *,
    point_format_id: int = 0,
    vlr_bytes: bytes = b"",
    num_extra_bytes: int = 0,
    point_count: Optional[int] = None,
    **header_kwargs,
) -> bytes:
    """Builds a complete LAS file, the region between the header and the
    points is filled with `vlr_bytes`
    """
    base_size = 20 if point_format_id == 0 else 28
    if point_count is None:
        point_count = len(raw_points)
    header = make_header_bytes(
        point_format_id=point_format_id,
        point_record_length=base_size + num_extra_bytes,
        point_count=point_count,
        offset_to_point_data=LAS_HEADER_SIZE + len(vlr_bytes),
        **header_kwargs,
    )
    points = b"".join(
        make_point_bytes(p, point_format_id, num_extra_bytes) for p in raw_points
    )
    return header + vlr_bytes + points


class NonSeekableStream(io.RawIOBase):
    """Wraps a stream, hiding its ability to seek and
    returning at most `max_read` bytes per read call
    """

    def __init__(self, stream, max_read=7):
        self.stream = stream
        self.max_read = max_read

    def readable(self):
        return True

    def seekable(self):
        return False

    def read(self, n=-1):
        if n < 0:
            n = self.max_read
        return self.stream.read(min(n, self.max_read))


@pytest.fixture(params=[0, 1], ids=["fmt0", "fmt1"])
def point_format_id(request):
    return request.param


@pytest.fixture()
def simple_las_bytes(point_format_id):
    return make_las_bytes(point_format_id=point_format_id)


@pytest.fixture()
def simple_las_path(tmp_path, simple_las_bytes):
    path = tmp_path / "simple.las"
    path.write_bytes(simple_las_bytes)
    return path
