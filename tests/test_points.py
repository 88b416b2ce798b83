import pytest

from livoxproto.definitions import PointDataType
from livoxproto.points import (
    DualExtendRawPoint,
    DualExtendSpherPoint,
    EthPacket,
    ExtendRawPoint,
    ExtendSpherPoint,
    ImuPoint,
    Point,
    RawPoint,
    SpherPoint,
    TripleExtendRawPoint,
    TripleExtendSpherPoint,
    decode_points,
    point_class,
)

TYPED_SAMPLES = [
    (PointDataType.CARTESIAN, RawPoint(1000, -2000, 3000, 200)),
    (PointDataType.SPHERICAL, SpherPoint(5000, 9000, 18000, 12)),
    (PointDataType.EXTEND_CARTESIAN, ExtendRawPoint(-1, 2, -3, 4, 5)),
    (PointDataType.EXTEND_SPHERICAL, ExtendSpherPoint(70000, 100, 35999, 255, 1)),
    (PointDataType.DUAL_EXTEND_CARTESIAN, DualExtendRawPoint(1, 2, 3, 4, 5, 6, 7, 8, 9, 10)),
    (PointDataType.DUAL_EXTEND_SPHERICAL, DualExtendSpherPoint(100, 200, 300, 4, 5, 600, 7, 8)),
    (
        PointDataType.TRIPLE_EXTEND_CARTESIAN,
        TripleExtendRawPoint(1, 2, 3, 4, 5, -6, -7, -8, 9, 10, 11, 12, 13, 14, 15),
    ),
    (
        PointDataType.TRIPLE_EXTEND_SPHERICAL,
        TripleExtendSpherPoint(1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11),
    ),
    (PointDataType.IMU, ImuPoint(0.5, -0.5, 0.125, 1.0, 0.0, -1.0)),
]


@pytest.mark.parametrize(
    "data_type, cls",
    [
        (PointDataType.CARTESIAN, RawPoint),
        (PointDataType.SPHERICAL, SpherPoint),
        (PointDataType.EXTEND_CARTESIAN, ExtendRawPoint),
        (PointDataType.EXTEND_SPHERICAL, ExtendSpherPoint),
        (PointDataType.DUAL_EXTEND_CARTESIAN, DualExtendRawPoint),
        (PointDataType.DUAL_EXTEND_SPHERICAL, DualExtendSpherPoint),
        (PointDataType.IMU, ImuPoint),
        (PointDataType.TRIPLE_EXTEND_CARTESIAN, TripleExtendRawPoint),
        (PointDataType.TRIPLE_EXTEND_SPHERICAL, TripleExtendSpherPoint),
    ],
)
def test_point_class_by_data_type(data_type, cls):
    assert point_class(data_type) is cls
    assert point_class(int(data_type)) is cls


@pytest.mark.parametrize("data_type", [PointDataType.MAX, 42, -1])
def test_point_class_rejects_unknown(data_type):
    with pytest.raises(ValueError):
        point_class(data_type)


@pytest.mark.parametrize(
    "data_type, point", TYPED_SAMPLES, ids=lambda p: getattr(p, "name", type(p).__name__)
)
def test_point_round_trip(data_type, point):
    cls = point_class(data_type)
    raw = point.pack()
    assert len(raw) == cls.size()
    assert cls.unpack(raw) == point
    assert decode_points(data_type, raw * 2) == [point, point]


def test_standard_point_round_trip():
    point = Point(1.5, -0.25, 2.0, 9)
    raw = point.pack()
    assert len(raw) == Point.size()
    assert Point.unpack(raw) == point


def test_raw_point_wire_bytes():
    assert RawPoint(1, -1, 256, 7).pack() == (
        b"\x01\x00\x00\x00\xff\xff\xff\xff\x00\x01\x00\x00\x07"
    )


def test_raw_point_is_packed_without_padding():
    assert RawPoint.size() == 13


def test_decode_points_sequence():
    points = [ExtendRawPoint(i, -i, 2 * i, i % 256, 0) for i in range(5)]
    payload = b"".join(p.pack() for p in points)
    assert decode_points(PointDataType.EXTEND_CARTESIAN, payload) == points


def test_decode_points_partial_record():
    payload = RawPoint(1, 2, 3, 4).pack()
    with pytest.raises(ValueError):
        decode_points(PointDataType.CARTESIAN, payload[:-1])


def _packet(points, data_type):
    return EthPacket(
        version=5,
        slot=1,
        id=2,
        rsvd=0,
        err_code=0x01020304,
        timestamp_type=1,
        data_type=data_type,
        timestamp=bytes(range(8)),
        data=b"".join(p.pack() for p in points),
    )


def test_eth_packet_round_trip():
    packet = _packet([SpherPoint(1, 2, 3, 4), SpherPoint(5, 6, 7, 8)], PointDataType.SPHERICAL)
    assert EthPacket.from_bytes(packet.to_bytes()) == packet


def test_eth_packet_header_layout():
    raw = _packet([], PointDataType.CARTESIAN).to_bytes()
    assert raw[:4] == bytes([5, 1, 2, 0])
    assert raw[4:8] == b"\x04\x03\x02\x01"
    assert raw[10:] == bytes(range(8))


def test_eth_packet_points():
    points = [ImuPoint(0.5, 0.25, 0.0, 1.0, -1.0, 0.75)]
    packet = EthPacket.from_bytes(_packet(points, PointDataType.IMU).to_bytes())
    assert packet.points() == points


def test_eth_packet_too_short():
    raw = _packet([], PointDataType.CARTESIAN).to_bytes()
    with pytest.raises(ValueError):
        EthPacket.from_bytes(raw[:-1])


def test_eth_packet_bad_timestamp_length():
    packet = _packet([], PointDataType.CARTESIAN)
    packet.timestamp = b"\x00" * 3
    with pytest.raises(ValueError):
        packet.to_bytes()