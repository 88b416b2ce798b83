"""Point cloud records and the Ethernet data packet that carries them."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Union

from .definitions import PointDataType
from .records import Record

__all__ = [
    "RawPoint",
    "SpherPoint",
    "Point",
    "ExtendRawPoint",
    "ExtendSpherPoint",
    "DualExtendRawPoint",
    "DualExtendSpherPoint",
    "TripleExtendRawPoint",
    "TripleExtendSpherPoint",
    "ImuPoint",
    "point_class",
    "decode_points",
    "EthPacket",
    "ETH_PACKET_HEADER_SIZE",
    "TIMESTAMP_SIZE",
]

TIMESTAMP_SIZE = 8

# version, slot, id, rsvd, err_code, timestamp_type, data_type, timestamp
_ETH_HEADER = struct.Struct(f"<BBBBIBB{TIMESTAMP_SIZE}s")
ETH_PACKET_HEADER_SIZE = _ETH_HEADER.size


@dataclass(frozen=True)
class RawPoint(Record):
    """Cartesian point, coordinates in millimetres."""

    FORMAT = "iiiB"
    x: int
    y: int
    z: int
    reflectivity: int


@dataclass(frozen=True)
class SpherPoint(Record):
    """Spherical point: depth in mm, angles in 0.01 degree."""

    FORMAT = "IHHB"
    depth: int
    theta: int
    phi: int
    reflectivity: int


@dataclass(frozen=True)
class Point(Record):
    """Standard point, coordinates in metres."""

    FORMAT = "fffB"
    x: float
    y: float
    z: float
    reflectivity: int


@dataclass(frozen=True)
class ExtendRawPoint(Record):
    """Cartesian point with a tag byte."""

    FORMAT = "iiiBB"
    x: int
    y: int
    z: int
    reflectivity: int
    tag: int


@dataclass(frozen=True)
class ExtendSpherPoint(Record):
    """Spherical point with a tag byte."""

    FORMAT = "IHHBB"
    depth: int
    theta: int
    phi: int
    reflectivity: int
    tag: int


@dataclass(frozen=True)
class DualExtendRawPoint(Record):
    """Two cartesian returns of one shot."""

    FORMAT = "iiiBBiiiBB"
    x1: int
    y1: int
    z1: int
    reflectivity1: int
    tag1: int
    x2: int
    y2: int
    z2: int
    reflectivity2: int
    tag2: int


@dataclass(frozen=True)
class DualExtendSpherPoint(Record):
    """Two spherical returns sharing one direction."""

    FORMAT = "HHIBBIBB"
    theta: int
    phi: int
    depth1: int
    reflectivity1: int
    tag1: int
    depth2: int
    reflectivity2: int
    tag2: int


@dataclass(frozen=True)
class TripleExtendRawPoint(Record):
    """Three cartesian returns of one shot."""

    FORMAT = "iiiBBiiiBBiiiBB"
    x1: int
    y1: int
    z1: int
    reflectivity1: int
    tag1: int
    x2: int
    y2: int
    z2: int
    reflectivity2: int
    tag2: int
    x3: int
    y3: int
    z3: int
    reflectivity3: int
    tag3: int


@dataclass(frozen=True)
class TripleExtendSpherPoint(Record):
    """Three spherical returns sharing one direction."""

    FORMAT = "HHIBBIBBIBB"
    theta: int
    phi: int
    depth1: int
    reflectivity1: int
    tag1: int
    depth2: int
    reflectivity2: int
    tag2: int
    depth3: int
    reflectivity3: int
    tag3: int


@dataclass(frozen=True)
class ImuPoint(Record):
    """IMU sample: gyroscope in rad/s, accelerometer in g."""

    FORMAT = "ffffff"
    gyro_x: float
    gyro_y: float
    gyro_z: float
    acc_x: float
    acc_y: float
    acc_z: float


AnyPoint = Union[
    RawPoint,
    SpherPoint,
    ExtendRawPoint,
    ExtendSpherPoint,
    DualExtendRawPoint,
    DualExtendSpherPoint,
    TripleExtendRawPoint,
    TripleExtendSpherPoint,
    ImuPoint,
]

_POINT_CLASSES: dict[PointDataType, type[Record]] = {
    PointDataType.CARTESIAN: RawPoint,
    PointDataType.SPHERICAL: SpherPoint,
    PointDataType.EXTEND_CARTESIAN: ExtendRawPoint,
    PointDataType.EXTEND_SPHERICAL: ExtendSpherPoint,
    PointDataType.DUAL_EXTEND_CARTESIAN: DualExtendRawPoint,
    PointDataType.DUAL_EXTEND_SPHERICAL: DualExtendSpherPoint,
    PointDataType.IMU: ImuPoint,
    PointDataType.TRIPLE_EXTEND_CARTESIAN: TripleExtendRawPoint,
    PointDataType.TRIPLE_EXTEND_SPHERICAL: TripleExtendSpherPoint,
}


def point_class(data_type: int) -> type[Record]:
    """Record class of the points carried with the given data type."""
    try:
        return _POINT_CLASSES[PointDataType(data_type)]
    except (ValueError, KeyError):
        raise ValueError(f"no point format for data type {data_type}") from None


def decode_points(data_type: int, data: bytes | bytearray | memoryview) -> list[Record]:
    """Decode the point payload of a data packet."""
    return list(point_class(data_type).iter_unpack(data))


@dataclass
class EthPacket:
    """A point cloud data packet: fixed header followed by point records."""

    version: int
    slot: int
    id: int
    rsvd: int
    err_code: int
    timestamp_type: int
    data_type: int
    timestamp: bytes = bytes(TIMESTAMP_SIZE)
    data: bytes = b""

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> EthPacket:
        """Decode a packet; everything after the header is the point payload."""
        if len(data) < ETH_PACKET_HEADER_SIZE:
            raise ValueError(
                f"data packet needs at least {ETH_PACKET_HEADER_SIZE} bytes, got {len(data)}"
            )
        header = _ETH_HEADER.unpack_from(data)
        return cls(*header, data=bytes(data[ETH_PACKET_HEADER_SIZE:]))

    def to_bytes(self) -> bytes:
        """Serialise the packet."""
        timestamp = bytes(self.timestamp)
        if len(timestamp) != TIMESTAMP_SIZE:
            raise ValueError(f"timestamp must be {TIMESTAMP_SIZE} bytes, got {len(timestamp)}")
        try:
            header = _ETH_HEADER.pack(
                self.version,
                self.slot,
                self.id,
                self.rsvd,
                self.err_code,
                self.timestamp_type,
                self.data_type,
                timestamp,
            )
        except struct.error as exc:
            raise ValueError(f"cannot pack data packet: {exc}") from exc
        return header + bytes(self.data)

    def points(self) -> list[Record]:
        """Points carried by the packet, decoded by its data type."""
        return decode_points(self.data_type, self.data)