"""Request and response bodies of the SDK commands."""

from __future__ import annotations

import struct
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TypeVar

from .records import Record

__all__ = [
    "DeviceInfo",
    "BroadcastDeviceInfo",
    "ConnectedLidarInfo",
    "LidarModeRequestItem",
    "ReturnCode",
    "DeviceBroadcastCode",
    "RainFogSuppressRequestItem",
    "FanControlRequestItem",
    "GetFanStateResponseItem",
    "SetPointCloudReturnModeRequestItem",
    "GetPointCloudReturnModeResponseItem",
    "SetImuPushFrequencyRequestItem",
    "GetImuPushFrequencyResponseItem",
    "ExtrinsicParameterRequestItem",
    "ExtrinsicParameterResponseItem",
    "LidarStateItem",
    "HandshakeRequest",
    "DeviceInformationResponse",
    "SetDeviceIpModeRequest",
    "GetDeviceIpModeResponse",
    "SetStaticDeviceIpModeRequest",
    "HeartbeatResponse",
    "DeviceParameterResponse",
    "KeyValueParam",
    "pack_get_parameter_request",
    "pack_reset_parameter_request",
    "LidarSetExtrinsicParameterRequest",
    "LidarGetExtrinsicParameterResponse",
    "LidarSetUtcSyncTimeRequest",
    "HubControlSlotPowerRequest",
    "HubQuerySlotPowerStatusResponse",
    "pack_item_list",
    "unpack_item_list",
    "unpack_response_list",
]

_R = TypeVar("_R", bound=Record)
_MAX_LIST_COUNT = 0xFF


@dataclass(frozen=True)
class DeviceInfo(Record):
    """Information of a connected LiDAR or hub."""

    FORMAT = "16sBBBBHHH16siiI4B"
    broadcast_code: str
    handle: int
    slot: int
    id: int
    type: int
    data_port: int
    cmd_port: int
    sensor_port: int
    ip: str
    state: int
    feature: int
    status: int
    firmware_version: tuple[int, ...]


@dataclass(frozen=True)
class BroadcastDeviceInfo(Record):
    FORMAT = "16sBH16s"
    broadcast_code: str
    dev_type: int
    reserved: int
    ip: str


@dataclass(frozen=True)
class ConnectedLidarInfo(Record):
    FORMAT = "16sB4BBB"
    broadcast_code: str
    dev_type: int
    version: tuple[int, ...]
    slot: int
    id: int


@dataclass(frozen=True)
class LidarModeRequestItem(Record):
    FORMAT = "16sB"
    broadcast_code: str
    state: int


@dataclass(frozen=True)
class ReturnCode(Record):
    FORMAT = "B16s"
    ret_code: int
    broadcast_code: str


@dataclass(frozen=True)
class DeviceBroadcastCode(Record):
    FORMAT = "16s"
    broadcast_code: str


@dataclass(frozen=True)
class RainFogSuppressRequestItem(Record):
    FORMAT = "16sB"
    broadcast_code: str
    feature: int


@dataclass(frozen=True)
class FanControlRequestItem(Record):
    FORMAT = "16sB"
    broadcast_code: str
    state: int


@dataclass(frozen=True)
class GetFanStateResponseItem(Record):
    FORMAT = "B16sB"
    ret_code: int
    broadcast_code: str
    state: int


@dataclass(frozen=True)
class SetPointCloudReturnModeRequestItem(Record):
    FORMAT = "16sB"
    broadcast_code: str
    mode: int


@dataclass(frozen=True)
class GetPointCloudReturnModeResponseItem(Record):
    FORMAT = "B16sB"
    ret_code: int
    broadcast_code: str
    mode: int


@dataclass(frozen=True)
class SetImuPushFrequencyRequestItem(Record):
    FORMAT = "16sB"
    broadcast_code: str
    freq: int


@dataclass(frozen=True)
class GetImuPushFrequencyResponseItem(Record):
    FORMAT = "B16sB"
    ret_code: int
    broadcast_code: str
    freq: int


@dataclass(frozen=True)
class ExtrinsicParameterRequestItem(Record):
    """Angles in degrees, translation in millimetres."""

    FORMAT = "16sfffiii"
    broadcast_code: str
    roll: float
    pitch: float
    yaw: float
    x: int
    y: int
    z: int


@dataclass(frozen=True)
class ExtrinsicParameterResponseItem(Record):
    FORMAT = "B16sfffiii"
    ret_code: int
    broadcast_code: str
    roll: float
    pitch: float
    yaw: float
    x: int
    y: int
    z: int


@dataclass(frozen=True)
class LidarStateItem(Record):
    FORMAT = "16sBBI"
    broadcast_code: str
    state: int
    feature: int
    error_union: int


@dataclass(frozen=True)
class HandshakeRequest(Record):
    FORMAT = "IHHH"
    ip_addr: int
    data_port: int
    cmd_port: int
    sensor_port: int


@dataclass(frozen=True)
class DeviceInformationResponse(Record):
    FORMAT = "B4B"
    ret_code: int
    firmware_version: tuple[int, ...]


@dataclass(frozen=True)
class SetDeviceIpModeRequest(Record):
    FORMAT = "BI"
    ip_mode: int
    ip_addr: int


@dataclass(frozen=True)
class GetDeviceIpModeResponse(Record):
    FORMAT = "BBIII"
    ret_code: int
    ip_mode: int
    ip_addr: int
    net_mask: int
    gw_addr: int


@dataclass(frozen=True)
class SetStaticDeviceIpModeRequest(Record):
    FORMAT = "III"
    ip_addr: int
    net_mask: int
    gw_addr: int


@dataclass(frozen=True)
class HeartbeatResponse(Record):
    FORMAT = "BBBI"
    ret_code: int
    state: int
    feature: int
    error_union: int


@dataclass(frozen=True)
class DeviceParameterResponse(Record):
    FORMAT = "BHB"
    ret_code: int
    error_param_key: int
    error_code: int


_KV_HEADER = struct.Struct("<HH")


@dataclass(frozen=True)
class KeyValueParam:
    """A device parameter: 16-bit key, 16-bit length, then the value bytes."""

    key: int
    value: bytes = b""

    @property
    def length(self) -> int:
        return len(self.value)

    @property
    def size(self) -> int:
        """Number of bytes of the packed parameter."""
        return _KV_HEADER.size + len(self.value)

    def pack(self) -> bytes:
        try:
            return _KV_HEADER.pack(self.key, len(self.value)) + bytes(self.value)
        except struct.error as exc:
            raise ValueError(f"cannot pack parameter: {exc}") from exc

    @classmethod
    def unpack(cls, data: bytes | bytearray | memoryview) -> KeyValueParam:
        """Decode a parameter from the start of ``data``."""
        if len(data) < _KV_HEADER.size:
            raise ValueError("data too short for a parameter header")
        key, length = _KV_HEADER.unpack_from(data)
        end = _KV_HEADER.size + length
        if len(data) < end:
            raise ValueError(f"parameter value needs {length} bytes, got {len(data) - _KV_HEADER.size}")
        return cls(key, bytes(data[_KV_HEADER.size:end]))


def _pack_keys(keys: Sequence[int]) -> bytes:
    if len(keys) > _MAX_LIST_COUNT:
        raise ValueError(f"at most {_MAX_LIST_COUNT} keys, got {len(keys)}")
    try:
        return struct.pack(f"<{len(keys)}H", *keys)
    except struct.error as exc:
        raise ValueError(f"invalid parameter key: {exc}") from exc


def pack_get_parameter_request(keys: Iterable[int]) -> bytes:
    """Body of the request reading the given parameter keys."""
    key_list = list(keys)
    return bytes([len(key_list) & 0xFF]) + _pack_keys(key_list)


def pack_reset_parameter_request(keys: Iterable[int] = ()) -> bytes:
    """Body of the request resetting the given keys, or all keys when none are given."""
    key_list = list(keys)
    flag = 1 if key_list else 0
    return bytes([flag, len(key_list) & 0xFF]) + _pack_keys(key_list)


@dataclass(frozen=True)
class LidarSetExtrinsicParameterRequest(Record):
    FORMAT = "fffiii"
    roll: float
    pitch: float
    yaw: float
    x: int
    y: int
    z: int


@dataclass(frozen=True)
class LidarGetExtrinsicParameterResponse(Record):
    FORMAT = "Bfffiii"
    ret_code: int
    roll: float
    pitch: float
    yaw: float
    x: int
    y: int
    z: int


@dataclass(frozen=True)
class LidarSetUtcSyncTimeRequest(Record):
    FORMAT = "BBBBI"
    year: int
    month: int
    day: int
    hour: int
    microsecond: int


@dataclass(frozen=True)
class HubControlSlotPowerRequest(Record):
    FORMAT = "BB"
    slot: int
    state: int


@dataclass(frozen=True)
class HubQuerySlotPowerStatusResponse(Record):
    FORMAT = "BH"
    ret_code: int
    slot_power_state: int


def pack_item_list(items: Iterable[Record]) -> bytes:
    """A count byte followed by the packed items."""
    item_list = list(items)
    if len(item_list) > _MAX_LIST_COUNT:
        raise ValueError(f"at most {_MAX_LIST_COUNT} items, got {len(item_list)}")
    return bytes([len(item_list)]) + b"".join(item.pack() for item in item_list)


def unpack_item_list(item_cls: type[_R], data: bytes | bytearray | memoryview) -> list[_R]:
    """Decode a count byte followed by that many items."""
    if not data:
        raise ValueError("item list has no count byte")
    count = data[0]
    end = 1 + count * item_cls.size()
    if len(data) < end:
        raise ValueError(f"item list announces {count} items but is too short")
    return list(item_cls.iter_unpack(data[1:end]))


def unpack_response_list(
    item_cls: type[_R], data: bytes | bytearray | memoryview
) -> tuple[int, list[_R]]:
    """Decode a return code followed by an item list."""
    if not data:
        raise ValueError("response has no return code")
    return data[0], unpack_item_list(item_cls, data[1:])