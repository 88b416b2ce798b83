"""Enumerations, status codes and error words of the SDK."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import IntEnum

__all__ = [
    "MAX_LIDAR_COUNT",
    "BROADCAST_CODE_SIZE",
    "SDK_MAJOR_VERSION",
    "SDK_MINOR_VERSION",
    "SDK_PATCH_VERSION",
    "DeviceType",
    "LidarState",
    "LidarMode",
    "LidarFeature",
    "LidarIpMode",
    "LidarScanPattern",
    "LivoxStatus",
    "DeviceEvent",
    "TimestampType",
    "PointDataType",
    "PointCloudReturnMode",
    "ImuFreq",
    "KeyErrorCode",
    "DeviceParamKeyName",
    "LivoxError",
    "check_status",
    "LivoxSdkVersion",
    "get_sdk_version",
    "LidarErrorCode",
    "HubErrorCode",
]

MAX_LIDAR_COUNT = 32
BROADCAST_CODE_SIZE = 16

SDK_MAJOR_VERSION = 2
SDK_MINOR_VERSION = 3
SDK_PATCH_VERSION = 0


class DeviceType(IntEnum):
    HUB = 0
    LIDAR_MID40 = 1
    LIDAR_TELE = 2
    LIDAR_HORIZON = 3
    LIDAR_MID70 = 6
    LIDAR_AVIA = 7


class LidarState(IntEnum):
    INIT = 0
    NORMAL = 1
    POWER_SAVING = 2
    STANDBY = 3
    ERROR = 4
    UNKNOWN = 5


class LidarMode(IntEnum):
    NORMAL = 1
    POWER_SAVING = 2
    STANDBY = 3


class LidarFeature(IntEnum):
    NONE = 0
    RAIN_FOG = 1


class LidarIpMode(IntEnum):
    DYNAMIC = 0
    STATIC = 1


class LidarScanPattern(IntEnum):
    NON_REPETITIVE = 0
    REPETITIVE = 1


class LivoxStatus(IntEnum):
    SEND_FAILED = -9
    HANDLER_IMPL_NOT_EXIST = -8
    INVALID_HANDLE = -7
    CHANNEL_NOT_EXIST = -6
    NOT_ENOUGH_MEMORY = -5
    TIMEOUT = -4
    NOT_SUPPORTED = -3
    NOT_CONNECTED = -2
    FAILURE = -1
    SUCCESS = 0


_STATUS_MESSAGES = {
    LivoxStatus.SEND_FAILED: "command send failed",
    LivoxStatus.HANDLER_IMPL_NOT_EXIST: "handler implementation does not exist",
    LivoxStatus.INVALID_HANDLE: "device handle invalid",
    LivoxStatus.CHANNEL_NOT_EXIST: "command channel does not exist",
    LivoxStatus.NOT_ENOUGH_MEMORY: "not enough memory",
    LivoxStatus.TIMEOUT: "operation timed out",
    LivoxStatus.NOT_SUPPORTED: "operation is not supported on this device",
    LivoxStatus.NOT_CONNECTED: "requested device is not connected",
    LivoxStatus.FAILURE: "failure",
}


class DeviceEvent(IntEnum):
    CONNECT = 0
    DISCONNECT = 1
    STATE_CHANGE = 2
    HUB_CONNECTION_CHANGE = 3


class TimestampType(IntEnum):
    NO_SYNC = 0
    PTP = 1
    RSVD = 2
    PPS_GPS = 3
    PPS = 4
    UNKNOWN = 5


class PointDataType(IntEnum):
    CARTESIAN = 0
    SPHERICAL = 1
    EXTEND_CARTESIAN = 2
    EXTEND_SPHERICAL = 3
    DUAL_EXTEND_CARTESIAN = 4
    DUAL_EXTEND_SPHERICAL = 5
    IMU = 6
    TRIPLE_EXTEND_CARTESIAN = 7
    TRIPLE_EXTEND_SPHERICAL = 8
    MAX = 9


class PointCloudReturnMode(IntEnum):
    FIRST_RETURN = 0
    STRONGEST_RETURN = 1
    DUAL_RETURN = 2
    TRIPLE_RETURN = 3


class ImuFreq(IntEnum):
    FREQ_0HZ = 0
    FREQ_200HZ = 1


class KeyErrorCode(IntEnum):
    NO_ERROR = 0
    NOT_SUPPORTED = 1
    EXEC_FAILED = 2
    NOT_SUPPORTED_WRITING_STATE = 3
    VALUE_ERROR = 4
    VALUE_LENGTH_ERROR = 5
    NO_ENOUGH_MEMORY = 6
    LENGTH_ERROR = 7


class DeviceParamKeyName(IntEnum):
    DEFAULT = 0
    HIGH_SENSITIVITY = 1
    SCAN_PATTERN = 2
    SLOT_NUM = 3


class LivoxError(Exception):
    """An SDK operation ended with a status other than success."""

    def __init__(self, status: int) -> None:
        try:
            self.status: int = LivoxStatus(status)
        except ValueError:
            self.status = int(status)
        message = _STATUS_MESSAGES.get(self.status, "unknown status")
        super().__init__(f"{message} (status {int(status)})")


def check_status(status: int) -> None:
    """Raise LivoxError unless ``status`` is success."""
    if status != LivoxStatus.SUCCESS:
        raise LivoxError(status)


@dataclass(frozen=True)
class LivoxSdkVersion:
    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def get_sdk_version() -> LivoxSdkVersion:
    """Version of the SDK protocol definitions."""
    return LivoxSdkVersion(SDK_MAJOR_VERSION, SDK_MINOR_VERSION, SDK_PATCH_VERSION)


def _decode_bits(layout: tuple[tuple[str, int], ...], value: int) -> dict[str, int]:
    if not 0 <= value <= 0xFFFFFFFF:
        raise ValueError(f"error code {value} does not fit in 32 bits")
    result = {}
    shift = 0
    for name, width in layout:
        result[name] = (value >> shift) & ((1 << width) - 1)
        shift += width
    return result


def _encode_bits(layout: tuple[tuple[str, int], ...], values: dict[str, int]) -> int:
    word = 0
    shift = 0
    for name, width in layout:
        value = values[name]
        if not 0 <= value < (1 << width):
            raise ValueError(f"{name}={value} does not fit in {width} bits")
        word |= value << shift
        shift += width
    return word


_LIDAR_ERROR_LAYOUT = (
    ("temp_status", 2),
    ("volt_status", 2),
    ("motor_status", 2),
    ("dirty_warn", 2),
    ("firmware_err", 1),
    ("pps_status", 1),
    ("device_status", 1),
    ("fan_status", 1),
    ("self_heating", 1),
    ("ptp_status", 1),
    ("time_sync_status", 3),
    ("rsvd", 13),
    ("system_status", 2),
)

_HUB_ERROR_LAYOUT = (
    ("sync_status", 2),
    ("temp_status", 2),
    ("lidar_status", 1),
    ("lidar_link_status", 1),
    ("firmware_err", 1),
    ("rsvd", 23),
    ("system_status", 2),
)


@dataclass(frozen=True)
class LidarErrorCode:
    """Bit fields of a LiDAR's 32-bit error word."""

    temp_status: int = 0
    volt_status: int = 0
    motor_status: int = 0
    dirty_warn: int = 0
    firmware_err: int = 0
    pps_status: int = 0
    device_status: int = 0
    fan_status: int = 0
    self_heating: int = 0
    ptp_status: int = 0
    time_sync_status: int = 0
    rsvd: int = 0
    system_status: int = 0

    @classmethod
    def from_int(cls, value: int) -> LidarErrorCode:
        return cls(**_decode_bits(_LIDAR_ERROR_LAYOUT, value))

    def to_int(self) -> int:
        return _encode_bits(_LIDAR_ERROR_LAYOUT, asdict(self))


@dataclass(frozen=True)
class HubErrorCode:
    """Bit fields of a hub's 32-bit error word."""

    sync_status: int = 0
    temp_status: int = 0
    lidar_status: int = 0
    lidar_link_status: int = 0
    firmware_err: int = 0
    rsvd: int = 0
    system_status: int = 0

    @classmethod
    def from_int(cls, value: int) -> HubErrorCode:
        return cls(**_decode_bits(_HUB_ERROR_LAYOUT, value))

    def to_int(self) -> int:
        return _encode_bits(_HUB_ERROR_LAYOUT, asdict(self))