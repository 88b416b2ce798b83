import pytest

from livoxproto.definitions import BROADCAST_CODE_SIZE, DeviceParamKeyName, LidarState
from livoxproto.messages import (
    BroadcastDeviceInfo,
    ConnectedLidarInfo,
    DeviceBroadcastCode,
    DeviceInfo,
    DeviceInformationResponse,
    DeviceParameterResponse,
    ExtrinsicParameterRequestItem,
    ExtrinsicParameterResponseItem,
    FanControlRequestItem,
    GetDeviceIpModeResponse,
    GetFanStateResponseItem,
    GetImuPushFrequencyResponseItem,
    GetPointCloudReturnModeResponseItem,
    HandshakeRequest,
    HeartbeatResponse,
    HubControlSlotPowerRequest,
    HubQuerySlotPowerStatusResponse,
    KeyValueParam,
    LidarGetExtrinsicParameterResponse,
    LidarModeRequestItem,
    LidarSetExtrinsicParameterRequest,
    LidarSetUtcSyncTimeRequest,
    LidarStateItem,
    RainFogSuppressRequestItem,
    ReturnCode,
    SetDeviceIpModeRequest,
    SetImuPushFrequencyRequestItem,
    SetPointCloudReturnModeRequestItem,
    SetStaticDeviceIpModeRequest,
    pack_get_parameter_request,
    pack_item_list,
    pack_reset_parameter_request,
    unpack_item_list,
    unpack_response_list,
)

CODE = "TESTCODE0000001"

SAMPLES = [
    DeviceInfo(CODE, 3, 1, 2, 7, 56001, 56002, 56003, "192.168.1.10", LidarState.NORMAL, 1, 0, (3, 7, 0, 0)),
    BroadcastDeviceInfo(CODE, 1, 0, "192.168.1.11"),
    ConnectedLidarInfo(CODE, 1, (1, 2, 3, 4), 2, 3),
    LidarModeRequestItem(CODE, 1),
    ReturnCode(0, CODE),
    DeviceBroadcastCode(CODE),
    RainFogSuppressRequestItem(CODE, 1),
    FanControlRequestItem(CODE, 0),
    GetFanStateResponseItem(0, CODE, 1),
    SetPointCloudReturnModeRequestItem(CODE, 2),
    GetPointCloudReturnModeResponseItem(0, CODE, 2),
    SetImuPushFrequencyRequestItem(CODE, 1),
    GetImuPushFrequencyResponseItem(0, CODE, 1),
    ExtrinsicParameterRequestItem(CODE, 0.5, -1.25, 90.0, 10, -20, 30),
    ExtrinsicParameterResponseItem(0, CODE, 0.5, -1.25, 90.0, 10, -20, 30),
    LidarStateItem(CODE, 1, 0, 0xDEADBEEF),
    HandshakeRequest(0xC0A80101, 56000, 56001, 56002),
    DeviceInformationResponse(0, (3, 7, 0, 0)),
    SetDeviceIpModeRequest(1, 0xC0A80102),
    GetDeviceIpModeResponse(0, 1, 0xC0A80102, 0xFFFFFF00, 0xC0A80101),
    SetStaticDeviceIpModeRequest(0xC0A80102, 0xFFFFFF00, 0xC0A80101),
    HeartbeatResponse(0, 1, 0, 0x80000000),
    DeviceParameterResponse(0, 2, 0),
    LidarSetExtrinsicParameterRequest(1.0, 2.5, -3.75, 100, 200, -300),
    LidarGetExtrinsicParameterResponse(0, 1.0, 2.5, -3.75, 100, 200, -300),
    LidarSetUtcSyncTimeRequest(24, 5, 17, 13, 123456),
    HubControlSlotPowerRequest(3, 1),
    HubQuerySlotPowerStatusResponse(0, 0x01FF),
]


@pytest.mark.parametrize("message", SAMPLES, ids=lambda m: type(m).__name__)
def test_round_trip(message):
    cls = type(message)
    raw = message.pack()
    assert len(raw) == cls.size()
    assert cls.unpack(raw) == message
    listed = pack_item_list([message, message])
    assert listed == bytes([2]) + raw + raw
    assert unpack_item_list(cls, listed) == [message, message]


def test_broadcast_code_is_nul_padded():
    raw = DeviceBroadcastCode("ABC").pack()
    assert DeviceBroadcastCode.size() == BROADCAST_CODE_SIZE
    assert raw == b"ABC" + b"\0" * (BROADCAST_CODE_SIZE - 3)


def test_broadcast_code_too_long():
    with pytest.raises(ValueError):
        DeviceBroadcastCode("X" * (BROADCAST_CODE_SIZE + 1)).pack()


def test_firmware_version_wrong_length():
    with pytest.raises(ValueError):
        DeviceInformationResponse(0, (1, 2, 3)).pack()


def test_unpack_too_short():
    raw = HandshakeRequest(1, 2, 3, 4).pack()
    with pytest.raises(ValueError):
        HandshakeRequest.unpack(raw[:-1])


def test_key_value_wire_bytes():
    assert KeyValueParam(DeviceParamKeyName.SCAN_PATTERN, b"\x01").pack() == b"\x02\x00\x01\x00\x01"


def test_key_value_round_trip():
    param = KeyValueParam(DeviceParamKeyName.SLOT_NUM, b"\x05\x06\x07")
    raw = param.pack()
    assert len(raw) == param.size
    assert param.length == len(param.value)
    assert KeyValueParam.unpack(raw + b"trailing") == param


def test_key_value_truncated_value():
    raw = KeyValueParam(1, b"\x01\x02\x03").pack()
    with pytest.raises(ValueError):
        KeyValueParam.unpack(raw[:-1])
    with pytest.raises(ValueError):
        KeyValueParam.unpack(raw[:2])


def test_get_parameter_request():
    assert pack_get_parameter_request([1, 2]) == b"\x02\x01\x00\x02\x00"


def test_reset_all_parameters():
    assert pack_reset_parameter_request() == b"\x00\x00"


def test_reset_some_parameters():
    keys = [DeviceParamKeyName.HIGH_SENSITIVITY, DeviceParamKeyName.SCAN_PATTERN]
    raw = pack_reset_parameter_request(keys)
    assert raw[0] == 1
    assert raw[1] == len(keys)
    assert raw[2:] == pack_get_parameter_request(keys)[1:]


def test_parameter_key_out_of_range():
    with pytest.raises(ValueError):
        pack_get_parameter_request([0x10000])


def test_item_list_round_trip():
    items = [FanControlRequestItem(f"CODE{i}", i % 2) for i in range(4)]
    raw = pack_item_list(items)
    assert raw[0] == len(items)
    assert unpack_item_list(FanControlRequestItem, raw) == items


def test_item_list_truncated():
    raw = pack_item_list([ReturnCode(0, "A"), ReturnCode(1, "B")])
    with pytest.raises(ValueError):
        unpack_item_list(ReturnCode, raw[:-1])


def test_item_list_too_many():
    with pytest.raises(ValueError):
        pack_item_list([HubControlSlotPowerRequest(1, 1)] * 256)


def test_response_list_round_trip():
    items = [GetFanStateResponseItem(0, "A", 1), GetFanStateResponseItem(1, "B", 0)]
    raw = bytes([3]) + pack_item_list(items)
    assert unpack_response_list(GetFanStateResponseItem, raw) == (3, items)


def test_response_list_empty():
    with pytest.raises(ValueError):
        unpack_response_list(ReturnCode, b"")