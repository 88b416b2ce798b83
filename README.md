# livoxproto

Pure-Python building blocks for the command protocol used by Livox LiDAR
units and hubs:

- `livoxproto.crc`: the CRC-16/MCRF4XX and CRC-32 routines of the wire format.
- `livoxproto.protocol`: `CommPacket`, the abstract `Protocol` and the
  `SdkProtocol` framing (an 11-byte header whose first 9 bytes are a preamble
  closed by a CRC-16, then the payload and a CRC-32).
- `livoxproto.comm_port`: `CommPort`, which buffers received bytes and cuts
  them into CRC-checked packets, skipping garbage between frames.
- `livoxproto.definitions`: enumerations (device types, states, modes, status
  codes, point data types and more), `LivoxError` with `check_status`, the
  bit-field error words `LidarErrorCode` and `HubErrorCode`, and
  `get_sdk_version()`.
- `livoxproto.points`: point records for every point data type and
  `EthPacket`, the point cloud data packet.
- `livoxproto.messages`: request and response bodies of the commands.
- `livoxproto.records`: `Record`, the base class that gives those dataclasses
  their packed little-endian form.

It has no dependencies outside the standard library.

## Installation

```
pip install livoxproto
```

## Framing and parsing packets

```python
from livoxproto.comm_port import CommPort
from livoxproto.protocol import CommPacket, PacketType

port = CommPort()
frame = port.pack(
    CommPacket(
        packet_type=PacketType.REQUEST,
        cmd_set=0,
        cmd_code=3,
        seq_num=port.next_seq_num(),
        data=b"\x01",
    )
)

port.feed(b"\x00\x13" + frame)         # leading noise is skipped
for packet in port.parse_packets():
    print(packet.cmd_set, packet.cmd_code, packet.data)
```

`CommPort.parse()` returns the next complete packet, or `None` while no whole
packet is buffered. The receive cache holds 8192 bytes; `free_space()` tells
how much can still be written, and `feed()` raises `BufferError` when the data
does not fit. `next_seq_num()` hands out sequence numbers that wrap at 16
bits.

`SdkProtocol.pack()` and `parse_packet()` raise `ProtocolError` for a packet
of an unsupported protocol, one that is too long, or a buffer too short to
hold a frame. `CommPort` uses the seeds `0x4C49` (CRC-16) and `0x564F580A`
(CRC-32); `crc16_mcrf4xx(data, seed)` and `crc32(data, seed)` are available
directly.

## Point cloud data

```python
from livoxproto.definitions import PointDataType
from livoxproto.points import EthPacket, RawPoint

raw = EthPacket(
    version=5, slot=1, id=1, rsvd=0, err_code=0, timestamp_type=0,
    data_type=PointDataType.CARTESIAN,
    data=RawPoint(1000, 0, -250, 80).pack(),
).to_bytes()

packet = EthPacket.from_bytes(raw)
print(packet.points())  # [RawPoint(x=1000, y=0, z=-250, reflectivity=80)]
```

`decode_points(data_type, data)` decodes a block of points of any
`PointDataType`, and `point_class(data_type)` gives the record class; both
raise `ValueError` for a data type without a point format.

## Command bodies

Every record in `livoxproto.messages` and `livoxproto.points` has `pack()`,
`unpack(data)`, `iter_unpack(data)` and `size()`. Broadcast codes and IP
addresses are plain strings, NUL-padded on the wire.

```python
from livoxproto.messages import (
    LidarModeRequestItem, ReturnCode, pack_item_list, unpack_response_list,
)

body = pack_item_list([LidarModeRequestItem("000000000000001", 1)])
ret_code, items = unpack_response_list(ReturnCode, response_body)
```

`pack_item_list` writes a count byte followed by the items (at most 255);
`unpack_item_list` reads one back and `unpack_response_list` reads a return
code followed by such a list. Device parameters are handled by
`KeyValueParam`, `pack_get_parameter_request(keys)` and
`pack_reset_parameter_request(keys)` (no keys means reset all).

## Status and error words

```python
from livoxproto.definitions import LidarErrorCode, check_status

LidarErrorCode.from_int(0x40000000).system_status  # 1
check_status(-4)  # raises LivoxError: operation timed out (status -4)
```

## What this package does not do

It handles bytes only. It opens no sockets, does not listen for device
broadcasts, performs no handshake or heartbeat, and does not send commands or
wait for their acknowledgements; moving frames to and from a device is left
to the caller.

## Running the tests

```
pip install livoxproto[test]
pytest
```