"""Packet framing for the SDK command protocol."""

from __future__ import annotations

import struct
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum

from .crc import crc16_mcrf4xx, crc32

__all__ = [
    "PacketType",
    "ProtocolType",
    "NeedAckType",
    "SdkVersion",
    "ProtocolError",
    "CommPacket",
    "Protocol",
    "SdkProtocol",
    "SDK_PROTOCOL_SOF",
]

SDK_PROTOCOL_SOF = 0xAA
_CRC32_SIZE = 4
_PREAMBLE_CRC_SIZE = 2

# sof, version, length, packet_type, seq_num, preamble_crc
_PREAMBLE = struct.Struct("<BBHBHH")
# preamble followed by cmd_set, cmd_id
_HEADER = struct.Struct("<BBHBHHBB")


class PacketType(IntEnum):
    REQUEST = 0
    ACK = 1
    MSG = 2


class ProtocolType(IntEnum):
    LIDAR_SDK = 0
    RSVD1 = 1
    UNDEFINED = 2


class NeedAckType(IntEnum):
    NO_NEED = 0
    NEED_ACK = 1
    DELAY_ACK = 2


class SdkVersion(IntEnum):
    NONE = 0
    V0 = 1
    V1 = 2


class ProtocolError(Exception):
    """A packet cannot be packed or parsed."""


@dataclass
class CommPacket:
    """A protocol-independent command packet."""

    packet_type: int = PacketType.REQUEST
    cmd_set: int = 0
    cmd_code: int = 0
    seq_num: int = 0
    data: bytes = b""
    protocol: int = ProtocolType.LIDAR_SDK
    protocol_version: int = 0
    sender: int = 0
    sub_sender: int = 0
    receiver: int = 0
    sub_receiver: int = 0
    padding: int = 0


class Protocol(ABC):
    """Framing rules of one wire protocol."""

    @abstractmethod
    def pack(self, packet: CommPacket) -> bytes:
        """Serialise a packet into a frame."""

    @abstractmethod
    def parse_packet(self, buf: bytes) -> CommPacket:
        """Decode a frame that starts at the beginning of ``buf``."""

    @abstractmethod
    def preamble_len(self) -> int:
        """Length of the frame preamble."""

    @abstractmethod
    def wrapper_len(self) -> int:
        """Number of framing bytes around the payload."""

    @abstractmethod
    def packet_len(self, buf: bytes) -> int:
        """Frame length announced by the preamble at the start of ``buf``."""

    @abstractmethod
    def check_preamble(self, buf: bytes) -> bool:
        """Whether ``buf`` starts with a valid preamble."""

    @abstractmethod
    def check_packet(self, buf: bytes) -> bool:
        """Whether the frame at the start of ``buf`` has a valid checksum."""


class SdkProtocol(Protocol):
    """The SDK framing: preamble with CRC-16, payload closed by CRC-32."""

    def __init__(self, seed16: int, seed32: int) -> None:
        self.seed16 = seed16
        self.seed32 = seed32

    def preamble_len(self) -> int:
        return _PREAMBLE.size

    def wrapper_len(self) -> int:
        return _HEADER.size + _CRC32_SIZE

    def packet_len(self, buf: bytes) -> int:
        if len(buf) < 4:
            raise ProtocolError("buffer too short to hold a packet length")
        return struct.unpack_from("<H", buf, 2)[0]

    def pack(self, packet: CommPacket) -> bytes:
        if packet.protocol != ProtocolType.LIDAR_SDK:
            raise ProtocolError(f"unsupported protocol {packet.protocol}")
        data = bytes(packet.data)
        length = len(data) + self.wrapper_len()
        if length > 0xFFFF:
            raise ProtocolError(f"packet too long: {length} bytes")
        head = struct.pack(
            "<BBHBH",
            SDK_PROTOCOL_SOF,
            SdkVersion.V0,
            length,
            packet.packet_type & 0xFF,
            packet.seq_num & 0xFFFF,
        )
        preamble_crc = crc16_mcrf4xx(head, self.seed16)
        body = head + struct.pack("<HBB", preamble_crc, packet.cmd_set & 0xFF, packet.cmd_code & 0xFF) + data
        return body + struct.pack("<I", crc32(body, self.seed32))

    def parse_packet(self, buf: bytes) -> CommPacket:
        if len(buf) < self.wrapper_len():
            raise ProtocolError("buffer shorter than the packet wrapper")
        version, length, packet_type, seq_num, _crc, cmd_set, cmd_id = _HEADER.unpack_from(buf)[1:]
        if length < self.wrapper_len():
            raise ProtocolError(f"declared packet length {length} is too short")
        return CommPacket(
            packet_type=packet_type,
            cmd_set=cmd_set,
            cmd_code=cmd_id,
            seq_num=seq_num,
            data=bytes(buf[_HEADER.size:length - _CRC32_SIZE]),
            protocol=ProtocolType.LIDAR_SDK,
            protocol_version=version,
        )

    def check_preamble(self, buf: bytes) -> bool:
        size = self.preamble_len()
        if len(buf) < size:
            return False
        return buf[0] == SDK_PROTOCOL_SOF and crc16_mcrf4xx(buf[:size], self.seed16) == 0

    def check_packet(self, buf: bytes) -> bool:
        length = self.packet_len(buf)
        if length < _CRC32_SIZE or len(buf) < length:
            return False
        expected = struct.unpack_from("<I", buf, length - _CRC32_SIZE)[0]
        return crc32(buf[:length - _CRC32_SIZE], self.seed32) == expected