"""Stream reassembly of SDK command packets."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from enum import Enum

from .protocol import CommPacket, ProtocolError, SdkProtocol

__all__ = ["CommPort", "CACHE_SIZE", "MOVE_CACHE_LIMIT"]

CACHE_SIZE = 8192
MOVE_CACHE_LIMIT = 1536


class _Step(Enum):
    SEARCH_PREAMBLE = 0
    GET_PACKET_DATA = 1


class CommPort:
    """Buffers received bytes and cuts them into packets."""

    def __init__(self) -> None:
        self.protocol = SdkProtocol(0x4C49, 0x564F580A)
        self._buf = bytearray(CACHE_SIZE)
        self._rd = 0
        self._wr = 0
        self._step = _Step.SEARCH_PREAMBLE
        self._seq_num = 0
        self._seq_lock = threading.Lock()

    def pack(self, packet: CommPacket) -> bytes:
        """Serialise a packet with the port's protocol."""
        return self.protocol.pack(packet)

    def _valid_size(self) -> int:
        return max(self._wr - self._rd, 0)

    def _update_cache(self) -> None:
        if CACHE_SIZE - self._wr >= MOVE_CACHE_LIMIT:
            return
        valid = self._valid_size()
        if valid:
            self._buf[:valid] = self._buf[self._rd:self._wr]
            self._rd, self._wr = 0, valid
        elif self._rd:
            self._rd = self._wr = 0

    def free_space(self) -> int:
        """Bytes that can be written into the cache, compacting it first if needed."""
        self._update_cache()
        return max(CACHE_SIZE - self._wr, 0)

    def feed(self, data: bytes) -> None:
        """Append received bytes to the cache; raises BufferError when they do not fit."""
        self._update_cache()
        size = len(data)
        if self._wr + size >= CACHE_SIZE:
            raise BufferError(f"{size} bytes do not fit into the receive cache")
        self._buf[self._wr:self._wr + size] = data
        self._wr += size

    def _current(self) -> bytes:
        return bytes(self._buf[self._rd:self._wr])

    def _current_len(self) -> int:
        return self.protocol.packet_len(self._buf[self._rd:self._rd + 4])

    def parse(self) -> CommPacket | None:
        """Return the next complete packet in the cache, or None if there is none yet."""
        proto = self.protocol
        while self._valid_size() > proto.preamble_len():
            if self._step is _Step.SEARCH_PREAMBLE:
                if proto.check_preamble(self._buf[self._rd:self._rd + proto.preamble_len()]):
                    self._step = _Step.GET_PACKET_DATA
                else:
                    self._rd += 1
                continue

            length = self._current_len()
            if length and self._valid_size() >= length:
                self._step = _Step.SEARCH_PREAMBLE
                current = self._current()
                if proto.check_packet(current):
                    self._rd += length
                    try:
                        return proto.parse_packet(current)
                    except ProtocolError:
                        continue
                self._rd += proto.preamble_len()
            else:
                if length > CACHE_SIZE:
                    self._rd = self._wr = 0
                    self._step = _Step.SEARCH_PREAMBLE
                break
        return None

    def parse_packets(self) -> Iterator[CommPacket]:
        """Yield every complete packet currently in the cache."""
        while (packet := self.parse()) is not None:
            yield packet

    def next_seq_num(self) -> int:
        """Return the current sequence number and advance it, wrapping at 16 bits."""
        with self._seq_lock:
            seq = self._seq_num
            self._seq_num = (self._seq_num + 1) & 0xFFFF
        return seq