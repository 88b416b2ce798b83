"""CRC routines used by the SDK wire protocol."""

from __future__ import annotations

__all__ = ["crc16_mcrf4xx", "crc32"]


def _make_table(poly: int) -> tuple[int, ...]:
    table = []
    for byte in range(256):
        crc = byte
        for _ in range(8):
            crc = (crc >> 1) ^ poly if crc & 1 else crc >> 1
        table.append(crc)
    return tuple(table)


_CRC16_TABLE = _make_table(0x8408)
_CRC32_TABLE = _make_table(0xEDB88320)


def crc16_mcrf4xx(data: bytes | bytearray | memoryview, seed: int) -> int:
    """CRC-16/MCRF4XX (reflected 0x1021, no final xor) starting from ``seed``."""
    crc = seed & 0xFFFF
    for byte in bytes(data):
        crc = (crc >> 8) ^ _CRC16_TABLE[(crc ^ byte) & 0xFF]
    return crc


def crc32(data: bytes | bytearray | memoryview, seed: int) -> int:
    """Reflected CRC-32 (poly 0x04C11DB7) starting from ``seed``, final xor 0xFFFFFFFF."""
    crc = seed & 0xFFFFFFFF
    for byte in bytes(data):
        crc = (crc >> 8) ^ _CRC32_TABLE[(crc ^ byte) & 0xFF]
    return crc ^ 0xFFFFFFFF