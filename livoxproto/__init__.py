"""Framing, CRC checking, stream parsing and payload records for the Livox LiDAR command protocol."""

__version__ = "2.3.0"

__all__ = ["crc", "protocol", "comm_port", "records", "definitions", "points", "messages"]