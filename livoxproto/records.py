"""Fixed-layout little-endian records mapped onto dataclasses."""

from __future__ import annotations

import re
import struct
from collections.abc import Iterable, Iterator
from dataclasses import fields, is_dataclass
from typing import Any, ClassVar, TypeVar

__all__ = ["Record"]

_FORMAT_ITEM = re.compile(r"\s*(\d*)([xcbB?hHiIlLqQefds])\s*")

_R = TypeVar("_R", bound="Record")

# Layout kinds: a scalar value, a fixed-size tuple of values, or a NUL-padded string.
_SCALAR = "scalar"
_TUPLE = "tuple"
_STRING = "string"


def _parse_layout(fmt: str) -> tuple[tuple[str, int], ...]:
    layout: list[tuple[str, int]] = []
    pos = 0
    text = fmt.strip()
    while pos < len(text):
        match = _FORMAT_ITEM.match(text, pos)
        if match is None:
            raise ValueError(f"unsupported record format {fmt!r}")
        pos = match.end()
        count_text, code = match.groups()
        count = int(count_text) if count_text else 1
        if code == "x":
            continue
        if code == "s":
            layout.append((_STRING, count))
        elif count_text:
            layout.append((_TUPLE, count))
        else:
            layout.append((_SCALAR, 1))
    return tuple(layout)


class Record:
    """Base for dataclasses that have a packed binary form.

    A subclass sets ``FORMAT`` to a ``struct`` format without byte-order
    prefix; the layout is always little-endian and unaligned. Each format
    item maps to one dataclass field in order: ``Ns`` to a string, a code
    with an explicit count such as ``4B`` to a tuple, any other code to a
    scalar. Pad bytes (``x``) have no field.
    """

    FORMAT: ClassVar[str]
    _struct: ClassVar[struct.Struct]
    _layout: ClassVar[tuple[tuple[str, int], ...]]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        fmt = cls.__dict__.get("FORMAT")
        if fmt is None:
            return
        cls._layout = _parse_layout(fmt)
        cls._struct = struct.Struct("<" + fmt.strip())

    @classmethod
    def _checked_struct(cls) -> struct.Struct:
        layout_struct = cls.__dict__.get("_struct") or getattr(cls, "_struct", None)
        if layout_struct is None:
            raise TypeError(f"{cls.__name__} defines no FORMAT")
        if not is_dataclass(cls):
            raise TypeError(f"{cls.__name__} is not a dataclass")
        if len(fields(cls)) != len(cls._layout):
            raise TypeError(
                f"{cls.__name__} has {len(fields(cls))} fields but its FORMAT "
                f"describes {len(cls._layout)}"
            )
        return layout_struct

    @classmethod
    def size(cls) -> int:
        """Number of bytes of the packed record."""
        return cls._checked_struct().size

    def pack(self) -> bytes:
        """Serialise the record."""
        layout_struct = self._checked_struct()
        values: list[Any] = []
        for (kind, count), field in zip(self._layout, fields(self)):
            value = getattr(self, field.name)
            if kind == _STRING:
                raw = value.encode("latin-1") if isinstance(value, str) else bytes(value)
                if len(raw) > count:
                    raise ValueError(f"{field.name} is longer than {count} bytes")
                values.append(raw)
            elif kind == _TUPLE:
                items = tuple(value)
                if len(items) != count:
                    raise ValueError(f"{field.name} needs exactly {count} items, got {len(items)}")
                values.extend(items)
            else:
                values.append(value)
        try:
            return layout_struct.pack(*values)
        except struct.error as exc:
            raise ValueError(f"cannot pack {type(self).__name__}: {exc}") from exc

    @classmethod
    def _from_items(cls: type[_R], items: Iterable[Any]) -> _R:
        source = iter(items)
        args: list[Any] = []
        for kind, count in cls._layout:
            if kind == _STRING:
                raw: bytes = next(source)
                args.append(raw.split(b"\0", 1)[0].decode("latin-1"))
            elif kind == _TUPLE:
                args.append(tuple(next(source) for _ in range(count)))
            else:
                args.append(next(source))
        return cls(*args)

    @classmethod
    def unpack(cls: type[_R], data: bytes | bytearray | memoryview) -> _R:
        """Decode a record from the start of ``data``."""
        layout_struct = cls._checked_struct()
        if len(data) < layout_struct.size:
            raise ValueError(
                f"{cls.__name__} needs {layout_struct.size} bytes, got {len(data)}"
            )
        return cls._from_items(layout_struct.unpack_from(data))

    @classmethod
    def iter_unpack(cls: type[_R], data: bytes | bytearray | memoryview) -> Iterator[_R]:
        """Decode consecutive records filling the whole of ``data``."""
        layout_struct = cls._checked_struct()
        if len(data) % layout_struct.size:
            raise ValueError(
                f"{len(data)} bytes is not a whole number of {cls.__name__} records"
            )
        for items in layout_struct.iter_unpack(data):
            yield cls._from_items(items)