"""Type-length-value records with big-endian 16-bit id and length headers."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass, field

from .logger import default_logger

_HEADER = struct.Struct("!HH")
_MAX_LEN = 0xFFFF


class TlvKind(enum.Enum):
    """Payload encodings a TLV id can be registered with."""

    BUF = "buf"
    NULL = "null"
    WORD = "word"
    DWORD = "dword"
    STR = "str"
    BYTE = "byte"


_FIXED = {
    TlvKind.BYTE: struct.Struct("!B"),
    TlvKind.WORD: struct.Struct("!H"),
    TlvKind.DWORD: struct.Struct("!I"),
}


@dataclass
class Tlv:
    """One record: ``value`` is an int, ``str``, ``bytes`` or ``None`` by kind."""

    id: int
    kind: TlvKind
    length: int
    value: object
    exec_func: object = field(default=None, repr=False, compare=False)

    def _payload(self) -> bytes:
        if self.kind is TlvKind.NULL:
            return b""
        fixed = _FIXED.get(self.kind)
        if fixed is not None:
            return fixed.pack(self.value)
        raw = self.value.encode("utf-8") if self.kind is TlvKind.STR else bytes(self.value)
        return raw.ljust(self.length, b"\0")[: self.length]

    def encode(self) -> bytes:
        """Return the wire form: id, length, then the payload."""
        return _HEADER.pack(self.id, self.length) + self._payload()

    def execute(self, arg=None):
        """Run the handler registered for this id; 0 when there is none."""
        if self.exec_func is None:
            return 0
        return self.exec_func(self, arg)

    def __str__(self) -> str:
        head = f"id[0x{self.id:X}]len[{self.length}]"
        if self.kind in _FIXED:
            return f"{head}val[0x{self.value:X}]"
        if self.kind is TlvKind.STR:
            return f"{head}val[{self.value}]"
        return head


@dataclass(frozen=True)
class _Descriptor:
    kind: TlvKind
    exec_func: object


def _check_fixed(kind: TlvKind, value) -> int:
    value = int(value)
    limit = 1 << (8 * _FIXED[kind].size)
    if not 0 <= value < limit:
        raise ValueError(f"{kind.value} value {value} out of range")
    return value


class TlvRegistry:
    """Table of TLV ids ``0 .. size-1`` mapped to their kind and handler."""

    def __init__(self, size):
        if size < 1:
            raise ValueError("size must be at least 1")
        self.size = size
        self._descs = [None] * size

    def _check_id(self, tlv_id) -> None:
        if not 0 <= tlv_id < self.size:
            raise ValueError(f"tlv id {tlv_id} out of range 0..{self.size - 1}")

    def _desc(self, tlv_id) -> _Descriptor:
        self._check_id(tlv_id)
        desc = self._descs[tlv_id]
        if desc is None:
            raise KeyError(tlv_id)
        return desc

    def register(self, tlv_id, kind, exec_func=None):
        """Bind ``tlv_id`` to ``kind``; returns the previous (kind, handler) or None."""
        self._check_id(tlv_id)
        previous = self._descs[tlv_id]
        self._descs[tlv_id] = _Descriptor(TlvKind(kind), exec_func)
        if previous is None:
            return None
        return previous.kind, previous.exec_func

    def new(self, tlv_id, value=None) -> Tlv:
        """Build a record for ``tlv_id`` holding ``value``."""
        desc = self._desc(tlv_id)
        kind = desc.kind
        if kind is TlvKind.NULL:
            length, value = 0, None
        elif kind in _FIXED:
            value = _check_fixed(kind, value)
            length = _FIXED[kind].size
        elif kind is TlvKind.STR:
            value = str(value).split("\0", 1)[0]
            length = len(value.encode("utf-8"))
        else:
            value = bytes(value)
            length = len(value)
        if length > _MAX_LEN:
            raise ValueError(f"payload of {length} bytes is too long")
        return Tlv(id=tlv_id, kind=kind, length=length, value=value, exec_func=desc.exec_func)

    def encode(self, tlv_id, value=None) -> bytes:
        """Build a record and return its wire form."""
        return self.new(tlv_id, value).encode()

    def decode(self, data, offset=0):
        """Parse one record from ``data`` at ``offset``.

        Returns ``(tlv, next_offset)``. Raises KeyError for an unregistered
        id and ValueError for truncated input.
        """
        data = bytes(data)
        if offset + _HEADER.size > len(data):
            raise ValueError("truncated tlv header")
        tlv_id, length = _HEADER.unpack_from(data, offset)
        default_logger().debug(f"id[{tlv_id}] len[{length}]")
        pos = offset + _HEADER.size
        desc = self._desc(tlv_id)
        kind = desc.kind

        if kind is TlvKind.NULL:
            value = None
        elif kind in _FIXED:
            fixed = _FIXED[kind]
            if pos + fixed.size > len(data):
                raise ValueError("truncated tlv payload")
            (value,) = fixed.unpack_from(data, pos)
            pos += fixed.size
        else:
            if pos + length > len(data):
                raise ValueError("truncated tlv payload")
            raw = data[pos:pos + length]
            pos += length
            if kind is TlvKind.STR:
                value = raw.split(b"\0", 1)[0].decode("utf-8", errors="replace")
            else:
                value = raw
        tlv = Tlv(id=tlv_id, kind=kind, length=length, value=value, exec_func=desc.exec_func)
        return tlv, pos