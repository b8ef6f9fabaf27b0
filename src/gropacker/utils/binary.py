"""Binary I/O utilities for Serious Engine resource parsing."""

import struct
from enum import Enum
from typing import BinaryIO, Optional
from io import BytesIO


class FormatError(ValueError):
    """Malformed, truncated or unreadable input. Always fatal for the source."""


class ByteOrder(Enum):
    """Byte order enum for struct packing/unpacking."""
    BIG_ENDIAN = ">"
    LITTLE_ENDIAN = "<"


class IoBuffer:
    """Binary reader with endian support and chunk tag helpers."""

    def __init__(self, stream: BinaryIO, byte_order: ByteOrder = ByteOrder.LITTLE_ENDIAN,
                 data: Optional[bytes] = None):
        self.stream = stream
        self.byte_order = byte_order
        self._data = data  # Whole content when created from bytes, for fast searches
        self._size = self._measure()

    @classmethod
    def from_bytes(cls, data: bytes, byte_order: ByteOrder = ByteOrder.LITTLE_ENDIAN) -> 'IoBuffer':
        """Create from bytes."""
        return cls(BytesIO(data), byte_order, data)

    @classmethod
    def from_file(cls, filepath: str, byte_order: ByteOrder = ByteOrder.LITTLE_ENDIAN) -> 'IoBuffer':
        """Create from file path. Unreadable files are format errors."""
        try:
            with open(filepath, 'rb') as f:
                data = f.read()
        except OSError as e:
            raise FormatError(f"Cannot open '{filepath}': {e.strerror or e}") from e
        return cls.from_bytes(data, byte_order)

    def _measure(self) -> int:
        current = self.stream.tell()
        self.stream.seek(0, 2)
        end = self.stream.tell()
        self.stream.seek(current)
        return end

    @property
    def size(self) -> int:
        """Total stream size in bytes."""
        return self._size

    @property
    def position(self) -> int:
        """Current position in stream."""
        return self.stream.tell()

    @position.setter
    def position(self, value: int):
        """Seek to position."""
        self.seek(value)

    @property
    def at_end(self) -> bool:
        """True when no bytes are left."""
        return self.stream.tell() >= self._size

    def has_bytes(self, num_bytes: int) -> bool:
        """Check if there are at least num_bytes remaining."""
        return (self._size - self.stream.tell()) >= num_bytes

    def skip(self, num_bytes: int):
        """Skip bytes from current position."""
        self.seek(self.stream.tell() + num_bytes)

    def seek(self, offset: int, whence: int = 0):
        """Seek in stream (whence: 0=start, 1=current, 2=end)."""
        if whence == 1:
            offset += self.stream.tell()
        elif whence == 2:
            offset += self._size
        if offset < 0 or offset > self._size:
            raise FormatError(f"Seek to {offset} outside of stream (size {self._size})")
        self.stream.seek(offset)

    def read_bytes(self, count: int) -> bytes:
        """Read exactly count raw bytes."""
        data = self.stream.read(count)
        if len(data) != count:
            raise FormatError(
                f"Unexpected end of data at {self.position}: wanted {count} bytes, got {len(data)}"
            )
        return data

    def peek(self, count: int) -> bytes:
        """Read up to count bytes without moving. Short near the end."""
        current = self.stream.tell()
        data = self.stream.read(count)
        self.stream.seek(current)
        return data

    def peek_tag(self, tag: bytes) -> bool:
        """Check whether the next bytes are the given chunk tag."""
        return self.peek(len(tag)) == tag

    def find(self, tag: bytes, start: Optional[int] = None) -> int:
        """Offset of the next occurrence of tag at or after start, or -1. Doesn't move."""
        current = self.stream.tell()
        if start is None:
            start = current
        if self._data is not None:
            return self._data.find(tag, start)

        self.stream.seek(start)
        found = self.stream.read().find(tag)
        self.stream.seek(current)
        return found + start if found >= 0 else -1

    def scan_to(self, tag: bytes) -> bool:
        """Move forward to the next occurrence of tag. Stays put if there is none."""
        found = self.find(tag)
        if found < 0:
            return False
        self.stream.seek(found)
        return True

    def expect(self, tag: bytes):
        """Consume a chunk tag or raise FormatError."""
        pos = self.position
        found = self.stream.read(len(tag))
        if found != tag:
            raise FormatError(
                f"Expected chunk '{tag.decode('ascii')}' at {pos}, found {found!r}"
            )

    def read_byte(self) -> int:
        """Read single byte (0-255)."""
        return self.read_bytes(1)[0]

    def read_uint16(self) -> int:
        """Read unsigned 16-bit integer."""
        fmt = f"{self.byte_order.value}H"
        return struct.unpack(fmt, self.read_bytes(2))[0]

    def read_uint32(self) -> int:
        """Read unsigned 32-bit integer."""
        fmt = f"{self.byte_order.value}I"
        return struct.unpack(fmt, self.read_bytes(4))[0]

    def read_int32(self) -> int:
        """Read signed 32-bit integer."""
        fmt = f"{self.byte_order.value}i"
        return struct.unpack(fmt, self.read_bytes(4))[0]

    def read_string(self) -> str:
        """Read a string prefixed with a 32-bit length (engine CTString layout)."""
        length = self.read_int32()
        if length < 0:
            raise FormatError(f"Negative string length {length} at {self.position - 4}")
        return self.read_bytes(length).decode('latin-1')

    def read_cstring(self, length: int, trim_null: bool = True) -> str:
        """Read fixed-length string."""
        result = self.read_bytes(length).decode('latin-1')
        if trim_null:
            null_idx = result.find('\0')
            if null_idx != -1:
                result = result[:null_idx]
        return result

    def read_until(self, terminators: bytes, limit: int = -1) -> str:
        """Read bytes up to (not including) any terminator byte, EOF or limit chars."""
        out = bytearray()
        while limit < 0 or len(out) < limit:
            ch = self.stream.read(1)
            if not ch or ch in terminators:
                break
            out += ch
        return out.decode('latin-1')


def pack_string(value: str) -> bytes:
    """Encode a string the way read_string expects it."""
    raw = value.encode('latin-1')
    return struct.pack("<i", len(raw)) + raw
