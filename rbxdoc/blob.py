"""Byte cursor and low-level decoders for the binary document format."""

from __future__ import annotations

import struct
from itertools import accumulate
from typing import Iterator

import lz4.block
import zstandard

_ZSTD_MAGIC = b"\x28\xb5\x2f\xfd"
_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF


class FormatError(ValueError):
    """Raised when document data is malformed or truncated."""


def decompress_chunk(compressed: bytes, size: int) -> bytes:
    """Decompress a chunk body (zstd frame or raw LZ4 block) of ``size`` bytes."""
    try:
        if len(compressed) > 4 and compressed[:4] == _ZSTD_MAGIC:
            data = zstandard.ZstdDecompressor().decompress(compressed, max_output_size=size)
        else:
            data = lz4.block.decompress(compressed, uncompressed_size=size)
    except (zstandard.ZstdError, lz4.block.LZ4BlockError, ValueError) as exc:
        raise FormatError("Malformed data") from exc
    if len(data) != size:
        raise FormatError("Malformed data")
    return data


def decode_float(value: int) -> float:
    """Decode a float whose sign bit was rotated into the lowest bit."""
    value &= _MASK32
    bits = ((value >> 1) | (value << 31)) & _MASK32
    return struct.unpack("<f", struct.pack("<I", bits))[0]


def decode_int(value: int) -> int:
    """Decode a zigzag-encoded 32-bit integer."""
    value &= _MASK32
    return (value >> 1) ^ -(value & 1)


def decode_int64(value: int) -> int:
    """Decode a zigzag-encoded 64-bit integer."""
    value &= _MASK64
    return (value >> 1) ^ -(value & 1)


def _normal_vector(normal: int) -> tuple[float, float, float]:
    coords = [0.0, 0.0, 0.0]
    coords[normal % 3] = -1.0 if normal >= 3 else 1.0
    return coords[0], coords[1], coords[2]


def id_to_matrix3(orient_id: int) -> tuple[float, ...]:
    """Build the axis-aligned rotation matrix for a packed orientation id."""
    if orient_id < 0:
        raise FormatError("Invalid orientation id")
    ax, ay, az = _normal_vector(orient_id // 6)
    bx, by, bz = _normal_vector(orient_id % 6)
    cross = (ay * bz - az * by, az * bx - ax * bz, ax * by - ay * bx)
    return (ax, ay, az, bx, by, bz) + cross


class BinaryBlob:
    """A read cursor over a byte buffer."""

    def __init__(self, data: bytes = b"") -> None:
        self._data = bytes(data)
        self._offset = 0

    def __len__(self) -> int:
        return len(self._data)

    def tell(self) -> int:
        """Return the current read offset."""
        return self._offset

    def read(self, size: int) -> bytes:
        """Read exactly ``size`` bytes."""
        end = self._offset + size
        if size < 0 or end > len(self._data):
            raise FormatError("Attempt to read beyond available data")
        chunk = self._data[self._offset:end]
        self._offset = end
        return chunk

    def _unpack(self, fmt: str):
        return struct.unpack(fmt, self.read(struct.calcsize(fmt)))[0]

    def read_u8(self) -> int:
        return self._unpack("<B")

    def read_u16(self) -> int:
        return self._unpack("<H")

    def read_u32(self) -> int:
        return self._unpack("<I")

    def read_f32(self) -> float:
        return self._unpack("<f")

    def read_f64(self) -> float:
        return self._unpack("<d")

    def read_string(self) -> str:
        """Read a length-prefixed string."""
        length = self.read_u32()
        return self.read(length).decode("utf-8", errors="surrogateescape")

    def read_rotation(self) -> tuple[float, ...]:
        """Read a rotation stored either as an orientation id or as nine floats."""
        orient_id = self._unpack("<b")
        if orient_id:
            return id_to_matrix3(orient_id - 1)
        return struct.unpack("<9f", self.read(36))

    def _interleaved(self, count: int, width: int) -> Iterator[int]:
        data = self.read(count * width)
        stripes = (data[k * count:(k + 1) * count] for k in range(width))
        for group in zip(*stripes):
            yield int.from_bytes(bytes(group), "big")

    def read_int_vector(self, count: int) -> list[int]:
        return [decode_int(v) for v in self._interleaved(count, 4)]

    def read_uint_vector(self, count: int) -> list[int]:
        return list(self._interleaved(count, 4))

    def read_int64_vector(self, count: int) -> list[int]:
        return [decode_int64(v) for v in self._interleaved(count, 8)]

    def read_float_vector(self, count: int) -> list[float]:
        return [decode_float(v) for v in self._interleaved(count, 4)]

    def read_uint8_vector(self, count: int) -> list[int]:
        return list(self.read(count))

    def read_id_vector(self, count: int) -> list[int]:
        """Read delta-encoded ids and return their running sums."""
        return list(accumulate(self.read_int_vector(count)))