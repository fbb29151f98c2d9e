"""Decoders for the value columns of property chunks."""

from __future__ import annotations

import struct
from typing import Callable, Dict, List, Tuple

from .blob import BinaryBlob, FormatError
from .model import (
    BrickColor,
    CFrame,
    Color3,
    ColorSequence,
    ColorSequenceKeypoint,
    FontInfo,
    NumberRange,
    NumberSequence,
    NumberSequenceKeypoint,
    OptionalCFrame,
    PhysicalProperties,
    PropertyType,
    PropertyValue,
    Rect2D,
    UDim2,
    UniqueId,
    Vec2,
    Vec3,
)

_Reader = Callable[[BinaryBlob, int], List[PropertyValue]]

_CUSTOMIZE_MASK = 0x01


def _read_strings(blob: BinaryBlob, count: int) -> list[PropertyValue]:
    return [blob.read_string() for _ in range(count)]


def _read_bools(blob: BinaryBlob, count: int) -> list[PropertyValue]:
    return [byte != 0 for byte in blob.read(count)]


def _read_int32s(blob: BinaryBlob, count: int) -> list[PropertyValue]:
    return list(blob.read_int_vector(count))


def _read_int64s(blob: BinaryBlob, count: int) -> list[PropertyValue]:
    return list(blob.read_int64_vector(count))


def _read_floats(blob: BinaryBlob, count: int) -> list[PropertyValue]:
    return list(blob.read_float_vector(count))


def _read_doubles(blob: BinaryBlob, count: int) -> list[PropertyValue]:
    return [blob.read_f64() for _ in range(count)]


def _read_color3s(blob: BinaryBlob, count: int) -> list[PropertyValue]:
    r = blob.read_float_vector(count)
    g = blob.read_float_vector(count)
    b = blob.read_float_vector(count)
    return [Color3(*rgb) for rgb in zip(r, g, b)]


def _read_ucolor3s(blob: BinaryBlob, count: int) -> list[PropertyValue]:
    r = blob.read_uint8_vector(count)
    g = blob.read_uint8_vector(count)
    b = blob.read_uint8_vector(count)
    return [Color3(rv / 255.0, gv / 255.0, bv / 255.0) for rv, gv, bv in zip(r, g, b)]


def _read_vector3s(blob: BinaryBlob, count: int) -> list[PropertyValue]:
    x = blob.read_float_vector(count)
    y = blob.read_float_vector(count)
    z = blob.read_float_vector(count)
    return [Vec3(*xyz) for xyz in zip(x, y, z)]


def _read_vector2s(blob: BinaryBlob, count: int) -> list[PropertyValue]:
    x = blob.read_float_vector(count)
    y = blob.read_float_vector(count)
    return [Vec2(*xy) for xy in zip(x, y)]


def _read_enums(blob: BinaryBlob, count: int) -> list[PropertyValue]:
    return list(blob.read_uint_vector(count))


def _read_refs(blob: BinaryBlob, count: int) -> list[PropertyValue]:
    return list(blob.read_id_vector(count))


def _read_brick_colors(blob: BinaryBlob, count: int) -> list[PropertyValue]:
    return [BrickColor(index) for index in blob.read_uint_vector(count)]


def _read_unique_ids(blob: BinaryBlob, count: int) -> list[PropertyValue]:
    indices = blob.read_uint_vector(count)
    timestamps = blob.read_uint_vector(count)
    rawbits = blob.read_int64_vector(count)
    return [UniqueId(*parts) for parts in zip(indices, timestamps, rawbits)]


def _read_cframe_columns(blob: BinaryBlob, count: int) -> list[CFrame]:
    rotations = [blob.read_rotation() for _ in range(count)]
    x = blob.read_float_vector(count)
    y = blob.read_float_vector(count)
    z = blob.read_float_vector(count)
    return [
        CFrame(rotation, Vec3(*xyz))
        for rotation, xyz in zip(rotations, zip(x, y, z))
    ]


def _read_cframes(blob: BinaryBlob, count: int) -> list[PropertyValue]:
    return list(_read_cframe_columns(blob, count))


def _read_optional_cframes(blob: BinaryBlob, count: int) -> list[PropertyValue]:
    if blob.read_u8() != PropertyType.CFRAME_MATRIX:
        raise FormatError("Unsupported OptionalCFrame format")
    cframes = _read_cframe_columns(blob, count)
    if blob.read_u8() != PropertyType.BOOL:
        raise FormatError("Unsupported OptionalCFrame format")
    flags = blob.read(count)
    return [OptionalCFrame(cframe, flag != 0) for cframe, flag in zip(cframes, flags)]


def _read_float_groups(blob: BinaryBlob, width: int) -> list[tuple[float, ...]]:
    size = blob.read_u32()
    floats = struct.unpack(f"<{size * width}f", blob.read(size * width * 4))
    return list(zip(*[iter(floats)] * width))


def _read_number_sequences(blob: BinaryBlob, count: int) -> list[PropertyValue]:
    return [
        NumberSequence(
            tuple(
                NumberSequenceKeypoint(time, value, envelope)
                for time, value, envelope in _read_float_groups(blob, 3)
            )
        )
        for _ in range(count)
    ]


def _read_color_sequences(blob: BinaryBlob, count: int) -> list[PropertyValue]:
    return [
        ColorSequence(
            tuple(
                ColorSequenceKeypoint(time, Color3(r, g, b), envelope)
                for time, r, g, b, envelope in _read_float_groups(blob, 5)
            )
        )
        for _ in range(count)
    ]


def _read_udim2s(blob: BinaryBlob, count: int) -> list[PropertyValue]:
    sx = blob.read_float_vector(count)
    sy = blob.read_float_vector(count)
    ox = blob.read_int_vector(count)
    oy = blob.read_int_vector(count)
    return [UDim2(*parts) for parts in zip(sx, sy, ox, oy)]


def _read_rect2ds(blob: BinaryBlob, count: int) -> list[PropertyValue]:
    x0 = blob.read_float_vector(count)
    y0 = blob.read_float_vector(count)
    x1 = blob.read_float_vector(count)
    y1 = blob.read_float_vector(count)
    return [Rect2D(*parts) for parts in zip(x0, y0, x1, y1)]


def _read_shared_strings(blob: BinaryBlob, count: int) -> list[PropertyValue]:
    """Shared strings are kept as indices into the document's shared string table."""
    return list(blob.read_uint_vector(count))


def _read_physical(blob: BinaryBlob, count: int) -> list[PropertyValue]:
    values: list[PropertyValue] = []
    for _ in range(count):
        flag = blob.read_u8()
        if flag & _CUSTOMIZE_MASK:
            floats = [blob.read_f32() for _ in range(5)]
            if flag >= 2:
                floats.append(blob.read_f32())
            values.append(PhysicalProperties(*floats))
        else:
            values.append(PhysicalProperties())
    return values


def _read_number_ranges(blob: BinaryBlob, count: int) -> list[PropertyValue]:
    return [NumberRange(blob.read_f32(), blob.read_f32()) for _ in range(count)]


def _read_fonts(blob: BinaryBlob, count: int) -> list[PropertyValue]:
    fonts: list[PropertyValue] = []
    for _ in range(count):
        family = blob.read_string()
        weight = blob.read_u16()
        style = blob.read_u8()
        cached_face_id = blob.read_string()
        fonts.append(FontInfo(family, weight, style, cached_face_id))
    return fonts


_READERS: Dict[PropertyType, _Reader] = {
    PropertyType.STRING: _read_strings,
    PropertyType.BOOL: _read_bools,
    PropertyType.INT32: _read_int32s,
    PropertyType.INT64: _read_int64s,
    PropertyType.FLOAT: _read_floats,
    PropertyType.DOUBLE: _read_doubles,
    PropertyType.COLOR3: _read_color3s,
    PropertyType.UCOLOR3: _read_ucolor3s,
    PropertyType.VECTOR3: _read_vector3s,
    PropertyType.VECTOR2: _read_vector2s,
    PropertyType.ENUM: _read_enums,
    PropertyType.REF: _read_refs,
    PropertyType.BRICK_COLOR: _read_brick_colors,
    PropertyType.UNIQUE_ID: _read_unique_ids,
    PropertyType.CFRAME_MATRIX: _read_cframes,
    PropertyType.OPTIONAL_CFRAME: _read_optional_cframes,
    PropertyType.COLOR_SEQUENCE_V1: _read_color_sequences,
    PropertyType.NUMBER_SEQUENCE: _read_number_sequences,
    PropertyType.UDIM2: _read_udim2s,
    PropertyType.RECT2D: _read_rect2ds,
    PropertyType.SHARED_STRING: _read_shared_strings,
    PropertyType.PHYSICAL_PROPERTIES: _read_physical,
    PropertyType.NUMBER_RANGE: _read_number_ranges,
    PropertyType.FONT: _read_fonts,
}


def read_property_values(
    blob: BinaryBlob, property_type: int, count: int
) -> Tuple[PropertyType, List[PropertyValue]]:
    """Read ``count`` values of the given format code from ``blob``.

    Returns the type the values are stored under and the values in instance
    order. Formats without a decoder read nothing and yield ``count`` empty
    values of type ``UNKNOWN``.
    """
    try:
        kind = PropertyType(property_type)
    except ValueError:
        kind = PropertyType.UNKNOWN
    reader = _READERS.get(kind)
    if reader is None:
        return PropertyType.UNKNOWN, [None] * count
    return kind, reader(blob, count)