import struct

import pytest

from rbxdoc.blob import BinaryBlob, FormatError, id_to_matrix3
from rbxdoc.model import (
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
    Rect2D,
    UDim2,
    UniqueId,
    Vec2,
    Vec3,
)
from rbxdoc.properties import read_property_values

M32 = 0xFFFFFFFF
M64 = 0xFFFFFFFFFFFFFFFF


def interleave(words, width):
    raw = [w.to_bytes(width, "big") for w in words]
    return bytes(word[k] for k in range(width) for word in raw)


def enc_float(value):
    bits = struct.unpack("<I", struct.pack("<f", value))[0]
    return ((bits << 1) | (bits >> 31)) & M32


def enc_int(value):
    return ((value << 1) ^ (value >> 31)) & M32


def enc_int64(value):
    return ((value << 1) ^ (value >> 63)) & M64


def floats(values):
    return interleave([enc_float(v) for v in values], 4)


def ints(values):
    return interleave([enc_int(v) for v in values], 4)


def uints(values):
    return interleave(list(values), 4)


def string(text):
    data = text.encode()
    return struct.pack("<I", len(data)) + data


def read(data, ptype, count):
    blob = BinaryBlob(data)
    kind, values = read_property_values(blob, ptype, count)
    assert blob.tell() == len(data)
    return kind, values


def test_strings():
    kind, values = read(string("Name") + string("") + string("Part"), PropertyType.STRING, 3)
    assert kind is PropertyType.STRING
    assert values == ["Name", "", "Part"]


def test_bools():
    kind, values = read(bytes([0, 1, 2]), PropertyType.BOOL, 3)
    assert kind is PropertyType.BOOL
    assert values == [False, True, True]


def test_int32():
    nums = [0, 1, -1, 123456, -2147483648]
    kind, values = read(ints(nums), PropertyType.INT32, len(nums))
    assert kind is PropertyType.INT32
    assert values == nums


def test_int64():
    nums = [0, 5, -7, 2**40]
    kind, values = read(interleave([enc_int64(n) for n in nums], 8), PropertyType.INT64, 4)
    assert kind is PropertyType.INT64
    assert values == nums


def test_floats():
    nums = [0.0, 1.5, -2.25, 1024.0]
    kind, values = read(floats(nums), PropertyType.FLOAT, 4)
    assert kind is PropertyType.FLOAT
    assert values == nums


def test_doubles_are_raw_little_endian():
    kind, values = read(struct.pack("<2d", 0.1, -3.5), PropertyType.DOUBLE, 2)
    assert kind is PropertyType.DOUBLE
    assert values == [0.1, -3.5]


def test_color3():
    data = floats([0.5, 1.0]) + floats([0.25, 0.0]) + floats([0.0, 0.75])
    kind, values = read(data, PropertyType.COLOR3, 2)
    assert kind is PropertyType.COLOR3
    assert values == [Color3(0.5, 0.25, 0.0), Color3(1.0, 0.0, 0.75)]


def test_ucolor3_scales_bytes():
    data = bytes([255, 0]) + bytes([0, 255]) + bytes([255, 255])
    kind, values = read(data, PropertyType.UCOLOR3, 2)
    assert kind is PropertyType.UCOLOR3
    assert values == [Color3(1.0, 0.0, 1.0), Color3(0.0, 1.0, 1.0)]


def test_vector3_and_vector2():
    data = floats([1.0, 4.0]) + floats([2.0, 5.0]) + floats([3.0, 6.0])
    kind, values = read(data, PropertyType.VECTOR3, 2)
    assert kind is PropertyType.VECTOR3
    assert values == [Vec3(1.0, 2.0, 3.0), Vec3(4.0, 5.0, 6.0)]

    kind, values = read(floats([1.0]) + floats([-1.0]), PropertyType.VECTOR2, 1)
    assert kind is PropertyType.VECTOR2
    assert values == [Vec2(1.0, -1.0)]


def test_enum_and_brick_color():
    kind, values = read(uints([0, 194, 4294967295]), PropertyType.ENUM, 3)
    assert kind is PropertyType.ENUM
    assert values == [0, 194, 4294967295]

    kind, values = read(uints([194, 1]), PropertyType.BRICK_COLOR, 2)
    assert kind is PropertyType.BRICK_COLOR
    assert values == [BrickColor(194), BrickColor(1)]


def test_refs_are_delta_encoded():
    kind, values = read(ints([5, -2, 10]), PropertyType.REF, 3)
    assert kind is PropertyType.REF
    assert values == [5, 3, 13]


def test_unique_ids():
    data = uints([7]) + uints([1000]) + interleave([enc_int64(-9)], 8)
    kind, values = read(data, PropertyType.UNIQUE_ID, 1)
    assert kind is PropertyType.UNIQUE_ID
    assert values == [UniqueId(7, 1000, -9)]


def test_cframe_with_orientation_id_is_identity():
    data = bytes([2]) + floats([10.0]) + floats([20.0]) + floats([30.0])
    kind, values = read(data, PropertyType.CFRAME_MATRIX, 1)
    assert kind is PropertyType.CFRAME_MATRIX
    assert values == [
        CFrame((1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0), Vec3(10.0, 20.0, 30.0))
    ]


def test_cframe_with_raw_rotation():
    rotation = (0.0, 1.0, 0.0, -1.0, 0.0, 0.0, 0.0, 0.0, 1.0)
    data = (
        bytes([0]) + struct.pack("<9f", *rotation)
        + bytes([7])
        + floats([1.0, 2.0]) + floats([3.0, 4.0]) + floats([5.0, 6.0])
    )
    kind, values = read(data, PropertyType.CFRAME_MATRIX, 2)
    assert values[0] == CFrame(rotation, Vec3(1.0, 3.0, 5.0))
    assert values[1] == CFrame(id_to_matrix3(6), Vec3(2.0, 4.0, 6.0))


def test_optional_cframe():
    data = (
        bytes([PropertyType.CFRAME_MATRIX])
        + bytes([2, 2])
        + floats([1.0, 0.0]) + floats([2.0, 0.0]) + floats([3.0, 0.0])
        + bytes([PropertyType.BOOL])
        + bytes([1, 0])
    )
    kind, values = read(data, PropertyType.OPTIONAL_CFRAME, 2)
    assert kind is PropertyType.OPTIONAL_CFRAME
    assert values[0] == OptionalCFrame(CFrame(id_to_matrix3(1), Vec3(1.0, 2.0, 3.0)), True)
    assert values[1].has_data is False


def test_optional_cframe_rejects_quaternion_format():
    blob = BinaryBlob(bytes([PropertyType.CFRAME_QUAT, 0]))
    with pytest.raises(FormatError):
        read_property_values(blob, PropertyType.OPTIONAL_CFRAME, 1)


def test_optional_cframe_rejects_bad_flag_format():
    data = bytes([PropertyType.CFRAME_MATRIX, 2]) + floats([0.0]) * 3 + bytes([PropertyType.INT32, 1])
    with pytest.raises(FormatError):
        read_property_values(BinaryBlob(data), PropertyType.OPTIONAL_CFRAME, 1)


def test_number_sequence():
    data = struct.pack("<I6f", 2, 0.0, 1.0, 0.0, 1.0, 0.5, 0.25) + struct.pack("<I", 0)
    kind, values = read(data, PropertyType.NUMBER_SEQUENCE, 2)
    assert kind is PropertyType.NUMBER_SEQUENCE
    assert values == [
        NumberSequence(
            (NumberSequenceKeypoint(0.0, 1.0, 0.0), NumberSequenceKeypoint(1.0, 0.5, 0.25))
        ),
        NumberSequence(()),
    ]


def test_color_sequence():
    data = struct.pack("<I5f", 1, 0.5, 1.0, 0.5, 0.0, 0.0)
    kind, values = read(data, PropertyType.COLOR_SEQUENCE_V1, 1)
    assert kind is PropertyType.COLOR_SEQUENCE_V1
    assert values == [ColorSequence((ColorSequenceKeypoint(0.5, Color3(1.0, 0.5, 0.0), 0.0),))]


def test_udim2_and_rect2d():
    data = floats([0.5]) + floats([1.0]) + ints([-10]) + ints([20])
    kind, values = read(data, PropertyType.UDIM2, 1)
    assert kind is PropertyType.UDIM2
    assert values == [UDim2(0.5, 1.0, -10, 20)]

    data = floats([1.0]) + floats([2.0]) + floats([3.0]) + floats([4.0])
    kind, values = read(data, PropertyType.RECT2D, 1)
    assert kind is PropertyType.RECT2D
    assert values == [Rect2D(1.0, 2.0, 3.0, 4.0)]


def test_shared_strings_give_indices():
    kind, values = read(uints([0, 3]), PropertyType.SHARED_STRING, 2)
    assert kind is PropertyType.SHARED_STRING
    assert values == [0, 3]


def test_physical_properties_flags():
    data = (
        bytes([0])
        + bytes([1]) + struct.pack("<5f", 0.5, 0.25, 0.75, 2.0, 3.0)
        + bytes([3]) + struct.pack("<6f", 1.0, 0.5, 0.5, 1.0, 1.0, 0.125)
    )
    kind, values = read(data, PropertyType.PHYSICAL_PROPERTIES, 3)
    assert kind is PropertyType.PHYSICAL_PROPERTIES
    assert values[0] == PhysicalProperties()
    assert values[1] == PhysicalProperties(0.5, 0.25, 0.75, 2.0, 3.0, 1.0)
    assert values[2] == PhysicalProperties(1.0, 0.5, 0.5, 1.0, 1.0, 0.125)


def test_number_range():
    kind, values = read(struct.pack("<2f", -1.0, 4.5), PropertyType.NUMBER_RANGE, 1)
    assert kind is PropertyType.NUMBER_RANGE
    assert values == [NumberRange(-1.0, 4.5)]


def test_font():
    data = string("Arial") + struct.pack("<HB", 400, 1) + string("face")
    kind, values = read(data, PropertyType.FONT, 1)
    assert kind is PropertyType.FONT
    assert values == [FontInfo("Arial", 400, 1, "face")]


@pytest.mark.parametrize("code", [PropertyType.UDIM, PropertyType.CONTENT, 0, 200])
def test_unsupported_formats_read_nothing(code):
    blob = BinaryBlob(b"\x01\x02\x03")
    kind, values = read_property_values(blob, code, 2)
    assert kind is PropertyType.UNKNOWN
    assert values == [None, None]
    assert blob.tell() == 0


def test_zero_count_reads_nothing():
    blob = BinaryBlob(b"")
    kind, values = read_property_values(blob, PropertyType.VECTOR3, 0)
    assert kind is PropertyType.VECTOR3
    assert values == []


@pytest.mark.parametrize(
    "code, data",
    [
        (PropertyType.STRING, struct.pack("<I", 10) + b"abc"),
        (PropertyType.FLOAT, b"\x00\x00\x00"),
        (PropertyType.BOOL, b""),
        (PropertyType.NUMBER_SEQUENCE, struct.pack("<I", 2) + b"\x00" * 12),
        (PropertyType.PHYSICAL_PROPERTIES, bytes([1]) + b"\x00" * 8),
    ],
)
def test_truncated_data_raises(code, data):
    with pytest.raises(FormatError):
        read_property_values(BinaryBlob(data), code, 1)