"""Value types for the instances and properties of a binary place or model document."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Union


class PropertyType(IntEnum):
    """Property format identifiers as stored in property chunks."""

    UNKNOWN = 0
    STRING = 1
    BOOL = 2
    INT32 = 3
    FLOAT = 4
    DOUBLE = 5
    UDIM = 6
    UDIM2 = 7
    RAY = 8
    FACES = 9
    AXES = 10
    BRICK_COLOR = 11
    COLOR3 = 12
    VECTOR2 = 13
    VECTOR3 = 14
    VECTOR2INT16 = 15
    CFRAME_MATRIX = 16
    CFRAME_QUAT = 17
    ENUM = 18
    REF = 19
    VECTOR3INT16 = 20
    NUMBER_SEQUENCE = 21
    COLOR_SEQUENCE_V1 = 22
    NUMBER_RANGE = 23
    RECT2D = 24
    PHYSICAL_PROPERTIES = 25
    UCOLOR3 = 26
    INT64 = 27
    SHARED_STRING = 28
    BYTECODE = 29
    OPTIONAL_CFRAME = 30
    UNIQUE_ID = 31
    FONT = 32
    SECURITY_CAPABILITIES = 33
    CONTENT = 34


@dataclass(frozen=True)
class BrickColor:
    index: int


@dataclass(frozen=True)
class UniqueId:
    index: int
    timestamp: int
    rawbits: int


@dataclass(frozen=True)
class Vec2:
    x: float
    y: float


@dataclass(frozen=True)
class Vec3:
    x: float
    y: float
    z: float


IDENTITY_ROTATION: tuple[float, ...] = (1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0)


@dataclass(frozen=True)
class CFrame:
    """A rotation (nine floats, row by row) and a translation."""

    rotation: tuple[float, ...] = IDENTITY_ROTATION
    translation: Vec3 = Vec3(0.0, 0.0, 0.0)


IDENTITY_CFRAME = CFrame()


@dataclass(frozen=True)
class OptionalCFrame:
    value: CFrame
    has_data: bool


@dataclass(frozen=True)
class Color3:
    r: float
    g: float
    b: float


@dataclass(frozen=True)
class ColorSequenceKeypoint:
    time: float
    value: Color3
    envelope: float


@dataclass(frozen=True)
class ColorSequence:
    keypoints: tuple[ColorSequenceKeypoint, ...] = ()


@dataclass(frozen=True)
class NumberSequenceKeypoint:
    time: float
    value: float
    envelope: float


@dataclass(frozen=True)
class NumberSequence:
    keypoints: tuple[NumberSequenceKeypoint, ...] = ()


@dataclass(frozen=True)
class UDim2:
    scale_x: float
    scale_y: float
    offset_x: int
    offset_y: int


@dataclass(frozen=True)
class Rect2D:
    x0: float
    y0: float
    x1: float
    y1: float


@dataclass(frozen=True)
class FontInfo:
    family: str
    weight: int
    style: int
    cached_face_id: str


@dataclass(frozen=True)
class NumberRange:
    min: float
    max: float


@dataclass(frozen=True)
class PhysicalProperties:
    density: float = 0.0
    friction: float = 0.0
    elasticity: float = 0.0
    friction_weight: float = 1.0
    elasticity_weight: float = 1.0
    acoustic_absorption: float = 1.0


PropertyValue = Union[
    None,
    str,
    bool,
    int,
    float,
    Vec2,
    Vec3,
    CFrame,
    OptionalCFrame,
    BrickColor,
    UniqueId,
    ColorSequence,
    NumberSequence,
    UDim2,
    Color3,
    Rect2D,
    PhysicalProperties,
    NumberRange,
    FontInfo,
]

_CFRAME_TYPES = frozenset(
    {PropertyType.CFRAME_MATRIX, PropertyType.CFRAME_QUAT, PropertyType.OPTIONAL_CFRAME}
)


@dataclass(frozen=True)
class Property:
    """A named, typed property value of one instance."""

    name: str
    type: PropertyType
    value: PropertyValue = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", PropertyType(self.type))

    def as_string(self, default: str = "") -> str:
        """Return the string value, or ``default`` for any other type."""
        if self.type is not PropertyType.STRING:
            return default
        return self.value  # type: ignore[return-value]

    def as_float(self, default: float = 0.0) -> float:
        """Return the float value, or ``default`` for any other type."""
        if self.type is not PropertyType.FLOAT:
            return default
        return self.value  # type: ignore[return-value]

    def as_vec3(self, default: Vec3 = Vec3(0.0, 0.0, 0.0)) -> Vec3:
        """Return the Vector3 value, or ``default`` for any other type."""
        if self.type is not PropertyType.VECTOR3:
            return default
        return self.value  # type: ignore[return-value]

    def as_cframe(self, default: CFrame = IDENTITY_CFRAME) -> CFrame:
        """Return the CFrame value, or ``default`` for other types and empty optionals."""
        if self.type not in _CFRAME_TYPES:
            return default
        if isinstance(self.value, OptionalCFrame):
            return self.value.value if self.value.has_data else default
        return self.value  # type: ignore[return-value]


@dataclass
class Instance:
    """One object of the document tree."""

    parent_id: int = -1
    id: int = -1
    type_index: int | None = None
    is_service: bool = False
    is_service_rooted: bool = False
    properties: list[Property] = field(default_factory=list)
    child_ids: list[int] = field(default_factory=list)