"""Line materials — the surface descriptions meshes and lines point at."""

from __future__ import annotations

import logging
from enum import Enum, IntEnum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from threejson.config import (
    DEFAULT_DASH_SIZE,
    DEFAULT_GAP_SIZE,
    DEFAULT_LINEWIDTH,
    WHITE_OVERRIDE,
)
from threejson.errors import InvalidInputError
from threejson.ids import IdFactory, new_uuid

logger = logging.getLogger(__name__)


class MaterialType(str, Enum):
    """Three.js material classes this package can emit."""

    LINE_BASIC = "LineBasicMaterial"
    LINE_DASHED = "LineDashedMaterial"


class VertexColorMode(IntEnum):
    """Legacy Three.js ``vertexColors`` constants."""

    NO_COLORS = 0
    FACE_COLORS = 1
    VERTEX_COLORS = 2


class RGB(BaseModel):
    """An 8-bit-per-channel color."""

    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)

    def to_int(self) -> int:
        """Concatenate the channels as hex digits and read them back as one integer."""
        return int(f"{self.r:02X}{self.g:02X}{self.b:02X}", 16)

    @classmethod
    def from_hex(cls, value: str) -> RGB:
        """Parse ``#RRGGBB`` (the leading ``#`` is optional)."""
        digits = value.strip().lstrip("#")
        if len(digits) != 6:
            raise InvalidInputError(f"Expected a #RRGGBB color, got {value!r}")
        try:
            return cls(
                r=int(digits[0:2], 16),
                g=int(digits[2:4], 16),
                b=int(digits[4:6], 16),
            )
        except ValueError as exc:
            raise InvalidInputError(f"Invalid hex color {value!r}") from exc

    @classmethod
    def coerce(cls, value: ColorLike) -> RGB:
        """Accept an RGB, an ``(r, g, b)`` sequence or a hex string."""
        if value is None:
            raise InvalidInputError("A color is required")
        if isinstance(value, RGB):
            return value
        if isinstance(value, str):
            return cls.from_hex(value)
        try:
            r, g, b = value
            return cls(r=r, g=g, b=b)
        except (TypeError, ValueError) as exc:
            # ValidationError is a ValueError subclass
            raise InvalidInputError(f"Invalid color {value!r}: {exc}") from exc


ColorLike = Union[RGB, tuple[int, int, int], list[int], str]


class Material(BaseModel):
    """A renderable line material with a fixed identifier.

    Instances are immutable.  The only late change a material goes through,
    switching to per-vertex colors, is the value transform
    :meth:`for_vertex_colors`.
    """

    model_config = ConfigDict(frozen=True)

    uuid: str
    type: MaterialType
    color: int = Field(ge=0, le=0xFFFFFF)
    linewidth: float = DEFAULT_LINEWIDTH
    dash_size: Optional[float] = None
    gap_size: Optional[float] = None
    vertex_colors: Optional[VertexColorMode] = None
    base_color_override: Optional[str] = None

    @property
    def is_dashed(self) -> bool:
        return self.type == MaterialType.LINE_DASHED

    @property
    def effective_color(self) -> int:
        """The color a renderer will use: the override when set, else ``color``."""
        if self.base_color_override is not None:
            return int(self.base_color_override, 16)
        return self.color

    def for_vertex_colors(self) -> Material:
        """Return a copy driven by per-vertex colors, with a white base color.

        The copy keeps this material's uuid so every mesh sharing the
        material still references one entry.  Applying it twice is a no-op.
        """
        if (
            self.vertex_colors == VertexColorMode.VERTEX_COLORS
            and self.base_color_override == WHITE_OVERRIDE
            and self.color == int(WHITE_OVERRIDE, 16)
        ):
            return self
        return self.model_copy(update={
            "vertex_colors": VertexColorMode.VERTEX_COLORS,
            "color": int(WHITE_OVERRIDE, 16),
            "base_color_override": WHITE_OVERRIDE,
        })


def _build(fields: dict[str, Any]) -> Material:
    try:
        material = Material(**fields)
    except ValidationError as exc:
        raise InvalidInputError(str(exc)) from exc
    logger.debug("Created %s %s (color=%06x)", material.type.value, material.uuid, material.color)
    return material


def create_line_material(
    color: ColorLike,
    linewidth: float = DEFAULT_LINEWIDTH,
    *,
    ids: IdFactory = new_uuid,
) -> Material:
    """Create a ``LineBasicMaterial``."""
    return _build({
        "uuid": ids(),
        "type": MaterialType.LINE_BASIC,
        "color": RGB.coerce(color).to_int(),
        "linewidth": linewidth,
    })


def create_dashed_line_material(
    color: ColorLike,
    linewidth: float = DEFAULT_LINEWIDTH,
    dash_size: float = DEFAULT_DASH_SIZE,
    gap_size: float = DEFAULT_GAP_SIZE,
    *,
    ids: IdFactory = new_uuid,
) -> Material:
    """Create a ``LineDashedMaterial`` with the given dash and gap lengths."""
    return _build({
        "uuid": ids(),
        "type": MaterialType.LINE_DASHED,
        "color": RGB.coerce(color).to_int(),
        "linewidth": linewidth,
        "dash_size": dash_size,
        "gap_size": gap_size,
    })
