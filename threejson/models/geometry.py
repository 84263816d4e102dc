"""Buffer geometry records: flat typed attribute arrays plus an index."""

from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from threejson.ids import IdFactory, new_uuid

Number = Union[int, float]

# Attribute names in the order they are written out
ATTRIBUTE_NAMES = ("position", "normal", "uv", "color")


class ElementType(str, Enum):
    """JavaScript typed-array constructors understood by the Three.js loader."""

    FLOAT32 = "Float32Array"
    UINT32 = "Uint32Array"


class Attribute(BaseModel):
    """One flat numeric channel of a buffer geometry."""

    model_config = ConfigDict(frozen=True)

    item_size: int = Field(ge=1, le=4)
    element_type: ElementType = ElementType.FLOAT32
    values: tuple[Number, ...] = ()
    normalized: bool = False

    @model_validator(mode="after")
    def _check_length(self) -> Attribute:
        if len(self.values) % self.item_size != 0:
            raise ValueError(
                f"{len(self.values)} values do not divide into items of {self.item_size}"
            )
        return self

    @property
    def count(self) -> int:
        """Number of items (vertices, triangles...) in the channel."""
        return len(self.values) // self.item_size

    @classmethod
    def float32(cls, values: tuple[float, ...], item_size: int) -> Attribute:
        return cls(item_size=item_size, element_type=ElementType.FLOAT32, values=values)

    @classmethod
    def index(cls, values: tuple[int, ...]) -> Attribute:
        return cls(item_size=1, element_type=ElementType.UINT32, values=values)


class BufferGeometry(BaseModel):
    """A uniquely identified geometry built from encoded attributes."""

    model_config = ConfigDict(frozen=True)

    uuid: str
    attributes: dict[str, Attribute]
    index: Attribute = Field(default_factory=lambda: Attribute.index(()))

    @property
    def vertex_count(self) -> int:
        position = self.attributes.get("position")
        return position.count if position is not None else 0

    @property
    def triangle_count(self) -> int:
        return len(self.index.values) // 3

    @classmethod
    def create(
        cls,
        attributes: dict[str, Attribute],
        index: Attribute,
        *,
        ids: IdFactory = new_uuid,
    ) -> BufferGeometry:
        """Wrap already-encoded attributes under a new identifier."""
        ordered = {name: attributes[name] for name in ATTRIBUTE_NAMES if name in attributes}
        ordered.update({k: v for k, v in attributes.items() if k not in ordered})
        return cls(uuid=ids(), attributes=ordered, index=index)
