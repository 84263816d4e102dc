"""SceneNode — one mesh instance pointing at a geometry and a material."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from threejson.config import IDENTITY_MATRIX
from threejson.ids import IdFactory, new_uuid
from threejson.models.geometry import BufferGeometry
from threejson.models.material import Material


class SceneNode(BaseModel):
    """A ``Mesh`` object in the scene tree.

    ``geometry`` and ``material`` hold identifiers, never the objects
    themselves.
    """

    model_config = ConfigDict(frozen=True)

    uuid: str
    name: Optional[str] = None
    type: str = "Mesh"
    geometry: str
    material: str
    matrix: tuple[float, ...] = IDENTITY_MATRIX
    cast_shadow: bool = True
    receive_shadow: bool = True

    @field_validator("name")
    @classmethod
    def _drop_empty_name(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    @field_validator("matrix")
    @classmethod
    def _check_matrix(cls, value: tuple[float, ...]) -> tuple[float, ...]:
        if len(value) != 16:
            raise ValueError(f"matrix needs 16 elements, got {len(value)}")
        return value

    @classmethod
    def create(
        cls,
        geometry: BufferGeometry,
        material: Material,
        name: str = "",
        *,
        ids: IdFactory = new_uuid,
    ) -> SceneNode:
        """Create a node referencing *geometry* and *material* by uuid."""
        return cls(
            uuid=ids(),
            name=name or None,
            geometry=geometry.uuid,
            material=material.uuid,
        )
