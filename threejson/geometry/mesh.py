"""Native mesh input and quad-to-triangle conversion.

A :class:`Mesh` is the CAD-side description of a surface: Z-up vertices,
faces as index triples or quads, and optional per-vertex normals, texture
coordinates and 8-bit colors.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from threejson.errors import ConversionWarning, InvalidInputError

logger = logging.getLogger(__name__)

Vec3 = tuple[float, float, float]
Vec2 = tuple[float, float]
Face = tuple[int, ...]

TRIANGULATION_FAILED = "triangulation_failed"


class Mesh(BaseModel):
    """Vertex/face mesh as produced by a CAD kernel."""

    model_config = ConfigDict(frozen=True)

    vertices: tuple[Vec3, ...] = ()
    faces: tuple[Face, ...] = ()
    normals: Optional[tuple[Vec3, ...]] = None
    uvs: Optional[tuple[Vec2, ...]] = None
    colors: Optional[tuple[tuple[int, int, int], ...]] = None

    @field_validator("faces")
    @classmethod
    def _check_faces(cls, value):
        for face in value:
            if len(face) not in (3, 4):
                raise ValueError(f"Faces need 3 or 4 corners, got {face}")
            if any(i < 0 for i in face):
                raise ValueError(f"Negative vertex index in face {face}")
        return value

    @field_validator("colors")
    @classmethod
    def _check_colors(cls, value):
        if value is None:
            return value
        for rgb in value:
            if any(c < 0 or c > 255 for c in rgb):
                raise ValueError(f"Vertex color channel out of range: {rgb}")
        return value

    @model_validator(mode="after")
    def _check_triangle_indices(self) -> Mesh:
        # Quads are checked by triangulate() so that a failed split is reported
        count = len(self.vertices)
        for face in self.faces:
            if len(face) == 3 and max(face) >= count:
                raise InvalidInputError(
                    f"Face {face} references a vertex beyond the {count} in the mesh"
                )
        return self

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def has_quads(self) -> bool:
        return any(len(f) != 3 for f in self.faces)

    @classmethod
    def from_flat(
        cls,
        verts: Sequence[float],
        faces: Sequence[int],
        normals: Sequence[float] | None = None,
        uvs: Sequence[float] | None = None,
    ) -> Mesh:
        """Build a triangle mesh from flat ``[x0, y0, z0, x1, ...]`` buffers."""
        try:
            return cls(
                vertices=_chunk(verts, 3),
                faces=_chunk(faces, 3),
                normals=_chunk(normals, 3) if normals is not None and len(normals) else None,
                uvs=_chunk(uvs, 2) if uvs is not None and len(uvs) else None,
            )
        except ValidationError as exc:
            raise InvalidInputError(str(exc)) from exc


def _chunk(values: Sequence, size: int) -> tuple[tuple, ...]:
    if len(values) % size != 0:
        raise InvalidInputError(f"Flat buffer of {len(values)} values is not a multiple of {size}")
    return tuple(tuple(values[i:i + size]) for i in range(0, len(values), size))


@dataclass
class TriangulationResult:
    """Outcome of :func:`triangulate`; ``mesh`` is always usable."""

    mesh: Mesh
    warnings: list[ConversionWarning] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.warnings


def _distance(a: Vec3, b: Vec3) -> float:
    return math.sqrt(sum((p - q) ** 2 for p, q in zip(a, b)))


def _split_quad(face: Face, vertices: Sequence[Vec3]) -> list[Face]:
    """Split a quad along its shorter diagonal, preserving winding."""
    a, b, c, d = face
    if _distance(vertices[a], vertices[c]) <= _distance(vertices[b], vertices[d]):
        return [(a, b, c), (a, c, d)]
    return [(a, b, d), (b, c, d)]


def triangulate(mesh: Mesh) -> TriangulationResult:
    """Convert every quad face of *mesh* to two triangles.

    Quads that cannot be split (a corner index outside the vertex list) are
    kept unchanged and reported in a single warning.  This function never raises.
    """
    if not mesh.has_quads:
        return TriangulationResult(mesh=mesh)

    count = mesh.vertex_count
    faces: list[Face] = []
    failed = 0
    for face in mesh.faces:
        if len(face) == 3:
            faces.append(face)
        elif all(i < count for i in face):
            faces.extend(_split_quad(face, mesh.vertices))
        else:
            faces.append(face)
            failed += 1

    result = TriangulationResult(mesh=mesh.model_copy(update={"faces": tuple(faces)}))
    if failed:
        message = (
            f"Error triangulating quad meshes ({failed} face(s) left as-is). "
            "Try triangulating quads before converting."
        )
        logger.warning(message)
        result.warnings.append(ConversionWarning(code=TRIANGULATION_FAILED, message=message))
    return result
