"""GeometryEncoder — native mesh to Three.js buffer attributes.

CAD hosts work Z-up; the Three.js scene is Y-up.  Every position and normal
goes through :func:`to_scene_axes` exactly once, here, and nowhere else::

    out_x = -round(x, 3)
    out_y =  round(z, 3)
    out_z =  round(y, 3)

Channels the mesh does not carry are filled by one fixed policy so that all
attributes stay parallel to ``position``:

* normals: computed from the faces (area-weighted, unit length);
* uvs: zero-filled;
* colors: white.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

from threejson.config import DEFAULT_VERTEX_COLOR, EncoderSettings
from threejson.errors import ConversionWarning, InvalidInputError
from threejson.geometry.mesh import Mesh, Vec3, triangulate
from threejson.ids import IdFactory, new_uuid
from threejson.models.geometry import Attribute, BufferGeometry

logger = logging.getLogger(__name__)


@dataclass
class EncodeResult:
    """An encoded geometry plus any warnings raised on the way."""

    geometry: BufferGeometry
    warnings: list[ConversionWarning] = field(default_factory=list)


def to_scene_axes(point: Sequence[float], precision: int) -> tuple[float, float, float]:
    """Map a Z-up CAD vector to the Y-up scene, rounding each component.

    Adding ``0.0`` folds ``-0.0`` into ``0.0``.
    """
    x, y, z = point
    return (
        0.0 - round(x, precision),
        round(z, precision) + 0.0,
        round(y, precision) + 0.0,
    )


def compute_vertex_normals(mesh: Mesh) -> list[Vec3]:
    """Area-weighted vertex normals in the mesh's own coordinate system."""
    sums = [[0.0, 0.0, 0.0] for _ in range(mesh.vertex_count)]
    for face in mesh.faces:
        a, b, c = face[:3]
        if max(a, b, c) >= mesh.vertex_count:
            continue
        pa, pb, pc = mesh.vertices[a], mesh.vertices[b], mesh.vertices[c]
        u = [pb[i] - pa[i] for i in range(3)]
        v = [pc[i] - pa[i] for i in range(3)]
        # Cross product length is twice the triangle area
        n = (
            u[1] * v[2] - u[2] * v[1],
            u[2] * v[0] - u[0] * v[2],
            u[0] * v[1] - u[1] * v[0],
        )
        for corner in face:
            if corner < mesh.vertex_count:
                for i in range(3):
                    sums[corner][i] += n[i]

    normals: list[Vec3] = []
    for s in sums:
        length = math.sqrt(s[0] * s[0] + s[1] * s[1] + s[2] * s[2])
        if length == 0.0:
            normals.append((0.0, 0.0, 0.0))
        else:
            normals.append((s[0] / length, s[1] / length, s[2] / length))
    return normals


def _check_length(channel: str, values: Optional[Sequence], expected: int) -> None:
    if values is not None and len(values) != expected:
        raise InvalidInputError(
            f"Mesh has {expected} vertices but {len(values)} {channel}"
        )


class GeometryEncoder:
    """Encode :class:`Mesh` objects into :class:`BufferGeometry` records.

    Parameters
    ----------
    settings:
        Precision overrides.  Defaults to :class:`EncoderSettings`.
    ids:
        Identifier factory for the produced geometries.
    """

    def __init__(
        self,
        settings: EncoderSettings | None = None,
        ids: IdFactory = new_uuid,
    ) -> None:
        self.settings = settings or EncoderSettings()
        self._ids = ids

    def encode(self, mesh: Mesh) -> EncodeResult:
        """Triangulate *mesh* if needed and encode all four attributes.

        Raises :class:`InvalidInputError` if *mesh* is ``None`` or a supplied
        channel does not match the vertex count.  Triangulation problems are
        returned as warnings.
        """
        if mesh is None:
            raise InvalidInputError("A mesh is required")

        count = mesh.vertex_count
        _check_length("normals", mesh.normals, count)
        _check_length("uvs", mesh.uvs, count)
        _check_length("colors", mesh.colors, count)

        triangulated = triangulate(mesh)
        mesh = triangulated.mesh
        precision = self.settings.precision

        normals = mesh.normals if mesh.normals is not None else compute_vertex_normals(mesh)

        position = [c for v in mesh.vertices for c in to_scene_axes(v, precision)]
        normal = [c for n in normals for c in to_scene_axes(n, precision)]

        if mesh.uvs is not None:
            uv = [round(c, precision) + 0.0 for pair in mesh.uvs for c in pair]
        else:
            uv = [0.0] * (2 * count)

        if mesh.colors is not None:
            color = [channel / 255 for rgb in mesh.colors for channel in rgb]
        else:
            color = [DEFAULT_VERTEX_COLOR] * (3 * count)

        # Winding is kept; a quad left over from a failed split keeps A, B, C
        index = [i for face in mesh.faces for i in face[:3]]

        geometry = BufferGeometry.create(
            {
                "position": Attribute.float32(tuple(position), 3),
                "normal": Attribute.float32(tuple(normal), 3),
                "uv": Attribute.float32(tuple(uv), 2),
                "color": Attribute.float32(tuple(color), 3),
            },
            Attribute.index(tuple(index)),
            ids=self._ids,
        )
        logger.debug(
            "Encoded geometry %s: %d vertices, %d faces",
            geometry.uuid, count, geometry.triangle_count,
        )
        return EncodeResult(geometry=geometry, warnings=list(triangulated.warnings))
