"""Host-facing conversion calls.

Each call mirrors one CAD component: it takes plain inputs and returns the
JSON text for display or export together with the in-memory object a later
call can consume.

Usage::

    from threejson import components

    red = components.line_basic_material((255, 0, 0), linewidth=2)
    wall = components.mesh_vertex_colors(wall_mesh, "Wall", red.wrapper)
    slab = components.mesh_vertex_colors(slab_mesh, "Slab", red.wrapper)
    scene = components.scene([wall.wrapper, slab.wrapper])
    Path("scene.json").write_text(scene.json)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Union

from pydantic import ValidationError

from threejson.config import DEFAULT_DASH_SIZE, DEFAULT_GAP_SIZE, DEFAULT_LINEWIDTH
from threejson.errors import ConversionWarning, InvalidInputError
from threejson.geometry.encoder import GeometryEncoder
from threejson.geometry.mesh import Mesh
from threejson.ids import IdFactory, new_uuid
from threejson.models.material import (
    ColorLike,
    Material,
    create_dashed_line_material,
    create_line_material,
)
from threejson.scene.serializer import serialize
from threejson.scene.wrapper import (
    MaterialWrapper,
    SceneDocument,
    Wrapper,
    build_vertex_color_mesh,
    combine,
    wrap_material,
)

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """JSON text, the object to chain into later calls, and any warnings."""

    json: str
    wrapper: Any
    warnings: list[ConversionWarning] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """False when the conversion completed with warnings."""
        return not self.warnings

    def to_dict(self) -> dict[str, Any]:
        return {
            "json": self.json,
            "warnings": [w.model_dump() for w in self.warnings],
        }


def line_basic_material(
    color: ColorLike,
    linewidth: float = DEFAULT_LINEWIDTH,
    *,
    ids: IdFactory = new_uuid,
) -> ConversionResult:
    """Build a ``LineBasicMaterial`` and its wrapper."""
    material = create_line_material(color, linewidth, ids=ids)
    wrapper = wrap_material(material)
    return ConversionResult(json=serialize(wrapper), wrapper=wrapper)


def line_dashed_material(
    color: ColorLike,
    linewidth: float = DEFAULT_LINEWIDTH,
    dash_size: float = DEFAULT_DASH_SIZE,
    gap_size: float = DEFAULT_GAP_SIZE,
    *,
    ids: IdFactory = new_uuid,
) -> ConversionResult:
    """Build a ``LineDashedMaterial`` and its wrapper."""
    material = create_dashed_line_material(color, linewidth, dash_size, gap_size, ids=ids)
    wrapper = wrap_material(material)
    return ConversionResult(json=serialize(wrapper), wrapper=wrapper)


def _as_mesh(mesh: Union[Mesh, Mapping[str, Any], None]) -> Mesh:
    if mesh is None:
        raise InvalidInputError("A mesh is required")
    if isinstance(mesh, Mesh):
        return mesh
    if isinstance(mesh, Mapping):
        try:
            return Mesh(**mesh)
        except ValidationError as exc:
            raise InvalidInputError(str(exc)) from exc
    raise InvalidInputError(f"Expected a Mesh, got {type(mesh).__name__}")


def mesh_vertex_colors(
    mesh: Union[Mesh, Mapping[str, Any]],
    name: str = "",
    material: Union[Material, MaterialWrapper, None] = None,
    *,
    encoder: GeometryEncoder | None = None,
    ids: IdFactory = new_uuid,
) -> ConversionResult:
    """Convert a vertex-colored mesh into a node wrapper and its JSON document.

    Quads are triangulated first.  If that fails for some faces the result
    still carries the JSON and wrapper, plus a warning in ``warnings``.
    """
    if material is None:
        raise InvalidInputError("A material is required")
    result = build_vertex_color_mesh(
        _as_mesh(mesh), material, name or "", encoder=encoder, ids=ids,
    )
    if result.warnings:
        logger.info("Mesh %r converted with %d warning(s)", name, len(result.warnings))
    return ConversionResult(
        json=serialize(result.wrapper),
        wrapper=result.wrapper,
        warnings=result.warnings,
    )


def scene(
    wrappers: Iterable[Wrapper],
    *,
    indent: int | None = None,
    ids: IdFactory = new_uuid,
) -> ConversionResult:
    """Combine wrappers into one document; ``wrapper`` is the document."""
    document: SceneDocument = combine(wrappers, ids=ids)
    return ConversionResult(json=serialize(document, indent=indent), wrapper=document)
