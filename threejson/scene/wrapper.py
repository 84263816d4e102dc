"""Wrappers and scene assembly with identity-based deduplication.

A wrapper bundles a node with the exact geometry and material objects it
references, so meshes produced by separate conversions can later be merged
into one document without re-parsing JSON::

    doc = combine([wall_wrapper, slab_wrapper, line_material_wrapper])

:func:`combine` keeps the first object seen for each uuid and ignores later
ones, except that a vertex-colored copy of a material replaces the plain
material it was made from.  Two materials with equal fields but different uuids stay distinct.
Nodes are never deduplicated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, model_validator

from threejson.errors import ConversionWarning, InvalidInputError
from threejson.geometry.encoder import GeometryEncoder
from threejson.geometry.mesh import Mesh
from threejson.ids import IdFactory, new_uuid
from threejson.models.geometry import BufferGeometry
from threejson.models.material import Material, VertexColorMode
from threejson.models.node import SceneNode

logger = logging.getLogger(__name__)


class MaterialWrapper(BaseModel):
    """A material on its own, ready to be referenced by meshes."""

    model_config = ConfigDict(frozen=True)

    material: Material


class GeometryWrapper(BaseModel):
    """One mesh node together with the geometry and material it points at."""

    model_config = ConfigDict(frozen=True)

    geometry: BufferGeometry
    node: SceneNode
    material: Material

    @model_validator(mode="after")
    def _check_references(self) -> GeometryWrapper:
        if self.node.geometry != self.geometry.uuid:
            raise ValueError(
                f"Node {self.node.uuid} references geometry {self.node.geometry}, "
                f"not {self.geometry.uuid}"
            )
        if self.node.material != self.material.uuid:
            raise ValueError(
                f"Node {self.node.uuid} references material {self.node.material}, "
                f"not {self.material.uuid}"
            )
        return self


class SceneDocument(BaseModel):
    """The assembled scene: every collection in first-seen order.

    ``uuid`` is left unset when a lone mesh wrapper is laid out as a document.
    """

    model_config = ConfigDict(frozen=True)

    uuid: Optional[str] = None
    materials: tuple[Material, ...] = ()
    geometries: tuple[BufferGeometry, ...] = ()
    children: tuple[SceneNode, ...] = ()


Wrapper = Union[MaterialWrapper, GeometryWrapper, SceneDocument]


def wrap(node: SceneNode, geometry: BufferGeometry, material: Material) -> GeometryWrapper:
    """Bundle *node* with the objects it references."""
    if node is None or geometry is None or material is None:
        raise InvalidInputError("wrap() needs a node, a geometry and a material")
    try:
        return GeometryWrapper(geometry=geometry, node=node, material=material)
    except ValueError as exc:
        raise InvalidInputError(str(exc)) from exc


def wrap_material(material: Material) -> MaterialWrapper:
    if material is None:
        raise InvalidInputError("A material is required")
    return MaterialWrapper(material=material)


@dataclass
class MeshWrapResult:
    """A wrapped vertex-colored mesh plus conversion warnings."""

    wrapper: GeometryWrapper
    warnings: list[ConversionWarning] = field(default_factory=list)


def build_vertex_color_mesh(
    mesh: Mesh,
    material: Material | MaterialWrapper,
    name: str = "",
    *,
    encoder: GeometryEncoder | None = None,
    ids: IdFactory = new_uuid,
) -> MeshWrapResult:
    """Encode *mesh* and wrap it as a node colored per vertex.

    The node references a copy of *material* switched to vertex colors with a
    white base (see :meth:`Material.for_vertex_colors`).  The copy keeps the
    uuid, and the caller's material is left untouched.
    """
    if mesh is None:
        raise InvalidInputError("A mesh is required")
    if isinstance(material, MaterialWrapper):
        material = material.material
    if not isinstance(material, Material):
        raise InvalidInputError("A material is required")

    encoder = encoder or GeometryEncoder(ids=ids)
    encoded = encoder.encode(mesh)
    colored = material.for_vertex_colors()
    node = SceneNode.create(encoded.geometry, colored, name, ids=ids)
    return MeshWrapResult(
        wrapper=wrap(node, encoded.geometry, colored),
        warnings=encoded.warnings,
    )


_T = TypeVar("_T", Material, BufferGeometry)


def _is_vertex_colored(item: object) -> bool:
    return isinstance(item, Material) and item.vertex_colors == VertexColorMode.VERTEX_COLORS


def _insert(collection: dict[str, _T], item: _T, kind: str) -> None:
    """Add *item* unless its uuid is already present (first one wins).

    A plain material and its vertex-colored copy resolve to the copy, in the
    plain one's position, whatever order they arrive in.
    """
    existing = collection.get(item.uuid)
    if existing is None:
        collection[item.uuid] = item
        return
    if existing is item or existing == item:
        logger.debug("Skipping repeated %s %s", kind, item.uuid)
        return
    if _is_vertex_colored(item) and not _is_vertex_colored(existing):
        collection[item.uuid] = item
        logger.debug("Using vertex-colored %s %s", kind, item.uuid)
        return
    if _is_vertex_colored(existing) and not _is_vertex_colored(item):
        logger.debug("Keeping vertex-colored %s %s", kind, item.uuid)
        return
    logger.warning(
        "Conflicting %s definitions share uuid %s; keeping the first",
        kind, item.uuid,
    )


def combine(wrappers: Iterable[Wrapper], *, ids: IdFactory = new_uuid) -> SceneDocument:
    """Merge wrappers, in order, into one :class:`SceneDocument`.

    Geometries and materials are deduplicated by uuid; every
    :class:`GeometryWrapper` contributes exactly one child node.  Nested
    documents are flattened in place.
    """
    if wrappers is None:
        raise InvalidInputError("combine() needs a sequence of wrappers")

    materials: dict[str, Material] = {}
    geometries: dict[str, BufferGeometry] = {}
    children: list[SceneNode] = []

    for item in wrappers:
        if isinstance(item, GeometryWrapper):
            _insert(geometries, item.geometry, "geometry")
            _insert(materials, item.material, "material")
            children.append(item.node)
        elif isinstance(item, MaterialWrapper):
            _insert(materials, item.material, "material")
        elif isinstance(item, SceneDocument):
            for geometry in item.geometries:
                _insert(geometries, geometry, "geometry")
            for material in item.materials:
                _insert(materials, material, "material")
            children.extend(item.children)
        else:
            raise InvalidInputError(f"Cannot combine object of type {type(item).__name__}")

    document = SceneDocument(
        uuid=ids(),
        materials=tuple(materials.values()),
        geometries=tuple(geometries.values()),
        children=tuple(children),
    )
    logger.info(
        "Combined scene %s: %d nodes, %d geometries, %d materials",
        document.uuid, len(document.children),
        len(document.geometries), len(document.materials),
    )
    return document
