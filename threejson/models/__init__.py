"""Typed records for the scene graph: materials, geometries, nodes."""

from threejson.models.geometry import Attribute, BufferGeometry, ElementType
from threejson.models.material import (
    RGB,
    Material,
    MaterialType,
    VertexColorMode,
    create_dashed_line_material,
    create_line_material,
)
from threejson.models.node import SceneNode

__all__ = [
    "Attribute",
    "BufferGeometry",
    "ElementType",
    "Material",
    "MaterialType",
    "RGB",
    "SceneNode",
    "VertexColorMode",
    "create_dashed_line_material",
    "create_line_material",
]
