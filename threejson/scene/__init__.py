"""Scene assembly: wrappers, deduplicating combine, JSON serialization."""

from threejson.scene.serializer import document_to_dict, serialize, to_dict
from threejson.scene.wrapper import (
    GeometryWrapper,
    MaterialWrapper,
    MeshWrapResult,
    SceneDocument,
    build_vertex_color_mesh,
    combine,
    wrap,
    wrap_material,
)

__all__ = [
    "GeometryWrapper",
    "MaterialWrapper",
    "MeshWrapResult",
    "SceneDocument",
    "build_vertex_color_mesh",
    "combine",
    "document_to_dict",
    "serialize",
    "to_dict",
    "wrap",
    "wrap_material",
]
