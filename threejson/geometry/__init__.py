"""Native mesh input, triangulation and buffer encoding."""

from threejson.geometry.encoder import EncodeResult, GeometryEncoder, to_scene_axes
from threejson.geometry.mesh import Mesh, TriangulationResult, triangulate

__all__ = [
    "EncodeResult",
    "GeometryEncoder",
    "Mesh",
    "TriangulationResult",
    "to_scene_axes",
    "triangulate",
]
