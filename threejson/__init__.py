"""threejson — CAD meshes and line materials to Three.js scene JSON."""

__version__ = "1.0.0"

from threejson.components import (
    ConversionResult,
    line_basic_material,
    line_dashed_material,
    mesh_vertex_colors,
    scene,
)
from threejson.config import EncoderSettings
from threejson.errors import ConversionWarning, InvalidInputError, ThreeJsonError
from threejson.geometry.encoder import EncodeResult, GeometryEncoder
from threejson.geometry.mesh import Mesh, triangulate
from threejson.ids import SequentialIds, new_uuid
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
from threejson.scene.serializer import serialize
from threejson.scene.wrapper import (
    GeometryWrapper,
    MaterialWrapper,
    SceneDocument,
    build_vertex_color_mesh,
    combine,
    wrap,
    wrap_material,
)

__all__ = [
    "__version__",
    # Component layer
    "ConversionResult",
    "line_basic_material",
    "line_dashed_material",
    "mesh_vertex_colors",
    "scene",
    # Models
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
    # Geometry
    "EncodeResult",
    "EncoderSettings",
    "GeometryEncoder",
    "Mesh",
    "triangulate",
    # Scene
    "GeometryWrapper",
    "MaterialWrapper",
    "SceneDocument",
    "build_vertex_color_mesh",
    "combine",
    "serialize",
    "wrap",
    "wrap_material",
    # Support
    "ConversionWarning",
    "InvalidInputError",
    "SequentialIds",
    "ThreeJsonError",
    "new_uuid",
]
