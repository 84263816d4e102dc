"""Global configuration: precision, format constants, component defaults."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# Decimal places kept for positions, normals and uvs
COORDINATE_PRECISION = 3

# Three.js JSON Object format written in the document metadata
FORMAT_VERSION = 4.5
FORMAT_TYPE = "Object"
GENERATOR = "threejson"

# Row-major 4x4 identity used for every new node
IDENTITY_MATRIX: tuple[float, ...] = (
    1, 0, 0, 0,
    0, 1, 0, 0,
    0, 0, 1, 0,
    0, 0, 0, 1,
)

# Flat color forced onto a material once a mesh drives it with vertex colors
WHITE_OVERRIDE = "0xffffff"

# Host component defaults
DEFAULT_LINEWIDTH = 1.0
DEFAULT_DASH_SIZE = 3.0
DEFAULT_GAP_SIZE = 1.0

# Channel filled in when a mesh carries no vertex colors
DEFAULT_VERTEX_COLOR = 1.0


class EncoderSettings(BaseModel):
    """Per-encoder overrides of the module defaults."""

    model_config = ConfigDict(frozen=True)

    precision: int = Field(default=COORDINATE_PRECISION, ge=0, le=15)
