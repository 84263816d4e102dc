"""Tessellate IFC products into :class:`Mesh` objects with ifcopenshell.

Requires the ``ifc`` extra.  The geometry kernel is imported lazily so the
rest of the package works without it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterator

from threejson.errors import InvalidInputError
from threejson.geometry.mesh import Mesh

logger = logging.getLogger(__name__)


def is_available() -> bool:
    """Return True if ifcopenshell and its geometry module can be imported."""
    try:
        import ifcopenshell.geom  # noqa: F401
        return True
    except ImportError:
        return False


def mesh_from_shape(shape: Any) -> Mesh:
    """Convert a triangulated ifcopenshell shape into a :class:`Mesh`.

    Uses the flat ``verts``, ``faces`` and ``normals`` buffers of
    ``shape.geometry``.  Normals are dropped when their count does not match
    the vertices, so the encoder recomputes them.
    """
    geometry = getattr(shape, "geometry", None)
    if geometry is None:
        raise InvalidInputError("Shape has no triangulated geometry")

    verts = tuple(geometry.verts)
    faces = tuple(geometry.faces)
    normals = tuple(getattr(geometry, "normals", ()) or ())
    if len(normals) != len(verts):
        normals = ()
    return Mesh.from_flat(verts, faces, normals=normals)


def _settings() -> Any:
    import ifcopenshell.geom

    settings = ifcopenshell.geom.settings()
    settings.set("use-world-coords", True)
    return settings


def meshes_from_ifc(
    path: str | Path,
    ifc_class: str = "IfcProduct",
) -> Iterator[tuple[str, Mesh]]:
    """Yield ``(name, mesh)`` for every *ifc_class* instance with a body.

    The name is the element's Name, falling back to its GlobalId.  Elements
    the kernel cannot tessellate are skipped.
    """
    import ifcopenshell
    import ifcopenshell.geom

    ifc_file = ifcopenshell.open(str(path))
    settings = _settings()

    for element in ifc_file.by_type(ifc_class):
        if getattr(element, "Representation", None) is None:
            continue
        try:
            shape = ifcopenshell.geom.create_shape(settings, element)
            mesh = mesh_from_shape(shape)
        except Exception:
            logger.debug("Tessellation failed for %s", element.GlobalId, exc_info=True)
            continue
        if not mesh.vertices:
            continue
        yield element.Name or element.GlobalId, mesh
