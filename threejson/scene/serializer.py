"""Serializer — Three.js JSON Object format from the in-memory scene."""

from __future__ import annotations

import json
from typing import Any, Union

from threejson.config import FORMAT_TYPE, FORMAT_VERSION, GENERATOR, IDENTITY_MATRIX
from threejson.errors import InvalidInputError
from threejson.models.geometry import Attribute, BufferGeometry
from threejson.models.material import Material
from threejson.models.node import SceneNode
from threejson.scene.wrapper import (
    GeometryWrapper,
    MaterialWrapper,
    SceneDocument,
)

Serializable = Union[Material, MaterialWrapper, GeometryWrapper, SceneDocument]


def material_to_dict(material: Material) -> dict[str, Any]:
    data: dict[str, Any] = {
        "uuid": material.uuid,
        "type": material.type.value,
        "color": material.effective_color,
        "linewidth": material.linewidth,
    }
    if material.dash_size is not None:
        data["dashSize"] = material.dash_size
    if material.gap_size is not None:
        data["gapSize"] = material.gap_size
    if material.vertex_colors is not None:
        data["vertexColors"] = int(material.vertex_colors)
    return data


def attribute_to_dict(attribute: Attribute) -> dict[str, Any]:
    return {
        "itemSize": attribute.item_size,
        "type": attribute.element_type.value,
        "array": list(attribute.values),
        "normalized": attribute.normalized,
    }


def index_to_dict(index: Attribute) -> dict[str, Any]:
    return {
        "itemSize": 1,
        "type": index.element_type.value,
        "array": list(index.values),
    }


def geometry_to_dict(geometry: BufferGeometry) -> dict[str, Any]:
    return {
        "uuid": geometry.uuid,
        "type": "BufferGeometry",
        "data": {
            "attributes": {
                name: attribute_to_dict(attr) for name, attr in geometry.attributes.items()
            },
            "index": index_to_dict(geometry.index),
        },
    }


def node_to_dict(node: SceneNode) -> dict[str, Any]:
    data: dict[str, Any] = {"uuid": node.uuid}
    # Consumers must never see an empty-string name
    if node.name:
        data["name"] = node.name
    data.update({
        "type": node.type,
        "geometry": node.geometry,
        "material": node.material,
        "matrix": list(node.matrix),
        "castShadow": node.cast_shadow,
        "receiveShadow": node.receive_shadow,
    })
    return data


def document_to_dict(document: SceneDocument) -> dict[str, Any]:
    """Lay out *document* as a Three.js ``ObjectLoader`` payload.

    Collections keep the document's order; references stay uuid strings.
    """
    scene: dict[str, Any] = {}
    if document.uuid is not None:
        scene["uuid"] = document.uuid
    scene.update({
        "type": "Scene",
        "matrix": list(IDENTITY_MATRIX),
        "children": [node_to_dict(n) for n in document.children],
    })
    return {
        "metadata": {
            "version": FORMAT_VERSION,
            "type": FORMAT_TYPE,
            "generator": GENERATOR,
        },
        "geometries": [geometry_to_dict(g) for g in document.geometries],
        "materials": [material_to_dict(m) for m in document.materials],
        "object": scene,
    }


def to_dict(obj: Serializable) -> dict[str, Any]:
    """Return the JSON-ready dict for any serializable object.

    Materials serialize on their own; a single mesh wrapper is laid out as a
    one-node document so it loads directly in Three.js.
    """
    if isinstance(obj, Material):
        return material_to_dict(obj)
    if isinstance(obj, MaterialWrapper):
        return material_to_dict(obj.material)
    if isinstance(obj, GeometryWrapper):
        return document_to_dict(SceneDocument(
            materials=(obj.material,),
            geometries=(obj.geometry,),
            children=(obj.node,),
        ))
    if isinstance(obj, SceneDocument):
        return document_to_dict(obj)
    raise InvalidInputError(f"Cannot serialize object of type {type(obj).__name__}")


def serialize(obj: Serializable, *, indent: int | None = None) -> str:
    """Serialize *obj* to JSON text."""
    return json.dumps(to_dict(obj), indent=indent)
