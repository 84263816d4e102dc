"""Tests for the Three.js JSON serializer."""

from __future__ import annotations

import json

import pytest

from threejson.config import FORMAT_VERSION, IDENTITY_MATRIX
from threejson.errors import InvalidInputError
from threejson.geometry.mesh import Mesh
from threejson.ids import SequentialIds
from threejson.models.material import create_dashed_line_material, create_line_material
from threejson.scene.serializer import (
    document_to_dict,
    material_to_dict,
    node_to_dict,
    serialize,
    to_dict,
)
from threejson.scene.wrapper import build_vertex_color_mesh, combine, wrap_material


def _triangle() -> Mesh:
    return Mesh(
        vertices=((0, 0, 0), (1, 0, 0), (0, 1, 0)),
        faces=((0, 1, 2),),
        colors=((255, 0, 0), (0, 255, 0), (0, 0, 255)),
    )


def _scene(ids: SequentialIds, names: tuple[str, ...] = ("a", "b")):
    material = create_line_material((255, 0, 0), ids=ids)
    wrappers = [
        build_vertex_color_mesh(_triangle(), material, name, ids=ids).wrapper
        for name in names
    ]
    return combine(wrappers, ids=ids)


# ---------------------------------------------------------------------------
# Materials
# ---------------------------------------------------------------------------


class TestMaterialToDict:
    def test_basic_material(self):
        mat = create_line_material((0x12, 0x34, 0x56), 2.0, ids=SequentialIds("m"))
        assert material_to_dict(mat) == {
            "uuid": "m-0001",
            "type": "LineBasicMaterial",
            "color": 0x123456,
            "linewidth": 2.0,
        }

    def test_dashed_material(self):
        mat = create_dashed_line_material((0, 0, 0), 1.0, 3.0, 1.0)
        data = material_to_dict(mat)
        assert data["type"] == "LineDashedMaterial"
        assert data["dashSize"] == 3.0
        assert data["gapSize"] == 1.0
        assert "vertexColors" not in data

    def test_vertex_color_material(self):
        mat = create_line_material((10, 10, 10)).for_vertex_colors()
        data = material_to_dict(mat)
        assert data["vertexColors"] == 2
        assert data["color"] == 0xFFFFFF

    def test_material_wrapper_json(self):
        mat = create_line_material((1, 2, 3))
        assert json.loads(serialize(wrap_material(mat))) == material_to_dict(mat)


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


class TestDocumentToDict:
    def test_top_level_shape(self):
        data = document_to_dict(_scene(SequentialIds("id")))

        assert set(data) == {"metadata", "geometries", "materials", "object"}
        assert data["metadata"]["version"] == FORMAT_VERSION
        assert data["object"]["type"] == "Scene"
        assert len(data["object"]["children"]) == 2
        assert len(data["materials"]) == 1
        assert len(data["geometries"]) == 2

    def test_children_reference_by_uuid(self):
        data = document_to_dict(_scene(SequentialIds("id")))
        geometry_ids = [g["uuid"] for g in data["geometries"]]
        material_ids = [m["uuid"] for m in data["materials"]]

        for child in data["object"]["children"]:
            assert isinstance(child["geometry"], str)
            assert isinstance(child["material"], str)
            assert geometry_ids.count(child["geometry"]) == 1
            assert material_ids.count(child["material"]) == 1

    def test_geometry_layout(self):
        data = document_to_dict(_scene(SequentialIds("id"), names=("a",)))
        geometry = data["geometries"][0]

        assert geometry["type"] == "BufferGeometry"
        attributes = geometry["data"]["attributes"]
        assert list(attributes) == ["position", "normal", "uv", "color"]
        assert attributes["position"] == {
            "itemSize": 3,
            "type": "Float32Array",
            "array": [0.0, 0.0, 0.0, -1.0, 0.0, 0.0, 0.0, 0.0, 1.0],
            "normalized": False,
        }
        assert attributes["color"]["array"] == [1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0]
        assert geometry["data"]["index"] == {
            "itemSize": 1,
            "type": "Uint32Array",
            "array": [0, 1, 2],
        }

    def test_node_layout(self):
        doc = _scene(SequentialIds("id"), names=("Wall",))
        child = node_to_dict(doc.children[0])

        assert list(child) == [
            "uuid", "name", "type", "geometry", "material",
            "matrix", "castShadow", "receiveShadow",
        ]
        assert child["name"] == "Wall"
        assert child["type"] == "Mesh"
        assert child["matrix"] == list(IDENTITY_MATRIX)
        assert child["castShadow"] is True
        assert child["receiveShadow"] is True

    def test_empty_name_key_absent(self):
        doc = _scene(SequentialIds("id"), names=("",))
        assert "name" not in node_to_dict(doc.children[0])


# ---------------------------------------------------------------------------
# JSON text
# ---------------------------------------------------------------------------


class TestSerialize:
    def test_deterministic_for_same_input(self):
        doc = _scene(SequentialIds("id"))
        assert serialize(doc) == serialize(doc)

    def test_reproducible_with_same_ids(self):
        first = serialize(_scene(SequentialIds("id")))
        second = serialize(_scene(SequentialIds("id")))
        assert first == second

    def test_no_negative_zero_in_output(self):
        assert "-0.0" not in serialize(_scene(SequentialIds("id")))

    def test_geometry_wrapper_serializes_as_document(self):
        ids = SequentialIds("id")
        wrapper = build_vertex_color_mesh(_triangle(), create_line_material((0, 0, 0), ids=ids), ids=ids).wrapper
        data = to_dict(wrapper)

        assert "uuid" not in data["object"]
        assert data["object"]["children"][0]["uuid"] == wrapper.node.uuid
        assert data["materials"][0]["uuid"] == wrapper.material.uuid

    def test_indent(self):
        text = serialize(_scene(SequentialIds("id")), indent=2)
        assert text.startswith("{\n  ")

    def test_unknown_object(self):
        with pytest.raises(InvalidInputError):
            serialize(object())
