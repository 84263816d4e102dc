"""Tests for the host-facing conversion calls."""

from __future__ import annotations

import json

import pytest

from threejson import components
from threejson.errors import InvalidInputError
from threejson.geometry.mesh import Mesh
from threejson.ids import SequentialIds
from threejson.scene.wrapper import GeometryWrapper, MaterialWrapper, SceneDocument


def _quad_mesh(bad: bool = False) -> Mesh:
    return Mesh(
        vertices=((0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)),
        faces=((0, 1, 2, 9 if bad else 3),),
        colors=((255, 255, 255),) * 4,
    )


# ---------------------------------------------------------------------------
# Materials
# ---------------------------------------------------------------------------


class TestMaterialComponents:
    def test_line_basic_material(self):
        result = components.line_basic_material((255, 0, 0), 3, ids=SequentialIds("m"))

        assert isinstance(result.wrapper, MaterialWrapper)
        assert json.loads(result.json) == {
            "uuid": "m-0001",
            "type": "LineBasicMaterial",
            "color": 0xFF0000,
            "linewidth": 3,
        }
        assert result.success

    def test_line_dashed_material(self):
        result = components.line_dashed_material("#00ff00", dash_size=5, gap_size=2)
        data = json.loads(result.json)

        assert data["type"] == "LineDashedMaterial"
        assert data["color"] == 0x00FF00
        assert (data["dashSize"], data["gapSize"]) == (5, 2)


# ---------------------------------------------------------------------------
# Meshes
# ---------------------------------------------------------------------------


class TestMeshVertexColors:
    def test_returns_json_and_wrapper(self):
        ids = SequentialIds("id")
        material = components.line_basic_material((9, 9, 9), ids=ids)
        result = components.mesh_vertex_colors(_quad_mesh(), "Panel", material.wrapper, ids=ids)

        assert isinstance(result.wrapper, GeometryWrapper)
        data = json.loads(result.json)
        child = data["object"]["children"][0]
        assert child["name"] == "Panel"
        assert child["material"] == material.wrapper.material.uuid
        assert data["materials"][0]["vertexColors"] == 2
        assert data["geometries"][0]["data"]["index"]["array"] == [0, 1, 2, 0, 2, 3]
        assert result.warnings == []

    def test_material_wrapper_not_mutated(self):
        material = components.line_basic_material((9, 9, 9))
        components.mesh_vertex_colors(_quad_mesh(), "", material.wrapper)

        assert material.wrapper.material.vertex_colors is None
        assert json.loads(material.json)["color"] == 0x090909

    def test_accepts_plain_material_and_mapping(self):
        material = components.line_basic_material((0, 0, 0)).wrapper.material
        mesh = {"vertices": [[0, 0, 0], [1, 0, 0], [0, 1, 0]], "faces": [[0, 1, 2]]}

        result = components.mesh_vertex_colors(mesh, "m", material)
        assert json.loads(result.json)["geometries"][0]["data"]["attributes"]["color"]["array"] == [1.0] * 9

    def test_failed_triangulation_still_returns_document(self):
        material = components.line_basic_material((0, 0, 0))
        result = components.mesh_vertex_colors(_quad_mesh(bad=True), "Bad", material.wrapper)

        assert not result.success
        assert len(result.warnings) == 1
        assert json.loads(result.json)["object"]["children"][0]["name"] == "Bad"
        assert result.to_dict()["warnings"][0]["code"] == "triangulation_failed"

    def test_missing_mesh(self):
        material = components.line_basic_material((0, 0, 0))
        with pytest.raises(InvalidInputError):
            components.mesh_vertex_colors(None, "x", material.wrapper)

    def test_missing_material(self):
        with pytest.raises(InvalidInputError):
            components.mesh_vertex_colors(_quad_mesh(), "x", None)

    def test_invalid_mesh_mapping(self):
        material = components.line_basic_material((0, 0, 0))
        with pytest.raises(InvalidInputError):
            components.mesh_vertex_colors({"faces": [[0, 1]]}, "x", material.wrapper)

    def test_wrong_mesh_type(self):
        material = components.line_basic_material((0, 0, 0))
        with pytest.raises(InvalidInputError):
            components.mesh_vertex_colors("not a mesh", "x", material.wrapper)


# ---------------------------------------------------------------------------
# Scenes
# ---------------------------------------------------------------------------


class TestScene:
    def test_scene_combines_and_dedups(self):
        ids = SequentialIds("id")
        material = components.line_basic_material((255, 0, 0), ids=ids)
        a = components.mesh_vertex_colors(_quad_mesh(), "a", material.wrapper, ids=ids)
        b = components.mesh_vertex_colors(_quad_mesh(), "b", material.wrapper, ids=ids)

        result = components.scene([a.wrapper, b.wrapper], ids=ids)
        data = json.loads(result.json)

        assert isinstance(result.wrapper, SceneDocument)
        assert len(data["materials"]) == 1
        assert len(data["geometries"]) == 2
        assert [c["name"] for c in data["object"]["children"]] == ["a", "b"]

    def test_material_listed_before_mesh_keeps_vertex_colors(self):
        material = components.line_basic_material((255, 0, 0))
        mesh = components.mesh_vertex_colors(_quad_mesh(), "a", material.wrapper)

        data = json.loads(components.scene([material.wrapper, mesh.wrapper]).json)

        assert len(data["materials"]) == 1
        assert data["materials"][0]["vertexColors"] == 2
        assert data["materials"][0]["color"] == 0xFFFFFF

    def test_scene_can_be_nested(self):
        material = components.line_basic_material((255, 0, 0))
        a = components.mesh_vertex_colors(_quad_mesh(), "a", material.wrapper)
        first = components.scene([a.wrapper])
        b = components.mesh_vertex_colors(_quad_mesh(), "b", material.wrapper)

        result = components.scene([first.wrapper, b.wrapper])
        assert [n.name for n in result.wrapper.children] == ["a", "b"]
