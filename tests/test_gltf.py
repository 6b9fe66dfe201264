import json

from deskkit.gltf import (
    Accessor,
    Asset,
    AttributeType,
    Buffer,
    BufferTarget,
    BufferView,
    ComponentType,
    Gltf,
    Mesh,
    Node,
    Primitive,
    PrimitiveMode,
    Scene,
)


def test_asset_builders_return_updated_copies():
    base = Asset("2.0")
    built = base.with_min_version("2.0").with_generator("gen").with_copyright("me")
    assert base.min_version is None
    assert built.generator == "gen"
    assert built._to_dict() == {
        "version": "2.0",
        "minVersion": "2.0",
        "generator": "gen",
        "copyright": "me",
    }


def test_empty_document_has_only_asset():
    assert Gltf(Asset("2.0")).to_dict() == {"asset": {"version": "2.0"}}


def test_add_scene_sets_default_once():
    doc = Gltf(Asset("2.0"))
    doc.add_scene(Scene(nodes=[0]))
    assert doc.scene == 0
    doc.add_scene(Scene(name="second"))
    assert doc.scene == 0
    assert len(doc.scenes) == 2
    assert doc.to_dict()["scenes"] == [{"nodes": [0]}, {"name": "second"}]


def test_buffer_with_uri():
    buffer = Buffer(12).with_uri("buffer.glbuf")
    assert buffer._to_dict() == {"byteLength": 12, "uri": "buffer.glbuf"}


def test_buffer_view_skips_zero_offset():
    view = BufferView(0, 24, byte_stride=12, target=BufferTarget.ARRAY_BUFFER)
    data = view._to_dict()
    assert "byteOffset" not in data
    assert data["target"] == 34962
    assert BufferView(0, 24, byte_offset=8)._to_dict()["byteOffset"] == 8


def test_accessor_serialization():
    accessor = Accessor(
        ComponentType.FLOAT,
        3,
        AttributeType.VEC3,
        1,
        min=(0.0, 0.0, 0.0),
        max=(1.0, 1.0, 1.0),
    )
    data = accessor._to_dict()
    assert data["componentType"] == 5126
    assert data["type"] == "VEC3"
    assert data["bufferView"] == 1
    assert "normalized" not in data
    assert "byteOffset" not in data
    assert data["max"] == [1.0, 1.0, 1.0]


def test_primitive_skips_zero_indices():
    zero = Primitive({"POSITION": 0}, PrimitiveMode.TRIANGLES)
    assert "indices" not in zero._to_dict()
    one = Primitive({"POSITION": 0}, PrimitiveMode.TRIANGLES, indices=1)
    assert one._to_dict() == {"attributes": {"POSITION": 0}, "indices": 1, "mode": 4}


def test_node_mesh_key_and_matrix():
    matrix = tuple(float(i) for i in range(16))
    data = Node(name="n", mesh_index=2, matrix=matrix)._to_dict()
    assert data["mesh"] == 2
    assert data["matrix"] == list(matrix)
    assert "children" not in data


def test_to_json_round_trip():
    doc = Gltf(Asset("2.0"))
    doc.nodes.append(Node(name="root"))
    doc.meshes.append(Mesh([Primitive({"POSITION": 0}, PrimitiveMode.LINES)]))
    doc.add_scene(Scene(nodes=[0]))
    assert json.loads(doc.to_json()) == doc.to_dict()
    assert "bufferViews" not in doc.to_dict()