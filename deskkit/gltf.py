"""A minimal glTF 2.0 document model and its JSON serialization."""

from __future__ import annotations

import dataclasses
import enum
import json
from dataclasses import dataclass, field
from typing import Any


class ComponentType(enum.IntEnum):
    """Data type of accessor components."""

    BYTE = 5120
    UNSIGNED_BYTE = 5121
    SHORT = 5122
    UNSIGNED_SHORT = 5123
    UNSIGNED_INT = 5125
    FLOAT = 5126


class AttributeType(enum.Enum):
    """Shape of one accessor element."""

    SCALAR = "SCALAR"
    VEC2 = "VEC2"
    VEC3 = "VEC3"
    VEC4 = "VEC4"
    MAT2 = "MAT2"
    MAT3 = "MAT3"
    MAT4 = "MAT4"


class PrimitiveMode(enum.IntEnum):
    """Topology of a mesh primitive."""

    POINTS = 0
    LINES = 1
    LINE_LOOP = 2
    LINE_STRIP = 3
    TRIANGLES = 4
    TRIANGLE_STRIP = 5
    TRIANGLE_FAN = 6


class BufferTarget(enum.IntEnum):
    """Intended GPU binding of a buffer view."""

    ARRAY_BUFFER = 34962
    ELEMENT_ARRAY_BUFFER = 34963


def _put(out: dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        out[key] = value


@dataclass
class Asset:
    """Metadata about the glTF document."""

    version: str
    min_version: str | None = None
    generator: str | None = None
    copyright: str | None = None

    def with_min_version(self, min_version: str) -> Asset:
        return dataclasses.replace(self, min_version=min_version)

    def with_generator(self, generator: str) -> Asset:
        return dataclasses.replace(self, generator=generator)

    def with_copyright(self, copyright: str) -> Asset:
        return dataclasses.replace(self, copyright=copyright)

    def _to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"version": self.version}
        _put(out, "minVersion", self.min_version)
        _put(out, "generator", self.generator)
        _put(out, "copyright", self.copyright)
        return out


@dataclass
class Scene:
    """A set of root nodes."""

    name: str | None = None
    nodes: list[int] = field(default_factory=list)

    def _to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "name", self.name)
        if self.nodes:
            out["nodes"] = list(self.nodes)
        return out


@dataclass
class Node:
    """A node of the scene hierarchy; ``matrix`` is column-major."""

    name: str | None = None
    children: list[int] = field(default_factory=list)
    mesh_index: int | None = None
    matrix: tuple[float, ...] | None = None

    def _to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "name", self.name)
        if self.children:
            out["children"] = list(self.children)
        _put(out, "mesh", self.mesh_index)
        if self.matrix is not None:
            out["matrix"] = list(self.matrix)
        return out


@dataclass
class Buffer:
    """A block of binary data."""

    byte_length: int
    name: str | None = None
    uri: str | None = None

    def with_uri(self, uri: str) -> Buffer:
        return dataclasses.replace(self, uri=uri)

    def _to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "name", self.name)
        out["byteLength"] = self.byte_length
        _put(out, "uri", self.uri)
        return out


@dataclass
class BufferView:
    """A slice of a buffer."""

    buffer_index: int
    byte_length: int
    name: str | None = None
    byte_offset: int = 0
    byte_stride: int | None = None
    target: int | None = None

    def _to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "name", self.name)
        out["buffer"] = self.buffer_index
        out["byteLength"] = self.byte_length
        if self.byte_offset != 0:
            out["byteOffset"] = self.byte_offset
        _put(out, "byteStride", self.byte_stride)
        _put(out, "target", None if self.target is None else int(self.target))
        return out


@dataclass
class Accessor:
    """A typed view into a buffer view."""

    component_type: ComponentType
    count: int
    attribute_type: AttributeType
    buffer_view_index: int
    name: str | None = None
    byte_offset: int = 0
    normalized: bool = False
    min: tuple[float, float, float] | None = None
    max: tuple[float, float, float] | None = None

    def _to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "name", self.name)
        out["componentType"] = int(self.component_type)
        out["count"] = self.count
        out["type"] = self.attribute_type.value
        out["bufferView"] = self.buffer_view_index
        if self.byte_offset != 0:
            out["byteOffset"] = self.byte_offset
        if self.normalized:
            out["normalized"] = True
        if self.min is not None:
            out["min"] = list(self.min)
        if self.max is not None:
            out["max"] = list(self.max)
        return out


@dataclass
class Primitive:
    """Geometry to draw: vertex attributes, an index accessor and a mode."""

    attributes: dict[str, int]
    mode: PrimitiveMode
    indices: int = 0

    def _to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"attributes": dict(self.attributes)}
        if self.indices != 0:
            out["indices"] = self.indices
        out["mode"] = int(self.mode)
        return out


@dataclass
class Mesh:
    """A set of primitives."""

    primitives: list[Primitive] = field(default_factory=list)
    name: str | None = None

    def _to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "name", self.name)
        out["primitives"] = [p._to_dict() for p in self.primitives]
        return out


@dataclass
class Gltf:
    """A whole glTF document."""

    asset: Asset
    nodes: list[Node] = field(default_factory=list)
    scenes: list[Scene] = field(default_factory=list)
    buffers: list[Buffer] = field(default_factory=list)
    buffer_views: list[BufferView] = field(default_factory=list)
    accessors: list[Accessor] = field(default_factory=list)
    meshes: list[Mesh] = field(default_factory=list)
    scene: int | None = None

    def add_scene(self, scene: Scene) -> None:
        """Append a scene; the first one added becomes the default scene."""
        self.scenes.append(scene)
        if self.scene is None:
            self.scene = 0

    def to_dict(self) -> dict[str, Any]:
        """The document as JSON-ready data, leaving out empty and default fields."""
        out: dict[str, Any] = {"asset": self.asset._to_dict()}
        for key, items in (
            ("nodes", self.nodes),
            ("scenes", self.scenes),
            ("buffers", self.buffers),
            ("bufferViews", self.buffer_views),
            ("accessors", self.accessors),
            ("meshes", self.meshes),
        ):
            if items:
                out[key] = [item._to_dict() for item in items]
        _put(out, "scene", self.scene)
        return out

    def to_json(self) -> str:
        """The document as indented JSON text."""
        return json.dumps(self.to_dict(), indent=2)