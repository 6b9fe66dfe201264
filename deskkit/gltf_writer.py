"""Turn a tree of LDraw-style drawing commands into a glTF document.

Matrices are 16-tuples in column-major order; points are 3-tuples.
"""

from __future__ import annotations

import math
import struct
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from deskkit import gltf

Vec3 = tuple[float, float, float]
Mat4 = tuple[float, ...]

IDENTITY: Mat4 = (
    1.0, 0.0, 0.0, 0.0,
    0.0, 1.0, 0.0, 0.0,
    0.0, 0.0, 1.0, 0.0,
    0.0, 0.0, 0.0, 1.0,
)

INHERIT_COLOR = 16
BUFFER_URI = "buffer.glbuf"


def mat_mul(a: Mat4, b: Mat4) -> Mat4:
    """The product ``a @ b`` of two column-major matrices."""
    return tuple(
        sum(a[k * 4 + row] * b[col * 4 + k] for k in range(4))
        for col in range(4)
        for row in range(4)
    )


def transform_point(matrix: Mat4, point: Vec3) -> Vec3:
    """Apply an affine transform to a point."""
    x, y, z = point
    m = matrix
    return (
        m[0] * x + m[4] * y + m[8] * z + m[12],
        m[1] * x + m[5] * y + m[9] * z + m[13],
        m[2] * x + m[6] * y + m[10] * z + m[14],
    )


@dataclass(frozen=True)
class Line:
    color: int
    vertices: tuple[Vec3, Vec3]


@dataclass(frozen=True)
class OptLine:
    color: int
    vertices: tuple[Vec3, Vec3]
    control_points: tuple[Vec3, Vec3] | tuple[()] = ()


@dataclass(frozen=True)
class Triangle:
    color: int
    vertices: tuple[Vec3, Vec3, Vec3]


@dataclass(frozen=True)
class Quad:
    color: int
    vertices: tuple[Vec3, Vec3, Vec3, Vec3]


@dataclass(frozen=True)
class SubFileRef:
    """A reference to another file, placed by a position and three matrix rows."""

    color: int
    pos: Vec3
    row0: Vec3
    row1: Vec3
    row2: Vec3
    file: str

    def matrix(self) -> Mat4:
        r0, r1, r2, p = self.row0, self.row1, self.row2, self.pos
        return (
            r0[0], r1[0], r2[0], 0.0,
            r0[1], r1[1], r2[1], 0.0,
            r0[2], r1[2], r2[2], 0.0,
            p[0], p[1], p[2], 1.0,
        )


@dataclass(frozen=True)
class DrawContext:
    """Accumulated transform and color under which a command is drawn."""

    transform: Mat4 = IDENTITY
    color: int = INHERIT_COLOR


@dataclass
class SourceFile:
    """The commands of one file."""

    cmds: list[Any] = field(default_factory=list)
    filename: str = ""

    def iter(
        self, source_map: Mapping[str, SourceFile]
    ) -> Iterator[tuple[DrawContext, Any]]:
        """Yield every command with its draw context, descending into sub-files.

        References to files missing from ``source_map`` are yielded as they are.
        """
        yield from _walk(self, DrawContext(), source_map)


def _walk(
    source: SourceFile, ctx: DrawContext, source_map: Mapping[str, SourceFile]
) -> Iterator[tuple[DrawContext, Any]]:
    for cmd in source.cmds:
        if isinstance(cmd, SubFileRef):
            sub = source_map.get(cmd.file)
            if sub is not None:
                color = ctx.color if cmd.color == INHERIT_COLOR else cmd.color
                child = DrawContext(mat_mul(ctx.transform, cmd.matrix()), color)
                yield from _walk(sub, child, source_map)
                continue
        yield ctx, cmd


def _f32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


@dataclass
class GeometryCache:
    """Deduplicated vertices with line and triangle index lists."""

    vertices: list[Vec3] = field(default_factory=list)
    vertex_map: dict[Vec3, int] = field(default_factory=dict)
    line_indices: list[int] = field(default_factory=list)
    triangle_indices: list[int] = field(default_factory=list)

    def insert_vertex(self, vertex: Vec3, transform: Mat4) -> int:
        """Transform ``vertex`` and return its index, adding it if new."""
        point = tuple(_f32(c) for c in transform_point(transform, vertex))
        if any(math.isnan(c) for c in point):
            raise ValueError(f"vertex {vertex!r} transforms to NaN")
        index = self.vertex_map.get(point)
        if index is None:
            index = len(self.vertices)
            self.vertices.append(point)
            self.vertex_map[point] = index
        return index

    def _indices(self, draw_ctx: DrawContext, vertices) -> list[int]:
        return [self.insert_vertex(v, draw_ctx.transform) for v in vertices]

    def add_line(self, draw_ctx: DrawContext, vertices) -> None:
        self.line_indices.extend(self._indices(draw_ctx, vertices[:2]))

    def add_triangle(self, draw_ctx: DrawContext, vertices) -> None:
        self.triangle_indices.extend(self._indices(draw_ctx, vertices[:3]))

    def add_quad(self, draw_ctx: DrawContext, vertices) -> None:
        i0, i1, i2, i3 = self._indices(draw_ctx, vertices[:4])
        self.triangle_indices.extend((i0, i2, i1, i0, i3, i2))


def create_geometry(
    lines_enabled: bool, source_file: SourceFile, source_map: Mapping[str, SourceFile]
) -> GeometryCache:
    """Collect the geometry drawn by ``source_file`` and everything it references."""
    cache = GeometryCache()
    for draw_ctx, cmd in source_file.iter(source_map):
        if isinstance(cmd, (Line, OptLine)):
            if lines_enabled:
                cache.add_line(draw_ctx, cmd.vertices)
        elif isinstance(cmd, Triangle):
            cache.add_triangle(draw_ctx, cmd.vertices)
        elif isinstance(cmd, Quad):
            cache.add_quad(draw_ctx, cmd.vertices)
    return cache


def _add_mesh(cache: GeometryCache, doc: gltf.Gltf, buffer: bytearray) -> None:
    vertices = cache.vertices
    flat = [c for v in vertices for c in v]
    vertex_bytes = struct.pack(f"<{len(flat)}f", *flat)

    vertex_view_index = len(doc.buffer_views)
    doc.buffer_views.append(
        gltf.BufferView(
            buffer_index=0,
            byte_length=len(vertex_bytes),
            name="vertex_buffer",
            byte_offset=len(buffer),
            byte_stride=12,
            target=int(gltf.BufferTarget.ARRAY_BUFFER),
        )
    )
    buffer.extend(vertex_bytes)

    vertex_accessor = gltf.Accessor(
        component_type=gltf.ComponentType.FLOAT,
        count=len(vertices),
        attribute_type=gltf.AttributeType.VEC3,
        buffer_view_index=vertex_view_index,
        name="vertex_data",
        min=tuple(min(v[i] for v in vertices) for i in range(3)) if vertices else None,
        max=tuple(max(v[i] for v in vertices) for i in range(3)) if vertices else None,
    )

    primitives = []
    if cache.triangle_indices:
        attributes = {"POSITION": len(doc.accessors)}
        doc.accessors.append(vertex_accessor)

        indices = cache.triangle_indices
        index_bytes = struct.pack(f"<{len(indices)}I", *indices)
        index_view_index = len(doc.buffer_views)
        doc.buffer_views.append(
            gltf.BufferView(
                buffer_index=0,
                byte_length=len(index_bytes),
                name="index_buffer",
                byte_offset=len(buffer),
                target=int(gltf.BufferTarget.ELEMENT_ARRAY_BUFFER),
            )
        )
        buffer.extend(index_bytes)

        primitives.append(
            gltf.Primitive(
                attributes=attributes,
                mode=gltf.PrimitiveMode.TRIANGLES,
                indices=len(doc.accessors),
            )
        )
        doc.accessors.append(
            gltf.Accessor(
                component_type=gltf.ComponentType.UNSIGNED_INT,
                count=len(indices),
                attribute_type=gltf.AttributeType.SCALAR,
                buffer_view_index=index_view_index,
                name="index_data",
            )
        )

    doc.meshes.append(gltf.Mesh(primitives=primitives))


def _add_nodes(
    lines_enabled: bool,
    filename: str,
    source_file: SourceFile,
    transform: Mat4 | None,
    source_map: Mapping[str, SourceFile],
    doc: gltf.Gltf,
    buffer: bytearray,
    mesh_cache: dict[str, int | None],
) -> int:
    node_index = len(doc.nodes)
    node = gltf.Node(name=filename, matrix=transform)
    doc.nodes.append(node)

    if filename not in mesh_cache:
        mesh_index = len(doc.meshes)
        geometry = create_geometry(lines_enabled, source_file, source_map)
        if geometry.vertices and geometry.triangle_indices:
            _add_mesh(geometry, doc, buffer)
            mesh_cache[filename] = mesh_index
        else:
            mesh_cache[filename] = None
    node.mesh_index = mesh_cache[filename]

    for cmd in source_file.cmds:
        if isinstance(cmd, SubFileRef):
            subfile = source_map.get(cmd.file)
            if subfile is not None:
                child = _add_nodes(
                    lines_enabled,
                    cmd.file,
                    subfile,
                    cmd.matrix(),
                    source_map,
                    doc,
                    buffer,
                    mesh_cache,
                )
                node.children.append(child)
    return node_index


def write_gltf(
    lines_enabled: bool, source_file: SourceFile, source_map: Mapping[str, SourceFile]
) -> tuple[gltf.Gltf, bytes]:
    """Build a glTF document for ``source_file`` and the binary buffer it refers to.

    Each referenced file becomes a node; a file's mesh is created once and shared.
    """
    doc = gltf.Gltf(
        asset=gltf.Asset("2.0"),
        scenes=[gltf.Scene(nodes=[0])],
        scene=0,
    )
    buffer = bytearray()
    _add_nodes(lines_enabled, "root", source_file, None, source_map, doc, buffer, {})
    doc.buffers.append(gltf.Buffer(byte_length=len(buffer), uri=BUFFER_URI))
    return doc, bytes(buffer)