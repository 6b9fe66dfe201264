"""Brick part catalogues and lookup of part files in a zipped library."""

from __future__ import annotations

import io
import re
import zipfile
from csv import reader as csv_reader
from dataclasses import dataclass, field

_U32 = re.compile(r"\+?\d+")
_SEARCH_DIRS = ("ldraw/parts/", "ldraw/p/")


@dataclass
class Color:
    id: int
    name: str
    rgb: str
    is_trans: bool


@dataclass
class Part:
    number: str
    name: str
    category: int
    material: str


@dataclass
class PartCategory:
    id: int
    name: str
    parts: list[Part] = field(default_factory=list)


def _parse_u32(text: str) -> int:
    if not _U32.fullmatch(text):
        raise ValueError(f"not an unsigned integer: {text!r}")
    value = int(text)
    if value >= 2**32:
        raise ValueError(f"out of range: {text!r}")
    return value


def _records(data: str | bytes):
    if isinstance(data, bytes):
        data = data.decode("utf-8")
    rows = csv_reader(io.StringIO(data, newline=""))
    header = next(rows, None)
    if header is None:
        return
    for row in rows:
        if len(row) == len(header):
            yield dict(zip(header, row))


def load_part_categories(
    categories_csv: str | bytes, parts_csv: str | bytes
) -> list[PartCategory]:
    """Read categories and parts from CSV text and file each part under its category.

    Rows that cannot be read are skipped, as are parts of unknown categories.
    """
    categories: dict[int, PartCategory] = {}
    for record in _records(categories_csv):
        try:
            category = PartCategory(_parse_u32(record["id"]), record["name"])
        except (KeyError, ValueError):
            continue
        categories[category.id] = category

    parts: dict[str, Part] = {}
    for record in _records(parts_csv):
        try:
            part = Part(
                number=record["part_num"],
                name=record["name"],
                category=_parse_u32(record["part_cat_id"]),
                material=record["part_material"],
            )
        except (KeyError, ValueError):
            continue
        parts[part.number] = part

    for part in parts.values():
        category = categories.get(part.category)
        if category is not None:
            category.parts.append(part)
    return list(categories.values())


class ZipResolver:
    """Finds part files in a zipped library."""

    def __init__(self, data: bytes) -> None:
        self.data = data

    def resolve(self, filename: str) -> bytes:
        """Return the contents of ``filename`` from the parts or primitives folder."""
        name = str(filename).replace("\\", "/")
        with zipfile.ZipFile(io.BytesIO(self.data)) as archive:
            for directory in _SEARCH_DIRS:
                try:
                    return archive.read(directory + name)
                except KeyError:
                    continue
        raise FileNotFoundError(name)