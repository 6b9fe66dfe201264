"""Directory listings, file metadata, sorting and recursive copies."""

from __future__ import annotations

import enum
import os
import shutil
import stat
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path


class SortingColumn(enum.Enum):
    """Column a directory listing is ordered by."""

    FILENAME = "filename"
    DATE = "date"
    SIZE = "size"


@dataclass
class TabSorting:
    """How a listing is ordered."""

    reverse: bool = False
    column: SortingColumn = SortingColumn.FILENAME


class RestrictionKind(enum.Enum):
    NONE = "none"
    FILE = "file"
    FOLDER = "folder"
    MAIN = "main"
    NOT = "not"
    AND = "and"


_ARITY = {RestrictionKind.NOT: 1, RestrictionKind.AND: 2}


@dataclass(frozen=True)
class Restriction:
    """A condition an entry must meet for an action to be offered."""

    kind: RestrictionKind
    operands: tuple[Restriction, ...] = ()

    def __post_init__(self) -> None:
        expected = _ARITY.get(self.kind, 0)
        if len(self.operands) != expected:
            raise ValueError(
                f"{self.kind.name} restriction takes {expected} operand(s), "
                f"got {len(self.operands)}"
            )

    def negate(self) -> Restriction:
        return Restriction(RestrictionKind.NOT, (self,))

    def both(self, other: Restriction) -> Restriction:
        return Restriction(RestrictionKind.AND, (self, other))


Restriction.NONE = Restriction(RestrictionKind.NONE)  # type: ignore[attr-defined]
Restriction.FILE = Restriction(RestrictionKind.FILE)  # type: ignore[attr-defined]
Restriction.FOLDER = Restriction(RestrictionKind.FOLDER)  # type: ignore[attr-defined]
Restriction.MAIN = Restriction(RestrictionKind.MAIN)  # type: ignore[attr-defined]


@dataclass
class FileEntry:
    """Metadata of one file or directory."""

    size: int
    mode: int
    created: datetime
    modified: datetime
    accessed: datetime
    path: str
    file_name: str

    def is_file(self) -> bool:
        return stat.S_ISREG(self.mode)

    def is_dir(self) -> bool:
        return stat.S_ISDIR(self.mode)

    def fulfills(self, restriction: Restriction, is_main: bool) -> bool:
        kind = restriction.kind
        if kind is RestrictionKind.NONE:
            return True
        if kind is RestrictionKind.FILE:
            return self.is_file()
        if kind is RestrictionKind.FOLDER:
            return self.is_dir()
        if kind is RestrictionKind.MAIN:
            return is_main
        if kind is RestrictionKind.NOT:
            return not self.fulfills(restriction.operands[0], is_main)
        first, second = restriction.operands
        return self.fulfills(first, is_main) and self.fulfills(second, is_main)


def _timestamp(seconds: float) -> datetime:
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def _from_stat(path: str, file_name: str, st: os.stat_result) -> FileEntry:
    created = st.st_birthtime if hasattr(st, "st_birthtime") else st.st_ctime
    return FileEntry(
        size=st.st_size,
        mode=st.st_mode,
        created=_timestamp(created),
        modified=_timestamp(st.st_mtime),
        accessed=_timestamp(st.st_atime),
        path=path,
        file_name=file_name,
    )


def get_meta(path: str) -> FileEntry:
    """Return the metadata of ``path``, following symbolic links."""
    return _from_stat(path, Path(path).name, os.stat(path))


def get_entries(path: str) -> list[FileEntry]:
    """List a directory: directories first, then files, each by name."""
    with os.scandir(path) as it:
        entries = [
            _from_stat(item.path, item.name, item.stat(follow_symlinks=False))
            for item in it
        ]
    entries.sort(key=lambda e: (e.is_file(), e.file_name))
    return entries


def sort_entries(entries: list[FileEntry], sorting: TabSorting) -> None:
    """Sort ``entries`` in place; reversing also puts files before directories."""

    def key(entry: FileEntry):
        if sorting.column is SortingColumn.FILENAME:
            value = entry.file_name
        elif sorting.column is SortingColumn.DATE:
            value = entry.modified
        else:
            value = entry.size
        return (entry.is_file(), value)

    entries.sort(key=key, reverse=sorting.reverse)


_UNITS = (
    ("TB", 1024**4),
    ("GB", 1024**3),
    ("MB", 1024**2),
    ("KB", 1024),
)


def bytes_to_human_readable(size: int) -> str:
    """Format a byte count with the largest fitting binary unit."""
    if size < 0:
        raise ValueError("size must not be negative")
    for unit, factor in _UNITS:
        if size >= factor:
            return f"{size / factor:.0f} {unit}"
    return f"{size} B"


def copy_dir(src: str | os.PathLike, dst: str | os.PathLike) -> None:
    """Copy the directory tree ``src`` into ``dst``."""
    source = Path(src)
    target = Path(dst)
    if not target.exists():
        target.mkdir(parents=True)
    for child in source.iterdir():
        destination = target / child.name
        if child.is_dir() and not child.is_symlink():
            copy_dir(child, destination)
        else:
            shutil.copy(child, destination)