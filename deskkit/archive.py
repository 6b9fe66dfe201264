"""Creating zip archives from directories and extracting them."""

from __future__ import annotations

import enum
import errno
import os
import shutil
import stat
import time
import zipfile
from collections.abc import Iterator
from pathlib import Path


class CompressionMethod(enum.Enum):
    """Compression used for archive members."""

    STORED = zipfile.ZIP_STORED
    DEFLATED = zipfile.ZIP_DEFLATED

    def __str__(self) -> str:
        return self.name.capitalize()


_PERMISSIONS = 0o755


def _walk(root: Path) -> Iterator[Path]:
    yield root
    for child in sorted(root.iterdir()):
        if child.is_dir() and not child.is_symlink():
            yield from _walk(child)
        else:
            yield child


def zip_dir(
    src_dir: str | os.PathLike,
    dst_file: str | os.PathLike,
    method: CompressionMethod = CompressionMethod.DEFLATED,
) -> None:
    """Write every file and directory below ``src_dir`` into ``dst_file``."""
    source = Path(src_dir)
    if not source.is_dir():
        raise FileNotFoundError(errno.ENOENT, "source directory not found", str(source))
    now = time.localtime()[:6]
    with zipfile.ZipFile(dst_file, "w") as archive:
        for path in _walk(source):
            if path == source:
                continue
            name = path.relative_to(source).as_posix()
            if path.is_file():
                info = zipfile.ZipInfo(name, date_time=now)
                info.compress_type = method.value
                info.external_attr = (stat.S_IFREG | _PERMISSIONS) << 16
                archive.writestr(info, path.read_bytes())
            else:
                info = zipfile.ZipInfo(name + "/", date_time=now)
                info.external_attr = ((stat.S_IFDIR | _PERMISSIONS) << 16) | 0x10
                archive.writestr(info, b"")


def _safe_parts(name: str) -> tuple[str, ...] | None:
    normalized = name.replace("\\", "/")
    if normalized.startswith("/") or (len(normalized) > 1 and normalized[1] == ":"):
        return None
    parts = tuple(p for p in normalized.split("/") if p not in ("", "."))
    if ".." in parts:
        return None
    return parts


def _has_toplevel(members: list[zipfile.ZipInfo]) -> bool:
    if len(members) < 2:
        return False
    toplevel = None
    for info in members:
        parts = _safe_parts(info.filename)
        if not parts:
            return False
        if toplevel is None:
            toplevel = parts[0]
        elif parts[0] != toplevel:
            return False
    return True


def extract_zip(
    source: str | os.PathLike,
    target: str | os.PathLike,
    strip_toplevel: bool = True,
) -> None:
    """Extract ``source`` into ``target``.

    With ``strip_toplevel``, a single directory enclosing every member is
    dropped from the extracted paths. Members that would land outside
    ``target`` are skipped.
    """
    destination_root = Path(target)
    with zipfile.ZipFile(source) as archive:
        members = archive.infolist()
        strip = strip_toplevel and _has_toplevel(members)
        destination_root.mkdir(parents=True, exist_ok=True)
        for info in members:
            parts = _safe_parts(info.filename)
            if parts is None:
                continue
            if strip:
                parts = parts[1:]
            if not parts:
                continue
            destination = destination_root.joinpath(*parts)
            if info.is_dir():
                destination.mkdir(parents=True, exist_ok=True)
                continue
            destination.parent.mkdir(parents=True, exist_ok=True)
            with archive.open(info) as reader, open(destination, "wb") as writer:
                shutil.copyfileobj(reader, writer)
            mode = (info.external_attr >> 16) & 0o777
            if mode:
                os.chmod(destination, mode)