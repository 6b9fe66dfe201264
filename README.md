# deskkit

A small collection of desktop utilities in plain Python with no third-party
dependencies:

- **File handling**: file metadata, directory listings, sorting, recursive
  copies, and creating and extracting zip archives.
- **Text encoders**: URL encoding, Base64 and SHA-256, with a command-line tool.
- **A weekly work-time log**: reads power events (the macOS `pmset` log or the
  Windows System event log) and sums up arrival, departure and lunch break per
  day.
- **A glTF writer**: turns a tree of LDraw-style drawing commands into a
  glTF 2.0 document and its binary buffer, and loads brick part catalogues
  from CSV.

## Installation

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Command-line tools

### deskkit-tool

```
deskkit-tool
```

Without arguments, prints a fresh GUID (`GUID: ...`).

```
deskkit-tool url "a b"          # a%20b
deskkit-tool base64 hello       # aGVsbG8=
deskkit-tool base64 -d aGVsbG8= # hello
deskkit-tool sha256 ""
```

The codec is one of `url`, `base64` or `sha256`; `-d`/`--decode` decodes
instead of encoding (not available for `sha256`). Invalid Base64 or
percent-encoded input that is not UTF-8 decodes to an empty line.

### deskkit-uptime

```
deskkit-uptime
deskkit-uptime --year 2024 --week 43
```

Prints an ISO week (the current one by default), Monday to Sunday, with each
day's come and leave events, the span from the first to the last event with
the time worked, and the detected lunch break. On macOS the events come from
`pmset -g log`; on Windows from `wevtutil` querying the System log. For
today the day ends at the current time. Times are shown with a fixed offset
of two hours added to UTC for the current time and for Windows events.

## Library overview

| Module | What it holds |
| --- | --- |
| `deskkit.files` | `FileEntry`, `get_meta`, `get_entries`, `sort_entries`, `bytes_to_human_readable`, `copy_dir`, `Restriction`, `RestrictionKind`, `TabSorting`, `SortingColumn` |
| `deskkit.archive` | `zip_dir`, `extract_zip`, `CompressionMethod` |
| `deskkit.encodings` | `url_encode`, `url_decode`, `base64_encode`, `base64_decode`, `sha256_hex`, `Encoding`, `default_encodings`, `main` |
| `deskkit.worklog` | `Event`, `EventType`, `DaySummary`, `format_delta`, `get_next_event`, `summarize_day`, `previous_week`, `next_week`, `week_dates`, `add_event` |
| `deskkit.pmset` | `parse_pmset_log`, `get_logs` |
| `deskkit.winevents` | `SystemEvent`, `event_type_for`, `parse_event_xml`, `collect_events`, `get_logs` |
| `deskkit.uptime` | `get_logs`, `render_week`, `main` |
| `deskkit.gltf` | glTF 2.0 document model: `Gltf`, `Asset`, `Scene`, `Node`, `Buffer`, `BufferView`, `Accessor`, `Primitive`, `Mesh` and the enums |
| `deskkit.gltf_writer` | `Line`, `OptLine`, `Triangle`, `Quad`, `SubFileRef`, `SourceFile`, `GeometryCache`, `create_geometry`, `write_gltf` |
| `deskkit.bricks` | `Color`, `Part`, `PartCategory`, `load_part_categories`, `ZipResolver` |

### Listing a directory

```python
from deskkit.files import get_entries, bytes_to_human_readable

for entry in get_entries("."):
    kind = "dir " if entry.is_dir() else "file"
    print(kind, entry.file_name, bytes_to_human_readable(entry.size))
```

Directories come first, then files, each group ordered by name.
`sort_entries(entries, TabSorting(column=SortingColumn.SIZE))` reorders a
listing by name, modification date or size.

### Zip archives

```python
from deskkit.archive import zip_dir, extract_zip, CompressionMethod

zip_dir("project", "project.zip", CompressionMethod.DEFLATED)
extract_zip("project.zip", "restored", strip_toplevel=True)
```

With `strip_toplevel`, a single directory enclosing every member is dropped
from the extracted paths. Members that would land outside the target are
skipped.

### Encoding text

```python
from deskkit.encodings import url_encode, base64_encode, sha256_hex, Encoding

url_encode("a b")       # 'a%20b'
base64_encode("hello")  # 'aGVsbG8='
sha256_hex("")          # 'e3b0c442...b855'
```

An `Encoding` keeps two linked texts: `set_original` recomputes the encoded
side and `set_encoded` the original side.

### Work-time summaries

```python
from datetime import time, timedelta
from deskkit.worklog import Event, EventType, format_delta, summarize_day

format_delta(timedelta(hours=8, minutes=15))  # '8h 15m'
format_delta(timedelta(minutes=40))           # '40m'

summary = summarize_day([
    Event(EventType.COME, time(8, 0)),
    Event(EventType.LEAVE, time(12, 0)),
    Event(EventType.COME, time(12, 30)),
    Event(EventType.LEAVE, time(17, 0)),
])
```

The break starts at the first event after 11:55 and ends at the first event
at least 25 minutes later; its length is taken off the work time.

### Writing glTF

```python
from deskkit.gltf_writer import SourceFile, Triangle, write_gltf

part = SourceFile(cmds=[Triangle(16, ((0, 0, 0), (1, 0, 0), (0, 1, 0)))])
doc, buffer = write_gltf(False, part, {})
text = doc.to_json()  # refers to its buffer as "buffer.glbuf"
```

Each referenced sub-file becomes a node carrying its placement matrix; a
file's mesh is created once and shared between nodes.

## What this package does not do

- It has no graphical interface. There are no windows, tabs, favorites,
  context menus or drag and drop; the file-handling modules provide the
  listing, sorting, copying and archive operations only.
- The glTF writer does not read LDraw text files. Callers build `SourceFile`
  objects themselves; `ZipResolver` only returns the raw bytes of a part file
  from a zipped library.
- No 3D viewer is included; the writer produces a document and a buffer for
  other software to load.