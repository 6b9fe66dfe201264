import pytest

from deskkit.files import (
    Restriction,
    RestrictionKind,
    SortingColumn,
    TabSorting,
    bytes_to_human_readable,
    copy_dir,
    get_entries,
    get_meta,
    sort_entries,
)


@pytest.fixture
def listing(tmp_path):
    (tmp_path / "b_dir").mkdir()
    (tmp_path / "a_dir").mkdir()
    (tmp_path / "z.txt").write_bytes(b"z")
    (tmp_path / "a.txt").write_bytes(b"aaaa")
    return tmp_path


def test_get_entries_orders_directories_first(listing):
    names = [e.file_name for e in get_entries(str(listing))]
    assert names == ["a_dir", "b_dir", "a.txt", "z.txt"]


def test_get_entries_paths_and_sizes(listing):
    entries = {e.file_name: e for e in get_entries(str(listing))}
    assert entries["a.txt"].path == str(listing / "a.txt")
    assert entries["a.txt"].size == 4
    assert entries["a_dir"].is_dir()
    assert not entries["a_dir"].is_file()


def test_get_meta(tmp_path):
    target = tmp_path / "data.bin"
    target.write_bytes(b"12345")
    meta = get_meta(str(target))
    assert meta.file_name == "data.bin"
    assert meta.size == 5
    assert meta.is_file()
    assert meta.modified.tzinfo is not None


def test_get_meta_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        get_meta(str(tmp_path / "missing"))


def test_get_entries_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        get_entries(str(tmp_path / "missing"))


def test_sort_by_size_and_reverse(listing):
    (listing / "m.txt").write_bytes(b"mm")
    entries = get_entries(str(listing))
    sort_entries(entries, TabSorting(reverse=False, column=SortingColumn.SIZE))
    files = [e.file_name for e in entries if e.is_file()]
    assert files == ["z.txt", "m.txt", "a.txt"]
    assert entries[0].is_dir()

    sort_entries(entries, TabSorting(reverse=True, column=SortingColumn.SIZE))
    assert [e.file_name for e in entries[:3]] == ["a.txt", "m.txt", "z.txt"]
    assert entries[-1].is_dir()


def test_sort_by_name_matches_listing(listing):
    entries = get_entries(str(listing))
    expected = [e.file_name for e in entries]
    sort_entries(entries, TabSorting())
    assert [e.file_name for e in entries] == expected


@pytest.mark.parametrize(
    "size, text",
    [
        (0, "0 B"),
        (1023, "1023 B"),
        (1024, "1 KB"),
        (1024**2, "1 MB"),
        (1024**3, "1 GB"),
        (1024**4, "1 TB"),
    ],
)
def test_bytes_to_human_readable(size, text):
    assert bytes_to_human_readable(size) == text


def test_bytes_to_human_readable_negative():
    with pytest.raises(ValueError):
        bytes_to_human_readable(-1)


def test_restrictions(tmp_path):
    target = tmp_path / "f.txt"
    target.write_text("x")
    entry = get_meta(str(target))
    assert entry.fulfills(Restriction.NONE, False)
    assert entry.fulfills(Restriction.FILE, False)
    assert not entry.fulfills(Restriction.FOLDER, False)
    assert entry.fulfills(Restriction.MAIN, True)
    assert not entry.fulfills(Restriction.MAIN, False)
    assert entry.fulfills(Restriction.MAIN.negate(), False)
    assert entry.fulfills(Restriction.FILE.both(Restriction.MAIN.negate()), False)
    assert not entry.fulfills(Restriction.FILE.both(Restriction.MAIN), False)


def test_restriction_arity():
    with pytest.raises(ValueError):
        Restriction(RestrictionKind.NOT)


def test_copy_dir(tmp_path):
    src = tmp_path / "src"
    (src / "nested").mkdir(parents=True)
    (src / "top.txt").write_text("top")
    (src / "nested" / "inner.txt").write_text("inner")
    dst = tmp_path / "out" / "dst"
    copy_dir(src, dst)
    assert (dst / "top.txt").read_text() == "top"
    assert (dst / "nested" / "inner.txt").read_text() == "inner"