import uuid

import pytest

from deskkit.encodings import (
    Encoding,
    base64_decode,
    base64_encode,
    default_encodings,
    main,
    sha256_hex,
    url_decode,
    url_encode,
)


def test_base64_known_value():
    assert base64_encode("hello") == "aGVsbG8="


def test_sha256_of_empty_string():
    assert sha256_hex("") == (
        "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    )


def test_sha256_shape():
    digest = sha256_hex("anything")
    assert len(digest) == 64
    assert digest == digest.lower()
    assert sha256_hex("anything") == digest


@pytest.mark.parametrize("text", ["", "a b&c=d/e?f", "grüße ✓", "~-._"])
def test_url_round_trip(text):
    assert url_decode(url_encode(text)) == text


def test_url_encode_keeps_unreserved_only():
    encoded = url_encode("a b/c")
    assert " " not in encoded and "/" not in encoded
    assert url_encode("AZaz09-_.~") == "AZaz09-_.~"


def test_url_decode_invalid_utf8_is_empty():
    assert url_decode("%ff%fe") == ""


@pytest.mark.parametrize("text", ["", "hello world", "grüße ✓"])
def test_base64_round_trip(text):
    assert base64_decode(base64_encode(text)) == text


def test_base64_decode_invalid_is_empty():
    assert base64_decode("!!!") == ""
    assert base64_decode("aGVsbG8") == ""


def test_encoding_set_original_updates_encoded():
    enc = Encoding("Base64 encoding", base64_encode, base64_decode)
    enc.set_original("hello")
    assert enc.encoded == "aGVsbG8="
    enc.set_encoded(base64_encode("world"))
    assert enc.original == "world"


def test_encoding_without_decoder_rejects_edit():
    enc = Encoding("Sha256 encoding", sha256_hex)
    enc.set_original("x")
    assert enc.encoded == sha256_hex("x")
    with pytest.raises(ValueError):
        enc.set_encoded("abc")


def test_default_encodings():
    encodings = default_encodings()
    assert [e.title for e in encodings] == [
        "URL encoding",
        "Base64 encoding",
        "Sha256 encoding",
    ]
    assert encodings[2].decode is None


def test_main_prints_guid(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out.strip()
    assert out.startswith("GUID: ")
    assert uuid.UUID(out[len("GUID: "):]).version == 4


def test_main_encode_and_decode(capsys):
    assert main(["base64", "hello"]) == 0
    assert capsys.readouterr().out.strip() == "aGVsbG8="
    assert main(["base64", "-d", "aGVsbG8="]) == 0
    assert capsys.readouterr().out.strip() == "hello"


def test_main_cannot_decode_sha256():
    with pytest.raises(SystemExit) as info:
        main(["sha256", "-d", "abc"])
    assert info.value.code == 2


def test_main_requires_text():
    with pytest.raises(SystemExit) as info:
        main(["url"])
    assert info.value.code == 2