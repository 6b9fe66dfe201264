"""Text encoders: URL, Base64 and SHA-256, plus a small command-line tool."""

from __future__ import annotations

import argparse
import base64
import binascii
import hashlib
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from urllib.parse import quote, unquote_to_bytes

Codec = Callable[[str], str]


def url_encode(text: str) -> str:
    """Percent-encode everything except unreserved characters."""
    return quote(text, safe="")


def url_decode(text: str) -> str:
    """Percent-decode ``text``; an empty string if the result is not UTF-8."""
    try:
        return unquote_to_bytes(text).decode("utf-8")
    except UnicodeDecodeError:
        return ""


def base64_encode(text: str) -> str:
    """Standard Base64 with padding of the UTF-8 bytes of ``text``."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def base64_decode(text: str) -> str:
    """Decode standard Base64; an empty string if invalid or not UTF-8."""
    try:
        return base64.b64decode(text, validate=True).decode("utf-8")
    except (binascii.Error, ValueError):
        return ""


def sha256_hex(text: str) -> str:
    """Lower-case hexadecimal SHA-256 digest of the UTF-8 bytes of ``text``."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


@dataclass
class Encoding:
    """A pair of linked texts: editing one side recomputes the other."""

    title: str
    encode: Codec
    decode: Codec | None = None
    original: str = ""
    encoded: str = ""

    def set_original(self, text: str) -> None:
        if text != self.original:
            self.original = text
            self.encoded = self.encode(text)

    def set_encoded(self, text: str) -> None:
        if self.decode is None:
            raise ValueError(f"{self.title} cannot be decoded")
        if text != self.encoded:
            self.encoded = text
            self.original = self.decode(text)


def default_encodings() -> list[Encoding]:
    """The encodings offered by the tool, in display order."""
    return [
        Encoding("URL encoding", url_encode, url_decode),
        Encoding("Base64 encoding", base64_encode, base64_decode),
        Encoding("Sha256 encoding", sha256_hex, None),
    ]


_CODECS: dict[str, tuple[Codec, Codec | None]] = {
    "url": (url_encode, url_decode),
    "base64": (base64_encode, base64_decode),
    "sha256": (sha256_hex, None),
}


def main(argv: list[str] | None = None) -> int:
    """Print a fresh GUID, or encode or decode text with a chosen codec."""
    parser = argparse.ArgumentParser(
        prog="deskkit-tool",
        description="Without arguments, print a new GUID.",
    )
    parser.add_argument("codec", nargs="?", choices=sorted(_CODECS))
    parser.add_argument("text", nargs="?")
    parser.add_argument("-d", "--decode", action="store_true", help="decode instead")
    args = parser.parse_args(argv)

    if args.codec is None:
        print(f"GUID: {uuid.uuid4()}")
        return 0
    if args.text is None:
        parser.error("text is required")
    encode, decode = _CODECS[args.codec]
    if args.decode:
        if decode is None:
            parser.error(f"{args.codec} cannot be decoded")
        print(decode(args.text))
    else:
        print(encode(args.text))
    return 0