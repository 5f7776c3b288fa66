"""Typed records for Internet Archive item metadata.

The metadata document is loosely typed: file attributes usually arrive as
strings whatever their meaning, and any of them may be missing. Decoding is
done in two steps, first to a plain mapping of text values and then to typed
fields with per-field defaults, so a single odd value never fails the item.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple
from urllib.parse import quote

from .timeutils import ConversionError, epoch_to_datetime, parse_duration

logger = logging.getLogger(__name__)

SOURCE_ORIGINAL = "original"
SOURCE_DERIVATIVE = "derivative"

FILE_KEYS = (
    "name",
    "title",
    "track",
    "artist",
    "creator",
    "album",
    "source",
    "mtime",
    "size",
    "length",
    "sha1",
)

# Sub-delimiters left unescaped in a path segment; quote() already keeps the
# unreserved set. '/', ';', ',' and '?' are escaped.
_SEGMENT_SAFE = "$&+:=@"

_INTEGER = re.compile(r"[+-]?\d+")


def _text(value: Any, sep: str = ", ") -> str:
    """Coerce a JSON scalar (or list of scalars) to text."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, list):
        return sep.join(_text(v, sep) for v in value if v is not None)
    raise ValueError(f"unexpected value {value!r}")


def _to_int(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        return 0
    return int(text)


def _to_epoch(text: str) -> int:
    """Parse a Unix timestamp, zero when it is not a usable date."""
    seconds = _to_int(text)
    try:
        epoch_to_datetime(seconds)
    except ConversionError as e:
        logger.debug("Ignoring mtime %r: %s", text, e)
        return 0
    return seconds


def _int_field(document: Dict[str, Any], key: str) -> int:
    value = document.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key!r} is not an integer: {value!r}")
    return value


def _str_field(document: Dict[str, Any], key: str) -> str:
    value = document.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{key!r} is not a string: {value!r}")
    return value


@dataclass
class Descriptor:
    identifier: str = ""
    title: str = ""
    description: str = ""

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Descriptor":
        return cls(
            identifier=_text(raw.get("identifier")),
            title=_text(raw.get("title")),
            description=_text(raw.get("description"), sep="\n\n"),
        )


@dataclass
class FileEntry:
    """One file of an archive item."""

    name: str
    title: str = ""
    track: str = ""
    artist: str = ""
    album: str = ""
    source: str = ""
    mtime: int = 0
    size: int = 0
    length: float = 0.0
    sha1: str = ""

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> "FileEntry":
        """Build an entry from one element of the ``files`` array.

        Numbers that do not parse default to zero and an unparsable
        ``length`` leaves the duration at zero.
        """
        if not isinstance(raw, dict):
            raise ValueError(f"file entry is not an object: {raw!r}")
        values = {key: _text(raw.get(key)) for key in FILE_KEYS}

        artist = values["artist"]
        if artist == "" and values["creator"] != "":
            artist = values["creator"]

        length = 0.0
        try:
            length = parse_duration(values["length"])
        except ConversionError as e:
            if values["length"]:
                logger.debug("Ignoring length of %s: %s", values["name"], e)

        return cls(
            name=values["name"],
            title=values["title"],
            track=values["track"],
            artist=artist,
            album=values["album"],
            source=values["source"],
            mtime=_to_epoch(values["mtime"]),
            size=_to_int(values["size"]),
            length=length,
            sha1=values["sha1"],
        )

    def title_description(self) -> Tuple[str, str]:
        """Return the title and description shown for this file.

        Title falls back to the file name, description to the album and then
        the file name.
        """
        title = self.title if self.title != "" else self.name
        description = self.album if self.album != "" else self.name
        return title, description


@dataclass
class ArchiveItem:
    """An archive item as returned by the metadata service."""

    created: int = 0
    last_updated: int = 0
    files: List[FileEntry] = field(default_factory=list)
    dir: str = ""
    server: str = ""
    workable_servers: List[str] = field(default_factory=list)
    metadata: Descriptor = field(default_factory=Descriptor)

    @classmethod
    def from_dict(cls, document: Any) -> "ArchiveItem":
        """Build an item from a decoded metadata document.

        Raises ``ValueError`` when the document does not have the expected
        layout. Missing keys keep their zero values.
        """
        if not isinstance(document, dict):
            raise ValueError("metadata document is not a JSON object")

        files = document.get("files")
        if files is None:
            files = []
        if not isinstance(files, list):
            raise ValueError("'files' is not a list")

        servers = document.get("workable_servers")
        if servers is None:
            servers = []
        if not isinstance(servers, list) or not all(isinstance(s, str) for s in servers):
            raise ValueError("'workable_servers' is not a list of strings")

        metadata = document.get("metadata")
        if metadata is None:
            metadata = {}
        if not isinstance(metadata, dict):
            raise ValueError("'metadata' is not an object")

        return cls(
            created=_int_field(document, "created"),
            last_updated=_int_field(document, "item_last_updated"),
            files=[FileEntry.from_raw(raw) for raw in files],
            dir=_str_field(document, "dir"),
            server=_str_field(document, "server"),
            workable_servers=list(servers),
            metadata=Descriptor.from_dict(metadata),
        )

    def only_originals(self) -> None:
        """Keep only files uploaded by the user, dropping derivatives."""
        self.files = [f for f in self.files if f.source == SOURCE_ORIGINAL]

    def file_url(self, entry: FileEntry) -> str:
        """Return the download URL of ``entry`` on the item's serving host."""
        name = quote(entry.name, safe=_SEGMENT_SAFE)
        return f"https://{self.server}{self.dir}/{name}"
