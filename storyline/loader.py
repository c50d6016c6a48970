"""Asset loader: compiled story + bookmark bytes → in-memory models.

Both assets are UTF-8 JSON documents carrying a top-level integer `version`.
A gzip-compressed buffer is accepted as the binary form of the same document.

    story     {"version": 1, "start": "start", "passages": {"start": [...]}}
    bookmark  {"version": 1, "passage": "start", "position": 0,
               "awaiting_choice": false, "state": {}}

Checks run in order: decompress → JSON decode → object → version → schema.
Anything that fails before the version check, or fails schema validation,
is a CorruptAssetError; a well-formed but different version is a
VersionMismatchError.
"""

from __future__ import annotations

import gzip
import json
import logging
import zlib
from typing import Any, Literal

from pydantic import ValidationError

from storyline.models import SCHEMA_VERSION, Bookmark, Story

logger = logging.getLogger(__name__)

AssetKind = Literal["story", "bookmark"]

_GZIP_MAGIC = b"\x1f\x8b"


class LoadError(Exception):
    """Raised when an asset buffer cannot be turned into a model."""

    def __init__(self, asset: AssetKind, message: str) -> None:
        super().__init__(f"{asset}: {message}")
        self.asset = asset


class CorruptAssetError(LoadError):
    """The bytes do not decode to a well-formed asset."""


class VersionMismatchError(LoadError):
    """The asset was written for a different schema version."""

    def __init__(self, asset: AssetKind, found: int, expected: int = SCHEMA_VERSION) -> None:
        super().__init__(asset, f"schema version {found}, expected {expected}")
        self.found = found
        self.expected = expected


def _decode(asset: AssetKind, data: bytes) -> dict[str, Any]:
    """Decompress and JSON-decode a buffer, then check its version."""
    raw = bytes(data)
    if raw.startswith(_GZIP_MAGIC):
        try:
            raw = gzip.decompress(raw)
        except (OSError, EOFError, zlib.error) as e:
            raise CorruptAssetError(asset, f"bad gzip stream ({e})") from e

    try:
        doc = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CorruptAssetError(asset, f"not valid JSON ({e})") from e

    if not isinstance(doc, dict):
        raise CorruptAssetError(asset, "top level must be an object")

    version = doc.get("version")
    # bool is an int subclass; reject it explicitly
    if not isinstance(version, int) or isinstance(version, bool):
        raise CorruptAssetError(asset, "missing or invalid schema version")
    if version != SCHEMA_VERSION:
        raise VersionMismatchError(asset, version)
    return doc


def load_story(data: bytes) -> Story:
    doc = _decode("story", data)
    try:
        story = Story.model_validate(doc)
    except ValidationError as e:
        raise CorruptAssetError("story", f"schema violation ({e.error_count()} errors)") from e
    if story.start not in story.passages:
        raise CorruptAssetError("story", f"start passage {story.start!r} not found")
    return story


def load_bookmark(data: bytes) -> Bookmark:
    doc = _decode("bookmark", data)
    try:
        return Bookmark.model_validate(doc)
    except ValidationError as e:
        raise CorruptAssetError("bookmark", f"schema violation ({e.error_count()} errors)") from e


def load(story_bytes: bytes, bookmark_bytes: bytes) -> tuple[Story, Bookmark]:
    """Decode both assets. Raises LoadError (or a subclass) on failure."""
    story = load_story(story_bytes)
    bookmark = load_bookmark(bookmark_bytes)
    logger.debug(
        "loaded story passages=%d bookmark passage=%s position=%d",
        len(story.passages), bookmark.passage, bookmark.position,
    )
    return story, bookmark


def new_bookmark(story: Story) -> Bookmark:
    """Fresh bookmark at the start of the story."""
    return Bookmark(passage=story.start)


def dump_bookmark(bookmark: Bookmark) -> bytes:
    """Serialise a bookmark to the opaque blob accepted by load_bookmark()."""
    return bookmark.model_dump_json(indent=2).encode("utf-8")
