"""Embedded story assets.

The compiled story (and optionally a saved bookmark) are read from disk once,
at app start, and kept in memory; the session is (re)initialized from these
bytes without touching the filesystem again.
"""

from pathlib import Path

DEFAULT_STORY_PATH = Path(__file__).parent.parent / "assets" / "story.json"

_story_path: Path | None = None
_bookmark_path: Path | None = None
_story_bytes: bytes | None = None
_bookmark_bytes: bytes | None = None


def init_assets(story_path: Path, bookmark_path: Path | None = None) -> None:
    global _story_path, _bookmark_path, _story_bytes, _bookmark_bytes
    _story_path = story_path
    _bookmark_path = bookmark_path
    _story_bytes = story_path.read_bytes()
    _bookmark_bytes = bookmark_path.read_bytes() if bookmark_path else None


def story_bytes() -> bytes:
    assert _story_bytes is not None, "Call init_assets() before using assets"
    return _story_bytes


def bookmark_bytes() -> bytes | None:
    """Saved bookmark to resume from, or None to start fresh."""
    return _bookmark_bytes


def asset_paths() -> dict[str, str | None]:
    return {
        "story_path": str(_story_path) if _story_path else None,
        "bookmark_path": str(_bookmark_path) if _bookmark_path else None,
    }
