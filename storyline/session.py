"""Session controller - the single narrative session a host talks to.

States:

    Uninitialized ──init──▶ Ready(current_line=None) ──advance──▶ Ready(line) ─┐
                              ▲                                        ▲        │
                              └──────────────init (reset)──────────────┴advance┘

Reaching the end of a branch just yields a None line; the session stays
advance-able. Calling anything but init()/reset() before a successful init()
raises UninitializedError, which is never confused with a None line.

The Session aggregate owns the story, the bookmark and the engine bound to
them. Nothing outside it holds a reference to the bookmark or engine; hosts
only see lines (frozen) and the serialised bookmark from save().
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from storyline import loader, matcher
from storyline.engine import Engine, EngineFactory, EngineInitError, GraphEngine
from storyline.models import Bookmark, Line, LineTag, Story, TaggedLine, tag_line, tag_of

logger = logging.getLogger(__name__)


class SessionError(RuntimeError):
    """Base for session lifecycle errors."""


class UninitializedError(SessionError):
    """An operation was called before a successful init()."""

    def __init__(self) -> None:
        super().__init__("Session not initialized - call init() first")


class InitError(SessionError):
    """init() failed. `reason` is the underlying LoadError or EngineInitError."""

    def __init__(self, reason: loader.LoadError | EngineInitError) -> None:
        super().__init__(f"Cannot initialize session: {reason}")
        self.reason = reason


@dataclass
class Session:
    story: Story
    bookmark: Bookmark
    engine: Engine
    current_line: Line | None = None


class SessionController:
    """Holds at most one Session and exposes the host operations.

    Args:
        engine_factory: Builds the traversal engine for a bookmark + story.
                        Defaults to GraphEngine.
    """

    def __init__(self, engine_factory: EngineFactory = GraphEngine) -> None:
        self._engine_factory = engine_factory
        self._session: Session | None = None

    @property
    def initialized(self) -> bool:
        return self._session is not None

    def _require(self) -> Session:
        if self._session is None:
            raise UninitializedError()
        return self._session

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def init(self, story_bytes: bytes, bookmark_bytes: bytes | None = None) -> None:
        """Build a fresh session, replacing any existing one.

        With no bookmark the session starts at the story's start passage.
        On failure the previous session (if any) is kept.
        """
        try:
            if bookmark_bytes is None:
                story = loader.load_story(story_bytes)
                bookmark = loader.new_bookmark(story)
            else:
                story, bookmark = loader.load(story_bytes, bookmark_bytes)
            engine = self._engine_factory(bookmark, story)
        except (loader.LoadError, EngineInitError) as e:
            logger.warning("Session init failed: %s", e)
            raise InitError(e) from e

        replaced = self._session is not None
        self._session = Session(story=story, bookmark=bookmark, engine=engine)
        logger.info(
            "Initialized story (passage=%s, replaced=%s)", bookmark.passage, replaced,
        )

    def reset(self) -> None:
        self._session = None

    # ------------------------------------------------------------------
    # Advance
    # ------------------------------------------------------------------

    def advance(self, input: str) -> Line | None:
        """Feed input to the engine and make the result the current line.

        EngineError propagates; the current line is then left unchanged.
        """
        session = self._require()
        line = session.engine.advance(input)
        session.current_line = line
        logger.debug("advance input=%r → %s", input, tag_of(line))
        if tag_of(line) == "InvalidChoice":
            logger.warning("Invalid choice %r at passage %s", input, session.bookmark.passage)
        return line

    # ------------------------------------------------------------------
    # Read-only queries
    # ------------------------------------------------------------------

    def current(self) -> Line | None:
        return self._require().current_line

    def tag(self) -> LineTag:
        return tag_of(self.current())

    def tagged(self) -> TaggedLine:
        return tag_line(self.current())

    def autocomplete(self, prefix: str) -> str:
        return matcher.autocomplete(self.current(), prefix)

    def is_choice(self, text: str) -> bool:
        return matcher.is_choice(self.current(), text)

    def choices(self) -> list[str]:
        return matcher.choice_texts(self.current())

    def save(self) -> bytes:
        """The bookmark as an opaque blob, accepted by a later init()."""
        return loader.dump_bookmark(self._require().bookmark)
