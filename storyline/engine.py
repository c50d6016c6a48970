"""Traversal engine - executes the story graph one line at a time.

The session drives an engine matching the protocol:

    def advance(self, input: str) -> Line | None: ...

and builds one through an EngineFactory, `(bookmark, story) -> Engine`. The
engine borrows both for its whole lifetime: it reads the story and mutates
the bookmark in place (position, pending choice, variables). It must not
outlive the session that owns them.

GraphEngine is the reference implementation:

    awaiting a choice  → exact match jumps to the target passage,
                         anything else returns InvalidChoiceLine
    goto               → followed silently
    choices            → returned; the bookmark waits for a choice
    cmd                → built-ins executed ("set" merges params into
                         bookmark.state), then returned
    text / dialogue    → returned
    end of passage     → None
"""

from __future__ import annotations

import logging
from typing import Callable, Protocol

from storyline.models import (
    Bookmark,
    ChoicesLine,
    CmdLine,
    GotoLine,
    InvalidChoiceLine,
    Line,
    Story,
)

logger = logging.getLogger(__name__)

MAX_JUMPS = 1000


class EngineError(RuntimeError):
    """Raised when the story graph cannot be advanced."""


class EngineInitError(EngineError):
    """Raised when an engine cannot be bound to a story + bookmark."""


class Engine(Protocol):
    def advance(self, input: str) -> Line | None: ...


EngineFactory = Callable[[Bookmark, Story], Engine]


class GraphEngine:
    """Walks a compiled Story, keeping its position in a Bookmark.

    Args:
        bookmark: Save-state to read and update. Mutated in place.
        story:    Compiled story graph. Never mutated.
    """

    def __init__(self, bookmark: Bookmark, story: Story) -> None:
        if bookmark.passage not in story.passages:
            raise EngineInitError(f"Bookmark passage {bookmark.passage!r} not in story")
        passage = story.passages[bookmark.passage]
        # position == len(passage) is a valid end-of-passage bookmark
        if not 0 <= bookmark.position <= len(passage):
            raise EngineInitError(
                f"Bookmark position {bookmark.position} outside passage "
                f"{bookmark.passage!r} ({len(passage)} lines)"
            )
        if bookmark.awaiting_choice and (
            bookmark.position == len(passage)
            or not isinstance(passage[bookmark.position], ChoicesLine)
        ):
            raise EngineInitError(
                f"Bookmark awaits a choice but {bookmark.passage}[{bookmark.position}] is not one"
            )
        self._bookmark = bookmark
        self._story = story

    def _jump(self, passage: str) -> None:
        if passage not in self._story.passages:
            raise EngineError(f"Passage {passage!r} not in story")
        self._bookmark.passage = passage
        self._bookmark.position = 0

    def _choose(self, choices: ChoicesLine, input: str) -> bool:
        for choice in choices.choices:
            if choice.text == input:
                logger.debug("choice %r → %s", input, choice.passage)
                self._jump(choice.passage)
                self._bookmark.awaiting_choice = False
                return True
        return False

    def _run(self, line: CmdLine) -> None:
        for cmd in line.cmds:
            if cmd.name == "set":
                self._bookmark.state.update(cmd.params)

    def _peek(self):
        passage = self._story.passages[self._bookmark.passage]
        if self._bookmark.position >= len(passage):
            return None
        return passage[self._bookmark.position]

    def advance(self, input: str) -> Line | None:
        bm = self._bookmark

        if bm.awaiting_choice and not self._choose(self._peek(), input):
            return InvalidChoiceLine()

        for _ in range(MAX_JUMPS):
            line = self._peek()
            if line is None:
                return None
            if isinstance(line, GotoLine):
                self._jump(line.passage)
                continue
            if isinstance(line, ChoicesLine):
                bm.awaiting_choice = True
            else:
                if isinstance(line, CmdLine):
                    self._run(line)
                bm.position += 1
            # hosts get their own copy; the story stays untouched
            return line.model_copy(deep=True)

        raise EngineError(f"More than {MAX_JUMPS} consecutive jumps from {bm.passage!r}")
