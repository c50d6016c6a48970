"""Core domain models.

A compiled story is a graph of named passages; each passage is an ordered
list of story lines. The traversal engine walks that graph and hands back one
`Line` per step. Hosts that cannot inspect the union directly branch on the
`LineTag` returned by `tag_of()` / carried by `TaggedLine`.

Pydantic is used for validation and serialisation at every data boundary.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

SCHEMA_VERSION = 1

LineTag = Literal[
    "Text",
    "Dialogue",
    "Choices",
    "Cmd",
    "InvalidChoice",
    "None",
]


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Lines
# ---------------------------------------------------------------------------

class TextLine(_FrozenModel):
    """Narration with no speaker."""

    type: Literal["text"] = "text"
    text: str


class DialogueLine(_FrozenModel):
    """Speaker name → utterance. Usually a single entry; order is kept for display."""

    type: Literal["dialogue"] = "dialogue"
    lines: dict[str, str]


class Choice(_FrozenModel):
    text: str
    passage: str  # target passage name


class ChoicesLine(_FrozenModel):
    """Branch point. Choice order is authoring order."""

    type: Literal["choices"] = "choices"
    choices: tuple[Choice, ...]


class Command(_FrozenModel):
    name: str
    params: dict[str, Any] = Field(default_factory=dict)


class CmdLine(_FrozenModel):
    """Commands already executed by the engine, surfaced for observability."""

    type: Literal["cmd"] = "cmd"
    cmds: tuple[Command, ...] = Field(min_length=1)


class InvalidChoiceLine(_FrozenModel):
    """The previous input did not match any available choice."""

    type: Literal["invalid_choice"] = "invalid_choice"


class GotoLine(_FrozenModel):
    """Unconditional jump. Only appears inside a compiled story."""

    type: Literal["goto"] = "goto"
    passage: str


Line = Annotated[
    Union[TextLine, DialogueLine, ChoicesLine, CmdLine, InvalidChoiceLine],
    Field(discriminator="type"),
]

StoryLine = Annotated[
    Union[TextLine, DialogueLine, ChoicesLine, CmdLine, GotoLine],
    Field(discriminator="type"),
]

Passage = tuple[StoryLine, ...]


# ---------------------------------------------------------------------------
# Assets
# ---------------------------------------------------------------------------

class Story(_FrozenModel):
    """Compiled passage graph. Read-only for the lifetime of a session."""

    version: int
    start: str
    passages: dict[str, Passage]


class Bookmark(BaseModel):
    """Mutable narrative position + variable bindings (the save-state)."""

    version: int = SCHEMA_VERSION
    passage: str
    position: int = 0
    awaiting_choice: bool = False
    state: dict[str, Any] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Tagging
# ---------------------------------------------------------------------------

_TAGS: dict[str, LineTag] = {
    "text": "Text",
    "dialogue": "Dialogue",
    "choices": "Choices",
    "cmd": "Cmd",
    "invalid_choice": "InvalidChoice",
}


def tag_of(line: Line | None) -> LineTag:
    """Return the discriminant for a line; `"None"` for end of story."""
    if line is None:
        return "None"
    return _TAGS[line.type]


class TaggedLine(BaseModel):
    """A line paired with its tag, for hosts across a serialisation boundary."""

    tag: LineTag
    line: Line | None = None


def tag_line(line: Line | None) -> TaggedLine:
    return TaggedLine(tag=tag_of(line), line=line)
