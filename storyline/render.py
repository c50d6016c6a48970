"""Plain-text rendering of lines for terminal hosts."""

from __future__ import annotations

from storyline.models import ChoicesLine, DialogueLine, InvalidChoiceLine, Line, TextLine

CHOICE_PROMPT = "Make a choice:"
INVALID_CHOICE = "Invalid choice."


def printable_text(line: Line | None) -> str:
    """Text to show for a line. Commands and end of story print nothing."""
    if isinstance(line, TextLine):
        return line.text.rstrip()
    if isinstance(line, DialogueLine):
        return "\n".join(f"{speaker}: {text.rstrip()}" for speaker, text in line.lines.items())
    if isinstance(line, ChoicesLine):
        return CHOICE_PROMPT
    if isinstance(line, InvalidChoiceLine):
        return INVALID_CHOICE
    return ""
