"""Choice matching over the current line.

Both operations only look at a ChoicesLine; for any other line (or None)
they answer "no choices available" rather than failing. Matching is
case-sensitive and prefix-by-codepoint, with first-match-in-authoring-order
semantics.
"""

from __future__ import annotations

from storyline.models import ChoicesLine, Line


def choice_texts(line: Line | None) -> list[str]:
    if not isinstance(line, ChoicesLine):
        return []
    return [choice.text for choice in line.choices]


def autocomplete(line: Line | None, prefix: str) -> str:
    """Return the rest of the first choice starting with `prefix`.

    A choice equal to `prefix` is skipped, so a complete choice yields ""
    unless a longer choice after it shares the prefix.

    "yes" over ["yes", "yes please", "no"] → " please"
    """
    for text in choice_texts(line):
        if text.startswith(prefix) and text != prefix:
            return text[len(prefix):]
    return ""


def is_choice(line: Line | None, text: str) -> bool:
    """True iff `text` exactly equals one of the current choices."""
    return text in choice_texts(line)
