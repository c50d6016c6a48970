"""Tests for storyline.render.printable_text."""

from storyline.models import (
    Choice,
    ChoicesLine,
    CmdLine,
    Command,
    DialogueLine,
    InvalidChoiceLine,
    TextLine,
)
from storyline.render import CHOICE_PROMPT, INVALID_CHOICE, printable_text


def test_text_trailing_whitespace_trimmed():
    assert printable_text(TextLine(text="Rain falls.\n")) == "Rain falls."


def test_dialogue_speaker_prefix():
    assert printable_text(DialogueLine(lines={"Marta": "Sit."})) == "Marta: Sit."


def test_dialogue_multiple_speakers_in_order():
    line = DialogueLine(lines={"Marta": "Sit.", "Olaf": "Or don't."})
    assert printable_text(line) == "Marta: Sit.\nOlaf: Or don't."


def test_choices_prompt():
    line = ChoicesLine(choices=[Choice(text="go", passage="p2")])
    assert printable_text(line) == CHOICE_PROMPT


def test_invalid_choice_message():
    assert printable_text(InvalidChoiceLine()) == INVALID_CHOICE


def test_silent_lines():
    assert printable_text(CmdLine(cmds=[Command(name="set")])) == ""
    assert printable_text(None) == ""
