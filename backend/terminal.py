"""Line-oriented terminal player.

Types each line of the story to the output, stopping at choices to read
player input. A typed prefix of exactly one choice is completed; a prefix
shared by several choices lists them and prompts again; anything else is
sent as-is so the story can answer with "Invalid choice." and prompt again.

Retries after an invalid choice are still matched against the last choices
shown, since the session's current line is then the InvalidChoice line.
The loop ends at the end of the story or on EOF from the input.
"""

import logging
from typing import Callable

from storyline import SessionController, matcher
from storyline.models import ChoicesLine
from storyline.render import printable_text

logger = logging.getLogger(__name__)

PROMPT = "> "

Reader = Callable[[str], str]
Writer = Callable[[str], None]


def _list_choices(texts: list[str], write: Writer) -> None:
    for text in texts:
        write(f"  - {text}")


def _read_choice(choices: ChoicesLine | None, read: Reader, write: Writer) -> str | None:
    """Read until the player types something to send. None on EOF."""
    while True:
        try:
            entry = read(PROMPT)
        except EOFError:
            return None
        if not entry:
            continue
        if matcher.is_choice(choices, entry):
            return entry
        candidates = [t for t in matcher.choice_texts(choices) if t.startswith(entry)]
        if len(candidates) == 1:
            completed = entry + matcher.autocomplete(choices, entry)
            write(f"{PROMPT}{completed}")
            return completed
        if candidates:
            _list_choices(candidates, write)
            continue
        return entry


def play(controller: SessionController, read: Reader = input, write: Writer = print) -> None:
    """Run the story in `controller` to its end. The session must be initialized."""
    # None when resuming a bookmark that already awaits a choice
    choices: ChoicesLine | None = None

    controller.advance("")
    while True:
        tag = controller.tag()
        if tag == "None":
            logger.info("Reached end of story")
            return

        line = controller.current()
        text = printable_text(line)
        if text:
            write(text)

        if tag in ("Choices", "InvalidChoice"):
            if tag == "Choices":
                choices = line
            _list_choices(matcher.choice_texts(choices), write)
            entry = _read_choice(choices, read, write)
            if entry is None:
                return
            controller.advance(entry)
        else:
            controller.advance("")
