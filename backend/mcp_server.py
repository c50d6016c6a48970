"""FastMCP server exposing the story session as MCP tools.

Tools:
  - init_session()       - (re)start the session from the embedded story
  - advance(input)       - step the story, returns {"tag", "line"}
  - current_tag()        - tag of the most recent line
  - autocomplete(prefix) - suffix completing prefix to the first choice
  - is_choice(text)      - exact choice check

The controller is a module-level SessionController replaced via
set_controller() for tests. Assets come from STORY_PATH / BOOKMARK_PATH when
run as __main__.

Usage:
    python -m backend.mcp_server
"""

from mcp.server.fastmcp import FastMCP

from backend import assets
from storyline import SessionController

mcp = FastMCP("storyline-session")

_controller = SessionController()


def set_controller(controller: SessionController) -> None:
    """Replace the active controller (used in tests)."""
    global _controller
    _controller = controller


def get_controller() -> SessionController:
    return _controller


@mcp.tool()
def init_session() -> dict:
    """Start (or restart) the story session from the embedded assets."""
    _controller.init(assets.story_bytes(), assets.bookmark_bytes())
    return {"ok": True}


@mcp.tool()
def advance(input: str = "") -> dict:
    """Advance the story with the player's input and return the tagged line."""
    _controller.advance(input)
    return _controller.tagged().model_dump()


@mcp.tool()
def current_tag() -> str:
    """Return the tag of the most recent line (Text, Dialogue, Choices, ...)."""
    return _controller.tag()


@mcp.tool()
def autocomplete(prefix: str) -> str:
    """Return the text completing `prefix` to the first matching choice."""
    return _controller.autocomplete(prefix)


@mcp.tool()
def is_choice(text: str) -> bool:
    """Check whether `text` is exactly one of the current choices."""
    return _controller.is_choice(text)


if __name__ == "__main__":
    import os
    from pathlib import Path

    bookmark = os.getenv("BOOKMARK_PATH")
    assets.init_assets(
        Path(os.getenv("STORY_PATH", str(assets.DEFAULT_STORY_PATH))),
        Path(bookmark) if bookmark else None,
    )
    mcp.run()
