"""Narrative session controller for compiled interactive-fiction stories.

    from storyline import SessionController

    controller = SessionController()
    controller.init(story_bytes)
    line = controller.advance("")
"""

from storyline.session import (  # noqa: F401
    InitError,
    SessionController,
    SessionError,
    UninitializedError,
)
