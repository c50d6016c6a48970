import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI

from backend import assets
from backend.routes import router
from storyline import SessionController

load_dotenv(Path(__file__).parent.parent / ".env")

logger = logging.getLogger(__name__)


def create_app(story_path: Path | None = None, bookmark_path: Path | None = None) -> FastAPI:
    story = story_path or Path(os.getenv("STORY_PATH", str(assets.DEFAULT_STORY_PATH)))
    if bookmark_path is None and os.getenv("BOOKMARK_PATH"):
        bookmark_path = Path(os.environ["BOOKMARK_PATH"])
    assets.init_assets(story, bookmark_path)
    logger.info("Loaded story assets from %s", story)

    app = FastAPI(title="Storyline Terminal")
    # One session per app; the host calls /api/session/init to start it.
    app.state.controller = SessionController()
    app.include_router(router, prefix="/api")
    return app


# Default app instance for uvicorn (uses STORY_PATH / BOOKMARK_PATH env vars)
app = create_app()
