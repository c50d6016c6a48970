"""Session endpoints: init, advance, and read-only line queries."""

import json

from fastapi import APIRouter, Depends, HTTPException, Request

from backend import assets
from storyline import InitError, SessionController, UninitializedError
from storyline.engine import EngineError
from storyline.loader import LoadError, VersionMismatchError
from storyline.models import TaggedLine

from .models import AdvanceBody, AutocompleteResponse, InitBody, IsChoiceResponse, TagResponse

router = APIRouter(prefix="/session")


def get_controller(request: Request) -> SessionController:
    return request.app.state.controller


def _init_error_kind(e: InitError) -> str:
    if isinstance(e.reason, VersionMismatchError):
        return "version_mismatch"
    if isinstance(e.reason, LoadError):
        return "corrupt"
    return "engine"


def _require_init(controller: SessionController) -> None:
    if not controller.initialized:
        raise HTTPException(409, "Session not initialized")


@router.post("/init")
async def init_session(body: InitBody | None = None,
                       controller: SessionController = Depends(get_controller)):
    """(Re)start the session from the embedded story, optionally resuming a bookmark."""
    if body is not None and body.bookmark is not None:
        bookmark = json.dumps(body.bookmark).encode("utf-8")
    else:
        bookmark = assets.bookmark_bytes()
    try:
        controller.init(assets.story_bytes(), bookmark)
    except InitError as e:
        raise HTTPException(400, {"error": _init_error_kind(e), "message": str(e.reason)})
    return {"ok": True}


@router.post("/advance", response_model=TaggedLine)
async def advance(body: AdvanceBody, controller: SessionController = Depends(get_controller)):
    """Feed player input to the story and return the next tagged line."""
    try:
        controller.advance(body.input)
    except UninitializedError:
        raise HTTPException(409, "Session not initialized")
    except EngineError as e:
        raise HTTPException(500, str(e))
    return controller.tagged()


@router.get("/line", response_model=TaggedLine)
async def current_line(controller: SessionController = Depends(get_controller)):
    """The most recent line, with its tag."""
    _require_init(controller)
    return controller.tagged()


@router.get("/tag", response_model=TagResponse)
async def current_tag(controller: SessionController = Depends(get_controller)):
    """Only the tag of the most recent line."""
    _require_init(controller)
    return {"tag": controller.tag()}


@router.get("/autocomplete", response_model=AutocompleteResponse)
async def autocomplete(prefix: str = "", controller: SessionController = Depends(get_controller)):
    """Suffix completing `prefix` to the first matching choice ("" if none)."""
    _require_init(controller)
    return {"suffix": controller.autocomplete(prefix)}


@router.get("/is-choice", response_model=IsChoiceResponse)
async def is_choice(text: str, controller: SessionController = Depends(get_controller)):
    """Whether `text` exactly matches one of the current choices."""
    _require_init(controller)
    return {"valid": controller.is_choice(text)}


@router.get("/bookmark")
async def get_bookmark(controller: SessionController = Depends(get_controller)):
    """The current save-state, to be passed back to /init later."""
    _require_init(controller)
    return json.loads(controller.save())
