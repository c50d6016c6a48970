"""Pydantic request/response models for API endpoints."""

from typing import Any

from pydantic import BaseModel

from storyline.models import LineTag


class InitBody(BaseModel):
    bookmark: dict[str, Any] | None = None  # saved bookmark to resume from


class AdvanceBody(BaseModel):
    input: str = ""


class TagResponse(BaseModel):
    tag: LineTag


class AutocompleteResponse(BaseModel):
    suffix: str


class IsChoiceResponse(BaseModel):
    valid: bool
