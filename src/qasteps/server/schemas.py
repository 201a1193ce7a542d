from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from ..types import LintProblem


class ParseRequest(BaseModel):
    text: str = ""
    keywords: dict[str, Any] | None = None
    workers: int | None = Field(default=None, ge=1, le=32)


class ParseResponse(BaseModel):
    actions: list[dict[str, Any]]


class LintResponse(BaseModel):
    problems: list[LintProblem]
