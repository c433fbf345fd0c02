"""Response data model definitions."""

from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, Field


class StatusResponse(BaseModel):
    status: str = "ok"


class ResultsResponse(BaseModel):
    results: Any = None


class AckResponse(BaseModel):
    ok: bool = True


class ErrorResponse(BaseModel):
    error: str
    code: str


class ConsoleEntry(BaseModel):
    id: int
    level: str
    message: str
    timestamp: str


class ConsoleResponse(BaseModel):
    messages: List[ConsoleEntry] = Field(default_factory=list)
    overflow: bool = False
