"""Custom exception hierarchy for the patch bridge."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from fastapi import status


class ApplicationError(Exception):
    """Base application error with HTTP semantics."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "application_error"

    def __init__(self, message: str, *, status_code: int | None = None, code: str | None = None) -> None:
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        self.message = message


class MissingFieldsError(ApplicationError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "missing_fields"

    def __init__(self, fields: Sequence[str]) -> None:
        noun = "field" if len(fields) == 1 else "fields"
        super().__init__(f"missing required {noun}: {', '.join(fields)}")
        self.fields = list(fields)


class ObjectConflictError(ApplicationError):
    status_code = status.HTTP_409_CONFLICT
    code = "varname_conflict"


class HostUnavailableError(ApplicationError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "host_unavailable"


class QueryTimeoutError(ApplicationError):
    status_code = status.HTTP_504_GATEWAY_TIMEOUT
    code = "query_timeout"

    def __init__(self, request_id: str) -> None:
        super().__init__(f"Request {request_id} timed out")
        self.request_id = request_id


@dataclass
class BridgeError(Exception):
    """Protocol-level fault on the host channel; logged, never sent to HTTP callers."""

    error_code: str
    message: str
    details: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        base = f"[{self.error_code}] {self.message}"
        if self.details:
            return f"{base} :: {self.details}"
        return base


class MalformedReplyError(BridgeError):
    """Raised when a host reply is not JSON or carries no request id."""


class UnknownActionError(BridgeError):
    """Raised when the host walker receives a query action it does not serve."""


class UnknownCommandError(BridgeError):
    """Raised when the mutation relay receives a script command it does not know."""
