"""
Voxbone Python SDK - Request results

Every request resolves to an :class:`ApiResult` instead of raising, so
callers can tell a successful response, an error response from the API and
a network failure apart by ``kind`` rather than by guessing at body shape.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ResultKind(str, Enum):
    """How a request ended."""
    OK = "ok"
    HTTP_ERROR = "http_error"
    NETWORK_ERROR = "network_error"


@dataclass(frozen=True)
class ApiResult:
    """
    Outcome of a single API request.

    Attributes:
        kind: How the request ended
        data: Parsed JSON body (raw text if the body was not JSON, None when
            no response was received)
        status_code: HTTP status code, None for network errors
        error: Description of the failure, None on success
    """
    kind: ResultKind
    data: Any = None
    status_code: Optional[int] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, data: Any, status_code: int = 200) -> "ApiResult":
        return cls(kind=ResultKind.OK, data=data, status_code=status_code)

    @classmethod
    def http_error(cls, data: Any, status_code: int, error: Optional[str] = None) -> "ApiResult":
        return cls(
            kind=ResultKind.HTTP_ERROR,
            data=data,
            status_code=status_code,
            error=error or f"HTTP {status_code}",
        )

    @classmethod
    def network_error(cls, error: str) -> "ApiResult":
        return cls(kind=ResultKind.NETWORK_ERROR, error=error)

    @property
    def ok(self) -> bool:
        return self.kind is ResultKind.OK

    @property
    def failed(self) -> bool:
        return not self.ok

    @property
    def status(self) -> Optional[str]:
        """The body's ``status`` field, when the body is a mapping."""
        if isinstance(self.data, dict):
            return self.data.get("status")
        return None

    @property
    def payload(self) -> Any:
        """The response body, or a FAIL record when no body was received."""
        if self.data is None and self.failed:
            return {"status": "FAIL", "message": self.error}
        return self.data

    def get(self, key: str, default: Any = None) -> Any:
        """Read a top-level field of a mapping body."""
        if isinstance(self.data, dict):
            return self.data.get(key, default)
        return default

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "data": self.data,
            "status_code": self.status_code,
            "error": self.error,
        }
