from datetime import datetime, timezone
from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, Field

DataType = TypeVar("DataType")


class APIResponse(BaseModel, Generic[DataType]):
    """Success envelope: ``{"message", "data"}``; the client library unwraps ``data``."""
    message: str = Field(..., description="Human-readable outcome, e.g. 'Exam submitted'.")
    data: Optional[DataType] = Field(None, description="Payload; null for acknowledgements such as logout.")


class ErrorDetail(BaseModel):
    code: str = Field(..., description="UNAUTHORIZED, FORBIDDEN, NOT_FOUND, CONFLICT, VALIDATION_ERROR, ...")
    message: str
    details: Optional[Dict[str, Any]] = Field(
        None, description="Structured context, e.g. {'required': 4, 'completed': 1} for a locked exam."
    )


class ErrorResponse(BaseModel):
    error: ErrorDetail
    timestamp: str = Field(..., description="ISO 8601, UTC")
    path: str
    request_id: Optional[str] = Field(None, description="Matches the X-Request-ID response header.")

    @classmethod
    def build(
        cls, *, code: str, message: str, path: str, request_id: Optional[str], details: Optional[Dict[str, Any]] = None
    ) -> "ErrorResponse":
        return cls(
            error=ErrorDetail(code=code, message=message, details=details),
            timestamp=datetime.now(timezone.utc).isoformat(),
            path=path,
            request_id=request_id,
        )
