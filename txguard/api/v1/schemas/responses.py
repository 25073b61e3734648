"""
Response schemas for v1 API endpoints.
Includes structured error handling.
"""
from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime, timezone
from txguard.core.enums import ErrorCode


class StructuredError(BaseModel):
    """Structured error returned instead of a partial report."""
    code: ErrorCode
    message: str
    source: Optional[str] = Field(None, description="Which provider/service failed")
    retryable: bool = Field(False, description="Whether client should retry")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
