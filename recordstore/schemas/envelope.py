"""
RecordStore — Response Envelope Schemas
========================================

What:  Pydantic models for the uniform response envelope.
How:   Every response body is `{success, data?, message?, error?}`; each model
       below carries exactly the keys one kind of response uses, so no
       absent key is ever rendered as null.
Who:   Route handlers (success bodies) and global exception handlers (errors).

Examples:
    {"success": true, "data": [{"id": "record_1", "name": "Alice"}]}
    {"success": true, "data": {"id": "record_1", "name": "Alice"}}
    {"success": true, "message": "Record deleted"}
    {"success": false, "error": "Record with ID 'x' was not found"}
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class RecordListEnvelope(BaseModel):
    """Returned by GET /api/records."""
    success: bool = Field(default=True)
    data: List[Dict[str, Any]] = Field(description="Every stored record, in insertion order")


class RecordEnvelope(BaseModel):
    """Returned by POST /api/records and PUT /api/records/{id}."""
    success: bool = Field(default=True)
    data: Dict[str, Any] = Field(description="The created or updated record")


class MessageEnvelope(BaseModel):
    """Returned by the DELETE routes."""
    success: bool = Field(default=True)
    message: str = Field(description="Human-readable confirmation")


class ErrorEnvelope(BaseModel):
    """Body of every non-success response."""
    success: bool = Field(default=False)
    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """
    Returned by GET /health.

    store is "available" when the data file exists, "missing" otherwise.
    """
    status: str = Field(description="Overall service status: healthy or degraded")
    version: str = Field(description="Application version")
    store: str = Field(description="Data file state: available or missing")
    uptime_seconds: float = Field(description="Seconds since service started")
