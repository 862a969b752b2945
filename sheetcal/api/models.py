"""
Pydantic models for the event API request/response types.

Every event field is a free-form string. Fields are optional at the schema
level so that missing or empty values reach the mapper and produce the
API's own 400 response instead of a schema error.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from sheetcal import __version__
from sheetcal.sheets.models import Event


# =============================================================================
# Event Models
# =============================================================================


class EventPayload(BaseModel):
    """Body of POST and PUT /event. ``id`` is ignored on POST."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: Optional[str] = Field(None, description="Event ID (ISO-8601 timestamp)")
    title: Optional[str] = Field(None, description="Event title")
    day: Optional[str] = Field(None, description="Day of week")
    h1: Optional[str] = Field(None, description="Start hour")
    m1: Optional[str] = Field(None, description="Start minute")
    h2: Optional[str] = Field(None, description="End hour")
    m2: Optional[str] = Field(None, description="End minute")
    category: Optional[str] = Field(None, description="Category used for colouring")

    def to_event(self) -> Event:
        return Event(**self.model_dump())


class EventResponse(BaseModel):
    """One event as stored. Absent cells are left out of the JSON."""

    id: Optional[str] = None
    title: Optional[str] = None
    day: Optional[str] = None
    h1: Optional[str] = None
    m1: Optional[str] = None
    h2: Optional[str] = None
    m2: Optional[str] = None
    category: Optional[str] = None


class MessageResponse(BaseModel):
    """Success response for mutations."""

    message: str


# =============================================================================
# Common Models
# =============================================================================


class HealthCheck(BaseModel):
    """Health check response."""

    status: str = Field(default="healthy", description="Overall system status")
    version: str = Field(default=__version__, description="API version")
    timestamp: datetime = Field(default_factory=datetime.now, description="Check timestamp")
    backend: str = Field(..., description="Grid backend in use")
    services: dict[str, str] = Field(
        default_factory=dict, description="Individual service statuses"
    )


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    code: str | None = Field(None, description="Error code")
