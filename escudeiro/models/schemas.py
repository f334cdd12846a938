"""
Pydantic Models and Schemas
===========================

Data models for page content, directory listings and API responses.
"""

from typing import Optional, List, Dict, Any
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


# Page Models
class ClickBinding(BaseModel):
    """A click listener attached to an element once the document has loaded."""

    model_config = ConfigDict(frozen=True)

    target_id: str = Field(..., description="Identifier of the bind target")
    alert_message: str = Field(..., description="Message shown by the alert")


class SquirePage(BaseModel):
    """Content of the Squire's Page that varies at render time."""

    model_config = ConfigDict(frozen=True)

    description: str = Field(..., description="Paragraph inserted at render time")
    button_label: str = Field(default="Learn More", description="Label of the bind target")
    binding: ClickBinding
    stylesheets: List[str] = Field(default_factory=list, description="External stylesheet URLs")
    scripts: List[str] = Field(default_factory=list, description="External script URLs")


# Directory Listing Models
class DirectoryEntry(BaseModel):
    """A single row of a directory listing."""

    name: str
    is_dir: bool
    href: str = Field(..., description="Link target for the entry")
    new_tab: bool = Field(default=False, description="Open the link in a new tab")


class DirectoryListing(BaseModel):
    """Contents of one directory inside the web root."""

    current_path: str = Field(default="", description="Path relative to the web root")
    entries: List[DirectoryEntry] = Field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.current_path == ""


# Response Models
class HealthStatus(BaseModel):
    """Health check response model."""

    status: str = Field(..., description="Overall health status")
    version: str = Field(..., description="Application version")
    web_root: Optional[str] = Field(None, description="Directory being served")
    proxy_enabled: bool = Field(..., description="Whether /api/ requests are proxied")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str = Field(..., description="Error message")
    error_code: Optional[str] = Field(None, description="Error code")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), description="Error timestamp"
    )
    request_id: Optional[str] = Field(None, description="Request identifier for tracking")
