"""
Entry and category schemas.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EntryStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class EntryCategory(str, Enum):
    WEB = "web"
    APP = "app"
    TOOL = "tool"
    OTHER = "other"


class SubmissionRequest(BaseModel):
    """
    Raw submission payload.

    Fields are deliberately loose (optional, untyped strings) so the
    submission validator can report every problem at once instead of
    failing on the first missing key. Any `status` sent by the client is
    accepted here and ignored downstream.
    """

    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    description: str | None = None
    website_url: str | None = None
    redbook_url: str | None = None
    creator_name: str | None = None
    creator_redbook_id: str | None = None
    category: str | None = None
    tags: list[str] | str | None = None
    screenshot_urls: list[str] | None = None
    status: str | None = None


@dataclass(frozen=True)
class NewEntry:
    """Validated, normalized submission ready to be persisted."""

    title: str
    description: str
    website_url: str
    redbook_url: str
    creator_name: str
    creator_redbook_id: str
    category: EntryCategory
    tags: list[str] = field(default_factory=list)
    screenshot_urls: list[str] = field(default_factory=list)
    status: EntryStatus = EntryStatus.PENDING


class Entry(BaseModel):
    id: str
    title: str
    description: str
    website_url: str
    redbook_url: str
    creator_name: str
    creator_redbook_id: str
    category: str
    tags: list[str]
    screenshot_urls: list[str]
    status: EntryStatus
    created_at: datetime
    updated_at: datetime


class Category(BaseModel):
    id: int
    name: str
    title: str
    sort: int


class EntryPage(BaseModel):
    items: list[Entry]
    total: int


class SubmissionCreatedResponse(BaseModel):
    id: str


class StatusUpdateRequest(BaseModel):
    status: EntryStatus = Field(..., description="Target status.")
