"""
Entry store adapter.

Wraps `entries.repository` with typed results and the error contract used by
the rest of the API: lookups that miss raise `NotFound`, store failures
surface as `StoreError` from `core.db`.
"""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from core.errors import NotFound

from . import repository, validation
from .schemas import Category, Entry, EntryStatus, NewEntry, SubmissionRequest

logger = logging.getLogger(__name__)


def _is_entry_id(value: str) -> bool:
    try:
        UUID(str(value))
    except ValueError:
        return False
    return True


def to_entry(row: dict[str, Any]) -> Entry:
    return Entry(
        id=str(row["id"]),
        title=str(row["title"]),
        description=str(row["description"]),
        website_url=str(row["website_url"]),
        redbook_url=str(row["redbook_url"]),
        creator_name=str(row["creator_name"]),
        creator_redbook_id=str(row["creator_redbook_id"]),
        category=str(row["category"]),
        tags=list(row.get("tags") or []),
        screenshot_urls=list(row.get("screenshot_urls") or []),
        status=EntryStatus(row["status"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def to_category(row: dict[str, Any]) -> Category:
    return Category(
        id=int(row["id"]),
        name=str(row["name"]),
        title=str(row.get("title") or row["name"]),
        sort=int(row.get("sort") or 0),
    )


async def create_entry(entry: NewEntry) -> Entry:
    row = await repository.create_entry(entry)
    created = to_entry(row)
    logger.info("entry_created id=%s category=%s", created.id, created.category)
    return created


async def submit(payload: SubmissionRequest) -> Entry:
    """
    Validate a raw submission and persist it as a pending entry.

    Raises `ValidationError` before anything touches the store.
    """
    entry = validation.validate_submission(payload)
    return await create_entry(entry)


async def get_entry(entry_id: str) -> Entry:
    if not _is_entry_id(entry_id):
        raise NotFound("Entry", entry_id)
    row = await repository.get_entry_by_id(entry_id)
    if row is None:
        raise NotFound("Entry", entry_id)
    return to_entry(row)


async def get_entry_by_title(title: str, *, status: EntryStatus | None) -> Entry:
    row = await repository.get_entry_by_title(title, status=status)
    if row is None:
        raise NotFound("Entry", title)
    return to_entry(row)


async def list_entries(
    *,
    status: EntryStatus | None = None,
    category: str | None = None,
    limit: int,
    offset: int,
) -> tuple[list[Entry], int]:
    rows, total = await repository.list_entries(
        status=status,
        category=category,
        limit=limit,
        offset=offset,
    )
    return [to_entry(row) for row in rows], total


async def update_status(
    entry_id: str,
    new_status: EntryStatus,
    *,
    expected_status: EntryStatus | None = None,
) -> Entry | None:
    """
    Returns None only when `expected_status` was given and the entry exists
    but is no longer in that status.
    """
    if not _is_entry_id(entry_id):
        raise NotFound("Entry", entry_id)
    row = await repository.update_status(entry_id, new_status, expected_status=expected_status)
    if row is not None:
        return to_entry(row)

    if expected_status is None or await repository.get_entry_by_id(entry_id) is None:
        raise NotFound("Entry", entry_id)
    return None


async def list_categories() -> list[Category]:
    rows = await repository.list_categories()
    return [to_category(row) for row in rows]


async def get_category(name: str) -> Category:
    row = await repository.get_category_by_name(name)
    if row is None:
        raise NotFound("Category", name)
    return to_category(row)


def page_offset(page: int, page_size: int) -> int:
    """1-indexed page number to a row offset."""
    return (max(page, 1) - 1) * page_size
