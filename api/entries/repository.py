"""
Entry and category persistence (raw SQL).

This is the only module that knows the `entries` / `categories` tables.
Rows are returned as dicts; "no row" is None.
"""

from __future__ import annotations

import asyncio
from typing import Any

from core import db
from core.errors import StoreError

from .schemas import EntryStatus, NewEntry

ENTRY_COLUMNS = """
    id, title, description, website_url, redbook_url, creator_name,
    creator_redbook_id, category, tags, screenshot_urls, status,
    created_at, updated_at
"""


async def create_entry(entry: NewEntry) -> dict[str, Any]:
    # Status is written as a literal: submissions always start pending.
    row = await db.fetch_one(
        f"""
        INSERT INTO entries (
          title, description, website_url, redbook_url, creator_name,
          creator_redbook_id, category, tags, screenshot_urls, status
        )
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, 'pending')
        RETURNING {ENTRY_COLUMNS}
        """,
        entry.title,
        entry.description,
        entry.website_url,
        entry.redbook_url,
        entry.creator_name,
        entry.creator_redbook_id,
        entry.category.value,
        list(entry.tags),
        list(entry.screenshot_urls),
    )
    if row is None:
        raise StoreError("Failed to create entry.")
    return row


async def get_entry_by_id(entry_id: str) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        SELECT {ENTRY_COLUMNS}
        FROM entries
        WHERE id = $1::uuid
        """,
        entry_id,
    )


async def get_entry_by_title(title: str, *, status: EntryStatus | None) -> dict[str, Any] | None:
    """
    Exact, case-sensitive title match. Duplicate titles resolve to the newest row.
    """
    return await db.fetch_one(
        f"""
        SELECT {ENTRY_COLUMNS}
        FROM entries
        WHERE title = $1
          AND ($2::text IS NULL OR status = $2)
        ORDER BY created_at DESC, id DESC
        LIMIT 1
        """,
        title,
        status.value if status is not None else None,
    )


async def list_entries(
    *,
    status: EntryStatus | None = None,
    category: str | None = None,
    limit: int,
    offset: int,
) -> tuple[list[dict[str, Any]], int]:
    """
    Return one page of entries plus the total matching the filter.

    The total ignores limit/offset so callers can compute page counts.
    """
    status_arg = status.value if status is not None else None
    rows, count_row = await asyncio.gather(
        db.fetch_all(
            f"""
            SELECT {ENTRY_COLUMNS}
            FROM entries
            WHERE ($1::text IS NULL OR status = $1)
              AND ($2::text IS NULL OR category = $2)
            ORDER BY created_at DESC, id DESC
            LIMIT $3
            OFFSET $4
            """,
            status_arg,
            category,
            limit,
            offset,
        ),
        db.fetch_one(
            """
            SELECT count(*) AS total
            FROM entries
            WHERE ($1::text IS NULL OR status = $1)
              AND ($2::text IS NULL OR category = $2)
            """,
            status_arg,
            category,
        ),
        return_exceptions=True,
    )
    # Both queries run to completion; the first failure is raised.
    for result in (rows, count_row):
        if isinstance(result, BaseException):
            raise result
    total = int(count_row["total"]) if count_row is not None else 0
    return rows, total


async def update_status(
    entry_id: str,
    new_status: EntryStatus,
    *,
    expected_status: EntryStatus | None = None,
) -> dict[str, Any] | None:
    """
    Set status and updated_at in one statement.

    With `expected_status`, the row is only touched if it is still in that
    status; None then means "missing or already moved".
    """
    return await db.fetch_one(
        f"""
        UPDATE entries
        SET status = $2,
            updated_at = now()
        WHERE id = $1::uuid
          AND ($3::text IS NULL OR status = $3)
        RETURNING {ENTRY_COLUMNS}
        """,
        entry_id,
        new_status.value,
        expected_status.value if expected_status is not None else None,
    )


async def list_categories() -> list[dict[str, Any]]:
    return await db.fetch_all(
        """
        SELECT id, name, title, sort
        FROM categories
        WHERE deleted = false
        ORDER BY sort ASC, id ASC
        """
    )


async def get_category_by_name(name: str) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT id, name, title, sort
        FROM categories
        WHERE name = $1
          AND deleted = false
        """,
        name,
    )
