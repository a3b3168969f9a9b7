"""
Auth persistence helpers (role lookup only; users live in the auth service).
"""

from __future__ import annotations

from core import db


async def get_role_by_user_id(user_id: str) -> str | None:
    row = await db.fetch_one(
        """
        SELECT role
        FROM profiles
        WHERE id::text = $1
        """,
        user_id,
    )
    if row is None:
        return None
    return str(row["role"])
