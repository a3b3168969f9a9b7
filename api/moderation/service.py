"""
Moderation engine.

Owns the entry status state machine and the single authorization gate for
every status-mutating operation:

    pending -> approved
    pending -> rejected

`approved` and `rejected` have no outgoing transitions. Every call affects
exactly one entry and either succeeds or raises; nothing silently no-ops.
"""

from __future__ import annotations

import logging

from auth.schemas import Caller
from core import settings
from core.errors import Forbidden, InvalidTransition
from entries import service as entries_service
from entries.schemas import Entry, EntryPage, EntryStatus

logger = logging.getLogger(__name__)

TRANSITIONS: dict[EntryStatus, frozenset[EntryStatus]] = {
    EntryStatus.PENDING: frozenset({EntryStatus.APPROVED, EntryStatus.REJECTED}),
    EntryStatus.APPROVED: frozenset(),
    EntryStatus.REJECTED: frozenset(),
}


def authorize_moderator(caller: Caller) -> None:
    if caller.is_anonymous:
        logger.warning("moderation_denied reason=anonymous")
        raise Forbidden("Sign in as an administrator to moderate entries.")
    if not caller.is_admin:
        logger.warning("moderation_denied reason=not_admin user_id=%s", caller.user_id)
        raise Forbidden("Administrator role required.")


def can_transition(current: EntryStatus, target: EntryStatus) -> bool:
    return target in TRANSITIONS.get(current, frozenset())


async def transition(entry_id: str, target: EntryStatus, *, caller: Caller) -> Entry:
    """
    Move one entry to `target`.

    Raises Forbidden (caller), NotFound (id), InvalidTransition (state).
    The write is guarded by the source status, so of two racing moderators
    only one wins; the other gets InvalidTransition.
    """
    authorize_moderator(caller)

    current = await entries_service.get_entry(entry_id)
    if not can_transition(current.status, target):
        raise InvalidTransition(entry_id, current.status.value, target.value)

    updated = await entries_service.update_status(
        entry_id,
        target,
        expected_status=current.status,
    )
    if updated is None:
        latest = await entries_service.get_entry(entry_id)
        raise InvalidTransition(entry_id, latest.status.value, target.value)

    logger.info(
        "entry_status_changed id=%s from=%s to=%s by=%s",
        entry_id,
        current.status.value,
        updated.status.value,
        caller.user_id,
    )
    return updated


async def list_for_review(
    *,
    caller: Caller,
    status: EntryStatus | None = None,
    page: int = 1,
    page_size: int | None = None,
) -> EntryPage:
    """
    Admin queue: entries of any status, newest first.
    """
    authorize_moderator(caller)
    size = min(page_size or settings.default_page_size(), settings.max_page_size())
    items, total = await entries_service.list_entries(
        status=status,
        limit=size,
        offset=entries_service.page_offset(page, size),
    )
    return EntryPage(items=items, total=total)


async def get_for_review(entry_id: str, *, caller: Caller) -> Entry:
    authorize_moderator(caller)
    return await entries_service.get_entry(entry_id)
