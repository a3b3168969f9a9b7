"""
Moderation (admin-only) endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from auth import dependencies as auth_dependencies
from auth.schemas import Caller
from entries.schemas import Entry, EntryPage, EntryStatus, StatusUpdateRequest

from . import service

router = APIRouter()


@router.patch("/entries/{entry_id}/status", response_model=Entry)
async def update_entry_status(
    entry_id: str,
    request: StatusUpdateRequest,
    caller: Caller = Depends(auth_dependencies.get_caller_or_anonymous),
) -> Entry:
    return await service.transition(entry_id, request.status, caller=caller)


@router.get("/admin/entries", response_model=EntryPage)
async def list_entries_for_review(
    status: EntryStatus | None = Query(default=None),
    page: int = Query(1, ge=1),
    page_size: int | None = Query(default=None, alias="pageSize", ge=1),
    caller: Caller = Depends(auth_dependencies.get_caller_or_anonymous),
) -> EntryPage:
    return await service.list_for_review(
        caller=caller,
        status=status,
        page=page,
        page_size=page_size,
    )


@router.get("/admin/entries/{entry_id}", response_model=Entry)
async def get_entry_for_review(
    entry_id: str,
    caller: Caller = Depends(auth_dependencies.get_caller_or_anonymous),
) -> Entry:
    return await service.get_for_review(entry_id, caller=caller)
