"""
Public directory endpoints.
"""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Query

from entries.schemas import Category

from . import schemas, service

router = APIRouter()


@router.get("/entries", response_model=schemas.DirectoryPage)
async def list_entries(
    status: Literal["approved"] = Query(default="approved"),
    category: str | None = Query(default=None, max_length=100),
    page: int = Query(1, ge=1),
    page_size: int | None = Query(default=None, alias="pageSize", ge=1),
) -> schemas.DirectoryPage:
    """
    Approved entries only. `status` is accepted for API symmetry but can
    only be `approved` here; the admin queue lives under /admin/entries.
    """
    return await service.list_approved(page=page, page_size=page_size, category=category)


@router.get("/entries/by-title/{title:path}", response_model=schemas.DirectoryItem)
async def get_entry_by_title(title: str) -> schemas.DirectoryItem:
    return await service.get_approved_by_title(title)


@router.get("/categories", response_model=list[Category])
async def list_categories() -> list[Category]:
    return await service.list_categories_for_nav()


@router.get("/categories/{name}", response_model=schemas.CategoryListing)
async def get_category_listing(
    name: str,
    page: int = Query(1, ge=1),
    page_size: int | None = Query(default=None, alias="pageSize", ge=1),
) -> schemas.CategoryListing:
    return await service.category_listing(name, page=page, page_size=page_size)
