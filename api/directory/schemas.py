"""
Public directory response shapes.
"""

from __future__ import annotations

from pydantic import BaseModel

from entries.schemas import Category, Entry


class DirectoryItem(Entry):
    """An approved entry plus display defaults for cards and detail pages."""

    thumbnail_url: str | None = None
    tag_line: str = ""
    outbound_url: str


class DirectoryPage(BaseModel):
    items: list[DirectoryItem]
    total: int
    page: int
    page_size: int


class CategoryListing(BaseModel):
    category: Category
    items: list[DirectoryItem]
    total: int
    page: int
    page_size: int
