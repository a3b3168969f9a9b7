"""
Directory query service.

Public read paths only ever see approved entries. Presentation defaults
(thumbnail, tag line, referral link) are added here, after filtering and
ordering, and never influence either.
"""

from __future__ import annotations

import asyncio
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from core import settings
from entries import service as entries_service
from entries.schemas import Category, Entry, EntryStatus

from .schemas import CategoryListing, DirectoryItem, DirectoryPage

UTM_MEDIUM = "referral"


def _page_size(page_size: int | None) -> int:
    size = page_size or settings.default_page_size()
    return max(1, min(size, settings.max_page_size()))


def referral_url(url: str, *, source: str | None = None) -> str:
    """
    Decorate an outbound link with utm params when a referral source is set.
    """
    source = settings.referral_source() if source is None else source
    if not source:
        return url

    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        return url

    params = [
        (k, v)
        for (k, v) in parse_qsl(parts.query, keep_blank_values=True)
        if k not in {"utm_source", "utm_medium", "utm_campaign"}
    ]
    params.extend(
        [
            ("utm_source", source),
            ("utm_medium", UTM_MEDIUM),
            ("utm_campaign", settings.referral_campaign() or source),
        ]
    )
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(params), parts.fragment))


def to_item(entry: Entry) -> DirectoryItem:
    return DirectoryItem(
        **entry.model_dump(),
        thumbnail_url=entry.screenshot_urls[0] if entry.screenshot_urls else None,
        tag_line=",".join(entry.tags),
        outbound_url=referral_url(entry.website_url),
    )


async def list_approved(
    page: int = 1,
    page_size: int | None = None,
    category: str | None = None,
) -> DirectoryPage:
    """
    One page of approved entries, newest first.

    `category` is a literal equality filter: an unknown slug yields an empty
    page, not an error.
    """
    size = _page_size(page_size)
    page = max(page, 1)
    entries, total = await entries_service.list_entries(
        status=EntryStatus.APPROVED,
        category=category or None,
        limit=size,
        offset=entries_service.page_offset(page, size),
    )
    return DirectoryPage(
        items=[to_item(entry) for entry in entries],
        total=total,
        page=page,
        page_size=size,
    )


async def get_approved_by_title(title: str) -> DirectoryItem:
    """
    Exact match on an already URL-decoded title. The router hands over the
    path parameter as decoded by the framework; decoding again would turn a
    literal "%20" in a title into a space.
    """
    entry = await entries_service.get_entry_by_title(title, status=EntryStatus.APPROVED)
    return to_item(entry)


async def list_categories_for_nav() -> list[Category]:
    return await entries_service.list_categories()


async def category_listing(name: str, page: int = 1, page_size: int | None = None) -> CategoryListing:
    # Category metadata and the entry page don't depend on each other.
    category, listing = await asyncio.gather(
        entries_service.get_category(name),
        list_approved(page=page, page_size=page_size, category=name),
        return_exceptions=True,
    )
    for result in (category, listing):
        if isinstance(result, BaseException):
            raise result
    return CategoryListing(
        category=category,
        items=listing.items,
        total=listing.total,
        page=listing.page,
        page_size=listing.page_size,
    )
