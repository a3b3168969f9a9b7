"""
Submission validator.

Pure functions: no I/O, no FastAPI. Every rule is evaluated independently and
all violations are reported together as `{field: message}`.

Normalizations applied on success:
- text fields are trimmed
- URLs without a scheme get `https://` prepended
- tags (list or comma separated string) become trimmed, non-empty, unique
- status is always `pending`
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit

from core.errors import ValidationError

from .schemas import EntryCategory, EntryStatus, NewEntry, SubmissionRequest

MIN_SCREENSHOTS = 1
MAX_SCREENSHOTS = 5

REQUIRED_TEXT_FIELDS = ("title", "description", "creator_name", "creator_redbook_id")
URL_FIELDS = ("website_url", "redbook_url")
ALLOWED_URL_SCHEMES = {"http", "https"}

# ASCII and full-width commas both separate tags.
_TAG_SEPARATORS = re.compile(r"[,，]")


def normalize_url(raw: str | None, *, add_scheme: bool = True) -> str:
    """
    Return an absolute http(s) URL or raise ValueError.
    """
    value = (raw or "").strip()
    if not value:
        raise ValueError("URL is required.")
    if any(ch.isspace() for ch in value):
        raise ValueError("URL must not contain whitespace.")

    if add_scheme and "://" not in value:
        value = f"https://{value}"

    parts = urlsplit(value)
    if parts.scheme.lower() not in ALLOWED_URL_SCHEMES:
        raise ValueError("URL must start with http:// or https://.")
    try:
        host = parts.hostname
        port = parts.port
    except ValueError as exc:
        raise ValueError("URL has an invalid host or port.") from exc
    if not host:
        raise ValueError("URL must include a host.")
    if port == 0:
        raise ValueError("URL has an invalid host or port.")
    return value


def normalize_tags(raw: list[str] | str | None) -> list[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        candidates = _TAG_SEPARATORS.split(raw)
    else:
        candidates = list(raw)

    tags: list[str] = []
    seen: set[str] = set()
    for candidate in candidates:
        tag = (candidate or "").strip()
        if not tag or tag in seen:
            continue
        seen.add(tag)
        tags.append(tag)
    return tags


def _screenshot_error(urls: list[str]) -> str | None:
    if len(urls) < MIN_SCREENSHOTS:
        return "At least one screenshot is required."
    if len(urls) > MAX_SCREENSHOTS:
        return f"At most {MAX_SCREENSHOTS} screenshots are allowed."
    for url in urls:
        try:
            normalize_url(url, add_scheme=False)
        except ValueError:
            return "Screenshot URLs must be absolute http(s) URLs."
    return None


def validate_submission(payload: SubmissionRequest) -> NewEntry:
    errors: dict[str, str] = {}
    values: dict[str, str] = {}

    for name in REQUIRED_TEXT_FIELDS:
        value = (getattr(payload, name) or "").strip()
        if not value:
            errors[name] = f"{name} is required."
        values[name] = value

    for name in URL_FIELDS:
        try:
            values[name] = normalize_url(getattr(payload, name))
        except ValueError as exc:
            errors[name] = str(exc)

    category: EntryCategory | None = None
    try:
        category = EntryCategory((payload.category or "").strip())
    except ValueError:
        allowed = ", ".join(c.value for c in EntryCategory)
        errors["category"] = f"category must be one of: {allowed}."

    tags = normalize_tags(payload.tags)
    if not tags:
        errors["tags"] = "At least one tag is required."

    screenshot_urls = [(url or "").strip() for url in (payload.screenshot_urls or [])]
    screenshot_error = _screenshot_error(screenshot_urls)
    if screenshot_error is not None:
        errors["screenshot_urls"] = screenshot_error

    if errors:
        raise ValidationError(errors)

    return NewEntry(
        title=values["title"],
        description=values["description"],
        website_url=values["website_url"],
        redbook_url=values["redbook_url"],
        creator_name=values["creator_name"],
        creator_redbook_id=values["creator_redbook_id"],
        category=category,
        tags=tags,
        screenshot_urls=screenshot_urls,
        status=EntryStatus.PENDING,
    )
