"""
Asset ingestion "service layer".

Turns uploaded screenshots into durable public URLs:
- Validate count, extension, size and actual image signature per file
- Upload accepted files concurrently under random keys
- Report a partial-success list of URLs plus a per-file error list

Nothing here is transactional: a failed upload never rolls back the files
that already made it to the object store.
"""

from __future__ import annotations

import asyncio
import logging
import secrets
from dataclasses import dataclass, field
from pathlib import Path

from fastapi import UploadFile

from core import storage
from core.errors import AssetError
from core.settings import env_int

MIN_FILES = 1
MAX_FILES = 5

ALLOWED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif"}

MIN_UPLOAD_BYTES_CEILING = 2 * 1024 * 1024  # 2 MiB
MAX_UPLOAD_BYTES_CEILING = 5 * 1024 * 1024  # 5 MiB
DEFAULT_MAX_UPLOAD_BYTES = MAX_UPLOAD_BYTES_CEILING

# Leading bytes -> (content type, extensions it may be stored under).
_SIGNATURES: tuple[tuple[bytes, str, frozenset[str]], ...] = (
    (b"\x89PNG\r\n\x1a\n", "image/png", frozenset({".png"})),
    (b"\xff\xd8\xff", "image/jpeg", frozenset({".jpg", ".jpeg"})),
    (b"GIF87a", "image/gif", frozenset({".gif"})),
    (b"GIF89a", "image/gif", frozenset({".gif"})),
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestionResult:
    urls: list[str] = field(default_factory=list)
    errors: list[AssetError] = field(default_factory=list)


def max_upload_bytes() -> int:
    """
    MAX_UPLOAD_BYTES from env, clamped to the supported 2-5 MiB window.
    """
    value = env_int("MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES)
    return max(MIN_UPLOAD_BYTES_CEILING, min(value, MAX_UPLOAD_BYTES_CEILING))


def _file_ext(filename: str) -> str:
    return Path(filename).suffix.lower()


def generate_key(ext: str) -> str:
    # Random keys mean concurrent uploads never race on a name.
    return f"{secrets.token_hex(16)}{ext}"


def validate_upload(file: UploadFile) -> str:
    """
    Return the normalized extension if the filename is acceptable.
    """
    filename = file.filename or ""
    ext = _file_ext(filename)
    if ext not in ALLOWED_EXTENSIONS:
        raise AssetError(
            filename,
            AssetError.WRONG_TYPE,
            f"Unsupported file type '{ext or filename}'. Allowed: {sorted(ALLOWED_EXTENSIONS)}",
        )
    return ext


def sniff_content_type(data: bytes, ext: str, filename: str) -> str:
    """
    Confirm the bytes really are the image type the extension claims.
    """
    for signature, content_type, extensions in _SIGNATURES:
        if data.startswith(signature):
            if ext in extensions:
                return content_type
            break
    raise AssetError(
        filename,
        AssetError.WRONG_TYPE,
        f"File content does not match a {ext} image.",
    )


async def read_upload_bytes(file: UploadFile, max_bytes: int) -> bytes:
    """
    Read the upload into memory, enforcing a maximum size.
    """
    filename = file.filename or ""
    too_large = AssetError(
        filename,
        AssetError.OVERSIZE,
        f"File too large. Max is {max_bytes} bytes.",
    )
    if file.size is not None and file.size > max_bytes:
        raise too_large

    chunk_size = 1024 * 1024  # 1 MiB
    buf = bytearray()

    while True:
        chunk = await file.read(chunk_size)
        if not chunk:
            break
        buf.extend(chunk)
        if len(buf) > max_bytes:
            raise too_large

    if not buf:
        raise AssetError(filename, AssetError.EMPTY, "File is empty.")
    return bytes(buf)


async def ingest_one(file: UploadFile, *, max_bytes: int) -> str:
    """
    Validate, upload and return the public URL for a single file.
    """
    filename = file.filename or ""
    ext = validate_upload(file)
    data = await read_upload_bytes(file, max_bytes=max_bytes)
    content_type = sniff_content_type(data, ext, filename)

    key = generate_key(ext)
    try:
        await storage.upload(key, data, content_type=content_type)
        url = storage.public_url(key)
    except storage.StorageError as exc:
        logger.warning("asset_upload_failed filename=%s key=%s detail=%s", filename, key, exc)
        raise AssetError(filename, AssetError.UPLOAD_FAILED, "Upload failed. Please try again.") from exc

    logger.info("asset_uploaded filename=%s key=%s size_bytes=%s", filename, key, len(data))
    return url


async def ingest(files: list[UploadFile]) -> IngestionResult:
    """
    Ingest a batch of up to MAX_FILES images.

    Rejection is per file. The only batch-level rule is the count: files
    past MAX_FILES are rejected as count_exceeded while the first MAX_FILES
    proceed. URLs come back in submission order.
    """
    if len(files) < MIN_FILES:
        return IngestionResult(
            errors=[AssetError("", AssetError.NO_FILES, "At least one file is required.")]
        )

    accepted, excess = files[:MAX_FILES], files[MAX_FILES:]
    max_bytes = max_upload_bytes()

    results = await asyncio.gather(
        *(ingest_one(file, max_bytes=max_bytes) for file in accepted),
        return_exceptions=True,
    )

    urls: list[str] = []
    errors: list[AssetError] = []
    for result in results:
        if isinstance(result, AssetError):
            errors.append(result)
        elif isinstance(result, BaseException):
            raise result
        else:
            urls.append(result)

    for file in excess:
        errors.append(
            AssetError(
                file.filename or "",
                AssetError.COUNT_EXCEEDED,
                f"Too many files. At most {MAX_FILES} images per batch.",
            )
        )

    for error in errors:
        logger.info("asset_rejected filename=%s reason=%s", error.filename, error.reason)
    return IngestionResult(urls=urls, errors=errors)
