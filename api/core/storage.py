"""
Object store HTTP client helpers.

Talks to a Supabase-Storage compatible REST API:
- POST {STORAGE_URL}/storage/v1/object/{bucket}/{key}   -> 200 on success
- public objects are served from
  {STORAGE_URL}/storage/v1/object/public/{bucket}/{key}
"""

from __future__ import annotations

from urllib.parse import quote

import httpx

from .settings import env_int, env_str

DEFAULT_BUCKET = "project-images"


# Storage failures are explicit and separable from other runtime errors.
class StorageError(RuntimeError):
    pass


def storage_base_url() -> str:
    base_url = env_str("STORAGE_URL")
    if not base_url:
        raise StorageError("STORAGE_URL is empty.")
    return base_url.rstrip("/")


def storage_bucket() -> str:
    return env_str("STORAGE_BUCKET", DEFAULT_BUCKET)


def storage_timeout_s() -> float:
    return float(env_int("STORAGE_TIMEOUT_S", 30))


def _auth_headers() -> dict[str, str]:
    key = env_str("STORAGE_KEY")
    if not key:
        return {}
    return {"Authorization": f"Bearer {key}", "apikey": key}


def public_url(key: str, *, bucket: str | None = None) -> str:
    bucket = bucket or storage_bucket()
    return f"{storage_base_url()}/storage/v1/object/public/{bucket}/{quote(key)}"


async def upload(
    key: str,
    data: bytes,
    *,
    content_type: str,
    bucket: str | None = None,
    timeout_s: float | None = None,
) -> None:
    """
    Upload one object. Never overwrites: the store rejects an existing key.
    """
    key = (key or "").strip()
    if not key:
        raise StorageError("Object key is empty.")
    bucket = bucket or storage_bucket()

    headers = {
        **_auth_headers(),
        "Content-Type": content_type,
        "x-upsert": "false",
    }
    try:
        async with httpx.AsyncClient(
            base_url=storage_base_url(),
            timeout=timeout_s or storage_timeout_s(),
        ) as client:
            resp = await client.post(
                f"/storage/v1/object/{bucket}/{quote(key)}",
                content=data,
                headers=headers,
            )
    except httpx.HTTPError as exc:
        raise StorageError(f"Object store request failed: {exc}") from exc

    if resp.status_code not in (200, 201):
        # Avoid dumping huge bodies; include a small snippet.
        body = resp.text[:300]
        raise StorageError(f"Object store upload failed: {resp.status_code} {body}")
