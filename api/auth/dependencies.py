"""
Auth dependencies for FastAPI routes.

A missing Authorization header is not an error here: it yields the anonymous
caller, and the moderation gate decides what anonymous callers may do.
"""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, status

from . import schemas, service


def _extract_bearer_token(authorization: str | None) -> str | None:
    raw = (authorization or "").strip()
    if not raw:
        return None

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid Authorization header format.",
        )

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization must be: Bearer <token>.",
        )
    return token


async def get_bearer_token(authorization: str | None = Header(default=None)) -> str | None:
    return _extract_bearer_token(authorization)


async def get_caller(access_token: str | None = Depends(get_bearer_token)) -> schemas.Caller:
    return await service.resolve_caller(access_token)


async def get_caller_or_anonymous(authorization: str | None = Header(default=None)) -> schemas.Caller:
    """
    Like `get_caller`, but a malformed header or an invalid/expired token
    resolves to the anonymous caller instead of a 401. Admin-only routes use
    this so every unauthenticated request is refused with the same 403.
    """
    try:
        access_token = _extract_bearer_token(authorization)
        return await service.resolve_caller(access_token)
    except HTTPException as exc:
        if exc.status_code != status.HTTP_401_UNAUTHORIZED:
            raise
        return schemas.ANONYMOUS
