"""
Auth business logic: turn an access token into a `Caller`.
"""

from __future__ import annotations

from fastapi import HTTPException, status

from . import repository, schemas, security


async def resolve_caller(access_token: str | None) -> schemas.Caller:
    if access_token is None:
        return schemas.ANONYMOUS

    try:
        payload = security.decode_access_token(access_token)
        user_id = security.subject_from_payload(payload)
    except security.AuthSecurityError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc

    role = await repository.get_role_by_user_id(user_id)
    return schemas.Caller(user_id=user_id, role=role or schemas.USER_ROLE)


def to_caller_response(caller: schemas.Caller) -> schemas.CallerResponse:
    return schemas.CallerResponse(
        user_id=caller.user_id,
        role=caller.role,
        is_admin=caller.is_admin,
    )
