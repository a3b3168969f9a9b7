"""
Auth API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from . import dependencies, schemas, service

router = APIRouter()


@router.get("/auth/me", response_model=schemas.CallerResponse)
async def me(caller: schemas.Caller = Depends(dependencies.get_caller)) -> schemas.CallerResponse:
    return service.to_caller_response(caller)
