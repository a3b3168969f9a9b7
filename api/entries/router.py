"""
Submission endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from . import schemas, service

router = APIRouter()


@router.post(
    "/entries",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.SubmissionCreatedResponse,
)
async def submit_entry(payload: schemas.SubmissionRequest) -> schemas.SubmissionCreatedResponse:
    """
    Submit a project for review. The entry is stored as `pending` and is not
    publicly visible until an admin approves it.
    """
    entry = await service.submit(payload)
    return schemas.SubmissionCreatedResponse(id=entry.id)
