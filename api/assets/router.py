"""
FastAPI router for screenshot uploads.
"""

from __future__ import annotations

from fastapi import APIRouter, File, UploadFile

from . import schemas, service

router = APIRouter()


@router.post("/assets", response_model=schemas.AssetUploadResponse)
async def upload_assets(files: list[UploadFile] = File(...)) -> schemas.AssetUploadResponse:
    """
    Upload up to 5 screenshots (png/jpg/jpeg/gif).

    Always 200: accepted files come back as URLs (in upload order), rejected
    ones as per-file errors, so the client can keep the successful part.
    """
    result = await service.ingest(files)
    return schemas.AssetUploadResponse(
        urls=result.urls,
        errors=[schemas.AssetRejection(**error.to_dict()) for error in result.errors],
    )
