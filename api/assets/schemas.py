"""
Asset upload response schemas.
"""

from __future__ import annotations

from pydantic import BaseModel


class AssetRejection(BaseModel):
    filename: str
    reason: str
    message: str


class AssetUploadResponse(BaseModel):
    urls: list[str]
    errors: list[AssetRejection]
