from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends, File, Query, Request, UploadFile

from app.core.config import settings
from app.core.errors import InputMissingError, UploadTooLargeError
from app.core.rate_limit import rate_limit
from app.core.security import AuthenticatedUser, get_current_user
from app.schemas.analysis import AnalyzeResponse, ScoringPolicyName
from app.services.analysis_service import analyze_resume

router = APIRouter()

READ_CHUNK_BYTES = 64 * 1024


async def _read_upload(file: UploadFile) -> bytes:
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(READ_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        if total > settings.max_upload_bytes:
            raise UploadTooLargeError(
                f"File too large. Maximum allowed size is {settings.max_upload_bytes // (1024 * 1024)} MB."
            )
        chunks.append(chunk)
    return b"".join(chunks)


@router.post("/analyze", response_model=AnalyzeResponse)
@rate_limit()
async def analyze(
    request: Request,
    file: UploadFile | None = File(default=None),
    policy: ScoringPolicyName | None = Query(default=None),
    user: AuthenticatedUser = Depends(get_current_user),
):
    if file is None or not file.filename:
        raise InputMissingError("No file uploaded")

    content = await _read_upload(file)
    return await asyncio.to_thread(
        analyze_resume,
        user=user,
        file_name=file.filename,
        content_type=file.content_type,
        content=content,
        policy=policy,
    )
