from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from app.core.errors import RecordNotFoundError
from app.core.resume_store import delete_resume_analysis, get_resume_analysis, list_resume_analyses
from app.core.security import AuthenticatedUser, get_current_user
from app.schemas.analysis import ResumeHistoryResponse, ResumeRecord

router = APIRouter()


@router.get("/resumes", response_model=ResumeHistoryResponse)
def list_resumes(
    limit: int = Query(default=50, ge=1, le=200),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return ResumeHistoryResponse(items=list_resume_analyses(user.id, limit=limit))


@router.get("/resumes/{record_id}", response_model=ResumeRecord)
def get_resume(record_id: str, user: AuthenticatedUser = Depends(get_current_user)):
    record = get_resume_analysis(user.id, record_id)
    if record is None:
        raise RecordNotFoundError("Resume analysis not found.")
    return record


@router.delete("/resumes/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_resume(record_id: str, user: AuthenticatedUser = Depends(get_current_user)):
    if not delete_resume_analysis(user.id, record_id):
        raise RecordNotFoundError("Resume analysis not found.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
