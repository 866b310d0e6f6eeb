from fastapi import APIRouter

from app.core.config import settings

router = APIRouter()


@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check():
    return {
        "status": "healthy",
        "scoring_policy": settings.scoring_policy,
        "similarity_provider": settings.similarity_provider,
    }
