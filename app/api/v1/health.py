from fastapi import APIRouter, Depends

from app.api.v1.analyze import get_analysis_resolver
from app.schemas.analysis import HealthResponse
from app.services.analysis_service import AnalysisResolver

router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Check the health status of the application.",
)
async def health_check(resolver: AnalysisResolver = Depends(get_analysis_resolver)):
    return HealthResponse(status="healthy", upstream_configured=resolver.upstream_configured)
