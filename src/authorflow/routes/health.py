"""Health check endpoint."""

from fastapi import APIRouter, Request

from authorflow.models.responses import HealthResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Report that the API is up and which environment it runs in.",
)
async def health_check(request: Request) -> HealthResponse:
    """Liveness only; the provider is not contacted."""
    return HealthResponse(status="ok", environment=request.app.state.settings.node_env)
