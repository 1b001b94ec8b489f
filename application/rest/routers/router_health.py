from application.rest.schemas.output.common_output import ErrorResponse, HealthResponse
from fastapi import APIRouter, status
from utils.config import SERVICE_NAME

router = APIRouter()


@router.get(
    path="/health",
    description="Liveness probe used by the gateway and the container runtime.",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": HealthResponse,
            "description": "The service answers requests.",
        },
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": ErrorResponse,
            "description": "The service cannot answer requests.",
        },
    },
)
async def health_check() -> HealthResponse:
    """Report liveness of the documents service.

    Returns:
        HealthResponse: Status and the configured service name.

    Example:
        >>> await health_check()
        HealthResponse(status="healthy", service="documents-service")
    """
    return HealthResponse(status="healthy", service=SERVICE_NAME)
