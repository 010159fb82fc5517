"""Liveness and provider readiness."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from shopsafe import __version__
from shopsafe.api.deps import get_compliance_service
from shopsafe.services.compliance.service import ComplianceService

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    version: str
    provider: str
    provider_available: bool


@router.get("/health", response_model=HealthResponse)
async def health_check(
    service: ComplianceService = Depends(get_compliance_service),
) -> HealthResponse:
    """Report the server version and whether the model provider has a key.

    A missing key does not make the server unhealthy; analyses fail with
    the generic 502 until one is provided.
    """
    provider = service.provider
    return HealthResponse(
        status="healthy",
        version=__version__,
        provider=provider.name,
        provider_available=provider.is_available,
    )
