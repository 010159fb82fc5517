"""FastAPI dependencies."""

from __future__ import annotations

from shopsafe.services.compliance.service import ComplianceService

_service: ComplianceService | None = None


def init_compliance_service(service: ComplianceService | None = None) -> ComplianceService:
    """Initialize the global ComplianceService (called at app startup)."""
    global _service
    _service = service if service is not None else ComplianceService()
    return _service


def get_compliance_service() -> ComplianceService:
    """Dependency that provides the ComplianceService instance."""
    if _service is None:
        raise RuntimeError(
            "ComplianceService not initialized; call init_compliance_service() first"
        )
    return _service
