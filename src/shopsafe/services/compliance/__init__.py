"""Compliance analysis against an external multimodal model."""

from shopsafe.services.compliance.base import IComplianceProvider
from shopsafe.services.compliance.response import parse_analysis_result
from shopsafe.services.compliance.service import ComplianceService, create_provider

__all__ = [
    "ComplianceService",
    "IComplianceProvider",
    "create_provider",
    "parse_analysis_result",
]
