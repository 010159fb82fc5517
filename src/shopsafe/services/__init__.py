"""Service layer for ShopSafe."""

from shopsafe.services.compliance.service import ComplianceService
from shopsafe.services.encoder import (
    build_analysis_parts,
    build_caption_parts,
    encode_media_bytes,
    encode_media_file,
)

__all__ = [
    "ComplianceService",
    "build_analysis_parts",
    "build_caption_parts",
    "encode_media_bytes",
    "encode_media_file",
]
