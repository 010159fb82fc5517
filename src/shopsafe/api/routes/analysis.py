"""Compliance analysis endpoints.

Mirror the two UI triggers: full analysis and caption-only test. Input
errors come back as 422 with their message; every other failure is logged
and returned as one generic 502.
"""

from __future__ import annotations

import binascii
import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from shopsafe.api.deps import get_compliance_service
from shopsafe.api.schemas import AnalyzeRequest, CaptionTestRequest, ErrorResponse
from shopsafe.errors import InputValidationError
from shopsafe.models.request import AnalysisRequest, EncodedMedia
from shopsafe.services.compliance.service import (
    ANALYSIS_FAILED_MESSAGE,
    CAPTION_TEST_FAILED_MESSAGE,
    ComplianceService,
)
from shopsafe.services.encoder import decode_media

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["analysis"])

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    422: {"model": ErrorResponse, "description": "Missing or invalid input"},
    502: {"model": ErrorResponse, "description": "Compliance model call failed"},
}


def _to_media(req: AnalyzeRequest) -> EncodedMedia | None:
    """Validate the optional base64 video and wrap it."""
    if not req.video_base64:
        return None
    media = EncodedMedia(data=req.video_base64, mime_type=req.mime_type)
    try:
        decode_media(media)
    except (binascii.Error, ValueError) as exc:
        raise HTTPException(status_code=422, detail=f"videoBase64 is not valid base64: {exc}")
    return media


@router.post("/analyze", responses=_ERROR_RESPONSES)
async def analyze(
    req: AnalyzeRequest,
    service: ComplianceService = Depends(get_compliance_service),
) -> dict[str, Any]:
    request = AnalysisRequest(media=_to_media(req), caption=req.caption, script=req.script)
    try:
        result = await service.analyze(request)
    except InputValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except Exception:
        logger.exception("Analysis request failed")
        raise HTTPException(status_code=502, detail=ANALYSIS_FAILED_MESSAGE)
    return result.to_wire()


@router.post("/caption-test", responses=_ERROR_RESPONSES)
async def caption_test(
    req: CaptionTestRequest,
    service: ComplianceService = Depends(get_compliance_service),
) -> dict[str, Any]:
    try:
        result = await service.test_caption(req.caption)
    except InputValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except Exception:
        logger.exception("Caption test request failed")
        raise HTTPException(status_code=502, detail=CAPTION_TEST_FAILED_MESSAGE)
    return result.to_wire()
