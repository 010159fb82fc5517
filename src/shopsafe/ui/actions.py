"""UI actions: the two triggers of the dashboard.

Every failure past input validation is logged with detail and shown to the
user as one generic message. Structured error kinds stay in the logs.
"""

from __future__ import annotations

import asyncio
import logging

from shopsafe.errors import InputValidationError
from shopsafe.models.request import AnalysisRequest
from shopsafe.services.compliance.service import (
    ANALYSIS_FAILED_MESSAGE,
    CAPTION_TEST_FAILED_MESSAGE,
    NO_INPUT_MESSAGE,
    ComplianceService,
)
from shopsafe.services.encoder import encode_media_file
from shopsafe.ui.state import SessionState, Tab

logger = logging.getLogger(__name__)


async def run_full_analysis(state: SessionState, service: ComplianceService) -> bool:
    """Encode the selected media and run a full analysis.

    Returns:
        Whether a new result was stored on the dashboard.
    """
    if not state.has_analysis_input:
        state.reject(Tab.DASHBOARD, NO_INPUT_MESSAGE)
        return False
    if not state.can_run_analysis:
        return False

    token = state.begin(Tab.DASHBOARD)
    try:
        media = None
        if state.media is not None:
            media = encode_media_file(state.media.path, state.media.mime_type)
        request = AnalysisRequest(media=media, caption=state.caption, script=state.script)
        result = await service.analyze(request)
    except asyncio.CancelledError:
        state.abandon(token)
        raise
    except InputValidationError as exc:
        state.fail(token, str(exc))
        return False
    except Exception:
        logger.exception("Full analysis failed")
        state.fail(token, ANALYSIS_FAILED_MESSAGE)
        return False

    return state.complete(token, result)


async def run_caption_test(state: SessionState, service: ComplianceService) -> bool:
    """Run the caption-only check for the caption tester tab.

    Returns:
        Whether a new result was stored on the caption tester.
    """
    if not state.can_run_caption_test:
        return False

    token = state.begin(Tab.CAPTION_TESTER)
    try:
        result = await service.test_caption(state.caption)
    except asyncio.CancelledError:
        state.abandon(token)
        raise
    except InputValidationError as exc:
        state.fail(token, str(exc))
        return False
    except Exception:
        logger.exception("Caption test failed")
        state.fail(token, CAPTION_TEST_FAILED_MESSAGE)
        return False

    return state.complete(token, result)
