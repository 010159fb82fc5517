"""Explicit UI state for the compliance dashboard.

All transient view fields live on one ``SessionState`` owned by the UI
root. Transitions are plain methods so they can be tested without a
rendering environment.

Requests are guarded by tokens: ``begin`` hands out a token, and
``complete``/``fail`` only apply if that token is still current. Switching
tabs, starting a new analysis or resetting invalidates outstanding tokens,
so a late response cannot write into a view the user already left.
"""

from __future__ import annotations

import itertools
import logging
import shutil
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from shopsafe.models.compliance import AnalysisResult

logger = logging.getLogger(__name__)

_token_counter = itertools.count(1)


class Tab(str, Enum):
    """Navigation tabs."""

    DASHBOARD = "dashboard"
    CAPTION_TESTER = "caption-tester"
    HISTORY = "history"
    POLICY = "policy"


TAB_LABELS: dict[Tab, str] = {
    Tab.DASHBOARD: "Dashboard",
    Tab.CAPTION_TESTER: "Caption Tester",
    Tab.HISTORY: "History",
    Tab.POLICY: "Policy Guide",
}

TAB_TITLES: dict[Tab, str] = {
    Tab.DASHBOARD: "Multimodal Analysis",
    Tab.CAPTION_TESTER: "Test Caption Safety",
    Tab.HISTORY: "Analysis History",
    Tab.POLICY: "TikTok Shop Policy Reference",
}


class ViewPhase(str, Enum):
    """Sub-state of an analysis view."""

    NO_RESULT = "no_result"
    HAS_RESULT = "has_result"


@dataclass(frozen=True)
class RequestToken:
    """Identifies one in-flight request of one view."""

    view: Tab
    serial: int


@dataclass
class MediaSelection:
    """A locally selected media file and its preview resource.

    ``owned`` marks files this process wrote (uploads saved to a temp dir);
    those are deleted on release.
    """

    path: Path
    original_name: str
    mime_type: str = "video/mp4"
    owned: bool = False
    released: bool = False

    def release(self) -> None:
        """Release the preview resource. Safe to call twice."""
        if self.released:
            return
        self.released = True
        if self.owned:
            try:
                self.path.unlink(missing_ok=True)
            except OSError as exc:
                logger.warning("Could not remove media %s: %s", self.path, exc)


@dataclass
class AnalysisView:
    """Result, error and busy flag of one analysis tab."""

    tab: Tab
    result: AnalysisResult | None = None
    error: str | None = None
    pending: RequestToken | None = None

    @property
    def in_flight(self) -> bool:
        return self.pending is not None

    @property
    def phase(self) -> ViewPhase:
        return ViewPhase.HAS_RESULT if self.result is not None else ViewPhase.NO_RESULT

    def reset(self) -> None:
        """Drop the result, the error and any pending request."""
        self.result = None
        self.error = None
        self.pending = None


@dataclass
class SessionState:
    """Everything the UI shell holds for one session."""

    active_tab: Tab = Tab.DASHBOARD
    media: MediaSelection | None = None
    work_dir: Path | None = None
    caption: str = ""
    script: str = ""
    dashboard: AnalysisView = field(default_factory=lambda: AnalysisView(Tab.DASHBOARD))
    caption_tester: AnalysisView = field(
        default_factory=lambda: AnalysisView(Tab.CAPTION_TESTER)
    )

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def select_media(self, selection: MediaSelection) -> None:
        """Replace the selected media, releasing the previous one."""
        if self.media is not None and self.media.path != selection.path:
            self.media.release()
        self.media = selection

    def clear_media(self) -> None:
        if self.media is not None:
            self.media.release()
        self.media = None

    def close(self) -> None:
        """Tear down: release held resources and invalidate requests.

        Removes ``work_dir``, the per-session directory uploads are saved to.
        """
        self.clear_media()
        if self.work_dir is not None:
            shutil.rmtree(self.work_dir, ignore_errors=True)
            self.work_dir = None
        self.dashboard.reset()
        self.caption_tester.reset()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def view(self, tab: Tab) -> AnalysisView:
        """Return the analysis view for a tab that has one."""
        if tab is Tab.DASHBOARD:
            return self.dashboard
        if tab is Tab.CAPTION_TESTER:
            return self.caption_tester
        raise ValueError(f"Tab {tab.value} has no analysis view")

    def switch_tab(self, tab: Tab) -> bool:
        """Navigate to ``tab``.

        A real change clears both analysis views and invalidates their
        pending requests. Selecting the current tab is a no-op.

        Returns:
            Whether the active tab changed.
        """
        if tab is self.active_tab:
            return False
        logger.debug("Tab %s -> %s", self.active_tab.value, tab.value)
        self.active_tab = tab
        self.dashboard.reset()
        self.caption_tester.reset()
        return True

    def new_analysis(self) -> None:
        """Return the dashboard to its input form, discarding the result."""
        self.dashboard.reset()

    # ------------------------------------------------------------------
    # Request lifecycle
    # ------------------------------------------------------------------

    @property
    def can_run_analysis(self) -> bool:
        return not self.dashboard.in_flight

    @property
    def can_run_caption_test(self) -> bool:
        return bool(self.caption.strip()) and not self.caption_tester.in_flight

    @property
    def has_analysis_input(self) -> bool:
        return self.media is not None or bool(self.caption.strip()) or bool(self.script.strip())

    def begin(self, tab: Tab) -> RequestToken:
        """Mark a request as in flight for ``tab`` and clear its error.

        Raises:
            RuntimeError: If that view already has a request in flight.
        """
        view = self.view(tab)
        if view.in_flight:
            raise RuntimeError(f"A request is already in flight for {tab.value}")
        token = RequestToken(view=tab, serial=next(_token_counter))
        view.pending = token
        view.error = None
        return token

    def is_current(self, token: RequestToken) -> bool:
        return self.view(token.view).pending == token

    def complete(self, token: RequestToken, result: AnalysisResult) -> bool:
        """Store a result if ``token`` is still current."""
        if not self.is_current(token):
            logger.info("Dropping stale result for %s", token.view.value)
            return False
        view = self.view(token.view)
        view.result = result
        view.pending = None
        return True

    def fail(self, token: RequestToken, message: str) -> bool:
        """Record an error if ``token`` is still current.

        The previous result, if any, is left as it was.
        """
        if not self.is_current(token):
            logger.info("Dropping stale error for %s", token.view.value)
            return False
        view = self.view(token.view)
        view.error = message
        view.pending = None
        return True

    def abandon(self, token: RequestToken) -> None:
        """Clear the busy flag of a cancelled request, if still current."""
        if self.is_current(token):
            self.view(token.view).pending = None

    def reject(self, tab: Tab, message: str) -> None:
        """Show a validation message without starting a request."""
        self.view(tab).error = message
