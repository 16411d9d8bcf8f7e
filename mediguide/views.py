"""Per-session view state: HOME -> UPLOAD -> ANALYZING -> RESULTS.

The browser page only renders what snapshot() returns; every transition
happens here.
"""

import base64
import logging
from collections.abc import Awaitable, Callable, Sequence

from mediguide import chat, report
from mediguide.models import (
    AnalysisRecord,
    ChatMessage,
    QuickStats,
    SessionState,
    View,
    quick_stats,
)
from mediguide.prompts import build_greeting

log = logging.getLogger(__name__)

ANALYSIS_FAILED_MESSAGE = (
    "Failed to analyze the image. Please ensure it's a clear medical report and try again."
)

Analyzer = Callable[[str, str], Awaitable[AnalysisRecord]]
Responder = Callable[[AnalysisRecord, Sequence[ChatMessage], str], Awaitable[str]]


class ViewTransitionError(Exception):
    """The requested action is not allowed from the current view."""


class ViewController:
    def __init__(self, analyzer: Analyzer | None = None, responder: Responder | None = None):
        self._analyzer = analyzer
        self._responder = responder
        self.view: View = View.HOME
        self.error: str | None = None
        self.analysis: AnalysisRecord | None = None
        self.messages: list[ChatMessage] = []
        self.chat_pending: bool = False

    # ── Navigation ──

    def start_upload(self) -> None:
        if self.view == View.ANALYZING:
            raise ViewTransitionError("An analysis is already in progress")
        if self.view == View.RESULTS:
            self.new_upload()
            return
        self.view = View.UPLOAD

    def go_home(self) -> None:
        if self.view == View.ANALYZING:
            raise ViewTransitionError("An analysis is already in progress")
        self._clear_results()
        self.error = None
        self.view = View.HOME

    def new_upload(self) -> None:
        if self.view != View.RESULTS:
            raise ViewTransitionError(f"Cannot start a new upload from {self.view.value}")
        self._clear_results()
        self.view = View.UPLOAD

    def _clear_results(self) -> None:
        self.analysis = None
        self.messages = []
        self.chat_pending = False

    # ── Analysis ──

    async def submit_report(self, data: bytes, mime_type: str = report.DEFAULT_MIME_TYPE) -> View:
        """Run one analysis. Returns the view it resolved to (RESULTS or UPLOAD)."""
        if self.view not in (View.HOME, View.UPLOAD):
            raise ViewTransitionError(f"Cannot upload a report from {self.view.value}")

        self.error = None
        self._clear_results()
        self.view = View.ANALYZING

        analyzer = self._analyzer or report.analyze_report
        try:
            encoded = base64.b64encode(data).decode("ascii")
            record = await analyzer(encoded, mime_type)
        except Exception as e:
            log.warning("Analysis failed, returning to upload: %s", e)
            self.error = ANALYSIS_FAILED_MESSAGE
            self.view = View.UPLOAD
            return self.view

        self.analysis = record
        self.messages = [ChatMessage(role="model", text=build_greeting(record))]
        self.view = View.RESULTS
        return self.view

    @property
    def quick_stats(self) -> QuickStats | None:
        if self.analysis is None:
            return None
        return quick_stats(self.analysis.parameters)

    # ── Chat ──

    async def send_message(self, text: str) -> ChatMessage | None:
        """Ask a follow-up question. Blank input is ignored and returns None."""
        if not text or not text.strip():
            return None
        if self.view != View.RESULTS or self.analysis is None:
            raise ViewTransitionError("Chat is only available on the results view")
        if self.chat_pending:
            raise ViewTransitionError("A chat request is already in progress")

        record = self.analysis
        history = list(self.messages)
        user_msg = ChatMessage(role="user", text=text.strip())
        self.messages.append(user_msg)
        self.chat_pending = True

        responder = self._responder or chat.ask_follow_up
        try:
            answer = await responder(record, history, user_msg.text)
        finally:
            # A newer report may own the flag now.
            if self.analysis is record:
                self.chat_pending = False

        # Transcript was cleared while waiting (new upload or home).
        if self.analysis is not record:
            return None

        reply = ChatMessage(role="model", text=answer)
        self.messages.append(reply)
        return reply

    def snapshot(self) -> SessionState:
        return SessionState(
            view=self.view,
            error=self.error,
            analysis=self.analysis,
            quick_stats=self.quick_stats,
            messages=list(self.messages),
            chat_pending=self.chat_pending,
        )
