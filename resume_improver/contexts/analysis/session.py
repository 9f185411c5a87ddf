"""
Analysis session state machine.

States:

    IDLE -> LOADING -> RESULT_READY | RESULT_ERROR -> (submit) LOADING
                                                   -> (reset)  IDLE

transition() is a pure function over (state, event). AnalysisSession owns the
only SessionState, holds the user's inputs and drives one submission at a
time: the LOADING check-and-set happens before the first await, so a second
submit() while one is in flight is a no-op.
"""

import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Union

from resume_improver.contexts.analysis.client import AnalysisClient
from resume_improver.contexts.analysis.logger import (
    _log_debug,
    _log_error,
    _log_info,
    _log_warning,
    log_rejected_submission,
    log_submission_result,
    log_submission_start,
)
from resume_improver.contexts.analysis.models import NormalizedResult, RequestStrategy
from resume_improver.contexts.analysis.request_builder import RequestBuilder
from resume_improver.contexts.analysis.response_normalizer import normalize
from resume_improver.contexts.intake.documents import BinaryFile, RawText
from resume_improver.contexts.intake.extractor import ensure_supported, extract_text
from resume_improver.exceptions import (
    InvalidTransitionError,
    ResumeImproverError,
    TransportError,
)
from resume_improver.utils.event_logging import log_session_event

CONNECTIVITY_ERROR_MESSAGE = "Error contacting backend"


class SessionStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    RESULT_READY = "result_ready"
    RESULT_ERROR = "result_error"


@dataclass(frozen=True)
class SessionState:
    """Snapshot of the session. result is set only in the two terminal states."""

    status: SessionStatus = SessionStatus.IDLE
    result: Optional[NormalizedResult] = None

    @property
    def is_loading(self) -> bool:
        return self.status is SessionStatus.LOADING

    @property
    def display_text(self) -> str:
        return self.result.text if self.result else ""


# --- Events ---


@dataclass(frozen=True)
class Submitted:
    pass


@dataclass(frozen=True)
class Completed:
    result: NormalizedResult


@dataclass(frozen=True)
class Reset:
    pass


SessionEvent = Union[Submitted, Completed, Reset]

_TERMINAL = (SessionStatus.RESULT_READY, SessionStatus.RESULT_ERROR)


def transition(state: SessionState, event: SessionEvent) -> SessionState:
    """
    Next state for an event.

    Raises:
        InvalidTransitionError: Event is not accepted in the current state
    """
    status = state.status

    if isinstance(event, Submitted) and status is not SessionStatus.LOADING:
        return SessionState(status=SessionStatus.LOADING)

    if isinstance(event, Completed) and status is SessionStatus.LOADING:
        new_status = SessionStatus.RESULT_READY if event.result.ok else SessionStatus.RESULT_ERROR
        return SessionState(status=new_status, result=event.result)

    if isinstance(event, Reset) and (status in _TERMINAL or status is SessionStatus.IDLE):
        return SessionState()

    raise InvalidTransitionError(f"{type(event).__name__} not allowed while {status.value}")


StateListener = Callable[[SessionState], None]


class AnalysisSession:
    """
    One user's analysis session.

    Args:
        builder: Request strategy for this deployment
        client: HTTP client for the analysis endpoint
        events_file: Optional JSON Lines file receiving every state change

    Example:
        >>> session = AnalysisSession(get_request_builder("json", url), AnalysisClient())
        >>> await session.attach_resume_file(BinaryFile.from_path("cv.pdf"))
        >>> session.set_job_description(job_text)
        >>> await session.submit()
        >>> print(session.state.display_text)
    """

    def __init__(
        self,
        builder: RequestBuilder,
        client: AnalysisClient,
        events_file: Optional[Path] = None,
    ):
        self.builder = builder
        self.client = client
        self.events_file = events_file

        self._state = SessionState()
        self._listeners: List[StateListener] = []
        self._request_id = 0

        self.resume: Union[str, BinaryFile, None] = None
        self.job_description: str = ""
        self.input_error: Optional[str] = None

    # --- State ---

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def request_id(self) -> int:
        """Number of submissions accepted so far."""
        return self._request_id

    def subscribe(self, listener: StateListener) -> None:
        """Call listener with the new state after every transition."""
        self._listeners.append(listener)

    def _dispatch(self, event: SessionEvent) -> None:
        old_state = self._state
        self._state = transition(old_state, event)
        _log_debug(f"State {old_state.status.value} -> {self._state.status.value}")
        self._record("state_change", old_status=old_state.status.value, new_status=self._state.status.value)
        for listener in self._listeners:
            try:
                listener(self._state)
            except Exception as e:
                _log_error(f"State listener failed: {type(e).__name__}: {e}")

    def _record(self, event_type: str, **fields) -> None:
        if self.events_file is None:
            return
        try:
            log_session_event(
                self.events_file, event_type, self._request_id, source="analysis", **fields
            )
        except OSError as e:
            _log_warning(f"Could not write session event to {self.events_file}: {e}")

    # --- Inputs ---

    def set_resume_text(self, text: str) -> None:
        """Use pasted resume text."""
        self.resume = text
        self.input_error = None

    def set_job_description(self, text: str) -> None:
        self.job_description = text

    async def attach_resume_file(self, upload: BinaryFile) -> Optional[str]:
        """
        Take a resume upload.

        JSON deployments extract the text right away; multipart deployments
        only check the format and keep the file for upload. A rejected file
        clears the resume so submission stays disabled.

        Returns:
            None on success, otherwise the message shown to the user
        """
        try:
            ensure_supported(upload)
            if self.builder.strategy is RequestStrategy.JSON:
                self.resume = await extract_text(upload)
            else:
                self.resume = upload
        except ResumeImproverError as e:
            self.resume = None
            self.input_error = e.message
            self._record("input_rejected", filename=upload.filename, reason=e.message)
            return e.message

        self.input_error = None
        return None

    @property
    def can_submit(self) -> bool:
        """Submission gate: inputs present, carried by the strategy, nothing in flight."""
        return (
            not self._state.is_loading
            and self.builder.accepts(self.resume)
            and bool(self.job_description.strip())
        )

    # --- Submission ---

    async def submit(self) -> bool:
        """
        Run one analysis to completion.

        Returns:
            False if the submission was ignored (already loading or inputs
            missing), True once a result or error is on display
        """
        if self._state.is_loading:
            log_rejected_submission("a submission is already in flight")
            return False
        if not self.can_submit:
            log_rejected_submission("resume and job description are both required")
            return False

        self._request_id += 1
        request_id = self._request_id
        self._dispatch(Submitted())

        start_time = time.time()
        result = await self._run(request_id)
        log_submission_result(request_id, result, time.time() - start_time)

        self._dispatch(Completed(result))
        return True

    async def _run(self, request_id: int) -> NormalizedResult:
        """Build, send and normalize. Every failure comes back as a result, so LOADING always ends."""
        resume = RawText(self.resume) if isinstance(self.resume, str) else self.resume
        try:
            request = self.builder.build(resume, self.job_description)
            log_submission_start(request_id, request.strategy.value, request.url)
            response = await self.client.send(request)
            return normalize(response)
        except TransportError:
            return NormalizedResult.failure(CONNECTIVITY_ERROR_MESSAGE)
        except ResumeImproverError as e:
            return NormalizedResult.failure(e.message)
        except Exception as e:
            _log_error(f"Submission #{request_id} failed unexpectedly: {type(e).__name__}: {e}")
            return NormalizedResult.failure(CONNECTIVITY_ERROR_MESSAGE)

    def reset(self) -> bool:
        """
        Clear a displayed result. Ignored while a submission is in flight.

        Returns:
            True if the session is now idle
        """
        if self._state.is_loading:
            _log_info("Reset ignored while loading")
            return False
        self._dispatch(Reset())
        return True
