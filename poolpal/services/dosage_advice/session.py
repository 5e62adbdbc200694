"""Per-form-session advisory state machine.

Synopsis:
Tracks one advisory interaction per form session as
IDLE -> REQUESTING -> {SUCCEEDED, FAILED}. A session refuses a new submission
while its request is in flight; a new submission clears the previous outcome
before the request starts.

Glossary:
- Form session: One browser's use of the pool page, identified by a token kept
  in the signed Flask session cookie.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from enum import Enum
from typing import Callable, Optional

from .types import AdvisoryBusy, AdvisoryFailure, DosageRequest, DosageResponse


class AdvisoryState(str, Enum):
    IDLE = "idle"
    REQUESTING = "requesting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class AdvisorySession:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._state = AdvisoryState.IDLE
        self._result: Optional[DosageResponse] = None
        self._error: Optional[AdvisoryFailure] = None

    @property
    def state(self) -> AdvisoryState:
        return self._state

    @property
    def result(self) -> Optional[DosageResponse]:
        return self._result

    @property
    def error(self) -> Optional[AdvisoryFailure]:
        return self._error

    @property
    def in_flight(self) -> bool:
        return self._state is AdvisoryState.REQUESTING

    def begin(self) -> None:
        with self._lock:
            if self._state is AdvisoryState.REQUESTING:
                raise AdvisoryBusy("A dosage request is already in flight for this session.")
            self._state = AdvisoryState.REQUESTING
            self._result = None
            self._error = None

    def succeed(self, response: DosageResponse) -> None:
        with self._lock:
            self._require_requesting()
            self._state = AdvisoryState.SUCCEEDED
            self._result = response

    def fail(self, error: AdvisoryFailure) -> None:
        with self._lock:
            self._require_requesting()
            self._state = AdvisoryState.FAILED
            self._error = error

    def submit(
        self,
        request: DosageRequest,
        advise: Callable[[DosageRequest], DosageResponse],
    ) -> DosageResponse:
        """Run one advisory round trip under the in-flight guard."""
        self.begin()
        try:
            response = advise(request)
        except AdvisoryFailure as exc:
            self.fail(exc)
            raise
        except BaseException as exc:
            self.fail(AdvisoryFailure(str(exc) or exc.__class__.__name__))
            raise
        self.succeed(response)
        return response

    def _require_requesting(self) -> None:
        if self._state is not AdvisoryState.REQUESTING:
            raise RuntimeError(f"No advisory request in flight (state={self._state.value}).")


class AdvisorySessionRegistry:
    """Process-local map of form-session tokens to advisory sessions."""

    def __init__(self, max_sessions: int = 1024) -> None:
        self._lock = threading.Lock()
        self._sessions: "OrderedDict[str, AdvisorySession]" = OrderedDict()
        self._max_sessions = max(1, max_sessions)

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, token: str) -> AdvisorySession:
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                session = AdvisorySession()
                self._sessions[token] = session
                self._evict()
            else:
                self._sessions.move_to_end(token)
            return session

    def _evict(self) -> None:
        # Oldest first; sessions with a request in flight are never dropped.
        for token in list(self._sessions):
            if len(self._sessions) <= self._max_sessions:
                return
            if not self._sessions[token].in_flight:
                del self._sessions[token]
