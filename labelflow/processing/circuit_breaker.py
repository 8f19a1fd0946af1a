"""Consecutive-failure circuit breaker guarding calls to the processing engine."""

import threading
import time
from collections.abc import Callable

from labelflow.logging.logger import Log
from labelflow.processing.exceptions import CircuitOpenError
from labelflow.processing.models import CircuitState


class CircuitBreaker:
    """Closed -> open after N consecutive failures; open -> half-open after a cool-down.

    A success in half-open closes the circuit, a failure re-opens it.
    """

    def __init__(
        self,
        *,
        name: str,
        failure_threshold: int = 5,
        reset_timeout: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if failure_threshold < 1:
            raise ValueError("failure_threshold must be >= 1")
        self._name = name
        self._failure_threshold = failure_threshold
        self._reset_timeout = reset_timeout
        self._clock = clock
        self._lock = threading.Lock()
        self._state = CircuitState.CLOSED
        self._failures = 0
        self._opened_at = 0.0

    @property
    def state(self) -> CircuitState:
        with self._lock:
            return self._current_state()

    def before_call(self) -> None:
        """Raise CircuitOpenError when calls are not currently permitted."""
        with self._lock:
            if self._current_state() is CircuitState.OPEN:
                raise CircuitOpenError(f"Circuit '{self._name}' is open")

    def record_success(self) -> None:
        with self._lock:
            if self._state is not CircuitState.CLOSED:
                Log.info(f"Circuit '{self._name}' closed")
            self._state = CircuitState.CLOSED
            self._failures = 0

    def record_failure(self) -> None:
        with self._lock:
            state = self._current_state()
            self._failures += 1
            if state is CircuitState.HALF_OPEN or self._failures >= self._failure_threshold:
                self._trip()

    def _current_state(self) -> CircuitState:
        # Caller holds the lock.
        if (
            self._state is CircuitState.OPEN
            and self._clock() - self._opened_at >= self._reset_timeout
        ):
            self._state = CircuitState.HALF_OPEN
            Log.info(f"Circuit '{self._name}' half-open")
        return self._state

    def _trip(self) -> None:
        self._state = CircuitState.OPEN
        self._opened_at = self._clock()
        Log.warning(
            f"Circuit '{self._name}' opened after {self._failures} consecutive failures"
        )
