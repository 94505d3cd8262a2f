"""
Study session timer.

A count-up stopwatch driven by a one-second repeating tick. Elapsed time is
the number of ticks received while running; there is no wall-clock
reconciliation. Finishing a run performs exactly one persistence write.

States: IDLE -> RUNNING <-> PAUSED -> SAVING -> IDLE
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from enum import Enum
from typing import Any

from apscheduler.schedulers.background import BackgroundScheduler

from schemas import utc_now_iso

logger = logging.getLogger(__name__)

MIN_SESSION_SECONDS = 10
TICK_JOB_ID = "study_timer_tick"


class TimerState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    SAVING = "saving"


class TimerError(Exception):
    """Base class for timer errors."""


class TimerStateError(TimerError):
    """Operation not permitted in the timer's current state."""


class NoSubjectSelectedError(TimerError):
    """A session can't be saved without a subject."""


class SessionTooShortError(TimerError):
    """A session must last at least MIN_SESSION_SECONDS."""


def format_duration(seconds: int) -> str:
    """Render seconds as MM:SS, or HH:MM:SS from one hour up."""
    hours, rest = divmod(int(seconds), 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


class SchedulerTicker:
    """Calls a function every second on an APScheduler background thread."""

    def __init__(self, interval_seconds: float = 1.0):
        self.interval_seconds = interval_seconds
        self._scheduler = BackgroundScheduler(daemon=True)

    def start(self, callback: Callable[[], None]) -> None:
        if not self._scheduler.running:
            self._scheduler.start()
        self._scheduler.add_job(
            func=callback,
            trigger="interval",
            seconds=self.interval_seconds,
            id=TICK_JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=False,
        )

    def cancel(self) -> None:
        if self._scheduler.get_job(TICK_JOB_ID) is not None:
            self._scheduler.remove_job(TICK_JOB_ID)

    def shutdown(self) -> None:
        self.cancel()
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)


class StudyTimer:
    """Stopwatch for one study run.

    Args:
        save: Persists a finished run. Called once as
            ``save(subject_id=..., duration=..., date=..., notes=...)``.
        on_complete: Called with the saved record after a successful save.
        ticker: Object with ``start(callback)``, ``cancel()`` and
            ``shutdown()``. Defaults to a :class:`SchedulerTicker`.
    """

    def __init__(
        self,
        save: Callable[..., Any],
        on_complete: Callable[[Any], None] | None = None,
        ticker: Any = None,
        min_seconds: int = MIN_SESSION_SECONDS,
    ):
        self._save = save
        self._on_complete = on_complete
        self._ticker = ticker if ticker is not None else SchedulerTicker()
        self.min_seconds = min_seconds
        self._state = TimerState.IDLE
        self._seconds = 0
        self._lock = threading.Lock()

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def seconds(self) -> int:
        return self._seconds

    @property
    def is_running(self) -> bool:
        return self._state is TimerState.RUNNING

    def display(self) -> str:
        return format_duration(self._seconds)

    def start(self) -> None:
        with self._lock:
            if self._state not in (TimerState.IDLE, TimerState.PAUSED):
                raise TimerStateError(f"Cannot start a timer that is {self._state.value}")
            self._state = TimerState.RUNNING
        self._ticker.start(self.tick)

    def stop(self) -> None:
        with self._lock:
            if self._state is not TimerState.RUNNING:
                raise TimerStateError(f"Cannot stop a timer that is {self._state.value}")
            self._state = TimerState.PAUSED
        self._ticker.cancel()

    def toggle(self) -> None:
        """Single play/pause control."""
        if self.is_running:
            self.stop()
        else:
            self.start()

    def tick(self) -> None:
        with self._lock:
            if self._state is TimerState.RUNNING:
                self._seconds += 1

    def reset(self) -> None:
        with self._lock:
            if self._state in (TimerState.RUNNING, TimerState.SAVING):
                raise TimerStateError(f"Cannot reset a timer that is {self._state.value}")
            self._seconds = 0
            self._state = TimerState.IDLE

    def finish(self, subject_id: int | None, notes: str = "") -> Any:
        """Save the accumulated run.

        Returns the saved record, or ``None`` if the write failed (the timer
        is then PAUSED again with its count intact).
        """
        with self._lock:
            if self._state in (TimerState.RUNNING, TimerState.SAVING):
                raise TimerStateError(f"Cannot finish a timer that is {self._state.value}")
            if not subject_id:
                raise NoSubjectSelectedError("Select a subject before finishing the session")
            if self._seconds < self.min_seconds:
                raise SessionTooShortError(
                    f"Study for at least {self.min_seconds} seconds before finishing"
                )
            self._state = TimerState.SAVING
            duration = self._seconds

        try:
            record = self._save(
                subject_id=subject_id,
                duration=duration,
                date=utc_now_iso(),
                notes=notes,
            )
        except Exception as e:
            logger.error("Error saving session: %s", e)
            with self._lock:
                self._state = TimerState.PAUSED
            return None

        with self._lock:
            self._seconds = 0
            self._state = TimerState.IDLE
        logger.info("Saved %ss session for subject %s", duration, subject_id)
        if self._on_complete is not None:
            self._on_complete(record)
        return record

    def close(self) -> None:
        """Cancel any pending tick and release the ticker."""
        with self._lock:
            if self._state is TimerState.RUNNING:
                self._state = TimerState.PAUSED
        self._ticker.shutdown()
