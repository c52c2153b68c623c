"""Countdown state machine for QuizTick.

States
------
IDLE        Nothing started yet (or reset).
RUNNING     Counting down; ``tick()`` takes effect.
PAUSED      Frozen mid-run; ticks are ignored until ``resume()``.
FINISHED    Remaining time hit 0.  Looks like PAUSED with nothing left.

Transitions
-----------
IDLE | PAUSED | FINISHED → RUNNING    (start: always a fresh run)
RUNNING → RUNNING                     (tick, remaining > 0)
RUNNING → FINISHED                    (tick, remaining reaches 0)
RUNNING → PAUSED                      (pause)
PAUSED → RUNNING                      (resume)
Any → IDLE                            (reset)

The engine owns no timer.  Whoever drives it calls ``tick()`` once per
second and must stop doing so after pause / finish (extra ticks are
ignored anyway).

Mark counting
-------------
After every decrement the engine recomputes::

    elapsed = per_mark - (remaining % per_mark)
    marks_completed = ceil(elapsed / per_mark)

``elapsed`` is always in ``1..per_mark``, so ``marks_completed`` becomes 1
on the first tick and stays there, and the mark cue fires on every tick.
``MarkCueMode.BOUNDARY`` restricts the recomputation (and the cue) to
exact multiples of ``per_mark``.  Use ``whole_marks_elapsed`` for an
honest progress count.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable

from PyQt6.QtCore import QObject, pyqtSignal

from ..errors import InvalidConfiguration, InvalidInput

logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class CountdownPhase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"


class MarkCueMode(Enum):
    EVERY_TICK = "every_tick"
    BOUNDARY = "boundary"


# ── constants ─────────────────────────────────────────────────────────────

CUE_MARK_COMPLETE = "mark_complete"
CUE_SESSION_END = "session_end"


# ── state ─────────────────────────────────────────────────────────────────


@dataclass
class CountdownState:
    remaining: int = 0
    marks_completed: int = 0
    running: bool = False
    paused: bool = False

    @property
    def phase(self) -> CountdownPhase:
        if self.running:
            return CountdownPhase.RUNNING
        if self.paused:
            if self.remaining == 0:
                return CountdownPhase.FINISHED
            return CountdownPhase.PAUSED
        return CountdownPhase.IDLE


# ── helpers ───────────────────────────────────────────────────────────────


def parse_mark_count(value: int | str | None) -> int:
    """Turn the mark-count field into a positive int or raise InvalidInput."""
    if isinstance(value, bool):
        raise InvalidInput(f"Number of marks must be a whole number, got {value!r}")
    if isinstance(value, int):
        count = value
    else:
        text = (value or "").strip()
        if not text:
            raise InvalidInput("Number of marks is empty")
        try:
            if not (text.isascii() and text.lstrip("+-").isdigit()):
                raise ValueError(text)
            count = int(text)
        except ValueError:
            raise InvalidInput(
                f"Number of marks must be a whole number, got {value!r}"
            ) from None
    if count <= 0:
        raise InvalidInput(f"Number of marks must be positive, got {count}")
    return count


def format_time(seconds: int) -> str:
    """``MM:SS`` with zero padding.  Minutes are not wrapped into hours."""
    seconds = max(0, seconds)
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def _ceil_div(a: int, b: int) -> int:
    return (a + b - 1) // b


# ── engine ────────────────────────────────────────────────────────────────


class CountdownEngine(QObject):
    """Mark-paced countdown driven by an external one-second tick.

    Signals
    -------
    remaining_changed(remaining_seconds: int)
        Emitted on start, on every effective tick (after the mark count
        has been updated) and on reset.
    phase_changed(new_phase: CountdownPhase)
        Emitted on every phase transition.
    mark_boundary_reached(marks_completed: int)
        Emitted whenever the mark recomputation yields a positive count.
    countdown_finished()
        Emitted once, on the tick that brings remaining time to 0.
    """

    remaining_changed = pyqtSignal(int)
    phase_changed = pyqtSignal(object)
    mark_boundary_reached = pyqtSignal(int)
    countdown_finished = pyqtSignal()

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        play_cue: Callable[[str], None] | None = None,
        mark_cue_mode: MarkCueMode = MarkCueMode.EVERY_TICK,
    ) -> None:
        super().__init__(parent)
        self._play_cue = play_cue
        self._mark_cue_mode = mark_cue_mode

        self._state = CountdownState()
        self._mark_count: int = 0
        self._per_mark: int = 0

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> CountdownState:
        """A snapshot; mutating it does not touch the engine."""
        return replace(self._state)

    @property
    def phase(self) -> CountdownPhase:
        return self._state.phase

    @property
    def remaining(self) -> int:
        return self._state.remaining

    @property
    def marks_completed(self) -> int:
        return self._state.marks_completed

    @property
    def is_running(self) -> bool:
        return self._state.running

    @property
    def is_paused(self) -> bool:
        return self._state.paused

    @property
    def mark_count(self) -> int:
        return self._mark_count

    @property
    def per_mark_duration(self) -> int:
        return self._per_mark

    @property
    def total_duration(self) -> int:
        return self._mark_count * self._per_mark

    @property
    def percent_complete(self) -> float:
        """0.0 → 1.0 progress through the current run."""
        total = self.total_duration
        if total <= 0:
            return 0.0
        return (total - self._state.remaining) / total

    @property
    def whole_marks_elapsed(self) -> int:
        """Full per-mark intervals that have actually gone by."""
        if self._per_mark <= 0:
            return 0
        return (self.total_duration - self._state.remaining) // self._per_mark

    @property
    def formatted_remaining(self) -> str:
        return format_time(self._state.remaining)

    @property
    def mark_cue_mode(self) -> MarkCueMode:
        return self._mark_cue_mode

    @mark_cue_mode.setter
    def mark_cue_mode(self, value: MarkCueMode) -> None:
        self._mark_cue_mode = value

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self, mark_count: int | str, per_mark_duration: int) -> None:
        """Begin a fresh run of ``mark_count * per_mark_duration`` seconds.

        Raises InvalidInput / InvalidConfiguration without touching state.
        """
        marks = parse_mark_count(mark_count)
        if (
            not isinstance(per_mark_duration, int)
            or isinstance(per_mark_duration, bool)
            or per_mark_duration <= 0
        ):
            raise InvalidConfiguration(
                f"Time per mark must be a positive number of seconds, got {per_mark_duration!r}"
            )

        self._mark_count = marks
        self._per_mark = per_mark_duration
        self._state = CountdownState(
            remaining=marks * per_mark_duration,
            marks_completed=0,
            running=True,
            paused=False,
        )
        logger.info(
            "Countdown started: %d marks x %ds = %s",
            marks, per_mark_duration, self.formatted_remaining,
        )
        self.remaining_changed.emit(self._state.remaining)
        self.phase_changed.emit(CountdownPhase.RUNNING)

    def tick(self) -> None:
        """Advance one second.  Ignored unless running."""
        state = self._state
        if not state.running:
            logger.debug("Tick ignored in phase %s", state.phase.value)
            return
        if state.remaining <= 0:
            return

        state.remaining -= 1
        self._update_marks()
        self.remaining_changed.emit(state.remaining)

        if state.remaining == 0:
            self._finish()

    def pause(self) -> None:
        if not self._state.running:
            return
        self._state.running = False
        self._state.paused = True
        logger.info("Countdown paused at %s", self.formatted_remaining)
        self.phase_changed.emit(CountdownPhase.PAUSED)

    def resume(self) -> None:
        """Continue a paused run from where it stopped."""
        if self.phase is not CountdownPhase.PAUSED:
            return
        self._state.running = True
        self._state.paused = False
        logger.info("Countdown resumed at %s", self.formatted_remaining)
        self.phase_changed.emit(CountdownPhase.RUNNING)

    def reset(self) -> None:
        """Drop the current run and go back to IDLE."""
        self._state = CountdownState()
        self._mark_count = 0
        self._per_mark = 0
        self.remaining_changed.emit(0)
        self.phase_changed.emit(CountdownPhase.IDLE)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _update_marks(self) -> None:
        per_mark = self._per_mark
        remaining = self._state.remaining
        if (
            self._mark_cue_mode is MarkCueMode.BOUNDARY
            and remaining % per_mark != 0
        ):
            return

        elapsed = per_mark - remaining % per_mark
        if elapsed <= 0:
            return
        self._state.marks_completed = _ceil_div(elapsed, per_mark)

        if self._state.marks_completed > 0:
            self.mark_boundary_reached.emit(self._state.marks_completed)
            self._cue(CUE_MARK_COMPLETE)

    def _finish(self) -> None:
        self._state.running = False
        self._state.paused = True
        logger.info("Countdown finished (%d marks)", self._mark_count)
        self.phase_changed.emit(CountdownPhase.FINISHED)
        self.countdown_finished.emit()
        self._cue(CUE_SESSION_END)

    def _cue(self, cue_id: str) -> None:
        if self._play_cue is None:
            return
        try:
            self._play_cue(cue_id)
        except Exception:
            logger.warning("Audio cue %r failed", cue_id, exc_info=True)
