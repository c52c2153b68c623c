"""Caller-side wiring for a single study countdown.

Owns the pieces the engine deliberately does not: the selected subject,
the custom-subject reference, the one-second ``QTimer`` tick source and
the cue player.  A front end (widget, console runner, tests) talks to
this object and listens to the engine's signals.
"""

from __future__ import annotations

import logging
from typing import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .subjects import CustomSubject, Subject, duration_for
from .timer.engine import CountdownEngine, CountdownPhase, MarkCueMode

logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 1000


class StudyTimerController(QObject):
    """Subject selection + tick source around a :class:`CountdownEngine`.

    Signals
    -------
    subject_changed(subject: Subject)
    custom_subject_requested()
        Emitted when CUSTOM is picked so the front end can open its
        custom-subject editor.
    """

    subject_changed = pyqtSignal(object)
    custom_subject_requested = pyqtSignal()

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        play_cue: Callable[[str], None] | None = None,
        mark_cue_mode: MarkCueMode = MarkCueMode.EVERY_TICK,
        subject: Subject = Subject.STANDARD_IB,
        custom_subject: CustomSubject | None = None,
    ) -> None:
        super().__init__(parent)
        self._subject = subject
        self._custom = custom_subject if custom_subject is not None else CustomSubject()

        self._engine = CountdownEngine(
            self, play_cue=play_cue, mark_cue_mode=mark_cue_mode,
        )
        self._engine.countdown_finished.connect(self._on_finished)

        # ── Qt timer ──────────────────────────────────────────────────
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(TICK_INTERVAL_MS)
        self._qt_timer.timeout.connect(self._on_tick)

    # ── properties ────────────────────────────────────────────────────

    @property
    def engine(self) -> CountdownEngine:
        return self._engine

    @property
    def subject(self) -> Subject:
        return self._subject

    @property
    def custom_subject(self) -> CustomSubject:
        return self._custom

    @property
    def ticking(self) -> bool:
        """True while the tick source is scheduled."""
        return self._qt_timer.isActive()

    @property
    def save_available(self) -> bool:
        """The front end shows its Save affordance while paused."""
        return self._engine.is_paused

    # ── subject selection ─────────────────────────────────────────────

    def select_subject(self, subject: Subject) -> None:
        self._subject = subject
        self.subject_changed.emit(subject)
        if subject.is_custom:
            self.custom_subject_requested.emit()

    def set_custom_subject(self, custom: CustomSubject) -> None:
        self._custom = custom

    def per_mark_duration(self) -> int:
        """Seconds per mark for the current selection (may raise)."""
        return duration_for(self._subject, self._custom.seconds_per_mark)

    # ── controls ──────────────────────────────────────────────────────

    @staticmethod
    def can_start(mark_text: str) -> bool:
        return bool((mark_text or "").strip())

    def start(self, mark_text: str | int) -> None:
        """Start a fresh countdown.  Errors propagate; nothing is scheduled."""
        per_mark = self.per_mark_duration()
        self._engine.start(mark_text, per_mark)
        self._qt_timer.start()  # restarts if already active

    def pause(self) -> None:
        self._qt_timer.stop()
        self._engine.pause()

    def resume(self) -> None:
        if self._engine.phase is not CountdownPhase.PAUSED:
            return
        self._engine.resume()
        self._qt_timer.start()

    def toggle(self, mark_text: str | int) -> None:
        """The play/pause button."""
        phase = self._engine.phase
        if phase is CountdownPhase.RUNNING:
            self.pause()
        elif phase is CountdownPhase.PAUSED:
            self.resume()
        else:
            self.start(mark_text)

    def stop(self) -> None:
        """Stop ticking and return the engine to IDLE."""
        self._qt_timer.stop()
        self._engine.reset()

    # ── internal ──────────────────────────────────────────────────────

    def _on_tick(self) -> None:
        self._engine.tick()

    def _on_finished(self) -> None:
        self._qt_timer.stop()
