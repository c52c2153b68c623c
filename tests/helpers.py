"""Shared test helpers for QuizTick."""

from quiztick.timer.engine import CountdownEngine


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class CueRecorder:
    """Fake ``play_cue``: remembers every cue id it was asked to play."""

    def __init__(self):
        self.played: list[str] = []

    def __call__(self, cue_id: str) -> None:
        self.played.append(cue_id)

    def count(self, cue_id: str) -> int:
        return self.played.count(cue_id)

    def clear(self):
        self.played.clear()


def run_ticks(engine: CountdownEngine, n: int) -> None:
    """Call ``tick()`` *n* times, the way the one-second source would."""
    for _ in range(n):
        engine.tick()
