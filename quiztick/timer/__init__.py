"""Timer package."""

from .engine import (
    CountdownEngine,
    CountdownState,
    CountdownPhase,
    MarkCueMode,
    CUE_MARK_COMPLETE,
    CUE_SESSION_END,
    format_time,
    parse_mark_count,
)

__all__ = [
    "CountdownEngine",
    "CountdownState",
    "CountdownPhase",
    "MarkCueMode",
    "CUE_MARK_COMPLETE",
    "CUE_SESSION_END",
    "format_time",
    "parse_mark_count",
]
