"""Subject catalog — how long one mark / question is worth.

Built-in subjects carry a fixed pace (seconds per mark) taken from the
official exam timings.  ``CUSTOM`` takes its pace from a user-edited
:class:`CustomSubject`.

Usage::

    seconds = duration_for(Subject.ACT_MATH)             # 60
    seconds = duration_for(Subject.CUSTOM, custom.seconds_per_mark)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import InvalidConfiguration, InvalidInput


# ── enums ─────────────────────────────────────────────────────────────────


class Subject(Enum):
    STANDARD_IB = "standard_ib"
    SAT_READING_WRITING = "sat_reading_writing"
    SAT_MATH = "sat_math"
    ACT_ENGLISH = "act_english"
    ACT_MATH = "act_math"
    ACT_READING = "act_reading"
    ACT_SCIENCE = "act_science"
    CUSTOM = "custom"

    @property
    def label(self) -> str:
        """Human-readable name shown in the subject picker."""
        return SUBJECT_LABELS[self]

    @property
    def is_custom(self) -> bool:
        return self is Subject.CUSTOM

    @classmethod
    def from_name(cls, text: str) -> Subject:
        """Resolve a slug (``act_math``), member name or picker label.

        Matching is case-insensitive; dashes and spaces count as
        underscores, so ``"ACT Math"`` and ``"act-math"`` both work.
        """
        if not isinstance(text, str):
            raise InvalidConfiguration(f"Unknown subject: {text!r}")
        key = text.strip().lower()
        for subject in cls:
            if key in (subject.value, subject.label.lower()):
                return subject
        normalised = key.replace("-", "_").replace(" ", "_").replace("/", "_")
        for subject in cls:
            if normalised == subject.value:
                return subject
        raise InvalidConfiguration(f"Unknown subject: {text!r}")


# ── constants ─────────────────────────────────────────────────────────────

SUBJECT_LABELS: dict[Subject, str] = {
    Subject.STANDARD_IB: "IB Standard",
    Subject.SAT_READING_WRITING: "SAT Reading/Writing",
    Subject.SAT_MATH: "SAT Math",
    Subject.ACT_ENGLISH: "ACT English",
    Subject.ACT_MATH: "ACT Math",
    Subject.ACT_READING: "ACT Reading",
    Subject.ACT_SCIENCE: "ACT Science",
    Subject.CUSTOM: "Custom",
}

# Seconds per mark.  CUSTOM is deliberately absent.
SUBJECT_DURATIONS: dict[Subject, int] = {
    Subject.STANDARD_IB: 90,            # 1:30
    Subject.SAT_READING_WRITING: 71,    # 1:11
    Subject.SAT_MATH: 95,               # 1:35
    Subject.ACT_ENGLISH: 36,
    Subject.ACT_MATH: 60,
    Subject.ACT_READING: 52,
    Subject.ACT_SCIENCE: 52,
}


# ── custom subject ────────────────────────────────────────────────────────


@dataclass
class CustomSubject:
    """A user-defined subject.  Owned by the caller, edited in a form."""

    title: str = ""
    seconds_per_mark: int = 0

    @property
    def is_valid(self) -> bool:
        return _is_positive_int(self.seconds_per_mark)

    @classmethod
    def from_form(cls, title: str, seconds_text: str) -> CustomSubject:
        """Build a custom subject from the editor's raw text fields."""
        text = (seconds_text or "").strip()
        try:
            if not (text.isascii() and text.lstrip("+-").isdigit()):
                raise ValueError(text)
            seconds = int(text)
        except ValueError:
            raise InvalidInput(
                f"Time per question must be a whole number of seconds, got {seconds_text!r}"
            ) from None
        if seconds <= 0:
            raise InvalidConfiguration(
                f"Time per question must be positive, got {seconds}"
            )
        return cls(title=(title or "").strip(), seconds_per_mark=seconds)


# ── lookup ────────────────────────────────────────────────────────────────


def duration_for(subject: Subject, custom_duration: int | None = None) -> int:
    """Seconds per mark for *subject*.

    For built-in subjects *custom_duration* is ignored.  For ``CUSTOM`` it is
    required and must be a positive integer, otherwise
    :class:`InvalidConfiguration` is raised.
    """
    if subject is not Subject.CUSTOM:
        return SUBJECT_DURATIONS[subject]
    if custom_duration is None:
        raise InvalidConfiguration("Custom subject has no time per question set")
    if not _is_positive_int(custom_duration):
        raise InvalidConfiguration(
            f"Custom time per question must be a positive integer, got {custom_duration!r}"
        )
    return custom_duration


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0
