"""Run a countdown from the terminal: python -m quiztick SUBJECT MARKS."""

from __future__ import annotations

import argparse
import logging
import sys

from PyQt6.QtCore import QCoreApplication, QTimer

from .audio.sounds import SoundManager
from .controller import StudyTimerController
from .errors import InvalidConfiguration, InvalidInput
from .settings import Settings, load_settings, save_settings
from .subjects import SUBJECT_DURATIONS, CustomSubject, Subject
from .timer.engine import MarkCueMode

# Let the end cue play out before the event loop exits.
QUIT_DELAY_MS = 1500


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quiztick",
        description="Count down the time for a set of exam marks / questions.",
    )
    parser.add_argument(
        "subject",
        nargs="?",
        help="subject slug or name, e.g. act_math or 'SAT Math' "
             "(default: saved subject)",
    )
    parser.add_argument("marks", nargs="?", default="", help="number of marks / questions")
    parser.add_argument(
        "--seconds-per-mark", type=int, default=None,
        help="time per question for the custom subject",
    )
    parser.add_argument("--title", default=None, help="custom subject title")
    parser.add_argument("--mute", action="store_true", help="no audio cues")
    parser.add_argument("--volume", type=int, default=None, help="cue volume 0-100")
    parser.add_argument(
        "--cue-mode",
        choices=[m.value for m in MarkCueMode],
        default=None,
        help="when the mark cue plays",
    )
    parser.add_argument(
        "--save", action="store_true",
        help="remember subject, custom subject and audio options for next time",
    )
    parser.add_argument("--list", action="store_true", help="list subjects and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def _list_subjects() -> None:
    for subject in Subject:
        seconds = SUBJECT_DURATIONS.get(subject)
        pace = f"{seconds}s per mark" if seconds else "set with --seconds-per-mark"
        print(f"{subject.value:<22}{subject.label:<22}{pace}")


def _remember(
    settings: Settings,
    subject: Subject,
    custom: CustomSubject,
    volume: int,
    cue_mode: MarkCueMode,
    mute: bool,
) -> None:
    settings.subject = subject.value
    settings.custom_title = custom.title
    settings.custom_seconds_per_mark = custom.seconds_per_mark
    settings.sound_volume = max(0, min(volume, 100))
    settings.mark_cue_mode = cue_mode.value
    if mute:
        settings.sound_enabled = False
    save_settings(settings)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.list:
        _list_subjects()
        return 0

    settings = load_settings()
    try:
        subject = Subject.from_name(args.subject) if args.subject else settings.selected_subject()
        custom = settings.custom_subject()
        if args.title is not None:
            custom.title = args.title
        if args.seconds_per_mark is not None:
            custom.seconds_per_mark = args.seconds_per_mark
        cue_mode = MarkCueMode(args.cue_mode) if args.cue_mode else settings.cue_mode()
    except (InvalidConfiguration, ValueError) as exc:
        print(f"quiztick: {exc}", file=sys.stderr)
        return 2

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    app.setApplicationName("QuizTick")

    sounds = SoundManager()
    volume = args.volume if args.volume is not None else settings.sound_volume
    sounds.set_volume(volume)
    sounds.set_enabled(settings.sound_enabled and not args.mute)

    controller = StudyTimerController(
        play_cue=sounds.play,
        mark_cue_mode=cue_mode,
        subject=subject,
        custom_subject=custom,
    )
    engine = controller.engine

    def _show(_remaining: int) -> None:
        print(f"\r{engine.formatted_remaining}  marks: {engine.marks_completed}",
              end="", flush=True)

    def _done() -> None:
        print()
        print(f"Time! {engine.mark_count} marks of {subject.label} done.")
        QTimer.singleShot(QUIT_DELAY_MS, app.quit)

    engine.remaining_changed.connect(_show)
    engine.countdown_finished.connect(_done)

    try:
        controller.start(args.marks)
    except (InvalidInput, InvalidConfiguration) as exc:
        print(f"quiztick: cannot start: {exc}", file=sys.stderr)
        return 2

    if args.save:
        _remember(settings, subject, custom, volume, cue_mode, args.mute)

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
