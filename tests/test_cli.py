"""Tests for the console runner: arguments, error exits, full runs and --save."""

import json

import pytest
from PyQt6.QtCore import QTimer

from quiztick.__main__ import build_parser, main
from quiztick.settings import load_settings
from quiztick.subjects import SUBJECT_DURATIONS, Subject
from quiztick.timer.engine import MarkCueMode


@pytest.fixture(autouse=True)
def isolated_paths(tmp_path, monkeypatch):
    """Keep settings and cue files out of the real home directory."""
    monkeypatch.setattr("quiztick.settings.SETTINGS_PATH", tmp_path / "settings.json")
    monkeypatch.setattr("quiztick.audio.sounds.SOUNDS_DIR", tmp_path / "sounds")


class TestParser:

    def test_positionals(self):
        args = build_parser().parse_args(["act_math", "40"])
        assert args.subject == "act_math"
        assert args.marks == "40"

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.subject is None
        assert args.marks == ""
        assert args.seconds_per_mark is None
        assert args.mute is False
        assert args.cue_mode is None

    def test_cue_mode_choices(self):
        args = build_parser().parse_args(["custom", "3", "--cue-mode", "boundary"])
        assert MarkCueMode(args.cue_mode) is MarkCueMode.BOUNDARY

    def test_bad_cue_mode_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["custom", "3", "--cue-mode", "sometimes"])


@pytest.mark.usefixtures("qapp")
class TestMain:

    def test_list_subjects(self, capsys):
        assert main(["--list"]) == 0
        out = capsys.readouterr().out
        assert "act_math" in out
        assert "SAT Reading/Writing" in out
        assert "95s per mark" in out

    def test_unknown_subject(self, capsys):
        assert main(["gcse_physics", "10"]) == 2
        assert "Unknown subject" in capsys.readouterr().err

    def test_empty_marks_cannot_start(self, capsys):
        assert main(["act_math", "", "--mute"]) == 2
        assert "cannot start" in capsys.readouterr().err

    def test_non_numeric_marks_cannot_start(self, capsys):
        assert main(["act_math", "ten", "--mute"]) == 2
        assert "cannot start" in capsys.readouterr().err

    def test_custom_without_pace_cannot_start(self, capsys):
        assert main(["custom", "5", "--mute"]) == 2
        assert "cannot start" in capsys.readouterr().err

    def test_custom_zero_pace_cannot_start(self, capsys):
        assert main(["custom", "5", "--seconds-per-mark", "0", "--mute"]) == 2
        assert "cannot start" in capsys.readouterr().err


@pytest.fixture
def fast_clock(monkeypatch):
    """Tick every 10 ms and quit right after the end cue."""
    monkeypatch.setattr("quiztick.controller.TICK_INTERVAL_MS", 10)
    monkeypatch.setattr("quiztick.__main__.QUIT_DELAY_MS", 0)


@pytest.fixture
def watchdog(qapp):
    """Abort the event loop with status 1 if a countdown never finishes."""
    timer = QTimer()
    timer.setSingleShot(True)
    timer.timeout.connect(lambda: qapp.exit(1))
    timer.start(5000)
    yield timer
    timer.stop()


@pytest.mark.usefixtures("qapp", "fast_clock", "watchdog")
class TestCountdownRun:

    def test_runs_to_completion(self, capsys):
        code = main(["custom", "2", "--seconds-per-mark", "1", "--mute"])
        out = capsys.readouterr().out
        assert code == 0
        assert "00:02  marks: 0" in out
        assert "00:01  marks: 1" in out
        assert "00:00  marks: 1" in out
        assert "Time! 2 marks of Custom done." in out

    def test_builtin_subject_label_in_summary(self, capsys, monkeypatch):
        monkeypatch.setitem(SUBJECT_DURATIONS, Subject.ACT_ENGLISH, 1)
        assert main(["act_english", "1", "--mute"]) == 0
        assert "Time! 1 marks of ACT English done." in capsys.readouterr().out

    def test_title_alone_updates_saved_custom_subject(self, tmp_path):
        (tmp_path / "settings.json").write_text(
            json.dumps({"custom_title": "Old", "custom_seconds_per_mark": 1}),
            encoding="utf-8",
        )
        assert main(["custom", "1", "--title", "Latin", "--mute", "--save"]) == 0
        saved = load_settings()
        assert saved.custom_title == "Latin"
        assert saved.custom_seconds_per_mark == 1

    def test_save_remembers_choices(self, tmp_path):
        assert main([
            "custom", "1", "--seconds-per-mark", "1", "--title", "Bio",
            "--volume", "35", "--cue-mode", "boundary", "--mute", "--save",
        ]) == 0
        data = json.loads((tmp_path / "settings.json").read_text(encoding="utf-8"))
        assert data["subject"] == "custom"
        assert data["custom_title"] == "Bio"
        assert data["custom_seconds_per_mark"] == 1
        assert data["sound_volume"] == 35
        assert data["mark_cue_mode"] == "boundary"
        assert data["sound_enabled"] is False

    def test_no_save_without_flag(self, tmp_path):
        assert main(["custom", "1", "--seconds-per-mark", "1", "--mute"]) == 0
        assert not (tmp_path / "settings.json").exists()

    def test_saved_subject_used_when_omitted(self, tmp_path, capsys):
        (tmp_path / "settings.json").write_text(
            json.dumps({"subject": "custom", "custom_seconds_per_mark": 1}),
            encoding="utf-8",
        )
        assert main(["", "1", "--mute"]) == 0
        assert "marks of Custom done." in capsys.readouterr().out


@pytest.mark.usefixtures("qapp", "fast_clock", "watchdog")
class TestBadSettingsFile:

    def test_non_string_subject_falls_back(self, tmp_path, capsys):
        (tmp_path / "settings.json").write_text(
            json.dumps({"subject": 5}), encoding="utf-8",
        )
        # Saved subject is dropped, IB Standard is used; empty marks stop it cleanly
        assert main(["", "", "--mute"]) == 2
        assert "cannot start" in capsys.readouterr().err

    def test_string_volume_falls_back(self, tmp_path, capsys):
        (tmp_path / "settings.json").write_text(
            json.dumps({"sound_volume": "loud"}), encoding="utf-8",
        )
        assert main(["act_math", "", "--mute"]) == 2
        assert "cannot start" in capsys.readouterr().err

    def test_unknown_cue_mode_falls_back(self, tmp_path):
        (tmp_path / "settings.json").write_text(
            json.dumps({"mark_cue_mode": "sometimes", "custom_seconds_per_mark": 1}),
            encoding="utf-8",
        )
        assert main(["custom", "1", "--mute"]) == 0
