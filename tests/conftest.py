"""Shared pytest fixtures for QuizTick tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtCore import QCoreApplication

from quiztick.timer.engine import CountdownEngine, MarkCueMode

from helpers import CueRecorder


@pytest.fixture(scope="session")
def qapp():
    """A single Qt application instance shared across the entire test run."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    yield app


@pytest.fixture
def cues():
    """Recording stand-in for the audio collaborator."""
    return CueRecorder()


@pytest.fixture
def engine(qapp, cues):
    """Fresh CountdownEngine with the default every-tick mark cue."""
    return CountdownEngine(parent=None, play_cue=cues)


@pytest.fixture
def engine_boundary(qapp, cues):
    """Fresh CountdownEngine that only recomputes marks on exact boundaries."""
    return CountdownEngine(
        parent=None, play_cue=cues, mark_cue_mode=MarkCueMode.BOUNDARY,
    )


@pytest.fixture
def engine_silent(qapp):
    """Fresh CountdownEngine with no audio collaborator at all."""
    return CountdownEngine(parent=None)
