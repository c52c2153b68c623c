"""Cue synthesis and playback using numpy + QSoundEffect.

Both cues are generated programmatically as WAV files using sine-wave
synthesis with ADSR envelopes.  Files are cached to disk so subsequent
launches skip synthesis.

Cue names
---------
- ``mark_complete`` — short single beep, once per mark interval
- ``session_end``   — three descending beeps when the countdown hits 0
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path
from typing import Callable

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..errors import ResourceUnavailable
from ..settings import APP_SUPPORT_DIR
from ..timer.engine import CUE_MARK_COMPLETE, CUE_SESSION_END

logger = logging.getLogger(__name__)


# ── paths ────────────────────────────────────────────────────────────────

SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

CUE_NAMES = (
    CUE_MARK_COMPLETE,
    CUE_SESSION_END,
)

SAMPLE_RATE = 44100


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _make_envelope(
    length: int,
    attack: int = 200,
    decay: int = 400,
    sustain_level: float = 0.7,
    release: int = 800,
) -> np.ndarray:
    """ADSR envelope (all durations in samples)."""
    env = np.ones(length, dtype=np.float64)
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    d_end = min(a + decay, length)
    if decay > 0 and d_end > a:
        env[a:d_end] = np.linspace(1.0, sustain_level, d_end - a)
    s_end = max(length - release, d_end)
    if s_end > d_end:
        env[d_end:s_end] = sustain_level
    if release > 0 and s_end < length:
        env[s_end:] = np.linspace(sustain_level, 0.0, length - s_end)
    return env


def _sine(freq: float, duration_s: float) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_s* seconds."""
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _silence(duration_s: float) -> np.ndarray:
    return np.zeros(int(SAMPLE_RATE * duration_s))


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit PCM WAV bytes."""
    samples = np.clip(samples, -1.0, 1.0)
    int_samples = (samples * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


# ═══════════════════════════════════════════════════════════════════════════
#  CUE GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def _generate_beep() -> bytes:
    """Mark complete — one short A5 beep.  Plays every second, keep it soft."""
    tone = _sine(880.0, 0.08) * 0.3
    env = _make_envelope(len(tone), attack=60, decay=300, sustain_level=0.3, release=900)
    return _to_wav_bytes(np.concatenate([tone * env, _silence(0.03)]))


def _generate_triple_beep() -> bytes:
    """Session end — three descending beeps (E6→C6→A5), last one held."""
    notes = [1318.51, 1046.50, 880.0]
    parts: list[np.ndarray] = []
    for i, freq in enumerate(notes):
        last = i == len(notes) - 1
        tone = _sine(freq, 0.45 if last else 0.14) * 0.55
        env = _make_envelope(
            len(tone),
            attack=80,
            decay=300,
            sustain_level=0.5 if last else 0.35,
            release=int(SAMPLE_RATE * (0.3 if last else 0.05)),
        )
        parts.append(tone * env)
        if not last:
            parts.append(_silence(0.06))
    parts.append(_silence(0.05))
    return _to_wav_bytes(np.concatenate(parts))


_GENERATORS: dict[str, Callable[[], bytes]] = {
    CUE_MARK_COMPLETE: _generate_beep,
    CUE_SESSION_END: _generate_triple_beep,
}


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Synthesises, caches and plays the countdown cues.

    ``play`` is the ``play_cue`` capability handed to the engine::

        mgr = SoundManager(parent=self)
        engine = CountdownEngine(play_cue=mgr.play)
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = 0.7  # 0.0–1.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}

        self._ensure_wav_files()
        self._load_effects()

    # ── public API ────────────────────────────────────────────────────

    def set_volume(self, level: int) -> None:
        """Set volume (0-100).  Updates all loaded effects."""
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def play(self, name: str) -> None:
        """Play a cue by name.  Fire-and-forget: failures are only logged."""
        if not self._enabled:
            return
        try:
            self.effect_for(name).play()
        except ResourceUnavailable as exc:
            logger.warning("Cannot play cue: %s", exc)

    def effect_for(self, name: str) -> QSoundEffect:
        """The loaded effect for *name*, or ResourceUnavailable."""
        effect = self._effects.get(name)
        if effect is None:
            raise ResourceUnavailable(f"No sound loaded for cue {name!r}")
        if effect.status() == QSoundEffect.Status.Error:
            raise ResourceUnavailable(
                f"Sound for cue {name!r} could not be decoded ({effect.source().toLocalFile()})"
            )
        return effect

    @property
    def volume(self) -> int:
        """Current volume as 0-100 integer."""
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def loaded_cues(self) -> tuple[str, ...]:
        return tuple(self._effects)

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        """Generate any missing WAV files to the cache directory."""
        try:
            self._sounds_dir.mkdir(parents=True, exist_ok=True)
            for name, gen_fn in _GENERATORS.items():
                path = self._sounds_dir / f"{name}.wav"
                if not path.exists():
                    path.write_bytes(gen_fn())
        except OSError as exc:
            logger.warning("Could not write cue files to %s: %s", self._sounds_dir, exc)

    def _load_effects(self) -> None:
        """Create QSoundEffect instances from cached WAV files."""
        for name in CUE_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                logger.warning("Cue file missing: %s", path)
                continue
            effect = QSoundEffect(self)
            effect.setSource(QUrl.fromLocalFile(str(path)))
            effect.setVolume(self._volume)
            self._effects[name] = effect
