"""Audio cues."""

from .sounds import SoundManager, CUE_NAMES

__all__ = ["SoundManager", "CUE_NAMES"]
