"""Sound synthesis and playback using numpy + QSoundEffect.

Sounds are generated programmatically as WAV files and cached to disk so
subsequent launches skip the synthesis.

Sound names
-----------
- ``bowl``  — singing bowl struck when the countdown elapses
- ``click`` — subtle tick when the timer is started or stopped
"""

from __future__ import annotations

import io
import wave
from collections.abc import Callable
from pathlib import Path

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect


# ── paths ────────────────────────────────────────────────────────────────

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "Calm"
SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

SOUND_NAMES = ("bowl", "click")

SAMPLE_RATE = 44100

# Partials of a small Tibetan bowl: (frequency ratio, amplitude, decay rate 1/s)
BOWL_FUNDAMENTAL = 220.0
BOWL_PARTIALS = (
    (1.00, 0.50, 0.55),
    (2.71, 0.25, 0.90),
    (5.15, 0.12, 1.60),
    (8.40, 0.05, 2.80),
)


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _timeline(duration_s: float) -> np.ndarray:
    return np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)


def _sine(freq: float, duration_s: float) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_s* seconds."""
    return np.sin(2 * np.pi * freq * _timeline(duration_s))


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
#  SOUND GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def _generate_bowl(duration_s: float = 6.0) -> bytes:
    """Struck singing bowl: inharmonic partials, each decaying exponentially.

    A slow 3 Hz beat on the fundamental gives the characteristic wobble.
    """
    t = _timeline(duration_s)
    signal = np.zeros_like(t)
    for ratio, amplitude, decay in BOWL_PARTIALS:
        freq = BOWL_FUNDAMENTAL * ratio
        signal += amplitude * np.sin(2 * np.pi * freq * t) * np.exp(-decay * t)
    signal *= 1.0 - 0.15 * (1 - np.cos(2 * np.pi * 3.0 * t)) / 2

    # 5 ms attack so the strike doesn't click
    attack = int(SAMPLE_RATE * 0.005)
    signal[:attack] *= np.linspace(0.0, 1.0, attack)
    return _to_wav_bytes(signal * 0.8)


def _generate_click() -> bytes:
    """Very short high tick, padded so QSoundEffect doesn't clip it."""
    duration = 0.015
    tick = _sine(1200.0, duration) * 0.2
    tick *= np.linspace(1.0, 0.0, len(tick))
    padded = np.concatenate([tick, np.zeros(int(SAMPLE_RATE * 0.03))])
    return _to_wav_bytes(padded)


# Map sound names to generator functions
_GENERATORS: dict[str, Callable[[], bytes]] = {
    "bowl": _generate_bowl,
    "click": _generate_click,
}


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Manages sound synthesis, caching, and playback.

    Usage::

        mgr = SoundManager(parent=self)
        mgr.set_volume(70)
        if not mgr.play("bowl"):
            show_visual_notice()
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

    def play(self, name: str) -> bool:
        """Play a sound by name.

        Returns False when nothing could be played (disabled, muted,
        unknown name or a source that failed to load), so callers can
        fall back to a visual notice.
        """
        if not self._enabled or self._volume == 0:
            return False
        effect = self._effects.get(name)
        if effect is None or effect.status() == QSoundEffect.Status.Error:
            return False
        effect.play()
        return True

    @property
    def volume(self) -> int:
        """Current volume as 0-100 integer."""
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        """Generate any missing WAV files to the cache directory."""
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        for name, gen_fn in _GENERATORS.items():
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                path.write_bytes(gen_fn())

    def _load_effects(self) -> None:
        """Create QSoundEffect instances from cached WAV files."""
        for name in SOUND_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if path.exists():
                effect = QSoundEffect(self)
                effect.setSource(QUrl.fromLocalFile(str(path)))
                effect.setVolume(self._volume)
                self._effects[name] = effect
