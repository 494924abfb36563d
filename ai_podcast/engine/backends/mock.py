"""
Mock Backend - For running the podcast pipeline offline.

Produces WAV audio whose length follows the text.
"""

from __future__ import annotations

import io

import numpy as np
import soundfile as sf

from ai_podcast.engine.base import BaseSynthesizer

# Tone per voice so hosts are told apart when listening to a mock run
VOICE_TONES = {
    "onyx": 196.0,
    "echo": 247.0,
    "nova": 330.0,
}


class MockSynthesizer(BaseSynthesizer):
    """Mock speech backend for tests and dry runs without an API key.

    Produces silence (or a sine tone) of estimated duration.
    """

    def __init__(
        self,
        generate_silence: bool = True,
        sample_rate: int = 24000,
        seconds_per_word: float = 0.15,
    ):
        """Initialize mock backend.

        Args:
            generate_silence: If True, output silence. If False, output a tone.
            sample_rate: Sample rate of the generated WAV.
            seconds_per_word: Duration budget per word at speed 1.0.
        """
        self._silence = generate_silence
        self._sample_rate = sample_rate
        self._seconds_per_word = seconds_per_word

    @property
    def name(self) -> str:
        return "mock"

    @property
    def file_extension(self) -> str:
        return "wav"

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    def render(self, text: str, voice: str, speed: float = 1.0) -> np.ndarray:
        """Generate the raw samples for one line."""
        word_count = max(1, len(text.split()))
        duration = word_count * self._seconds_per_word / max(speed, 0.01)
        num_samples = int(duration * self._sample_rate)

        if self._silence:
            return np.zeros(num_samples, dtype=np.float32)

        frequency = VOICE_TONES.get(voice, 440.0)
        t = np.linspace(0, duration, num_samples, dtype=np.float32)
        return (0.3 * np.sin(2 * np.pi * frequency * t)).astype(np.float32)

    def synthesize(
        self,
        text: str,
        voice: str,
        *,
        speed: float = 1.0,
        credential: str | None = None,
    ) -> bytes:
        """Generate mock audio encoded as WAV."""
        samples = self.render(text, voice, speed)
        buffer = io.BytesIO()
        sf.write(buffer, samples, self._sample_rate, format="WAV", subtype="PCM_16")
        return buffer.getvalue()

    def get_voices(self) -> list[str]:
        """Mock supports all voices."""
        return []

    def supports_voice(self, voice_id: str) -> bool:
        return True
