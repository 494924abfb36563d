"""
Engine Base - SpeechSynthesizer protocol.

All synthesizers turn one line of text into encoded audio bytes.

SYNTHESIZER CONTRACT:
    Synthesizers MUST:
        - Return the complete encoded file (mp3, wav, ...) as bytes
        - Report the matching extension via file_extension
        - Raise on failure (SynthesisBackendError preferred)
        - Be safe to call from a worker thread

    Synthesizers MUST NOT:
        - Write files (the segment store owns the scratch directory)
        - Retry silently forever (a stalled call trips the pipeline timeout)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Protocol, runtime_checkable


@runtime_checkable
class SpeechSynthesizer(Protocol):
    """Protocol for speech synthesis backends."""

    @property
    def name(self) -> str:
        """Backend identifier (e.g., 'openai', 'mock')."""
        ...

    @property
    def file_extension(self) -> str:
        """Extension of the audio returned by synthesize()."""
        ...

    def synthesize(
        self,
        text: str,
        voice: str,
        *,
        speed: float = 1.0,
        credential: str | None = None,
    ) -> bytes:
        """Synthesize one line.

        Args:
            text: Text to speak.
            voice: Backend voice identifier.
            speed: Speech speed factor (1.0 = normal).
            credential: Optional API key overriding the backend default.

        Returns:
            Encoded audio bytes.
        """
        ...


class BaseSynthesizer(ABC):
    """Base class for synthesizers with common functionality."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend identifier."""
        ...

    @property
    def file_extension(self) -> str:
        return "mp3"

    @abstractmethod
    def synthesize(
        self,
        text: str,
        voice: str,
        *,
        speed: float = 1.0,
        credential: str | None = None,
    ) -> bytes:
        """Synthesize one line of text."""
        ...

    def get_voices(self) -> list[str]:
        """Return list of supported voice IDs."""
        return []

    def supports_voice(self, voice_id: str) -> bool:
        """Check if this backend supports a voice."""
        voices = self.get_voices()
        return not voices or voice_id in voices
