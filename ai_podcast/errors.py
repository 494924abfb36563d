"""
Podcast Errors - Domain-specific error types.

Error hierarchy:
    PodcastError (base)
    ├── ConfigurationError
    ├── ArticleFetchError
    ├── DiscussionError
    ├── SynthesisBackendError
    ├── AudioProcessingError
    ├── PlayerError
    └── PipelineError (carries the sequence index)
        ├── SegmentTimeoutError
        ├── SynthesisError
        ├── SegmentWriteError
        └── PlaybackError
"""

from __future__ import annotations

from typing import Any


class PodcastError(Exception):
    """Base error for all podcast-related errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(PodcastError):
    """Raised when configuration values are missing or invalid."""


class ArticleFetchError(PodcastError):
    """Raised when an article cannot be downloaded or extracted."""

    def __init__(
        self,
        message: str,
        url: str = "",
        status: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.url = url
        self.status = status


class DiscussionError(PodcastError):
    """Raised when the language model call fails or returns no dialogue."""


class SynthesisBackendError(PodcastError):
    """Raised by a speech backend when one synthesis call fails."""

    def __init__(
        self,
        message: str,
        backend: str = "",
        voice: str = "",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.backend = backend
        self.voice = voice


class AudioProcessingError(PodcastError):
    """Raised when ffmpeg concatenation or streaming fails."""


class PlayerError(PodcastError):
    """Raised by a player when a file cannot be played."""

    def __init__(
        self,
        message: str,
        path: str = "",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.path = path


class PipelineError(PodcastError):
    """
    Base for fatal pipeline failures.

    Every pipeline error names the sequence index it failed on. By the
    time one reaches the caller the workers have already been told to stop.
    """

    def __init__(
        self,
        index: int,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(f"line {index}: {message}", details)
        self.index = index


class SegmentTimeoutError(PipelineError, TimeoutError):
    """No segment arrived within the wait window."""

    def __init__(self, index: int, timeout: float):
        super().__init__(
            index,
            f"timed out after {timeout:.1f}s waiting for speech generation",
            details={"timeout": timeout},
        )
        self.timeout = timeout


class SynthesisError(PipelineError):
    """
    One dialogue line could not be synthesized.

    The worker's exception is chained as __cause__.
    """

    def __init__(self, index: int, cause: BaseException, speaker: str = ""):
        super().__init__(
            index,
            f"failed to generate speech: {cause}",
            details={"speaker": speaker, "error_type": type(cause).__name__},
        )
        self.speaker = speaker
        self.__cause__ = cause


class SegmentWriteError(PipelineError):
    """A segment could not be written to the scratch directory."""

    def __init__(self, index: int, path: str, cause: BaseException):
        super().__init__(
            index,
            f"failed to write audio data to {path}: {cause}",
            details={"path": path},
        )
        self.path = path
        self.__cause__ = cause


class PlaybackError(PipelineError):
    """The local player failed on a released segment."""

    def __init__(self, index: int, path: str, cause: BaseException):
        super().__init__(
            index,
            f"failed to play audio: {cause}",
            details={"path": path},
        )
        self.path = path
        self.__cause__ = cause
