"""
Engine Loader - Pick a speech backend by name.
"""

from __future__ import annotations

import logging
import os

from ai_podcast.engine.base import SpeechSynthesizer

logger = logging.getLogger(__name__)


def load_synthesizer(backend: str = "auto", **kwargs) -> SpeechSynthesizer:
    """Load a speech backend.

    Args:
        backend: Backend name or "auto" to auto-detect.
                 Options: "openai", "mock", "auto"
        **kwargs: Additional backend-specific options

    Returns:
        Initialized SpeechSynthesizer

    Raises:
        ValueError: If the backend name is unknown
    """
    if backend == "auto":
        return _auto_load(**kwargs)

    if backend == "openai":
        from ai_podcast.engine.backends.openai import OpenAISpeechSynthesizer
        return OpenAISpeechSynthesizer(**kwargs)

    if backend == "mock":
        from ai_podcast.engine.backends.mock import MockSynthesizer
        return MockSynthesizer(
            generate_silence=kwargs.get("generate_silence", False),
        )

    raise ValueError(f"Unknown backend: {backend}")


def _auto_load(**kwargs) -> SpeechSynthesizer:
    """Use OpenAI when a key is available, mock otherwise."""
    if kwargs.get("api_key") or os.environ.get("OPENAI_API_KEY"):
        logger.info("Auto-detected OpenAI backend")
        return load_synthesizer("openai", **kwargs)

    logger.warning("No OpenAI API key available, using mock speech backend")
    return load_synthesizer("mock")


def list_synthesizers() -> list[str]:
    """List backends usable in this environment."""
    available = ["mock"]
    if os.environ.get("OPENAI_API_KEY"):
        available.append("openai")
    return available
