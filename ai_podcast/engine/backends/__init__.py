"""
Engine backends.
"""

from ai_podcast.engine.backends.mock import MockSynthesizer
from ai_podcast.engine.backends.openai import OpenAISpeechSynthesizer

__all__ = [
    "MockSynthesizer",
    "OpenAISpeechSynthesizer",
]
