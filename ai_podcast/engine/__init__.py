"""
Speech engine for ai-podcast.

Backends turn one line of dialogue into encoded audio bytes.
"""

from ai_podcast.engine.base import BaseSynthesizer, SpeechSynthesizer
from ai_podcast.engine.loader import list_synthesizers, load_synthesizer

__all__ = [
    "BaseSynthesizer",
    "SpeechSynthesizer",
    "list_synthesizers",
    "load_synthesizer",
]
