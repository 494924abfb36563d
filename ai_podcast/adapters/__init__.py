"""
Adapters module - I/O surfaces.

Adapters wire the pipeline to the outside world; they hold no pipeline
logic of their own.
"""

from ai_podcast.adapters.api import (
    PodcastEngine,
    PodcastResult,
    make_podcast,
)

__all__ = [
    "PodcastEngine",
    "PodcastResult",
    "make_podcast",
]
