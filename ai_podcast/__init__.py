"""
ai-podcast - Turn a web article into a multi-host podcast discussion.

Architecture:
    Article → Discussion → SpeechPipeline → segment files → ffmpeg

Public API (stable):
    PodcastEngine   - Main interface. Call .run() to produce one podcast.
    PodcastResult   - Returned by .run().
    PodcastConfig   - Application configuration.
    make_podcast    - One-liner: make_podcast(url, "podcast.mp3")

Core:
    runtime         - SpeechPipeline, SpeechWorker, OrderedSegmentBuffer, SegmentStore
    engine          - SpeechSynthesizer protocol, OpenAI and mock backends
    conversation    - Hosts, dialogue lines, voice map, dialogue parser

Collaborators:
    article         - ArticleFetcher
    llm             - DiscussionGenerator
    playback        - Local players for dry runs
    formats         - FFmpegProcessor (concatenate, stream to Icecast)
    intelligence    - Duration estimate and speech speed
    monitoring      - Logging setup
    testing         - ScriptedSynthesizer, RecordingPlayer

Example:
    from ai_podcast import PodcastConfig, PodcastEngine

    engine = PodcastEngine(PodcastConfig(
        article_url="https://example.com/post",
        dry_run=True,
    ))
    engine.run()
"""

__version__ = "1.0.0"

from ai_podcast.config import (
    DEFAULT_HOSTS,
    IcecastConfig,
    PipelineConfig,
    PodcastConfig,
)
from ai_podcast.conversation import DialogueLine, Discussion, Host, build_voice_map
from ai_podcast.errors import PipelineError, PodcastError
from ai_podcast.runtime import SpeechPipeline
from ai_podcast.adapters.api import PodcastEngine, PodcastResult, make_podcast

__all__ = [
    "__version__",
    "DEFAULT_HOSTS",
    "IcecastConfig",
    "PipelineConfig",
    "PodcastConfig",
    "DialogueLine",
    "Discussion",
    "Host",
    "build_voice_map",
    "PipelineError",
    "PodcastError",
    "SpeechPipeline",
    "PodcastEngine",
    "PodcastResult",
    "make_podcast",
]
