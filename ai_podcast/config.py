"""
Configuration for ai-podcast.

Defines the hosts, the speech pipeline tuning and the output targets.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Mapping

from ai_podcast.conversation.speaker import Host
from ai_podcast.errors import ConfigurationError


DEFAULT_HOSTS: tuple[Host, ...] = (
    Host(
        name="Алексей",
        gender="male",
        character=(
            "Young tech enthusiast who always knows the latest trends. Talks "
            "fast, loves new tools and believes in innovation, sometimes "
            "a little naive."
        ),
        voice="onyx",
    ),
    Host(
        name="Мария",
        gender="female",
        character=(
            "Experienced economist with a deep understanding of technology "
            "trends. Structured, backs arguments with data, asks provocative "
            "questions and has a dry wit."
        ),
        voice="nova",
    ),
    Host(
        name="Дмитрий",
        gender="male",
        character=(
            "Skeptical engineer with years in the industry. Measured, cynical, "
            "recalls past failures and warns about risks, but admits when "
            "he is wrong."
        ),
        voice="echo",
    ),
)


@dataclass
class PipelineConfig:
    """Tuning for the ordered speech pipeline.

    Args:
        lookahead: Maximum requests issued ahead of the release cursor.
        segment_timeout: Seconds to wait for the next segment before the
            run is abandoned. Re-armed on every wait.
        workers: Number of synthesis worker threads.
        interactive: Play every released segment before moving on.
        speed: Speech speed factor passed with every request.
        audio_format: Extension of the segment files.
        join_timeout: Seconds to wait for workers to exit after stop.

    Example:
        config = PipelineConfig(lookahead=3, segment_timeout=60)
    """

    lookahead: int = 2
    """Lookahead window; large enough to hide one network round trip."""

    segment_timeout: float = 30.0
    """Per-wait timeout in seconds, not a deadline for the whole run."""

    workers: int = 1
    """A single worker keeps synthesis calls within API concurrency limits."""

    interactive: bool = False
    """Play segments locally as they are released."""

    speed: float = 1.0

    audio_format: str = "mp3"

    join_timeout: float = 1.0

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.lookahead < 1:
            raise ConfigurationError("lookahead must be >= 1")
        if self.segment_timeout <= 0:
            raise ConfigurationError("segment_timeout must be > 0")
        if self.workers < 1:
            raise ConfigurationError("workers must be >= 1")
        if self.speed <= 0:
            raise ConfigurationError("speed must be > 0")
        self.audio_format = self.audio_format.lstrip(".").lower() or "mp3"


@dataclass
class IcecastConfig:
    """Icecast server the finished podcast is streamed to."""

    host: str = "localhost:8000"
    mount: str = "/podcast.mp3"
    user: str = "source"
    password: str = field(default="hackme", repr=False)

    def __post_init__(self) -> None:
        if not self.mount.startswith("/"):
            self.mount = f"/{self.mount}"


@dataclass
class PodcastConfig:
    """Application configuration.

    Exactly one output mode applies per run: ``dry_run`` plays the segments
    locally, ``output_file`` saves an MP3, otherwise the podcast is
    streamed to Icecast. ``dry_run`` and ``output_file`` may be combined.
    """

    article_url: str = ""
    api_key: str = field(
        default_factory=lambda: os.environ.get("OPENAI_API_KEY", ""),
        repr=False,
    )
    target_duration: int = 10
    dry_run: bool = False
    output_file: str = ""
    hosts: tuple[Host, ...] = DEFAULT_HOSTS
    language: str = "Russian"

    backend: str = "openai"
    tts_model: str = "gpt-4o-audio-preview"
    chat_model: str = "gpt-4o"
    player: str = "auto"

    icecast: IcecastConfig = field(default_factory=IcecastConfig)
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)

    def __post_init__(self) -> None:
        self.hosts = tuple(self.hosts)
        if self.target_duration < 1:
            raise ConfigurationError("target_duration must be >= 1 minute")
        if not self.hosts:
            raise ConfigurationError("at least one host is required")
        if self.dry_run and not self.pipeline.interactive:
            self.pipeline = replace(self.pipeline, interactive=True)

    @property
    def streams_to_icecast(self) -> bool:
        return not self.dry_run and not self.output_file

    def validate(self, require_api_key: bool = True) -> None:
        """Check the values needed before any network call is made."""
        if not self.article_url:
            raise ConfigurationError("please provide an article URL")
        if require_api_key and not self.api_key:
            raise ConfigurationError(
                "please provide an OpenAI API key with --apikey or the "
                "OPENAI_API_KEY environment variable"
            )

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides,
    ) -> "PodcastConfig":
        """Build a config, reading pipeline tuning from the environment.

        Recognized variables: AI_PODCAST_LOOKAHEAD, AI_PODCAST_TIMEOUT,
        AI_PODCAST_WORKERS. Explicit ``pipeline=`` overrides win.
        """
        env = os.environ if environ is None else environ
        if "pipeline" not in overrides:
            overrides["pipeline"] = PipelineConfig(
                lookahead=_env_number(env, "AI_PODCAST_LOOKAHEAD", 2, int),
                segment_timeout=_env_number(env, "AI_PODCAST_TIMEOUT", 30.0, float),
                workers=_env_number(env, "AI_PODCAST_WORKERS", 1, int),
            )
        if "api_key" not in overrides and "OPENAI_API_KEY" in env:
            overrides["api_key"] = env["OPENAI_API_KEY"]
        return cls(**overrides)


def _env_number(env: Mapping[str, str], name: str, default, cast):
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e
