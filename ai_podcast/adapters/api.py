"""
Public API Adapter - One podcast from article URL to audio.

PodcastEngine wires the collaborators together:
article → discussion → speech pipeline → playlist → ffmpeg.
"""

from __future__ import annotations

import dataclasses
import logging
import tempfile
import time
from dataclasses import dataclass, field
from pathlib import Path

from ai_podcast.article import Article, ArticleFetcher
from ai_podcast.config import PodcastConfig
from ai_podcast.conversation import Discussion, build_voice_map
from ai_podcast.engine import SpeechSynthesizer, load_synthesizer
from ai_podcast.formats import FFmpegProcessor
from ai_podcast.intelligence import estimate_total_duration, speech_speed
from ai_podcast.llm import DiscussionGenerator
from ai_podcast.playback import Player, load_player
from ai_podcast.runtime import SegmentStore, SpeechPipeline

logger = logging.getLogger(__name__)


@dataclass
class PodcastResult:
    """Result of one podcast run."""

    title: str
    line_count: int
    speed: float
    estimated_seconds: float
    generation_time: float
    output_path: Path | None = None
    streamed: bool = False
    played: bool = False

    discussion: Discussion | None = field(default=None, repr=False)


class PodcastEngine:
    """Podcast Engine - Main application interface.

    Collaborators are created lazily from the config unless injected.

    Example:
        engine = PodcastEngine(PodcastConfig(
            article_url="https://example.com/post",
            output_file="podcast.mp3",
        ))
        result = engine.run()
        print(result.output_path)
    """

    def __init__(
        self,
        config: PodcastConfig,
        *,
        fetcher: ArticleFetcher | None = None,
        generator: DiscussionGenerator | None = None,
        synthesizer: SpeechSynthesizer | None = None,
        player: Player | None = None,
        ffmpeg: FFmpegProcessor | None = None,
    ):
        self.config = config
        self._fetcher = fetcher
        self._generator = generator
        self._synthesizer = synthesizer
        self._player = player
        self._ffmpeg = ffmpeg

    def _ensure_fetcher(self) -> ArticleFetcher:
        if self._fetcher is None:
            self._fetcher = ArticleFetcher()
        return self._fetcher

    def _ensure_generator(self) -> DiscussionGenerator:
        if self._generator is None:
            self._generator = DiscussionGenerator(
                api_key=self.config.api_key,
                model=self.config.chat_model,
                language=self.config.language,
            )
        return self._generator

    def _ensure_synthesizer(self) -> SpeechSynthesizer:
        if self._synthesizer is None:
            kwargs = {}
            if self.config.backend in ("openai", "auto"):
                if self.config.api_key:
                    kwargs["api_key"] = self.config.api_key
                kwargs["model"] = self.config.tts_model
            self._synthesizer = load_synthesizer(self.config.backend, **kwargs)
        return self._synthesizer

    def _ensure_player(self) -> Player:
        if self._player is None:
            self._player = load_player(self.config.player)
        return self._player

    def _ensure_ffmpeg(self) -> FFmpegProcessor:
        if self._ffmpeg is None:
            self._ffmpeg = FFmpegProcessor()
        return self._ffmpeg

    def _needs_api_key(self) -> bool:
        if self._generator is None:
            return True
        return self._synthesizer is None and self.config.backend == "openai"

    def fetch_article(self) -> Article:
        return self._ensure_fetcher().fetch(self.config.article_url)

    def generate_discussion(self, article: Article) -> Discussion:
        return self._ensure_generator().generate(
            article, self.config.hosts, self.config.target_duration
        )

    def run(self) -> PodcastResult:
        """Produce one podcast.

        Returns:
            PodcastResult describing what was produced.

        Raises:
            PodcastError: Any failure; nothing is written or streamed then.
        """
        config = self.config
        config.validate(require_api_key=self._needs_api_key())
        start_time = time.perf_counter()

        logger.info(f"Fetching article from {config.article_url}")
        article = self.fetch_article()

        discussion = self.generate_discussion(article)

        estimated = estimate_total_duration(discussion.lines)
        speed = speech_speed(estimated, config.target_duration)
        logger.info(
            f"Estimated duration {estimated / 60:.1f} min for a "
            f"{config.target_duration} min target"
        )
        if speed != 1.0:
            logger.info(f"Adjusting speech speed to {speed:.2f} to match target duration")

        synthesizer = self._ensure_synthesizer()
        pipeline_config = dataclasses.replace(
            config.pipeline,
            speed=speed,
            audio_format=synthesizer.file_extension,
        )
        player = self._ensure_player() if pipeline_config.interactive else None
        pipeline = SpeechPipeline(
            synthesizer,
            pipeline_config,
            player,
            credential=config.api_key or None,
        )

        result = PodcastResult(
            title=discussion.title,
            line_count=len(discussion),
            speed=speed,
            estimated_seconds=estimated,
            generation_time=0.0,
            played=pipeline_config.interactive,
            discussion=discussion,
        )

        with tempfile.TemporaryDirectory(prefix="ai-podcast-") as temp_dir:
            paths = pipeline.run(
                discussion.lines, build_voice_map(config.hosts), temp_dir
            )
            playlist = SegmentStore(temp_dir, synthesizer.file_extension).write_playlist(paths)

            if config.output_file:
                result.output_path = self._ensure_ffmpeg().concatenate(
                    playlist, config.output_file
                )
                logger.info(f"Podcast saved to {result.output_path}")
            elif config.streams_to_icecast:
                self._ensure_ffmpeg().stream(playlist, config.icecast)
                result.streamed = True

        result.generation_time = time.perf_counter() - start_time
        logger.info(f"Podcast finished in {result.generation_time:.1f}s")
        return result


def make_podcast(url: str, output_file: str = "", **kwargs) -> PodcastResult:
    """One-liner podcast generation.

    Example:
        make_podcast("https://example.com/post", "podcast.mp3")
    """
    config = PodcastConfig.from_env(article_url=url, output_file=output_file, **kwargs)
    return PodcastEngine(config).run()
