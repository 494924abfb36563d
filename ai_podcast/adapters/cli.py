"""
CLI Adapter - Command-line interface.

Thin wrapper over PodcastEngine.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys

from ai_podcast.errors import PodcastError

logger = logging.getLogger("ai_podcast.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ai-podcast",
        description="Turn a web article into a multi-host podcast discussion",
    )

    parser.add_argument("--url", help="URL of the article to discuss")
    parser.add_argument("--apikey", help="OpenAI API key (default: $OPENAI_API_KEY)")
    parser.add_argument(
        "--duration",
        type=int,
        default=10,
        help="Target podcast duration in minutes (default: 10)",
    )

    output = parser.add_argument_group("output")
    output.add_argument(
        "--dry",
        action="store_true",
        help="Play the podcast locally instead of streaming",
    )
    output.add_argument("--mp3", metavar="FILE", help="Save the podcast to an MP3 file")
    output.add_argument(
        "--icecast",
        default="localhost:8000",
        help="Icecast server host:port (default: localhost:8000)",
    )
    output.add_argument(
        "--mount",
        default="/podcast.mp3",
        help="Icecast mount point (default: /podcast.mp3)",
    )
    output.add_argument("--user", default="source", help="Icecast username")
    output.add_argument("--pass", dest="password", default="hackme", help="Icecast password")

    speech = parser.add_argument_group("speech")
    speech.add_argument(
        "--backend",
        choices=["openai", "mock", "auto"],
        default="openai",
        help="Speech backend (default: openai)",
    )
    speech.add_argument(
        "--player",
        choices=["auto", "sounddevice", "command"],
        default="auto",
        help="Local player for --dry (default: auto)",
    )
    speech.add_argument(
        "--lookahead",
        type=int,
        help="Lines synthesized ahead of playback (default: 2)",
    )
    speech.add_argument(
        "--timeout",
        type=float,
        help="Seconds to wait for each line's speech (default: 30)",
    )
    speech.add_argument(
        "--workers",
        type=int,
        help="Parallel speech requests (default: 1)",
    )

    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="info",
        help="Log level (default: info)",
    )
    parser.add_argument("--json-logs", action="store_true", help="Log as JSON lines")
    parser.add_argument("--version", action="store_true", help="Show version")
    return parser


def main(args: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    parsed = parser.parse_args(args)

    if parsed.version:
        from ai_podcast import __version__
        print(f"ai-podcast {__version__}")
        return 0

    from ai_podcast.monitoring import configure_logging
    configure_logging(parsed.log_level, json_format=parsed.json_logs)

    if not parsed.url:
        parser.print_usage(sys.stderr)
        print("ai-podcast: error: please provide an article URL with --url", file=sys.stderr)
        return 2

    try:
        config = _build_config(parsed)
        from ai_podcast.adapters.api import PodcastEngine
        result = PodcastEngine(config).run()
    except PodcastError as e:
        logger.error(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130

    if result.output_path:
        print(f"Podcast saved to: {result.output_path}")
    return 0


def _build_config(parsed: argparse.Namespace):
    from ai_podcast.config import IcecastConfig, PodcastConfig

    overrides = dict(
        article_url=parsed.url,
        target_duration=parsed.duration,
        dry_run=parsed.dry,
        output_file=parsed.mp3 or "",
        backend=parsed.backend,
        player=parsed.player,
        icecast=IcecastConfig(
            host=parsed.icecast,
            mount=parsed.mount,
            user=parsed.user,
            password=parsed.password,
        ),
    )
    if parsed.apikey:
        overrides["api_key"] = parsed.apikey

    config = PodcastConfig.from_env(**overrides)

    tuning = {
        name: value
        for name, value in (
            ("lookahead", parsed.lookahead),
            ("segment_timeout", parsed.timeout),
            ("workers", parsed.workers),
        )
        if value is not None
    }
    if tuning:
        config.pipeline = dataclasses.replace(config.pipeline, **tuning)
    return config


if __name__ == "__main__":
    sys.exit(main())
