"""Tests for the command-line interface."""

import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from ai_podcast import __version__
from ai_podcast.adapters.cli import build_parser, main
from ai_podcast.errors import ArticleFetchError


@pytest.fixture(autouse=True)
def restore_package_logger():
    logger = logging.getLogger("ai_podcast")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def engine():
    with patch("ai_podcast.adapters.api.PodcastEngine") as factory:
        factory.return_value.run.return_value = MagicMock(output_path=None)
        yield factory


class TestParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = build_parser().parse_args([])

        assert args.duration == 10
        assert args.icecast == "localhost:8000"
        assert args.mount == "/podcast.mp3"
        assert args.user == "source"
        assert args.password == "hackme"
        assert args.backend == "openai"
        assert args.lookahead is None
        assert args.dry is False


class TestMain:
    """Tests for main()."""

    def test_version(self, capsys):
        assert main(["--version"]) == 0
        assert capsys.readouterr().out.strip() == f"ai-podcast {__version__}"

    def test_missing_url(self, capsys, engine):
        assert main([]) == 2
        assert "article URL" in capsys.readouterr().err
        engine.assert_not_called()

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        with patch("ai_podcast.article.fetcher.urlopen") as urlopen:
            assert main(["--url", "https://example.com/post"]) == 1
        urlopen.assert_not_called()

    def test_config_from_flags(self, monkeypatch, engine):
        monkeypatch.delenv("AI_PODCAST_LOOKAHEAD", raising=False)

        code = main([
            "--url", "https://example.com/post",
            "--apikey", "sk-flag",
            "--duration", "5",
            "--dry",
            "--mp3", "out.mp3",
            "--icecast", "radio:8000",
            "--mount", "live.mp3",
            "--user", "dj",
            "--pass", "secret",
            "--lookahead", "3",
            "--timeout", "45",
            "--workers", "2",
        ])

        assert code == 0
        config = engine.call_args.args[0]
        assert config.article_url == "https://example.com/post"
        assert config.api_key == "sk-flag"
        assert config.target_duration == 5
        assert config.dry_run is True
        assert config.output_file == "out.mp3"
        assert config.icecast.host == "radio:8000"
        assert config.icecast.mount == "/live.mp3"
        assert config.icecast.user == "dj"
        assert config.icecast.password == "secret"
        assert config.pipeline.lookahead == 3
        assert config.pipeline.segment_timeout == 45.0
        assert config.pipeline.workers == 2
        assert config.pipeline.interactive is True

    def test_environment_tuning_used_without_flags(self, monkeypatch, engine):
        monkeypatch.setenv("AI_PODCAST_LOOKAHEAD", "4")

        assert main(["--url", "https://example.com/post", "--apikey", "sk-x"]) == 0

        assert engine.call_args.args[0].pipeline.lookahead == 4

    def test_pipeline_error_exits_1(self, engine):
        engine.return_value.run.side_effect = ArticleFetchError("status code 500")

        assert main(["--url", "https://example.com/post", "--apikey", "sk-x"]) == 1

    def test_invalid_tuning_exits_1(self, engine):
        code = main(["--url", "https://example.com", "--apikey", "sk-x", "--lookahead", "0"])

        assert code == 1
        engine.assert_not_called()

    def test_reports_output_path(self, capsys, engine):
        engine.return_value.run.return_value = MagicMock(output_path=Path("out.mp3"))

        main(["--url", "https://example.com/post", "--apikey", "sk-x", "--mp3", "out.mp3"])

        assert "Podcast saved to: out.mp3" in capsys.readouterr().out
