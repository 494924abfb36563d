"""Tests for discussion generation."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import openai
import pytest

from ai_podcast.article import Article
from ai_podcast.config import DEFAULT_HOSTS
from ai_podcast.conversation import DialogueLine
from ai_podcast.errors import ConfigurationError, DiscussionError
from ai_podcast.llm import DiscussionGenerator, build_system_prompt


ARTICLE = Article(title="Новая технология", text="Текст статьи.", url="https://example.com")


def completion(content: str):
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def client():
    return MagicMock()


class TestSystemPrompt:
    """Tests for build_system_prompt."""

    def test_lists_hosts_and_length(self):
        prompt = build_system_prompt(DEFAULT_HOSTS, 5)

        assert "Алексей (male):" in prompt
        assert "Мария (female):" in prompt
        assert "Дмитрий (male):" in prompt
        assert "about 5 minutes" in prompt
        assert "roughly 10 lines" in prompt
        assert "Russian tech podcast" in prompt


class TestDiscussionGenerator:
    """Tests for DiscussionGenerator with a mocked client."""

    def test_generate_plain_dialogue(self, client):
        client.chat.completions.create.return_value = completion(
            "Алексей: Смотрите, что вышло!\nМария: Цифры не сходятся."
        )
        generator = DiscussionGenerator(client=client)

        discussion = generator.generate(ARTICLE, DEFAULT_HOSTS, target_minutes=10)

        assert discussion.title == "Новая технология"
        assert list(discussion) == [
            DialogueLine("Алексей", "Смотрите, что вышло!"),
            DialogueLine("Мария", "Цифры не сходятся."),
        ]

    def test_request_parameters(self, client):
        client.chat.completions.create.return_value = completion("A: hi")
        generator = DiscussionGenerator(client=client)

        generator.generate(ARTICLE, DEFAULT_HOSTS, target_minutes=3)

        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["temperature"] == 0.7
        assert kwargs["max_tokens"] == 4000
        system, user = kwargs["messages"]
        assert system["role"] == "system"
        assert "about 3 minutes" in system["content"]
        assert user["content"].startswith("Article Title: Новая технология")
        assert "Article Content: Текст статьи." in user["content"]
        assert user["content"].endswith("Please respond in Russian language only.")

    def test_json_response(self, client):
        client.chat.completions.create.return_value = completion(
            '```json\n[{"host": "Мария", "content": "Данные говорят иное."}]\n```'
        )

        discussion = DiscussionGenerator(client=client).generate(ARTICLE, DEFAULT_HOSTS, 10)

        assert discussion.lines == (DialogueLine("Мария", "Данные говорят иное."),)

    def test_api_error_wrapped(self, client):
        client.chat.completions.create.side_effect = openai.OpenAIError("quota")

        with pytest.raises(DiscussionError, match="quota"):
            DiscussionGenerator(client=client).generate(ARTICLE, DEFAULT_HOSTS, 10)

    def test_no_choices(self, client):
        client.chat.completions.create.return_value = SimpleNamespace(choices=[])

        with pytest.raises(DiscussionError, match="no response"):
            DiscussionGenerator(client=client).generate(ARTICLE, DEFAULT_HOSTS, 10)

    def test_unparseable_response(self, client):
        client.chat.completions.create.return_value = completion("I cannot do that.")

        with pytest.raises(DiscussionError, match="no valid dialog lines"):
            DiscussionGenerator(client=client).generate(ARTICLE, DEFAULT_HOSTS, 10)

    def test_requires_api_key_without_client(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        with pytest.raises(ConfigurationError):
            DiscussionGenerator()
