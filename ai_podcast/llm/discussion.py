"""
Discussion generation with the OpenAI chat API.
"""

from __future__ import annotations

import logging
import os
from typing import Sequence

import openai
from openai import OpenAI

from ai_podcast.article.fetcher import Article
from ai_podcast.conversation.parser import DialogueParser
from ai_podcast.conversation.speaker import Host
from ai_podcast.conversation.turn import Discussion
from ai_podcast.errors import ConfigurationError, DiscussionError

logger = logging.getLogger(__name__)

MESSAGES_PER_MINUTE = 2

DISCUSSION_PROMPT = """\
You are hosting a {language} tech podcast discussion about this article. The hosts are:

{hosts}

Have a genuine, unscripted conversation about the article. Don't follow any rigid \
structure - just talk naturally like real people do. Get passionate about things you \
care about, interrupt each other when excited, disagree when you actually disagree.

Write it as simple dialog format:
Имя: что говорит
Имя: ответ

Just let the conversation flow naturally for about {minutes} minutes worth of \
talking, roughly {messages} lines in total."""


def build_system_prompt(
    hosts: Sequence[Host], target_minutes: int, language: str = "Russian"
) -> str:
    """System prompt describing the hosts and the target length."""
    return DISCUSSION_PROMPT.format(
        language=language,
        hosts="\n".join(host.describe() for host in hosts),
        minutes=target_minutes,
        messages=target_minutes * MESSAGES_PER_MINUTE,
    )


class DiscussionGenerator:
    """Ask a chat model to script a discussion of an article.

    Example:
        generator = DiscussionGenerator(api_key="sk-...")
        discussion = generator.generate(article, DEFAULT_HOSTS, target_minutes=10)
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str = "gpt-4o",
        temperature: float = 0.7,
        max_tokens: int = 4000,
        language: str = "Russian",
        timeout: float = 120.0,
        client: OpenAI | None = None,
        parser: DialogueParser | None = None,
    ):
        if client is None:
            api_key = api_key or os.environ.get("OPENAI_API_KEY")
            if not api_key:
                raise ConfigurationError(
                    "OpenAI API key required. Set OPENAI_API_KEY environment "
                    "variable or pass api_key parameter."
                )
            client = OpenAI(api_key=api_key, timeout=timeout)

        self._client = client
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.language = language
        self.parser = parser or DialogueParser()

    def generate(
        self,
        article: Article,
        hosts: Sequence[Host],
        target_minutes: int,
    ) -> Discussion:
        """Generate the dialogue for one article.

        Raises:
            DiscussionError: If the API call fails or returns no dialogue.
        """
        messages = [
            {
                "role": "system",
                "content": build_system_prompt(hosts, target_minutes, self.language),
            },
            {
                "role": "user",
                "content": (
                    f"Article Title: {article.title}\n\n"
                    f"Article Content: {article.text}\n\n"
                    f"Please respond in {self.language} language only."
                ),
            },
        ]

        logger.info(f"Generating discussion with {self.model} ({target_minutes} min)")
        try:
            completion = self._client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except openai.OpenAIError as e:
            raise DiscussionError(
                f"OpenAI chat request failed: {e}", details={"model": self.model}
            ) from e

        if not completion.choices:
            raise DiscussionError("no response from API", details={"model": self.model})

        content = completion.choices[0].message.content or ""
        lines = self.parser.parse(content)
        logger.info(f"Generated discussion with {len(lines)} lines")
        return Discussion.from_lines(article.title, lines)
