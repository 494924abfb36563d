"""
Parsing of language model output into dialogue lines.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Iterator

from ai_podcast.conversation.turn import DialogueLine
from ai_podcast.errors import DiscussionError

logger = logging.getLogger(__name__)


class DialogueParser:
    """Parse a model response into DialogueLine objects.

    Supports two formats:
    - JSON: an array of {"host": "...", "content": "..."} objects,
      optionally wrapped in a ```json fence or surrounded by prose
    - Plain: one "Name: text" line per utterance

    Example:
        parser = DialogueParser()

        lines = parser.parse('''
        Алексей: Вы видели эту статью?
        Мария: Видела, и цифры там сомнительные.
        ''')
    """

    FENCE = re.compile(r"^```[a-zA-Z]*\s*|\s*```$")
    SPEAKER_LINE = re.compile(r"^\s*\**([^:*\n]{1,60}?)\**\s*:\s*(.+?)\s*$")

    def __init__(self, max_speaker_length: int = 60):
        self.max_speaker_length = max_speaker_length

    def parse(self, content: str) -> list[DialogueLine]:
        """Parse a response.

        Args:
            content: Raw model output.

        Returns:
            Dialogue lines in order.

        Raises:
            DiscussionError: If no dialogue line could be found.
        """
        text = self.FENCE.sub("", content.strip()).strip()

        lines = self._parse_json(text) or list(self._parse_plain(text))

        if not lines:
            raise DiscussionError(
                "no valid dialog lines found in response",
                details={"response_length": len(content)},
            )

        logger.debug("Parsed %d dialogue lines", len(lines))
        return lines

    def _parse_json(self, text: str) -> list[DialogueLine] | None:
        """Return lines if the text holds a JSON array, else None."""
        if "[" not in text:
            return None

        try:
            payload = json.loads(text)
        except json.JSONDecodeError:
            start, end = text.find("["), text.rfind("]")
            if start < 0 or end <= start:
                return None
            try:
                payload = json.loads(text[start:end + 1])
            except json.JSONDecodeError:
                return None

        if not isinstance(payload, list):
            return None

        lines = []
        for item in payload:
            line = self._from_mapping(item)
            if line is not None:
                lines.append(line)
        return lines

    def _from_mapping(self, item: Any) -> DialogueLine | None:
        if not isinstance(item, dict):
            return None
        speaker = str(item.get("host") or item.get("speaker") or "").strip()
        text = str(item.get("content") or item.get("text") or "").strip()
        if not speaker or not text:
            return None
        return DialogueLine(speaker=speaker, text=text)

    def _parse_plain(self, text: str) -> Iterator[DialogueLine]:
        for raw in text.splitlines():
            match = self.SPEAKER_LINE.match(raw)
            if not match:
                continue
            speaker = match.group(1).strip()
            spoken = match.group(2).strip()
            if speaker and spoken and len(speaker) <= self.max_speaker_length:
                yield DialogueLine(speaker=speaker, text=spoken)


def parse_dialogue(content: str) -> list[DialogueLine]:
    """Convenience function to parse a model response.

    Args:
        content: Raw model output.

    Returns:
        List of DialogueLine objects.
    """
    return DialogueParser().parse(content)
