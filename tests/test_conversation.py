"""Tests for hosts, voice lookup and dialogue parsing."""

import pytest

from ai_podcast.config import DEFAULT_HOSTS
from ai_podcast.conversation import (
    DEFAULT_PROFILE,
    DialogueLine,
    DialogueParser,
    Discussion,
    Host,
    VoiceProfile,
    build_voice_map,
    parse_dialogue,
    resolve_voice,
)
from ai_podcast.errors import DiscussionError


class TestVoiceMap:
    """Tests for build_voice_map and resolve_voice."""

    def test_default_hosts(self):
        voice_map = build_voice_map(DEFAULT_HOSTS)

        assert voice_map["Алексей"] == VoiceProfile("male", "onyx")
        assert voice_map["Мария"] == VoiceProfile("female", "nova")
        assert voice_map["Дмитрий"] == VoiceProfile("male", "echo")

    def test_unknown_speaker_falls_back(self):
        voice_map = build_voice_map(DEFAULT_HOSTS)

        profile = resolve_voice(voice_map, "Ведущий")

        assert profile == DEFAULT_PROFILE
        assert (profile.gender, profile.voice) == ("female", "nova")

    def test_speaker_name_is_stripped(self):
        voice_map = build_voice_map(DEFAULT_HOSTS)
        assert resolve_voice(voice_map, "  Дмитрий ").voice == "echo"

    def test_map_is_read_only(self):
        voice_map = build_voice_map([Host("A", voice="onyx")])

        with pytest.raises(TypeError):
            voice_map["B"] = DEFAULT_PROFILE

    def test_host_describe(self):
        host = Host("Мария", "female", "Economist", "nova")
        assert host.describe() == "Мария (female): Economist"


class TestDiscussion:
    """Tests for Discussion."""

    def test_from_lines(self):
        lines = [DialogueLine("A", "one"), DialogueLine("B", "two"), DialogueLine("A", "three")]
        discussion = Discussion.from_lines("Title", lines)

        assert len(discussion) == 3
        assert list(discussion) == lines
        assert discussion.speakers == ["A", "B"]


class TestDialogueParser:
    """Tests for DialogueParser."""

    def test_plain_lines(self):
        lines = parse_dialogue(
            "Алексей: Вы видели эту статью?\n"
            "\n"
            "Мария: Видела, и цифры там сомнительные.\n"
        )

        assert lines == [
            DialogueLine("Алексей", "Вы видели эту статью?"),
            DialogueLine("Мария", "Видела, и цифры там сомнительные."),
        ]

    def test_plain_lines_skip_prose(self):
        lines = parse_dialogue(
            "Вот наш разговор\n"
            "Дмитрий : Я бы не спешил.\n"
            "**Мария**: Почему?\n"
        )

        assert [line.speaker for line in lines] == ["Дмитрий", "Мария"]
        assert lines[0].text == "Я бы не спешил."

    def test_colon_inside_text_kept(self):
        lines = parse_dialogue("Алексей: Время: 10:30, начинаем")
        assert lines[0].text == "Время: 10:30, начинаем"

    def test_json_array(self):
        lines = parse_dialogue(
            '[{"host": "Алексей", "content": "Привет"},'
            ' {"host": "Мария", "content": "Здравствуй"}]'
        )

        assert lines == [
            DialogueLine("Алексей", "Привет"),
            DialogueLine("Мария", "Здравствуй"),
        ]

    def test_fenced_json(self):
        lines = parse_dialogue(
            '```json\n[{"host": "Дмитрий", "content": "Скептичен."}]\n```'
        )
        assert lines == [DialogueLine("Дмитрий", "Скептичен.")]

    def test_json_embedded_in_prose(self):
        lines = parse_dialogue(
            'Here you go: [{"speaker": "A", "text": "one"}] Enjoy!'
        )
        assert lines == [DialogueLine("A", "one")]

    def test_json_entries_without_text_skipped(self):
        lines = parse_dialogue(
            '[{"host": "A", "content": ""}, {"host": "B", "content": "ok"}, 42]'
        )
        assert lines == [DialogueLine("B", "ok")]

    def test_empty_json_falls_back_to_plain(self):
        lines = parse_dialogue("[]\nA: hello")
        assert lines == [DialogueLine("A", "hello")]

    def test_no_dialogue_raises(self):
        with pytest.raises(DiscussionError, match="no valid dialog lines"):
            parse_dialogue("Sorry, I cannot help with that.")

    def test_long_speaker_names_rejected(self):
        parser = DialogueParser(max_speaker_length=10)
        with pytest.raises(DiscussionError):
            parser.parse("This is a long sentence that looks like a name: text")
