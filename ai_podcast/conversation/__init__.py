"""
Hosts and dialogue for ai-podcast.

Components:
    Host            - Podcast host (name, gender, character, voice)
    VoiceProfile    - Gender and voice for one host
    DialogueLine    - A single utterance
    Discussion      - Title plus ordered dialogue lines
    DialogueParser  - Model output → dialogue lines

Example:
    from ai_podcast.conversation import Host, build_voice_map

    voice_map = build_voice_map([
        Host("Алексей", "male", "Tech optimist", "onyx"),
        Host("Мария", "female", "Data-driven economist", "nova"),
    ])
    voice_map["Мария"].voice  # "nova"
"""

from ai_podcast.conversation.speaker import (
    DEFAULT_PROFILE,
    Host,
    VoiceMap,
    VoiceProfile,
    build_voice_map,
    resolve_voice,
)
from ai_podcast.conversation.turn import DialogueLine, Discussion
from ai_podcast.conversation.parser import DialogueParser, parse_dialogue

__all__ = [
    "DEFAULT_PROFILE",
    "Host",
    "VoiceMap",
    "VoiceProfile",
    "build_voice_map",
    "resolve_voice",
    "DialogueLine",
    "Discussion",
    "DialogueParser",
    "parse_dialogue",
]
