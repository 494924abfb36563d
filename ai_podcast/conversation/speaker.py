"""
Host configuration and voice lookup for discussions.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping


@dataclass(frozen=True)
class Host:
    """A podcast host.

    Attributes:
        name: Name as it appears in the generated dialogue.
        gender: "male" or "female".
        character: Personality notes handed to the language model.
        voice: TTS voice identifier (e.g., "onyx", "nova").

    Example:
        host = Host(
            name="Мария",
            gender="female",
            character="Economist who backs every claim with data",
            voice="nova",
        )
    """

    name: str
    gender: str = "female"
    character: str = ""
    voice: str = "nova"

    def describe(self) -> str:
        """One-line description used in the discussion prompt."""
        return f"{self.name} ({self.gender}): {self.character}"


@dataclass(frozen=True)
class VoiceProfile:
    """Gender and voice used to speak one host's lines."""

    gender: str
    voice: str


DEFAULT_PROFILE = VoiceProfile(gender="female", voice="nova")

VoiceMap = Mapping[str, VoiceProfile]


def build_voice_map(hosts: Iterable[Host]) -> VoiceMap:
    """Build the read-only name → VoiceProfile mapping for one run.

    Later hosts with the same name replace earlier ones.
    """
    profiles = {
        host.name: VoiceProfile(gender=host.gender, voice=host.voice)
        for host in hosts
    }
    return MappingProxyType(profiles)


def resolve_voice(voice_map: VoiceMap, speaker: str) -> VoiceProfile:
    """Look up a speaker, falling back to DEFAULT_PROFILE."""
    return voice_map.get(speaker.strip(), DEFAULT_PROFILE)
