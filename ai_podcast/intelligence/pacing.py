"""
Pacing - Fit the spoken discussion to the requested length.

Estimates how long the dialogue takes to read aloud and picks one speech
speed factor for the whole run, kept within a range that still sounds
natural.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ai_podcast.conversation.turn import DialogueLine


@dataclass(frozen=True)
class PacingConfig:
    """Reading-rate baseline for Russian speech."""

    chars_per_word: float = 5.5
    words_per_minute: float = 160.0

    min_speed: float = 0.8
    max_speed: float = 1.2


DEFAULT_PACING = PacingConfig()

DISPLAY_TRUNCATE_LENGTH = 50


def estimate_duration(text: str, config: PacingConfig = DEFAULT_PACING) -> float:
    """Estimate the spoken duration of ``text`` in seconds.

    Whitespace is not counted.

    Example:
        estimate_duration("x" * 880)   # 880 / 5.5 = 160 words → 60.0
    """
    char_count = sum(1 for ch in text if ch not in " \n\t\r")
    words = char_count / config.chars_per_word
    return words / config.words_per_minute * 60.0


def estimate_total_duration(
    lines: Iterable[DialogueLine], config: PacingConfig = DEFAULT_PACING
) -> float:
    """Sum of estimate_duration over every line."""
    return sum(estimate_duration(line.text, config) for line in lines)


def speech_speed(
    estimated_seconds: float,
    target_minutes: int,
    config: PacingConfig = DEFAULT_PACING,
) -> float:
    """Speed factor that brings the estimate toward the target length.

    Returns 1.0 when there is nothing to estimate, otherwise the ratio
    target/estimate clamped to [min_speed, max_speed].
    """
    if estimated_seconds <= 0:
        return 1.0
    speed = (target_minutes * 60) / estimated_seconds
    return max(config.min_speed, min(config.max_speed, speed))


def truncate_text(text: str, max_length: int = DISPLAY_TRUNCATE_LENGTH) -> str:
    """Shorten text for log output, appending "..." when cut."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."
