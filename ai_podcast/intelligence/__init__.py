"""
Audio Intelligence Module

Components:
    PacingConfig - Reading-rate baseline and speed bounds
    estimate_duration / estimate_total_duration - Spoken length estimate
    speech_speed - Speed factor to hit the target length

Usage:
    from ai_podcast.intelligence import estimate_total_duration, speech_speed

    speed = speech_speed(estimate_total_duration(lines), target_minutes=10)
"""

from ai_podcast.intelligence.pacing import (
    DEFAULT_PACING,
    PacingConfig,
    estimate_duration,
    estimate_total_duration,
    speech_speed,
    truncate_text,
)

__all__ = [
    "DEFAULT_PACING",
    "PacingConfig",
    "estimate_duration",
    "estimate_total_duration",
    "speech_speed",
    "truncate_text",
]
