"""
Local playback for dry runs.
"""

from ai_podcast.playback.player import (
    CommandPlayer,
    Player,
    SoundDevicePlayer,
    load_player,
    player_command,
)

__all__ = [
    "CommandPlayer",
    "Player",
    "SoundDevicePlayer",
    "load_player",
    "player_command",
]
