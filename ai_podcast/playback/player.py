"""
Local playback of segment files.

Players block until the file has finished playing, so the pipeline
releases the next segment only after the current one was heard.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable

from ai_podcast.errors import ConfigurationError, PlayerError

logger = logging.getLogger(__name__)


@runtime_checkable
class Player(Protocol):
    """Protocol for blocking audio players."""

    def play(self, path: str | Path) -> None:
        """Play a file to completion.

        Raises:
            PlayerError: If the file is missing or playback fails.
        """
        ...


def _require_file(path: str | Path) -> Path:
    path = Path(path)
    if not path.is_file():
        raise PlayerError(f"audio file does not exist: {path}", path=str(path))
    return path


class SoundDevicePlayer:
    """Decode with soundfile, play through sounddevice."""

    name = "sounddevice"

    def play(self, path: str | Path) -> None:
        import sounddevice as sd
        import soundfile as sf

        path = _require_file(path)
        try:
            data, sample_rate = sf.read(str(path))
            sd.play(data, sample_rate)
            sd.wait()
        except (RuntimeError, sd.PortAudioError) as e:
            raise PlayerError(f"playback failed: {e}", path=str(path)) from e


# Linux players in order of preference, with the arguments placed before the file
LINUX_PLAYERS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("mpv", ("--no-video", "--really-quiet")),
    ("mplayer", ("-really-quiet", "-novideo")),
    ("ffplay", ("-nodisp", "-autoexit", "-loglevel", "quiet")),
    ("aplay", ("-q",)),
)


def player_command(platform: str | None = None) -> list[str]:
    """Command prefix of the external player for a platform.

    Raises:
        PlayerError: If no supported player is available.
    """
    platform = platform or sys.platform

    if platform == "darwin":
        return ["afplay"]
    if platform.startswith("win"):
        return ["cmd", "/C", "start", "/wait", ""]
    if platform.startswith("linux"):
        for program, args in LINUX_PLAYERS:
            if shutil.which(program):
                return [program, *args]
        raise PlayerError(
            "no audio player found, install mpv, mplayer, ffplay or aplay"
        )
    raise PlayerError(f"unsupported operating system: {platform}")


class CommandPlayer:
    """Play files with an external program (afplay, mpv, aplay, ...).

    Example:
        player = CommandPlayer()            # detect for this platform
        player = CommandPlayer(["mpv", "--really-quiet"])
        player.play("segment_000.mp3")
    """

    name = "command"

    def __init__(self, command: Sequence[str] | None = None):
        self.command = list(command) if command else player_command()

    def play(self, path: str | Path) -> None:
        path = _require_file(path)
        argv = [*self.command, str(path)]
        logger.debug(f"Running player: {' '.join(argv)}")
        try:
            subprocess.run(
                argv,
                check=True,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise PlayerError(
                f"player not found: {self.command[0]}", path=str(path)
            ) from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or b"").decode(errors="replace").strip()
            raise PlayerError(
                f"player exited with status {e.returncode}: {stderr}",
                path=str(path),
            ) from e


def load_player(name: str = "auto") -> Player:
    """Create a player by name.

    Args:
        name: "sounddevice", "command" or "auto" (sounddevice when its
              audio device library loads, otherwise an external command).
    """
    if name == "sounddevice":
        return SoundDevicePlayer()
    if name == "command":
        return CommandPlayer()
    if name == "auto":
        try:
            import sounddevice  # noqa: F401
        except (ImportError, OSError) as e:
            logger.info(f"sounddevice unavailable ({e}), using external player")
            return CommandPlayer()
        return SoundDevicePlayer()
    raise ConfigurationError(f"Unknown player: {name}")
