"""
FFmpeg processing - Join segment files and stream them to Icecast.

Both operations read the concat playlist written by the SegmentStore and
copy the encoded audio without re-encoding (``-c copy``).
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from urllib.parse import quote

from ai_podcast.config import IcecastConfig
from ai_podcast.errors import AudioProcessingError

logger = logging.getLogger(__name__)

BASE_ARGS = ("-hide_banner", "-loglevel", "error")


def icecast_url(icecast: IcecastConfig) -> str:
    """Build the icecast:// output URL, credentials percent-quoted."""
    user = quote(icecast.user, safe="")
    password = quote(icecast.password, safe="")
    return f"icecast://{user}:{password}@{icecast.host}{icecast.mount}"


class FFmpegProcessor:
    """Runs ffmpeg over a concat playlist.

    Example:
        ffmpeg = FFmpegProcessor()
        ffmpeg.concatenate(playlist, "podcast.mp3")
        ffmpeg.stream(playlist, IcecastConfig(host="radio:8000"))
    """

    def __init__(self, binary: str = "ffmpeg"):
        self.binary = binary

    def concat_command(self, playlist: str | Path, output: str | Path) -> list[str]:
        return [
            self.binary,
            *BASE_ARGS,
            "-f", "concat",
            "-safe", "0",
            "-i", str(playlist),
            "-c", "copy",
            "-y",
            str(output),
        ]

    def stream_command(self, playlist: str | Path, icecast: IcecastConfig) -> list[str]:
        return [
            self.binary,
            *BASE_ARGS,
            # Read input at native frame rate
            "-re",
            "-f", "concat",
            "-safe", "0",
            "-i", str(playlist),
            "-c", "copy",
            "-content_type", "audio/mpeg",
            icecast_url(icecast),
        ]

    def concatenate(self, playlist: str | Path, output: str | Path) -> Path:
        """Join every file listed in ``playlist`` into ``output``.

        Raises:
            AudioProcessingError: If ffmpeg is missing or fails.
        """
        output = Path(output)
        logger.info(f"Combining audio segments into {output}")
        self._run(self.concat_command(playlist, output), "concatenate audio files")
        return output

    def stream(self, playlist: str | Path, icecast: IcecastConfig) -> None:
        """Stream the playlist to an Icecast mount in real time.

        Blocks until the whole podcast has been sent.
        """
        logger.info(f"Streaming to Icecast at {icecast.host}{icecast.mount}")
        self._run(self.stream_command(playlist, icecast), "stream to Icecast")

    def _run(self, argv: list[str], action: str) -> None:
        # Never log the Icecast URL, it holds the password
        logger.debug(f"Running {self.binary} with {len(argv) - 1} arguments")
        try:
            subprocess.run(argv, check=True, capture_output=True)
        except FileNotFoundError as e:
            raise AudioProcessingError(
                f"{self.binary} not found, install ffmpeg to {action}",
                details={"binary": self.binary},
            ) from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or b"").decode(errors="replace").strip()
            raise AudioProcessingError(
                f"failed to {action}: ffmpeg exited with status {e.returncode}",
                details={"returncode": e.returncode, "stderr": stderr},
            ) from e
