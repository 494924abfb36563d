"""
Segments - Synthesis requests, results and their files on disk.

One SynthesisRequest per dialogue line goes to a worker; exactly one
Segment comes back. Released segments are written by the SegmentStore
into the run's scratch directory, named by sequence index, and listed in
an ffmpeg concat playlist.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from ai_podcast.conversation.turn import DialogueLine
from ai_podcast.errors import AudioProcessingError, SegmentWriteError

logger = logging.getLogger(__name__)

PLAYLIST_NAME = "concat.txt"


@dataclass(frozen=True)
class SynthesisRequest:
    """A dialogue line tagged with its position, ready for synthesis."""

    line: DialogueLine
    index: int
    voice: str
    gender: str = "female"
    speed: float = 1.0
    credential: str | None = field(default=None, repr=False)

    @property
    def speaker(self) -> str:
        return self.line.speaker

    @property
    def text(self) -> str:
        return self.line.text


@dataclass(frozen=True)
class Segment:
    """The outcome of one synthesis request.

    ``error`` is None on success. A failed segment carries no audio.
    """

    index: int
    speaker: str
    audio: bytes = b""
    line: DialogueLine | None = None
    error: BaseException | None = None

    @property
    def success(self) -> bool:
        return self.error is None

    @classmethod
    def succeeded(cls, request: SynthesisRequest, audio: bytes) -> "Segment":
        return cls(
            index=request.index,
            speaker=request.speaker,
            audio=audio,
            line=request.line,
        )

    @classmethod
    def failed(cls, request: SynthesisRequest, error: BaseException) -> "Segment":
        return cls(
            index=request.index,
            speaker=request.speaker,
            line=request.line,
            error=error,
        )


def segment_filename(index: int, ext: str = "mp3") -> str:
    """File name for the segment at ``index`` (e.g., segment_007.mp3)."""
    return f"segment_{index:03d}.{ext.lstrip('.')}"


def quote_concat_path(path: str | Path) -> str:
    """Quote a path for the ffmpeg concat demuxer.

    Single quotes are closed, escaped and reopened: ``'`` → ``'\\''``.
    """
    return "'" + str(path).replace("'", "'\\''") + "'"


class SegmentStore:
    """Writes released segments into one run's scratch directory.

    The store never creates or removes the directory; the caller owns it.

    Example:
        store = SegmentStore(tmp_dir)
        path = store.save(0, audio_bytes)   # tmp_dir/segment_000.mp3
        playlist = store.write_playlist([path])
    """

    def __init__(self, directory: str | Path, extension: str = "mp3"):
        self.directory = Path(directory).resolve()
        self.extension = extension.lstrip(".") or "mp3"

    def path_for(self, index: int) -> Path:
        return self.directory / segment_filename(index, self.extension)

    def save(self, index: int, audio: bytes) -> Path:
        """Write one segment's audio.

        Raises:
            SegmentWriteError: If the file cannot be written.
        """
        path = self.path_for(index)
        try:
            path.write_bytes(audio)
        except OSError as e:
            raise SegmentWriteError(index, str(path), e) from e
        logger.debug(f"Saved segment {index} ({len(audio)} bytes) to {path.name}")
        return path

    def write_playlist(self, paths: Iterable[str | Path]) -> Path:
        """Write the concat playlist listing ``paths`` in order.

        Raises:
            AudioProcessingError: If the playlist cannot be written.
        """
        playlist = self.directory / PLAYLIST_NAME
        entries = [f"file {quote_concat_path(Path(p).absolute())}\n" for p in paths]
        try:
            playlist.write_text("".join(entries), encoding="utf-8")
        except OSError as e:
            raise AudioProcessingError(
                f"failed to write playlist {playlist}: {e}",
                details={"path": str(playlist)},
            ) from e
        logger.debug(f"Wrote playlist with {len(entries)} entries")
        return playlist
