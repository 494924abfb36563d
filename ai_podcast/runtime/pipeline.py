"""
Speech Pipeline - Ordered, bounded-lookahead synthesis and playback.

The coordinator issues synthesis requests ahead of the line being
released, so the next segment is usually ready by the time the current
one has finished playing. Segments may complete in any order; they are
released, written and played strictly in dialogue order.

Flow per run:
    lines → SynthesisRequest → SpeechWorker(s) → Segment
          → OrderedSegmentBuffer → release (save + optional play)
          → ordered list of segment files

Any failure stops the workers and raises a PipelineError naming the
line it failed on. There is no partial result.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from pathlib import Path
from typing import Callable, Sequence

from ai_podcast.config import PipelineConfig
from ai_podcast.conversation.speaker import VoiceMap, resolve_voice
from ai_podcast.conversation.turn import DialogueLine
from ai_podcast.engine.base import SpeechSynthesizer
from ai_podcast.errors import (
    ConfigurationError,
    PlaybackError,
    SegmentTimeoutError,
    SynthesisError,
)
from ai_podcast.intelligence.pacing import truncate_text
from ai_podcast.playback.player import Player
from ai_podcast.runtime.buffer import OrderedSegmentBuffer
from ai_podcast.runtime.segments import Segment, SegmentStore, SynthesisRequest
from ai_podcast.runtime.worker import STOP, SpeechWorker

logger = logging.getLogger(__name__)


class SpeechPipeline:
    """Pipeline coordinator.

    Args:
        synthesizer: Speech backend shared by all workers.
        config: Lookahead, timeout, worker count and interactive mode.
        player: Plays each released segment when ``config.interactive``.
        credential: API key attached to every request.
        on_release: Called with (index, path) after each release.

    Example:
        pipeline = SpeechPipeline(synthesizer, PipelineConfig(lookahead=2))
        paths = pipeline.run(discussion.lines, voice_map, tmp_dir)
    """

    def __init__(
        self,
        synthesizer: SpeechSynthesizer,
        config: PipelineConfig | None = None,
        player: Player | None = None,
        *,
        credential: str | None = None,
        on_release: Callable[[int, Path], None] | None = None,
    ):
        self.synthesizer = synthesizer
        self.config = config or PipelineConfig()
        self.player = player
        self.credential = credential
        self.on_release = on_release

        if self.config.interactive and player is None:
            raise ConfigurationError("interactive pipeline requires a player")

        # Inspection of the latest run
        self.workers: list[SpeechWorker] = []
        self.max_outstanding = 0

    def run(
        self,
        lines: Sequence[DialogueLine],
        voice_map: VoiceMap,
        temp_dir: str | Path,
    ) -> list[Path]:
        """Synthesize (and optionally play) every line in order.

        Args:
            lines: Dialogue in playback order.
            voice_map: Speaker name → VoiceProfile.
            temp_dir: Existing scratch directory owned by the caller.

        Returns:
            Segment file paths in dialogue order, one per line.

        Raises:
            SegmentTimeoutError: No segment arrived within segment_timeout.
            SynthesisError: A line could not be synthesized.
            SegmentWriteError: A segment file could not be written.
            PlaybackError: The player failed on a segment.
        """
        lines = list(lines)
        self.workers = []
        self.max_outstanding = 0

        if not lines:
            return []

        total = len(lines)
        lookahead = self.config.lookahead
        timeout = self.config.segment_timeout
        store = SegmentStore(temp_dir, extension=self.config.audio_format)
        buffer = OrderedSegmentBuffer()

        requests: queue.Queue[SynthesisRequest | None] = queue.Queue()
        results: queue.Queue[Segment] = queue.Queue()
        stop_event = threading.Event()

        self.workers = [
            SpeechWorker(
                self.synthesizer,
                requests,
                results,
                stop_event,
                name=f"speech-worker-{n}",
            )
            for n in range(self.config.workers)
        ]
        for worker in self.workers:
            worker.start()

        logger.info(
            f"Generating speech for {total} lines "
            f"(lookahead={lookahead}, workers={len(self.workers)})"
        )

        paths: list[Path] = []
        issued = 0
        cursor = 0
        issued_at: dict[int, float] = {}
        started = time.perf_counter()

        try:
            while cursor < total:
                while issued < total and issued - cursor < lookahead:
                    requests.put(self._request(lines[issued], issued, voice_map))
                    issued_at[issued] = time.perf_counter()
                    logger.debug(f"Requested line {issued + 1}/{total}")
                    issued += 1
                    self.max_outstanding = max(self.max_outstanding, issued - cursor)

                try:
                    segment = results.get(timeout=timeout)
                except queue.Empty:
                    raise SegmentTimeoutError(cursor, timeout) from None

                if segment.error is not None:
                    raise SynthesisError(segment.index, segment.error, segment.speaker)

                waited = time.perf_counter() - issued_at.pop(segment.index, started)
                logger.debug(
                    f"Received line {segment.index + 1}/{total} after {waited:.2f}s"
                )
                buffer.insert(segment)

                # Drain every consecutive ready segment
                ready = buffer.take_if_next(cursor)
                while ready is not None:
                    paths.append(self._release(ready, store, total))
                    cursor += 1
                    ready = buffer.take_if_next(cursor)
        finally:
            self._stop(stop_event, requests)

        logger.info(
            f"Generated {len(paths)} segments in {time.perf_counter() - started:.1f}s"
        )
        return paths

    def _request(
        self, line: DialogueLine, index: int, voice_map: VoiceMap
    ) -> SynthesisRequest:
        profile = resolve_voice(voice_map, line.speaker)
        return SynthesisRequest(
            line=line,
            index=index,
            voice=profile.voice,
            gender=profile.gender,
            speed=self.config.speed,
            credential=self.credential,
        )

    def _release(self, segment: Segment, store: SegmentStore, total: int) -> Path:
        path = store.save(segment.index, segment.audio)
        logger.info(
            f"Line {segment.index + 1}/{total} ready: {segment.speaker}"
        )

        if self.config.interactive:
            text = segment.line.text if segment.line else ""
            logger.info(f"Playing: {segment.speaker}: {truncate_text(text)}")
            started = time.perf_counter()
            try:
                self.player.play(path)
            except Exception as e:
                raise PlaybackError(segment.index, str(path), e) from e
            logger.debug(
                f"Played line {segment.index + 1} in {time.perf_counter() - started:.2f}s"
            )

        if self.on_release is not None:
            self.on_release(segment.index, path)
        return path

    def _stop(
        self,
        stop_event: threading.Event,
        requests: "queue.Queue[SynthesisRequest | None]",
    ) -> None:
        stop_event.set()
        for _ in self.workers:
            requests.put(STOP)
        for worker in self.workers:
            worker.join(timeout=self.config.join_timeout)
            if worker.is_alive():
                logger.debug(f"{worker.name} still busy after stop, abandoning")
