"""
Speech worker thread.

Takes SynthesisRequests off the request queue, calls the synthesizer and
puts exactly one Segment per request on the result queue. The worker
never writes files and never decides that a run has failed; it reports
the error in the Segment and keeps serving until it is stopped.
"""

from __future__ import annotations

import logging
import queue
import threading
import time

from ai_podcast.engine.base import SpeechSynthesizer
from ai_podcast.runtime.segments import Segment, SynthesisRequest

logger = logging.getLogger(__name__)

# Put on the request queue to wake a worker blocked in get()
STOP = None


class SpeechWorker(threading.Thread):
    """Background synthesis worker.

    Args:
        synthesizer: Backend used for every request.
        requests: Queue of SynthesisRequest (or STOP).
        results: Queue receiving one Segment per request.
        stop_event: Shared stop signal; checked before every request.
        name: Thread name.
    """

    def __init__(
        self,
        synthesizer: SpeechSynthesizer,
        requests: "queue.Queue[SynthesisRequest | None]",
        results: "queue.Queue[Segment]",
        stop_event: threading.Event,
        name: str = "speech-worker",
    ):
        super().__init__(name=name, daemon=True)
        self._synthesizer = synthesizer
        self._requests = requests
        self._results = results
        self._stop_event = stop_event
        self.processed = 0

    def run(self) -> None:
        logger.debug(f"{self.name} started")
        while not self._stop_event.is_set():
            request = self._requests.get()
            if request is STOP or self._stop_event.is_set():
                break
            self._results.put(self.process(request))
            self.processed += 1
        logger.debug(f"{self.name} stopped after {self.processed} requests")

    def process(self, request: SynthesisRequest) -> Segment:
        """Synthesize one request into a Segment (never raises)."""
        started = time.perf_counter()
        logger.debug(
            f"Generating speech for line {request.index} "
            f"({request.speaker}, voice={request.voice})"
        )
        try:
            audio = self._synthesizer.synthesize(
                request.text,
                request.voice,
                speed=request.speed,
                credential=request.credential,
            )
        except Exception as e:
            logger.debug(f"Speech generation failed for line {request.index}: {e}")
            return Segment.failed(request, e)

        elapsed = time.perf_counter() - started
        logger.debug(
            f"Generated line {request.index}: {len(audio)} bytes in {elapsed:.2f}s"
        )
        return Segment.succeeded(request, audio)
