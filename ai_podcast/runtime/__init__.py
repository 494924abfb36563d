"""
Runtime for ai-podcast.

Components:
    SpeechPipeline        - Coordinator: ordered, bounded-lookahead run
    SpeechWorker          - Background synthesis thread
    OrderedSegmentBuffer  - Out-of-order segments keyed by index
    SegmentStore          - Segment files and concat playlist
"""

from ai_podcast.runtime.segments import (
    PLAYLIST_NAME,
    Segment,
    SegmentStore,
    SynthesisRequest,
    quote_concat_path,
    segment_filename,
)
from ai_podcast.runtime.buffer import OrderedSegmentBuffer
from ai_podcast.runtime.worker import SpeechWorker
from ai_podcast.runtime.pipeline import SpeechPipeline

__all__ = [
    "PLAYLIST_NAME",
    "Segment",
    "SegmentStore",
    "SynthesisRequest",
    "quote_concat_path",
    "segment_filename",
    "OrderedSegmentBuffer",
    "SpeechWorker",
    "SpeechPipeline",
]
