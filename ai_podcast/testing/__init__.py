"""
Testing Utilities

Tools for testing code built on the speech pipeline.

Components:
    ScriptedSynthesizer - Synthesizer with per-line latency, failures and gates
    RecordingPlayer     - Player that records played files
    CallRecord          - One recorded synthesize() call

Usage:
    from ai_podcast.testing import ScriptedSynthesizer, RecordingPlayer

    synth = ScriptedSynthesizer(delays={"first": 0.1})
    pipeline = SpeechPipeline(synth, PipelineConfig(interactive=True),
                              player=RecordingPlayer())
"""

from ai_podcast.testing.mock import (
    CallRecord,
    RecordingPlayer,
    ScriptedSynthesizer,
)

__all__ = [
    "CallRecord",
    "RecordingPlayer",
    "ScriptedSynthesizer",
]
