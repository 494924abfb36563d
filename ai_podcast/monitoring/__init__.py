"""
Logging setup for ai-podcast.

Usage:
    from ai_podcast.monitoring import configure_logging

    configure_logging("debug", json_format=True)
"""

from ai_podcast.monitoring.logging import (
    LogLevel,
    StructuredFormatter,
    configure_logging,
)

__all__ = [
    "LogLevel",
    "StructuredFormatter",
    "configure_logging",
]
