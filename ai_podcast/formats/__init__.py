"""
Audio output for ai-podcast.

Provides ffmpeg-based output of the finished segments:
- Concatenation into one MP3 file
- Real-time streaming to an Icecast mount

Example:
    from ai_podcast.formats import FFmpegProcessor

    FFmpegProcessor().concatenate(playlist, "podcast.mp3")
"""

from ai_podcast.formats.ffmpeg import FFmpegProcessor, icecast_url

__all__ = [
    "FFmpegProcessor",
    "icecast_url",
]
