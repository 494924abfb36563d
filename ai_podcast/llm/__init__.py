"""
Language model discussion generation.
"""

from ai_podcast.llm.discussion import (
    DiscussionGenerator,
    build_system_prompt,
)

__all__ = [
    "DiscussionGenerator",
    "build_system_prompt",
]
