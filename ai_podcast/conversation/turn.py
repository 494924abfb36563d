"""
Dialogue line and discussion containers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Sequence


@dataclass(frozen=True)
class DialogueLine:
    """One utterance in the discussion.

    Attributes:
        speaker: Host name as written by the language model.
        text: What the host says.
    """

    speaker: str
    text: str


@dataclass(frozen=True)
class Discussion:
    """A generated discussion.

    The order of ``lines`` is the playback order.
    """

    title: str
    lines: tuple[DialogueLine, ...] = field(default_factory=tuple)

    @classmethod
    def from_lines(cls, title: str, lines: Sequence[DialogueLine]) -> "Discussion":
        return cls(title=title, lines=tuple(lines))

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[DialogueLine]:
        return iter(self.lines)

    @property
    def speakers(self) -> list[str]:
        """Distinct speakers in order of first appearance."""
        seen: list[str] = []
        for line in self.lines:
            if line.speaker not in seen:
                seen.append(line.speaker)
        return seen
