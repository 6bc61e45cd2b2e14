from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

# Line.metadata marker for rows whose syllables are bare words
WORD_SPACING_KEY = "word_spacing"
IMPLICIT_SPACING = "implicit"


@dataclass(frozen=True, slots=True)
class Syllable:
    content: str  # trailing space is a word separator, keep it
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class Line:
    """
    One display row of timed syllables.

    start/end are set by the producer and are not derived from the syllables,
    so a line may carry no syllables at all.
    """

    syllables: tuple[Syllable, ...]
    start: int
    end: int
    is_accompaniment: bool = False
    metadata: Mapping[str, str] = field(default_factory=dict)

    @property
    def content(self) -> str:
        return "".join(s.content for s in self.syllables)

    @property
    def text(self) -> str:
        """Display text. Simple LRC words carry no spaces of their own."""
        if self.metadata.get(WORD_SPACING_KEY) == IMPLICIT_SPACING:
            return " ".join(s.content for s in self.syllables)
        return self.content

    @property
    def duration(self) -> int:
        return self.end - self.start

    def contains_time(self, t_ms: int) -> bool:
        return self.start <= t_ms <= self.end

    def has_played_at(self, t_ms: int) -> bool:
        return t_ms > self.end

    def is_upcoming_at(self, t_ms: int) -> bool:
        return t_ms < self.start

    def progress_at(self, t_ms: int) -> float | None:
        if not self.contains_time(t_ms):
            return None
        if self.duration == 0:
            return 1.0
        return (t_ms - self.start) / self.duration
