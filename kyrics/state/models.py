from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping

from kyrics.model import Line


class LineCategory(str, Enum):
    PLAYING = "playing"
    PLAYED = "played"
    UPCOMING = "upcoming"


@dataclass(frozen=True, slots=True)
class LineUiState:
    is_playing: bool = False
    has_played: bool = False
    is_upcoming: bool = True
    distance_from_current: int = 0
    opacity: float = 0.6
    scale: float = 1.0
    blur_radius: float = 0.0


_DEFAULT_LINE_STATE = LineUiState()


@dataclass(frozen=True, slots=True)
class KyricsUiState:
    """
    Snapshot for one time value. Never mutated: the holder swaps in a new
    instance on every recalculation, so `old is new` means nothing changed.
    """

    lines: tuple[Line, ...] = ()
    current_time_ms: int = 0
    current_line_index: int | None = None
    line_states: Mapping[int, LineUiState] = field(default_factory=dict)
    is_initialized: bool = False

    @property
    def current_line(self) -> Line | None:
        i = self.current_line_index
        if i is None or not (0 <= i < len(self.lines)):
            return None
        return self.lines[i]

    def get_line_state(self, index: int) -> LineUiState:
        return self.line_states.get(index, _DEFAULT_LINE_STATE)
