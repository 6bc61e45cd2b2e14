from __future__ import annotations

from typing import Sequence

from kyrics.model import Line

# Queries over a list of lines. Lists are expected sorted by start, but none of
# these rely on it except where noted.


def find_line_index_at_time(lines: Sequence[Line], t_ms: int) -> int | None:
    for i, line in enumerate(lines):
        if line.contains_time(t_ms):
            return i
    return None


def find_line_at_time(lines: Sequence[Line], t_ms: int) -> Line | None:
    i = find_line_index_at_time(lines, t_ms)
    return lines[i] if i is not None else None


def find_next_line_index(lines: Sequence[Line], t_ms: int) -> int | None:
    """Index of the earliest line that starts strictly after t_ms."""
    best: int | None = None
    for i, line in enumerate(lines):
        if line.start > t_ms and (best is None or line.start < lines[best].start):
            best = i
    return best


def find_next_line(lines: Sequence[Line], t_ms: int) -> Line | None:
    i = find_next_line_index(lines, t_ms)
    return lines[i] if i is not None else None


def find_previous_line_index(lines: Sequence[Line], t_ms: int) -> int | None:
    """Index of the line that finished most recently before t_ms."""
    best: int | None = None
    for i, line in enumerate(lines):
        if line.end < t_ms and (best is None or line.end > lines[best].end):
            best = i
    return best


def find_previous_line(lines: Sequence[Line], t_ms: int) -> Line | None:
    i = find_previous_line_index(lines, t_ms)
    return lines[i] if i is not None else None


def time_range(lines: Sequence[Line]) -> tuple[int, int] | None:
    if not lines:
        return None
    return min(ln.start for ln in lines), max(ln.end for ln in lines)


def total_duration(lines: Sequence[Line]) -> int:
    rng = time_range(lines)
    if rng is None:
        return 0
    return rng[1] - rng[0]


def lines_in_range(lines: Sequence[Line], current_index: int, radius: int) -> list[Line]:
    if not lines or not (0 <= current_index < len(lines)):
        return []
    lo = max(current_index - radius, 0)
    hi = min(current_index + radius + 1, len(lines))
    return list(lines[lo:hi])


def overall_progress(lines: Sequence[Line], t_ms: int) -> float:
    rng = time_range(lines)
    if rng is None:
        return 0.0
    start, end = rng
    if end == start:
        return 1.0
    return min(max((t_ms - start) / (end - start), 0.0), 1.0)


def all_played(lines: Sequence[Line], t_ms: int) -> bool:
    return bool(lines) and all(ln.has_played_at(t_ms) for ln in lines)


def all_upcoming(lines: Sequence[Line], t_ms: int) -> bool:
    return bool(lines) and all(ln.is_upcoming_at(t_ms) for ln in lines)


def filter_accompaniment(lines: Sequence[Line]) -> list[Line]:
    return [ln for ln in lines if ln.is_accompaniment]


def filter_main_vocals(lines: Sequence[Line]) -> list[Line]:
    return [ln for ln in lines if not ln.is_accompaniment]


def total_character_count(lines: Sequence[Line]) -> int:
    return sum(len(ln.content) for ln in lines)


def total_syllable_count(lines: Sequence[Line]) -> int:
    return sum(len(ln.syllables) for ln in lines)
