from __future__ import annotations

from typing import Sequence

from kyrics.config import DEFAULT_CONFIG, KyricsConfig
from kyrics.model import Line
from kyrics.state.models import KyricsUiState, LineCategory, LineUiState

# Pure functions: (lines, time, config) in, new state out.

MIN_UPCOMING_OPACITY = 0.2


def find_current_line_index(lines: Sequence[Line], t_ms: int) -> int | None:
    # first match wins if malformed input overlaps
    for i, line in enumerate(lines):
        if line.start <= t_ms <= line.end:
            return i
    return None


def get_line_category(line: Line, t_ms: int) -> LineCategory:
    if line.start <= t_ms <= line.end:
        return LineCategory.PLAYING
    if t_ms > line.end:
        return LineCategory.PLAYED
    return LineCategory.UPCOMING


def calculate_distance_from_current(line_index: int, current_line_index: int | None) -> int:
    # with nothing playing, distance is counted from the top
    if current_line_index is None:
        return line_index
    return abs(line_index - current_line_index)


def calculate_opacity(
    is_playing: bool,
    has_played: bool,
    distance: int,
    config: KyricsConfig = DEFAULT_CONFIG,
) -> float:
    if is_playing:
        return config.playing_opacity
    if has_played:
        return config.played_opacity
    # upcoming: linear fade with distance, floored
    return max(MIN_UPCOMING_OPACITY, config.upcoming_opacity - distance * config.opacity_falloff)


def calculate_scale(is_playing: bool, config: KyricsConfig = DEFAULT_CONFIG) -> float:
    if is_playing and config.line_animations_enabled:
        return config.line_scale_on_play
    return 1.0


def calculate_blur_radius(
    is_playing: bool,
    has_played: bool,
    distance: int,
    config: KyricsConfig = DEFAULT_CONFIG,
) -> float:
    if not config.blur_enabled or is_playing:
        return 0.0
    if has_played:
        base = config.played_blur_length
    elif distance > config.blur_distance_threshold:
        base = config.distant_blur_length
    else:
        base = config.upcoming_blur_length
    return base * config.blur_intensity


def calculate_line_state(
    line: Line,
    line_index: int,
    current_line_index: int | None,
    t_ms: int,
    config: KyricsConfig = DEFAULT_CONFIG,
) -> LineUiState:
    category = get_line_category(line, t_ms)
    is_playing = category is LineCategory.PLAYING
    has_played = category is LineCategory.PLAYED
    distance = calculate_distance_from_current(line_index, current_line_index)

    return LineUiState(
        is_playing=is_playing,
        has_played=has_played,
        is_upcoming=category is LineCategory.UPCOMING,
        distance_from_current=distance,
        opacity=calculate_opacity(is_playing, has_played, distance, config),
        scale=calculate_scale(is_playing, config),
        blur_radius=calculate_blur_radius(is_playing, has_played, distance, config),
    )


def calculate_state(
    lines: Sequence[Line],
    t_ms: int,
    config: KyricsConfig = DEFAULT_CONFIG,
) -> KyricsUiState:
    lines = tuple(lines)
    current = find_current_line_index(lines, t_ms)
    states = {i: calculate_line_state(line, i, current, t_ms, config) for i, line in enumerate(lines)}
    return KyricsUiState(
        lines=lines,
        current_time_ms=t_ms,
        current_line_index=current,
        line_states=states,
        is_initialized=True,
    )
