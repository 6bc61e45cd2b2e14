from __future__ import annotations

from dataclasses import dataclass
import os

_FALSE = ("0", "false", "no", "off")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    return float(raw) if raw else default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    return int(raw) if raw else default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() not in _FALSE


@dataclass(frozen=True)
class KyricsConfig:
    """Thresholds read by the state calculator. Lengths are in display units."""

    # Opacity
    playing_opacity: float = 1.0
    played_opacity: float = 0.25
    upcoming_opacity: float = 0.6
    opacity_falloff: float = 0.1  # per line of distance, upcoming only

    # Line animation
    line_animations_enabled: bool = True
    line_scale_on_play: float = 1.05

    # Blur
    blur_enabled: bool = False
    blur_intensity: float = 1.0
    played_blur_length: float = 2.0
    upcoming_blur_length: float = 3.0
    distant_blur_length: float = 5.0
    blur_distance_threshold: int = 3  # beyond this, upcoming lines use the distant tier


DEFAULT_CONFIG = KyricsConfig()


@dataclass(frozen=True)
class PreviewConfig:
    refresh_hz: float = 30.0
    context_lines: int = 2  # lines above/below current
    use_alt_screen: bool = True
    tail_ms: int = 1000  # keep running this long after the last line ends


def load_config() -> KyricsConfig:
    d = DEFAULT_CONFIG
    return KyricsConfig(
        playing_opacity=_env_float("KYRICS_PLAYING_OPACITY", d.playing_opacity),
        played_opacity=_env_float("KYRICS_PLAYED_OPACITY", d.played_opacity),
        upcoming_opacity=_env_float("KYRICS_UPCOMING_OPACITY", d.upcoming_opacity),
        opacity_falloff=_env_float("KYRICS_OPACITY_FALLOFF", d.opacity_falloff),
        line_animations_enabled=_env_bool("KYRICS_LINE_ANIMATIONS", d.line_animations_enabled),
        line_scale_on_play=_env_float("KYRICS_LINE_SCALE", d.line_scale_on_play),
        blur_enabled=_env_bool("KYRICS_BLUR", d.blur_enabled),
        blur_intensity=_env_float("KYRICS_BLUR_INTENSITY", d.blur_intensity),
        played_blur_length=_env_float("KYRICS_PLAYED_BLUR", d.played_blur_length),
        upcoming_blur_length=_env_float("KYRICS_UPCOMING_BLUR", d.upcoming_blur_length),
        distant_blur_length=_env_float("KYRICS_DISTANT_BLUR", d.distant_blur_length),
        blur_distance_threshold=_env_int("KYRICS_BLUR_DISTANCE", d.blur_distance_threshold),
    )


def load_preview_config() -> PreviewConfig:
    d = PreviewConfig()
    return PreviewConfig(
        refresh_hz=_env_float("KYRICS_REFRESH_HZ", d.refresh_hz),
        context_lines=_env_int("KYRICS_CONTEXT_LINES", d.context_lines),
        use_alt_screen=_env_bool("KYRICS_ALT_SCREEN", d.use_alt_screen),
        tail_ms=_env_int("KYRICS_TAIL_MS", d.tail_ms),
    )
