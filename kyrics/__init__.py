"""
Karaoke lyrics core: parse TTML / LRC / Enhanced LRC into timed syllables and
compute per-line display state for a playback position.
"""
from kyrics.config import DEFAULT_CONFIG, KyricsConfig
from kyrics.model import Line, Syllable
from kyrics.parser import Failure, LyricsFormat, ParseResult, Success, detect_format, parse, parse_file
from kyrics.state.calculator import calculate_state
from kyrics.state.holder import StateHolder
from kyrics.state.models import KyricsUiState, LineCategory, LineUiState

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIG",
    "Failure",
    "KyricsConfig",
    "KyricsUiState",
    "Line",
    "LineCategory",
    "LineUiState",
    "LyricsFormat",
    "ParseResult",
    "StateHolder",
    "Success",
    "Syllable",
    "calculate_state",
    "detect_format",
    "parse",
    "parse_file",
]
