from __future__ import annotations

from enum import Enum
import os
import re

from kyrics.parser.markup import is_likely_ttml

_TS = r"\d{1,3}:\d{2}(?:[.:]\d{1,3})?"

# [mm:ss] / [mm:ss.xx] / [mm:ss:xx] at the start of a line
LRC_LINE_TS_RE = re.compile(rf"^\s*\[({_TS})\]", re.MULTILINE)
# <mm:ss.xx>word
ENHANCED_WORD_RE = re.compile(rf"<({_TS})>([^<]*)")


class LyricsFormat(str, Enum):
    TTML = "ttml"
    LRC = "lrc"
    ENHANCED_LRC = "enhanced_lrc"
    UNKNOWN = "unknown"


_EXTENSIONS = {
    ".ttml": LyricsFormat.TTML,
    ".xml": LyricsFormat.TTML,
    ".lrc": LyricsFormat.LRC,
}


def is_lrc(content: str) -> bool:
    return LRC_LINE_TS_RE.search(content) is not None


def is_enhanced_lrc(content: str) -> bool:
    return is_lrc(content) and ENHANCED_WORD_RE.search(content) is not None


def detect_format(content: str) -> LyricsFormat:
    """
    Most specific first: TTML, then inline word timestamps, then plain
    line timestamps.
    """
    if is_likely_ttml(content):
        return LyricsFormat.TTML
    if ENHANCED_WORD_RE.search(content):
        return LyricsFormat.ENHANCED_LRC
    if is_lrc(content):
        return LyricsFormat.LRC
    return LyricsFormat.UNKNOWN


def detect_format_from_extension(filename: str | os.PathLike[str] | None) -> LyricsFormat | None:
    # .lrc is ambiguous between simple and enhanced; the LRC parser sorts that out
    if not filename:
        return None
    ext = os.path.splitext(os.fspath(filename))[1].lower()
    return _EXTENSIONS.get(ext)
