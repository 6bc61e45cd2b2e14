"""
Format detection and dispatch to the TTML and LRC builders.

    result = parse(text)                       # sniff the content
    result = parse_file(text, "song.ttml")     # trust the extension first
    if result.ok:
        lines = result.lines
    else:
        print(result.error)
"""
from __future__ import annotations

import logging
import os

from kyrics.model import Line
from kyrics.parser.base import LyricsParser
from kyrics.parser.errors import LyricsError, LyricsParseError, UnsupportedFormatError
from kyrics.parser.formats import LyricsFormat, detect_format, detect_format_from_extension
from kyrics.parser.lrc import LrcParser
from kyrics.parser.result import Failure, LyricsMetadata, ParseResult, Success
from kyrics.parser.ttml import TtmlParser

logger = logging.getLogger(__name__)

UNKNOWN_FORMAT_ERROR = "Unable to detect lyrics format. Supported formats: TTML, LRC, Enhanced LRC."

__all__ = [
    "Failure",
    "LrcParser",
    "LyricsError",
    "LyricsFormat",
    "LyricsMetadata",
    "LyricsParseError",
    "LyricsParser",
    "ParseResult",
    "Success",
    "TtmlParser",
    "UnsupportedFormatError",
    "create_parser",
    "detect_format",
    "detect_format_from_extension",
    "load_lyrics",
    "parse",
    "parse_file",
]


def create_parser(fmt: LyricsFormat) -> LyricsParser:
    if fmt is LyricsFormat.TTML:
        return TtmlParser()
    if fmt in (LyricsFormat.LRC, LyricsFormat.ENHANCED_LRC):
        return LrcParser()
    raise UnsupportedFormatError(f"No parser for format: {fmt.value}")


def parse(content: str, fmt: LyricsFormat | None = None) -> ParseResult:
    """
    Parse with the given format, or detect it from content. UNKNOWN is treated
    like None (detect) rather than an immediate failure.
    """
    if fmt is None or fmt is LyricsFormat.UNKNOWN:
        fmt = detect_format(content)
        logger.debug("Detected lyrics format: %s", fmt.value)
    if fmt is LyricsFormat.UNKNOWN:
        return Failure(error=UNKNOWN_FORMAT_ERROR)
    return create_parser(fmt).parse(content)


def parse_file(content: str, filename: str | os.PathLike[str] | None) -> ParseResult:
    # the file itself is read by the caller
    return parse(content, detect_format_from_extension(filename))


def load_lyrics(content: str, filename: str | os.PathLike[str] | None = None) -> list[Line]:
    """Like parse_file, but raises LyricsParseError instead of returning Failure."""
    return list(parse_file(content, filename).unwrap())
