from __future__ import annotations

from dataclasses import replace
import logging
import math
import re

from kyrics.model import IMPLICIT_SPACING, WORD_SPACING_KEY, Line, Syllable
from kyrics.parser.base import LyricsParser
from kyrics.parser.formats import ENHANCED_WORD_RE, LyricsFormat, is_lrc
from kyrics.parser.result import Failure, LyricsMetadata, ParseResult, Success
from kyrics.parser.timecode import parse_lrc_time

logger = logging.getLogger(__name__)

_TS = r"\d{1,3}:\d{2}(?:[.:]\d{1,3})?"
# one or more leading timestamps: [00:01.00][00:12.50]text
_LINE_RE = re.compile(rf"^\s*((?:\[{_TS}\])+)(.*)$")
_LINE_TS_RE = re.compile(rf"\[({_TS})\]")
_TAG_RE = re.compile(r"^\s*\[([a-zA-Z]+):(.*)\]\s*$")
_WS_RE = re.compile(r"\s+")

DEFAULT_LINE_DURATION_MS = 3000  # tail for the last line

# Simple LRC singing-time estimate
MS_PER_CHARACTER = 80
MS_PER_WORD_GAP = 100
MIN_LINE_DURATION_MS = 500
MAX_LINE_DURATION_MS = 6000
MIN_WORD_WEIGHT = 1.0

# Enhanced LRC: last word of a line has no following timestamp
MS_PER_WORD_CHARACTER = 100
MIN_WORD_DURATION_MS = 200

SIMPLE_LRC_WARNING = (
    "Simple LRC format detected (line-level timing only). "
    "Word synchronization is estimated and may not be accurate. "
    "For better karaoke experience, use Enhanced LRC or TTML format."
)


def _parse_metadata(text_lines: list[str]) -> LyricsMetadata:
    tags: dict[str, str] = {}
    for raw in text_lines:
        if _LINE_RE.match(raw):
            continue
        m = _TAG_RE.match(raw)
        if m:
            tags[m.group(1).lower()] = m.group(2).strip()

    offset: int | None = None
    if "offset" in tags:
        try:
            offset = int(tags["offset"])
        except ValueError:
            logger.debug("Ignoring non-integer offset tag: %r", tags["offset"])
    duration = parse_lrc_time(tags["length"]) if "length" in tags else None

    return LyricsMetadata(
        title=tags.get("ti") or None,
        artist=tags.get("ar") or None,
        album=tags.get("al") or None,
        duration_ms=duration,
        offset_ms=offset,
    )


def estimate_word_duration(word: str) -> int:
    return max(MIN_WORD_DURATION_MS, len(word) * MS_PER_WORD_CHARACTER)


def estimate_line_duration(syllables: tuple[Syllable, ...] | list[Syllable]) -> int:
    chars = sum(len(s.content) for s in syllables)
    words = len(syllables)
    base = chars * MS_PER_CHARACTER + words * MS_PER_WORD_GAP
    return min(max(base, MIN_LINE_DURATION_MS), MAX_LINE_DURATION_MS)


def distribute_by_word_length(
    syllables: tuple[Syllable, ...] | list[Syllable], line_start: int, duration: int
) -> tuple[Syllable, ...]:
    """
    Split duration over the syllables in order. Weight is 1 + sqrt(chars), so
    longer words take longer but do not dominate.
    """
    if not syllables:
        return ()
    weights = [MIN_WORD_WEIGHT + math.sqrt(max(1, len(s.content))) for s in syllables]
    total = sum(weights)
    out: list[Syllable] = []
    cursor = line_start
    for s, w in zip(syllables, weights):
        d = int(w / total * duration)
        out.append(replace(s, start=cursor, end=cursor + d))
        cursor += d
    return tuple(out)


def _simple_line(line_start: int, content: str) -> Line:
    words = [w for w in _WS_RE.split(content) if w]
    if not words:
        syl = (Syllable(content, line_start, line_start),)
    else:
        # placeholders, real timing is assigned in _finalize
        syl = tuple(Syllable(w, line_start, line_start) for w in words)
    return Line(
        syllables=syl,
        start=line_start,
        end=line_start,
        metadata={WORD_SPACING_KEY: IMPLICIT_SPACING},
    )


def _enhanced_line(line_start: int, content: str, offset: int) -> Line | None:
    tokens = list(ENHANCED_WORD_RE.finditer(content))
    syllables: list[Syllable] = []
    for i, m in enumerate(tokens):
        start = max(parse_lrc_time(m.group(1)) + offset, 0)
        word = m.group(2)
        if i + 1 < len(tokens):
            end = max(parse_lrc_time(tokens[i + 1].group(1)) + offset, 0)
        else:
            end = start + estimate_word_duration(word)
        # an empty token still closes the previous word
        if word:
            syllables.append(Syllable(word, start, end))

    if not syllables:
        plain = ENHANCED_WORD_RE.sub(r"\2", content)
        if not plain.strip():
            return None
        return _simple_line(line_start, plain)
    # tags are not guaranteed to move forward
    return Line(
        syllables=tuple(syllables),
        start=min(s.start for s in syllables),
        end=max(s.end for s in syllables),
    )


def _is_placeholder_line(line: Line) -> bool:
    return all(s.start == line.start and s.end <= s.start for s in line.syllables)


def _finalize(lines: list[Line]) -> list[Line]:
    out: list[Line] = []
    for i, line in enumerate(lines):
        if i + 1 < len(lines):
            next_start = lines[i + 1].start
        else:
            next_start = line.start + DEFAULT_LINE_DURATION_MS

        if line.syllables and _is_placeholder_line(line):
            estimated = estimate_line_duration(line.syllables)
            gap = next_start - line.start
            # fit a short gap, but never stretch singing over a musical break
            duration = gap if gap <= estimated else estimated
            syllables = distribute_by_word_length(line.syllables, line.start, duration)
        else:
            fixed: list[Syllable] = []
            n = len(line.syllables)
            for j, s in enumerate(line.syllables):
                if s.end <= s.start:
                    end = line.syllables[j + 1].start if j + 1 < n else next_start
                    s = replace(s, end=max(end, s.start))
                fixed.append(s)
            syllables = tuple(fixed)

        end = max(s.end for s in syllables) if syllables else line.start
        out.append(replace(line, syllables=syllables, end=end))
    return out


def parse_lrc(content: str) -> ParseResult:
    """
    Supported:
    - [mm:ss], [mm:ss.xx], [mm:ss:xx], [mm:ss.xxx]
    - several leading timestamps per line
    - [ti:], [ar:], [al:], [offset:+/-ms], [length:mm:ss]
    - Enhanced LRC inline word times: <mm:ss.xx>word

    Simple LRC has no word timing; it is estimated from word lengths and a
    warning is attached to the result.
    """
    try:
        text_lines = content.splitlines()
        metadata = _parse_metadata(text_lines)
        offset = metadata.offset_ms or 0
        enhanced = any(ENHANCED_WORD_RE.search(ln) for ln in text_lines)

        lines: list[Line] = []
        for raw in text_lines:
            m = _LINE_RE.match(raw)
            if not m:
                continue
            payload = m.group(2)
            if not payload.strip():
                continue
            for ts in _LINE_TS_RE.findall(m.group(1)):
                line_start = max(parse_lrc_time(ts) + offset, 0)
                if enhanced and ENHANCED_WORD_RE.search(payload):
                    line = _enhanced_line(line_start, payload, offset)
                    if line is None:
                        logger.debug("Skipping LRC line with only empty word tags: %r", raw)
                        continue
                    lines.append(line)
                else:
                    lines.append(_simple_line(line_start, payload))

        lines.sort(key=lambda ln: ln.start)
        lines = _finalize(lines)

        return Success(
            lines=tuple(lines),
            metadata=metadata,
            warnings=() if enhanced else (SIMPLE_LRC_WARNING,),
            format=LyricsFormat.ENHANCED_LRC if enhanced else LyricsFormat.LRC,
        )
    except Exception as e:
        logger.warning("LRC parse failed: %s", e)
        return Failure(error=f"Failed to parse LRC: {e}")


class LrcParser(LyricsParser):
    """Handles both simple and enhanced LRC."""

    supported_format = LyricsFormat.LRC

    def can_parse(self, content: str) -> bool:
        return is_lrc(content)

    def parse(self, content: str) -> ParseResult:
        return parse_lrc(content)
