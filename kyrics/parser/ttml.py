from __future__ import annotations

import logging

from kyrics.builder import LineBuilder
from kyrics.model import Line, Syllable
from kyrics.parser.base import LyricsParser
from kyrics.parser.formats import LyricsFormat
from kyrics.parser.markup import Element, MarkupReader, is_likely_ttml
from kyrics.parser.result import Failure, ParseResult, Success
from kyrics.parser.timecode import parse_time

logger = logging.getLogger(__name__)

BACKGROUND_ROLE = "x-bg"


def _timing(el: Element) -> tuple[int, int] | None:
    begin = el.get_attribute("begin")
    end = el.get_attribute("end")
    if begin is None or end is None:
        return None
    return parse_time(begin), parse_time(end)


def _is_background(el: Element) -> bool:
    return el.get_attribute_ns("ttm", "role") == BACKGROUND_ROLE


def _to_syllable(el: Element) -> Syllable | None:
    timing = _timing(el)
    if timing is None or not el.text_content:
        return None
    return Syllable(el.text_content, timing[0], timing[1])


def _to_line(syllables: list[Syllable], start: int, end: int, *, accompaniment: bool) -> Line | None:
    if not syllables:
        return None
    b = LineBuilder(start, end).alignment("center")
    if accompaniment:
        b.accompaniment()
    last = len(syllables) - 1
    for i, s in enumerate(syllables):
        # no dangling space at the end of a row
        text = s.content.rstrip() if i == last else s.content
        b.syllable(text, start=s.start, end=s.end)
    return b.build()


def _parse_paragraph(p: Element, reader: MarkupReader) -> list[Line]:
    timing = _timing(p)
    if timing is None:
        logger.debug("Skipping <p> without begin/end: %r", p.text_content[:40])
        return []

    main: list[Syllable] = []
    background: list[Syllable] = []
    bg_timings: list[tuple[int, int]] = []

    for span, _region in reader.find_top_level_elements(p.inner_markup, "span"):
        if not _is_background(span):
            s = _to_syllable(span)
            if s is not None:
                main.append(s)
            continue

        span_timing = _timing(span)
        if span_timing is not None:
            bg_timings.append(span_timing)
        nested = reader.find_top_level_elements(span.inner_markup, "span")
        for child, _child_region in nested:
            s = _to_syllable(child)
            if s is not None:
                background.append(s)
        if not nested and span.text_content.strip():
            s = _to_syllable(span)
            if s is not None:
                background.append(s)

    out: list[Line] = []
    line = _to_line(main, timing[0], timing[1], accompaniment=False)
    if line is not None:
        out.append(line)

    if background:
        if bg_timings:
            bg_start = min(t[0] for t in bg_timings)
            bg_end = max(t[1] for t in bg_timings)
        else:
            bg_start, bg_end = background[0].start, background[-1].end
        line = _to_line(background, bg_start, bg_end, accompaniment=True)
        if line is not None:
            out.append(line)
    return out


def parse_ttml(content: str) -> ParseResult:
    """
    Build lines from TTML <p>/<span> markup.

    Each <p> gives at most two lines: the main vocal (its spans) and a
    background vocal (spans under a ttm:role="x-bg" container). Syllable
    timing is taken verbatim from the spans.
    """
    try:
        reader = MarkupReader(content)
        lines: list[Line] = []
        for p in reader.find_elements("p"):
            lines.extend(_parse_paragraph(p, reader))
        lines.sort(key=lambda ln: ln.start)
        return Success(lines=tuple(lines), format=LyricsFormat.TTML)
    except Exception as e:
        logger.warning("TTML parse failed: %s", e)
        return Failure(error=f"Failed to parse TTML: {e}")


class TtmlParser(LyricsParser):
    supported_format = LyricsFormat.TTML

    def can_parse(self, content: str) -> bool:
        return is_likely_ttml(content)

    def parse(self, content: str) -> ParseResult:
        return parse_ttml(content)
