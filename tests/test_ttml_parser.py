from __future__ import annotations

from kyrics.parser import ttml
from kyrics.parser.formats import LyricsFormat
from kyrics.parser.result import Failure, Success
from kyrics.parser.ttml import TtmlParser, parse_ttml


def _wrap(body: str) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<tt xmlns="http://www.w3.org/ns/ttml" '
        'xmlns:ttm="http://www.w3.org/ns/ttml#metadata">\n'
        f"<body><div>\n{body}\n</div></body></tt>\n"
    )


def test_two_paragraphs(ttml_two_paragraphs):
    res = parse_ttml(ttml_two_paragraphs)
    assert isinstance(res, Success)
    assert res.format is LyricsFormat.TTML
    assert [ln.content for ln in res.lines] == ["Hello World", "Test Line"]
    assert res.lines[-1].end == 10000
    assert res.warnings == ()


def test_syllable_timing_is_verbatim(ttml_two_paragraphs):
    first = parse_ttml(ttml_two_paragraphs).lines[0]
    assert first.start == 0
    assert first.end == 5000
    assert [(s.content, s.start, s.end) for s in first.syllables] == [
        ("Hello ", 0, 2500),
        ("World", 2500, 5000),
    ]
    assert first.metadata["alignment"] == "center"
    assert not first.is_accompaniment


def test_trailing_space_trimmed_from_last_syllable_only():
    content = _wrap(
        '<p begin="0ms" end="1000ms">'
        '<span begin="0ms" end="500ms">Hi </span>'
        '<span begin="500ms" end="1000ms">there </span>'
        "</p>"
    )
    line = parse_ttml(content).lines[0]
    assert [s.content for s in line.syllables] == ["Hi ", "there"]


def test_background_vocals_become_separate_line():
    content = _wrap(
        '<p begin="0ms" end="3000ms">'
        '<span begin="0ms" end="1000ms">Main</span>'
        '<span ttm:role="x-bg" begin="1000ms" end="2000ms">'
        '<span begin="1000ms" end="2000ms">(ooh)</span>'
        "</span>"
        "</p>"
    )
    res = parse_ttml(content)
    assert len(res.lines) == 2
    main, bg = res.lines
    assert not main.is_accompaniment
    assert [s.content for s in main.syllables] == ["Main"]
    assert bg.is_accompaniment
    assert bg.metadata["type"] == "accompaniment"
    assert [(s.content, s.start, s.end) for s in bg.syllables] == [("(ooh)", 1000, 2000)]
    assert (bg.start, bg.end) == (1000, 2000)


def test_background_span_with_plain_text():
    content = _wrap(
        '<p begin="0ms" end="3000ms">'
        '<span begin="0ms" end="1000ms">Lead </span>'
        '<span begin="1000ms" end="1500ms">vocal</span>'
        '<span role="x-bg" begin="1500ms" end="2500ms">yeah</span>'
        "</p>"
    )
    res = parse_ttml(content)
    main, bg = res.lines
    assert main.content == "Lead vocal"
    assert bg.is_accompaniment
    assert bg.content == "yeah"
    assert (bg.start, bg.end) == (1500, 2500)


def test_spans_without_timing_or_text_are_skipped():
    content = _wrap(
        '<p begin="0ms" end="2000ms">'
        "<span>untimed</span>"
        '<span begin="0ms" end="500ms"></span>'
        '<span begin="500ms" end="2000ms">kept</span>'
        "</p>"
    )
    line = parse_ttml(content).lines[0]
    assert [s.content for s in line.syllables] == ["kept"]


def test_paragraph_without_timing_or_spans_is_dropped():
    content = _wrap(
        '<p><span begin="0ms" end="500ms">no p timing</span></p>'
        '<p begin="1s" end="2s">no spans at all</p>'
        '<p begin="3s" end="4s"><span begin="3s" end="4s">ok</span></p>'
    )
    res = parse_ttml(content)
    assert [ln.content for ln in res.lines] == ["ok"]
    assert res.lines[0].start == 3000


def test_lines_sorted_by_start():
    content = _wrap(
        '<p begin="00:05.000" end="00:06.000"><span begin="00:05.000" end="00:06.000">b</span></p>'
        '<p begin="00:01.000" end="00:02.000"><span begin="00:01.000" end="00:02.000">a</span></p>'
    )
    assert [ln.content for ln in parse_ttml(content).lines] == ["a", "b"]


def test_empty_document_is_success():
    res = parse_ttml(_wrap(""))
    assert isinstance(res, Success)
    assert res.lines == ()


def test_unexpected_error_becomes_failure(monkeypatch):
    def boom(self, tag):
        raise RuntimeError("reader exploded")

    monkeypatch.setattr(ttml.MarkupReader, "find_elements", boom)
    res = parse_ttml(_wrap(""))
    assert isinstance(res, Failure)
    assert res.error == "Failed to parse TTML: reader exploded"


def test_parser_class():
    p = TtmlParser()
    assert p.supported_format is LyricsFormat.TTML
    assert p.can_parse(_wrap(""))
    assert not p.can_parse("[00:01.00]x")


def _bg_paragraph(container_timing: str) -> str:
    return _wrap(
        '<p begin="0ms" end="3000ms">'
        '<span begin="0ms" end="1000ms">Main </span>'
        f'<span ttm:role="x-bg"{container_timing}>'
        '<span begin="1000ms" end="1800ms">(ooh </span>'
        '<span begin="1800ms" end="2500ms">ahh)</span>'
        "</span>"
        '<span begin="2500ms" end="3000ms">after</span>'
        "</p>"
    )


def test_background_container_with_several_spans():
    res = parse_ttml(_bg_paragraph(' begin="900ms" end="2600ms"'))
    assert [(ln.is_accompaniment, [s.content for s in ln.syllables]) for ln in res.lines] == [
        (False, ["Main ", "after"]),
        (True, ["(ooh ", "ahh)"]),
    ]
    bg = res.lines[1]
    assert [(s.start, s.end) for s in bg.syllables] == [(1000, 1800), (1800, 2500)]
    assert (bg.start, bg.end) == (900, 2600)


def test_untimed_background_container_spans_its_syllables():
    res = parse_ttml(_bg_paragraph(""))
    main, bg = res.lines
    assert main.content == "Main after"
    assert bg.is_accompaniment
    assert bg.content == "(ooh ahh)"
    assert (bg.start, bg.end) == (1000, 2500)
