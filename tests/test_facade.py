from __future__ import annotations

import pytest

import kyrics
from kyrics.parser import (
    UNKNOWN_FORMAT_ERROR,
    Failure,
    LrcParser,
    LyricsFormat,
    LyricsParseError,
    Success,
    TtmlParser,
    UnsupportedFormatError,
    create_parser,
    load_lyrics,
    parse,
    parse_file,
)

LRC = "[ti:Song]\n[00:01.00]Hello there\n[00:04.00]General Kenobi\n"
PROSE = "Just some prose.\nNothing timed here."


def test_parse_detects_ttml(ttml_two_paragraphs):
    res = parse(ttml_two_paragraphs)
    assert isinstance(res, Success)
    assert res.ok
    assert res.format is LyricsFormat.TTML
    assert len(res.lines) == 2


def test_parse_detects_lrc():
    res = parse(LRC)
    assert res.ok
    assert res.format is LyricsFormat.LRC
    assert res.metadata.title == "Song"


def test_parse_unknown_content_fails():
    res = parse(PROSE)
    assert isinstance(res, Failure)
    assert not res.ok
    assert res.error == UNKNOWN_FORMAT_ERROR
    assert not hasattr(res, "lines")


def test_unknown_format_argument_means_detect():
    assert parse(LRC, LyricsFormat.UNKNOWN).format is LyricsFormat.LRC


def test_explicit_format_skips_detection():
    # LRC text read as TTML simply has no paragraphs
    res = parse(LRC, LyricsFormat.TTML)
    assert isinstance(res, Success)
    assert res.lines == ()


def test_parse_file_prefers_extension(ttml_two_paragraphs):
    assert parse_file(ttml_two_paragraphs, "song.ttml").format is LyricsFormat.TTML
    assert parse_file(LRC, "song.lrc").format is LyricsFormat.LRC


def test_parse_file_falls_back_to_content():
    assert parse_file(LRC, "lyrics.txt").format is LyricsFormat.LRC
    assert parse_file(LRC, None).format is LyricsFormat.LRC
    assert isinstance(parse_file(PROSE, "notes.txt"), Failure)


def test_create_parser():
    assert isinstance(create_parser(LyricsFormat.TTML), TtmlParser)
    assert isinstance(create_parser(LyricsFormat.LRC), LrcParser)
    assert isinstance(create_parser(LyricsFormat.ENHANCED_LRC), LrcParser)
    with pytest.raises(UnsupportedFormatError):
        create_parser(LyricsFormat.UNKNOWN)


def test_load_lyrics():
    lines = load_lyrics(LRC, "x.lrc")
    assert [ln.text for ln in lines] == ["Hello there", "General Kenobi"]
    with pytest.raises(LyricsParseError) as exc:
        load_lyrics(PROSE)
    assert exc.value.error == UNKNOWN_FORMAT_ERROR


def test_parse_error_mentions_line_number():
    with pytest.raises(LyricsParseError, match=r"broken \(line 7\)"):
        Failure("broken", line_number=7).unwrap()


def test_package_exports(ttml_two_paragraphs):
    res = kyrics.parse(ttml_two_paragraphs)
    st = kyrics.calculate_state(res.lines, 1000)
    assert st.current_line_index == 0
    assert isinstance(st.current_line, kyrics.Line)
