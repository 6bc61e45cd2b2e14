from __future__ import annotations

from pathlib import Path

import pytest

from kyrics.parser.formats import (
    LyricsFormat,
    detect_format,
    detect_format_from_extension,
    is_enhanced_lrc,
    is_lrc,
)


def test_detect_ttml_wins_over_brackets(ttml_two_paragraphs):
    assert detect_format(ttml_two_paragraphs) is LyricsFormat.TTML
    assert detect_format('<tt xmlns="x">[00:01.00]oops</tt>') is LyricsFormat.TTML


def test_detect_enhanced_lrc():
    text = "[00:01.00]<00:01.00>Hello <00:01.50>world\n"
    assert detect_format(text) is LyricsFormat.ENHANCED_LRC
    assert is_enhanced_lrc(text)


def test_detect_simple_lrc():
    text = "[ti:Song]\n[00:01.00]Hello\n[00:03.50]World\n"
    assert detect_format(text) is LyricsFormat.LRC
    assert is_lrc(text)
    assert not is_enhanced_lrc(text)


def test_lrc_timestamp_variants():
    assert is_lrc("[1:05]x")
    assert is_lrc("   [00:12:50]x")
    assert is_lrc("[00:12.500]x")


@pytest.mark.parametrize(
    "text",
    [
        "Just some prose.\nNothing timed here.",
        "[ti:Only metadata]\n[ar:Someone]",
        "",
    ],
)
def test_detect_unknown(text):
    assert detect_format(text) is LyricsFormat.UNKNOWN


@pytest.mark.parametrize(
    "name, expected",
    [
        ("song.ttml", LyricsFormat.TTML),
        ("SONG.TTML", LyricsFormat.TTML),
        ("song.xml", LyricsFormat.TTML),
        ("song.lrc", LyricsFormat.LRC),
        (Path("dir/song.lrc"), LyricsFormat.LRC),
        ("song.txt", None),
        ("noext", None),
        (None, None),
        ("", None),
    ],
)
def test_detect_format_from_extension(name, expected):
    assert detect_format_from_extension(name) is expected
