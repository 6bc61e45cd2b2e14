from __future__ import annotations

from kyrics.builder import build_line
from kyrics.model import IMPLICIT_SPACING, WORD_SPACING_KEY, Line, Syllable


def test_content_concatenates_syllables():
    line = build_line(0, 1000, [("Hel", 0, 200), ("lo ", 200, 500), ("World", 500, 1000)])
    assert line.content == "Hello World"
    assert line.text == "Hello World"
    assert line.duration == 1000


def test_implicit_spacing_text():
    line = Line(
        syllables=(Syllable("Hello", 0, 10), Syllable("World", 10, 20)),
        start=0,
        end=20,
        metadata={WORD_SPACING_KEY: IMPLICIT_SPACING},
    )
    assert line.content == "HelloWorld"
    assert line.text == "Hello World"


def test_time_predicates_are_inclusive():
    line = Line(syllables=(), start=1000, end=2000)
    assert line.contains_time(1000)
    assert line.contains_time(2000)
    assert not line.contains_time(999)
    assert line.is_upcoming_at(999)
    assert line.has_played_at(2001)
    assert not line.has_played_at(2000)


def test_progress():
    line = Line(syllables=(), start=1000, end=3000)
    assert line.progress_at(1000) == 0.0
    assert line.progress_at(2000) == 0.5
    assert line.progress_at(3000) == 1.0
    assert line.progress_at(500) is None
    assert Line(syllables=(), start=5, end=5).progress_at(5) == 1.0


def test_line_without_syllables_keeps_bounds():
    line = Line(syllables=(), start=100, end=200)
    assert line.content == ""
    assert (line.start, line.end) == (100, 200)
    assert not line.is_accompaniment
    assert dict(line.metadata) == {}
