from __future__ import annotations

from typing import Iterable

from kyrics.model import Line, Syllable


class LineBuilder:
    """
    Incremental Line constructor.

        b = LineBuilder(1000, 3000)
        b.syllable("Hel", duration=200)
        b.syllable("lo ", duration=300)
        b.syllable("World", start=1600, end=2100)
        line = b.build()

    Syllables given by duration start where the previous one ended.
    """

    def __init__(self, start: int, end: int):
        self.start = start
        self.end = end
        self._syllables: list[Syllable] = []
        self._cursor = start
        self._metadata: dict[str, str] = {}
        self._accompaniment = False

    def syllable(
        self,
        content: str,
        *,
        duration: int | None = None,
        start: int | None = None,
        end: int | None = None,
    ) -> "LineBuilder":
        if duration is not None:
            if start is not None or end is not None:
                raise ValueError("pass either duration or start/end, not both")
            s, e = self._cursor, self._cursor + duration
        elif start is not None and end is not None:
            s, e = start, end
        else:
            raise ValueError("syllable needs duration or both start and end")
        self._syllables.append(Syllable(content, s, e))
        self._cursor = e
        return self

    def syllables(self, pairs: Iterable[tuple[str, int]]) -> "LineBuilder":
        for content, duration in pairs:
            self.syllable(content, duration=duration)
        return self

    def accompaniment(self) -> "LineBuilder":
        self._accompaniment = True
        self._metadata["type"] = "accompaniment"
        return self

    def alignment(self, value: str) -> "LineBuilder":
        self._metadata["alignment"] = value
        return self

    def metadata(self, key: str, value: str) -> "LineBuilder":
        self._metadata[key] = value
        return self

    def build(self) -> Line:
        return Line(
            syllables=tuple(self._syllables),
            start=self.start,
            end=self.end,
            is_accompaniment=self._accompaniment,
            metadata=dict(self._metadata),
        )


def build_line(
    start: int,
    end: int,
    syllables: Iterable[tuple[str, int, int]],
    *,
    is_accompaniment: bool = False,
    alignment: str | None = None,
) -> Line:
    b = LineBuilder(start, end)
    for content, s, e in syllables:
        b.syllable(content, start=s, end=e)
    if is_accompaniment:
        b.accompaniment()
    if alignment:
        b.alignment(alignment)
    return b.build()
