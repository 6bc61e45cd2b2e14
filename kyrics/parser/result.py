from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from kyrics.model import Line
from kyrics.parser.errors import LyricsParseError
from kyrics.parser.formats import LyricsFormat


@dataclass(frozen=True, slots=True)
class LyricsMetadata:
    title: str | None = None
    artist: str | None = None
    album: str | None = None
    duration_ms: int | None = None
    offset_ms: int | None = None


@dataclass(frozen=True, slots=True)
class Success:
    lines: tuple[Line, ...]
    metadata: LyricsMetadata = field(default_factory=LyricsMetadata)
    warnings: tuple[str, ...] = ()
    format: LyricsFormat = LyricsFormat.UNKNOWN

    ok = True

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def unwrap(self) -> tuple[Line, ...]:
        return self.lines


@dataclass(frozen=True, slots=True)
class Failure:
    error: str
    line_number: int | None = None

    ok = False

    def unwrap(self) -> tuple[Line, ...]:
        raise LyricsParseError(self.error, self.line_number)


ParseResult = Union[Success, Failure]
