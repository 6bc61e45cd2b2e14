from __future__ import annotations

from kyrics.parser.formats import LyricsFormat
from kyrics.parser.result import ParseResult


class LyricsParser:
    """
    A format-specific builder. parse() never raises: failures come back as
    a Failure result.
    """

    supported_format: LyricsFormat

    def can_parse(self, content: str) -> bool:
        raise NotImplementedError

    def parse(self, content: str) -> ParseResult:
        raise NotImplementedError
