class LyricsError(ValueError):
    pass


class UnsupportedFormatError(LyricsError):
    pass


class LyricsParseError(LyricsError):
    def __init__(self, error: str, line_number: int | None = None):
        super().__init__(error)
        self.error = error
        self.line_number = line_number

    def __str__(self) -> str:
        if self.line_number is not None:
            return f"{self.error} (line {self.line_number})"
        return self.error
