from __future__ import annotations

from pathlib import Path


class SubtitleError(Exception):
    """Base class for every failure raised while converting subtitles."""


class SbvParseError(SubtitleError, ValueError):
    """A timestamp line could not be parsed.

    ``line_number`` (1-based) and ``line`` are filled in by the parser once the
    failing line is known; they are ``None`` when a helper such as
    ``parse_time`` is called directly.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.line_number: int | None = None
        self.line: str | None = None

    def locate(self, line_number: int, line: str) -> SbvParseError:
        self.line_number = line_number
        self.line = line
        return self

    def __str__(self) -> str:
        if self.line_number is None:
            return self.message
        return f"line {self.line_number} ({self.line!r}): {self.message}"


class TimestampFormatError(SbvParseError):
    """Wrong number of ``,``, ``:`` or ``.`` separators."""


class TimestampFieldError(SbvParseError):
    def __init__(self, message: str, *, field: str, value: str) -> None:
        super().__init__(message)
        self.field = field
        self.value = value


class TimestampValueError(TimestampFieldError):
    """A field is not an unsigned decimal integer."""


class TimestampRangeError(TimestampFieldError):
    def __init__(
        self, message: str, *, field: str, value: str, low: int, high: int
    ) -> None:
        super().__init__(message, field=field, value=value)
        self.low = low
        self.high = high


class SubtitleIOError(SubtitleError, OSError):
    """Reading or writing a subtitle file failed; ``__cause__`` holds the original error."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path