from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import TextIO

from sbv2srt.core.errors import (
    SbvParseError,
    SubtitleIOError,
    TimestampFormatError,
    TimestampRangeError,
    TimestampValueError,
)
from sbv2srt.schemas.subtitle import SubtitleCue

logger = logging.getLogger(__name__)

DEFAULT_SBV_ENCODING = "utf-8-sig"

_FIELD_BOUNDS: dict[str, tuple[int, int]] = {
    "hours": (0, 23),
    "minutes": (0, 59),
    "seconds": (0, 59),
    "milliseconds": (0, 999),
}


@dataclass(frozen=True)
class BlockResult:
    """Outcome of one timestamp-shaped block: exactly one of cue/error is set."""

    line_number: int
    cue: SubtitleCue | None = None
    error: SbvParseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class _RawBlock:
    line_number: int
    timestamp_line: str
    text: str


def is_timestamp_line(line: str) -> bool:
    """Cheap structural check: a timestamp line has both ``,`` and ``:``."""
    return "," in line and ":" in line


def _parse_field(raw: str, field: str, which: str) -> int:
    if not (raw.isascii() and raw.isdigit()):
        raise TimestampValueError(
            f"invalid {field} in {which} time: {raw!r}", field=field, value=raw
        )
    value = int(raw)
    low, high = _FIELD_BOUNDS[field]
    if value < low or value > high:
        raise TimestampRangeError(
            f"{field} out of range ({low}-{high}) in {which} time: {value}",
            field=field,
            value=raw,
            low=low,
            high=high,
        )
    return value


def parse_time(value: str, *, which: str = "start") -> timedelta:
    """Parse an SBV time value ``H:MM:SS.mmm``."""
    parts = value.split(":")
    if len(parts) != 3:
        raise TimestampFormatError(f"invalid {which} time format: {value!r}")
    hours = _parse_field(parts[0], "hours", which)
    minutes = _parse_field(parts[1], "minutes", which)

    seconds_parts = parts[2].split(".")
    if len(seconds_parts) != 2:
        raise TimestampFormatError(
            f"invalid seconds format in {which} time: {parts[2]!r}"
        )
    seconds = _parse_field(seconds_parts[0], "seconds", which)
    milliseconds = _parse_field(seconds_parts[1], "milliseconds", which)

    return timedelta(
        hours=hours, minutes=minutes, seconds=seconds, milliseconds=milliseconds
    )


def parse_timestamp_line(line: str) -> tuple[timedelta, timedelta]:
    """Parse ``start,end`` into a pair of offsets."""
    parts = line.split(",")
    if len(parts) != 2:
        raise TimestampFormatError(f"invalid timestamp format: {line!r}")
    start = parse_time(parts[0].strip(), which="start")
    end = parse_time(parts[1].strip(), which="end")
    return start, end


def _iter_blocks(text: str) -> Iterator[_RawBlock]:
    lines = [line.strip() for line in text.split("\n")]
    index = 0
    while index < len(lines):
        line = lines[index]
        if not line:
            index += 1
            continue
        if not is_timestamp_line(line):
            logger.debug("Skipping stray line %d: %r", index + 1, line)
            index += 1
            continue

        text_start = index + 1
        text_end = text_start
        while text_end < len(lines) and lines[text_end]:
            text_end += 1
        yield _RawBlock(
            line_number=index + 1,
            timestamp_line=line,
            text="\n".join(lines[text_start:text_end]),
        )
        index = text_end


def _build_cue(block: _RawBlock) -> SubtitleCue:
    try:
        start, end = parse_timestamp_line(block.timestamp_line)
    except SbvParseError as exc:
        exc.locate(block.line_number, block.timestamp_line)
        raise
    return SubtitleCue(start=start, end=end, text=block.text)


def parse_sbv_blocks(text: str) -> list[BlockResult]:
    """Parse every block independently, collecting failures instead of raising."""
    results: list[BlockResult] = []
    for block in _iter_blocks(text):
        try:
            cue = _build_cue(block)
        except SbvParseError as exc:
            results.append(BlockResult(line_number=block.line_number, error=exc))
            continue
        results.append(BlockResult(line_number=block.line_number, cue=cue))
    return results


def parse_sbv(text: str, *, skip_invalid: bool = False) -> list[SubtitleCue]:
    """Parse SBV text into cues in source order.

    By default the first malformed timestamp line aborts the whole parse and
    nothing is returned. With ``skip_invalid`` the malformed blocks are logged
    and dropped instead.
    """
    if not skip_invalid:
        return [_build_cue(block) for block in _iter_blocks(text)]
    cues, _ = parse_sbv_valid(text)
    return cues


def parse_sbv_valid(text: str) -> tuple[list[SubtitleCue], int]:
    """Return the cues of every valid block and the number of blocks skipped."""
    cues: list[SubtitleCue] = []
    skipped = 0
    for result in parse_sbv_blocks(text):
        if result.cue is None:
            logger.warning("Skipping invalid block: %s", result.error)
            skipped += 1
            continue
        cues.append(result.cue)
    return cues, skipped


def parse_sbv_stream(reader: TextIO, *, skip_invalid: bool = False) -> list[SubtitleCue]:
    return parse_sbv(reader.read(), skip_invalid=skip_invalid)


def load_sbv_text(input_path: Path, *, encoding: str = DEFAULT_SBV_ENCODING) -> str:
    try:
        with input_path.open("r", encoding=encoding, newline="") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise SubtitleIOError(
            f"Failed to read SBV file {input_path}: {exc}", path=input_path
        ) from exc


def read_sbv(
    input_path: Path,
    *,
    encoding: str = DEFAULT_SBV_ENCODING,
    skip_invalid: bool = False,
) -> list[SubtitleCue]:
    """Read and parse an SBV file."""
    content = load_sbv_text(input_path, encoding=encoding)
    return parse_sbv(content, skip_invalid=skip_invalid)
