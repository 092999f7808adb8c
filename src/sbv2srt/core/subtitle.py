from __future__ import annotations

from datetime import timedelta
from pathlib import Path
import re
from typing import Iterable, TextIO

from sbv2srt.core.errors import SubtitleIOError
from sbv2srt.schemas.subtitle import SubtitleCue

DEFAULT_SRT_ENCODING = "utf-8"

_SRT_TIMESTAMP_PATTERN = re.compile(r"^(\d{2,}):(\d{2}):(\d{2}),(\d{3})$")
_ONE_MILLISECOND = timedelta(milliseconds=1)


def format_srt_timestamp(offset: timedelta) -> str:
    """Format an offset as SRT timestamp (HH:MM:SS,mmm), truncating sub-millisecond parts."""
    millis = offset // _ONE_MILLISECOND
    hours = millis // 3_600_000
    minutes = (millis // 60_000) % 60
    secs = (millis // 1_000) % 60
    ms = millis % 1_000
    return f"{hours:02d}:{minutes:02d}:{secs:02d},{ms:03d}"


def parse_srt_timestamp(value: str) -> timedelta:
    match = _SRT_TIMESTAMP_PATTERN.match(value.strip())
    if not match:
        raise ValueError(f"Invalid SRT timestamp: {value!r}")
    hh, mm, ss, ms = (int(group) for group in match.groups())
    return timedelta(hours=hh, minutes=mm, seconds=ss, milliseconds=ms)


def format_srt(cues: Iterable[SubtitleCue]) -> str:
    """Render cues as SRT text, numbered from 1 in the given order."""
    blocks: list[str] = []
    for index, cue in enumerate(cues, start=1):
        blocks.append(
            f"{index}\n"
            f"{format_srt_timestamp(cue.start)} --> {format_srt_timestamp(cue.end)}\n"
            f"{cue.text}\n\n"
        )
    return "".join(blocks)


def write_srt_stream(cues: Iterable[SubtitleCue], writer: TextIO) -> None:
    content = format_srt(cues)
    try:
        writer.write(content)
    except (OSError, UnicodeEncodeError) as exc:
        raise SubtitleIOError(f"Failed to write SRT content: {exc}") from exc


def write_srt(
    cues: Iterable[SubtitleCue],
    output_path: Path,
    *,
    encoding: str = DEFAULT_SRT_ENCODING,
) -> None:
    """Write subtitle cues to an SRT file.

    The content is encoded before the file is opened, so an encoding failure
    leaves any existing file untouched.
    """
    try:
        data = format_srt(cues).encode(encoding)
    except UnicodeEncodeError as exc:
        raise SubtitleIOError(
            f"Failed to encode SRT content as {encoding}: {exc}", path=output_path
        ) from exc
    try:
        with output_path.open("wb") as handle:
            handle.write(data)
    except OSError as exc:
        raise SubtitleIOError(
            f"Failed to write SRT file {output_path}: {exc}", path=output_path
        ) from exc
