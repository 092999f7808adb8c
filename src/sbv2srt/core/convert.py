from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from sbv2srt.core.errors import SubtitleError
from sbv2srt.core.sbv import load_sbv_text, parse_sbv, parse_sbv_valid
from sbv2srt.core.subtitle import format_srt, write_srt
from sbv2srt.infra.config import AppConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConvertRequest:
    input_path: Path
    output_path: Path
    config: AppConfig


@dataclass(frozen=True)
class ConvertResult:
    input_path: Path
    output_path: Path
    cue_count: int
    skipped_blocks: int
    status: str
    message: str
    error: SubtitleError | None = None


def convert_text(text: str, *, skip_invalid: bool = False) -> str:
    """Convert SBV text to SRT text in memory."""
    return format_srt(parse_sbv(text, skip_invalid=skip_invalid))


def convert_file(request: ConvertRequest) -> ConvertResult:
    """Parse the SBV input and write the SRT output; nothing is written on failure."""
    config = request.config
    logger.info("Converting SBV file %s -> %s", request.input_path, request.output_path)
    try:
        content = load_sbv_text(request.input_path, encoding=config.input_encoding)
        if config.skip_invalid:
            cues, skipped = parse_sbv_valid(content)
        else:
            cues, skipped = parse_sbv(content), 0
        logger.info("Parsed %d subtitle entries", len(cues))
        write_srt(cues, request.output_path, encoding=config.output_encoding)
    except SubtitleError as exc:
        logger.error("Conversion failed: %s", exc)
        return ConvertResult(
            input_path=request.input_path,
            output_path=request.output_path,
            cue_count=0,
            skipped_blocks=0,
            status="failed",
            message=str(exc),
            error=exc,
        )

    return ConvertResult(
        input_path=request.input_path,
        output_path=request.output_path,
        cue_count=len(cues),
        skipped_blocks=skipped,
        status="done",
        message=f"Converted {len(cues)} subtitles to SRT format.",
    )
