from __future__ import annotations

from pathlib import Path

SBV_SUFFIX = ".sbv"
SRT_SUFFIX = ".srt"


def validate_input_path(input_path: Path) -> Path:
    if not input_path.exists():
        raise ValueError(f"Input file does not exist: {input_path}")
    if not input_path.is_file():
        raise ValueError(f"Input path is not a file: {input_path}")
    if input_path.suffix.lower() != SBV_SUFFIX:
        raise ValueError(
            f"Input file must have {SBV_SUFFIX} extension, got: {input_path.suffix or '(none)'}"
        )
    return input_path


def resolve_output_path(input_path: Path, output_path: Path | None = None) -> Path:
    """Use the explicit output path if valid, else swap the input's suffix for .srt."""
    if output_path is None:
        return input_path.with_suffix(SRT_SUFFIX)
    if output_path.suffix.lower() != SRT_SUFFIX:
        raise ValueError(f"Output file must have {SRT_SUFFIX} extension: {output_path}")
    parent = output_path.parent
    if not parent.is_dir():
        raise ValueError(f"Output directory does not exist: {parent}")
    return output_path
