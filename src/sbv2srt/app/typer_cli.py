from __future__ import annotations

from pathlib import Path

import typer

from sbv2srt.core.convert import ConvertRequest, convert_file
from sbv2srt.infra.config import build_app_config, resolve_version
from sbv2srt.infra.log import configure_logging
from sbv2srt.infra.paths import resolve_output_path, validate_input_path

app = typer.Typer(
    name="sbv2srt",
    add_completion=True,
    no_args_is_help=True,
    help=(
        "Convert SBV (SubViewer) subtitle files to SRT (SubRip) format. "
        "SBV files are commonly exported by YouTube and other platforms; "
        "SRT is supported by most media players and video editors."
    ),
)


@app.command("convert")
def convert_command(
    input_path: Path = typer.Argument(..., help="Input SBV file path."),
    output_path: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output SRT file path (default: input path with .srt extension).",
    ),
    input_encoding: str | None = typer.Option(
        None,
        "--encoding",
        help="Input text encoding (default: utf-8-sig or SBV2SRT_INPUT_ENCODING).",
    ),
    skip_invalid: bool = typer.Option(
        False,
        "--skip-invalid",
        help="Drop blocks with malformed timestamps instead of failing.",
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", help="DEBUG|INFO|WARNING|ERROR (default: WARNING)."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Shortcut for --log-level INFO."
    ),
) -> None:
    """Convert a single SBV file to SRT."""
    try:
        input_path = validate_input_path(input_path)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="INPUT_PATH") from exc
    try:
        output_path = resolve_output_path(input_path, output_path)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--output") from exc
    if verbose and log_level is None:
        log_level = "INFO"
    try:
        config = build_app_config(
            input_encoding=input_encoding,
            log_level=log_level,
            skip_invalid=skip_invalid,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    configure_logging(config.log_level)

    result = convert_file(
        ConvertRequest(input_path=input_path, output_path=output_path, config=config)
    )
    if result.status == "failed":
        typer.echo(f"[failed] Failed to convert SBV file: {result.message}", err=True)
        raise typer.Exit(code=2)

    summary = (
        f"[{result.status}] {result.message}\n"
        f"- input: {result.input_path}\n"
        f"- output: {result.output_path}\n"
        f"- cues: {result.cue_count}"
    )
    if skip_invalid:
        summary += f"\n- skipped blocks: {result.skipped_blocks}"
    typer.echo(summary)


@app.command("version")
def version_command() -> None:
    """Print version information."""
    typer.echo(f"sbv2srt version {resolve_version()}")


def run() -> None:
    """Console-script entrypoint."""
    app()
