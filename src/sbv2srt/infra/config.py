from __future__ import annotations

import codecs
import os
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version

from sbv2srt.core.sbv import DEFAULT_SBV_ENCODING
from sbv2srt.core.subtitle import DEFAULT_SRT_ENCODING

PACKAGE_NAME = "sbv2srt"
DEFAULT_LOG_LEVEL = "WARNING"
SUPPORTED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

ENV_INPUT_ENCODING = "SBV2SRT_INPUT_ENCODING"
ENV_OUTPUT_ENCODING = "SBV2SRT_OUTPUT_ENCODING"
ENV_LOG_LEVEL = "SBV2SRT_LOG_LEVEL"


@dataclass(frozen=True)
class AppConfig:
    input_encoding: str
    output_encoding: str
    log_level: str
    skip_invalid: bool = False


def normalize_encoding(value: str) -> str:
    encoding = value.strip().lower()
    try:
        codecs.lookup(encoding)
    except LookupError as exc:
        raise ValueError(f"Unsupported encoding '{value}'.") from exc
    return encoding


def normalize_log_level(value: str) -> str:
    level = value.strip().upper()
    if level not in SUPPORTED_LOG_LEVELS:
        raise ValueError(
            f"Unsupported log level '{value}'. Allowed: {', '.join(SUPPORTED_LOG_LEVELS)}"
        )
    return level


def _resolve(explicit: str | None, env_name: str, default: str) -> str:
    if explicit is not None:
        return explicit
    return os.getenv(env_name) or default


def build_app_config(
    *,
    input_encoding: str | None = None,
    output_encoding: str | None = None,
    log_level: str | None = None,
    skip_invalid: bool = False,
) -> AppConfig:
    return AppConfig(
        input_encoding=normalize_encoding(
            _resolve(input_encoding, ENV_INPUT_ENCODING, DEFAULT_SBV_ENCODING)
        ),
        output_encoding=normalize_encoding(
            _resolve(output_encoding, ENV_OUTPUT_ENCODING, DEFAULT_SRT_ENCODING)
        ),
        log_level=normalize_log_level(
            _resolve(log_level, ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL)
        ),
        skip_invalid=skip_invalid,
    )


def resolve_version() -> str:
    try:
        return version(PACKAGE_NAME)
    except PackageNotFoundError:
        return "unknown"
