from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True)
class SubtitleCue:
    start: timedelta
    end: timedelta
    text: str
