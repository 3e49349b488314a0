"""Runtime configuration read from the environment.

Values come from process environment variables, with a ``.env`` file in the
working directory loaded first (existing variables win).
"""
from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from typing import FrozenSet

from dotenv import load_dotenv

load_dotenv(dotenv_path=".env", encoding="utf-8")


def _number(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {raw!r}")
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {raw!r}")
    return value


def _prefixes(raw: str) -> FrozenSet[str]:
    return frozenset(p.strip() for p in raw.split(",") if p.strip())


@dataclass(frozen=True)
class Settings:
    """Throttle configuration.

    Parameters
    ----------
    request_throttle_seconds:
        Window in which a repeated request is skipped.
    freshness_cutoff_seconds:
        Age after which a successful response is considered stale.
    log_delimiter:
        Separator used when flattening the log.
    inspect_rate_limit:
        slowapi limit string for mutating inspection routes.
    track_ignore_prefixes:
        Action type prefixes the tracking hook never logs.
    """

    request_throttle_seconds: float = 10
    freshness_cutoff_seconds: float = 300
    log_delimiter: str = "--"
    inspect_rate_limit: str = "30/minute"
    track_ignore_prefixes: FrozenSet[str] = field(default_factory=frozenset)
    port: int = 8001
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        port = os.getenv("PORT", "8001")
        if not port.isdigit():
            raise ValueError(f"PORT must be an integer, got {port!r}")
        return cls(
            request_throttle_seconds=_number("REQUEST_THROTTLE_SECONDS", "10"),
            freshness_cutoff_seconds=_number("FRESHNESS_CUTOFF_SECONDS", "300"),
            log_delimiter=os.getenv("LOG_DELIMITER", "--") or "--",
            inspect_rate_limit=os.getenv("INSPECT_RATE_LIMIT", "30/minute"),
            track_ignore_prefixes=_prefixes(os.getenv("TRACK_IGNORE_PREFIXES", "")),
            port=int(port),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
