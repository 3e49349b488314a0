"""Logging helpers that keep auth headers out of log output."""

from __future__ import annotations

import logging
import re


_SECRET_RE = re.compile(r"(authorization['\"]?\s*[:=]\s*['\"]?bearer\s+|token=)[^\s'\",}]+", re.IGNORECASE)


class HeaderFilter(logging.Filter):
    """Mask bearer tokens that leak in through logged API call actions."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = _SECRET_RE.sub(lambda m: f"{m.group(1)}***", record.getMessage())
        record.args = ()
        return True


logger = logging.getLogger("throttle")
logger.addFilter(HeaderFilter())


def configure(level: str = "INFO") -> None:
    """Attach a stream handler to the root logger at ``level``."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
