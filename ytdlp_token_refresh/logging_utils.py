"""
Logging helpers for ytdlp-token-refresh.

Records come in two visibilities: normal ones, which silent mode hides,
and forced ones, which are always shown. A record is forced when it is
logged with ``extra=FORCED``.
"""

from __future__ import annotations

import logging
import sys

from .config import RunConfig

FORCED = {"forced": True}


class SilentFilter(logging.Filter):
    """
    Drop normal records in silent mode; forced records always pass.
    """

    def __init__(self, silent: bool) -> None:
        super().__init__()
        self.silent = silent

    def filter(self, record: logging.LogRecord) -> bool:
        return not self.silent or bool(getattr(record, "forced", False))


def configure_logging(config: RunConfig) -> None:
    """
    Configure the root logger for a run.

    verbose -> DEBUG, so tracebacks and raw generator output are shown
    otherwise -> INFO
    """

    level = logging.DEBUG if config.verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(message)s",
        stream=sys.stdout,
        force=True,
    )

    silent_filter = SilentFilter(silent=config.silent)
    for handler in logging.getLogger().handlers:
        handler.addFilter(silent_filter)
