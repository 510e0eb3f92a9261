"""
High-level orchestration for ytdlp-token-refresh.

A run acquires a fresh PO token from the generator and only then
patches the yt-dlp config with it.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .config import RunConfig
from .generator import acquire_token
from .logging_utils import FORCED
from .patcher import patch_config

LOG = logging.getLogger(__name__)


def run_refresh(config: RunConfig) -> Path:
    LOG.info("Updating yt-dlp PO token...", extra=FORCED)
    token = acquire_token(config)
    return patch_config(token, config)
