"""
Configuration model for ytdlp-token-refresh.

The CLI constructs a RunConfig instance once and passes it down into
the acquirer, the patcher and the logging setup, so behavior can be
adjusted without relying on global state.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_GENERATOR_COMMAND = "youtube-po-token-generator"
DEFAULT_APP_DATA_ENV = "APPDATA"


@dataclass(frozen=True)
class RunConfig:
    """
    Top-level configuration for a single token refresh run.

    verbose and silent are mutually exclusive; the CLI keeps whichever
    flag came last and defaults to silent.
    """

    verbose: bool = False
    silent: bool = True
    wait_for_keypress: bool = False
    generator_command: str = DEFAULT_GENERATOR_COMMAND
    app_data_env: str = DEFAULT_APP_DATA_ENV
