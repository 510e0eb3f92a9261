"""
Custom exception types used across ytdlp-token-refresh.

Every fatal failure of a run is one of the TokenRefreshError subclasses
below, so the CLI can report it with a single handler. BackupError is
the one kind the patcher recovers from on its own.
"""

from __future__ import annotations


class TokenRefreshError(Exception):
    """Base class for all ytdlp-token-refresh specific errors."""


class GeneratorProcessError(TokenRefreshError):
    """Raised when the token generator is missing, cannot start, or fails."""


class GeneratorOutputError(TokenRefreshError):
    """Raised when the generator output is not valid JSON."""


class InvalidTokenError(TokenRefreshError):
    """Raised when the generator output lacks a usable poToken."""


class ConfigFileError(TokenRefreshError):
    """Raised when the yt-dlp config file cannot be located, read, or written."""


class BackupError(TokenRefreshError):
    """Raised when the config backup copy fails."""
