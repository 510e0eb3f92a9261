"""
yt-dlp config patching for ytdlp-token-refresh.

This module owns the one mutation the tool performs: replacing the
youtube extractor-args directive in the yt-dlp config file. The file
is handled as bytes decoded one-to-one, so every line the patch does
not touch is written back unchanged.
"""

from __future__ import annotations

import logging
import os
import re
import shutil
from pathlib import Path
from typing import Optional

from .config import RunConfig
from .errors import BackupError, ConfigFileError
from .logging_utils import FORCED

LOG = logging.getLogger(__name__)

CONFIG_DIR_NAME = "yt-dlp"
CONFIG_FILE_NAME = "config.txt"
FILE_ENCODING = "latin-1"

DIRECTIVE_TEMPLATE = (
    '--extractor-args "youtube:player-client=default,mweb;po_token=mweb.gvs+{token}"'
)

# Shortest match up to the next double quote. Escaped quotes are not
# recognised.
DIRECTIVE_RE = re.compile(r'--extractor-args "youtube:player-client=.+?"')

# Only ASCII whitespace is trimmed; a trailing 0xA0 byte can be the tail
# of a multi-byte UTF-8 character.
_WHITESPACE = " \t\n\r\x0b\x0c"


def resolve_config_path(config: RunConfig) -> Path:
    """
    Return <app data root>/yt-dlp/config.txt.
    """

    root = os.environ.get(config.app_data_env)
    if not root:
        raise ConfigFileError(
            f"{config.app_data_env} is not set; cannot locate the yt-dlp config directory"
        )
    return Path(root) / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def build_directive(token: str) -> str:
    return DIRECTIVE_TEMPLATE.format(token=token)


def backup_path_for(config_path: Path) -> Path:
    return config_path.with_name(f"backup_{config_path.stem}.txt")


def _copy_file(source: Path, destination: Path) -> None:
    try:
        shutil.copyfile(source, destination)
    except OSError as exc:
        raise BackupError(f"failed to back up {source}: {exc}") from exc


def backup_config(config_path: Path) -> Optional[Path]:
    """
    Copy the config file to its backup sibling, overwriting any earlier
    backup.

    Returns the backup path, or None when there was nothing to back up
    or the copy failed. A failed copy is reported but never stops the
    patch.
    """

    if not config_path.is_file():
        return None

    destination = backup_path_for(config_path)
    try:
        _copy_file(config_path, destination)
    except BackupError as exc:
        LOG.warning("Could not create config backup: %s", exc, extra=FORCED)
        return None

    LOG.debug("Created config backup: %s", destination)
    return destination


def rewrite_directive(content: str, directive: str) -> str:
    """
    Remove every existing youtube extractor-args directive from content
    and append directive as the last line.
    """

    stripped = DIRECTIVE_RE.sub("", content).strip(_WHITESPACE)
    return f"{stripped}\n{directive}\n".strip(_WHITESPACE)


def _read_config(config_path: Path) -> str:
    if not config_path.exists():
        return ""
    LOG.debug("Reading existing config file")
    try:
        return config_path.read_bytes().decode(FILE_ENCODING)
    except OSError as exc:
        raise ConfigFileError(f"failed to read {config_path}: {exc}") from exc


def _write_config(config_path: Path, content: str) -> None:
    """
    Truncate the config file and rewrite it with content.

    The file is opened in place, so a symlinked config updates its
    target and the file keeps its permissions.
    """

    try:
        data = content.encode(FILE_ENCODING)
    except UnicodeEncodeError as exc:
        raise ConfigFileError(f"cannot encode config content for {config_path}: {exc}") from exc

    try:
        with open(config_path, "wb") as handle:
            handle.write(data)
    except OSError as exc:
        raise ConfigFileError(f"failed to write {config_path}: {exc}") from exc


def patch_config(token: str, config: RunConfig) -> Path:
    """
    Write the refreshed extractor-args directive into the yt-dlp config.

    The directory is created if needed and the previous file is backed
    up first. Returns the path of the patched config file.
    """

    config_path = resolve_config_path(config)
    directive = build_directive(token)
    LOG.debug("Config file path: %s", config_path)

    if not config_path.parent.is_dir():
        LOG.debug("Creating config directory...")
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigFileError(
            f"failed to create config directory {config_path.parent}: {exc}"
        ) from exc

    backup_config(config_path)

    content = _read_config(config_path)
    LOG.debug("Updating config content...")
    _write_config(config_path, rewrite_directive(content, directive))

    LOG.info("Updated yt-dlp config file", extra=FORCED)
    return config_path
