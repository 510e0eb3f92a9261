"""
Token generator integration for ytdlp-token-refresh.

This module runs the external PO token generator and turns its JSON
output into a token string. The generator is run exactly once per
invocation; failures surface as GeneratorProcessError,
GeneratorOutputError or InvalidTokenError.
"""

from __future__ import annotations

import json
import logging
import shutil
import subprocess

from .config import RunConfig
from .errors import GeneratorOutputError, GeneratorProcessError, InvalidTokenError
from .logging_utils import FORCED

LOG = logging.getLogger(__name__)

# stdout is decoded one byte per character so the token reaches the
# config file with its exact bytes.
OUTPUT_ENCODING = "latin-1"


def _run_generator(command: str) -> bytes:
    """
    Run the generator with no arguments and return its raw stdout.
    """

    executable = shutil.which(command)
    if executable is None:
        raise GeneratorProcessError(f"{command} was not found on PATH")

    LOG.debug("Running token generator: %s", executable)
    try:
        completed = subprocess.run(
            [executable],
            check=False,
            capture_output=True,
        )
    except OSError as exc:
        raise GeneratorProcessError(f"failed to execute {command}: {exc}") from exc

    if completed.returncode != 0:
        stderr = completed.stderr.decode(OUTPUT_ENCODING).strip()
        details = f": {stderr}" if stderr else ""
        raise GeneratorProcessError(
            f"{command} exited with status {completed.returncode}{details}"
        )

    return completed.stdout


def _as_output_text(token: str) -> str:
    """
    Map characters above U+00FF, which only reach us through JSON \\u
    escapes, to their UTF-8 bytes in the one-byte-per-character form.
    """

    return "".join(
        char
        if ord(char) <= 0xFF
        else char.encode("utf-8", "surrogatepass").decode(OUTPUT_ENCODING)
        for char in token
    )


def parse_token(output: str) -> str:
    """
    Extract the poToken field from the generator's JSON output.

    Malformed JSON and a missing or empty token are reported as
    different errors so the two cases can be told apart.
    """

    try:
        data = json.loads(output.strip())
    except ValueError as exc:
        raise GeneratorOutputError(f"generator output is not valid JSON: {exc}") from exc

    token = data.get("poToken") if isinstance(data, dict) else None
    if not isinstance(token, str) or not token:
        raise InvalidTokenError("invalid PO token format")

    return _as_output_text(token)


def acquire_token(config: RunConfig) -> str:
    LOG.info("Fetching PO token...", extra=FORCED)

    output = _run_generator(config.generator_command).decode(OUTPUT_ENCODING).strip()
    LOG.debug("Raw generator output: %s", output)

    token = parse_token(output)
    LOG.info("PO token acquired", extra=FORCED)
    return token
