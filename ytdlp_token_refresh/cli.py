"""
Command-line interface for ytdlp-token-refresh.

This module is responsible for argument parsing, logging setup and
turning errors into exit codes; the actual work is delegated to the
runner module.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config import RunConfig
from .errors import TokenRefreshError
from .keypress import wait_for_keypress
from .logging_utils import FORCED, configure_logging
from .runner import run_refresh

LOG = logging.getLogger(__name__)

PROG = "update-ytdlp-po-token"

# Flag -> resulting silent state.
MODE_FLAGS = {"-v": False, "--verbose": False, "-s": True, "--silent": True}

EXAMPLES = f"""\
examples:
  show progress details:   {PROG} -v
  run silently:            {PROG} -s
  wait for a key at exit:  {PROG} -w
"""


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description=(
            "Fetch a fresh PO token from youtube-po-token-generator and "
            "write it into the yt-dlp config file."
        ),
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )

    parser.add_argument(
        "-v",
        "--verbose",
        dest="silent",
        action="store_false",
        help="Show detailed progress.",
    )
    parser.add_argument(
        "-s",
        "--silent",
        dest="silent",
        action="store_true",
        help="Only show essential messages (default).",
    )
    parser.set_defaults(silent=True)

    parser.add_argument(
        "-w",
        "--wait",
        action="store_true",
        help="Wait for a keypress before exiting.",
    )

    return parser


def first_reported_unknown(argv: List[str], unknown: List[str]) -> Optional[str]:
    """
    Walk argv in order and return the first unknown argument seen while
    silent mode is off, or None.

    An unknown argument is judged by the -v/-s flags that precede it, so
    `--bogus -v` runs while `-v --bogus -s` stops at --bogus.
    """

    silent = True
    for arg in argv:
        if arg in unknown:
            if not silent:
                return arg
        elif arg in MODE_FLAGS:
            silent = MODE_FLAGS[arg]
        elif arg.startswith("-") and not arg.startswith("--"):
            # Grouped short flags such as -wv.
            for letter in arg[1:]:
                silent = MODE_FLAGS.get(f"-{letter}", silent)
    return None


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else list(argv)
    parser = build_arg_parser()
    args, unknown = parser.parse_known_args(argv)

    config = RunConfig(
        verbose=not args.silent,
        silent=args.silent,
        wait_for_keypress=args.wait,
    )

    configure_logging(config)

    reported = first_reported_unknown(argv, unknown)
    if reported is not None:
        print(f"{PROG}: error: unknown option: {reported}", file=sys.stderr)
        parser.print_help()
        return 0

    try:
        run_refresh(config)
        exit_code = 0
    except KeyboardInterrupt:
        return 130
    except TokenRefreshError as exc:
        LOG.error("Error: %s", exc, extra=FORCED)
        LOG.debug("Error details:", exc_info=True)
        exit_code = 1

    if config.wait_for_keypress:
        LOG.info("Finished, press any key to exit...", extra=FORCED)
        try:
            wait_for_keypress()
        except KeyboardInterrupt:
            return 130

    return exit_code


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
