"""
Blocking single-keypress wait used at the end of a run.
"""

from __future__ import annotations

import sys

CTRL_C = "\x03"


def _wait_windows() -> None:
    import msvcrt

    if msvcrt.getwch() == CTRL_C:
        raise KeyboardInterrupt


def _wait_posix() -> None:
    stream = sys.stdin
    if not stream.isatty():
        stream.read(1)
        return

    import termios
    import tty

    fd = stream.fileno()
    saved = termios.tcgetattr(fd)
    try:
        # cbreak keeps ISIG, so Ctrl+C still raises KeyboardInterrupt.
        tty.setcbreak(fd)
        stream.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def wait_for_keypress() -> None:
    """
    Block until a single key is pressed. Ctrl+C raises KeyboardInterrupt.
    """

    if sys.platform == "win32":
        _wait_windows()
    else:
        _wait_posix()
