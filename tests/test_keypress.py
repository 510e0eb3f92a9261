import io
import types

import pytest

from ytdlp_token_refresh import keypress


def test_wait_for_keypress_reads_one_character_from_pipe(monkeypatch):
    stdin = io.StringIO("xy\n")
    monkeypatch.setattr("ytdlp_token_refresh.keypress.sys.platform", "linux")
    monkeypatch.setattr("ytdlp_token_refresh.keypress.sys.stdin", stdin)

    keypress.wait_for_keypress()

    assert stdin.read() == "y\n"


def test_wait_for_keypress_treats_ctrl_c_as_interrupt_on_windows(monkeypatch):
    fake_msvcrt = types.SimpleNamespace(getwch=lambda: "\x03")
    monkeypatch.setattr("ytdlp_token_refresh.keypress.sys.platform", "win32")
    monkeypatch.setitem(keypress.sys.modules, "msvcrt", fake_msvcrt)

    with pytest.raises(KeyboardInterrupt):
        keypress.wait_for_keypress()


def test_wait_for_keypress_returns_on_any_key_on_windows(monkeypatch):
    keys = []

    def getwch():
        keys.append("a")
        return "a"

    monkeypatch.setattr("ytdlp_token_refresh.keypress.sys.platform", "win32")
    monkeypatch.setitem(keypress.sys.modules, "msvcrt", types.SimpleNamespace(getwch=getwch))

    keypress.wait_for_keypress()
    assert keys == ["a"]


class _FakeTerminal(io.StringIO):
    def isatty(self):
        return True

    def fileno(self):
        return 7


def _fake_termios(calls):
    return types.SimpleNamespace(
        TCSADRAIN=1,
        tcgetattr=lambda fd: calls.append(("get", fd)) or ["saved"],
        tcsetattr=lambda fd, when, attrs: calls.append(("set", fd, when, attrs)),
    )


def test_wait_for_keypress_uses_cbreak_and_restores_terminal(monkeypatch):
    calls = []
    stdin = _FakeTerminal("k")
    monkeypatch.setattr("ytdlp_token_refresh.keypress.sys.platform", "linux")
    monkeypatch.setattr("ytdlp_token_refresh.keypress.sys.stdin", stdin)
    monkeypatch.setitem(keypress.sys.modules, "termios", _fake_termios(calls))
    monkeypatch.setitem(
        keypress.sys.modules,
        "tty",
        types.SimpleNamespace(setcbreak=lambda fd: calls.append(("cbreak", fd))),
    )

    keypress.wait_for_keypress()

    assert calls == [("get", 7), ("cbreak", 7), ("set", 7, 1, ["saved"])]
    assert stdin.read() == ""


def test_wait_for_keypress_restores_terminal_after_interrupt(monkeypatch):
    calls = []

    class InterruptedTerminal(_FakeTerminal):
        def read(self, size=-1):
            raise KeyboardInterrupt

    monkeypatch.setattr("ytdlp_token_refresh.keypress.sys.platform", "linux")
    monkeypatch.setattr("ytdlp_token_refresh.keypress.sys.stdin", InterruptedTerminal())
    monkeypatch.setitem(keypress.sys.modules, "termios", _fake_termios(calls))
    monkeypatch.setitem(
        keypress.sys.modules, "tty", types.SimpleNamespace(setcbreak=lambda fd: None)
    )

    with pytest.raises(KeyboardInterrupt):
        keypress.wait_for_keypress()

    assert calls[-1] == ("set", 7, 1, ["saved"])
