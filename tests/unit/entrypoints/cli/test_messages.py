"""Unit tests for `gigflow.entrypoints.cli.helpers.messages`.

Glyph choice follows the encoding of Click's stderr stream at call time;
messages are styled and written to stderr only.
"""

import io
import sys

import click
import pytest

from gigflow.entrypoints.cli.helpers.messages import (
    GLYPHS,
    _supports_character,
    error,
    glyph,
    success,
    warn,
)

BOLD = "\x1b[1m"
RESET = "\x1b[0m"
COLORS = {"warn": "\x1b[33m", "success": "\x1b[32m", "error": "\x1b[31m"}


class FakeTTY(io.StringIO):
    """In-memory stderr with a chosen encoding that claims to be a terminal."""

    def __init__(self, encoding: str):
        super().__init__()
        self._encoding = encoding

    @property
    def encoding(self) -> str:
        """Declared character encoding."""
        return self._encoding

    def isatty(self) -> bool:
        """Keep Click from stripping ANSI styles."""
        return True


def use_stderr(monkeypatch, encoding: str) -> FakeTTY:
    """Route Click's stderr lookup and ``sys.stderr`` to one fake terminal."""
    stream = FakeTTY(encoding)
    monkeypatch.setattr(click, "get_text_stream", lambda name: stream)
    monkeypatch.setattr(sys, "stderr", stream, raising=False)
    return stream


@pytest.mark.parametrize("name", sorted(GLYPHS))
@pytest.mark.parametrize("encoding, use_emoji", [("ascii", False), ("utf-8", True)])
def test_glyph_follows_encoding(monkeypatch, name, encoding, use_emoji):
    """Emoji on UTF-8 terminals, ASCII markers elsewhere."""
    use_stderr(monkeypatch, encoding)
    emoji, fallback = GLYPHS[name]

    assert glyph(name) == (emoji if use_emoji else fallback)


def test_encoding_is_checked_on_every_call(monkeypatch):
    """The stream is looked up again for each message."""
    encodings = iter(["ascii", "utf-8"])
    monkeypatch.setattr(click, "get_text_stream", lambda name: FakeTTY(next(encodings)))

    assert _supports_character("✅") is False
    assert _supports_character("✅") is True


@pytest.mark.parametrize(
    "func, color, marker",
    [(warn, "warn", "[!]"), (success, "success", "[OK]"), (error, "error", "[X]")],
)
def test_messages_are_styled(monkeypatch, func, color, marker):
    """Each emitter writes a bold, colored line with its marker."""
    monkeypatch.delenv("NO_COLOR", raising=False)
    stream = use_stderr(monkeypatch, "ascii")

    func("database is behind")

    out = stream.getvalue()
    assert marker in out
    assert "database is behind" in out
    assert BOLD in out and COLORS[color] in out and RESET in out


def test_messages_leave_stdout_alone(capsys):
    """stdout stays clean for Alembic output."""
    success("upgraded")

    captured = capsys.readouterr()
    assert "upgraded" in captured.err
    assert captured.out == ""
