"""User-facing status lines for the GIGFLOW CLI.

Lines go to stderr so stdout stays usable for Alembic output. Each line starts
with an emoji, or an ASCII marker when stderr cannot encode the emoji.
"""

import click

GLYPHS = {
    "caution": ("⚠️", "[!]"),
    "success": ("✅", "[OK]"),
    "error": ("❌", "[X]"),
}


def _supports_character(character: str) -> bool:
    """Return True if ``character`` can be encoded on the current stderr."""
    stream = click.get_text_stream("stderr")  # pragma: no mutate
    encoding = getattr(stream, "encoding", None) or "ascii"
    try:
        character.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def glyph(name: str) -> str:
    """Return the emoji for ``name``, or its ASCII fallback."""
    emoji, fallback = GLYPHS[name]
    return emoji if _supports_character(emoji) else fallback


def warn(msg: str) -> None:
    """Print a bold yellow warning to stderr."""
    click.secho(f"{glyph('caution')}  {msg}", fg="yellow", bold=True, err=True)


def success(msg: str) -> None:
    """Print a bold green success line to stderr."""
    click.secho(f"{glyph('success')}  {msg}", fg="green", bold=True, err=True)


def error(msg: str) -> None:
    """Print a bold red error line to stderr."""
    click.secho(f"{glyph('error')}  {msg}", fg="red", bold=True, err=True)
