"""Fixtures for end-to-end CLI logging tests.

Registers a test-only ``emit-logs`` command on the top-level ``gigflow``
group. It logs one line per level on a ``gigflow.sample`` logger and a few
lines on a ``vendor.lib`` logger, so verbosity flags, per-logger overrides
and the flight recorder can be observed from the outside.
"""

import logging

import click
import pytest
from click.testing import CliRunner

from gigflow.entrypoints.cli.main import gigflow

# pylint: disable=redefined-outer-name

PROBE_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@click.command()
def emit_logs():
    """Log one sample line per level, then vendor lines, then a trailing DEBUG."""
    sample = logging.getLogger("gigflow.sample")
    for name in PROBE_LEVELS:
        sample.log(logging.getLevelName(name), "sample %s line", name.lower())
    vendor = logging.getLogger("vendor.lib")
    vendor.debug("vendor debug line")
    vendor.info("vendor info line")
    vendor.warning("vendor warning line")
    sample.debug("sample trailing debug line")


def _unregister(group: click.Group, name: str) -> None:
    group.commands.pop(name, None)
    if hasattr(group, "_default_section"):
        group._default_section.commands.pop(name, None)  # pylint: disable=protected-access
    for sec in getattr(group, "_sections", []):
        getattr(sec, "commands", {}).pop(name, None)


@pytest.fixture
def with_emit_logs():
    """Make ``gigflow emit-logs`` available for the duration of a test."""
    gigflow.add_command(emit_logs, name="emit-logs")
    try:
        yield
    finally:
        _unregister(gigflow, "emit-logs")


@pytest.fixture
def runner():
    """Return a Click CliRunner for invoking CLI commands in tests."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside ``runner.isolated_filesystem()``."""
    with runner.isolated_filesystem():
        yield
