"""GIGFLOW CLI entry point.

Defines the top-level ``gigflow`` command (via Click-Extra), configures
logging for every subcommand and registers the subcommand groups.

Available groups
- ``gigflow db``: forward-only database management (upgrade/current/heads/
  history/status).

Examples
    $ gigflow --version
    $ gigflow -v db upgrade --force
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from platformdirs import user_log_dir

from gigflow import __version__
from gigflow.logging import config_console_handler, config_flight_recorder, log_startup

from .db import db as db_group
from .helpers import parse_log_level

if TYPE_CHECKING:
    from logging import Handler

logger = logging.getLogger(__name__)

HELP = """GIGFLOW command-line interface.

    GIGFLOW is the orchestration core of a freelance marketplace: it keeps
    jobs, job applications and interval invoices consistent under concurrent
    use. This CLI manages the database the core runs on.
    """

DEFAULT_LOG_PATH = (
    Path(user_log_dir("gigflow", appauthor=False, ensure_exists=True)) / "latest.log"
)


def effective_level(verbose_count: int, quiet_count: int) -> int:
    """WARNING, one level lower per ``-v`` and one higher per ``-q``."""
    level = logging.WARNING - 10 * verbose_count + 10 * quiet_count
    return max(logging.DEBUG, min(logging.CRITICAL, level))


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    default=0,
    help="Lower the console threshold (default WARNING) by one level per use.",
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    default=0,
    help="Raise the console threshold (default WARNING) by one level per use.",
)
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Debug console output: DEBUG level, timestamps, logger names, paths.",
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_LOG_PATH,
    envvar="GIGFLOW_LOG_PATH",
    show_default=True,
    show_envvar=True,
    help="File the flight recorder writes to.",
)
@click.option(
    "--flight-recorder-capacity",
    type=int,
    default=2000,
    hidden=True,
    envvar="GIGFLOW_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Number of log records kept by the flight recorder.",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    default=True,
    show_envvar=True,
    help=(
        "Keep the most recent log records at DEBUG granularity and write them "
        "to --log-path when a WARNING or ERROR is logged. Console verbosity "
        "is not affected."
    ),
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    default=False,
    show_default=True,
    show_envvar=True,
    help="Also write the flight recorder buffer to --log-path on exit.",
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    default=("sqlalchemy=WARNING", "alembic=WARNING"),
    envvar="GIGFLOW_LOGGER_LEVELS",
    show_default=True,
    show_envvar=True,
    help=(
        "Minimum level for a specific logger (NAME=LEVEL); applies to the "
        "console and the flight recorder. Repeatable, or a comma/space list "
        "in GIGFLOW_LOGGER_LEVELS."
    ),
)
@clickx.pass_context
def gigflow(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """GIGFLOW command-line interface."""

    level = effective_level(verbose_count, quiet_count)

    handlers: list[Handler] = [
        config_console_handler(
            level=level, debug_mode=debug, color=ctx.color is not False
        )
    ]
    if flight_recorder:
        handlers.append(
            config_flight_recorder(
                path=log_path,
                capacity=flight_recorder_capacity,
                flush_on_close=force_flush_flight_recorder,
            )
        )

    # root captures everything; handlers filter
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    log_startup(
        logger,
        app_version=__version__,
        level=level,
        handlers=handlers,
        log_path=log_path if flight_recorder else None,
        flight_recorder=flight_recorder,
        flight_capacity=flight_recorder_capacity if flight_recorder else None,
        force_flush_fr=force_flush_flight_recorder,
        logger_levels=logger_levels,
    )

    ctx.call_on_close(logging.shutdown)


gigflow.add_command(db_group)
