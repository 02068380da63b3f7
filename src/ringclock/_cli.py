"""Command-line interface (Typer-based).

Provides :func:`build_cli`, a Typer app with two commands:

- ``render`` — draw one frame for a given time and write it as PNG;
- ``run`` — the live face, rewriting its PNG on every redraw.

Global options (``--version``, ``--log-level``, ``--log-format``,
``--env-file``) are parsed by the callback and applied on top of the
settings loaded from the environment.
"""

from __future__ import annotations

import contextlib
import logging
import sys
from dataclasses import dataclass
from datetime import date, datetime
from typing import Annotated, get_args

import typer
from pydantic import ValidationError

from ringclock._app import FaceApp, render_snapshot
from ringclock._clock import TimeOfDay
from ringclock._errors import InvalidTimeError
from ringclock._face import ClockState, format_date
from ringclock._logging import configure_logging
from ringclock._settings import LoggingSettings, Settings

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_RUNTIME_ERROR = 3

_VALID_LOG_LEVELS: tuple[str, ...] = get_args(
    LoggingSettings.model_fields["level"].annotation,
)
_VALID_LOG_FORMATS: tuple[str, ...] = get_args(
    LoggingSettings.model_fields["format"].annotation,
)


@dataclass
class _GlobalOptions:
    log_level: str | None = None
    log_format: str | None = None
    env_file: str = ".env"


def parse_moment(
    at: str | None, on: str | None, *, now: datetime | None = None
) -> datetime:
    """Combine an optional ``HH:MM`` and ``YYYY-MM-DD`` with *now*.

    Raises:
        InvalidTimeError: If either string is malformed.
    """
    moment = now if now is not None else datetime.now()
    if on is not None:
        try:
            day = date.fromisoformat(on)
        except ValueError as exc:
            msg = f"Invalid date '{on}', expected YYYY-MM-DD"
            raise InvalidTimeError(msg) from exc
        moment = moment.replace(year=day.year, month=day.month, day=day.day)
    if at is not None:
        try:
            parsed = datetime.strptime(at, "%H:%M")
        except ValueError as exc:
            msg = f"Invalid time '{at}', expected HH:MM"
            raise InvalidTimeError(msg) from exc
        moment = moment.replace(hour=parsed.hour, minute=parsed.minute, second=0)
    return moment


def _load_settings(options: _GlobalOptions) -> Settings:
    try:
        settings = Settings(_env_file=options.env_file)  # type: ignore[call-arg]
    except ValidationError as exc:
        logger.error("Configuration error: %s", exc)
        raise SystemExit(EXIT_CONFIG_ERROR) from exc

    if options.log_level is not None:
        settings.logging = settings.logging.model_copy(
            update={"level": options.log_level.upper()},
        )
    if options.log_format is not None:
        settings.logging = settings.logging.model_copy(
            update={"format": options.log_format.lower()},
        )
    return settings


def build_cli(*, version: str = "") -> typer.Typer:
    """Construct the ringclock Typer app."""
    cli = typer.Typer(
        help=f"ringclock v{version} — arc-rendered analog clock face",
    )

    @cli.callback(invoke_without_command=True)
    def main(
        ctx: typer.Context,
        version_flag: Annotated[
            bool | None,
            typer.Option(
                "--version",
                is_eager=True,
                help="Show version and exit.",
            ),
        ] = None,
        log_level: Annotated[
            str | None,
            typer.Option("--log-level", help="Override log level."),
        ] = None,
        log_format: Annotated[
            str | None,
            typer.Option("--log-format", help="Override log format."),
        ] = None,
        env_file: Annotated[
            str,
            typer.Option("--env-file", help="Path to .env file."),
        ] = ".env",
    ) -> None:
        if version_flag:
            typer.echo(f"ringclock v{version}")
            raise typer.Exit()

        if log_level is not None and log_level.upper() not in _VALID_LOG_LEVELS:
            raise typer.BadParameter(
                f"Invalid log level '{log_level}'. "
                f"Choose from: {', '.join(_VALID_LOG_LEVELS)}",
                param_hint="'--log-level'",
            )

        if log_format is not None and log_format.lower() not in _VALID_LOG_FORMATS:
            raise typer.BadParameter(
                f"Invalid log format '{log_format}'. "
                f"Choose from: {', '.join(_VALID_LOG_FORMATS)}",
                param_hint="'--log-format'",
            )

        ctx.obj = _GlobalOptions(
            log_level=log_level,
            log_format=log_format,
            env_file=env_file,
        )

        if ctx.invoked_subcommand is None:
            typer.echo(ctx.get_help())
            raise typer.Exit()

    @cli.command()
    def render(
        ctx: typer.Context,
        at: Annotated[
            str | None,
            typer.Option("--at", help="Time to show as HH:MM (default: now)."),
        ] = None,
        on: Annotated[
            str | None,
            typer.Option("--date", help="Date to show as YYYY-MM-DD (default: today)."),
        ] = None,
        markers: Annotated[
            bool,
            typer.Option("--markers", help="Show the hour markers."),
        ] = False,
        disconnected: Annotated[
            bool,
            typer.Option("--disconnected", help="Show the disconnected glyph."),
        ] = False,
        inverted: Annotated[
            bool | None,
            typer.Option("--inverted/--no-inverted", help="Invert black and white."),
        ] = None,
        output: Annotated[
            str | None,
            typer.Option("--output", "-o", help="PNG file to write."),
        ] = None,
    ) -> None:
        """Render a single frame to a PNG file."""
        settings = _load_settings(ctx.obj)
        configure_logging(settings.logging, service="ringclock", version=version)

        try:
            now = TimeOfDay.from_datetime(parse_moment(at, on))
        except InvalidTimeError as exc:
            raise typer.BadParameter(str(exc)) from exc

        state = ClockState(
            hour=now.hour,
            minute=now.minute,
            bluetooth_connected=settings.connected and not disconnected,
            markers_visible=markers,
            date_label=format_date(now.weekday_name, now.day_of_month),
        )
        path = output if output is not None else settings.output.path
        invert = settings.face.inverted if inverted is None else inverted

        try:
            image = render_snapshot(settings, state).to_image(inverted=invert)
            image.save(path, format="PNG")
        except OSError as exc:
            logger.error("Runtime error: %s", exc)
            sys.exit(EXIT_RUNTIME_ERROR)

        typer.echo(f"Wrote {path} ({now.hour:02d}:{now.minute:02d})")

    @cli.command()
    def run(
        ctx: typer.Context,
        output: Annotated[
            str | None,
            typer.Option("--output", "-o", help="PNG file rewritten on every redraw."),
        ] = None,
    ) -> None:
        """Run the live face until interrupted."""
        settings = _load_settings(ctx.obj)
        if output is not None:
            settings.output = settings.output.model_copy(update={"path": output})

        app = FaceApp(version=version)
        try:
            with contextlib.suppress(KeyboardInterrupt):
                app.run(settings=settings)
        except SystemExit:
            raise
        except Exception as exc:
            logger.error("Runtime error: %s", exc)
            sys.exit(EXIT_RUNTIME_ERROR)

    return cli


def main() -> None:
    """Console-script entry point."""
    from ringclock import __version__

    build_cli(version=__version__)()
