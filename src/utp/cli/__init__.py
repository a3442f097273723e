"""CLI module for the Universal Transcoding Plugin.

The plugin itself runs inside the host; the CLI is an operator tool for
checking option strings and previewing what a settings snapshot registers.
"""

import logging
from pathlib import Path

import click

from utp.cli.exit_codes import ExitCode
from utp.config import get_config
from utp.host.exceptions import SchemaNotFoundError
from utp.settings.schemas import SettingsSchema, get_schema

_logging_configured: bool = False

logger = logging.getLogger(__name__)


def _configure_logging(
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Configure logging from CLI options.

    Args:
        log_level: Override log level (debug, info, warning, error).
        log_file: Override log file path.
        log_json: Use JSON log format.
    """
    global _logging_configured
    if _logging_configured:
        return

    from utp.config.logging_factory import configure_logging_from_cli

    configure_logging_from_cli(
        level=log_level,
        file=log_file,
        format="json" if log_json else None,
    )
    _logging_configured = True


def resolve_schema(name: str | None) -> SettingsSchema:
    """Resolve a --schema option, falling back to the configured schema.

    Raises:
        click.ClickException: If the schema does not exist.
    """
    if name is None:
        name = get_config().plugin.schema
    try:
        return get_schema(name)
    except SchemaNotFoundError as e:
        error = click.ClickException(str(e))
        error.exit_code = ExitCode.SCHEMA_NOT_FOUND
        raise error from e


@click.group()
@click.version_option(package_name="universal-transcoding-plugin")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Universal Transcoding Plugin - inspect and preview encoder profiles."""
    ctx.ensure_object(dict)
    _configure_logging(log_level, log_file, log_json)


# Defer import to avoid circular dependency
def _register_commands():
    from utp.cli.config import config_group
    from utp.cli.preview import preview_command
    from utp.cli.settings import settings_command
    from utp.cli.tokenize import tokenize_command

    main.add_command(config_group)
    main.add_command(preview_command)
    main.add_command(settings_command)
    main.add_command(tokenize_command)


_register_commands()
