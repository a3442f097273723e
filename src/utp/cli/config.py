"""CLI commands for the plugin configuration file."""

import json
from pathlib import Path

import click

from utp.cli.exit_codes import ExitCode
from utp.config.loader import (
    ConfigError,
    get_config,
    get_default_config_path,
    validate_config,
)


@click.group("config")
def config_group() -> None:
    """Inspect and validate the plugin configuration.

    Configuration is read from ~/.utp/config.toml (or UTP_CONFIG_PATH),
    with UTP_* environment variables taking precedence.

    Examples:

        # Show the effective configuration
        utp config show

        # Validate the config file
        utp config check
    """
    pass


def _report_errors(errors: list[str], json_output: bool) -> None:
    if json_output:
        click.echo(json.dumps({"valid": False, "errors": errors}, indent=2))
    else:
        click.echo(click.style("Config file has errors:", fg="red"), err=True)
        for error in errors:
            click.echo(f"  - {error}", err=True)
    raise SystemExit(ExitCode.CONFIG_ERROR)


@config_group.command("check")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to config.toml (default: ~/.utp/config.toml).",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output in JSON format.",
)
def check_config(config_path: Path | None, json_output: bool) -> None:
    """Validate the config.toml file.

    Loads the file with strict parsing and runs cross-field checks
    (schema name, log directory).
    """
    try:
        config = get_config(config_path=config_path, strict=True)
    except ConfigError as e:
        _report_errors([str(e)], json_output)

    errors = validate_config(config)
    if errors:
        _report_errors(errors, json_output)

    if json_output:
        click.echo(json.dumps({"valid": True, "errors": []}, indent=2))
    else:
        click.echo(click.style("Configuration is valid.", fg="green"))


@config_group.command("show")
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output in JSON format.",
)
def show_config(json_output: bool) -> None:
    """Show the effective configuration after env overrides."""
    config = get_config()
    data = {
        "config_file": str(get_default_config_path()),
        "plugin": {"schema": config.plugin.schema},
        "logging": {
            "level": config.logging.level,
            "file": str(config.logging.file) if config.logging.file else None,
            "format": config.logging.format,
            "include_stderr": config.logging.include_stderr,
        },
    }

    if json_output:
        click.echo(json.dumps(data, indent=2))
        return

    click.echo(f"Config file: {data['config_file']}")
    click.echo("")
    click.echo("[plugin]")
    click.echo(f"  schema = {config.plugin.schema}")
    click.echo("[logging]")
    for key, value in data["logging"].items():
        click.echo(f"  {key} = {value if value is not None else '-'}")
