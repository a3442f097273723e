"""Preview command: show what a settings snapshot registers with the host."""

import json
import tomllib
from pathlib import Path
from typing import Any

import click
import yaml

from utp.cli import resolve_schema
from utp.cli.exit_codes import ExitCode
from utp.host.memory import InMemoryTranscodingManager
from utp.logging import get_logger
from utp.options import format_options
from utp.reconciler import ProfileReconciler
from utp.settings.schemas import available_schemas


class SettingsFileError(click.ClickException):
    """Settings snapshot file could not be loaded."""

    exit_code = ExitCode.SETTINGS_FILE_ERROR


def load_settings_file(path: Path) -> dict[str, Any]:
    """Load a settings snapshot from a YAML or TOML file.

    Files ending in .toml are parsed as TOML; everything else as YAML.

    Args:
        path: Path to the settings file.

    Returns:
        Mapping of setting name to value.

    Raises:
        SettingsFileError: If the file cannot be read or parsed, or its top
            level is not a mapping.
    """
    try:
        if path.suffix.casefold() == ".toml":
            with open(path, "rb") as f:
                data = tomllib.load(f)
        else:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
    except OSError as e:
        raise SettingsFileError(f"Cannot read settings file {path}: {e}") from e
    except (yaml.YAMLError, tomllib.TOMLDecodeError) as e:
        raise SettingsFileError(f"Invalid settings file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SettingsFileError(
            f"Settings file {path} must contain a mapping of setting names to values"
        )
    return data


@click.command("preview")
@click.argument(
    "settings_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--schema",
    "schema_name",
    type=click.Choice(available_schemas()),
    default=None,
    help="Settings schema (default: from configuration).",
)
@click.option("--json", "as_json", is_flag=True, help="Output registrations as JSON")
def preview_command(
    settings_file: Path, schema_name: str | None, as_json: bool
) -> None:
    """Preview the profiles and priorities a settings file registers.

    SETTINGS_FILE is a YAML or TOML mapping of setting names to values,
    e.g. video-codec-name: libvpx-vp9. Exits with code 60 when required
    settings are missing and nothing would be registered.
    """
    schema = resolve_schema(schema_name)
    settings = load_settings_file(settings_file)

    manager = InMemoryTranscodingManager()
    log = get_logger("universal-transcoding")
    reconciler = ProfileReconciler(manager, log, schema)
    recipe = reconciler.reconcile(settings)

    if recipe is None:
        missing = schema.parse(settings).missing_required()
        if as_json:
            click.echo(json.dumps({"registered": False, "missing": missing}))
        else:
            click.echo(
                f"Nothing registered: required settings missing ({', '.join(missing)})",
                err=True,
            )
        raise SystemExit(ExitCode.WARNINGS)

    if as_json:
        click.echo(json.dumps({"registered": True, **recipe.to_dict()}, indent=2))
        return

    click.echo(f"Profile: {recipe.profile_name} (schema: {schema.name})")
    for profile in recipe.profiles:
        resolved = manager.resolve_profile(profile.codec, profile.profile_name)
        click.echo(f"  {profile.codec}")
        click.echo(f"    input:  {format_options(resolved['inputOptions']) or '-'}")
        click.echo(f"    output: {format_options(resolved['outputOptions']) or '-'}")
    click.echo("Priorities:")
    for priority in recipe.priorities:
        click.echo(f"  {priority.kind.value:<6} {priority.codec} = {priority.priority}")
