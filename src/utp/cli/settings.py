"""Settings command: list the fields the plugin declares with the host."""

import json

import click

from utp.cli import resolve_schema
from utp.settings.schemas import available_schemas


@click.command("settings")
@click.option(
    "--schema",
    "schema_name",
    type=click.Choice(available_schemas()),
    default=None,
    help="Settings schema (default: from configuration).",
)
@click.option(
    "--json", "as_json", is_flag=True, help="Output host descriptors as JSON"
)
def settings_command(schema_name: str | None, as_json: bool) -> None:
    """List the settings fields declared at activation."""
    schema = resolve_schema(schema_name)

    if as_json:
        click.echo(
            json.dumps([d.to_host() for d in schema.descriptors], indent=2)
        )
        return

    click.echo(f"Schema: {schema.name} - {schema.description}")
    click.echo("")

    name_width = max(len(d.name) for d in schema.descriptors)
    for descriptor in schema.descriptors:
        default = descriptor.default if descriptor.default else "(empty)"
        click.echo(
            f"  {descriptor.name:<{name_width}}  "
            f"{descriptor.type.value:<8}  {default}"
        )
        if descriptor.options:
            choices = ", ".join(option.value for option in descriptor.options)
            click.echo(f"  {'':<{name_width}}  choices: {choices}")
