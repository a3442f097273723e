"""Tokenize command: show how an option string is split into arguments."""

import json

import click

from utp.options import format_options, parse_options_string


@click.command("tokenize")
@click.argument("options")
@click.option("--json", "as_json", is_flag=True, help="Output tokens as a JSON array")
def tokenize_command(options: str, as_json: bool) -> None:
    """Split an FFmpeg option string the way the plugin does.

    Examples:

        utp tokenize -- '-crf 32 -b:v 5M'

        utp tokenize --json -- '-metadata title="My Video"'
    """
    tokens = parse_options_string(options)

    if as_json:
        click.echo(json.dumps(tokens))
        return

    if not tokens:
        click.echo("(no tokens)")
        return

    for index, token in enumerate(tokens):
        click.echo(f"{index:>3}  {format_options([token])}")
