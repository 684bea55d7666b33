"""Validation command for SPLASH strings."""

import click

from splashkey.core.exceptions import InvalidInputError
from splashkey.domain.key import parse_splash


@click.command("validate")
@click.argument("splashes", nargs=-1, required=True)
def validate(splashes):
    """Check that each argument is a well-formed SPLASH.

    Exits with status 1 if any argument is invalid.

    Example:
        splashkey validate splash10-0z00000000-f5bf6f6a4a1520a35d4f
    """
    n_invalid = 0
    for text in splashes:
        try:
            key = parse_splash(text)
        except InvalidInputError as e:
            n_invalid += 1
            click.echo(f"INVALID  {text}  ({e})")
            continue
        click.echo(f"OK       {text}  (histogram={key.histogram}, digest={key.digest})")

    if n_invalid:
        raise click.exceptions.Exit(1)
