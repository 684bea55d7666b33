"""Main CLI entry point for SPLASHKEY."""

import logging
from typing import Optional

import click

from splashkey import __version__
from splashkey.cli.compute import batch, compute
from splashkey.cli.validate import validate
from splashkey.core.config import LOG_LEVELS, get_settings
from splashkey.core.exceptions import ConfigurationError


@click.group()
@click.version_option(version=__version__, prog_name="splashkey")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging level (default: from config.yml, else INFO)",
)
def cli(log_level: Optional[str]):
    """SPLASHKEY: Spectral Hash Keys for mass spectra.

    \b
    A SPLASH identifies a mass spectrum by three blocks:
    1. Version prefix (splash10)
    2. 10-character histogram of intensity over m/z
    3. Truncated SHA-256 of the spectrum

    Use 'splashkey COMMAND --help' for more information on each command.
    """
    if log_level:
        level = log_level.upper()
    else:
        try:
            level = get_settings().logging.level.upper()
        except ConfigurationError as e:
            raise click.ClickException(str(e))
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


cli.add_command(compute)
cli.add_command(batch)
cli.add_command(validate)


if __name__ == "__main__":
    cli()
