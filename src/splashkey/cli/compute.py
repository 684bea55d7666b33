"""SPLASH calculation commands."""

import json
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Tuple

import click

from splashkey.core.config import ERROR_POLICIES, INPUT_FORMATS, OUTPUT_FORMATS, get_settings, load_config
from splashkey.core.exceptions import SplashError


def parse_peak_tokens(tokens: Tuple[str, ...]) -> List[Tuple[float, float]]:
    """Parse 'mz:intensity' command-line tokens."""
    peaks = []
    for token in tokens:
        mz, sep, intensity = token.partition(":")
        try:
            if not sep:
                raise ValueError(token)
            peaks.append((float(mz), float(intensity)))
        except ValueError:
            raise click.BadParameter(
                f"Expected mz:intensity, got {token!r}", param_hint="PEAKS"
            )
    return peaks


@click.command("compute")
@click.argument("peaks", nargs=-1)
@click.option(
    "--spectrum",
    "-s",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to spectrum JSON file with 'peaks' field",
)
def compute(peaks: Tuple[str, ...], spectrum: Optional[Path]):
    """Calculate the SPLASH of a single spectrum.

    Peaks are given in order as mz:intensity tokens, or read from a JSON
    file containing a list of [m/z, intensity] pairs under 'peaks'.

    Example:
        splashkey compute 100:1 101:2 102:3
    """
    from splashkey.domain.splash import splash_for_peaks

    if spectrum and peaks:
        raise click.UsageError("Give either PEAKS or --spectrum, not both")

    if spectrum:
        with open(spectrum, encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise click.ClickException(f"Invalid JSON in {spectrum}: {e}")
        if not isinstance(data, dict) or not isinstance(data.get("peaks"), list):
            raise click.ClickException("Spectrum file must contain 'peaks' field")
        peak_list = data["peaks"]
    elif peaks:
        peak_list = parse_peak_tokens(peaks)
    else:
        raise click.UsageError("No peaks given")

    try:
        click.echo(splash_for_peaks(peak_list))
    except SplashError as e:
        raise click.ClickException(str(e))


@click.command("batch")
@click.option(
    "--input",
    "-i",
    "input_path",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Input spectral library (JSONL or MSP)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    required=True,
    help="Output file for SPLASH results",
)
@click.option(
    "--format",
    "input_format",
    type=click.Choice(INPUT_FORMATS),
    default=None,
    help="Input format (default: from config, 'auto' picks by suffix)",
)
@click.option(
    "--output-format",
    type=click.Choice(OUTPUT_FORMATS),
    default=None,
    help="Output format (default: from config)",
)
@click.option(
    "--on-error",
    type=click.Choice(ERROR_POLICIES),
    default=None,
    help="Stop at the first bad spectrum, or record the error and continue",
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to YAML configuration file",
)
@click.option(
    "--verbose/--quiet",
    default=None,
    help="Show progress bar",
)
def batch(
    input_path: Path,
    output: Path,
    input_format: Optional[str],
    output_format: Optional[str],
    on_error: Optional[str],
    config: Optional[Path],
    verbose: Optional[bool],
):
    """Calculate SPLASH keys for every spectrum in a library file.

    Example:
        splashkey batch -i library.msp -o splashes.tsv
    """
    from splashkey.services.data_loader import SpectrumLoader
    from splashkey.services.hashing import SplashService

    try:
        run_settings = load_config(config) if config else get_settings()
        hashing = run_settings.hashing
        if on_error:
            hashing = replace(hashing, on_error=on_error)

        loader = SpectrumLoader(input_format or run_settings.input_format)
        records = loader.load(input_path)

        service = SplashService(hashing)
        show_progress = run_settings.show_progress if verbose is None else verbose
        results = service.hash_records(records, show_progress=show_progress)
        service.write_results(results, output, output_format or run_settings.output_format)
    except SplashError as e:
        raise click.ClickException(str(e))

    n_failed = sum(1 for r in results if not r.ok)
    click.echo(f"Hashed {len(results) - n_failed} of {len(results)} spectra")
    click.echo(f"Results saved to: {output}")
