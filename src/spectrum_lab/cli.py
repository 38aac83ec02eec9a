"""Command-line interface for spectrum_lab.

Provides a ``click``-based CLI that generates a test signal, runs it
through the spectral transform engine and shows or saves the result.

Usage::

    spectrum-lab analyze --kind sine --frequency 1000
    spectrum-lab analyze --kind chirp --window hamming --fft-size 2048
    spectrum-lab analyze --config analyzer.yaml --csv spectrum.csv --no-show
    spectrum-lab plot first.csv second.csv --output overlay.html
    spectrum-lab window hanning --size 8
"""

import dataclasses
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import click

from spectrum_lab.analysis import summarize_spectrum
from spectrum_lab.config import AnalyzerConfig, DisplayRange, load_config
from spectrum_lab.errors import SpectrumLabError
from spectrum_lab.formatters import format_frequency, format_level, format_resolution
from spectrum_lab.generator import generate_signal
from spectrum_lab.io import load_spectrum_csv, save_spectrum_csv
from spectrum_lab.log import get_logger, set_level
from spectrum_lab.models import SIGNAL_KINDS, TRANSFORM_METHODS
from spectrum_lab.plotting import plot_spectrum, plot_time_signal
from spectrum_lab.transform import SpectrumProcessor
from spectrum_lab.windowing import WINDOW_KINDS, get_window

logger = get_logger(__name__)

KIND_CHOICES = click.Choice(list(SIGNAL_KINDS), case_sensitive=False)
WINDOW_CHOICES = click.Choice(list(WINDOW_KINDS), case_sensitive=False)
TRANSFORM_CHOICES = click.Choice(list(TRANSFORM_METHODS), case_sensitive=False)


def _overrides(**values: Any) -> Dict[str, Any]:
    """Drop options the user did not pass."""
    return {key: value for key, value in values.items() if value is not None}


def _resolve_config(
    config_file: Optional[str],
    signal_opts: Dict[str, Any],
    dsp_opts: Dict[str, Any],
    display_opts: Dict[str, Any],
) -> AnalyzerConfig:
    """Merge command-line options over the optional config file.

    Raises:
        click.ClickException: If the file or a merged value is invalid.
    """
    try:
        base = load_config(config_file) if config_file else AnalyzerConfig()
        return AnalyzerConfig(
            signal=dataclasses.replace(base.signal, **signal_opts),
            dsp=dataclasses.replace(base.dsp, **dsp_opts),
            display=dataclasses.replace(base.display, **display_opts),
        )
    except FileNotFoundError as exc:
        raise click.ClickException(str(exc))
    except ValueError as exc:
        raise click.ClickException(str(exc))


@click.group()
@click.version_option(package_name="spectrum-lab")
@click.option("--verbose", "-v", is_flag=True, default=False,
              help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """spectrum-lab — test signal generator and spectrum analyzer."""
    set_level(logging.DEBUG if verbose else logging.WARNING)


@cli.command()
@click.option("--config", "config_file", type=click.Path(), default=None,
              help="YAML file with signal, dsp and display settings.")
@click.option("--kind", "-k", type=KIND_CHOICES, default=None,
              help="Signal kind: sine, multitone, noise, or chirp.")
@click.option("--frequency", "-f", type=float, default=None,
              help="Base frequency in Hz (default: 1000).")
@click.option("--amplitude", "-a", type=float, default=None,
              help="Signal amplitude (default: 1.0).")
@click.option("--duration", "-d", type=float, default=None,
              help="Signal duration in seconds (default: 1.0).")
@click.option("--sample-rate", "-r", type=float, default=None,
              help="Sample rate in Hz (default: 44100).")
@click.option("--fft-size", "-n", type=int, default=None,
              help="FFT size in samples (default: 1024).")
@click.option("--window", "-w", "window_type", type=WINDOW_CHOICES, default=None,
              help="Window function: rectangular, hanning, or hamming.")
@click.option("--averaging-count", type=int, default=None,
              help="Reserved; frame averaging is not implemented.")
@click.option("--transform", type=TRANSFORM_CHOICES, default=None,
              help="Transform implementation: direct or fft.")
@click.option("--min-db", type=float, default=None,
              help="Bottom of the display range in dB (default: -100).")
@click.option("--max-db", type=float, default=None,
              help="Top of the display range in dB (default: 0).")
@click.option("--output", "-o", type=click.Path(), default=None,
              help="Save plot to file (.html for interactive, .png for static).")
@click.option("--signal-output", type=click.Path(), default=None,
              help="Also save a plot of the time-domain signal.")
@click.option("--csv", "csv_output", type=click.Path(), default=None,
              help="Save the spectrum to a CSV file.")
@click.option("--no-show", is_flag=True, default=False,
              help="Do not open the plot in a browser.")
@click.option("--title", "-t", default="Frequency Spectrum",
              help="Plot title.")
def analyze(
    config_file: Optional[str],
    kind: Optional[str],
    frequency: Optional[float],
    amplitude: Optional[float],
    duration: Optional[float],
    sample_rate: Optional[float],
    fft_size: Optional[int],
    window_type: Optional[str],
    averaging_count: Optional[int],
    transform: Optional[str],
    min_db: Optional[float],
    max_db: Optional[float],
    output: Optional[str],
    signal_output: Optional[str],
    csv_output: Optional[str],
    no_show: bool,
    title: str,
) -> None:
    """Generate a test signal and display its spectrum."""
    config = _resolve_config(
        config_file,
        _overrides(kind=kind, frequency=frequency,
                   amplitude=amplitude, duration=duration,
                   sample_rate=sample_rate),
        _overrides(fft_size=fft_size,
                   window_type=window_type,
                   averaging_count=averaging_count,
                   transform=transform),
        _overrides(min_db=min_db, max_db=max_db),
    )
    logger.debug("resolved config: %s", config)

    signal = generate_signal(config.signal)
    click.echo(
        f"Signal generated: {config.signal.kind} with "
        f"{signal.num_samples:,} samples"
    )

    try:
        spectrum = SpectrumProcessor(config.dsp).process_signal(signal)
    except SpectrumLabError as exc:
        raise click.ClickException(str(exc))

    summary = summarize_spectrum(spectrum, signal.sample_rate)
    click.echo(
        f"FFT analysis: {summary.num_bins} frequency bins, "
        f"{format_resolution(summary.bin_width_hz)} resolution"
    )
    click.echo(
        f"Frequency range: {format_frequency(summary.min_frequency_hz)} to "
        f"{format_frequency(summary.nyquist_hz)} (Nyquist limit)"
    )
    if summary.peak is not None:
        click.echo(
            f"Peak: {format_frequency(summary.peak.frequency_hz)} at "
            f"{format_level(summary.peak.level_db)} dB"
        )

    if csv_output:
        save_spectrum_csv(spectrum, csv_output)
        click.echo(f"Saved spectrum to {csv_output}")

    if signal_output:
        plot_time_signal(signal, show=False, output=signal_output)
        click.echo(f"Saved signal plot to {signal_output}")

    plot_spectrum(
        datasets=[(config.signal.kind, spectrum)],
        title=title,
        display=config.display,
        show=not no_show,
        output=output,
    )


@cli.command(name="plot")
@click.argument("csv_files", nargs=-1, required=True,
                type=click.Path(exists=True))
@click.option("--output", "-o", type=click.Path(), default=None,
              help="Save plot to file.")
@click.option("--no-show", is_flag=True, default=False,
              help="Do not open the plot in a browser.")
@click.option("--title", "-t", default="Frequency Spectrum",
              help="Plot title.")
@click.option("--min-db", type=float, default=-100.0,
              help="Bottom of the display range in dB.")
@click.option("--max-db", type=float, default=0.0,
              help="Top of the display range in dB.")
def plot_cmd(
    csv_files: tuple,
    output: Optional[str],
    no_show: bool,
    title: str,
    min_db: float,
    max_db: float,
) -> None:
    """Plot one or more saved spectra overlaid on the same chart."""
    try:
        display = DisplayRange(min_db=min_db, max_db=max_db)
    except ValueError as exc:
        raise click.ClickException(str(exc))

    datasets = []
    for csv_file in csv_files:
        click.echo(f"Loading {csv_file}...")
        try:
            spectrum = load_spectrum_csv(csv_file)
        except ValueError as exc:
            raise click.ClickException(str(exc))
        name = Path(csv_file).stem
        datasets.append((name, spectrum))
        click.echo(f"  {spectrum.num_bins} bins from {name}")

    plot_spectrum(
        datasets=datasets,
        title=title,
        display=display,
        show=not no_show,
        output=output,
    )


@cli.command()
@click.argument("kind", type=WINDOW_CHOICES)
@click.option("--size", "-n", type=click.IntRange(min=0), default=16,
              help="Number of coefficients (default: 16).")
def window(kind: str, size: int) -> None:
    """Print the coefficients of a window function."""
    coefficients = get_window(kind, size)
    for index, value in enumerate(coefficients):
        click.echo(f"{index}\t{value:.6f}")


if __name__ == "__main__":
    cli()
