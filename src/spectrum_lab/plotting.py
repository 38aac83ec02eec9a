"""Interactive spectrum plotting with Plotly.

This module renders :class:`~spectrum_lab.models.SpectrumData` the
way a bench spectrum analyzer does: frequency on the x-axis, level
in dB on a fixed y-axis range, an oscilloscope-green trace on a dark
background and a status line with bin count, resolution and range.
Levels outside the display range are clamped to its edges.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import plotly.graph_objects as go

from spectrum_lab.config import DisplayRange
from spectrum_lab.formatters import (
    format_db_tick,
    format_frequency,
    format_level,
    format_resolution,
)
from spectrum_lab.models import SpectrumData, TimeSignal

#: Classic oscilloscope green.
TRACE_COLOR = "#00ff00"
TRACE_FILL = "rgba(0, 255, 0, 0.1)"

#: Colors for additional overlaid spectra.
OVERLAY_COLORS: Tuple[str, ...] = ("#ffff00", "#00ffff", "#ff00ff", "#ff8800")

#: Number of horizontal dB grid divisions.
DB_DIVISIONS = 8


def _save_figure(
    fig: go.Figure,
    output: Union[str, Path],
) -> None:
    """Save a Plotly figure to file.

    Args:
        fig: A Plotly :class:`~plotly.graph_objects.Figure`.
        output: Destination path.  ``.html`` → interactive HTML;
            any other extension → static image via ``kaleido``.
    """
    output = Path(output)
    output.parent.mkdir(parents=True, exist_ok=True)
    if output.suffix.lower() == ".html":
        fig.write_html(str(output))
    else:
        fig.write_image(str(output))


def status_text(spectrum: SpectrumData) -> str:
    """Status line for a spectrum: bins, resolution and frequency range."""
    if spectrum.num_bins == 0:
        return "Bins: 0"
    return (
        f"Bins: {spectrum.num_bins}   "
        f"Resolution: {format_resolution(spectrum.bin_width_hz)}   "
        f"Range: {format_frequency(spectrum.frequencies[0])} – "
        f"{format_frequency(spectrum.max_frequency_hz)}"
    )


def db_ticks(display: DisplayRange) -> Tuple[List[float], List[str]]:
    """Tick values and labels for :data:`DB_DIVISIONS` equal dB steps."""
    step = display.span_db / DB_DIVISIONS
    values = [display.min_db + i * step for i in range(DB_DIVISIONS + 1)]
    return values, [format_db_tick(v) for v in values]


def plot_spectrum(
    datasets: Sequence[Tuple[str, SpectrumData]],
    title: str = "Frequency Spectrum",
    display: Optional[DisplayRange] = None,
    show: bool = True,
    output: Optional[Union[str, Path]] = None,
) -> go.Figure:
    """Create an interactive spectrum plot.

    A single spectrum is drawn with the area under the trace filled
    down to the bottom of the display range.  Several spectra are
    overlaid without fill.

    Args:
        datasets: List of ``(name, spectrum)`` tuples.
        title: Chart title.
        display: Decibel range of the y-axis.  Defaults to
            -100 dB .. 0 dB.
        show: If ``True``, opens the plot in the default browser.
        output: Optional file path to save the plot.  ``.html`` files
            are saved as interactive HTML; other extensions (e.g.
            ``.png``) are saved as static images via ``kaleido``.

    Returns:
        The Plotly :class:`~plotly.graph_objects.Figure` object.
    """
    if display is None:
        display = DisplayRange()

    fig = go.Figure()
    fill = len(datasets) == 1

    for index, (name, spectrum) in enumerate(datasets):
        freqs = spectrum.frequencies.tolist()
        levels = display.clip(spectrum.magnitudes_db).tolist()
        hover_texts = [
            f"{format_frequency(f)}<br>{format_level(d)} dB"
            for f, d in zip(freqs, spectrum.magnitudes_db.tolist())
        ]

        if fill:
            # Invisible floor trace so the fill stops at min_db
            fig.add_trace(go.Scatter(
                x=freqs,
                y=[display.min_db] * len(freqs),
                mode="lines",
                line=dict(width=0),
                hoverinfo="skip",
                showlegend=False,
            ))

        color = TRACE_COLOR if index == 0 else OVERLAY_COLORS[(index - 1) % len(OVERLAY_COLORS)]
        fig.add_trace(go.Scatter(
            x=freqs,
            y=levels,
            mode="lines",
            name=name,
            line=dict(color=color, width=2),
            fill="tonexty" if fill else None,
            fillcolor=TRACE_FILL if fill else None,
            hovertext=hover_texts,
            hoverinfo="text",
        ))

    tick_values, tick_labels = db_ticks(display)
    fig.update_layout(
        title=title,
        xaxis_title="Frequency (Hz)",
        yaxis_title="Level (dB)",
        hovermode="x unified",
        template="plotly_dark",
        plot_bgcolor="#000000",
        xaxis=dict(tickformat=",", hoverformat=","),
        yaxis=dict(
            range=[display.min_db, display.max_db],
            tickvals=tick_values,
            ticktext=tick_labels,
        ),
    )

    if datasets:
        fig.add_annotation(
            text=status_text(datasets[0][1]),
            xref="paper",
            yref="paper",
            x=0.0,
            y=1.05,
            showarrow=False,
            font=dict(family="monospace", color="#aaaaaa"),
        )

    if output:
        _save_figure(fig, output)

    if show:
        fig.show()

    return fig


def plot_time_signal(
    signal: TimeSignal,
    title: str = "Time Signal",
    show: bool = True,
    output: Optional[Union[str, Path]] = None,
) -> go.Figure:
    """Plot the samples of *signal* against time in seconds.

    Args:
        signal: Signal to draw.
        title: Chart title.
        show: If ``True``, opens the plot in the default browser.
        output: Optional file path to save the plot.

    Returns:
        The Plotly :class:`~plotly.graph_objects.Figure` object.
    """
    if signal.sample_rate > 0:
        times = [i / signal.sample_rate for i in range(signal.num_samples)]
    else:
        times = []

    fig = go.Figure(go.Scatter(
        x=times,
        y=signal.samples.tolist(),
        mode="lines",
        name="Signal",
        line=dict(color=TRACE_COLOR, width=1),
    ))
    fig.update_layout(
        title=title,
        xaxis_title="Time (s)",
        yaxis_title="Amplitude",
        template="plotly_dark",
        plot_bgcolor="#000000",
    )

    if output:
        _save_figure(fig, output)

    if show:
        fig.show()

    return fig
