"""Spectrum inspection helpers.

This module provides peak search and the summary shown next to a
spectrum plot: bin count, resolution, frequency range and the
Nyquist limit of the source signal.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from spectrum_lab.models import SpectrumData


@dataclass(frozen=True)
class SpectrumPeak:
    """The strongest bin of a spectrum.

    Attributes:
        index: Bin index.
        frequency_hz: Bin-centre frequency.
        level_db: Level of the bin in dB.
    """

    index: int
    frequency_hz: float
    level_db: float


@dataclass(frozen=True)
class SpectrumSummary:
    """Human-facing facts about a processed spectrum.

    Attributes:
        num_bins: Number of frequency bins.
        bin_width_hz: Frequency resolution.
        min_frequency_hz: First bin frequency.
        max_frequency_hz: Last bin frequency.
        nyquist_hz: Half the source sample rate.
        peak: Strongest bin, or ``None`` for an empty spectrum.
    """

    num_bins: int
    bin_width_hz: float
    min_frequency_hz: float
    max_frequency_hz: float
    nyquist_hz: float
    peak: Optional[SpectrumPeak]


def find_peak(spectrum: SpectrumData) -> SpectrumPeak:
    """Return the bin with the highest level.

    Ties resolve to the lowest frequency.

    Args:
        spectrum: A processed spectrum.

    Returns:
        The :class:`SpectrumPeak` of the strongest bin.

    Raises:
        ValueError: If *spectrum* has no bins.
    """
    if spectrum.num_bins == 0:
        raise ValueError("Cannot find the peak of an empty spectrum")

    index = int(np.argmax(spectrum.magnitudes_db))
    return SpectrumPeak(
        index=index,
        frequency_hz=float(spectrum.frequencies[index]),
        level_db=float(spectrum.magnitudes_db[index]),
    )


def summarize_spectrum(spectrum: SpectrumData, sample_rate: float) -> SpectrumSummary:
    """Collect the status line values for *spectrum*.

    Args:
        spectrum: A processed spectrum.
        sample_rate: Sample rate of the signal it was computed from.

    Returns:
        A :class:`SpectrumSummary`.
    """
    if spectrum.num_bins == 0:
        return SpectrumSummary(
            num_bins=0,
            bin_width_hz=spectrum.bin_width_hz,
            min_frequency_hz=0.0,
            max_frequency_hz=0.0,
            nyquist_hz=sample_rate / 2,
            peak=None,
        )

    return SpectrumSummary(
        num_bins=spectrum.num_bins,
        bin_width_hz=spectrum.bin_width_hz,
        min_frequency_hz=float(spectrum.frequencies[0]),
        max_frequency_hz=spectrum.max_frequency_hz,
        nyquist_hz=sample_rate / 2,
        peak=find_peak(spectrum),
    )
