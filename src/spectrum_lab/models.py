"""Data model for time-domain signals, spectra and processing settings.

This module defines the immutable records that flow through the
pipeline: :class:`TimeSignal` (produced by the generator),
:class:`SpectrumData` (produced by the transform engine),
:class:`DSPConfig` (engine settings) and :class:`SignalParams`
(generator settings collected by a host application).
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Tuple

import numpy as np
import numpy.typing as npt

from spectrum_lab.errors import InvalidConfig, UnsupportedSignalKind

#: Signal kinds understood by :func:`spectrum_lab.generator.generate_signal`.
SIGNAL_KINDS: Tuple[str, ...] = ("sine", "multitone", "noise", "chirp")

#: Transform implementations understood by the engine.
TRANSFORM_METHODS: Tuple[str, ...] = ("direct", "fft")

#: FFT sizes offered by the host application.  Other sizes are accepted.
RECOMMENDED_FFT_SIZES: Tuple[int, ...] = (256, 512, 1024, 2048)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _frozen_array(values: npt.ArrayLike, name: str) -> np.ndarray:
    """Copy *values* into a read-only 1-D float64 array."""
    arr = np.array(values, dtype=np.float64, copy=True)
    if arr.ndim != 1:
        raise ValueError(f"{name} must be one-dimensional")
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class TimeSignal:
    """A time-domain sample buffer.

    Attributes:
        samples: Read-only amplitudes, one per sample.
        sample_rate: Samples per second.
        duration_seconds: Requested duration; equals
            ``len(samples) / sample_rate`` up to flooring.
        created_at: Generation timestamp (informational only).
    """

    samples: np.ndarray
    sample_rate: float
    duration_seconds: float
    created_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        object.__setattr__(self, "samples", _frozen_array(self.samples, "samples"))

    @property
    def num_samples(self) -> int:
        """Number of samples in the buffer."""
        return int(self.samples.size)


@dataclass(frozen=True)
class SpectrumData:
    """A one-sided magnitude spectrum in decibels.

    ``magnitudes_db[i]`` is the level at ``frequencies[i]``.

    Attributes:
        frequencies: Read-only bin-centre frequencies in Hz.
        magnitudes_db: Read-only levels in dB, index-aligned with
            ``frequencies``.
        bin_width_hz: Frequency resolution (``sample_rate / fft_size``).
        created_at: Processing timestamp (informational only).

    Raises:
        ValueError: If the two sequences differ in length.
    """

    frequencies: np.ndarray
    magnitudes_db: np.ndarray
    bin_width_hz: float
    created_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        freqs = _frozen_array(self.frequencies, "frequencies")
        mags = _frozen_array(self.magnitudes_db, "magnitudes_db")
        if freqs.size != mags.size:
            raise ValueError(
                f"frequencies ({freqs.size}) and magnitudes_db "
                f"({mags.size}) must have the same length"
            )
        object.__setattr__(self, "frequencies", freqs)
        object.__setattr__(self, "magnitudes_db", mags)

    @property
    def num_bins(self) -> int:
        """Number of frequency bins."""
        return int(self.frequencies.size)

    @property
    def max_frequency_hz(self) -> float:
        """Highest bin-centre frequency, or 0.0 for an empty spectrum."""
        if self.frequencies.size == 0:
            return 0.0
        return float(self.frequencies[-1])


@dataclass(frozen=True)
class DSPConfig:
    """Settings of the spectral transform engine.

    Attributes:
        fft_size: Number of samples per analysed chunk.  The spectrum
            keeps ``fft_size // 2`` bins.
        window_type: Window kind name.  Checked when a signal is
            processed, not here.
        averaging_count: Reserved for multi-frame averaging.  Frame
            averaging is not implemented and this value does not
            change the output.
        transform: ``"direct"`` summation or ``"fft"``.

    Raises:
        InvalidConfig: If ``fft_size`` is not an integer with at least
            one output bin, or ``transform`` is unknown.
    """

    fft_size: int = 1024
    window_type: str = "hanning"
    averaging_count: int = 1
    transform: str = "direct"

    def __post_init__(self) -> None:
        # bool is an int subclass; reject it explicitly
        if isinstance(self.fft_size, bool) or not isinstance(
            self.fft_size, (int, np.integer)
        ):
            raise InvalidConfig(
                f"fft_size must be an integer, got {type(self.fft_size).__name__}"
            )
        if self.fft_size // 2 < 1:
            raise InvalidConfig(
                f"fft_size must be at least 2, got {self.fft_size}"
            )
        object.__setattr__(self, "fft_size", int(self.fft_size))
        if self.transform not in TRANSFORM_METHODS:
            raise InvalidConfig(
                f"transform must be one of {', '.join(TRANSFORM_METHODS)}, "
                f"got {self.transform!r}"
            )

    @property
    def num_bins(self) -> int:
        """Number of retained output bins."""
        return self.fft_size // 2


@dataclass(frozen=True)
class SignalParams:
    """Parameters of a generated test signal.

    Attributes:
        kind: One of :data:`SIGNAL_KINDS`.
        frequency: Base frequency in Hz (finite, > 0).
        amplitude: Peak amplitude; ``[0, 1]`` is typical but not
            enforced.
        duration: Length in seconds (finite, >= 0).
        sample_rate: Samples per second (finite, > 0).

    Raises:
        UnsupportedSignalKind: For an unknown ``kind``.
        InvalidConfig: For out-of-range numeric values.
    """

    kind: str = "sine"
    frequency: float = 1000.0
    amplitude: float = 1.0
    duration: float = 1.0
    sample_rate: float = 44100.0

    def __post_init__(self) -> None:
        if self.kind not in SIGNAL_KINDS:
            raise UnsupportedSignalKind(self.kind)
        if not (math.isfinite(self.frequency) and self.frequency > 0):
            raise InvalidConfig(
                f"frequency must be finite and > 0, got {self.frequency}"
            )
        if not (math.isfinite(self.duration) and self.duration >= 0):
            raise InvalidConfig(
                f"duration must be finite and >= 0, got {self.duration}"
            )
        if not (math.isfinite(self.sample_rate) and self.sample_rate > 0):
            raise InvalidConfig(
                f"sample_rate must be finite and > 0, got {self.sample_rate}"
            )
