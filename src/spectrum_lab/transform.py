"""Spectral transform engine.

This module provides :class:`SpectrumProcessor`, which turns a
:class:`~spectrum_lab.models.TimeSignal` into a one-sided decibel
spectrum.  Each call runs these steps:

1. take the first ``fft_size`` samples, zero-padding on the right
2. apply the configured window
3. compute bins ``0 .. fft_size//2 - 1`` of the discrete transform
4. take the magnitude ``sqrt(re**2 + im**2)``
5. convert to dB with a floor of :data:`MAGNITUDE_FLOOR`
6. build the frequency axis ``k * sample_rate / fft_size``

The step functions are public so each can be checked on its own.
The processor keeps no per-call state, so one instance may be shared
between threads.
"""

from typing import Tuple

import numpy as np
import numpy.typing as npt

from spectrum_lab.errors import InvalidConfig
from spectrum_lab.log import get_logger
from spectrum_lab.models import DSPConfig, SpectrumData, TimeSignal
from spectrum_lab.windowing import apply_window

logger = get_logger(__name__)

MAGNITUDE_FLOOR: float = 1e-10
"""Smallest magnitude converted to dB (-200 dB); avoids ``log10(0)``."""

DIRECT_BLOCK_BINS: int = 128
"""Output bins computed per block by :func:`direct_transform`."""


def extract_chunk(samples: npt.ArrayLike, size: int) -> np.ndarray:
    """Return exactly *size* samples from the start of *samples*.

    Longer inputs are truncated, shorter ones are zero-padded on the
    right.  The input is never modified.
    """
    source = np.asarray(samples, dtype=np.float64)
    chunk = np.zeros(size, dtype=np.float64)
    count = min(size, source.size)
    chunk[:count] = source[:count]
    return chunk


def direct_transform(
    x: npt.ArrayLike,
    block_bins: int = DIRECT_BLOCK_BINS,
) -> Tuple[np.ndarray, np.ndarray]:
    """Discrete transform of *x* by direct summation.

    For ``k`` in ``[0, N//2)``::

        real[k] = sum(x[n] * cos(-2*pi*k*n/N))
        imag[k] = sum(x[n] * sin(-2*pi*k*n/N))

    This is O(N**2) in time and serves as the reference
    implementation.  Bins are computed *block_bins* at a time, so
    working memory stays O(N * block_bins) for any ``N``.

    Args:
        x: Real-valued chunk of length ``N``.
        block_bins: Output bins per block (> 0).

    Returns:
        ``(real, imag)`` arrays of length ``N // 2``.
    """
    if block_bins <= 0:
        raise ValueError(f"block_bins must be > 0, got {block_bins}")

    samples = np.asarray(x, dtype=np.float64)
    n_total = samples.size
    num_bins = n_total // 2
    n = np.arange(n_total, dtype=np.float64)
    real = np.empty(num_bins, dtype=np.float64)
    imag = np.empty(num_bins, dtype=np.float64)

    for start in range(0, num_bins, block_bins):
        stop = min(start + block_bins, num_bins)
        k = np.arange(start, stop, dtype=np.float64)
        angles = -2.0 * np.pi * np.outer(k, n) / n_total
        real[start:stop] = np.cos(angles) @ samples
        imag[start:stop] = np.sin(angles) @ samples
    return real, imag


def fft_transform(x: npt.ArrayLike) -> Tuple[np.ndarray, np.ndarray]:
    """Same contract as :func:`direct_transform`, computed with an FFT."""
    samples = np.asarray(x, dtype=np.float64)
    spectrum = np.fft.rfft(samples)[: samples.size // 2]
    return spectrum.real.copy(), spectrum.imag.copy()


def magnitudes(real: npt.ArrayLike, imag: npt.ArrayLike) -> np.ndarray:
    """Element-wise ``sqrt(real**2 + imag**2)``."""
    return np.hypot(np.asarray(real, dtype=np.float64),
                    np.asarray(imag, dtype=np.float64))


def to_decibels(values: npt.ArrayLike) -> np.ndarray:
    """Convert linear magnitudes to ``20 * log10(max(m, 1e-10))``.

    The floor keeps every result finite, including for silence.
    """
    mags = np.asarray(values, dtype=np.float64)
    return 20.0 * np.log10(np.maximum(mags, MAGNITUDE_FLOOR))


def frequency_axis(fft_size: int, sample_rate: float) -> np.ndarray:
    """Bin-centre frequencies ``k * sample_rate / fft_size`` for ``k < fft_size//2``."""
    return np.arange(fft_size // 2, dtype=np.float64) * sample_rate / fft_size


_TRANSFORMS = {
    "direct": direct_transform,
    "fft": fft_transform,
}


class SpectrumProcessor:
    """Convert time-domain signals to decibel spectra.

    The configuration is fixed for the lifetime of the processor.

    Example::

        processor = SpectrumProcessor(DSPConfig(fft_size=1024))
        spectrum = processor.process_signal(create_sine_wave(1000))

    Args:
        config: Processing settings.

    Raises:
        InvalidConfig: If *config* is not a :class:`DSPConfig`.
    """

    def __init__(self, config: DSPConfig) -> None:
        if not isinstance(config, DSPConfig):
            raise InvalidConfig(
                f"expected DSPConfig, got {type(config).__name__}"
            )
        self._config = config
        self._transform = _TRANSFORMS[config.transform]
        if config.averaging_count != 1:
            # TODO: accumulate magnitudes over averaging_count frames
            # before dB conversion once multi-frame input is supported.
            logger.warning(
                "averaging_count=%s is ignored; frame averaging is "
                "not implemented and a single frame is processed",
                config.averaging_count,
            )
        logger.debug(
            "processor ready: fft_size=%d window=%s transform=%s",
            config.fft_size, config.window_type, config.transform,
        )

    @property
    def config(self) -> DSPConfig:
        """The processing settings."""
        return self._config

    def process_signal(self, signal: TimeSignal) -> SpectrumData:
        """Compute the decibel spectrum of the start of *signal*.

        Args:
            signal: Input samples; only the first ``fft_size`` samples
                are used and shorter signals are zero-padded.

        Returns:
            A :class:`SpectrumData` with ``fft_size // 2`` bins.

        Raises:
            UnsupportedWindowKind: If the configured window kind is
                not recognized.
        """
        fft_size = self._config.fft_size
        chunk = extract_chunk(signal.samples, fft_size)
        windowed = apply_window(chunk, self._config.window_type)
        real, imag = self._transform(windowed)
        levels = to_decibels(magnitudes(real, imag))
        freqs = frequency_axis(fft_size, signal.sample_rate)

        logger.debug(
            "processed %d of %d samples into %d bins",
            min(fft_size, signal.num_samples), signal.num_samples, levels.size,
        )
        return SpectrumData(
            frequencies=freqs,
            magnitudes_db=levels,
            bin_width_hz=signal.sample_rate / fft_size,
        )
