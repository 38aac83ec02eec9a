"""Synthesis of test signals.

Every generator returns a :class:`~spectrum_lab.models.TimeSignal`
with ``floor(duration * sample_rate)`` samples taken at
``t = i / sample_rate``.  A zero duration or zero sample rate yields
an empty signal rather than an error.  A non-finite sample count
raises :class:`~spectrum_lab.errors.InvalidConfig`.
"""

import math
from typing import Optional, Sequence

import numpy as np

from spectrum_lab.errors import InvalidConfig, UnsupportedSignalKind
from spectrum_lab.log import get_logger
from spectrum_lab.models import SignalParams, TimeSignal

logger = get_logger(__name__)

DEFAULT_SAMPLE_RATE: float = 44100.0
"""Default sample rate in Hz."""

DEFAULT_NOISE_AMPLITUDE: float = 0.1
"""Default white-noise amplitude."""

#: Harmonic multipliers and relative amplitudes of the ``multitone`` preset.
MULTITONE_HARMONICS = ((1.0, 1.0), (2.0, 0.5), (3.0, 0.3))

#: End frequency of the ``chirp`` preset, as a multiple of the base frequency.
CHIRP_SWEEP_RATIO: float = 4.0


def _num_samples(duration: float, sample_rate: float) -> int:
    count = duration * sample_rate
    if not math.isfinite(count):
        raise InvalidConfig(
            f"duration ({duration}) and sample_rate ({sample_rate}) "
            f"must give a finite sample count"
        )
    return max(0, math.floor(count))


def _time_axis(duration: float, sample_rate: float) -> np.ndarray:
    n = _num_samples(duration, sample_rate)
    if n == 0:
        return np.zeros(0, dtype=np.float64)
    return np.arange(n, dtype=np.float64) / sample_rate


def _tone(frequency: float, amplitude: float, t: np.ndarray) -> np.ndarray:
    return amplitude * np.sin(2.0 * np.pi * frequency * t)


def create_sine_wave(
    frequency: float,
    amplitude: float = 1.0,
    duration: float = 1.0,
    sample_rate: float = DEFAULT_SAMPLE_RATE,
) -> TimeSignal:
    """Create a pure tone ``amplitude * sin(2*pi*frequency*t)``.

    Args:
        frequency: Tone frequency in Hz.
        amplitude: Peak amplitude.
        duration: Length in seconds.
        sample_rate: Samples per second.

    Returns:
        The generated :class:`TimeSignal`.
    """
    t = _time_axis(duration, sample_rate)
    logger.debug("sine %.3f Hz, %d samples", frequency, t.size)
    return TimeSignal(
        samples=_tone(frequency, amplitude, t),
        sample_rate=sample_rate,
        duration_seconds=duration,
    )


def create_multi_tone(
    frequencies: Sequence[float],
    amplitudes: Sequence[float],
    duration: float = 1.0,
    sample_rate: float = DEFAULT_SAMPLE_RATE,
) -> TimeSignal:
    """Create the sum of several tones.

    Frequencies and amplitudes are paired by position.  A frequency
    without a matching amplitude uses 1.0; extra amplitudes are
    ignored.  The sum is not normalized and may leave ``[-1, 1]``.

    Args:
        frequencies: Tone frequencies in Hz.
        amplitudes: Peak amplitude of each tone.
        duration: Length in seconds.
        sample_rate: Samples per second.

    Returns:
        The generated :class:`TimeSignal`.
    """
    t = _time_axis(duration, sample_rate)
    samples = np.zeros(t.size, dtype=np.float64)
    for index, freq in enumerate(frequencies):
        amp = amplitudes[index] if index < len(amplitudes) else 1.0
        samples += _tone(freq, amp, t)

    logger.debug("multitone %d components, %d samples", len(frequencies), t.size)
    return TimeSignal(
        samples=samples,
        sample_rate=sample_rate,
        duration_seconds=duration,
    )


def create_white_noise(
    amplitude: float = DEFAULT_NOISE_AMPLITUDE,
    duration: float = 1.0,
    sample_rate: float = DEFAULT_SAMPLE_RATE,
    rng: Optional[np.random.Generator] = None,
) -> TimeSignal:
    """Create uniform white noise in ``[-amplitude, amplitude]``.

    The output is not reproducible unless a seeded *rng* is supplied.

    Args:
        amplitude: Noise amplitude.
        duration: Length in seconds.
        sample_rate: Samples per second.
        rng: Optional random generator; a fresh unseeded one is used
            by default.

    Returns:
        The generated :class:`TimeSignal`.
    """
    if rng is None:
        rng = np.random.default_rng()
    n = _num_samples(duration, sample_rate)
    samples = amplitude * rng.uniform(-1.0, 1.0, size=n)

    logger.debug("white noise amplitude %.3f, %d samples", amplitude, n)
    return TimeSignal(
        samples=samples,
        sample_rate=sample_rate,
        duration_seconds=duration,
    )


def chirp_frequency(
    t: float,
    start_freq: float,
    end_freq: float,
    duration: float,
) -> float:
    """Instantaneous frequency of a linear chirp at time *t*.

    ``start_freq + (end_freq - start_freq) * (t / duration)``; a zero
    *duration* gives *start_freq*.
    """
    if duration == 0:
        return start_freq
    return start_freq + (end_freq - start_freq) * (t / duration)


def create_chirp(
    start_freq: float,
    end_freq: float,
    duration: float = 1.0,
    sample_rate: float = DEFAULT_SAMPLE_RATE,
) -> TimeSignal:
    """Create a unit-amplitude sweep from *start_freq* to *end_freq*.

    Each sample is ``sin(2*pi * f(t) * t)`` where ``f(t)`` is
    :func:`chirp_frequency`.  The phase is the instantaneous frequency
    times ``t``, not its integral over time, so the audible sweep is
    only approximately linear.

    Args:
        start_freq: Frequency at ``t = 0`` in Hz.
        end_freq: Frequency at ``t = duration`` in Hz.
        duration: Length in seconds.
        sample_rate: Samples per second.

    Returns:
        The generated :class:`TimeSignal`.
    """
    t = _time_axis(duration, sample_rate)
    if t.size:
        inst_freq = start_freq + (end_freq - start_freq) * (t / duration)
        samples = np.sin(2.0 * np.pi * inst_freq * t)
    else:
        samples = t

    logger.debug(
        "chirp %.3f -> %.3f Hz, %d samples", start_freq, end_freq, t.size
    )
    return TimeSignal(
        samples=samples,
        sample_rate=sample_rate,
        duration_seconds=duration,
    )


def generate_signal(params: SignalParams) -> TimeSignal:
    """Generate the signal described by *params*.

    * ``sine`` — a single tone at ``frequency``.
    * ``multitone`` — harmonics at 1x, 2x and 3x ``frequency`` with
      amplitudes 1.0, 0.5 and 0.3 times ``amplitude``.
    * ``noise`` — white noise of ``amplitude``.
    * ``chirp`` — a unit-amplitude sweep from ``frequency`` to
      4x ``frequency``.

    Raises:
        UnsupportedSignalKind: If ``params.kind`` is unknown.
    """
    if params.kind == "sine":
        return create_sine_wave(
            params.frequency, params.amplitude, params.duration, params.sample_rate
        )
    if params.kind == "multitone":
        return create_multi_tone(
            [params.frequency * mult for mult, _ in MULTITONE_HARMONICS],
            [params.amplitude * rel for _, rel in MULTITONE_HARMONICS],
            params.duration,
            params.sample_rate,
        )
    if params.kind == "noise":
        return create_white_noise(
            params.amplitude, params.duration, params.sample_rate
        )
    if params.kind == "chirp":
        return create_chirp(
            params.frequency,
            params.frequency * CHIRP_SWEEP_RATIO,
            params.duration,
            params.sample_rate,
        )
    raise UnsupportedSignalKind(params.kind)
