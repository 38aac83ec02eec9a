"""Window functions applied to a chunk before the spectral transform.

A window tapers the edges of a chunk so the transform sees fewer
artificial discontinuities.  Three kinds are recognized:

* ``rectangular`` — every coefficient is 1.0 (no weighting)
* ``hanning`` — ``0.5 * (1 - cos(2*pi*i / (N-1)))``
* ``hamming`` — ``0.54 - 0.46 * cos(2*pi*i / (N-1))``

For ``N == 1`` the ``N - 1`` denominator is zero; every kind then
returns the single coefficient ``1.0``.
"""

from typing import Callable, Dict, Tuple

import numpy as np
import numpy.typing as npt

from spectrum_lab.errors import UnsupportedWindowKind

#: Window kinds accepted by :func:`get_window` and :func:`apply_window`.
WINDOW_KINDS: Tuple[str, ...] = ("rectangular", "hanning", "hamming")


def _check_length(length: int) -> None:
    if length < 0:
        raise ValueError(f"window length must be >= 0, got {length}")


def _cosine_phase(length: int) -> np.ndarray:
    """Return ``2*pi*i / (N-1)`` for ``i`` in ``0..N-1`` (``N >= 2``)."""
    return 2.0 * np.pi * np.arange(length, dtype=np.float64) / (length - 1)


def rectangular(length: int) -> np.ndarray:
    """Rectangular window of *length* ones."""
    _check_length(length)
    return np.ones(length, dtype=np.float64)


def hanning(length: int) -> np.ndarray:
    """Hanning window of *length* coefficients."""
    _check_length(length)
    if length < 2:
        return np.ones(length, dtype=np.float64)
    return 0.5 * (1.0 - np.cos(_cosine_phase(length)))


def hamming(length: int) -> np.ndarray:
    """Hamming window of *length* coefficients."""
    _check_length(length)
    if length < 2:
        return np.ones(length, dtype=np.float64)
    return 0.54 - 0.46 * np.cos(_cosine_phase(length))


_WINDOW_BUILDERS: Dict[str, Callable[[int], np.ndarray]] = {
    "rectangular": rectangular,
    "hanning": hanning,
    "hamming": hamming,
}


def get_window(kind: str, length: int) -> np.ndarray:
    """Return the coefficients of window *kind* for *length* samples.

    Args:
        kind: One of :data:`WINDOW_KINDS`.
        length: Number of coefficients.

    Returns:
        A new float64 array of *length* coefficients.

    Raises:
        UnsupportedWindowKind: If *kind* is not recognized.
        ValueError: If *length* is negative.
    """
    try:
        builder = _WINDOW_BUILDERS[kind]
    except (KeyError, TypeError):
        raise UnsupportedWindowKind(kind) from None
    return builder(length)


def apply_window(chunk: npt.ArrayLike, kind: str) -> np.ndarray:
    """Weight *chunk* by the coefficients of window *kind*.

    The window is sized to ``len(chunk)`` and multiplied element-wise.
    *chunk* itself is never modified.

    Args:
        chunk: One-dimensional sample sequence.
        kind: One of :data:`WINDOW_KINDS`.

    Returns:
        A new float64 array ``chunk[i] * window[i]``.

    Raises:
        UnsupportedWindowKind: If *kind* is not recognized.  Nothing
            is computed in that case.
    """
    samples = np.asarray(chunk, dtype=np.float64)
    if samples.ndim != 1:
        raise ValueError("chunk must be one-dimensional")
    coefficients = get_window(kind, samples.size)
    return samples * coefficients
