"""File I/O for spectrum data.

This module saves a :class:`~spectrum_lab.models.SpectrumData` to a
two-column CSV file and loads it back, so a spectrum can be plotted
or compared later without regenerating the signal.

File format::

    # bin_width_hz=43.06640625
    frequency_hz,magnitude_db
    0.0,-52.317
    43.06640625,-48.002
    ...

The comment line is optional on load; without it the bin width is
taken from the spacing of the first two rows.
"""

from pathlib import Path
from typing import List, Optional, Union

from spectrum_lab.models import SpectrumData

CSV_HEADER = "frequency_hz,magnitude_db"
BIN_WIDTH_PREFIX = "# bin_width_hz="


def save_spectrum_csv(spectrum: SpectrumData, path: Union[str, Path]) -> None:
    """Save a spectrum to CSV, one row per bin.

    Values are written with ``repr`` precision so a reload reproduces
    them exactly.  The bin width goes on a leading comment line, so
    spectra with fewer than two bins keep it too.

    Args:
        spectrum: The spectrum to write.
        path: Destination file path.  Parent directories are created.

    Raises:
        IOError: If the file cannot be written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as fh:
        fh.write(f"{BIN_WIDTH_PREFIX}{float(spectrum.bin_width_hz)!r}\n")
        fh.write(CSV_HEADER + "\n")
        for freq, level in zip(spectrum.frequencies, spectrum.magnitudes_db):
            fh.write(f"{float(freq)!r},{float(level)!r}\n")


def load_spectrum_csv(path: Union[str, Path]) -> SpectrumData:
    """Load a spectrum written by :func:`save_spectrum_csv`.

    The bin width comes from the ``# bin_width_hz=`` line.  Files
    without it fall back to the spacing of the first two rows (0.0 if
    the file has fewer than two rows).

    Args:
        path: Path to the CSV file.

    Returns:
        The loaded :class:`SpectrumData`.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError: If the bin width line, the header or a row is
            malformed.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"CSV file not found: {path}")

    bin_width: Optional[float] = None
    frequencies: List[float] = []
    levels: List[float] = []
    with open(path, "r", encoding="utf-8") as fh:
        line_no = 1
        header = fh.readline().rstrip("\n\r")
        if header.startswith(BIN_WIDTH_PREFIX):
            value = header[len(BIN_WIDTH_PREFIX):]
            try:
                bin_width = float(value)
            except ValueError:
                raise ValueError(
                    f"{path}:1: invalid bin width {value!r}"
                ) from None
            line_no = 2
            header = fh.readline().rstrip("\n\r")
        if header != CSV_HEADER:
            raise ValueError(
                f"{path}:{line_no}: expected header {CSV_HEADER!r}, got {header!r}"
            )
        for line_no, line in enumerate(fh, start=line_no + 1):
            line = line.rstrip("\n\r")
            if not line:
                continue
            parts = line.split(",")
            if len(parts) != 2:
                raise ValueError(
                    f"{path}:{line_no}: expected 2 columns, got {len(parts)}"
                )
            try:
                frequencies.append(float(parts[0]))
                levels.append(float(parts[1]))
            except ValueError:
                raise ValueError(
                    f"{path}:{line_no}: non-numeric value in {line!r}"
                ) from None

    if bin_width is None:
        bin_width = frequencies[1] - frequencies[0] if len(frequencies) > 1 else 0.0
    return SpectrumData(
        frequencies=frequencies,
        magnitudes_db=levels,
        bin_width_hz=bin_width,
    )
