"""YAML configuration for the analyzer.

A configuration file holds up to three optional mappings; any key
left out takes its default::

    signal:
      kind: sine          # sine | multitone | noise | chirp
      frequency: 1000     # Hz
      amplitude: 1.0
      duration: 1.0       # seconds
      sample_rate: 44100  # Hz
    dsp:
      fft_size: 1024
      window_type: hanning
      averaging_count: 1  # reserved, has no effect
      transform: direct   # direct | fft
    display:
      min_db: -100
      max_db: 0

The parsed values are turned into the immutable records the
generator, engine and plot consume.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Tuple, Union

import numpy as np
import numpy.typing as npt
import yaml

from spectrum_lab.errors import InvalidConfig
from spectrum_lab.log import get_logger
from spectrum_lab.models import DSPConfig, SignalParams

logger = get_logger(__name__)

DEFAULT_MIN_DB: float = -100.0
"""Bottom of the default decibel display range."""

DEFAULT_MAX_DB: float = 0.0
"""Top of the default decibel display range."""

#: Accepted keys per section, with the type each value must have.
_SECTION_KEYS: Dict[str, Dict[str, Tuple[type, ...]]] = {
    "signal": {
        "kind": (str,),
        "frequency": (int, float),
        "amplitude": (int, float),
        "duration": (int, float),
        "sample_rate": (int, float),
    },
    "dsp": {
        "fft_size": (int,),
        "window_type": (str,),
        "averaging_count": (int,),
        "transform": (str,),
    },
    "display": {
        "min_db": (int, float),
        "max_db": (int, float),
    },
}


@dataclass(frozen=True)
class DisplayRange:
    """Decibel window mapped onto the y-axis of a spectrum plot.

    Attributes:
        min_db: Level drawn at the bottom edge.
        max_db: Level drawn at the top edge.

    Raises:
        InvalidConfig: If ``min_db >= max_db``.
    """

    min_db: float = DEFAULT_MIN_DB
    max_db: float = DEFAULT_MAX_DB

    def __post_init__(self) -> None:
        if not self.min_db < self.max_db:
            raise InvalidConfig(
                f"min_db ({self.min_db}) must be below max_db ({self.max_db})"
            )

    @property
    def span_db(self) -> float:
        return self.max_db - self.min_db

    def clip(self, values: npt.ArrayLike) -> np.ndarray:
        """Clamp *values* into ``[min_db, max_db]``."""
        return np.clip(np.asarray(values, dtype=np.float64), self.min_db, self.max_db)


@dataclass(frozen=True)
class AnalyzerConfig:
    """Complete settings of one analysis run."""

    signal: SignalParams = field(default_factory=SignalParams)
    dsp: DSPConfig = field(default_factory=DSPConfig)
    display: DisplayRange = field(default_factory=DisplayRange)


def validate_config_yaml(data: object) -> None:
    """Validate that parsed YAML data has the expected structure.

    Checks:

    1. Top-level value is a mapping (or ``None`` for an empty file).
    2. Only the sections ``signal``, ``dsp`` and ``display`` appear,
       and each is a mapping.
    3. Each section contains only its known keys, and every value
       has the expected type (``bool`` is never accepted as a number).

    Args:
        data: The object returned by ``yaml.safe_load()``.

    Raises:
        ValueError: If the data does not conform to the expected
            structure.  The message describes the first problem found.
    """
    if data is None:
        return
    if not isinstance(data, dict):
        raise ValueError(
            "Invalid config YAML: expected a mapping, "
            f"got {type(data).__name__}"
        )

    for section, body in data.items():
        if section not in _SECTION_KEYS:
            raise ValueError(
                f"Invalid config YAML: unknown section {section!r}"
            )
        if body is None:
            continue
        if not isinstance(body, dict):
            raise ValueError(
                f"Invalid config YAML: section {section!r} is not a mapping "
                f"(got {type(body).__name__})"
            )

        allowed = _SECTION_KEYS[section]
        for key, value in body.items():
            if key not in allowed:
                raise ValueError(
                    f"Invalid config YAML: unknown key {section}.{key}"
                )
            if isinstance(value, bool) or not isinstance(value, allowed[key]):
                raise ValueError(
                    f"Invalid config YAML: {section}.{key} has the wrong type "
                    f"(got {type(value).__name__})"
                )


def build_config(data: object) -> AnalyzerConfig:
    """Build an :class:`AnalyzerConfig` from parsed YAML *data*.

    Raises:
        ValueError: If the structure is invalid.
        InvalidConfig: If a value is out of range.
        UnsupportedSignalKind: If ``signal.kind`` is unknown.
    """
    validate_config_yaml(data)
    sections = data or {}
    return AnalyzerConfig(
        signal=SignalParams(**(sections.get("signal") or {})),
        dsp=DSPConfig(**(sections.get("dsp") or {})),
        display=DisplayRange(**(sections.get("display") or {})),
    )


def load_config(path: Union[str, Path]) -> AnalyzerConfig:
    """Load an analyzer configuration YAML file.

    Args:
        path: Path to the YAML file.

    Returns:
        The parsed :class:`AnalyzerConfig`.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError: If the file content is invalid (including
            :class:`~spectrum_lab.errors.InvalidConfig`).
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as fh:
        try:
            data = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid config YAML: {exc}") from exc

    config = build_config(data)
    logger.info("loaded config from %s", path)
    return config
