"""Shared test fixtures and helpers for spectrum_lab tests."""

from pathlib import Path

import pytest

from spectrum_lab.generator import create_sine_wave
from spectrum_lab.models import DSPConfig, TimeSignal
from spectrum_lab.transform import SpectrumProcessor


@pytest.fixture
def sine_1k() -> TimeSignal:
    """Return a 1 kHz, 1 s, unit-amplitude tone at 44.1 kHz."""
    return create_sine_wave(1000, 1.0, 1.0, 44100)


@pytest.fixture
def hanning_config() -> DSPConfig:
    """Return the default 1024-point Hanning configuration."""
    return DSPConfig(fft_size=1024, window_type="hanning")


@pytest.fixture
def processor(hanning_config: DSPConfig) -> SpectrumProcessor:
    """Return a processor using :func:`hanning_config`."""
    return SpectrumProcessor(hanning_config)


@pytest.fixture
def config_yaml(tmp_path: Path) -> Path:
    """Write a complete analyzer config file and return its path."""
    path = tmp_path / "analyzer.yaml"
    path.write_text(
        "signal:\n"
        "  kind: multitone\n"
        "  frequency: 500\n"
        "  amplitude: 0.8\n"
        "  duration: 0.5\n"
        "  sample_rate: 8000\n"
        "dsp:\n"
        "  fft_size: 256\n"
        "  window_type: hamming\n"
        "  averaging_count: 1\n"
        "  transform: fft\n"
        "display:\n"
        "  min_db: -120\n"
        "  max_db: 20\n",
        encoding="utf-8",
    )
    return path
