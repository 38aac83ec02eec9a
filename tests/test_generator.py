"""Tests for test-signal synthesis."""

from datetime import datetime

import numpy as np
import pytest

from spectrum_lab.errors import InvalidConfig, UnsupportedSignalKind
from spectrum_lab.generator import (
    chirp_frequency,
    create_chirp,
    create_multi_tone,
    create_sine_wave,
    create_white_noise,
    generate_signal,
)
from spectrum_lab.models import SignalParams


class TestSineWave:
    """Single tone generation."""

    def test_length_and_metadata(self, sine_1k) -> None:
        """1 s at 44.1 kHz gives 44100 samples and stamped metadata."""
        assert sine_1k.num_samples == 44100
        assert sine_1k.sample_rate == 44100
        assert sine_1k.duration_seconds == 1.0
        assert isinstance(sine_1k.created_at, datetime)

    def test_values(self) -> None:
        """Samples follow amplitude * sin(2*pi*f*t)."""
        sig = create_sine_wave(250, 0.5, 0.01, 8000)
        t = np.arange(80) / 8000
        np.testing.assert_allclose(sig.samples, 0.5 * np.sin(2 * np.pi * 250 * t))

    def test_quarter_period(self) -> None:
        """A 1 Hz tone sampled at 4 Hz visits 0, 1, 0, -1."""
        sig = create_sine_wave(1, 1.0, 1.0, 4)
        np.testing.assert_allclose(sig.samples, [0.0, 1.0, 0.0, -1.0], atol=1e-12)

    def test_floor_of_sample_count(self) -> None:
        """Sample count is floor(duration * sample_rate)."""
        sig = create_sine_wave(100, duration=0.0105, sample_rate=1000)
        assert sig.num_samples == 10

    @pytest.mark.parametrize("duration, rate", [(0.0, 44100), (1.0, 0)])
    def test_empty_signal(self, duration, rate) -> None:
        """Zero duration or zero sample rate yields an empty signal."""
        sig = create_sine_wave(1000, 1.0, duration, rate)
        assert sig.num_samples == 0
        assert sig.samples.dtype == np.float64

    def test_samples_are_read_only(self, sine_1k) -> None:
        """Generated samples cannot be modified in place."""
        with pytest.raises(ValueError):
            sine_1k.samples[0] = 1.0


class TestMultiTone:
    """Superposition of tones."""

    def test_sum_of_components(self) -> None:
        """Output equals the sum of the individual tones."""
        freqs, amps = [100, 300], [1.0, 0.25]
        sig = create_multi_tone(freqs, amps, 0.05, 8000)
        a = create_sine_wave(100, 1.0, 0.05, 8000).samples
        b = create_sine_wave(300, 0.25, 0.05, 8000).samples
        np.testing.assert_allclose(sig.samples, a + b)

    def test_missing_amplitudes_default_to_one(self) -> None:
        """Frequencies without an amplitude use 1.0."""
        sig = create_multi_tone([100, 200], [0.5], 0.05, 8000)
        expected = (
            create_sine_wave(100, 0.5, 0.05, 8000).samples
            + create_sine_wave(200, 1.0, 0.05, 8000).samples
        )
        np.testing.assert_allclose(sig.samples, expected)

    def test_extra_amplitudes_ignored(self) -> None:
        """Amplitudes beyond the frequency list have no effect."""
        sig = create_multi_tone([100], [0.5, 9.0], 0.05, 8000)
        np.testing.assert_allclose(
            sig.samples, create_sine_wave(100, 0.5, 0.05, 8000).samples
        )

    def test_not_normalized(self) -> None:
        """Coherent tones may exceed unit amplitude."""
        sig = create_multi_tone([50, 50, 50], [1.0, 1.0, 1.0], 0.1, 8000)
        assert np.max(np.abs(sig.samples)) == pytest.approx(3.0, rel=1e-3)

    def test_no_frequencies_is_silence(self) -> None:
        """An empty component list yields zeros of the right length."""
        sig = create_multi_tone([], [], 0.01, 8000)
        assert sig.num_samples == 80
        assert np.all(sig.samples == 0.0)


class TestWhiteNoise:
    """Uniform white noise (statistical checks only)."""

    def test_count_and_bounds(self) -> None:
        """44100 samples, each within [-0.1, 0.1]."""
        sig = create_white_noise(0.1, 1.0, 44100)
        assert sig.num_samples == 44100
        assert np.all(np.abs(sig.samples) <= 0.1)

    def test_mean_near_zero(self) -> None:
        """The mean of many samples is close to zero."""
        sig = create_white_noise(1.0, 1.0, 44100)
        # std of the mean is 1/sqrt(3*44100) ~ 0.0027
        assert abs(float(np.mean(sig.samples))) < 0.02

    def test_spread_uses_range(self) -> None:
        """Samples actually spread over most of the range."""
        sig = create_white_noise(1.0, 1.0, 8000)
        assert sig.samples.max() > 0.9
        assert sig.samples.min() < -0.9

    def test_injected_generator(self) -> None:
        """A seeded generator makes the output reproducible."""
        a = create_white_noise(0.5, 0.1, 8000, rng=np.random.default_rng(7))
        b = create_white_noise(0.5, 0.1, 8000, rng=np.random.default_rng(7))
        np.testing.assert_array_equal(a.samples, b.samples)

    def test_empty(self) -> None:
        """Zero duration yields an empty signal."""
        assert create_white_noise(0.1, 0.0, 44100).num_samples == 0


class TestChirp:
    """Linear frequency sweep."""

    def test_instantaneous_frequency_endpoints(self) -> None:
        """f(0) = start and f(duration) = end."""
        assert chirp_frequency(0.0, 100, 400, 1.0) == 100
        assert chirp_frequency(1.0, 100, 400, 1.0) == 400
        assert chirp_frequency(0.5, 100, 400, 1.0) == 250

    def test_instantaneous_frequency_zero_duration(self) -> None:
        """A zero duration returns the start frequency."""
        assert chirp_frequency(0.0, 100, 400, 0.0) == 100

    def test_formula(self) -> None:
        """Samples are sin(2*pi*f(t)*t), not the phase-integral form."""
        sig = create_chirp(100, 400, 1.0, 44100)
        assert sig.num_samples == 44100
        for i in (0, 1, 1000, 22050, 44099):
            t = i / 44100
            expected = np.sin(2 * np.pi * chirp_frequency(t, 100, 400, 1.0) * t)
            assert sig.samples[i] == pytest.approx(expected, abs=1e-9)

    def test_unit_amplitude(self) -> None:
        """The chirp never exceeds unit amplitude."""
        sig = create_chirp(100, 400, 0.5, 8000)
        assert np.all(np.abs(sig.samples) <= 1.0)

    def test_empty(self) -> None:
        """Zero duration yields an empty signal without dividing by zero."""
        sig = create_chirp(100, 400, 0.0, 44100)
        assert sig.num_samples == 0


class TestGenerateSignal:
    """Dispatch from SignalParams."""

    def test_sine(self) -> None:
        """The sine preset matches create_sine_wave."""
        params = SignalParams(kind="sine", frequency=440, amplitude=0.7,
                              duration=0.01, sample_rate=8000)
        np.testing.assert_allclose(
            generate_signal(params).samples,
            create_sine_wave(440, 0.7, 0.01, 8000).samples,
        )

    def test_multitone_harmonics(self) -> None:
        """The multitone preset is f, 2f, 3f at a, 0.5a, 0.3a."""
        params = SignalParams(kind="multitone", frequency=100, amplitude=0.8,
                              duration=0.02, sample_rate=8000)
        expected = create_multi_tone([100, 200, 300], [0.8, 0.4, 0.24], 0.02, 8000)
        np.testing.assert_allclose(generate_signal(params).samples, expected.samples)

    def test_noise(self) -> None:
        """The noise preset uses the amplitude as bound."""
        params = SignalParams(kind="noise", amplitude=0.2, duration=0.1,
                              sample_rate=8000)
        sig = generate_signal(params)
        assert sig.num_samples == 800
        assert np.all(np.abs(sig.samples) <= 0.2)

    def test_chirp_sweeps_to_four_times(self) -> None:
        """The chirp preset sweeps from f to 4f."""
        params = SignalParams(kind="chirp", frequency=100, duration=0.05,
                              sample_rate=8000)
        np.testing.assert_allclose(
            generate_signal(params).samples,
            create_chirp(100, 400, 0.05, 8000).samples,
        )

    def test_unknown_kind(self) -> None:
        """Unknown kinds are rejected when the params are built."""
        with pytest.raises(UnsupportedSignalKind):
            SignalParams(kind="square")

    @pytest.mark.parametrize("field, value", [
        ("frequency", 0.0),
        ("duration", -1.0),
        ("sample_rate", 0.0),
        ("frequency", float("inf")),
        ("duration", float("inf")),
        ("duration", float("nan")),
        ("sample_rate", float("inf")),
        ("sample_rate", float("nan")),
    ])
    def test_out_of_range(self, field, value) -> None:
        """Out-of-range parameters raise InvalidConfig."""
        with pytest.raises(InvalidConfig):
            SignalParams(**{field: value})

    @pytest.mark.parametrize("duration, rate", [
        (float("inf"), 8000),
        (1.0, float("inf")),
        (float("nan"), 8000),
    ])
    def test_non_finite_sample_count(self, duration, rate) -> None:
        """Generators reject a sample count that is not finite."""
        with pytest.raises(InvalidConfig, match="finite sample count"):
            create_sine_wave(440, duration=duration, sample_rate=rate)
