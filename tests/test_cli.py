"""Tests for the click command-line interface."""

import pytest
from click.testing import CliRunner

from spectrum_lab.cli import cli
from spectrum_lab.io import load_spectrum_csv


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestAnalyze:
    """The analyze command."""

    def test_default_sine(self, runner, tmp_path) -> None:
        """Default run reports the sine scenario and writes outputs."""
        csv_path = tmp_path / "spec.csv"
        html_path = tmp_path / "spec.html"
        result = runner.invoke(cli, [
            "analyze", "--no-show", "--csv", str(csv_path),
            "--output", str(html_path),
        ])
        assert result.exit_code == 0, result.output
        assert "44,100 samples" in result.output
        assert "512 frequency bins, 43.1 Hz resolution" in result.output
        assert "Peak: 990 Hz" in result.output
        assert html_path.exists()
        assert load_spectrum_csv(csv_path).num_bins == 512

    def test_options_override_config(self, runner, config_yaml, tmp_path) -> None:
        """Command-line options win over the config file."""
        csv_path = tmp_path / "spec.csv"
        result = runner.invoke(cli, [
            "analyze", "--config", str(config_yaml), "--fft-size", "128",
            "--no-show", "--csv", str(csv_path),
        ])
        assert result.exit_code == 0, result.output
        assert "multitone with 4,000 samples" in result.output
        assert "64 frequency bins" in result.output
        assert load_spectrum_csv(csv_path).bin_width_hz == pytest.approx(8000 / 128)

    def test_signal_plot(self, runner, tmp_path) -> None:
        """The time-domain plot is written when requested."""
        out = tmp_path / "signal.html"
        result = runner.invoke(cli, [
            "analyze", "--kind", "chirp", "--duration", "0.05",
            "--no-show", "--signal-output", str(out),
        ])
        assert result.exit_code == 0, result.output
        assert out.exists()

    def test_invalid_fft_size(self, runner) -> None:
        """An invalid size is reported without a traceback."""
        result = runner.invoke(cli, ["analyze", "--fft-size", "1", "--no-show"])
        assert result.exit_code != 0
        assert "fft_size" in result.output

    @pytest.mark.parametrize("option, value", [
        ("--duration", "inf"),
        ("--duration", "nan"),
        ("--sample-rate", "inf"),
    ])
    def test_non_finite_signal_option(self, runner, option, value) -> None:
        """Infinite or NaN signal settings are reported without a traceback."""
        result = runner.invoke(cli, ["analyze", option, value, "--no-show"])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "must be finite" in result.output

    def test_unknown_window_from_config(self, runner, tmp_path) -> None:
        """An unknown window in a config file fails at processing."""
        path = tmp_path / "bad.yaml"
        path.write_text("dsp:\n  window_type: blackman\n", encoding="utf-8")
        result = runner.invoke(cli, ["analyze", "--config", str(path), "--no-show"])
        assert result.exit_code != 0
        assert "Unknown window type" in result.output

    def test_missing_config(self, runner, tmp_path) -> None:
        """A missing config file is a clean error."""
        result = runner.invoke(cli, [
            "analyze", "--config", str(tmp_path / "none.yaml"), "--no-show",
        ])
        assert result.exit_code != 0
        assert "Config file not found" in result.output

    def test_bad_display_range(self, runner) -> None:
        """min_db above max_db is rejected."""
        result = runner.invoke(cli, [
            "analyze", "--min-db", "10", "--max-db", "0", "--no-show",
        ])
        assert result.exit_code != 0
        assert "min_db" in result.output


class TestPlotAndWindow:
    """The plot and window commands."""

    def test_plot_overlay(self, runner, tmp_path) -> None:
        """Saved spectra can be overlaid."""
        first = tmp_path / "first.csv"
        second = tmp_path / "second.csv"
        for path, freq in ((first, "500"), (second, "1500")):
            result = runner.invoke(cli, [
                "analyze", "--frequency", freq, "--fft-size", "256",
                "--transform", "fft", "--no-show", "--csv", str(path),
            ])
            assert result.exit_code == 0, result.output

        out = tmp_path / "overlay.html"
        result = runner.invoke(cli, [
            "plot", str(first), str(second), "--no-show", "--output", str(out),
        ])
        assert result.exit_code == 0, result.output
        assert "128 bins from first" in result.output
        assert out.exists()

    def test_window_coefficients(self, runner) -> None:
        """The window command prints one coefficient per line."""
        result = runner.invoke(cli, ["window", "hanning", "--size", "5"])
        assert result.exit_code == 0, result.output
        lines = result.output.strip().splitlines()
        assert lines == [
            "0\t0.000000",
            "1\t0.500000",
            "2\t1.000000",
            "3\t0.500000",
            "4\t0.000000",
        ]

    def test_window_unknown(self, runner) -> None:
        """Unknown kinds are rejected by click."""
        result = runner.invoke(cli, ["window", "kaiser"])
        assert result.exit_code == 2
