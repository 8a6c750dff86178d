"""Integration tests for CLI commands."""

import json

import numpy as np
import pytest
from typer.testing import CliRunner

from smcmc.cli.app import app


@pytest.fixture
def runner():
    """Create a CLI runner."""
    return CliRunner()


class TestCLICommands:
    """Test CLI command invocation."""

    def test_app_no_args(self, runner):
        """CLI with no args should show help."""
        result = runner.invoke(app, [])
        assert result.exit_code in [0, 2]
        assert "Usage" in result.output

    def test_version_flag(self, runner):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "smcmc" in result.output

    def test_help_lists_commands(self, runner):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("summary", "intervals", "plot", "init", "info"):
            assert command in result.output

    def test_info_command(self, runner):
        result = runner.invoke(app, ["info"])
        assert result.exit_code == 0
        assert "NumPy" in result.output


class TestInitCommand:
    """Tests for smcmc init."""

    def test_creates_config(self, runner, tmp_path):
        path = tmp_path / "smcmc.toml"
        result = runner.invoke(app, ["init", str(path)])
        assert result.exit_code == 0
        assert "[intervals]" in path.read_text()

    def test_refuses_overwrite(self, runner, tmp_path):
        path = tmp_path / "smcmc.toml"
        path.write_text("# mine\n")
        result = runner.invoke(app, ["init", str(path)])
        assert result.exit_code == 1
        assert path.read_text() == "# mine\n"

    def test_force(self, runner, tmp_path):
        path = tmp_path / "smcmc.toml"
        path.write_text("# mine\n")
        assert runner.invoke(app, ["init", str(path), "--force"]).exit_code == 0
        assert "[summary]" in path.read_text()


class TestAnalysisCommands:
    """Tests for summary, intervals and plot."""

    def test_summary(self, runner, chain_files, tmp_path):
        out = tmp_path / "out"
        args = ["summary", *map(str, chain_files), "--names", "a,b", "-o", str(out)]
        result = runner.invoke(app, args)
        assert result.exit_code == 0, result.output
        assert "ESS" in result.output
        assert (out / "summary.json").exists()
        assert (out / "summary.csv").exists()

    def test_intervals_json(self, runner, chain_files, tmp_path):
        out = tmp_path / "out"
        args = [
            "intervals",
            *map(str, chain_files),
            "--quantiles",
            "0.25,0.75",
            "--seed",
            "3",
            "--draws",
            "2000",
            "-o",
            str(out),
            "--format",
            "json",
        ]
        result = runner.invoke(app, args)
        assert result.exit_code == 0, result.output
        data = json.loads((out / "intervals.json").read_text())
        assert data["quantile_levels"] == [0.25, 0.75]
        assert not (out / "intervals.csv").exists()

    def test_intervals_with_config(self, runner, chain_files, sample_config_file, tmp_path):
        out = tmp_path / "out"
        args = ["intervals", *map(str, chain_files), "-c", str(sample_config_file), "-o", str(out)]
        result = runner.invoke(app, args)
        assert result.exit_code == 0, result.output
        assert (out / "intervals.csv").exists()
        assert not (out / "intervals.json").exists()

    def test_bad_quantiles(self, runner, chain_files):
        result = runner.invoke(app, ["intervals", str(chain_files[0]), "-q", "0.5,1.5"])
        assert result.exit_code == 2

    def test_invalid_method(self, runner, chain_files):
        result = runner.invoke(app, ["intervals", str(chain_files[0]), "--method", "bootstrap"])
        assert result.exit_code == 1

    def test_unsupported_file(self, runner, tmp_path):
        path = tmp_path / "chain.txt"
        path.write_text("1 2 3\n")
        result = runner.invoke(app, ["summary", str(path)])
        assert result.exit_code == 1

    def test_width_mismatch(self, runner, tmp_path):
        rng = np.random.default_rng(0)
        first, second = tmp_path / "a.npy", tmp_path / "b.npy"
        np.save(first, rng.standard_normal((100, 2)))
        np.save(second, rng.standard_normal((100, 3)))
        result = runner.invoke(app, ["summary", str(first), str(second)])
        assert result.exit_code == 1

    @pytest.mark.slow
    def test_plot(self, runner, chain_files, tmp_path):
        output = tmp_path / "report.pdf"
        args = ["plot", *map(str, chain_files), "--seed", "1", "--output", str(output)]
        result = runner.invoke(app, args)
        assert result.exit_code == 0, result.output
        assert output.read_bytes().startswith(b"%PDF")

    @pytest.mark.slow
    def test_plot_with_fixed_parameter(self, runner, tmp_path):
        rng = np.random.default_rng(1)
        path = tmp_path / "fixed.npy"
        np.save(path, np.column_stack([rng.standard_normal(500), np.zeros(500)]))
        output = tmp_path / "fixed.pdf"
        result = runner.invoke(app, ["plot", str(path), "--output", str(output)])
        assert result.exit_code == 0, result.output
        assert "without intervals" in result.output
        assert output.exists()

    def test_log_file_records_configuration(self, runner, chain_files, tmp_path):
        log_file = tmp_path / "summary.log"
        args = ["summary", str(chain_files[0]), "--epsilon", "0.05", "--log-file", str(log_file)]
        result = runner.invoke(app, args)
        assert result.exit_code == 0, result.output
        text = log_file.read_text()
        assert "=== CONFIGURATION ===" in text
        assert "[summary]" in text
        assert "- epsilon: 0.05" in text
