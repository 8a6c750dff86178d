"""Test configuration loading and saving."""

import tomllib
from pathlib import Path

import pytest
from pydantic import ValidationError

from smcmc.core.domain.config import (
    BatchConfig,
    IntervalConfig,
    OutputConfig,
    SmcmcConfig,
    SummaryConfig,
)
from smcmc.io.config import generate_default_config, load_config, save_config


class TestConfigModels:
    """Tests for the pydantic models."""

    def test_defaults(self):
        config = SmcmcConfig()
        assert config.intervals.quantiles == [0.1, 0.9]
        assert config.intervals.alpha == 0.05
        assert config.intervals.method == "monte_carlo"
        assert config.intervals.n_draws == 20_000
        assert config.summary.epsilon == 0.10
        assert config.batching.batch_size is None
        assert config.batching.method == "sqrt"
        assert config.output.directory == Path("Diagnostics")

    @pytest.mark.parametrize("alpha", [0.0, 1.0, 1.5])
    def test_alpha_range(self, alpha):
        with pytest.raises(ValidationError):
            IntervalConfig(alpha=alpha)

    def test_quantiles_in_unit_interval(self):
        with pytest.raises(ValidationError, match=r"\(0, 1\)"):
            SummaryConfig(quantiles=[0.5, 1.2])

    def test_quantiles_unique(self):
        with pytest.raises(ValidationError, match="unique"):
            IntervalConfig(quantiles=[0.1, 0.1])

    def test_quantile_order_kept(self):
        assert IntervalConfig(quantiles=[0.9, 0.1]).quantiles == [0.9, 0.1]

    def test_unknown_keys_rejected(self):
        with pytest.raises(ValidationError):
            BatchConfig(batch_sise=10)

    def test_batch_method(self):
        with pytest.raises(ValidationError):
            BatchConfig(method="median")

    def test_output_formats(self):
        with pytest.raises(ValidationError):
            OutputConfig(formats=["xlsx"])


class TestConfigLoading:
    """Tests for configuration file loading."""

    def test_load_valid_config(self, sample_config_file):
        """Should load valid TOML configuration."""
        config = load_config(sample_config_file)
        assert config.intervals.quantiles == [0.05, 0.5, 0.95]
        assert config.intervals.alpha == 0.1
        assert config.intervals.seed == 7
        assert config.summary.epsilon == 0.05
        assert config.batching.method == "cuberoot"
        assert config.output.directory == Path("Results")
        assert config.output.formats == ["csv"]

    def test_load_nonexistent_file(self, tmp_path):
        """Should raise error for nonexistent file."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "does_not_exist.toml")

    def test_load_invalid_toml(self, tmp_path):
        """Should raise error for invalid TOML syntax."""
        invalid_file = tmp_path / "invalid.toml"
        invalid_file.write_text("not valid toml {{{")
        with pytest.raises(tomllib.TOMLDecodeError):
            load_config(invalid_file)

    def test_load_minimal_config(self, tmp_path):
        """Should load minimal config with defaults."""
        minimal_file = tmp_path / "minimal.toml"
        minimal_file.write_text("")
        assert load_config(minimal_file) == SmcmcConfig()

    def test_unknown_section(self, tmp_path):
        path = tmp_path / "typo.toml"
        path.write_text("[interval]\nalpha = 0.1\n")
        with pytest.raises(ValidationError):
            load_config(path)


class TestConfigSaving:
    """Tests for configuration file saving."""

    def test_save_and_load_roundtrip(self, tmp_path):
        """Should save config that can be loaded back."""
        config = SmcmcConfig(
            intervals=IntervalConfig(quantiles=[0.25, 0.75], seed=3, method="analytic"),
            summary=SummaryConfig(epsilon=0.2),
            batching=BatchConfig(batch_size=25, align_batches=True),
            output=OutputConfig(directory=Path("Out"), formats=["json"]),
        )
        save_path = tmp_path / "roundtrip.toml"
        save_config(config, save_path)
        assert load_config(save_path) == config

    def test_default_config_is_valid(self, tmp_path):
        """The generated default file should load into the default config."""
        path = tmp_path / "default.toml"
        path.write_text(generate_default_config())
        assert load_config(path) == SmcmcConfig()
