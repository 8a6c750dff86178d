"""Configuration file loading and saving."""

import tomllib
from pathlib import Path

import tomli_w

from smcmc.core.domain.config import SmcmcConfig


def load_config(path: Path) -> SmcmcConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the TOML configuration file.

    Returns:
        SmcmcConfig: Validated configuration object.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        pydantic.ValidationError: If the configuration is invalid.
    """
    if not path.exists():
        msg = f"Configuration file not found: {path}"
        raise FileNotFoundError(msg)

    with path.open("rb") as f:
        data = tomllib.load(f)

    return SmcmcConfig.model_validate(data)


def save_config(config: SmcmcConfig, path: Path) -> None:
    """Save configuration to a TOML file.

    Args:
        config: Configuration object to save.
        path: Path where to save the TOML file.
    """
    data = config.model_dump(mode="json", exclude_none=True)

    with path.open("wb") as f:
        tomli_w.dump(data, f)


def generate_default_config() -> str:
    """Generate a default configuration file as a string.

    Returns:
        str: TOML-formatted default configuration.
    """
    return """# smcmc configuration file
# Generated automatically - edit as needed

[intervals]
quantiles = [0.1, 0.9]
alpha = 0.05
include_means = true
method = "monte_carlo"  # monte_carlo or analytic
n_draws = 20000
# seed = 42  # Uncomment for reproducible critical values

[summary]
epsilon = 0.10
alpha = 0.05
quantiles = [0.1, 0.9]

[batching]
# batch_size = 50  # Uncomment to fix the batch size
method = "sqrt"  # sqrt, cuberoot, ar1
align_batches = false

[output]
directory = "Diagnostics"
formats = ["json", "csv"]
save_figures = true
log_format = "text"
"""
