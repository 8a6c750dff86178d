"""Input/output: chain files, configuration and result writers."""

from smcmc.io.chains import SUPPORTED_SUFFIXES, load_chains
from smcmc.io.config import generate_default_config, load_config, save_config

__all__ = [
    "SUPPORTED_SUFFIXES",
    "generate_default_config",
    "load_chains",
    "load_config",
    "save_config",
]
