"""Command line interface for smcmc."""

from smcmc.cli.app import app

__all__ = ["app"]
