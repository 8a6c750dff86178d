"""CLI command modules for smcmc.

Each module exports one command function; app.py registers them.
"""

from smcmc.cli.commands.info import info_command
from smcmc.cli.commands.init import init_command
from smcmc.cli.commands.intervals import intervals_command
from smcmc.cli.commands.plot import plot_command
from smcmc.cli.commands.summary import summary_command

__all__ = [
    "info_command",
    "init_command",
    "intervals_command",
    "plot_command",
    "summary_command",
]
