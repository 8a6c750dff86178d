"""Helpers shared by the CLI commands."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError

from smcmc.core.domain.chains import ChainSet
from smcmc.core.domain.config import SmcmcConfig
from smcmc.core.shared.exceptions import DataIOError, SmcmcError
from smcmc.io import load_chains, load_config
from smcmc.services import ReportService
from smcmc.ui import (
    close_logging,
    log,
    log_dict,
    log_section,
    setup_logging,
    show_error_with_details,
    show_file_not_found,
)

logger = logging.getLogger(__name__)


def build_config(path: Path | None, overrides: dict[str, dict[str, Any]]) -> SmcmcConfig:
    """Load ``path`` (or defaults) and apply the CLI options that were given.

    ``overrides`` maps a section name to its options; None values are
    skipped so that unset options keep the file's values.
    """
    config = load_config(path) if path is not None else SmcmcConfig()
    data = config.model_dump()
    for section, values in overrides.items():
        data[section].update({k: v for k, v in values.items() if v is not None})
    resolved = SmcmcConfig.model_validate(data)

    log_section("Configuration")
    for section, values in resolved.model_dump(mode="json").items():
        log(f"[{section}]")
        log_dict(values)
    return resolved


def load_chain_set(
    paths: Sequence[Path],
    names: list[str] | None,
    service: ReportService,
) -> ChainSet:
    chains = load_chains(paths, names)
    chain_set = service.resolve(chains)
    logger.info(
        "loaded %d chain(s) with %d component(s); batch size %d",
        chain_set.n_chains,
        chain_set.n_dim,
        chain_set.batch_size,
    )
    return chain_set


@contextmanager
def command_session(
    context: str,
    verbose: bool = False,
    log_file: Path | None = None,
    log_format: str = "text",
) -> Iterator[None]:
    """Configure logging for one command and turn library errors into exit code 1."""
    setup_logging(log_file, verbose=verbose, log_format=log_format)
    try:
        yield
    except FileNotFoundError as exc:
        show_file_not_found(Path(exc.filename or str(exc)))
        raise typer.Exit(1) from exc
    except DataIOError as exc:
        show_error_with_details(context, exc, "Use .npy, .npz or .csv chain files")
        raise typer.Exit(1) from exc
    except tomllib.TOMLDecodeError as exc:
        show_error_with_details(context, exc, "Check the TOML syntax of the configuration file")
        raise typer.Exit(1) from exc
    except ValidationError as exc:
        show_error_with_details(context, exc, "Check the configuration file")
        raise typer.Exit(1) from exc
    except SmcmcError as exc:
        show_error_with_details(context, exc)
        raise typer.Exit(1) from exc
    finally:
        close_logging()
