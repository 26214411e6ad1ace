"""CLI utilities."""

from pathlib import Path
from typing import Any

import click

from comprel.config.loader import get_database_path, load_config
from comprel.config.models import ComprelConfig
from comprel.core.errors import ConfigError, StoreError
from comprel.core.logging import configure_logging, get_log_file_path


def load_cli_config(project_root: Path, *, verbose: bool = False) -> ComprelConfig:
    """Load project config and configure logging from it.

    Raises:
        click.ClickException: On invalid config files or values
    """
    try:
        config = load_config(project_root)
    except ConfigError as e:
        raise click.ClickException(e.message) from e

    logging_config = config.logging
    if verbose:
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    configure_logging(config=logging_config)
    return config


def resolve_db_path(project_root: Path, db: Path | None, config: ComprelConfig) -> Path:
    """Pick the --db option or the configured database path; it must exist.

    Raises:
        click.ClickException: If the database file does not exist
    """
    db_path = db if db is not None else get_database_path(project_root, config)
    if not db_path.is_file():
        raise click.ClickException(
            StoreError.not_found(str(db_path)).message
            + "\nPass --db PATH or set database.path in .comprel/config.yaml."
        )
    return db_path


def failure_exception(result: dict[str, Any]) -> click.ClickException:
    """ClickException for a failed ops result; store failures point at the log file."""
    message = result["error"]
    log_file = get_log_file_path()
    if result.get("error_code") == "STORE_QUERY_FAILED" and log_file is not None:
        message += f"\nSee {log_file} for details."
    return click.ClickException(message)
