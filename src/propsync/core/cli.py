"""Command line interface for property sync."""

import sys
import logging
from typing import Optional

import click

from .config import setup_logging, load_environment, load_config, get_optional_env
from ..engine.driver import OPERATION_REGISTRY, run_operation, validate_operation
from ..exceptions import ConfigurationError
from ..integrations.hubspot.client import create_client_from_config


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.argument('operation', required=False)
@click.argument('csv_path', required=False)
def cli(operation: Optional[str], csv_path: Optional[str]) -> None:
    """Manage HubSpot properties from a HubSpot property export.

    OPERATION is one of import, delete-properties or delete-groups.
    CSV_PATH is the exported properties file.
    """
    load_environment()
    setup_logging(get_optional_env('PROPSYNC_LOG_LEVEL', 'INFO'))

    try:
        if not operation:
            raise ConfigurationError(
                f"Please provide a command: {', '.join(OPERATION_REGISTRY)}"
            )
        path = validate_operation(operation, csv_path)
        config = load_config()
    except ConfigurationError as e:
        click.echo(f"Configuration Error: {e}", err=True)
        sys.exit(1)

    client = create_client_from_config(config)
    logging.info(f"Managing {config.object_type} properties at {config.base_url}")

    try:
        report = run_operation(operation, path, client, delete_delay=config.delete_delay)
    except Exception as e:
        logging.exception("Unexpected error occurred")
        click.echo(f"Unexpected error: {e}", err=True)
        sys.exit(1)

    summary = report.get_summary()
    click.echo(
        f"{operation}: {summary['success_count']} succeeded, "
        f"{summary['failed_count']} failed, {summary['skipped_count']} skipped"
    )
    if report.failed:
        click.echo(f"Failed: {', '.join(report.failed)}", err=True)


def main() -> None:
    """Main entry point for the CLI."""
    cli()
