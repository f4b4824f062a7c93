"""
Dispatch a named operation to its workflow.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from ..core.config import DEFAULT_DELETE_DELAY
from ..exceptions import ConfigurationError, RecordError
from ..integrations.hubspot.client import HubSpotPropertiesClient
from ..models.sync import OperationReport
from ..sources.csv_source import check_readable, iter_rows
from .deleter import GroupDeleter, PropertyDeleter
from .importer import PropertyImporter

logger = logging.getLogger(__name__)

IMPORT = "import"
DELETE_PROPERTIES = "delete-properties"
DELETE_GROUPS = "delete-groups"

# Workflow factories keyed by operation name, called as factory(client, delete_delay)
OPERATION_REGISTRY = {
    IMPORT: lambda client, delay: PropertyImporter(client),
    DELETE_PROPERTIES: lambda client, delay: PropertyDeleter(client, delay=delay),
    DELETE_GROUPS: lambda client, delay: GroupDeleter(client),
}


def validate_operation(operation: str, path: Optional[Union[str, Path]]) -> Path:
    """Check an operation request before anything touches HubSpot.

    Raises:
        ConfigurationError: If the operation is unknown, or the path is missing,
            unreadable or not UTF-8
    """
    if operation not in OPERATION_REGISTRY:
        raise ConfigurationError(
            f"Invalid command {operation!r}. Use one of: {', '.join(OPERATION_REGISTRY)}"
        )
    if not path:
        raise ConfigurationError("Please provide a CSV file path")
    csv_path = Path(path)
    if not csv_path.is_file():
        raise ConfigurationError(f"CSV file not found: {csv_path}")
    try:
        check_readable(csv_path)
    except RecordError as e:
        raise ConfigurationError(str(e)) from e
    return csv_path


def run_operation(operation: str, path: Union[str, Path], client: HubSpotPropertiesClient,
                  delete_delay: float = DEFAULT_DELETE_DELAY) -> OperationReport:
    """Run one workflow over the rows of a CSV export.

    Args:
        operation: import, delete-properties or delete-groups
        path: CSV export to read
        client: HubSpot client for the target object type
        delete_delay: Pause between property deletions

    Returns:
        The workflow's OperationReport
    """
    csv_path = validate_operation(operation, path)
    workflow = OPERATION_REGISTRY[operation](client, delete_delay)
    logger.info(f"Starting {operation} from file: {csv_path}")
    return workflow.run(iter_rows(csv_path))
