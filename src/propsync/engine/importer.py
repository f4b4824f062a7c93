"""
Import workflow: create or update properties listed in an export.
"""

import logging
from typing import Dict, Iterable

from ..core.models import FieldDefinition
from ..exceptions import HubSpotAPIError, RecordError
from ..integrations.hubspot.client import HubSpotPropertiesClient
from ..models.sync import ItemStatus, OperationReport
from ..sources.csv_source import INTERNAL_NAME_COLUMN, is_hubspot_defined, row_to_definition

logger = logging.getLogger(__name__)


class PropertyImporter:
    """
    Reconciles exported property definitions against HubSpot.

    Each custom row is created when HubSpot does not know the property and
    replaced by name when it does. The row's property group is created first
    if it is missing.
    """

    def __init__(self, client: HubSpotPropertiesClient):
        self.client = client

    def run(self, rows: Iterable[Dict[str, str]]) -> OperationReport:
        """
        Import every non HubSpot-defined row, in input order.

        Args:
            rows: Raw export rows

        Returns:
            OperationReport with one result per imported row
        """
        report = OperationReport(operation="import")
        candidates = [row for row in rows if not is_hubspot_defined(row)]
        total = len(candidates)
        logger.info(f"Found {total} properties to import.")

        for index, row in enumerate(candidates, start=1):
            label = row.get(INTERNAL_NAME_COLUMN) or "<unnamed>"
            logger.info(f"Processing property {index} of {total}: {label}")
            try:
                definition = row_to_definition(row)
            except RecordError as e:
                logger.error(str(e))
                report.record(label, ItemStatus.FAILED, str(e))
                continue

            self.ensure_group(definition.group_name)
            self.create_or_update(definition, report)

        report.mark_completed()
        logger.info(f"Import completed: {len(report.succeeded)} succeeded, {len(report.failed)} failed.")
        return report

    def ensure_group(self, group_name: str) -> bool:
        """Create the property group if HubSpot does not have it yet.

        Failures are logged and reported as False, never raised.
        """
        try:
            groups = self.client.list_groups()
            if any(group.name == group_name for group in groups):
                return True
            self.client.create_group(group_name, group_name)
            logger.info(f"Created property group: {group_name}")
            return True
        except HubSpotAPIError as e:
            logger.error(f"Error with property group {group_name}: {e}")
            return False

    def create_or_update(self, definition: FieldDefinition, report: OperationReport) -> bool:
        """Create the property, or replace it by name if it already exists."""
        name = definition.name
        try:
            payload = definition.to_payload()
            existing = self.client.get_property(name)
            if existing is None:
                self.client.create_property(payload)
                status = ItemStatus.CREATED
            else:
                self.client.update_property(name, payload)
                status = ItemStatus.UPDATED
        except (HubSpotAPIError, RecordError) as e:
            logger.error(f"Error processing property {name}: {e}")
            report.record(name, ItemStatus.FAILED, str(e))
            return False

        logger.info(f"{status.value.capitalize()} property: {name}")
        report.record(name, status)
        return True
