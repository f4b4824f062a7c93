"""
Bulk deletion workflows for properties and property groups.
"""

import logging
import time
from typing import Callable, Dict, Iterable, List, Optional, Set

from ..core.config import DEFAULT_DELETE_DELAY
from ..exceptions import HubSpotAPIError
from ..integrations.hubspot.client import HubSpotPropertiesClient
from ..models.sync import ItemStatus, OperationReport
from ..sources.csv_source import GROUP_NAME_COLUMN, INTERNAL_NAME_COLUMN, is_hubspot_defined

logger = logging.getLogger(__name__)


def unique_values(rows: Iterable[Dict[str, str]], column: str,
                  skip_hubspot_defined: bool = False) -> List[str]:
    """Distinct non-blank values of a column, in order of first occurrence."""
    values: Dict[str, None] = {}
    for row in rows:
        if skip_hubspot_defined and is_hubspot_defined(row):
            continue
        value = (row.get(column) or "").strip()
        if not value:
            logger.warning(f"Skipping row with empty '{column}'")
            continue
        values.setdefault(value, None)
    return list(values)


class PropertyDeleter:
    """
    Deletes the custom properties listed in an export.

    Targets are checked against a single snapshot of HubSpot's custom
    properties taken before the first deletion. Read-only properties are
    never deleted and are reported as failures.
    """

    def __init__(self, client: HubSpotPropertiesClient, delay: float = DEFAULT_DELETE_DELAY,
                 sleep: Optional[Callable[[float], None]] = None):
        self.client = client
        self.delay = delay
        self.sleep = sleep or time.sleep

    def _custom_property_names(self) -> Set[str]:
        logger.info("Fetching all custom properties...")
        try:
            properties = self.client.list_properties()
        except HubSpotAPIError as e:
            logger.error(f"Error fetching custom properties: {e}")
            return set()
        logger.info(f"Found {len(properties)} custom properties.")
        return {prop.name for prop in properties}

    def run(self, rows: Iterable[Dict[str, str]]) -> OperationReport:
        """
        Delete every distinct non HubSpot-defined property named in the rows.

        Returns:
            OperationReport whose failed names include protected properties
        """
        report = OperationReport(operation="delete-properties")
        custom_names = self._custom_property_names()
        targets = unique_values(rows, INTERNAL_NAME_COLUMN, skip_hubspot_defined=True)
        total = len(targets)
        logger.info(f"Found {total} properties to delete.")

        for index, name in enumerate(targets, start=1):
            logger.info(f"Processing deletion {index} of {total}: {name}")
            if name not in custom_names:
                logger.info(f"Property not found in custom properties: {name}")
                report.record(name, ItemStatus.SKIPPED, "not found")
                continue

            self.delete_one(name, report)
            # HubSpot rate limit
            self.sleep(self.delay)

        report.mark_completed()
        if report.failed:
            logger.error(f"Failed to delete the following properties: {report.failed}")
        logger.info("Property deletion completed.")
        return report

    def delete_one(self, name: str, report: OperationReport) -> bool:
        """Delete a single property unless it is read-only."""
        try:
            details = self.client.get_property(name)
        except HubSpotAPIError as e:
            logger.error(f"Error fetching property {name}: {e}")
            details = None

        if details is None or details.read_only:
            logger.info(f"Skipping read-only or non-existent property: {name}")
            report.record(name, ItemStatus.FAILED, "read-only or non-existent")
            return False

        try:
            self.client.delete_property(name)
        except HubSpotAPIError as e:
            logger.error(f"Error deleting property {name}: {e}")
            report.record(name, ItemStatus.FAILED, str(e))
            return False

        logger.info(f"Deleted property: {name}")
        report.record(name, ItemStatus.DELETED)
        return True


class GroupDeleter:
    """Deletes every property group named anywhere in an export."""

    def __init__(self, client: HubSpotPropertiesClient):
        self.client = client

    def run(self, rows: Iterable[Dict[str, str]]) -> OperationReport:
        report = OperationReport(operation="delete-groups")
        # Group targets ignore the Hubspot defined column
        groups = unique_values(rows, GROUP_NAME_COLUMN)
        total = len(groups)
        logger.info(f"Found {total} groups to delete.")

        for index, group_name in enumerate(groups, start=1):
            logger.info(f"Processing group deletion {index} of {total}: {group_name}")
            try:
                self.client.delete_group(group_name)
            except HubSpotAPIError as e:
                logger.error(f"Error deleting group {group_name}: {e}")
                report.record(group_name, ItemStatus.FAILED, str(e))
                continue
            logger.info(f"Deleted group: {group_name}")
            report.record(group_name, ItemStatus.DELETED)

        report.mark_completed()
        if report.failed:
            logger.error(f"Failed to delete the following groups: {report.failed}")
        logger.info("Group deletion completed.")
        return report
