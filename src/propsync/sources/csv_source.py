"""CSV reader for HubSpot property exports."""

import csv
import logging
from pathlib import Path
from typing import Dict, Iterator, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..core.models import FieldDefinition, TEXT_FIELD_TYPE, TEXTAREA_FIELD_TYPE
from ..exceptions import RecordError

logger = logging.getLogger(__name__)

INTERNAL_NAME_COLUMN = "Internal name"
GROUP_NAME_COLUMN = "Group name"
HUBSPOT_DEFINED_COLUMN = "Hubspot defined"
CSV_ENCODING = 'utf-8-sig'


def is_true(value: Optional[str]) -> bool:
    """Export booleans are the strings "true" and "false"."""
    return isinstance(value, str) and value.strip().lower() == "true"


def is_hubspot_defined(row: Dict[str, str]) -> bool:
    """Whether a raw row describes a property owned by HubSpot itself."""
    return is_true(row.get(HUBSPOT_DEFINED_COLUMN))


def check_readable(path: Union[str, Path]) -> None:
    """Decode the whole export up front so a bad file fails before any request.

    Raises:
        RecordError: If the file cannot be opened or is not valid UTF-8
    """
    path = Path(path)
    try:
        with path.open(encoding=CSV_ENCODING) as fh:
            while fh.read(65536):
                pass
    except UnicodeDecodeError as e:
        raise RecordError(f"{path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise RecordError(f"Cannot read {path}: {e}") from e


def iter_rows(path: Union[str, Path]) -> Iterator[Dict[str, str]]:
    """Yield raw rows from a property export, one dict per line.

    The file is opened on each call so the sequence can be restarted by
    calling again.
    """
    path = Path(path)
    logger.debug(f"Reading rows from {path}")
    with path.open(newline='', encoding=CSV_ENCODING) as fh:
        reader = csv.DictReader(fh)
        for row in reader:
            yield row


class PropertyRow(BaseModel):
    """One row of a HubSpot property export, keyed by its column headers."""
    model_config = ConfigDict(extra='ignore')

    internal_name: str = Field("", alias=INTERNAL_NAME_COLUMN)
    name: str = Field("", alias="Name")
    type: str = Field("", alias="Type")
    description: str = Field("", alias="Description")
    group_name: str = Field("", alias=GROUP_NAME_COLUMN)
    form_field: bool = Field(False, alias="Form field")
    options: Optional[str] = Field(None, alias="Options")
    read_only_value: bool = Field(False, alias="Read only value")
    calculated: bool = Field(False, alias="Calculated")
    external_options: bool = Field(False, alias="External options")
    deleted: bool = Field(False, alias="Deleted")
    hubspot_defined: bool = Field(False, alias=HUBSPOT_DEFINED_COLUMN)

    @field_validator('internal_name', 'name', 'type', 'description', 'group_name', mode='before')
    @classmethod
    def none_to_empty(cls, v):
        # DictReader fills short rows with None
        return "" if v is None else v

    @field_validator(
        'form_field', 'read_only_value', 'calculated', 'external_options', 'deleted', 'hubspot_defined',
        mode='before'
    )
    @classmethod
    def parse_bool_string(cls, v):
        if isinstance(v, bool):
            return v
        return is_true(v)

    def to_definition(self) -> FieldDefinition:
        """Map the row into a property definition."""
        return FieldDefinition(
            name=self.internal_name,
            label=self.name,
            type=self.type or "string",
            description=self.description,
            group_name=self.group_name,
            field_type=TEXT_FIELD_TYPE if self.form_field else TEXTAREA_FIELD_TYPE,
            options=self.options,
            read_only=self.read_only_value,
            calculated=self.calculated,
            external_options=self.external_options,
            deleted=self.deleted,
            hubspot_defined=self.hubspot_defined,
        )


def row_to_definition(row: Dict[str, str]) -> FieldDefinition:
    """Convert a raw export row into a FieldDefinition.

    Raises:
        RecordError: If a required column is missing or malformed
    """
    try:
        return PropertyRow.model_validate(row).to_definition()
    except ValidationError as e:
        label = row.get(INTERNAL_NAME_COLUMN) or "<unnamed>"
        raise RecordError(f"Invalid row for property {label}: {e}") from e
