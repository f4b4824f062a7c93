"""Data models for property sync."""

import json
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ..exceptions import RecordError

# Widget kinds a row can map to; "Form field" = true selects the free-text widget
TEXT_FIELD_TYPE = "text"
TEXTAREA_FIELD_TYPE = "textarea"


class FieldDefinition(BaseModel):
    """A property definition reconstructed from one export row."""
    name: str = Field(..., min_length=1, description="Internal name, the only remote identifier")
    label: str = ""
    type: str = Field("string", description="Underlying storage type")
    description: str = ""
    group_name: str = Field(..., min_length=1, description="Name of the property group this belongs to")
    field_type: str = TEXTAREA_FIELD_TYPE
    options: Optional[str] = Field(None, description="Serialized JSON choice list")
    read_only: bool = False
    calculated: bool = False
    external_options: bool = False
    deleted: bool = False
    hubspot_defined: bool = False

    @field_validator('name', 'group_name', mode='before')
    @classmethod
    def strip_identifier(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('options', mode='before')
    @classmethod
    def blank_options_to_none(cls, v):
        # Export leaves the column empty for non-enumerated fields
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return v

    @property
    def form_field(self) -> bool:
        return self.field_type == TEXT_FIELD_TYPE

    def parsed_options(self) -> Optional[List[Dict[str, Any]]]:
        """Decode the serialized option list.

        Raises:
            RecordError: If the options column is not valid JSON
        """
        if self.options is None:
            return None
        try:
            return json.loads(self.options)
        except ValueError as e:
            raise RecordError(f"Malformed options for property {self.name}: {e}") from e

    def to_payload(self) -> Dict[str, Any]:
        """Build the request body used for both create and update."""
        payload = {
            "name": self.name,
            "label": self.label,
            "description": self.description,
            "groupName": self.group_name,
            "type": self.type,
            "fieldType": self.field_type,
            "formField": self.form_field,
        }
        options = self.parsed_options()
        if options is not None:
            payload["options"] = options
        return payload


class Grouping(BaseModel):
    """A property group as returned by the groups endpoint."""
    model_config = ConfigDict(populate_by_name=True, extra='allow')

    name: str
    display_name: Optional[str] = Field(None, alias='displayName')


class RemoteProperty(BaseModel):
    """The parts of a remote property definition the workflows read back."""
    model_config = ConfigDict(populate_by_name=True, extra='allow')

    name: str
    read_only: bool = Field(False, validation_alias=AliasChoices('readOnlyValue', 'readOnly', 'read_only'))
    hubspot_defined: bool = Field(False, validation_alias=AliasChoices('hubspotDefined', 'hubspot_defined'))

    @field_validator('read_only', 'hubspot_defined', mode='before')
    @classmethod
    def none_to_false(cls, v):
        # Custom properties come back with hubspotDefined null
        return bool(v) if v is not None else False
