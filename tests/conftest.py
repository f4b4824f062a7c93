"""Shared fixtures for propsync tests."""

import csv
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

import pytest

from propsync.core.models import Grouping, RemoteProperty
from propsync.exceptions import HubSpotAPIError

COLUMNS = [
    "Internal name", "Name", "Type", "Description", "Group name", "Form field",
    "Options", "Read only value", "Calculated", "External options", "Deleted",
    "Hubspot defined",
]


def make_row(name: str, group: str = "leadinfo", **overrides: str) -> Dict[str, str]:
    row = {
        "Internal name": name,
        "Name": name.title(),
        "Type": "string",
        "Description": f"{name} description",
        "Group name": group,
        "Form field": "true",
        "Options": "",
        "Read only value": "false",
        "Calculated": "false",
        "External options": "false",
        "Deleted": "false",
        "Hubspot defined": "false",
    }
    row.update(overrides)
    return row


class FakeHubSpotClient:
    """In-memory stand-in for HubSpotPropertiesClient that records every call."""

    def __init__(self, properties: Optional[Dict[str, Dict[str, Any]]] = None,
                 groups: Optional[List[str]] = None) -> None:
        self.properties: Dict[str, Dict[str, Any]] = dict(properties or {})
        self.groups: List[str] = list(groups or [])
        self.calls: List[tuple] = []
        self.fail_on: Set[tuple] = set()

    def _check(self, *call: Any) -> None:
        self.calls.append(call)
        if call in self.fail_on or call[:1] in self.fail_on:
            raise HubSpotAPIError(f"boom: {call}", status_code=500)

    def calls_named(self, method: str) -> List[tuple]:
        return [c for c in self.calls if c[0] == method]

    def list_groups(self) -> List[Grouping]:
        self._check("list_groups")
        return [Grouping(name=g, displayName=g) for g in self.groups]

    def create_group(self, name: str, display_name: str) -> Dict[str, Any]:
        self._check("create_group", name)
        self.groups.append(name)
        return {"name": name, "displayName": display_name}

    def delete_group(self, name: str) -> None:
        self._check("delete_group", name)
        if name in self.groups:
            self.groups.remove(name)

    def list_properties(self) -> List[RemoteProperty]:
        self._check("list_properties")
        props = [RemoteProperty.model_validate(p) for p in self.properties.values()]
        return [p for p in props if not p.hubspot_defined]

    def get_property(self, name: str) -> Optional[RemoteProperty]:
        self._check("get_property", name)
        data = self.properties.get(name)
        return RemoteProperty.model_validate(data) if data is not None else None

    def create_property(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        self._check("create_property", payload["name"])
        self.properties[payload["name"]] = dict(payload)
        return payload

    def update_property(self, name: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        self._check("update_property", name)
        self.properties[name] = dict(payload)
        return payload

    def delete_property(self, name: str) -> None:
        self._check("delete_property", name)
        self.properties.pop(name, None)


@pytest.fixture
def fake_client() -> FakeHubSpotClient:
    return FakeHubSpotClient()


@pytest.fixture
def write_csv(tmp_path: Path):
    def _write(rows: List[Dict[str, str]], name: str = "properties.csv") -> Path:
        path = tmp_path / name
        with path.open("w", newline="", encoding="utf-8") as fh:
            writer = csv.DictWriter(fh, fieldnames=COLUMNS)
            writer.writeheader()
            writer.writerows(rows)
        return path
    return _write
