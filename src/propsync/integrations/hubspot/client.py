"""HubSpot Properties API client for property and property group operations."""

import logging
from typing import Any, Dict, List, Optional, Type, TypeVar
from urllib.parse import quote

import requests
from pydantic import BaseModel, ValidationError

from ... import __version__
from ...core.config import HubSpotConfig
from ...core.models import Grouping, RemoteProperty
from ...exceptions import HubSpotAPIError

logger = logging.getLogger(__name__)

ModelT = TypeVar('ModelT', bound=BaseModel)


class HubSpotPropertiesClient:
    """Client for the HubSpot Properties v1 API of a single object type."""

    def __init__(self, api_key: str, base_url: str = "https://api.hubapi.com",
                 object_type: str = "contacts", timeout: float = 30.0):
        """Initialize the HubSpot client.

        Args:
            api_key: Private app token, sent as a bearer credential
            base_url: Base URL for HubSpot API
            object_type: Object type whose properties are managed (contacts, companies, deals...)
            timeout: Per-request timeout in seconds
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.object_type = object_type
        self.timeout = timeout

        # One attempt per call; failures are reported per item by the workflows
        self.session = requests.Session()
        self.session.headers.update({
            'Authorization': f'Bearer {self.api_key}',
            'Content-Type': 'application/json',
            'User-Agent': f'propsync/{__version__}'
        })

    @property
    def properties_endpoint(self) -> str:
        return f"/properties/v1/{self.object_type}/properties"

    @property
    def groups_endpoint(self) -> str:
        return f"/properties/v1/{self.object_type}/groups"

    def _named_property_endpoint(self, name: str) -> str:
        return f"{self.properties_endpoint}/named/{quote(name, safe='')}"

    def _make_request(self, method: str, endpoint: str, data: Optional[Any] = None) -> Any:
        """Make a request to the HubSpot API.

        Args:
            method: HTTP method
            endpoint: API endpoint
            data: Request body data

        Returns:
            JSON response data

        Raises:
            HubSpotAPIError: If the API request fails
        """
        url = f"{self.base_url}{endpoint}"

        try:
            logger.debug(f"Making {method} request to {url}")
            response = self.session.request(method, url, json=data, timeout=self.timeout)
            response.raise_for_status()

            # DELETE returns 204 with no body
            if response.content:
                return response.json()
            return {}

        except requests.exceptions.RequestException as e:
            if getattr(e, 'response', None) is not None:
                status = e.response.status_code
                try:
                    error_data = e.response.json()
                    message = f"{status} - {error_data}"
                except ValueError:
                    message = f"HTTP {status}: {e.response.text}"
                raise HubSpotAPIError(message, status_code=status, response=e.response) from e
            raise HubSpotAPIError(f"Request failed: {str(e)}") from e

    def _parse(self, model: Type[ModelT], data: Any) -> ModelT:
        """Validate one response entry, reporting shape mismatches as API errors."""
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise HubSpotAPIError(f"Unexpected response: {e}") from e

    # Property groups

    def list_groups(self) -> List[Grouping]:
        """List all property groups of the object type."""
        data = self._make_request('GET', self.groups_endpoint)
        return [self._parse(Grouping, group) for group in data]

    def create_group(self, name: str, display_name: str) -> Dict[str, Any]:
        """Create a property group."""
        return self._make_request('POST', self.groups_endpoint,
                                  data={"name": name, "displayName": display_name})

    def delete_group(self, name: str) -> None:
        """Delete a property group by name."""
        self._make_request('DELETE', f"{self.groups_endpoint}/named/{quote(name, safe='')}")

    # Properties

    def list_properties(self) -> List[RemoteProperty]:
        """List the custom (non HubSpot-defined) properties of the object type."""
        data = self._make_request('GET', self.properties_endpoint)
        properties = [self._parse(RemoteProperty, prop) for prop in data]
        return [prop for prop in properties if not prop.hubspot_defined]

    def get_property(self, name: str) -> Optional[RemoteProperty]:
        """Get a property by name.

        Returns:
            The property, or None if HubSpot reports it does not exist

        Raises:
            HubSpotAPIError: For any failure other than not-found
        """
        try:
            data = self._make_request('GET', self._named_property_endpoint(name))
        except HubSpotAPIError as e:
            if e.status_code == 404:
                return None
            raise
        return self._parse(RemoteProperty, data)

    def create_property(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Create a property."""
        return self._make_request('POST', self.properties_endpoint, data=payload)

    def update_property(self, name: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Replace a property's definition, addressed by name."""
        return self._make_request('PUT', self._named_property_endpoint(name), data=payload)

    def delete_property(self, name: str) -> None:
        """Delete a property by name."""
        self._make_request('DELETE', self._named_property_endpoint(name))


def create_client_from_config(config: HubSpotConfig) -> HubSpotPropertiesClient:
    """Create a HubSpot client from a loaded configuration.

    Returns:
        Configured HubSpotPropertiesClient instance
    """
    return HubSpotPropertiesClient(
        api_key=config.api_key,
        base_url=config.base_url,
        object_type=config.object_type,
        timeout=config.timeout,
    )
