"""
HubSpot Properties API integration.
"""

from .client import HubSpotPropertiesClient, create_client_from_config

__all__ = [
    "HubSpotPropertiesClient",
    "create_client_from_config",
]
