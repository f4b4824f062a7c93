"""
Workflows that reconcile property exports with HubSpot.
"""

from .deleter import GroupDeleter, PropertyDeleter
from .driver import OPERATION_REGISTRY, run_operation, validate_operation
from .importer import PropertyImporter

__all__ = [
    "GroupDeleter",
    "OPERATION_REGISTRY",
    "PropertyDeleter",
    "PropertyImporter",
    "run_operation",
    "validate_operation",
]
