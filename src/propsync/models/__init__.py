"""
Result models for propsync workflows.
"""

from .sync import ItemResult, ItemStatus, OperationReport

__all__ = [
    "ItemResult",
    "ItemStatus",
    "OperationReport",
]
