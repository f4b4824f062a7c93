"""
Models for workflow results and per-item status tracking.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class ItemStatus(str, Enum):
    """Outcome of a single item in a workflow."""
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    FAILED = "failed"
    SKIPPED = "skipped"


class ItemResult(BaseModel):
    """Outcome of processing one property or group."""
    name: str
    status: ItemStatus
    message: Optional[str] = None


class OperationReport(BaseModel):
    """Aggregated outcome of one workflow run."""
    operation: str
    started_at: datetime = Field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None
    results: List[ItemResult] = Field(default_factory=list)

    def record(self, name: str, status: ItemStatus, message: Optional[str] = None) -> ItemResult:
        """Append the outcome for one item."""
        result = ItemResult(name=name, status=status, message=message)
        self.results.append(result)
        return result

    def mark_completed(self) -> None:
        self.completed_at = datetime.now()

    def names_with(self, *statuses: ItemStatus) -> List[str]:
        return [r.name for r in self.results if r.status in statuses]

    @property
    def failed(self) -> List[str]:
        return self.names_with(ItemStatus.FAILED)

    @property
    def skipped(self) -> List[str]:
        return self.names_with(ItemStatus.SKIPPED)

    @property
    def succeeded(self) -> List[str]:
        return self.names_with(ItemStatus.CREATED, ItemStatus.UPDATED, ItemStatus.DELETED)

    def get_summary(self) -> Dict[str, Any]:
        """Get a summary of the run."""
        return {
            "operation": self.operation,
            "total_items": len(self.results),
            "success_count": len(self.succeeded),
            "failed_count": len(self.failed),
            "skipped_count": len(self.skipped),
            "failed": self.failed,
            "started_at": self.started_at,
            "completed_at": self.completed_at,
        }
