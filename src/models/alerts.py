"""Expiration severity and alert result models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Any

from .inventory import InventoryRecord


class Severity(str, Enum):
    """Urgency bucket of a stock record based on days until expiration."""

    EXPIRED = "expired"
    CRITICAL = "critical"
    NEAR_TERM = "near_term"
    NORMAL = "normal"


@dataclass
class AlertPartition:
    """Records split into already-expired and nearing-expiration buckets."""

    window_days: int
    expired: List[InventoryRecord] = field(default_factory=list)
    nearing: List[InventoryRecord] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.expired) + len(self.nearing)

    @property
    def is_empty(self) -> bool:
        return self.total == 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "window_days": self.window_days,
            "expired": [record.to_dict() for record in self.expired],
            "nearing": [record.to_dict() for record in self.nearing],
            "total": self.total
        }

    def get_summary(self) -> str:
        """Get a human-readable summary."""
        return "\n".join([
            f"Already expired: {len(self.expired)}",
            f"Nearing expiration (next {self.window_days} days): {len(self.nearing)}",
            f"Total alerts: {self.total}"
        ])
