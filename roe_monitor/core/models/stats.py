"""Statistics summary model."""

from dataclasses import dataclass, field
from typing import Dict


@dataclass
class StatsSummary:
    """Per-channel arithmetic means over a point subset."""

    name: str
    means: Dict[str, float] = field(default_factory=dict)
    count: int = 0

    def mean(self, channel: str) -> float:
        """Mean for a channel, 0 when nothing was averaged."""
        return self.means.get(channel, 0.0)

    @property
    def is_empty(self) -> bool:
        return self.count == 0
