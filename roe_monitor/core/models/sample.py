"""Resampling models: bucket plans, samples and chart datasets."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from .stats import StatsSummary
from .window import TimeWindow


class AggregationMode(Enum):
    """How points inside one bucket collapse to a single value."""

    LAST = "last"
    AVERAGE = "average"


@dataclass(frozen=True)
class BucketPlan:
    """Bucket width and aggregation mode chosen for a time span."""

    bucket_hours: int
    mode: AggregationMode


@dataclass(frozen=True)
class Sample:
    """A resampled chart point."""

    x: int  # bucket start, epoch ms
    y: float


@dataclass
class ChartDataset:
    """One channel line as consumed by the chart renderer."""

    channel: str
    label: str
    color: str
    samples: List[Sample] = field(default_factory=list)
    hidden: bool = False

    @property
    def values(self) -> List[float]:
        return [s.y for s in self.samples]


@dataclass
class ChartFrame:
    """Everything the chart and stats surfaces need for one render."""

    window: Optional[TimeWindow]
    plan: Optional[BucketPlan]
    datasets: Dict[str, ChartDataset]
    decimation_target: int
    trailing_7d: StatsSummary
    trailing_30d: StatsSummary
    visible: StatsSummary

    @property
    def sample_count(self) -> int:
        return max((len(ds.samples) for ds in self.datasets.values()), default=0)
