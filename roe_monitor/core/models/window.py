"""Time window model."""

from dataclasses import dataclass

from .point import from_epoch_ms


@dataclass(frozen=True)
class TimeWindow:
    """Closed interval [min_ms, max_ms] in epoch milliseconds."""

    min_ms: int
    max_ms: int

    def __post_init__(self):
        if self.min_ms > self.max_ms:
            raise ValueError(f"Window min {self.min_ms} is after max {self.max_ms}")

    @property
    def span_ms(self) -> int:
        return self.max_ms - self.min_ms

    def contains(self, ms: int) -> bool:
        """Check if a timestamp falls inside the closed interval."""
        return self.min_ms <= ms <= self.max_ms

    def describe(self) -> str:
        """Human readable range for status lines."""
        start = from_epoch_ms(self.min_ms).strftime("%Y-%m-%d %H:%M")
        end = from_epoch_ms(self.max_ms).strftime("%Y-%m-%d %H:%M")
        return f"{start} → {end}"
