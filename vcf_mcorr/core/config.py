"""Run configuration for the correlation engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

__all__ = ["CorrelationConfig", "DEFAULT_MAX_LAG", "DEFAULT_REGION_START"]

DEFAULT_MAX_LAG = 300
DEFAULT_REGION_START = 1


@dataclass(frozen=True)
class CorrelationConfig:
	"""Window width and region bounds for one run.

	Attributes
	----------
	max_lag : int
		Window width in bp; lags ``0 .. max_lag - 1`` are accumulated.
	region_start, region_end : int, int | None
		Inclusive position bounds. ``region_end=None`` means unbounded.
	"""

	max_lag: int = DEFAULT_MAX_LAG
	region_start: int = DEFAULT_REGION_START
	region_end: Optional[int] = None

	def __post_init__(self) -> None:
		if self.max_lag <= 0:
			raise ValueError(f"max_lag must be positive, got {self.max_lag}")
		if self.region_end is not None and self.region_end < self.region_start:
			raise ValueError(
				f"region_end ({self.region_end}) is before region_start ({self.region_start})"
			)

	def before_region(self, pos: int) -> bool:
		return pos < self.region_start

	def past_region(self, pos: int) -> bool:
		return self.region_end is not None and pos > self.region_end
