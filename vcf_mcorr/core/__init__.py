"""Core computation: run configuration and the sliding-window engine."""

from .config import CorrelationConfig, DEFAULT_MAX_LAG, DEFAULT_REGION_START  # noqa: F401
from .engine import (  # noqa: F401
	CorrelationAccumulator,
	CorrelationEngine,
	EngineState,
	UnsortedInputError,
	joint_derived_counts,
)

__all__ = [
	"CorrelationConfig",
	"DEFAULT_MAX_LAG",
	"DEFAULT_REGION_START",
	"CorrelationAccumulator",
	"CorrelationEngine",
	"EngineState",
	"UnsortedInputError",
	"joint_derived_counts",
]
