"""Sliding-window pairwise correlation accumulator.

Records arrive in position order. Each one is held in a window until a
later record lies ``max_lag`` or more bp past it; at that point it is
paired with every record still in the window (itself included, which
gives the lag-0 term) and evicted. The window therefore never spans
``max_lag`` bp, and memory depends on local SNP density only.

Per-pair statistic (P11): with ``a`` and ``b`` the genotype vectors of the
two sites, ``xy`` counts sample slots where both carry the derived allele
``'1'`` and ``n`` counts slots called (``'0'`` or ``'1'``) at both sites.
The pair contributes ``xy / n`` at ``lag = b.pos - a.pos``; pairs with
``n == 0`` contribute nothing.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, Iterable, Optional, Tuple

import numpy as np

from ..io.vcf_reader import VariantRecord
from .config import CorrelationConfig

__all__ = [
	"CorrelationAccumulator",
	"CorrelationEngine",
	"EngineState",
	"UnsortedInputError",
	"encode_calls",
	"joint_derived_counts",
]

REF_SYMBOL = ord("0")
DERIVED_SYMBOL = ord("1")


class UnsortedInputError(ValueError):
	"""A record is below the last admitted position or on a different contig."""


class EngineState(Enum):
	ACCEPTING = "accepting"
	DRAINING = "draining"
	DONE = "done"


@dataclass
class CorrelationAccumulator:
	"""Lag-indexed running sums and pair counts."""

	max_lag: int
	sums: np.ndarray = field(init=False, repr=False)
	counts: np.ndarray = field(init=False, repr=False)

	def __post_init__(self) -> None:
		self.sums = np.zeros(self.max_lag, dtype=np.float64)
		self.counts = np.zeros(self.max_lag, dtype=np.int64)

	def add(self, lag: int, value: float) -> None:
		self.sums[lag] += value
		self.counts[lag] += 1

	def observed_lags(self) -> np.ndarray:
		"""Lags with at least one contributing pair, ascending."""
		return np.flatnonzero(self.counts)


@dataclass(frozen=True)
class _Site:
	record: VariantRecord
	derived: np.ndarray
	called: np.ndarray


def encode_calls(calls: str) -> Tuple[np.ndarray, np.ndarray]:
	"""Return ``(derived, called)`` boolean masks for a genotype string."""
	if not calls:
		empty = np.zeros(0, dtype=bool)
		return empty, empty
	arr = np.frombuffer(calls.encode("ascii", errors="replace"), dtype=np.uint8)
	derived = arr == DERIVED_SYMBOL
	called = derived | (arr == REF_SYMBOL)
	return derived, called


def _pair_counts(a_derived: np.ndarray, a_called: np.ndarray, b_derived: np.ndarray, b_called: np.ndarray) -> Tuple[int, int]:
	if a_called.size == 0 or b_called.size == 0:
		return 0, 0
	if a_called.size != b_called.size:
		raise ValueError(f"genotype vectors differ in length ({a_called.size} vs {b_called.size})")
	xy = int(np.count_nonzero(a_derived & b_derived))
	n = int(np.count_nonzero(a_called & b_called))
	return xy, n


def joint_derived_counts(a: str, b: str) -> Tuple[int, int]:
	"""``(xy, n)`` for two genotype strings, see module docstring."""
	return _pair_counts(*encode_calls(a), *encode_calls(b))


class CorrelationEngine:
	"""Consume position-sorted records and fill a :class:`CorrelationAccumulator`.

	Usage::

		engine = CorrelationEngine(CorrelationConfig(max_lag=300))
		acc = engine.run(VariantStream("input.vcf.gz"))

	or incrementally with :meth:`feed` followed by :meth:`finish`.
	"""

	def __init__(self, config: Optional[CorrelationConfig] = None):
		self.config = config or CorrelationConfig()
		self.accumulator = CorrelationAccumulator(self.config.max_lag)
		self.window: Deque[_Site] = deque()
		self.state = EngineState.ACCEPTING
		self.records_admitted = 0
		self.records_before_region = 0
		self.pairs_skipped = 0
		self._last_pos: Optional[int] = None
		self._chrom: Optional[str] = None

	@property
	def window_span(self) -> int:
		if not self.window:
			return 0
		return self.window[-1].record.pos - self.window[0].record.pos

	# -- pair computation -------------------------------------------------
	def _flush_front(self) -> None:
		front = self.window[0]
		for site in self.window:
			try:
				xy, n = _pair_counts(front.derived, front.called, site.derived, site.called)
			except ValueError as exc:
				raise ValueError(
					f"{front.record.chrom}:{front.record.pos} vs {site.record.chrom}:{site.record.pos}: {exc}"
				) from exc
			if n == 0:
				self.pairs_skipped += 1
				continue
			self.accumulator.add(site.record.pos - front.record.pos, xy / n)

	def _evict_front(self) -> None:
		self._flush_front()
		self.window.popleft()

	def _drain(self) -> None:
		while self.window:
			self._evict_front()

	# -- public API -------------------------------------------------------
	def feed(self, rec: VariantRecord) -> bool:
		"""Offer one record. Returns False once no more input is wanted."""
		if self.state is EngineState.DONE:
			raise RuntimeError("engine already finished; create a new CorrelationEngine")
		if self.state is EngineState.DRAINING:
			return False
		if self.config.before_region(rec.pos):
			self.records_before_region += 1
			return True
		if self.config.past_region(rec.pos):
			self.state = EngineState.DRAINING
			self._drain()
			return False
		if self._chrom is not None and rec.chrom != self._chrom:
			raise UnsortedInputError(
				f"{rec.chrom}:{rec.pos} follows contig {self._chrom}; split multi-contig input first"
			)
		if self._last_pos is not None and rec.pos < self._last_pos:
			raise UnsortedInputError(
				f"{rec.chrom}:{rec.pos} follows position {self._last_pos}; input must be position-sorted"
			)
		while self.window and rec.pos - self.window[0].record.pos >= self.config.max_lag:
			self._evict_front()
		self.window.append(_Site(rec, *encode_calls(rec.genotype_calls)))
		self._last_pos = rec.pos
		self._chrom = rec.chrom
		self.records_admitted += 1
		return True

	def finish(self) -> CorrelationAccumulator:
		"""Flush the remaining window and return the accumulator."""
		if self.state is not EngineState.DONE:
			self.state = EngineState.DRAINING
			self._drain()
			self.state = EngineState.DONE
		return self.accumulator

	def run(self, records: Iterable[VariantRecord], verbose: bool = False) -> CorrelationAccumulator:
		"""Consume ``records`` until exhausted or past ``region_end``."""
		it = iter(records)
		seen = 0
		try:
			for rec in it:
				if not self.feed(rec):
					break
				seen += 1
				if verbose:
					# Adaptive progress display: start with 10K, then increase interval
					interval = 10000 if seen <= 100000 else 100000
					if seen % interval == 0:
						print(f"[INFO] Correlating: {seen:,} records processed (window={len(self.window)})...")
		finally:
			close = getattr(it, "close", None)
			if close is not None:
				close()
		return self.finish()
