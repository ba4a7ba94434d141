"""Streaming VCF reader producing biallelic SNP genotype vectors.

Only the handful of columns the correlation engine needs are decoded:
CHROM, POS, REF, ALT and the GT sub-field of every sample. Everything
else on the line is ignored. Records are yielded lazily so memory use is
independent of file size.
"""

from __future__ import annotations

from contextlib import nullcontext
from dataclasses import dataclass
from typing import Iterator, List, Optional
import gzip
import sys

__all__ = ["VariantRecord", "VariantStream", "VCFFormatError", "ReaderStats"]

PHASE_SEPARATORS = ("|", "/")
MIN_FIELDS = 5


class VCFFormatError(ValueError):
	"""Raised for a data line that cannot be decoded (fatal)."""

	def __init__(self, message: str, line_number: Optional[int] = None):
		if line_number is not None:
			message = f"line {line_number}: {message}"
		super().__init__(message)
		self.line_number = line_number


@dataclass(frozen=True)
class VariantRecord:
	"""One biallelic SNP site.

	Attributes
	----------
	chrom : str
		Contig name as written in the file.
	pos : int
		1-based position.
	ref, alt : str
		Single-character alleles.
	genotype_calls : str
		One symbol per sample-chromosome slot, separators removed
		(e.g. ``0|1  1|1`` -> ``"0111"``). Empty when the line had no GT
		FORMAT column.
	"""

	chrom: str
	pos: int
	ref: str
	alt: str
	genotype_calls: str


@dataclass
class ReaderStats:
	"""Counters describing what the last pass over the file saw."""

	data_lines: int = 0
	emitted: int = 0
	skipped_non_snp: int = 0
	missing_gt_format: int = 0


def _is_gt_format(field: str) -> bool:
	return field.split(":", 1)[0] == "GT"


def extract_genotype_calls(fields: List[str]) -> str:
	"""Concatenate the GT symbols of every sample column.

	The FORMAT column is located by scanning for a field whose first key is
	``GT``; all later fields are samples. Returns ``""`` when no such column
	exists.
	"""
	calls: List[str] = []
	in_samples = False
	for field in fields:
		if in_samples:
			gt = field.split(":", 1)[0]
			calls.extend(ch for ch in gt if ch not in PHASE_SEPARATORS)
		elif _is_gt_format(field):
			in_samples = True
	return "".join(calls)


class VariantStream:
	"""Lazy iterator of :class:`VariantRecord` over a VCF.

	Parameters
	----------
	path : str
		Path to a (optionally gzipped) VCF file, or ``"-"`` for stdin.
	max_records : int | None
		Optional limit on emitted records for testing / faster prototyping.

	Each call to :meth:`parse` (or ``iter(stream)``) reopens the source and
	starts a fresh pass; a single generator is not restartable.
	"""

	def __init__(self, path: str, max_records: Optional[int] = None):
		self.path = path
		self.max_records = max_records
		self.samples: List[str] = []
		self.stats = ReaderStats()

	def __iter__(self) -> Iterator[VariantRecord]:
		return self.parse()

	# -- internal helpers -------------------------------------------------
	def _open(self):  # type: ignore[return-type]
		if self.path == "-":
			# stdin stays open after the pass
			return nullcontext(sys.stdin)
		if self.path.endswith(".gz"):
			return gzip.open(self.path, "rt")
		return open(self.path, "rt")

	def _decode(self, line: str, line_number: int) -> Optional[VariantRecord]:
		parts = line.split("\t")
		if len(parts) < MIN_FIELDS:
			raise VCFFormatError(
				f"expected at least {MIN_FIELDS} tab-separated fields, got {len(parts)}",
				line_number,
			)
		chrom, pos_raw, _id, ref, alt = parts[:MIN_FIELDS]
		try:
			pos = int(pos_raw)
		except ValueError:
			raise VCFFormatError(f"non-numeric POS {pos_raw!r}", line_number) from None
		if len(ref) != 1 or len(alt) != 1:
			self.stats.skipped_non_snp += 1
			return None
		calls = extract_genotype_calls(parts[MIN_FIELDS:])
		if not calls:
			self.stats.missing_gt_format += 1
		return VariantRecord(chrom, pos, ref, alt, calls)

	def parse(self) -> Iterator[VariantRecord]:
		self.stats = ReaderStats()
		self.samples = []
		with self._open() as fh:
			for line_number, line in enumerate(fh, start=1):
				line = line.rstrip()
				if not line:
					continue
				if line.startswith("#"):
					if line.startswith("#CHROM"):
						# VCF fixed columns then samples from index 9
						self.samples = line.split("\t")[9:]
					continue
				self.stats.data_lines += 1
				rec = self._decode(line, line_number)
				if rec is None:
					continue
				self.stats.emitted += 1
				yield rec
				if self.max_records and self.stats.emitted >= self.max_records:
					break
