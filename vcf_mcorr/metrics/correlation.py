"""Correlation profile assembly.

Turns the lag-indexed sums/counts of a ``CorrelationEngine`` run into the
normalised profile table and reads / writes it as CSV.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import numpy as np
import pandas as pd

from ..core import CorrelationAccumulator, CorrelationConfig, CorrelationEngine
from ..io import VariantStream

__all__ = [
    "PROFILE_COLUMNS",
    "normalize_profile",
    "compute_correlation_profile",
    "write_profile_csv",
    "read_profile_csv",
]

# l=lag, m=value, n=unused (always 0), v=pair count, t=statistic kind, b=group label
PROFILE_COLUMNS = ["l", "m", "n", "v", "t", "b"]
GROUP_LABEL = "all"


def normalize_profile(acc: CorrelationAccumulator) -> pd.DataFrame:
    """Return the profile table for every lag with at least one pair.

    lag 0:  Ks = sums[0] / counts[0]
    lag >0: P2 = sums[lag] / sums[0]

    A zero ``sums[0]`` leaves P2 undefined; those rows carry NaN.
    """
    lags = acc.observed_lags()
    values = np.full(len(lags), np.nan, dtype=np.float64)
    p2_mask = lags > 0
    if acc.sums[0] != 0:
        values[p2_mask] = acc.sums[lags[p2_mask]] / acc.sums[0]
    if acc.counts[0] > 0:
        values[~p2_mask] = acc.sums[0] / acc.counts[0]
    return pd.DataFrame({
        "l": lags.astype(np.int64),
        "m": values,
        "n": np.zeros(len(lags), dtype=np.int64),
        "v": acc.counts[lags],
        "t": np.where(p2_mask, "P2", "Ks"),
        "b": GROUP_LABEL,
    }, columns=PROFILE_COLUMNS)


def compute_correlation_profile(
    stream: VariantStream,
    config: Optional[CorrelationConfig] = None,
    *,
    verbose: bool = False,
) -> pd.DataFrame:
    """Run the engine over ``stream`` and return the normalised profile."""
    engine = CorrelationEngine(config)
    acc = engine.run(stream, verbose=verbose)
    stats = stream.stats
    if verbose:
        print(
            f"[INFO] {stats.data_lines:,} data lines, {stats.emitted:,} SNPs read, "
            f"{stats.skipped_non_snp:,} non-SNP sites skipped, "
            f"{engine.records_admitted:,} SNPs in region"
        )
    if stats.missing_gt_format:
        print(
            f"[WARNING] {stats.missing_gt_format:,} SNP records had no GT FORMAT column; "
            "they occupy window slots but contribute no pairs"
        )
    if acc.counts[0] == 0:
        print("[WARNING] No lag-0 pairs were accumulated; Ks and P2 are undefined for this input.")
    return normalize_profile(acc)


def write_profile_csv(df: pd.DataFrame, path: Union[str, Path]) -> Path:
    """Write the profile table; creates the parent directory if needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False, columns=PROFILE_COLUMNS, na_rep="NaN", float_format="%g")
    return path


def read_profile_csv(path: Union[str, Path]) -> pd.DataFrame:
    df = pd.read_csv(path)
    missing = [c for c in PROFILE_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"{path}: missing profile columns {missing}")
    return df
