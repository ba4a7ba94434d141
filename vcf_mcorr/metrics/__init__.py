"""Metric computation subpackage."""

from .correlation import (  # noqa: F401
    compute_correlation_profile,
    normalize_profile,
    read_profile_csv,
    write_profile_csv,
)

__all__ = ["compute_correlation_profile", "normalize_profile", "read_profile_csv", "write_profile_csv"]
