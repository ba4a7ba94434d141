"""I/O subpackage.

Exposes the streaming VCF reader that feeds the correlation engine.
"""

from .vcf_reader import VariantStream, VariantRecord, VCFFormatError, ReaderStats  # noqa: F401

__all__ = ["VariantStream", "VariantRecord", "VCFFormatError", "ReaderStats"]
