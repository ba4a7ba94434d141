"""vcf_mcorr – mutational correlation (P2 / Ks) profiles from VCF files.

Subpackages:
	io        – streaming VCF reader yielding biallelic SNP genotype vectors
	core      – run configuration and the sliding-window correlation engine
	metrics   – normalisation of engine output into the profile table
	plot      – visualisation of the profile

Typical use::

	from vcf_mcorr.io import VariantStream
	from vcf_mcorr.metrics import compute_correlation_profile

	profile = compute_correlation_profile(VariantStream("input.vcf.gz"))
"""

from .core import CorrelationConfig, CorrelationEngine  # noqa: F401
from .io import VariantStream  # noqa: F401

__version__ = "0.1.0"
__all__ = ["CorrelationConfig", "CorrelationEngine", "VariantStream", "__version__"]
