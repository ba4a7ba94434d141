"""Plotting API for the vcf_mcorr package.

Import convenience: ``from vcf_mcorr.plot import plot_p2_curve``.
"""

from .profile_plots import *  # noqa: F401,F403
from .profile_plots import __all__  # noqa: F401
