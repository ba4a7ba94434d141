"""Base plotting utilities shared across plot modules.

Each plot function returns a matplotlib Figure when ``output_path`` is not
provided; otherwise the figure is saved and closed (to avoid memory
accumulation in batch runs) and ``None`` is returned.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import seaborn as sns  # noqa: E402

__all__ = ["set_plot_style", "save_figure"]


def set_plot_style() -> None:
	"""Apply a unified visual style."""
	sns.set_theme(style="whitegrid")
	plt.rcParams.update({
		"axes.titlesize": 13,
		"axes.labelsize": 11,
		"font.size": 10,
		"figure.dpi": 100,
	})


def save_figure(fig: plt.Figure, output_path: Optional[Union[str, Path]]) -> Optional[plt.Figure]:
	"""Save figure if ``output_path`` provided else return it.

	Parameters
	----------
	fig : matplotlib.figure.Figure
		Figure to save or return.
	output_path : str | Path | None
		Path to save. If None the figure is returned and *not* closed.
	"""
	if output_path:
		Path(output_path).parent.mkdir(parents=True, exist_ok=True)
		fig.savefig(output_path, bbox_inches="tight")
		plt.close(fig)
		return None
	return fig
