"""Correlation profile plots."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple, Union

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

from .base import set_plot_style, save_figure

__all__ = ["plot_p2_curve"]


def plot_p2_curve(
	profile: pd.DataFrame,
	*,
	output_path: Optional[Union[str, Path]] = None,
	title: str = "P2 correlation profile",
	logx: bool = False,
	color: str = "#355C7D",
	figsize: Tuple[int, int] = (8, 5),
) -> Optional[plt.Figure]:
	"""Line + scatter of P2 against lag; Ks (lag 0) is reported in the title.

	``profile`` is the table produced by ``normalize_profile`` /
	``read_profile_csv`` (columns ``l``, ``m``, ``t`` at least).
	"""
	for c in ("l", "m", "t"):
		if c not in profile.columns:
			raise ValueError(f"Missing required column '{c}'")
	set_plot_style()
	p2 = profile[profile["t"] == "P2"].dropna(subset=["m"])
	ks_rows = profile.loc[profile["t"] == "Ks", "m"]
	ks_note = f" (Ks={float(ks_rows.iloc[0]):.4g})" if not ks_rows.empty and np.isfinite(ks_rows.iloc[0]) else ""

	fig, ax = plt.subplots(figsize=figsize)
	if not p2.empty:
		sns.lineplot(data=p2, x="l", y="m", color=color, ax=ax)
		sns.scatterplot(data=p2, x="l", y="m", color=color, s=12, edgecolor="none", ax=ax)
	else:
		ax.text(0.5, 0.5, "no P2 values", ha="center", va="center", transform=ax.transAxes)
	if logx:
		ax.set_xscale("log")
	ax.set_title(title + ks_note)
	ax.set_xlabel("Lag (bp)")
	ax.set_ylabel("P2")
	fig.tight_layout()
	return save_figure(fig, output_path)
