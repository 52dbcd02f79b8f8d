"""Box-plot visualization of the two compared groups."""

from __future__ import annotations

import math
import os
from typing import Optional

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

from .stats.sanitize import clean_sample

FIGURE_NAME = "IDAQ Lab - T-test Comparison"
GROUP_LABELS = ("Group 1", "Group 2")
FIGURE_DPI = 300
FIGSIZE = (6.4, 4.8)
PLOT_LINEWIDTH = 1.8


def plot_comparison(
    data1,
    data2,
    p_value: float,
    output_path: Optional[str] = None,
) -> Figure:
    """Draw side-by-side box plots of both groups.

    Args:
        data1: Group-1 measurements (NaN entries are ignored).
        data2: Group-2 measurements.
        p_value: Comparison p-value shown in the title.
        output_path: Optional file path; when given the figure is saved there
            at 300 dpi and closed.

    Returns:
        matplotlib.figure.Figure: The rendered figure.
    """
    groups = [clean_sample(data1), clean_sample(data2)]

    fig, ax = plt.subplots(figsize=FIGSIZE, num=FIGURE_NAME, clear=True)
    ax.boxplot(
        groups,
        patch_artist=True,
        boxprops={"facecolor": "#B7D1F2", "edgecolor": "black", "linewidth": 1.0},
        medianprops={"color": "black", "linewidth": PLOT_LINEWIDTH},
        whiskerprops={"color": "black", "linewidth": 1.0},
        capprops={"color": "black", "linewidth": 1.0},
    )
    ax.set_xticks([1, 2])
    ax.set_xticklabels(GROUP_LABELS)
    for pos, values in enumerate(groups, start=1):
        jitter = np.linspace(-0.08, 0.08, num=len(values))
        ax.scatter(pos + jitter, values, s=14, color="#2C4B7D", alpha=0.7, zorder=3)

    ax.grid(True, alpha=0.3)
    ax.set_ylabel("Measured Value")
    p_text = "undefined" if math.isnan(float(p_value)) else f"{float(p_value):.4f}"
    ax.set_title(f"T-test Comparison (p = {p_text})")
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    fig.tight_layout()

    if output_path:
        parent = os.path.dirname(os.path.abspath(output_path))
        os.makedirs(parent, exist_ok=True)
        fig.savefig(output_path, dpi=FIGURE_DPI, bbox_inches="tight")
        plt.close(fig)
    return fig
