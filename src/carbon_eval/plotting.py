"""Bar-chart breakdown of an evaluated carbon footprint."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Sequence

import matplotlib.pyplot as plt
import numpy as np

if TYPE_CHECKING:  # pragma: no cover
    from matplotlib.figure import Figure

    from .evaluator import EvaluationResult

LOGGER = logging.getLogger("carbon_eval.plotting")

BAR_COLOR = (0.2, 0.6, 0.8)
DEFAULT_TITLE = "Carbon Footprint Breakdown"


def plot_emissions(
    categories: Sequence[str],
    emissions: Sequence[float],
    *,
    output: Path | str | None = None,
    show: bool = False,
    title: str = DEFAULT_TITLE,
) -> Figure:
    """Draw one labelled bar per energy source.

    Repeated source names get their own bar. When ``output`` is given the figure
    is saved there and closed.
    """
    labels = [str(category) for category in categories]
    values = [float(value) for value in emissions]
    if len(labels) != len(values):
        raise ValueError(
            f"categories and emissions must have the same length ({len(labels)} != {len(values)})"
        )

    fig, ax = plt.subplots(figsize=(8, 5))
    x = np.arange(len(values))
    bars = ax.bar(x, values, color=BAR_COLOR)
    ax.set_xticks(x, labels)
    ax.bar_label(bars, labels=[f"{value:g}" for value in values], label_type="edge")
    ax.set_title(title)
    ax.set_xlabel("Energy Source")
    ax.set_ylabel("Emissions (kgCO2e)")
    ax.grid(True, axis="y", linestyle="--", alpha=0.3)
    fig.tight_layout()

    if output is not None:
        out_path = Path(output)
        try:
            out_path.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(out_path, dpi=150)
        except OSError:
            plt.close(fig)
            raise
        LOGGER.info("Saved plot to %s", out_path)
    if show:
        plt.show()
    if output is not None:
        plt.close(fig)
    return fig


def plot_result(result: EvaluationResult, **kwargs: Any) -> Figure:
    return plot_emissions(result.categories, result.emissions, **kwargs)
