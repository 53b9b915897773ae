from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

import numpy as np
import pandas as pd
import statsmodels.api as sm

from edakit.core.layout import LayoutContext
from edakit.viz.colors import as_ordinal
from edakit.viz.columns import as_table

logger = logging.getLogger(__name__)

ABOVE_COLOR = "red"
BELOW_COLOR = "blue"
SMOOTH_COLOR = "red"


def threshold_colors(
    df: pd.DataFrame,
    threshold_percent: float,
    column: str,
    *,
    above: str = ABOVE_COLOR,
    below: str = BELOW_COLOR,
) -> List[str]:
    """Color each row by whether ``column`` reaches a threshold.

    ``threshold_percent`` (0..100) is a position within the column's observed
    range: 0 is the minimum, 100 the maximum. Rows at or above the threshold
    get ``above``, the rest ``below``.
    """

    if column not in df.columns:
        raise KeyError(f"Unknown column '{column}'.")
    if not 0.0 <= threshold_percent <= 100.0:
        raise ValueError(f"threshold_percent must be within [0, 100], got {threshold_percent}")

    values = as_ordinal(df[column])
    lo, hi = float(np.min(values)), float(np.max(values))
    thresh = lo + (threshold_percent / 100.0) * (hi - lo)
    return np.where(values >= thresh, above, below).tolist()


@dataclass
class PairsPlot:
    figure: Any
    axes: np.ndarray
    collections: List[Any]
    columns: List[str]


def draw_pairs(
    df: Any,
    colors: Any,
    *,
    alpha: float = 0.3,
    smooth: bool = True,
    context: Optional[LayoutContext] = None,
    **layout_overrides: Any,
) -> PairsPlot:
    """Scatterplot matrix with a lowess smoother in every off-diagonal panel."""

    from matplotlib.colors import to_rgba_array

    table = as_table(df)
    names = [str(c) for c in table.columns]
    n = len(names)
    if n < 2:
        raise ValueError("A pairs plot needs at least two columns.")

    numeric = {name: as_ordinal(table.iloc[:, i]) for i, name in enumerate(names)}
    rgba = to_rgba_array(colors, alpha=alpha)
    context = context or LayoutContext.current()

    collections: List[Any] = []
    axes = np.empty((n, n), dtype=object)
    with context.grid(n * n, shape=(n, n), wspace=0.05, hspace=0.05, **layout_overrides):
        for row in range(n):
            for col in range(n):
                ax = context.cell(row * n + col)
                axes[row, col] = ax
                ax.tick_params(labelbottom=row == n - 1, labelleft=col == 0)
                if row == col:
                    ax.text(0.5, 0.5, names[row], ha="center", va="center", transform=ax.transAxes)
                    ax.set_xticks([])
                    ax.set_yticks([])
                    continue

                x, y = numeric[names[col]], numeric[names[row]]
                collections.append(ax.scatter(x, y, c=rgba, s=12, edgecolors="none"))
                if smooth:
                    fitted = sm.nonparametric.lowess(y, x, frac=2.0 / 3.0)
                    ax.plot(fitted[:, 0], fitted[:, 1], color=SMOOTH_COLOR, linewidth=1)
        figure = context.figure

    logger.debug("draw_pairs: %d columns, %d panels", n, len(collections))
    return PairsPlot(figure=figure, axes=axes, collections=collections, columns=names)


def recolor(plot: PairsPlot, colors: Any, *, alpha: float = 0.3) -> None:
    from matplotlib.colors import to_rgba_array

    rgba = to_rgba_array(colors, alpha=alpha)
    for coll in plot.collections:
        coll.set_facecolors(rgba)


class PairsExplorer:
    """Interactive pairs plot: a slider sets the threshold, radio buttons the column.

    The widgets only forward their values to :meth:`update`; the coloring
    itself is :func:`threshold_colors`.
    """

    def __init__(
        self,
        df: Any,
        *,
        figure: Any = None,
        alpha: float = 0.3,
        initial_threshold: float = 50.0,
        columns: Optional[Sequence[str]] = None,
    ):
        import matplotlib.pyplot as plt
        from matplotlib.widgets import RadioButtons, Slider

        self.df = as_table(df).rename(columns=str)
        self.alpha = alpha
        self.column = str(columns[0]) if columns else self.df.columns[0]
        self.threshold = initial_threshold

        if figure is None:
            figure = plt.figure(figsize=(10, 10))
        self.context = LayoutContext(figure)

        colors = threshold_colors(self.df, self.threshold, self.column)
        self.plot = draw_pairs(self.df, colors, alpha=alpha, context=self.context, bottom=0.22)

        slider_ax = figure.add_axes([0.12, 0.08, 0.45, 0.03])
        self.slider = Slider(slider_ax, "threshold %", 0, 100, valinit=initial_threshold, valstep=1)
        picker_ax = figure.add_axes([0.7, 0.01, 0.25, 0.16])
        picker_labels = list(columns) if columns else list(self.df.columns)
        self.picker = RadioButtons(picker_ax, picker_labels, active=picker_labels.index(self.column))

        self.slider.on_changed(lambda val: self.update(val, self.column))
        self.picker.on_clicked(lambda label: self.update(self.threshold, label))

    def update(self, threshold: float, column: str) -> List[str]:
        colors = threshold_colors(self.df, float(threshold), column)
        self.threshold = float(threshold)
        self.column = column
        recolor(self.plot, colors, alpha=self.alpha)
        self.plot.figure.canvas.draw_idle()
        return colors

    def show(self) -> None:
        import matplotlib.pyplot as plt

        plt.show()


def interactive_pairs(df: Any, **kwargs: Any) -> PairsExplorer:
    explorer = PairsExplorer(df, **kwargs)
    explorer.show()
    return explorer
