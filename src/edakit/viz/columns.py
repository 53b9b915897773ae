from __future__ import annotations

import logging
import warnings
from enum import Enum
from typing import Any, Dict, Optional, Tuple

import numpy as np
import pandas as pd

from edakit.core.config import DEFAULT_COLOR, GradientScale, PlotColsOptions, PlotType
from edakit.core.errors import GradientLengthWarning, IllegalPlotCombinationWarning
from edakit.core.layout import LayoutContext
from edakit.viz.colors import as_ordinal, discrete_colors, gradient_colors, is_categorical
from edakit.viz.render import CellRenderer, MatplotlibRenderer

logger = logging.getLogger(__name__)


class RenderMode(str, Enum):
    index_scatter = "index_scatter"
    histogram = "histogram"
    density = "density"
    boxplot = "boxplot"
    outcome_scatter = "outcome_scatter"
    outcome_line = "outcome_line"


_MODES: Dict[Tuple[bool, PlotType], RenderMode] = {
    (False, PlotType.auto): RenderMode.index_scatter,
    (False, PlotType.scatter): RenderMode.index_scatter,
    (False, PlotType.hist): RenderMode.histogram,
    (False, PlotType.density): RenderMode.density,
    (False, PlotType.boxplot): RenderMode.boxplot,
    (True, PlotType.auto): RenderMode.outcome_scatter,
    (True, PlotType.scatter): RenderMode.outcome_scatter,
    (True, PlotType.line): RenderMode.outcome_line,
}


def select_mode(outcome_present: bool, plot_type: Any) -> Optional[RenderMode]:
    """Rendering mode for an (outcome, plot type) pair, or None if not allowed."""

    parsed = PlotType.parse(plot_type)
    if parsed is None:
        return None
    return _MODES.get((bool(outcome_present), parsed))


def as_table(data: Any) -> pd.DataFrame:
    """Coerce a frame, mapping, 2-D array or single vector into a DataFrame."""

    if isinstance(data, pd.DataFrame):
        return data
    if isinstance(data, pd.Series):
        return data.to_frame(name=data.name if data.name is not None else "x")
    if isinstance(data, dict):
        return pd.DataFrame(data)
    arr = np.asarray(data)
    if arr.ndim == 0:
        raise ValueError(f"table must be a frame or a sequence of values, got {type(data).__name__}")
    if arr.ndim == 2:
        return pd.DataFrame(arr, columns=[f"V{i + 1}" for i in range(arr.shape[1])])
    return pd.DataFrame({"x": list(data)})


def _first_color(color: Any) -> Any:
    if isinstance(color, list):
        return color[0]
    return color


def _resolve_color(
    color: Any,
    n_rows: int,
    *,
    gradient: bool,
    gradient_theme: str,
    gradient_scale: GradientScale,
) -> Any:
    if not gradient:
        return discrete_colors(color, n_rows)

    values = color
    if isinstance(values, str) or np.ndim(values) == 0:
        values = [values]
    if is_categorical(values):
        values = as_ordinal(values)

    if len(values) != n_rows:
        warnings.warn(
            "When using gradient, 'color' should be the same length as the number "
            f"of rows in the table ({len(values)} != {n_rows}). Plotting without gradient.",
            GradientLengthWarning,
            stacklevel=3,
        )
        return DEFAULT_COLOR

    return gradient_colors(values, theme=gradient_theme, scale=gradient_scale)


def _draw_cell(
    mode: RenderMode,
    renderer: CellRenderer,
    ax: Any,
    column: pd.Series,
    outcome: Optional[np.ndarray],
    color: Any,
    plot_kwargs: Dict[str, Any],
) -> None:
    if mode == RenderMode.index_scatter:
        renderer.points(ax, np.arange(1, len(column) + 1), column.to_numpy(), color=color, **plot_kwargs)
    elif mode == RenderMode.histogram:
        renderer.histogram(ax, as_ordinal(column), color=_first_color(color), **plot_kwargs)
    elif mode == RenderMode.density:
        renderer.density(ax, as_ordinal(column), color=_first_color(color), **plot_kwargs)
    elif mode == RenderMode.boxplot:
        renderer.boxplot(ax, as_ordinal(column), color=_first_color(color), **plot_kwargs)
    elif mode == RenderMode.outcome_scatter:
        renderer.points(ax, column.to_numpy(), outcome, color=color, **plot_kwargs)
    elif mode == RenderMode.outcome_line:
        renderer.lines(ax, column.to_numpy(), outcome, color=_first_color(color), **plot_kwargs)


def plot_cols(
    table: Any,
    outcome: Any = None,
    *,
    plot_type: Any = "auto",
    label_size: float = 1.0,
    color: Any = DEFAULT_COLOR,
    gradient: bool = False,
    gradient_theme: str = "flame",
    gradient_scale: str | GradientScale = GradientScale.normal,
    context: Optional[LayoutContext] = None,
    renderer: Optional[CellRenderer] = None,
    **plot_kwargs: Any,
) -> None:
    """Plot a grid of subplots, one cell per column of ``table``.

    Without ``outcome`` each cell shows the distribution of one column:

    - ``"auto"`` / ``"scatter"``: values against row index
    - ``"hist"``: histogram
    - ``"density"``: kernel density estimate
    - ``"boxplot"``: horizontal box-and-whisker

    With ``outcome`` each cell shows the outcome as a function of one column:

    - ``"auto"`` / ``"scatter"``: scatter plot
    - ``"line"`` (or ``"lines"``, ``"l"``, ``"|"``): line plot in row order

    Any other combination emits an :class:`IllegalPlotCombinationWarning` and
    draws nothing.

    Parameters
    ----------
    table:
        DataFrame (or anything :func:`as_table` accepts) holding the columns.
    outcome:
        Optional outcome values aligned with the table rows.
    color:
        Single color or one entry per row. With ``gradient=True`` the entries
        are numeric (or categorical) values mapped onto ``gradient_theme``.
    gradient_scale:
        ``"normal"`` or ``"range"``; how values are spread over the ramp.
    context:
        Layout context to draw through. Defaults to the shared context on
        pyplot's current figure. Its layout state is restored on exit.
    plot_kwargs:
        Extra keyword arguments for the per-cell matplotlib call.
    """

    df = as_table(table)
    n_rows, n_cols = df.shape
    if n_cols == 0:
        raise ValueError("table has no columns")

    y: Optional[np.ndarray] = None
    if outcome is not None:
        y = np.asarray(outcome)
        if len(y) != n_rows:
            raise ValueError(f"outcome has {len(y)} values but table has {n_rows} rows")

    gradient_scale = GradientScale(gradient_scale)
    context = context or LayoutContext.current()
    renderer = renderer or MatplotlibRenderer()

    with context.grid(n_cols):
        logger.debug(
            "plot_cols: %d column(s) in a %dx%d grid", n_cols, context.state.nrows, context.state.ncols
        )
        resolved = _resolve_color(
            color,
            n_rows,
            gradient=gradient,
            gradient_theme=gradient_theme,
            gradient_scale=gradient_scale,
        )

        mode = select_mode(y is not None, plot_type)
        if mode is None:
            warnings.warn(
                f"plot_type={plot_type!r} is not allowed "
                f"{'with' if y is not None else 'without'} an outcome. "
                "See help(plot_cols) for the supported combinations.",
                IllegalPlotCombinationWarning,
                stacklevel=2,
            )
            return

        for i, name in enumerate(df.columns):
            ax = context.cell(i)
            _draw_cell(mode, renderer, ax, df.iloc[:, i], y, resolved, plot_kwargs)
            label = f"y ~ {name}" if y is not None else str(name)
            renderer.label(ax, label, size=label_size)


def plot_cols_from_options(
    table: Any,
    outcome: Any = None,
    options: Optional[PlotColsOptions] = None,
    *,
    context: Optional[LayoutContext] = None,
    renderer: Optional[CellRenderer] = None,
) -> None:
    """Render ``plot_cols`` with a validated :class:`PlotColsOptions`."""

    options = options or PlotColsOptions()
    plot_cols(
        table,
        outcome,
        plot_type=options.plot_type,
        label_size=options.label_size,
        color=options.color,
        gradient=options.gradient,
        gradient_theme=options.gradient_theme,
        gradient_scale=options.gradient_scale,
        context=context,
        renderer=renderer,
        **options.plot_kwargs,
    )
