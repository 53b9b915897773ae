from __future__ import annotations

import math
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Any, Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class LayoutState:
    """Grid arrangement and margins shared by every cell drawn through a context."""

    nrows: int = 1
    ncols: int = 1
    left: float = 0.125
    right: float = 0.9
    bottom: float = 0.11
    top: float = 0.88
    wspace: float = 0.2
    hspace: float = 0.2
    tick_length: float = 3.5
    tick_labelsize: float = 10.0

    @property
    def n_cells(self) -> int:
        return self.nrows * self.ncols

    def rc_overrides(self) -> dict:
        return {
            "xtick.major.size": self.tick_length,
            "ytick.major.size": self.tick_length,
            "xtick.labelsize": self.tick_labelsize,
            "ytick.labelsize": self.tick_labelsize,
        }


def grid_shape(n: int) -> Tuple[int, int]:
    """Near-square (rows, cols) grid with room for ``n`` cells."""

    if n < 1:
        raise ValueError("Grid needs at least one cell.")
    ncols = math.ceil(math.sqrt(n))
    nrows = math.ceil(n / ncols)
    return nrows, ncols


def layout_for_n_subplots(n: int, *, shape: Optional[Tuple[int, int]] = None) -> LayoutState:
    nrows, ncols = shape if shape is not None else grid_shape(n)
    if nrows * ncols < n:
        raise ValueError(f"A {nrows}x{ncols} grid cannot hold {n} cells.")

    if nrows == 1 and ncols == 1:
        return LayoutState()

    # Shrink margins and tick labels as the grid gets denser.
    density = max(nrows, ncols)
    return LayoutState(
        nrows=nrows,
        ncols=ncols,
        left=0.06,
        right=0.98,
        bottom=0.06,
        top=0.94,
        wspace=0.3,
        hspace=0.25 + 0.1 * min(density, 4),
        tick_length=2.0,
        tick_labelsize=max(5.0, 10.0 - density),
    )


class LayoutContext:
    """Explicit rendering context: a target figure plus the active layout state.

    ``grid`` acquires a layout for a batch of cells and always puts the
    previous state back (and the matplotlib rc settings it overrode) when the
    block exits, whichever way it exits.
    """

    _current: Optional["LayoutContext"] = None

    def __init__(self, figure: Any = None, state: Optional[LayoutState] = None):
        self._figure = figure
        self.state = state or LayoutState()
        self._gridspec = None

    @classmethod
    def current(cls) -> "LayoutContext":
        """Process-wide default context, drawing into pyplot's current figure."""
        if cls._current is None:
            cls._current = cls()
        return cls._current

    @property
    def figure(self):
        if self._figure is not None:
            return self._figure
        import matplotlib.pyplot as plt

        return plt.gcf()

    def snapshot(self) -> LayoutState:
        return self.state

    def restore(self, state: LayoutState, gridspec: Any = None) -> None:
        self.state = state
        self._gridspec = gridspec

    @contextmanager
    def grid(
        self,
        n_cells: int,
        *,
        shape: Optional[Tuple[int, int]] = None,
        **overrides: Any,
    ) -> Iterator["LayoutContext"]:
        import matplotlib

        saved = self.snapshot()
        saved_gridspec = self._gridspec
        try:
            state = layout_for_n_subplots(n_cells, shape=shape)
            if overrides:
                state = replace(state, **overrides)
            self.state = state

            fig = self.figure
            fig.clf()
            # Margins live on the gridspec so the figure's own subplot
            # parameters are left untouched.
            self._gridspec = fig.add_gridspec(
                state.nrows,
                state.ncols,
                left=state.left,
                right=state.right,
                bottom=state.bottom,
                top=state.top,
                wspace=state.wspace,
                hspace=state.hspace,
            )
            with matplotlib.rc_context(state.rc_overrides()):
                yield self
        finally:
            self.restore(saved, saved_gridspec)

    def cell(self, index: int):
        """Axes for the ``index``-th cell (row-major) of the active grid."""
        if self._gridspec is None:
            raise RuntimeError("cell() is only available inside grid().")
        if not 0 <= index < self.state.n_cells:
            raise IndexError(f"Cell {index} is outside a {self.state.nrows}x{self.state.ncols} grid.")
        row, col = divmod(index, self.state.ncols)
        return self.figure.add_subplot(self._gridspec[row, col])

    def cells(self, n: int) -> List[Any]:
        return [self.cell(i) for i in range(n)]
