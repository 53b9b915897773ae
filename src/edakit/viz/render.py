from __future__ import annotations

from typing import Any, Protocol, Sequence

import numpy as np
import statsmodels.api as sm

# Label font size (points) for label_size == 1.
BASE_LABEL_FONTSIZE = 10.0


class CellRenderer(Protocol):
    """Draws one primitive plot into a single grid cell."""

    def points(self, ax: Any, x: Sequence, y: Sequence, *, color: Any, **kwargs: Any) -> Any: ...

    def lines(self, ax: Any, x: Sequence, y: Sequence, *, color: Any, **kwargs: Any) -> Any: ...

    def histogram(self, ax: Any, values: np.ndarray, *, color: Any, **kwargs: Any) -> Any: ...

    def density(self, ax: Any, values: np.ndarray, *, color: Any, **kwargs: Any) -> Any: ...

    def boxplot(self, ax: Any, values: np.ndarray, *, color: Any, **kwargs: Any) -> Any: ...

    def label(self, ax: Any, text: str, *, size: float) -> Any: ...


class MatplotlibRenderer:
    def points(self, ax, x, y, *, color, **kwargs):
        return ax.scatter(x, y, c=color, **kwargs)

    def lines(self, ax, x, y, *, color, **kwargs):
        (line,) = ax.plot(x, y, color=color, **kwargs)
        return line

    def histogram(self, ax, values, *, color, **kwargs):
        kwargs.setdefault("edgecolor", "black")
        return ax.hist(values, color=color, **kwargs)

    def density(self, ax, values, *, color, **kwargs):
        kde = sm.nonparametric.KDEUnivariate(np.asarray(values, dtype=float))
        kde.fit()
        (line,) = ax.plot(kde.support, kde.density, color=color, **kwargs)
        ax.set_ylabel("Density")
        return line

    def boxplot(self, ax, values, *, color, **kwargs):
        return ax.boxplot(
            values,
            orientation="horizontal",
            patch_artist=True,
            boxprops={"facecolor": color},
            **kwargs,
        )

    def label(self, ax, text, *, size):
        return ax.set_title(text, fontsize=size * BASE_LABEL_FONTSIZE, pad=4)
