from __future__ import annotations

from typing import Any, Callable, Dict, List, Sequence, Tuple, Union

import numpy as np
import pandas as pd
from scipy.stats import norm

from edakit.core.config import GRADIENT_RESOLUTION, GradientScale

GRADIENT_THEMES: Dict[str, Tuple[str, ...]] = {
    "flame": ("yellow", "red"),
    "blue": ("lightblue", "darkblue"),
    "rainbow": ("blue", "cyan", "green", "yellow", "orange", "red"),
}
FALLBACK_THEME: Tuple[str, ...] = ("lightgray", "black")

ColorRamp = Callable[[int], List[str]]


def resolve_theme(name: str) -> ColorRamp:
    """Return a function producing ``n`` evenly spaced colors for a gradient theme.

    Unknown names fall back to a light gray to black ramp.
    """

    from matplotlib.colors import LinearSegmentedColormap, to_hex

    anchors = GRADIENT_THEMES.get(name, FALLBACK_THEME)
    cmap = LinearSegmentedColormap.from_list(f"edakit_{name}", list(anchors))

    def ramp(n: int) -> List[str]:
        if n < 1:
            raise ValueError("A color ramp needs at least one color.")
        return [to_hex(cmap(v)) for v in np.linspace(0.0, 1.0, n)]

    return ramp


def is_categorical(values: Any) -> bool:
    if isinstance(values, pd.Categorical):
        return True
    if isinstance(values, pd.Series):
        dtype = values.dtype
        if isinstance(dtype, pd.CategoricalDtype) or pd.api.types.is_bool_dtype(dtype):
            return True
        return not pd.api.types.is_numeric_dtype(dtype)
    arr = np.asarray(values)
    return arr.dtype.kind in {"O", "U", "S", "b"}


def as_ordinal(values: Any) -> np.ndarray:
    """Numeric view of ``values``; categories become 1-based codes in sorted order."""

    if is_categorical(values):
        codes = pd.Categorical(values).codes
        return codes.astype(float) + 1.0
    return np.asarray(values, dtype=float)


def rescale(
    values: Any,
    mode: Union[str, GradientScale] = GradientScale.normal,
    *,
    n_buckets: int = GRADIENT_RESOLUTION,
) -> np.ndarray:
    """Map numeric values onto 1-based bucket indices in ``[1, n_buckets]``.

    ``normal`` assumes the values are roughly normally distributed and
    spreads them through the standard normal CDF. ``range`` maps min..max
    linearly onto the buckets.
    """

    mode = GradientScale(mode)
    x = as_ordinal(values)
    if x.size == 0:
        return np.empty(0, dtype=int)

    if mode == GradientScale.normal:
        sd = float(np.std(x, ddof=1)) if x.size > 1 else 0.0
        if not np.isfinite(sd) or sd == 0:
            frac = np.full(x.shape, 0.5)
        else:
            frac = norm.cdf((x - np.mean(x)) / sd)
    else:
        lo, hi = float(np.min(x)), float(np.max(x))
        if hi == lo:
            frac = np.full(x.shape, 0.5)
        else:
            frac = (x - lo) / (hi - lo)

    idx = np.floor(frac * n_buckets).astype(int) + 1
    return np.clip(idx, 1, n_buckets)


def gradient_colors(
    values: Any,
    *,
    theme: str = "flame",
    scale: Union[str, GradientScale] = GradientScale.normal,
    resolution: int = GRADIENT_RESOLUTION,
) -> List[str]:
    ramp = resolve_theme(theme)(resolution)
    return [ramp[i - 1] for i in rescale(values, scale, n_buckets=resolution)]


def _palette() -> List[str]:
    import matplotlib
    from matplotlib.colors import to_hex

    return [to_hex(c) for c in matplotlib.colormaps["tab10"].colors]


def discrete_colors(color: Any, n_rows: int) -> Union[str, List[Any]]:
    """Resolve a non-gradient color spec.

    A single color is returned unchanged. A sequence of valid colors is
    recycled to ``n_rows``; any other sequence is treated as categories and
    mapped onto a qualitative palette.
    """

    from matplotlib.colors import is_color_like

    if isinstance(color, str) or np.ndim(color) == 0:
        return color
    if isinstance(color, tuple) and len(color) in (3, 4) and is_color_like(color):
        return color

    items = list(color)
    if not items:
        raise ValueError("Color sequence is empty.")

    if all(isinstance(c, str) and is_color_like(c) for c in items):
        resolved: Sequence[Any] = items
    else:
        palette = _palette()
        codes = pd.Categorical(items).codes
        resolved = [palette[c % len(palette)] for c in codes]

    return [resolved[i % len(resolved)] for i in range(n_rows)]
