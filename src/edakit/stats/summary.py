from __future__ import annotations

from typing import Optional, Sequence, Union

import numpy as np
import pandas as pd

ArrayLike = Union[Sequence[float], np.ndarray, pd.Series]


def wmean(x: ArrayLike, w: Optional[ArrayLike] = None) -> float:
    """Weighted mean of ``x``; unit weights when ``w`` is omitted."""

    x = np.asarray(x, dtype=float)
    if w is None:
        w = np.ones_like(x)
    else:
        w = np.asarray(w, dtype=float)
        if w.shape != x.shape:
            raise ValueError(f"x and w must have the same length ({x.size} != {w.size})")
    return float(np.sum(x * w) / np.sum(w))


def normalize(
    x: ArrayLike,
    mean: Optional[float] = None,
    sd: Optional[float] = None,
) -> Union[np.ndarray, pd.Series]:
    """Standardize ``x`` to zero mean and unit standard deviation.

    By default the mean and (sample) standard deviation of ``x`` itself are
    used. Pass ``mean``/``sd`` from a reference sample to put new data on the
    same scale.
    """

    values = np.asarray(x, dtype=float)
    if mean is None:
        mean = float(np.mean(values))
    if sd is None:
        sd = float(np.std(values, ddof=1))

    z = (values - mean) / sd
    if isinstance(x, pd.Series):
        return pd.Series(z, index=x.index, name=x.name)
    return z
