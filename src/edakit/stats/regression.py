from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
from rich.console import Console
from rich.table import Table

from edakit.stats.summary import ArrayLike

# Width the report keys are padded to with dot leaders.
REPORT_KEY_WIDTH = 45


@dataclass(frozen=True)
class RegressionResult:
    n: int
    mean_x: float
    mean_y: float
    sd_x: float
    sd_y: float
    cor: float
    rot_significance: float
    rot_is_significant: bool
    slope: float
    intercept: float
    sst: float  # total sum of squares around mean(y)
    sse: float  # residual sum of squares of the fitted line
    ssr: float  # sum of squares explained by the regression
    mst: float
    mse: float
    cod: float  # coefficient of determination

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def predict(self, x: ArrayLike) -> np.ndarray:
        return self.intercept + self.slope * np.asarray(x, dtype=float)


SUMMARY_FIELDS: List[Tuple[str, str]] = [
    ("Sample Size", "n"),
    ("Mean of independent variable", "mean_x"),
    ("Mean of dependent variable", "mean_y"),
    ("SD of independent variable", "sd_x"),
    ("SD of dependent variable", "sd_y"),
    ("Correlation (Pearson)", "cor"),
    ("Rule of Thumb Significance for correlation", "rot_significance"),
    ("Is this Significant?", "rot_is_significant"),
    ("Slope", "slope"),
    ("Intercept", "intercept"),
    ("Total Sum of Squared Errors (using mean of y)", "sst"),
    ("Sum of Squared Errors (in the model)", "sse"),
    ("Sum of Squared Errors (due to regression)", "ssr"),
    ("Total Mean Squared Errors (using mean)", "mst"),
    ("Mean Squared Errors in the model", "mse"),
    ("Coefficient of Determination", "cod"),
]


def _check_inputs(x: ArrayLike, y: ArrayLike) -> Tuple[np.ndarray, np.ndarray]:
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if x.ndim != 1 or y.ndim != 1:
        raise ValueError("x and y must be one-dimensional")
    if x.size != y.size:
        raise ValueError(f"x and y must have the same length ({x.size} != {y.size})")
    if x.size < 2:
        raise ValueError("At least two observations are required")
    if not (np.isfinite(x).all() and np.isfinite(y).all()):
        raise ValueError("x and y must not contain missing or infinite values")
    return x, y


def lm2(
    x: ArrayLike,
    y: ArrayLike,
    *,
    print_summary: bool = False,
    console: Optional[Console] = None,
) -> RegressionResult:
    """Closed-form simple linear regression of ``y`` on ``x`` plus fit diagnostics.

    The correlation is flagged as significant by the rule of thumb
    ``|r| > 2 / sqrt(n)``. Sums of squares decompose as ``SST = SSE + SSR``;
    MST and MSE divide by ``n``.
    """

    x, y = _check_inputs(x, y)
    n = int(x.size)

    mean_x = float(np.mean(x))
    mean_y = float(np.mean(y))
    sd_x = float(np.std(x, ddof=1))
    sd_y = float(np.std(y, ddof=1))
    # Correlation and slope are undefined when either variable is constant.
    if sd_x == 0 or sd_y == 0:
        cor = float("nan")
    else:
        cor = float(np.corrcoef(x, y)[0, 1])

    rot_significance = 2.0 / np.sqrt(n)
    rot_is_significant = bool(abs(cor) > rot_significance)

    slope = cor * sd_y / sd_x if sd_x != 0 else float("nan")
    intercept = mean_y - slope * mean_x

    sst = float(np.sum((y - mean_y) ** 2))
    sse = float(np.sum(((y - mean_y) - (x - mean_x) * slope) ** 2))
    ssr = sst - sse

    result = RegressionResult(
        n=n,
        mean_x=mean_x,
        mean_y=mean_y,
        sd_x=sd_x,
        sd_y=sd_y,
        cor=cor,
        rot_significance=float(rot_significance),
        rot_is_significant=rot_is_significant,
        slope=float(slope),
        intercept=float(intercept),
        sst=sst,
        sse=sse,
        ssr=ssr,
        mst=sst / n,
        mse=sse / n,
        cod=ssr / sst if sst != 0 else float("nan"),
    )

    if print_summary:
        print_summary_table(result, console=console)
    return result


def _fmt(value: Any) -> str:
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, int):
        return str(value)
    return f"{value:.7g}"


def format_summary(result: RegressionResult, *, width: int = REPORT_KEY_WIDTH) -> str:
    """Plain-text report, one dot-leader aligned line per field."""

    rule = "=" * 63
    lines = [
        rule,
        "MODEL SUMMARY".center(63).rstrip(),
        rule,
        "Assumes no missing values and equal length x and y",
        "_" * 63,
    ]
    for label, attr in SUMMARY_FIELDS:
        lines.append(f"{label.ljust(width, '.')}{_fmt(getattr(result, attr))}")
    lines.append("_" * 63)
    return "\n".join(lines)


def print_summary_table(result: RegressionResult, *, console: Optional[Console] = None) -> None:
    console = console or Console()
    tbl = Table(title="Model summary", show_lines=False)
    tbl.add_column("statistic")
    tbl.add_column("value", justify="right")
    for label, attr in SUMMARY_FIELDS:
        tbl.add_row(label, _fmt(getattr(result, attr)))
    console.print(tbl)
