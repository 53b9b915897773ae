from __future__ import annotations

from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from edakit.stats.regression import lm2 as fit_lm2
from edakit.stats.regression import print_summary_table
from edakit.stats.summary import normalize as normalize_values
from edakit.stats.summary import wmean as weighted_mean
from edakit.viz.colors import FALLBACK_THEME, GRADIENT_THEMES, resolve_theme


app = typer.Typer(add_completion=False, help="EDA convenience CLI")
console = Console()


def _parse_numbers(raw: str, option: str) -> List[float]:
    parts = [p.strip() for p in raw.replace(";", ",").split(",") if p.strip()]
    if not parts:
        raise typer.BadParameter(f"{option} needs at least one number")
    try:
        return [float(p) for p in parts]
    except ValueError as e:
        raise typer.BadParameter(f"{option} must be comma-separated numbers: {raw!r}") from e


@app.command("lm2")
def lm2(
    x: str = typer.Option(..., "--x", help="Independent variable, e.g. 1,2,3,4"),
    y: str = typer.Option(..., "--y", help="Dependent variable, same length as --x"),
):
    """Simple linear regression summary."""

    xs = _parse_numbers(x, "--x")
    ys = _parse_numbers(y, "--y")
    try:
        res = fit_lm2(xs, ys)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e
    print_summary_table(res, console=console)


@app.command("wmean")
def wmean(
    x: str = typer.Option(..., "--x", help="Values"),
    w: Optional[str] = typer.Option(None, "--w", help="Weights (defaults to 1 for every value)"),
):
    xs = _parse_numbers(x, "--x")
    ws = _parse_numbers(w, "--w") if w is not None else None
    try:
        value = weighted_mean(xs, ws)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e
    console.print(f"{value:.6g}")


@app.command("normalize")
def normalize(
    x: str = typer.Option(..., "--x", help="Values"),
    mean: Optional[float] = typer.Option(None, "--mean", help="Reference mean (default: mean of x)"),
    sd: Optional[float] = typer.Option(None, "--sd", help="Reference SD (default: SD of x)"),
):
    xs = _parse_numbers(x, "--x")
    z = normalize_values(xs, mean=mean, sd=sd)
    tbl = Table(title="Normalized values")
    tbl.add_column("x", justify="right")
    tbl.add_column("z", justify="right")
    for raw, val in zip(xs, z):
        tbl.add_row(f"{raw:.6g}", f"{val:.7g}")
    console.print(tbl)


@app.command("themes")
def themes(
    n: int = typer.Option(10, "--n", min=1, help="Number of colors per ramp"),
):
    """Show the gradient color themes."""

    tbl = Table(title=f"Gradient themes ({n} stops)")
    tbl.add_column("theme")
    tbl.add_column("colors")
    for name in list(GRADIENT_THEMES) + ["(other)"]:
        ramp = resolve_theme(name)(n)
        swatches = " ".join(f"[on {c}]  [/]" for c in ramp)
        tbl.add_row(name, f"{swatches}  {ramp[0]} .. {ramp[-1]}")
    console.print(tbl)
    console.print(f"Unknown theme names use {' -> '.join(FALLBACK_THEME)}.")


if __name__ == "__main__":
    app()
