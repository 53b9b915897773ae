from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_COLOR = "darkgray"
GRADIENT_RESOLUTION = 10


class PlotType(str, Enum):
    auto = "auto"
    scatter = "scatter"
    hist = "hist"
    density = "density"
    boxplot = "boxplot"
    line = "line"

    @classmethod
    def parse(cls, value: Any) -> Optional["PlotType"]:
        """Return the matching plot type, or None for anything unrecognised."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        if value in _LINE_ALIASES:
            return cls.line
        try:
            return cls(value)
        except ValueError:
            return None


_LINE_ALIASES = {"lines", "l", "|"}


class GradientScale(str, Enum):
    normal = "normal"
    range = "range"


class PlotColsOptions(BaseModel):
    """Display options for :func:`edakit.viz.columns.plot_cols`.

    ``plot_type`` stays a plain string: an unsupported value is reported as a
    warning at render time rather than rejected here.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    plot_type: str = "auto"
    label_size: float = Field(default=1.0, gt=0)
    color: Any = DEFAULT_COLOR
    gradient: bool = False
    gradient_theme: str = "flame"
    gradient_scale: GradientScale = GradientScale.normal

    # Passed through to the per-cell matplotlib call.
    plot_kwargs: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("plot_type", mode="before")
    @classmethod
    def _plot_type_as_str(cls, v: Any) -> str:
        if isinstance(v, PlotType):
            return v.value
        return str(v)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "PlotColsOptions":
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls.model_validate(data)
