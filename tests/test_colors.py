import numpy as np
import pandas as pd
import pytest
from matplotlib.colors import to_hex

from edakit.viz.colors import (
    as_ordinal,
    discrete_colors,
    gradient_colors,
    rescale,
    resolve_theme,
)


def test_flame_runs_yellow_to_red():
    ramp = resolve_theme("flame")(10)
    assert len(ramp) == 10
    assert ramp[0] == to_hex("yellow")
    assert ramp[-1] == to_hex("red")


def test_rainbow_anchors():
    ramp = resolve_theme("rainbow")(6)
    assert ramp[0] == to_hex("blue")
    assert ramp[-1] == to_hex("red")


def test_unknown_theme_falls_back_to_gray_ramp():
    ramp = resolve_theme("no-such-theme")(5)
    assert ramp == resolve_theme("anything else")(5)
    assert ramp[0] == to_hex("lightgray")
    assert ramp[-1] == to_hex("black")


@pytest.mark.parametrize("mode", ["normal", "range"])
def test_rescale_stays_in_bucket_range(mode):
    values = np.concatenate([np.random.default_rng(0).normal(size=200), [25.0, -25.0]])
    idx = rescale(values, mode, n_buckets=10)
    assert idx.min() >= 1
    assert idx.max() <= 10
    assert idx.dtype.kind == "i"


def test_range_mode_puts_extremes_at_the_ends():
    idx = rescale([0.0, 5.0, 10.0, 1000.0], "range", n_buckets=10)
    assert idx[0] == 1
    assert idx[-1] == 10


def test_normal_mode_is_monotonic():
    values = [1.0, 4.0, 2.0, 8.0, 3.0]
    idx = rescale(values, "normal")
    order = np.argsort(values)
    assert list(idx[order]) == sorted(idx)


def test_constant_values_use_middle_bucket():
    assert rescale([3.0, 3.0, 3.0], "normal").tolist() == [6, 6, 6]
    assert rescale([3.0, 3.0, 3.0], "range").tolist() == [6, 6, 6]


def test_rescale_rejects_unknown_mode():
    with pytest.raises(ValueError):
        rescale([1.0, 2.0], "log")


def test_gradient_colors_come_from_ramp():
    ramp = resolve_theme("blue")(10)
    colors = gradient_colors([1.0, 2.0, 3.0, 4.0], theme="blue", scale="range")
    assert colors[0] == ramp[0]
    assert colors[-1] == ramp[-1]


def test_categories_become_ordinal_codes():
    codes = as_ordinal(pd.Series(["setosa", "virginica", "setosa", "versicolor"]))
    assert codes.tolist() == [1.0, 3.0, 1.0, 2.0]


def test_discrete_colors_single_color_passes_through():
    assert discrete_colors("darkgray", 5) == "darkgray"


def test_discrete_colors_recycles_valid_colors():
    assert discrete_colors(["red", "blue"], 5) == ["red", "blue", "red", "blue", "red"]


def test_discrete_colors_maps_categories_to_palette():
    colors = discrete_colors(["a", "b", "a", "c"], 4)
    assert colors[0] == colors[2]
    assert len({colors[0], colors[1], colors[3]}) == 3
