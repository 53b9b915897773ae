import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import pytest
from matplotlib.colors import to_rgba

from edakit.core.layout import LayoutContext
from edakit.viz.pairs import PairsExplorer, draw_pairs, recolor, threshold_colors


@pytest.fixture
def iris_like():
    rng = np.random.default_rng(1)
    return pd.DataFrame(
        {
            "sepal_length": rng.uniform(4, 8, size=30),
            "sepal_width": rng.uniform(2, 4.5, size=30),
            "petal_length": np.linspace(1, 7, 30),
        }
    )


def test_threshold_scales_percent_into_column_range():
    df = pd.DataFrame({"v": [0.0, 2.0, 5.0, 7.5, 10.0]})
    assert threshold_colors(df, 50, "v") == ["blue", "blue", "red", "red", "red"]
    assert threshold_colors(df, 0, "v") == ["red"] * 5
    assert threshold_colors(df, 100, "v") == ["blue"] * 4 + ["red"]


def test_threshold_custom_colors():
    df = pd.DataFrame({"v": [1.0, 3.0]})
    assert threshold_colors(df, 50, "v", above="black", below="white") == ["white", "black"]


def test_threshold_validates_inputs():
    df = pd.DataFrame({"v": [1.0, 2.0]})
    with pytest.raises(KeyError):
        threshold_colors(df, 10, "missing")
    with pytest.raises(ValueError):
        threshold_colors(df, 120, "v")


def test_draw_pairs_builds_full_matrix(iris_like):
    ctx = LayoutContext(plt.figure())
    before = ctx.state
    colors = threshold_colors(iris_like, 50, "petal_length")
    plot = draw_pairs(iris_like, colors, context=ctx)

    assert plot.axes.shape == (3, 3)
    assert len(plot.collections) == 6
    assert plot.axes[1, 1].texts[0].get_text() == "sepal_width"
    # scatter plus lowess line in every off-diagonal panel
    assert len(plot.axes[0, 1].lines) == 1
    assert ctx.state == before


def test_draw_pairs_needs_two_columns():
    with pytest.raises(ValueError):
        draw_pairs(pd.DataFrame({"a": [1.0, 2.0]}), ["red", "blue"], context=LayoutContext(plt.figure()))


def test_recolor_updates_points(iris_like):
    plot = draw_pairs(iris_like, ["blue"] * 30, smooth=False, context=LayoutContext(plt.figure()))
    recolor(plot, ["red"] * 30, alpha=0.5)
    face = plot.collections[0].get_facecolors()[0]
    assert tuple(face) == pytest.approx(to_rgba("red", 0.5))


def test_explorer_widgets_drive_coloring(iris_like):
    explorer = PairsExplorer(iris_like, figure=plt.figure())
    assert explorer.column == "sepal_length"

    explorer.slider.set_val(0)
    assert explorer.threshold == 0.0
    face = explorer.plot.collections[0].get_facecolors()
    assert all(tuple(f) == pytest.approx(to_rgba("red", 0.3)) for f in face)

    explorer.picker.set_active(2)
    assert explorer.column == "petal_length"

    colors = explorer.update(100, "petal_length")
    assert colors.count("red") == 1
