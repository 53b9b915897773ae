import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest


@pytest.fixture(autouse=True)
def close_plots():
    try:
        yield
    finally:
        plt.close("all")
