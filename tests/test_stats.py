import numpy as np
import pandas as pd
import pytest

from edakit.stats.summary import normalize, wmean


def test_normalize_uses_sample_mean_and_sd():
    z = normalize([12, 14, 11, 16])
    assert z == pytest.approx([-0.5637345, 0.3382407, -1.0147221, 1.2402159], abs=1e-6)
    assert np.mean(z) == pytest.approx(0.0, abs=1e-6)
    assert np.std(z, ddof=1) == pytest.approx(1.0, abs=1e-6)


def test_normalize_with_reference_parameters():
    z = normalize([12, 14, 11, 16], mean=10, sd=2)
    assert z.tolist() == [1.0, 2.0, 0.5, 3.0]


def test_normalize_explicit_own_parameters_matches_default():
    x = np.array([3.2, 8.1, 4.4, 9.9, 0.3])
    explicit = normalize(x, mean=np.mean(x), sd=np.std(x, ddof=1))
    assert np.array_equal(explicit, normalize(x))


def test_normalize_keeps_series_index():
    s = pd.Series([12, 14, 11, 16], index=list("abcd"), name="score")
    z = normalize(s, mean=10, sd=2)
    assert isinstance(z, pd.Series)
    assert list(z.index) == list("abcd")
    assert z.name == "score"
    assert z["d"] == 3.0


def test_wmean_with_weights():
    assert wmean([3.5, 5.2, 2.7, 4.2], [1, 2, 1, 6]) == pytest.approx(4.18, abs=1e-2)


def test_wmean_defaults_to_arithmetic_mean():
    assert wmean([3.5, 5.2, 2.7, 4.2]) == pytest.approx(3.9)


def test_wmean_rejects_mismatched_weights():
    with pytest.raises(ValueError, match="same length"):
        wmean([1.0, 2.0, 3.0], [1.0, 2.0])
