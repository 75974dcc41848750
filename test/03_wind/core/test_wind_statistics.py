import numpy as np
import pandas as pd
from scipy.stats import weibull_min

from wrakit.wind.core.wind_statistics import (
    WeibullFit,
    fit_weibull,
    weibull_pdf,
    direction_frequency,
)
from wrakit.util import WraError
import pytest


def test_fit_weibull():
    ws = weibull_min.rvs(2.0, scale=8.0, size=20000, random_state=42)
    fit = fit_weibull(np.concatenate([ws, [np.nan, 0.0, -1.0]]))

    assert isinstance(fit, WeibullFit)
    assert abs(fit.shape - 2.0) < 0.1
    assert abs(fit.scale - 8.0) < 0.2

    with pytest.raises(WraError):
        fit_weibull([np.nan, 0, 3.0])
    with pytest.raises(WraError):
        fit_weibull([8.0] * 12)


def test_weibull_pdf():
    x = np.linspace(0, 40, 4001)
    pdf = weibull_pdf(x, 2.0, 8.0)

    assert pdf[0] == 0
    assert np.isclose(pdf.sum() * (x[1] - x[0]), 1, atol=1e-3)


def test_direction_frequency():
    table = direction_frequency([0, 10, 350, 90, 180, 270, np.nan], sectors=4)

    assert list(table.index) == [0, 90, 180, 270]
    assert list(table.columns) == ["frequency"]
    assert np.isclose(table.frequency.iloc[0], 50)
    assert np.allclose(table.frequency.iloc[1:], 100 / 6)
    assert np.isclose(table.values.sum(), 100)


def test_direction_frequency_compass():
    directions = np.arange(0, 360, 7.5)
    table = direction_frequency(directions)

    assert table.shape == (16, 2)
    assert table.label.iloc[0] == "N"
    assert table.label.iloc[4] == "E"
    assert np.isclose(table.frequency.sum(), 100)
    assert np.isclose(table.index[1], 22.5)


def test_direction_frequency_speed_bins():
    directions = [0, 0, 90, 180, 180]
    speeds = [2, 7, 3, 6, 12]
    table = direction_frequency(directions, speeds, sectors=4, speed_bins=[0, 5, 10])

    assert table.shape == (4, 2)
    assert np.isclose(table.values.sum(), 100)
    # the 12 m/s record is outside the bins
    assert np.isclose(table.iloc[0, 0], 25)
    assert np.isclose(table.iloc[0, 1], 25)
    assert np.isclose(table.iloc[1, 0], 25)
    assert np.isclose(table.iloc[2, 1], 25)
    assert np.isclose(table.iloc[3].sum(), 0)

    with pytest.raises(WraError):
        direction_frequency(directions, sectors=4, speed_bins=[0, 5, 10])
