import pathlib

from wrakit import TEST_DATA
from wrakit.wind.core.power_curve import PowerCurve
from wrakit.util import WraError

import numpy as np
import pandas as pd
import pytest


def test_PowerCurve___init__(pt_power_curve):
    assert pt_power_curve.wind_speed.shape == (7,)
    assert pt_power_curve.capacity == 1000
    assert pt_power_curve.rated_power_mw == 1.0
    assert pt_power_curve.out_of_range == "zero"
    assert np.isclose(pt_power_curve.capacity_factor.max(), 1.0)
    assert np.isclose(pt_power_curve.capacity_factor[3], 0.5)

    pc = PowerCurve([1, 2, 3], [0, 100, 200], capacity=250)
    assert pc.rated_power_mw == 0.25
    assert "PowerCurve(3 samples" in repr(pc)
    assert len(str(pc).splitlines()) == 3


@pytest.mark.parametrize(
    "ws,power,kwargs",
    [
        ([1, 2], [0], {}),
        ([1], [0], {}),
        ([1, 1, 2], [0, 1, 2], {}),
        ([2, 1], [0, 1], {}),
        ([1, 2], [0, -1], {}),
        ([1, 2], [0, np.nan], {}),
        ([1, 2], [0, 0], {}),
        ([1, 2], [0, 1], {"out_of_range": "extrapolate"}),
    ],
)
def test_PowerCurve_invalid(ws, power, kwargs):
    with pytest.raises(WraError):
        PowerCurve(ws, power, **kwargs)


def test_PowerCurve_power_at_samples(pt_power_curve):
    for ws, p in zip(pt_power_curve.wind_speed, pt_power_curve.power):
        assert pt_power_curve.power_at(ws) == p

    assert (pt_power_curve.power_at(pt_power_curve.wind_speed) == pt_power_curve.power).all()
    assert pt_power_curve.power_at(8) == 500


def test_PowerCurve_power_at_between_samples(pt_power_curve):
    assert np.isclose(pt_power_curve.power_at(7), 350)
    assert np.isclose(pt_power_curve.power_at(3.5), 25)

    ws = pt_power_curve.wind_speed
    p = pt_power_curve.power
    for i in range(len(ws) - 1):
        between = np.linspace(ws[i], ws[i + 1], 12)[1:-1]
        output = pt_power_curve.power_at(between)
        assert (output >= min(p[i], p[i + 1])).all()
        assert (output <= max(p[i], p[i + 1])).all()


def test_PowerCurve_power_at_out_of_range():
    ws = [3, 4, 12, 25]
    power = [20, 50, 1000, 900]

    pc = PowerCurve(ws, power)
    assert pc.power_at(1.0) == 0
    assert pc.power_at(30.0) == 0

    pc = PowerCurve(ws, power, out_of_range="clamp")
    assert pc.power_at(1.0) == 20
    assert pc.power_at(30.0) == 900

    pc = PowerCurve(ws, power, out_of_range="nan")
    assert np.isnan(pc.power_at(1.0))
    assert np.isnan(pc.power_at(30.0))
    assert pc.power_at(3.0) == 20

    # never negative below the first sample
    pc = PowerCurve(ws, power)
    assert (pc.power_at(np.linspace(-5, 3, 20)) >= 0).all()


def test_PowerCurve_power_at_types(pt_power_curve):
    assert isinstance(pt_power_curve.power_at(8), float)
    assert np.isnan(pt_power_curve.power_at(np.nan))

    output = pt_power_curve.power_at(np.array([8.0, np.nan, 30.0]))
    assert output[0] == 500
    assert np.isnan(output[1])
    assert output[2] == 0

    idx = pd.date_range("2012-01-01", periods=2, freq="h", tz="UTC")
    output = pt_power_curve.power_at(pd.Series([6.0, 10.0], index=idx))
    assert isinstance(output, pd.Series)
    assert (output.index == idx).all()
    assert (output.values == [200, 800]).all()


def test_PowerCurve_from_csv(sample_power_curve):
    assert sample_power_curve.wind_speed.shape == (30,)
    assert np.isclose(sample_power_curve.wind_speed[0], 0.5)
    assert np.isclose(sample_power_curve.wind_speed[-1], 29.5)
    assert sample_power_curve.capacity == 3000
    assert np.isclose(sample_power_curve.power_at(8.5), 684.7)
    assert np.isclose(sample_power_curve.power_at(20.0), 3000)


def test_PowerCurve_from_archive():
    pc = PowerCurve.from_archive(
        TEST_DATA["power_curves_sample.zip"],
        "turbines/sample_3mw.csv",
        skip_lines=4,
        out_of_range="clamp",
    )

    assert pc.out_of_range == "clamp"
    assert pc.rated_power_mw == 3.0
    assert np.isclose(pc.power_at(8.5), 684.7)

    # path objects and download options are accepted for local archives
    pc = PowerCurve.from_archive(
        pathlib.Path(TEST_DATA["power_curves_sample.zip"]),
        "turbines/sample_3mw.csv",
        skip_lines=4,
        timeout=10,
        verbose=False,
    )
    assert np.isclose(pc.power_at(8.5), 684.7)


def test_expected_capacity_factor_from_weibull(sample_power_curve):
    low = sample_power_curve.expected_capacity_factor_from_weibull(scale=6, shape=2)
    high = sample_power_curve.expected_capacity_factor_from_weibull(scale=9, shape=2)

    assert 0 < low < high < 1

    # a curve at full output over the whole distribution yields a capacity factor of 1
    flat = PowerCurve([0, 40], [1000, 1000], out_of_range="clamp")
    assert np.isclose(flat.expected_capacity_factor_from_weibull(scale=8, shape=2), 1, atol=1e-3)
