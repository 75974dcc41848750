import numpy as np
import pandas as pd

import wrakit as wra
import pytest


@pytest.fixture
def observations():
    return wra.weather.parse_wtk_csv(wra.TEST_DATA["wtk_sample.csv"])


@pytest.fixture
def sample_power_curve():
    return wra.PowerCurve.from_csv(wra.TEST_DATA["power_curve_sample.csv"])


@pytest.fixture
def pt_power_curve():
    # 500 kW at 8 m/s, 1000 kW rated
    ws = [3, 4, 6, 8, 10, 12, 25]
    power = [0, 50, 200, 500, 800, 1000, 1000]
    return wra.PowerCurve(ws, power)


@pytest.fixture
def constant_day():
    """12 records in 5-minute steps with constant conditions"""
    times = pd.date_range("2012-03-01 00:00", periods=12, freq="5min", tz="UTC")
    return pd.DataFrame(
        {
            "wind_speed": np.full(12, 8.0),
            "wind_direction": np.linspace(0, 330, 12),
            "air_temperature": np.full(12, 288.0),
            "air_pressure": np.full(12, 101325.0),
        },
        index=times,
    )
