import numpy as np
import pandas as pd

from wrakit.report import monthly_table, annual_table
from wrakit.wind.core.energy_capture import AnnualSummary


def test_monthly_table():
    monthly = pd.DataFrame(
        {
            "year": [2012, 2012],
            "month": [1, 2],
            "hours": [744.0, 696.0],
            "mean_wind_speed": [7.234, 6.95],
            "energy_mwh": [1234.56, 987.65],
            "capacity_factor": [0.5531, 0.4731],
        }
    )
    table = monthly_table(monthly)

    assert list(table.columns) == [
        "Month", "Hours", "Mean wind speed [m/s]", "Energy [MWh]", "Capacity factor [%]",
    ]
    assert list(table.Month) == ["Jan 2012", "Feb 2012"]
    assert np.isclose(table["Capacity factor [%]"].iloc[0], 55.3)
    assert np.isclose(table["Mean wind speed [m/s]"].iloc[0], 7.2)
    assert np.isclose(table["Energy [MWh]"].iloc[0], 1234.6)


def test_annual_table():
    table = annual_table(AnnualSummary(8784.0, 7.01, 10500.0, 0.398), decimals=2)

    assert list(table.index) == ["Annual"]
    assert np.isclose(table["Capacity factor [%]"].iloc[0], 39.8)
    assert np.isclose(table["Energy [MWh]"].iloc[0], 10500.0)
