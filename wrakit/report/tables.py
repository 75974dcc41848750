import calendar
import pandas as pd


def monthly_table(monthly, decimals=1):
    """
    Formats monthly aggregates for reporting.

    Parameters
    ----------
    monthly : pandas.DataFrame
        Output of wrakit.wind.aggregate_monthly()
    decimals : int, optional
        Rounding of the numeric columns, by default 1

    Returns
    -------
    pandas.DataFrame
        Columns: Month, Hours, Mean wind speed [m/s], Energy [MWh], Capacity factor [%]

    """
    table = pd.DataFrame(
        {
            "Month": [
                "%s %d" % (calendar.month_abbr[int(m)], int(y))
                for y, m in zip(monthly["year"], monthly["month"])
            ],
            "Hours": monthly["hours"].values,
            "Mean wind speed [m/s]": monthly["mean_wind_speed"].values,
            "Energy [MWh]": monthly["energy_mwh"].values,
            "Capacity factor [%]": monthly["capacity_factor"].values * 100,
        }
    )
    return table.round(decimals)


def annual_table(annual, decimals=1):
    """Formats an AnnualSummary as a single-row table, see monthly_table()"""
    table = pd.DataFrame(
        {
            "Hours": [annual.hours],
            "Mean wind speed [m/s]": [annual.mean_wind_speed],
            "Energy [MWh]": [annual.energy_mwh],
            "Capacity factor [%]": [annual.capacity_factor * 100],
        },
        index=["Annual"],
    )
    return table.round(decimals)
