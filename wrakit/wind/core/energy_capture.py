from collections import namedtuple
import numpy as np
import pandas as pd

from ...util import WraError

AnnualSummary = namedtuple("AnnualSummary", "hours mean_wind_speed energy_mwh capacity_factor")

MONTHLY_COLUMNS = ["year", "month", "hours", "mean_wind_speed", "energy_mwh", "capacity_factor"]


def infer_samples_per_hour(time_index):
    """
    Determines the number of records per hour from the median spacing of a time index.

    Parameters
    ----------
    time_index : pandas.DatetimeIndex
        Time stamps of the records, at least two.

    Returns
    -------
    float
        e.g. 12 for 5-minute data or 1 for hourly data

    """
    time_index = pd.DatetimeIndex(time_index)
    if len(time_index) < 2:
        raise WraError("At least two time stamps are needed to infer the sampling rate")

    step = pd.Series(time_index).diff().dropna().median().total_seconds()
    if not step > 0:
        raise WraError("Time stamps must be strictly increasing")
    return 3600 / step


def estimate_power(wind_speed, power_curve):
    """Instantaneous power output in kW for each (corrected) wind speed record"""
    return power_curve.power_at(wind_speed)


def aggregate_monthly(frame, rated_power_mw, samples_per_hour, wind_speed_column="wind_speed", power_column="power_kw"):
    """
    Aggregates instantaneous power into monthly energy and net capacity factor.

    Parameters
    ----------
    frame : pandas.DataFrame
        Records indexed by time stamps, containing the raw wind speed in m/s
        and the instantaneous power in kW.
    rated_power_mw : float
        The turbine's nameplate capacity in MW.
    samples_per_hour : float
        Number of records per hour, e.g. 12 for 5-minute data.
    wind_speed_column : str, optional
        Column of the raw wind speed, by default "wind_speed"
    power_column : str, optional
        Column of the power output, by default "power_kw"

    Returns
    -------
    pandas.DataFrame
        One row per calendar month found in the time stamps with the columns:
            year, month, hours, mean_wind_speed, energy_mwh, capacity_factor

    Notes
    -----
    'hours' counts every record of the month, no matter whether its power is
    known. Missing power values are left out of the energy sum only, so they
    lower the capacity factor of their month.

    """
    assert isinstance(frame.index, pd.DatetimeIndex), "frame must be indexed by time stamps"
    assert rated_power_mw > 0, "rated_power_mw must be positive"
    assert samples_per_hour > 0, "samples_per_hour must be positive"

    if len(frame) == 0:
        return pd.DataFrame(columns=MONTHLY_COLUMNS)

    groups = frame.groupby([frame.index.year, frame.index.month])

    monthly = pd.DataFrame(
        {
            "hours": groups.size() / samples_per_hour,
            "mean_wind_speed": groups[wind_speed_column].mean(),
            # sum() skips NaN, an empty or all-NaN month yields 0
            "energy_mwh": groups[power_column].sum() / (1000 * samples_per_hour),
        }
    )
    monthly["capacity_factor"] = monthly["energy_mwh"] / (monthly["hours"] * rated_power_mw)

    monthly.index.names = ["year", "month"]
    monthly = monthly.reset_index()
    return monthly[MONTHLY_COLUMNS]


def aggregate_annual(monthly, rated_power_mw):
    """
    Combines monthly aggregates into annual totals.

    Parameters
    ----------
    monthly : pandas.DataFrame
        Output of aggregate_monthly().
    rated_power_mw : float
        The turbine's nameplate capacity in MW.

    Returns
    -------
    AnnualSummary
        hours, mean_wind_speed (hour-weighted), energy_mwh and capacity_factor

    """
    hours = float(monthly["hours"].sum())
    energy = float(monthly["energy_mwh"].sum())

    if hours == 0:
        return AnnualSummary(0.0, np.nan, energy, np.nan)

    weights = monthly["hours"].values
    speeds = monthly["mean_wind_speed"].values.astype(float)
    known = ~np.isnan(speeds)
    if known.any():
        mean_ws = float(np.average(speeds[known], weights=weights[known]))
    else:
        mean_ws = np.nan

    return AnnualSummary(
        hours=hours,
        mean_wind_speed=mean_ws,
        energy_mwh=energy,
        capacity_factor=energy / (hours * rated_power_mw),
    )
