from collections import namedtuple
import numpy as np
import pandas as pd
from scipy.stats import weibull_min

from ...util import WraError

WeibullFit = namedtuple("WeibullFit", "shape scale")

COMPASS_16 = [
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
]


def fit_weibull(wind_speed):
    """
    Fits a two-parameter Weibull distribution to observed wind speeds.

    Parameters
    ----------
    wind_speed : array-like
        Wind speeds in m/s. NaN and non-positive values are ignored.

    Returns
    -------
    WeibullFit
        (shape, scale) with the scale in m/s

    """
    ws = np.asarray(wind_speed, dtype=float).ravel()
    ws = ws[np.isfinite(ws) & (ws > 0)]
    if ws.shape[0] < 2:
        raise WraError("At least two positive wind speeds are needed for a Weibull fit")
    if ws.min() == ws.max():
        raise WraError("Wind speeds do not vary, a Weibull distribution cannot be fitted")

    shape, _, scale = weibull_min.fit(ws, floc=0)
    return WeibullFit(float(shape), float(scale))


def weibull_pdf(wind_speed, shape, scale):
    """Probability density of a two-parameter Weibull distribution at the given wind speeds"""
    return weibull_min.pdf(wind_speed, shape, loc=0, scale=scale)


def direction_frequency(wind_direction, wind_speed=None, sectors=16, speed_bins=None):
    """
    Tabulates how often the wind blows from each compass sector, as needed for a wind rose.

    Parameters
    ----------
    wind_direction : array-like
        Wind directions in degrees (meteorological convention, 0 = north).
    wind_speed : array-like, optional
        Matching wind speeds in m/s, only needed with 'speed_bins', by default None
    sectors : int, optional
        Number of equally wide sectors, the first one centered on north, by default 16
    speed_bins : array-like, optional
        Wind speed bin edges in m/s, by default None
          * If given, each sector is split into the speed classes

    Returns
    -------
    pandas.DataFrame
        Indexed by the sector center in degrees. Holds the column "frequency"
        or one column per speed class, in percent of all records with a
        known direction (and speed), adding up to 100.

    """
    direction = np.asarray(wind_direction, dtype=float)
    if not sectors > 0:
        raise WraError("sectors must be positive")

    width = 360 / sectors
    centers = np.arange(sectors) * width

    valid = np.isfinite(direction)
    if speed_bins is not None:
        if wind_speed is None:
            raise WraError("wind_speed is needed to split sectors by speed_bins")
        speed = np.asarray(wind_speed, dtype=float)
        valid &= np.isfinite(speed)

    sector = (np.floor(((direction[valid] % 360) + width / 2) / width) % sectors).astype(int)

    if speed_bins is None:
        counts = np.bincount(sector, minlength=sectors)
        table = pd.DataFrame({"frequency": counts}, index=centers)
    else:
        speed_class = pd.cut(speed[valid], bins=speed_bins, include_lowest=True)
        codes = np.asarray(speed_class.codes)
        inside = codes >= 0  # speeds outside of the bins are not counted

        counts = np.zeros((sectors, len(speed_class.categories)))
        np.add.at(counts, (sector[inside], codes[inside]), 1)
        table = pd.DataFrame(counts, columns=[str(c) for c in speed_class.categories])

    table.index = pd.Index(centers, name="sector")
    total = table.values.sum()
    if total > 0:
        table = table / total * 100
    if sectors == 16:
        table.insert(0, "label", COMPASS_16)
    return table
