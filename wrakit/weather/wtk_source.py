import datetime
import io
import re
import warnings

import numpy as np
import pandas as pd
import requests

from ..util import DataAcquisitionError, WraConfigError, load_config
from ..util.config import require

TIME_COLUMNS = ["year", "month", "day", "hour", "minute"]

# canonical column name -> test applied to the normalized source column name
MEASUREMENTS = [
    ("wind_speed", lambda c: c.startswith("windspeed")),
    ("wind_direction", lambda c: c.startswith("winddirection")),
    ("air_temperature", lambda c: "temperature" in c),
    ("air_pressure", lambda c: "pressure" in c),
    ("power", lambda c: c.startswith("power")),
]

_nonAlphaNumRE = re.compile("[^0-9a-zA-Z]")
_celsiusRE = re.compile(r"\((deg\s*)?C\)|°C")
_pressureUnitRE = re.compile(r"\((k|h)Pa\)")


def normalize_column_name(name):
    """Strips all non-alphanumeric characters from a column name and lower-cases it, e.g. 'wind speed at 100m (m/s)' -> 'windspeedat100mms'"""
    return _nonAlphaNumRE.sub("", str(name)).lower()


def _read_source(source, header_rows):
    if isinstance(source, str) and "\n" in source:
        source = io.StringIO(source)
    return pd.read_csv(source, skiprows=header_rows)


def parse_wtk_csv(source, header_rows=2):
    """
    Parses a WIND Toolkit csv download into an observation table.

    Parameters
    ----------
    source : str or file-like
        A path, an open text stream or the csv text itself.
    header_rows : int, optional
        Number of metadata rows above the column header, by default 2

    Returns
    -------
    pandas.DataFrame
        Indexed by a UTC DatetimeIndex built from the Year, Month, Day, Hour
        and Minute columns, with the columns:
            wind_speed [m/s], wind_direction [deg], air_temperature [K],
            air_pressure [Pa] and, if available, power [MW]

    Notes
    -----
    Temperatures given in °C are converted to K, pressures given in kPa or
    hPa are converted to Pa. Negative wind speeds are set to NaN.
    Time stamps are taken to be UTC. A warning is issued if they span more
    than one calendar year.

    """
    try:
        raw = _read_source(source, header_rows)
    except (OSError, ValueError) as e:
        raise DataAcquisitionError(
            f"Could not read meteorological data: {e}",
            source=source if isinstance(source, str) and not "\n" in source else None,
        ) from e

    names = OrderedColumns(raw.columns)

    missing = [c for c in TIME_COLUMNS[:4] if not c in names.normalized]
    if missing:
        raise DataAcquisitionError(f"Meteorological data lacks the time columns: {', '.join(missing)}")

    try:
        times = pd.DataFrame(
            {c: raw[names.original(c)] if c in names.normalized else 0 for c in TIME_COLUMNS}
        )
        index = pd.DatetimeIndex(pd.to_datetime(times, utc=True), name="time")
    except (ValueError, TypeError) as e:
        raise DataAcquisitionError(f"Could not build time stamps: {e}") from e

    out = pd.DataFrame(index=index)
    for name, matches in MEASUREMENTS:
        col = names.first(matches)
        if col is None:
            if name == "wind_speed":
                raise DataAcquisitionError("Meteorological data lacks a wind speed column")
            if name != "power":
                warnings.warn(f"No '{name}' column found, filling with NaN")
                out[name] = np.nan
            continue

        values = pd.to_numeric(raw[col], errors="coerce").values
        if name == "air_temperature" and _celsiusRE.search(col):
            values = values + 273.15
        elif name == "air_pressure" and _pressureUnitRE.search(col):
            values = values * (1000 if "kPa" in col else 100)
        out[name] = values

    negative = out["wind_speed"] < 0
    if negative.any():
        warnings.warn(f"Setting {negative.sum()} negative wind speed(s) to NaN")
        out.loc[negative, "wind_speed"] = np.nan

    if not out.index.is_monotonic_increasing:
        warnings.warn("Time stamps are not sorted, sorting them")
        out = out.sort_index()
    if out.index.has_duplicates:
        warnings.warn(f"Dropping {out.index.duplicated().sum()} duplicated time stamp(s)")
        out = out[~out.index.duplicated(keep="first")]

    years = out.index.year.unique()
    if len(years) > 1:
        warnings.warn(f"Time stamps span several calendar years: {', '.join(str(y) for y in years)}")

    return out


class OrderedColumns:
    """
    **internal class**

    Looks up the original column names of a table by their normalized form.
    """

    def __init__(self, columns):
        self.columns = list(columns)
        self.normalized = [normalize_column_name(c) for c in self.columns]

    def original(self, normalized_name):
        return self.columns[self.normalized.index(normalized_name)]

    def first(self, test):
        for orig, norm in zip(self.columns, self.normalized):
            if test(norm):
                return orig
        return None


def build_wtk_request(
    latitude,
    longitude,
    year,
    api_key,
    email=None,
    interval=5,
    attributes=None,
    utc=True,
    leap_day=True,
    url=None,
):
    """
    Assembles the address and query parameters of a WIND Toolkit csv download for a single point.

    Returns
    -------
    tuple
        (url, params)

    """
    if url is None:
        url = load_config()["wtk"]["url"]
    if attributes is None:
        attributes = load_config()["wtk"]["attributes"]

    params = {
        "api_key": api_key,
        "wkt": "POINT(%s %s)" % (float(longitude), float(latitude)),
        "names": str(int(year)),
        "interval": str(int(interval)),
        "utc": "true" if utc else "false",
        "leap_day": "true" if leap_day else "false",
        "attributes": ",".join(attributes),
    }
    if email is not None:
        params["email"] = email
    return url, params


def fetch_wtk_series(latitude, longitude, year, config=None, verbose=False):
    """
    Downloads one year of WIND Toolkit observations for a site.

    Parameters
    ----------
    latitude : float
        Site latitude in degrees.
    longitude : float
        Site longitude in degrees.
    year : int
        The calendar year to download.
    config : dict, optional
        A configuration as returned by wrakit.load_config(), by default None
          * The 'wtk' section must provide an api_key (or set NREL_API_KEY)
          * Its 'utc' option must be true, local time stamps are not supported
    verbose : bool, optional
        If True, progress messages are printed, by default False

    Returns
    -------
    pandas.DataFrame
        See parse_wtk_csv()

    Raises
    ------
    DataAcquisitionError
        If the request fails or the response is not a readable csv table.
        Requests are never retried.
    WraConfigError
        If no API key is configured or local time stamps are requested.

    """
    if config is None:
        config = load_config()
    wtk = config["wtk"]
    if not wtk["utc"]:
        raise WraConfigError("Only UTC time stamps are supported, set 'utc: true' in the 'wtk' section")

    url, params = build_wtk_request(
        latitude,
        longitude,
        year,
        api_key=require(config, "wtk", "api_key"),
        email=wtk.get("email"),
        interval=wtk["interval"],
        attributes=wtk["attributes"],
        utc=wtk["utc"],
        leap_day=wtk["leap_day"],
        url=wtk["url"],
    )

    if verbose:
        print(datetime.datetime.now(), f"Requesting WIND Toolkit data for ({latitude}, {longitude}), {year}", flush=True)

    try:
        r = requests.get(url, params=params, timeout=wtk["timeout"])
        r.raise_for_status()
    except requests.RequestException as e:
        raise DataAcquisitionError(
            f"WIND Toolkit request for ({latitude}, {longitude}), {year} failed: {e}", source=url
        ) from e

    try:
        observations = parse_wtk_csv(io.StringIO(r.text), header_rows=wtk["header_rows"])
    except DataAcquisitionError as e:
        raise DataAcquisitionError(str(e), source=url) from e

    if verbose:
        print(datetime.datetime.now(), f"Received {len(observations)} records", flush=True)
    return observations
