import datetime
import io
import os
import tempfile
import zipfile

import numpy as np
import pandas as pd
import requests

from ...util import DataAcquisitionError, WraError
from .power_curve import PowerCurve


def wind_speed_bins(n_rows=30, first_wind_speed=0.5, wind_speed_step=1.0):
    """The wind speed bins belonging to the power values of an archived power curve, by default 0.5, 1.5, ..., 29.5 m/s"""
    return first_wind_speed + wind_speed_step * np.arange(n_rows)


def read_power_curve_lines(fileobj, skip_lines=0, n_rows=30, power_column=-1):
    """
    **internal function**

    Reads 'n_rows' power values from a text stream, beginning 'skip_lines'
    lines below its start. Rows may hold a single value or several comma
    separated ones, in which case 'power_column' selects the power value.
    """
    table = pd.read_csv(fileobj, skiprows=skip_lines, nrows=n_rows, header=None)
    power = pd.to_numeric(table.iloc[:, power_column], errors="coerce").values

    if len(power) != n_rows or np.isnan(power).any():
        raise ValueError(
            f"Expected {n_rows} numeric power values after line {skip_lines}, found {np.isfinite(power).sum()}"
        )
    return power


def _power_curve_from_zip(archive, member, skip_lines, n_rows, power_column, first_wind_speed, wind_speed_step, capacity, out_of_range):
    if not member in archive.namelist():
        raise KeyError(f"'{member}' is not part of the archive")

    with archive.open(member) as raw:
        power = read_power_curve_lines(
            io.TextIOWrapper(raw, encoding="utf-8", errors="replace"),
            skip_lines=skip_lines,
            n_rows=n_rows,
            power_column=power_column,
        )

    return PowerCurve(
        wind_speed_bins(n_rows, first_wind_speed, wind_speed_step),
        power,
        capacity=capacity,
        out_of_range=out_of_range,
    )


def read_power_curve_archive(
    path,
    member,
    skip_lines=0,
    n_rows=30,
    power_column=-1,
    first_wind_speed=0.5,
    wind_speed_step=1.0,
    capacity=None,
    out_of_range="zero",
):
    """
    Extracts a turbine's power curve from one file of a local zip archive.

    Parameters
    ----------
    path : str, path-like or file-like
        The zip archive.
    member : str
        Path of the turbine file inside the archive.
    skip_lines : int, optional
        Number of lines above the first power value, by default 0
    n_rows : int, optional
        Number of power values (one per wind speed bin), by default 30
    power_column : int, optional
        Position of the power value in each row, by default -1
    first_wind_speed : float, optional
        Wind speed of the first bin in m/s, by default 0.5
    wind_speed_step : float, optional
        Width of the wind speed bins in m/s, by default 1.0
    capacity : float, optional
        Nameplate capacity in kW, by default the maximal power value
    out_of_range : str, optional
        Out-of-range policy of the returned PowerCurve, by default "zero"

    Returns
    -------
    PowerCurve

    """
    try:
        with zipfile.ZipFile(path) as archive:
            return _power_curve_from_zip(
                archive, member, skip_lines, n_rows, power_column,
                first_wind_speed, wind_speed_step, capacity, out_of_range,
            )
    except (zipfile.BadZipFile, KeyError, ValueError, OSError, WraError) as e:
        source = os.fspath(path) if isinstance(path, (str, os.PathLike)) else None
        raise DataAcquisitionError(f"Could not read power curve '{member}': {e}", source=source) from e


def download_power_curve(url, member, timeout=120, verbose=False, **kwargs):
    """
    Downloads a zip archive of turbine files and extracts one power curve from it.

    The archive is written to a temporary file which is deleted once the
    power curve has been read, whether reading succeeded or not.

    Parameters
    ----------
    url : str
        Address of the zip archive.
    member : str
        Path of the turbine file inside the archive.
    timeout : int, optional
        Seconds to wait for the server, by default 120
    verbose : bool, optional
        If True, progress messages are printed, by default False
    kwargs : optional
        Will be passed on to read_power_curve_archive()

    Returns
    -------
    PowerCurve

    """
    if verbose:
        print(datetime.datetime.now(), "Downloading power curve archive from", url, flush=True)

    with tempfile.NamedTemporaryFile(suffix=".zip") as tmp:
        try:
            with requests.get(url, stream=True, timeout=timeout) as r:
                r.raise_for_status()
                for chunk in r.iter_content(chunk_size=1 << 16):
                    tmp.write(chunk)
        except requests.RequestException as e:
            raise DataAcquisitionError(f"Power curve archive download failed: {e}", source=url) from e

        tmp.flush()
        tmp.seek(0)

        try:
            pc = read_power_curve_archive(tmp, member, **kwargs)
        except DataAcquisitionError as e:
            raise DataAcquisitionError(str(e), source=url) from e.__cause__

    if verbose:
        print(datetime.datetime.now(), "Read power curve", member, flush=True)
    return pc
