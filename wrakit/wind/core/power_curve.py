import numpy as np
import pandas as pd
from scipy.stats import weibull_min

from ...util import WraError

OUT_OF_RANGE_POLICIES = ("zero", "clamp", "nan")


class PowerCurve:
    """
    Creates a wind turbine's power curve represented by a set of (wind-speed,power) pairs.

    Initialization:

    Parameters
    ----------
        wind_speed : array-like
            The wind speed values in m/s, strictly increasing
        power : array-like
            The corresponding power output in kW
        capacity : float, optional
            The turbine's nameplate capacity in kW, by default the maximal power value
        out_of_range : str, optional
            What power_at() returns for wind speeds outside of the given samples, by default "zero"
              * "zero"  -> 0 kW below the first and above the last sample (cut-in / cut-out)
              * "clamp" -> the power of the nearest sample
              * "nan"   -> NaN, such that these records drop out of energy sums

    Returns
    -------
    PowerCurve object

    """

    def __init__(self, wind_speed, power, capacity=None, out_of_range="zero"):
        self.wind_speed = np.array(wind_speed, dtype=float)
        self.power = np.array(power, dtype=float)

        if not len(self.wind_speed.shape) == 1 or not self.wind_speed.shape == self.power.shape:
            raise WraError("wind_speed and power must be 1-dimensional and of equal length")
        if self.wind_speed.shape[0] < 2:
            raise WraError("A power curve needs at least two samples")
        if not (np.diff(self.wind_speed) > 0).all():
            raise WraError("Power curve wind speeds must be strictly increasing")
        if np.isnan(self.power).any() or (self.power < 0).any():
            raise WraError("Power curve values must be non-negative numbers")
        if not out_of_range in OUT_OF_RANGE_POLICIES:
            raise WraError(
                f"Unknown out_of_range policy '{out_of_range}'. Choose one of: {', '.join(OUT_OF_RANGE_POLICIES)}"
            )

        self.out_of_range = out_of_range
        self.capacity = float(self.power.max() if capacity is None else capacity)
        if not self.capacity > 0:
            raise WraError("Power curve capacity must be positive")

    @property
    def rated_power_mw(self):
        """The nameplate capacity in MW"""
        return self.capacity / 1000

    @property
    def capacity_factor(self):
        """The power curve values relative to the nameplate capacity"""
        return self.power / self.capacity

    def __str__(self):
        out = ""
        for ws, p in zip(self.wind_speed, self.power):
            out += "%6.2f - %8.2f\n" % (ws, p)
        return out

    def __repr__(self):
        return "PowerCurve(%d samples, %.2f-%.2f m/s, %.0f kW, out_of_range='%s')" % (
            len(self.wind_speed),
            self.wind_speed[0],
            self.wind_speed[-1],
            self.capacity,
            self.out_of_range,
        )

    @staticmethod
    def from_csv(path, wind_speed_column=0, power_column=1, capacity=None, out_of_range="zero", **read_csv_kwargs):
        """
        Reads a power curve from a csv file containing one (wind speed, power) pair per row.

        Parameters
        ----------
        path : str
            Path to the csv file.
        wind_speed_column : int or str, optional
            Position or name of the wind speed column, by default 0
        power_column : int or str, optional
            Position or name of the power column in kW, by default 1
        capacity : float, optional
            Nameplate capacity in kW, by default None
        out_of_range : str, optional
            Out-of-range policy, by default "zero"
        read_csv_kwargs : optional
            Will be passed on to pandas.read_csv()

        Returns
        -------
        PowerCurve

        """
        table = pd.read_csv(path, **read_csv_kwargs)

        def _column(col):
            if isinstance(col, int):
                return table.iloc[:, col]
            return table[col]

        return PowerCurve(
            _column(wind_speed_column).values,
            _column(power_column).values,
            capacity=capacity,
            out_of_range=out_of_range,
        )

    @staticmethod
    def from_archive(path_or_url, member, **kwargs):
        """
        Reads a power curve from a member of a zip archive, which is either a
        local file or downloaded temporarily.

        See also
        --------
            wrakit.wind.core.turbine_archive.read_power_curve_archive
            wrakit.wind.core.turbine_archive.download_power_curve
        """
        from .turbine_archive import read_power_curve_archive, download_power_curve

        if str(path_or_url).startswith(("http://", "https://")):
            return download_power_curve(str(path_or_url), member, **kwargs)

        # download options have no meaning for a local archive
        kwargs.pop("timeout", None)
        kwargs.pop("verbose", None)
        return read_power_curve_archive(path_or_url, member, **kwargs)

    def power_at(self, wind_speed):
        """
        Applies the invoking power curve to the given wind speeds by piecewise-linear interpolation.

        Parameters
        ----------
        wind_speed : numeric or array_like
            Wind speeds in m/s, usually density corrected and at hub height.

        Returns
        -------
        numeric or array_like
            Corresponding power output in kW. Wind speeds outside of the
            sampled range follow the 'out_of_range' policy, NaN wind speeds
            result in NaN.

        """
        ws = np.asarray(wind_speed, dtype=float)

        if self.out_of_range == "zero":
            left, right = 0.0, 0.0
        elif self.out_of_range == "clamp":
            left, right = self.power[0], self.power[-1]
        else:
            left, right = np.nan, np.nan

        output = np.interp(ws, self.wind_speed, self.power, left=left, right=right)
        output = np.where(np.isnan(ws), np.nan, output)

        if isinstance(wind_speed, pd.Series):
            return pd.Series(output, index=wind_speed.index, name="power_kw")
        if isinstance(wind_speed, pd.DataFrame):
            return pd.DataFrame(output, index=wind_speed.index, columns=wind_speed.columns)
        if output.ndim == 0:
            return float(output)
        return output

    def expected_capacity_factor_from_weibull(self, scale, shape=2):
        """
        Computes the expected average capacity factor of a wind turbine based on a Weibull distribution of wind speeds.

        Parameters
        ----------
        scale : float
            Weibull scale parameter in m/s

        shape : float, optional
            Weibull shape parameter, by default 2

        Returns
        -------
        numeric
            Average capacity factor

        See also
        -------
            wrakit.wind.core.wind_statistics.fit_weibull

        """
        dws = 0.001
        ws = np.arange(0, 40, dws)
        pdf = weibull_min.pdf(ws, shape, loc=0, scale=scale)

        gen = np.interp(ws, self.wind_speed, self.capacity_factor, left=0, right=0)
        if self.out_of_range == "clamp":
            gen[ws < self.wind_speed[0]] = self.capacity_factor[0]
            gen[ws > self.wind_speed[-1]] = self.capacity_factor[-1]

        # Done
        meanCapFac = (gen * pdf).sum() * dws
        return meanCapFac
