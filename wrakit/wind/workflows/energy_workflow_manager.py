from collections import OrderedDict
import datetime
import warnings

import numpy as np
import pandas as pd

from ... import util as wra_util
from .. import core as wra_wind_core


class EnergyWorkflowManager:
    """
    Helps managing the logical workflow for estimating the energy capture of a
    single wind turbine from a meteorological time series.

    The workflow has two phases: first the air density of every record and the
    series mean density are computed, then the wind speeds are corrected
    against that mean and run through a power curve. Aggregates are always
    recomputed from 'sim_data', so repeated calls give identical results.

    Initialization:

    Parameters
    ----------
    observations : pandas.DataFrame
        Records indexed by a DatetimeIndex. It must include the column:
            'wind_speed' [m/s]
        and, for the air density correction:
            'air_temperature' [K]
            'air_pressure' [Pa, see 'pressure_scale']

    samples_per_hour : float, optional
        Records per hour, by default inferred from the time stamps

    gas_constant : float, optional
        Specific gas constant of dry air in J/(kg·K), by default 287.0

    pressure_scale : float, optional
        Factor converting 'air_pressure' to Pa, by default 1.0

    """

    def __init__(self, observations, samples_per_hour=None, gas_constant=287.0, pressure_scale=1.0):
        assert isinstance(observations, pd.DataFrame)
        assert isinstance(observations.index, pd.DatetimeIndex), "observations must be indexed by time stamps"
        assert "wind_speed" in observations.columns, "observations need a 'wind_speed' column"
        assert not observations.index.has_duplicates, "time stamps must be unique"
        assert observations.index.is_monotonic_increasing, "time stamps must be increasing"

        self.observations = observations.copy()
        self.time_index = self.observations.index

        if samples_per_hour is None:
            samples_per_hour = wra_wind_core.energy_capture.infer_samples_per_hour(self.time_index)
        self.samples_per_hour = float(samples_per_hour)

        self.gas_constant = gas_constant
        self.pressure_scale = pressure_scale

        self.power_curve = None
        self.sim_data = OrderedDict()
        self.sim_data["wind_speed"] = self.observations["wind_speed"].values.astype(float)

    # STAGE 1: air density

    def compute_air_density(self):
        """
        Computes the air density of every record and the series mean density.

        Return
        ------
            A reference to the invoking EnergyWorkflowManager

        """
        assert "air_temperature" in self.observations.columns, "observations need an 'air_temperature' column"
        assert "air_pressure" in self.observations.columns, "observations need an 'air_pressure' column"

        self.sim_data["air_density"] = wra_util.compute_air_density(
            self.observations["air_temperature"].values,
            self.observations["air_pressure"].values,
            gas_constant=self.gas_constant,
            pressure_scale=self.pressure_scale,
        )

        rho = self.sim_data["air_density"]
        if np.isnan(rho).all():
            warnings.warn(
                "No record has a valid temperature and pressure, corrected wind speeds will be NaN.",
                RuntimeWarning,
            )
            self.mean_air_density = np.nan
        else:
            self.mean_air_density = float(np.nanmean(rho))
        return self

    # STAGE 2: wind speed correction and power

    def apply_air_density_correction_to_wind_speeds(self):
        """
        Rescales all wind speeds to the series mean air density.

        Return
        ------
            A reference to the invoking EnergyWorkflowManager

        """
        if not "air_density" in self.sim_data:
            self.compute_air_density()

        self.sim_data["corrected_wind_speed"] = (
            wra_wind_core.air_density_adjustment.apply_air_density_adjustment(
                self.sim_data["wind_speed"],
                self.sim_data["air_density"],
                reference_density=self.mean_air_density,
            )
        )
        return self

    def simulate(self, power_curve, verbose=False):
        """
        Applies a power curve to the (corrected) wind speeds.

        Parameters
        ----------
        power_curve : PowerCurve
            The turbine's power curve in kW.

        verbose : bool, optional
            If True, a summary is printed, by default False

        Return
        ------
            A reference to the invoking EnergyWorkflowManager

        Notes
        -----
        If apply_air_density_correction_to_wind_speeds() has not been called,
        the raw wind speeds are used.

        """
        if not isinstance(power_curve, wra_wind_core.power_curve.PowerCurve):
            raise wra_util.WraError("power_curve must be a PowerCurve, not " + str(type(power_curve)))

        ws = self.sim_data.get("corrected_wind_speed", self.sim_data["wind_speed"])

        self.power_curve = power_curve
        self.sim_data["power_kw"] = wra_wind_core.energy_capture.estimate_power(ws, power_curve)

        if verbose:
            missing = int(np.isnan(self.sim_data["power_kw"]).sum())
            print(
                datetime.datetime.now(),
                f"Simulated {len(ws)} records at {self.samples_per_hour:g} samples/h, {missing} without power.",
                flush=True,
            )
        return self

    # STAGE 3: outputs

    def to_frame(self):
        """Returns the observations joined with all simulated variables"""
        out = self.observations.copy()
        for key, value in self.sim_data.items():
            if key == "wind_speed":
                continue
            out[key] = value
        return out

    def monthly_summary(self):
        """
        Monthly hours, mean raw wind speed, energy [MWh] and net capacity factor.

        See also
        --------
            wrakit.wind.core.energy_capture.aggregate_monthly
        """
        assert "power_kw" in self.sim_data, "simulate() has not been called"

        frame = pd.DataFrame(
            {"wind_speed": self.sim_data["wind_speed"], "power_kw": self.sim_data["power_kw"]},
            index=self.time_index,
        )
        return wra_wind_core.energy_capture.aggregate_monthly(
            frame,
            rated_power_mw=self.power_curve.rated_power_mw,
            samples_per_hour=self.samples_per_hour,
        )

    def annual_summary(self):
        """
        Annual hours, mean wind speed, energy [MWh] and net capacity factor.

        See also
        --------
            wrakit.wind.core.energy_capture.aggregate_annual
        """
        return wra_wind_core.energy_capture.aggregate_annual(
            self.monthly_summary(), rated_power_mw=self.power_curve.rated_power_mw
        )
