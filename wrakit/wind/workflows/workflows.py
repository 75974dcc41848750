# import primary packages
from collections import namedtuple
import datetime
import warnings
# import modules
import wrakit.util as wra_util
import wrakit.weather as wra_weather
from wrakit.util.config import require
from wrakit.wind.core.power_curve import PowerCurve
from wrakit.wind.core.turbine_archive import download_power_curve
from wrakit.wind.core.wind_statistics import fit_weibull
from wrakit.wind.workflows.energy_workflow_manager import EnergyWorkflowManager

WindEnergyAssessment = namedtuple(
    "WindEnergyAssessment", "observations power_curve monthly annual weibull"
)


def power_curve_from_config(config, verbose=False):
    """
    Downloads the power curve described by the 'power_curve_archive' section of a configuration.

    Parameters
    ----------
    config : dict
        A configuration as returned by wrakit.load_config()
    verbose : bool, optional
        If True, progress messages are printed, by default False

    Returns
    -------
    PowerCurve

    """
    archive = config["power_curve_archive"]
    return download_power_curve(
        require(config, "power_curve_archive", "url"),
        require(config, "power_curve_archive", "member"),
        skip_lines=archive["skip_lines"],
        n_rows=archive["n_rows"],
        power_column=archive["power_column"],
        first_wind_speed=archive["first_wind_speed"],
        wind_speed_step=archive["wind_speed_step"],
        out_of_range=config["power_curve"]["out_of_range"],
        timeout=archive["timeout"],
        verbose=verbose,
    )


def wind_energy_from_frame(
    observations,
    power_curve,
    samples_per_hour=None,
    config=None,
    verbose=False,
):
    """
    Estimates the energy capture of one turbine from an observation table.

    Parameters
    ----------
    observations : pandas.DataFrame
        Time-indexed table with 'wind_speed', 'air_temperature' and
        'air_pressure' columns, e.g. from wrakit.weather.parse_wtk_csv()
    power_curve : PowerCurve
        The turbine's power curve in kW.
    samples_per_hour : float, optional
        Records per hour, by default inferred from the time stamps
    config : dict, optional
        A configuration as returned by wrakit.load_config(), by default None
    verbose : bool, optional
        If True, progress messages are printed, by default False

    Returns
    -------
    WindEnergyAssessment
        observations : the input joined with air_density, corrected_wind_speed and power_kw
        power_curve  : the applied PowerCurve
        monthly      : pandas.DataFrame of monthly aggregates
        annual       : AnnualSummary
        weibull      : WeibullFit of the raw wind speeds, None if they cannot be fitted

    """
    if config is None:
        config = wra_util.load_config()

    wf = EnergyWorkflowManager(
        observations,
        samples_per_hour=samples_per_hour,
        gas_constant=config["air_density"]["gas_constant"],
        pressure_scale=config["air_density"]["pressure_scale"],
    )

    # density is computed over the complete series before any correction
    wf.compute_air_density()
    wf.apply_air_density_correction_to_wind_speeds()
    wf.simulate(power_curve, verbose=verbose)

    monthly = wf.monthly_summary()
    annual = wf.annual_summary()

    if verbose:
        print(
            datetime.datetime.now(),
            f"Annual energy: {annual.energy_mwh:.1f} MWh, capacity factor: {annual.capacity_factor * 100:.1f}%",
            flush=True,
        )

    try:
        weibull = fit_weibull(observations["wind_speed"].values)
    except wra_util.WraError as e:
        warnings.warn(f"Skipping the Weibull fit: {e}")
        weibull = None

    return WindEnergyAssessment(
        observations=wf.to_frame(),
        power_curve=power_curve,
        monthly=monthly,
        annual=annual,
        weibull=weibull,
    )


def wind_energy_wtk(
    latitude,
    longitude,
    year,
    power_curve=None,
    config=None,
    verbose=False,
):
    """
    Assesses the energy capture of a wind turbine at a site using one year of
    NREL WIND Toolkit data [1].

    Parameters
    ----------
    latitude : float
        Site latitude in degrees.
    longitude : float
        Site longitude in degrees.
    year : int
        The calendar year to assess.
    power_curve : PowerCurve or str, optional
        The turbine's power curve, by default None
          * If a PowerCurve is given, it is used as is
          * If a str is given, it is read as a (wind speed, power) csv file
          * If None, the power curve archive of the configuration is downloaded
    config : dict, optional
        A configuration as returned by wrakit.load_config(), by default None
    verbose : bool, optional
        If True, progress messages are printed, by default False

    Returns
    -------
    WindEnergyAssessment
        See wind_energy_from_frame()

    Raises
    ------
    DataAcquisitionError
        If any download fails. Nothing is retried, the whole run stops.

    Sources
    ------
    [1] Draxl, C., Hodge, B.M., Clifton, A., & McCaa, J. (2015). The Wind Integration National Dataset (WIND) Toolkit. Applied Energy, 151, 355-366.
    """
    if config is None:
        config = wra_util.load_config()

    if power_curve is None:
        power_curve = power_curve_from_config(config, verbose=verbose)
    elif isinstance(power_curve, str):
        power_curve = PowerCurve.from_csv(
            power_curve, out_of_range=config["power_curve"]["out_of_range"]
        )

    observations = wra_weather.fetch_wtk_series(
        latitude, longitude, year, config=config, verbose=verbose
    )

    return wind_energy_from_frame(
        observations,
        power_curve,
        samples_per_hour=60 / config["wtk"]["interval"],
        config=config,
        verbose=verbose,
    )
