import warnings
import numpy as np
import pandas as pd


def apply_air_density_adjustment(wind_speed, air_density, reference_density=None):
    """
    Rescales wind speeds to a reference air density, such that the corrected
    wind speed carries the same power as the measured one (power ~ rho·v³).

    Parameters
    ----------
    wind_speed : float or array-like
        The measured wind speed values in m/s.
    air_density : float or array-like
        The air density of each record in kg/m3. NaN marks records whose
        density could not be computed.
    reference_density : float, optional
        The density to adjust to in kg/m3, by default None
          * If None, the mean density over the entire series is used, so all
            densities must be known before any record is corrected

    Returns
    -------
    numeric or array-like
        The air density corrected wind speed in m/s:
            v_corrected = v * (rho / rho_ref)^(1/3)
        Records with a NaN density stay NaN. A pandas Series input keeps its index.

    """
    index = None
    if isinstance(wind_speed, pd.Series):
        index = wind_speed.index

    ws = np.asarray(wind_speed, dtype=float)
    rho = np.asarray(air_density, dtype=float)

    # Phase 1: the baseline is computed over the whole series
    if reference_density is None:
        if np.isnan(rho).all():
            warnings.warn(
                "No valid air density available, corrected wind speeds will be NaN.",
                RuntimeWarning,
            )
            reference_density = np.nan
        else:
            reference_density = np.nanmean(rho)

    # Phase 2: map the correction over every record
    corrected = ws * np.power(rho / reference_density, 1 / 3)

    if index is not None:
        return pd.Series(corrected, index=index, name="corrected_wind_speed")
    if corrected.ndim == 0:
        return float(corrected)
    return corrected
