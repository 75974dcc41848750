import numpy as np
import pandas as pd

DRY_AIR_GAS_CONSTANT = 287.0  # Specific gas constant of dry air [J/(kg·K)]


def compute_air_density(temperature=288.15, pressure=101325, gas_constant=DRY_AIR_GAS_CONSTANT, pressure_scale=1.0):
    """
    Computes air density from the ideal gas law for dry air.

    Parameters
    ----------
    temperature : float or array-like
        Air temperature in K, by default 288.15
    pressure : float or array-like
        Air pressure, in Pa unless 'pressure_scale' says otherwise, by default 101325
    gas_constant : float, optional
        Specific gas constant in J/(kg·K), by default 287.0
    pressure_scale : float, optional
        Factor converting the given pressure to Pa, by default 1.0
          * Pa / (J/(kg·K) · K) already equals kg/m3, so Pa inputs need no scaling
          * use 1000 for kPa and 100 for hPa inputs

    Returns
    -------
    float or array-like
        Air density in kg/m3. Records with a missing or non-positive temperature
        or pressure result in NaN. A pandas Series input keeps its index.

    """
    index = None
    if isinstance(temperature, pd.Series):
        index = temperature.index
    elif isinstance(pressure, pd.Series):
        index = pressure.index

    t = np.asarray(temperature, dtype=float)
    p = np.asarray(pressure, dtype=float) * pressure_scale

    valid = (t > 0) & (p > 0)  # False for NaN as well
    with np.errstate(divide="ignore", invalid="ignore"):
        rho = np.where(valid, p / (gas_constant * t), np.nan)

    if index is not None:
        return pd.Series(rho, index=index, name="air_density")
    if rho.ndim == 0:
        return float(rho)
    return rho
