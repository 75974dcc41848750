import numpy as np

from ..wind.core.wind_statistics import direction_frequency, weibull_pdf

COLOR = (0, 91 / 255, 130 / 255)


def _axes(ax, figsize=(7, 3), **subplot_kw):
    import matplotlib.pyplot as plt

    if ax is None:
        _, ax = plt.subplots(figsize=figsize, subplot_kw=subplot_kw)
    return ax


def plot_power_curve(power_curve, ax=None):
    """Plots power [kW] over wind speed [m/s]"""
    ax = _axes(ax)
    ax.plot(power_curve.wind_speed, power_curve.power, color=COLOR, linewidth=3)
    ax.set_xlabel("wind speed [m/s]")
    ax.set_ylabel("power [kW]")
    ax.grid()
    return ax


def plot_wind_speed_series(observations, columns=("wind_speed", "corrected_wind_speed"), ax=None):
    """Plots wind speed time series of an observation table, skipping absent columns"""
    ax = _axes(ax, figsize=(10, 3))
    for col in columns:
        if col in observations.columns:
            ax.plot(observations.index, observations[col], linewidth=0.5, label=col)
    ax.set_ylabel("wind speed [m/s]")
    ax.legend(loc="upper right")
    return ax


def plot_wind_speed_histogram(wind_speed, weibull=None, bins=30, ax=None):
    """
    Plots the wind speed distribution as a density histogram.

    If a WeibullFit is given, its probability density is drawn on top.
    """
    ax = _axes(ax)
    ws = np.asarray(wind_speed, dtype=float)
    ws = ws[np.isfinite(ws)]

    ax.hist(ws, bins=bins, density=True, color=COLOR, alpha=0.6)
    if weibull is not None:
        x = np.linspace(0, ws.max() if len(ws) else 1, 200)
        ax.plot(
            x,
            weibull_pdf(x, weibull.shape, weibull.scale),
            color="k",
            label="Weibull k=%.2f, A=%.2f m/s" % (weibull.shape, weibull.scale),
        )
        ax.legend(loc="upper right")
    ax.set_xlabel("wind speed [m/s]")
    ax.set_ylabel("probability density")
    return ax


def plot_wind_rose(wind_direction, wind_speed=None, sectors=16, speed_bins=None, ax=None):
    """Draws a wind rose as stacked polar bars of the direction_frequency() table"""
    ax = _axes(ax, figsize=(5, 5), projection="polar")
    table = direction_frequency(wind_direction, wind_speed, sectors=sectors, speed_bins=speed_bins)
    table = table.drop(columns="label", errors="ignore")

    theta = np.radians(table.index.values)
    width = 2 * np.pi / sectors
    bottom = np.zeros(len(table))
    for col in table.columns:
        ax.bar(theta, table[col].values, width=width, bottom=bottom, label=col, edgecolor="white")
        bottom += table[col].values

    ax.set_theta_zero_location("N")
    ax.set_theta_direction(-1)
    if speed_bins is not None:
        ax.legend(loc="lower left", bbox_to_anchor=(1.05, 0), title="m/s")
    return ax


def plot_monthly_energy(monthly, ax=None):
    """Bars of monthly energy [MWh] with the capacity factor [%] on a second axis"""
    ax = _axes(ax)
    x = np.arange(len(monthly))
    labels = ["%02d/%d" % (m, y) for y, m in zip(monthly["year"], monthly["month"])]

    ax.bar(x, monthly["energy_mwh"], color=COLOR)
    ax.set_xticks(x)
    ax.set_xticklabels(labels, rotation=45)
    ax.set_ylabel("energy [MWh]")

    ax2 = ax.twinx()
    ax2.plot(x, monthly["capacity_factor"] * 100, color="k", marker="o")
    ax2.set_ylabel("capacity factor [%]")
    return ax
