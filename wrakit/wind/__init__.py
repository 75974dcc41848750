from .core.air_density_adjustment import apply_air_density_adjustment
from .core.power_curve import PowerCurve, OUT_OF_RANGE_POLICIES
from .core.turbine_archive import (
    read_power_curve_archive,
    download_power_curve,
    wind_speed_bins,
)
from .core.energy_capture import (
    AnnualSummary,
    infer_samples_per_hour,
    estimate_power,
    aggregate_monthly,
    aggregate_annual,
)
from .core.wind_statistics import (
    WeibullFit,
    fit_weibull,
    weibull_pdf,
    direction_frequency,
)

from .workflows.energy_workflow_manager import EnergyWorkflowManager
from .workflows.workflows import *
