from .energy_workflow_manager import EnergyWorkflowManager
from .workflows import (
    WindEnergyAssessment,
    power_curve_from_config,
    wind_energy_from_frame,
    wind_energy_wtk,
)
