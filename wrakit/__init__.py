__version__ = "0.1.0"

from . import util
from . import weather
from . import wind
from . import report

from .util import load_config, WraError, WraConfigError, DataAcquisitionError
from .default_config import DEFAULT_CONFIG
from .wind import PowerCurve, EnergyWorkflowManager, wind_energy_wtk, wind_energy_from_frame

from ._test import TEST_DATA
