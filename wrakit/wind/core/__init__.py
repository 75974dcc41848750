from . import air_density_adjustment
from . import power_curve
from . import turbine_archive
from . import energy_capture
from . import wind_statistics
