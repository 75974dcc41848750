from .errors import WraError, WraConfigError, DataAcquisitionError
from .config import load_config
from .air_density import compute_air_density
