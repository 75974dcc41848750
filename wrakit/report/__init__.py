from .tables import monthly_table, annual_table
from . import plots
