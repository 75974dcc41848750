import yaml
from os.path import join, dirname

DEFAULT_CONFIG_PATH = join(dirname(__file__), "default_config.yaml")

DEFAULT_CONFIG = {}
with open(DEFAULT_CONFIG_PATH) as f:
    DEFAULT_CONFIG = yaml.safe_load(f)
