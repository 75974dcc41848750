import copy
import os
import yaml

from ..default_config import DEFAULT_CONFIG
from .errors import WraConfigError

API_KEY_ENV = "NREL_API_KEY"


def _merge(base, update):
    """Recursively merges 'update' into a copy of 'base'"""
    out = copy.deepcopy(base)
    for key, value in update.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = copy.deepcopy(value)
    return out


def load_config(path=None, **overrides):
    """
    Builds the configuration used by the assessment workflow.

    Parameters
    ----------
    path : str, optional
        A yaml file whose values replace the packaged defaults, by default None
    overrides : dict, optional
        Section-wise overrides applied last, e.g. wtk={"api_key": "..."}

    Returns
    -------
    dict
        A fresh, nested configuration dictionary. Changing it does not affect
        the packaged defaults.

    Notes
    -----
    If no WIND Toolkit API key is configured, the value of the 'NREL_API_KEY'
    environment variable is used.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if path is not None:
        if not os.path.isfile(path):
            raise FileNotFoundError(f"Configuration file does not exist: {path}")
        with open(path) as f:
            user_config = yaml.safe_load(f) or {}
        if not isinstance(user_config, dict):
            raise WraConfigError(f"Configuration file must contain a mapping: {path}")
        config = _merge(config, user_config)

    config = _merge(config, overrides)

    if config["wtk"].get("api_key") is None:
        config["wtk"]["api_key"] = os.environ.get(API_KEY_ENV)

    return config


def require(config, section, key):
    """Returns config[section][key] or raises a WraConfigError if it is not set"""
    value = config.get(section, {}).get(key)
    if value is None:
        raise WraConfigError(f"Configuration value '{section}.{key}' must be set")
    return value
