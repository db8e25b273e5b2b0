"""
envconf - layered environment configuration

Loads named environments from a YAML or JSON file and merges them with
process environment variables, caller overrides and built-in defaults.
"""

from .core import ConfigStore, DEFAULT, Env, merge_env

__version__ = "0.1.0"
__all__ = ["__version__", "ConfigStore", "DEFAULT", "Env", "merge_env"]
