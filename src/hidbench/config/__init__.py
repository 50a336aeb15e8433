"""Configuration objects and helpers for HIDBench.

:mod:`profiles` defines the interval filter profiles used by the report-rate
analysis; :mod:`runtime` loads the test-family parameters (trial counts,
sampling windows, profile overrides) from YAML.
"""

from .profiles import FILTER_PROFILES, FilterProfile, resolve_profile
from .runtime import HidBenchConfig, config_from_mapping, load_config

__all__ = [
    "FILTER_PROFILES",
    "FilterProfile",
    "HidBenchConfig",
    "config_from_mapping",
    "load_config",
    "resolve_profile",
]
