"""Test-family configuration: trial counts, sampling windows, filter profiles."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Mapping

import yaml

from .profiles import FILTER_PROFILES, FilterProfile, normalize_profile_key, resolve_profile


def _default_profiles() -> Dict[str, FilterProfile]:
    return dict(FILTER_PROFILES)


@dataclass(slots=True)
class HidBenchConfig:
    """
    Parameters the capture harness runs its tests with.

    trial_count: click/key responses collected per device in a latency test.
    sampling_window_ms: length of a report-rate capture window.
    profiles: interval filter profiles keyed by ``pointer``/``keyboard``.
    """

    trial_count: int = 20
    sampling_window_ms: float = 5000.0
    profiles: Dict[str, FilterProfile] = field(default_factory=_default_profiles)

    def sanitized(self) -> HidBenchConfig:
        """Return a copy with the sampling window raised to at least 100 ms."""
        return HidBenchConfig(
            trial_count=max(1, int(self.trial_count)),
            sampling_window_ms=max(100.0, float(self.sampling_window_ms)),
            profiles=dict(self.profiles),
        )

    def profile(self, key: str) -> FilterProfile:
        """Resolve a filter profile by key or alias (``mouse``, ``key``...)."""
        return resolve_profile(key, self.profiles)

    @property
    def sampling_window_s(self) -> float:
        return self.sampling_window_ms / 1000.0


def _positive(name: str, value: Any, cast: Callable[[Any], Any]) -> Any:
    try:
        number = cast(value)
    except (OverflowError, TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc
    if not number > 0:
        raise ValueError(f"{name} must be > 0, got {value!r}")
    return number


def profiles_from_mapping(data: Mapping[str, Any] | None) -> Dict[str, FilterProfile]:
    """
    Apply per-profile overrides on top of the built-in profiles.

    Supported shape::

        profiles:
          pointer:
            max_interval_ms: 250
          keyboard:
            min_retained_fraction: 0.4
    """
    profiles = _default_profiles()
    if not data:
        return profiles
    for key, overrides in data.items():
        if not isinstance(overrides, Mapping):
            raise ValueError(f"profile {key!r} must be a mapping, got {type(overrides).__name__}")
        normalized = normalize_profile_key(key)
        base = profiles.get(normalized)
        if base is None:
            raise ValueError(f"unknown filter profile {key!r}; expected one of {sorted(profiles)}")
        profiles[normalized] = base.with_overrides(overrides)
    return profiles


def config_from_mapping(data: Mapping[str, Any] | None) -> HidBenchConfig:
    """
    Build :class:`HidBenchConfig` from ``data``.

    Test parameters may sit at the top level or inside a ``hidbench`` block
    (the block wins); unknown keys are ignored. Non-positive or non-numeric
    ``trial_count``/``sampling_window_ms`` raise ``ValueError``.
    """
    if not data:
        return HidBenchConfig()
    block = data.get("hidbench")
    scope: Mapping[str, Any] = block if isinstance(block, Mapping) else {}
    defaults = HidBenchConfig()

    def lookup(name: str) -> Any:
        return scope.get(name, data.get(name, getattr(defaults, name)))

    cfg = HidBenchConfig(
        trial_count=_positive("trial_count", lookup("trial_count"), int),
        sampling_window_ms=_positive("sampling_window_ms", lookup("sampling_window_ms"), float),
        profiles=profiles_from_mapping(scope.get("profiles", data.get("profiles"))),
    )
    return cfg.sanitized()


def load_config(path: str | Path | None) -> HidBenchConfig:
    """
    Read a YAML file into :class:`HidBenchConfig`.

    ``None`` or a path that does not exist gives the defaults.
    """
    cfg_path = Path(path) if path is not None else None
    if cfg_path is None or not cfg_path.is_file():
        return HidBenchConfig()
    raw = yaml.safe_load(cfg_path.read_text(encoding="utf-8"))
    if raw is None:
        return HidBenchConfig()
    if not isinstance(raw, Mapping):
        raise ValueError(f"Expected mapping in {cfg_path}, got {type(raw).__name__}")
    return config_from_mapping(raw)


__all__ = ["HidBenchConfig", "config_from_mapping", "load_config", "profiles_from_mapping"]
