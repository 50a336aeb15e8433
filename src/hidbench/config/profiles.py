"""Interval filter profiles for report-rate analysis."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping


@dataclass(frozen=True)
class FilterProfile:
    """
    Bounds and fallback policy applied to inter-event intervals.

    min_interval_ms / max_interval_ms: hard limits for a plausible interval;
        the IQR fence is clipped to them and the fallback filter uses them
        directly.
    iqr_multiplier: width of the Tukey fence around Q1/Q3.
    min_retained / min_retained_fraction: the IQR-filtered set must keep at
        least ``max(min_retained, min_retained_fraction * n)`` intervals,
        otherwise the absolute bounds are used instead.
    """

    key: str
    label: str
    min_interval_ms: float
    max_interval_ms: float
    min_retained_fraction: float
    min_retained: int = 3
    iqr_multiplier: float = 1.5

    def __post_init__(self) -> None:
        lo = float(self.min_interval_ms)
        hi = float(self.max_interval_ms)
        if not (math.isfinite(lo) and math.isfinite(hi)) or not 0.0 < lo < hi:
            raise ValueError(
                f"profile {self.key!r} needs 0 < min_interval_ms < max_interval_ms, "
                f"got {lo} and {hi}"
            )
        if not 0.0 <= float(self.min_retained_fraction) <= 1.0:
            raise ValueError(
                f"min_retained_fraction must be within [0, 1], got {self.min_retained_fraction}"
            )
        if self.iqr_multiplier < 0:
            raise ValueError(f"iqr_multiplier must be >= 0, got {self.iqr_multiplier}")

    def required_retained(self, n_intervals: int) -> float:
        """Minimum size of the IQR-filtered set for ``n_intervals`` inputs."""
        return max(self.min_retained, self.min_retained_fraction * n_intervals)

    def with_overrides(self, mapping: Mapping[str, Any] | None) -> "FilterProfile":
        """Return a copy with numeric fields replaced from ``mapping``."""
        if not mapping:
            return self
        changes: Dict[str, Any] = {}
        for name, cast in (
            ("min_interval_ms", float),
            ("max_interval_ms", float),
            ("min_retained_fraction", float),
            ("min_retained", int),
            ("iqr_multiplier", float),
        ):
            if name in mapping and mapping[name] is not None:
                try:
                    changes[name] = cast(mapping[name])
                except (TypeError, ValueError) as exc:
                    raise ValueError(
                        f"invalid {name} for profile {self.key!r}: {mapping[name]!r}"
                    ) from exc
        if "label" in mapping:
            changes["label"] = str(mapping["label"])
        return replace(self, **changes)

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, Any] | None,
        *,
        base: str = "pointer",
    ) -> "FilterProfile":
        """
        Build a profile from a mapping such as a ``profiles`` YAML block.

        Supported shape::

            base: keyboard
            max_interval_ms: 800
        """
        payload: Mapping[str, Any] = mapping or {}
        base_key = str(payload.get("base", base))
        return resolve_profile(base_key).with_overrides(payload)


# 0.1 ms corresponds to 10 kHz polling; 500 ms is a pause in motion
POINTER_PROFILE = FilterProfile(
    key="pointer",
    label="Pointer motion",
    min_interval_ms=0.1,
    max_interval_ms=500.0,
    min_retained_fraction=0.5,
)

# 0.125 ms is an 8 kHz gaming keyboard; key-repeat gaps can reach a second
KEYBOARD_PROFILE = FilterProfile(
    key="keyboard",
    label="Key signal",
    min_interval_ms=0.125,
    max_interval_ms=1000.0,
    min_retained_fraction=0.3,
)

FILTER_PROFILES: Dict[str, FilterProfile] = {
    POINTER_PROFILE.key: POINTER_PROFILE,
    KEYBOARD_PROFILE.key: KEYBOARD_PROFILE,
}

_ALIASES = {
    "mouse": "pointer",
    "mousemove": "pointer",
    "motion": "pointer",
    "key": "keyboard",
    "keys": "keyboard",
    "keydown": "keyboard",
}


def normalize_profile_key(key: str) -> str:
    """Lower-case ``key`` and resolve common aliases (``mouse`` -> ``pointer``)."""
    raw = str(key or "").strip().lower().replace("-", "_")
    return _ALIASES.get(raw, raw)


def resolve_profile(
    key: str,
    registry: Mapping[str, FilterProfile] | None = None,
) -> FilterProfile:
    """Look up a profile by key or alias; unknown keys raise ``ValueError``."""
    profiles = FILTER_PROFILES if registry is None else registry
    normalized = normalize_profile_key(key)
    try:
        return profiles[normalized]
    except KeyError:
        raise ValueError(
            f"unknown filter profile {key!r}; expected one of {sorted(profiles)}"
        ) from None


__all__ = [
    "FILTER_PROFILES",
    "FilterProfile",
    "KEYBOARD_PROFILE",
    "POINTER_PROFILE",
    "normalize_profile_key",
    "resolve_profile",
]
