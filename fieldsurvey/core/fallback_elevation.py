"""Synthetic elevation model used when the elevation provider is unavailable.

elevation = max(0, (lat - 20) * 200)                       latitude ramp
          + |sin((lng - 75) * pi / 2)| * 800   (73..77 E)   western range
          + |sin((lng - 81) * pi / 3)| * 400   (78..84 E)   eastern range
          + uniform noise in [-50, 50]
clamped at sea level, damped by 0.3 near coasts, rounded to whole meters.

The noise is seeded from the rounded coordinates, so the same point always
gets the same value: repeated sampling of a path yields identical profiles.
"""

import hashlib

import numpy as np

from fieldsurvey.constants import FallbackElevationConfig


class SyntheticElevationModel:
    """Deterministic heuristic elevation model.

    Example:
        model = SyntheticElevationModel()
        elevation = model.elevation_at(lat=19.1, lng=72.9)
    """

    def __init__(self, config: type[FallbackElevationConfig] = FallbackElevationConfig) -> None:
        self.config = config

    def _noise(self, lat: float, lng: float) -> float:
        """Bounded noise, deterministic per coordinate."""
        decimals = self.config.NOISE_SEED_DECIMALS
        key = f"{round(lat, decimals):.{decimals}f},{round(lng, decimals):.{decimals}f}".encode()
        seed = int.from_bytes(hashlib.sha256(key).digest()[:8], "little")
        rng = np.random.default_rng(seed)
        return (float(rng.random()) - 0.5) * self.config.NOISE_AMPLITUDE_M

    @staticmethod
    def _range_component(lng: float, mountain_range: dict[str, float]) -> float:
        if not mountain_range["west"] <= lng <= mountain_range["east"]:
            return 0.0
        phase = (lng - mountain_range["center"]) * np.pi / mountain_range["period"]
        return float(abs(np.sin(phase)) * mountain_range["amplitude_m"])

    def elevation_at(self, lat: float, lng: float) -> float:
        """Synthetic elevation in meters (whole meters, never negative)."""
        cfg = self.config
        elevation = max(0.0, (lat - cfg.RAMP_ORIGIN_LAT) * cfg.RAMP_M_PER_DEG)
        elevation += self._range_component(lng=lng, mountain_range=cfg.WESTERN_RANGE)
        elevation += self._range_component(lng=lng, mountain_range=cfg.EASTERN_RANGE)
        elevation += self._noise(lat=lat, lng=lng)
        elevation = max(0.0, elevation)

        if lat < cfg.COASTAL_MAX_LAT or lng < cfg.COASTAL_MIN_LNG or lng > cfg.COASTAL_MAX_LNG:
            elevation *= cfg.COASTAL_FACTOR

        return float(round(elevation))
