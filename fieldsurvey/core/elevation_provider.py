"""Elevation providers - where sample elevations come from.

The sampler only depends on the ElevationProvider protocol:

    async get_elevation(lat, lng) -> float | None

None means "Unavailable" for that point; providers may also raise
ProviderUnavailable. Either way the sampler retries and then falls back to
the synthetic model, so a provider never has to be perfect.

Implementations:
- OpenMeteoElevationProvider: HTTP elevation API (requests, run in a worker thread)
- SyntheticElevationProvider: offline provider over the synthetic model
- DEMElevationProvider: local GeoTIFF (see dem_service.py)
"""

import asyncio
import logging
from typing import Protocol, runtime_checkable

import requests

from fieldsurvey.constants import HttpProviderConfig
from fieldsurvey.core.fallback_elevation import SyntheticElevationModel
from fieldsurvey.errors import ProviderUnavailable

logger = logging.getLogger(__name__)


@runtime_checkable
class ElevationProvider(Protocol):
    """Protocol for per-point elevation lookup."""

    async def get_elevation(self, lat: float, lng: float) -> float | None:
        """Return elevation in meters, or None if unavailable for this point."""


class OpenMeteoElevationProvider:
    """Elevation lookups against the Open-Meteo elevation API.

    requests is blocking, so each lookup runs via asyncio.to_thread and the
    event loop stays free for further map clicks.

    Example:
        provider = OpenMeteoElevationProvider()
        elevation = await provider.get_elevation(lat=19.076, lng=72.8777)
    """

    def __init__(
        self,
        base_url: str = HttpProviderConfig.BASE_URL,
        timeout_s: float = HttpProviderConfig.TIMEOUT_S,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize provider.

        Args:
            base_url: Elevation endpoint
            timeout_s: Per-request timeout in seconds
            session: Optional shared requests session (connection pooling)
        """
        self.base_url = base_url
        self.timeout_s = timeout_s
        self.session = session or requests.Session()

    def fetch_elevation(self, lat: float, lng: float) -> float | None:
        """Blocking lookup of a single point.

        Returns:
            Elevation in meters, or None if the API has no data for the point.

        Raises:
            ProviderUnavailable: On network errors, HTTP errors or malformed payloads.
        """
        try:
            response = self.session.get(
                self.base_url,
                params={"latitude": lat, "longitude": lng},
                timeout=self.timeout_s,
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise ProviderUnavailable(f"Elevation request failed for ({lat}, {lng}): {exc}") from exc

        values = payload.get("elevation") if isinstance(payload, dict) else None
        if not values:
            raise ProviderUnavailable(f"Malformed elevation payload for ({lat}, {lng}): {payload!r}")

        value = values[0]
        if value is None or value == HttpProviderConfig.NODATA_VALUE:
            logger.warning(f"No elevation data at lat={lat}, lng={lng}")
            return None
        return float(value)

    async def get_elevation(self, lat: float, lng: float) -> float | None:
        return await asyncio.to_thread(self.fetch_elevation, lat, lng)


class SyntheticElevationProvider:
    """Offline provider that answers every lookup with the synthetic model.

    Used for demos and tests where no DEM or network is available.
    """

    def __init__(self, model: SyntheticElevationModel | None = None) -> None:
        self.model = model or SyntheticElevationModel()

    async def get_elevation(self, lat: float, lng: float) -> float | None:
        return self.model.elevation_at(lat=lat, lng=lng)
