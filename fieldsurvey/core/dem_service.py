"""Digital Elevation Model (DEM) elevation provider.

Serves elevation lookups from a local single-band GeoTIFF:
- Fast O(1) lookup using a pre-loaded NumPy array
- Automatic coordinate transformation from WGS84 to the DEM's native CRS
- Lazy, thread-safe loading (lookups run in worker threads via asyncio.to_thread)

Points outside the raster, on no-data cells or NaN cells are reported as
unavailable (None) so the sampler can fall back for them individually.
"""

import asyncio
import logging
import threading
import time
from pathlib import Path
from typing import Optional

import numpy as np
import rasterio
from rasterio.warp import transform

from fieldsurvey.constants import DEMConfig

logger = logging.getLogger(__name__)


class DEMElevationProvider:
    """Elevation provider backed by a GeoTIFF DEM.

    The DEM array is loaded on first access and cached for fast subsequent queries.

    Example:
        dem = DEMElevationProvider(dem_path=Path("data/survey_dem.tif"))
        elevation = await dem.get_elevation(lat=19.076, lng=72.8777)
    """

    def __init__(self, dem_path: Optional[Path] = None) -> None:
        """Initialize provider.

        Args:
            dem_path: Optional path to DEM file (uses DEMConfig.DEM_PATH by default)
        """
        self._dem_path = dem_path or DEMConfig.DEM_PATH
        self._load_lock = threading.Lock()
        self._crs: Optional[str] = None
        self._grid: Optional[np.ndarray] = None
        self._nodata: Optional[float] = None
        self._raster_bounds = None
        self._transform = None

    @property
    def is_loaded(self) -> bool:
        return self._transform is not None

    def _ensure_loaded(self) -> None:
        """Read the raster once; concurrent first lookups wait on the lock."""
        if self.is_loaded:
            return

        with self._load_lock:
            if self.is_loaded:
                return
            if not self._dem_path.exists():
                raise FileNotFoundError(f"DEM file not found at {self._dem_path}")

            started = time.perf_counter()
            with rasterio.open(self._dem_path) as src:
                crs = src.crs.to_string() if src.crs else "EPSG:4326"
                grid = src.read(1)
                nodata = src.nodata
                raster_bounds = src.bounds
                raster_transform = src.transform

            self._crs, self._grid, self._nodata, self._raster_bounds = crs, grid, nodata, raster_bounds
            # is_loaded flips here, after every other field is set
            self._transform = raster_transform
            logger.info(
                f"Survey DEM {self._dem_path.name} ready in {time.perf_counter() - started:.2f}s "
                f"({grid.shape[0]}x{grid.shape[1]} cells, {crs})"
            )

    def _cell_index(self, lat: float, lng: float) -> tuple[int, int]:
        """(row, col) of the cell containing a WGS84 point; may lie outside the grid."""
        if self._crs == "EPSG:4326":
            x, y = lng, lat
        else:
            xs, ys = transform("EPSG:4326", self._crs, [lng], [lat])
            x, y = xs[0], ys[0]
        col, row = ~self._transform * (x, y)
        return int(np.floor(row)), int(np.floor(col))

    def lookup(self, lat: float, lng: float) -> float | None:
        """Blocking elevation lookup at a single point.

        Returns:
            Elevation in meters, or None outside the raster and on no-data/NaN cells.
        """
        self._ensure_loaded()
        row, col = self._cell_index(lat=lat, lng=lng)

        n_rows, n_cols = self._grid.shape
        if not (0 <= row < n_rows and 0 <= col < n_cols):
            logger.warning(f"lat={lat}, lng={lng} outside survey DEM (cell {row},{col})")
            return None

        value = float(self._grid[row, col])
        if np.isnan(value) or (self._nodata is not None and value == self._nodata):
            logger.warning(f"No elevation stored for lat={lat}, lng={lng} (cell {row},{col} = {value})")
            return None
        return value

    async def get_elevation(self, lat: float, lng: float) -> float | None:
        return await asyncio.to_thread(self.lookup, lat, lng)

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """(west, south, east, north) in WGS84; projected rasters use their reprojected corners."""
        self._ensure_loaded()
        left, bottom, right, top = self._raster_bounds
        if self._crs == "EPSG:4326":
            return left, bottom, right, top

        lngs, lats = transform(self._crs, "EPSG:4326", [left, right, left, right], [bottom, bottom, top, top])
        return min(lngs), min(lats), max(lngs), max(lats)
