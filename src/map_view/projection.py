import math

from pyproj import Transformer

EARTH_RADIUS = 6378137.0
TILE_SIZE = 256

_to_projected = Transformer.from_crs("EPSG:4326", "EPSG:3857", always_xy=True)
_to_geographic = Transformer.from_crs("EPSG:3857", "EPSG:4326", always_xy=True)


def to_projected(lon: float, lat: float) -> tuple[float, float]:
    """
    Projects WGS84 degrees to Web Mercator metres.
    """
    return _to_projected.transform(lon, lat)


def to_projected_many(
    lons: list[float], lats: list[float]
) -> tuple[list[float], list[float]]:
    xs, ys = _to_projected.transform(lons, lats)
    return list(xs), list(ys)


def to_geographic(x: float, y: float) -> tuple[float, float]:
    """
    Returns (lon, lat) of a Web Mercator point.
    """
    return _to_geographic.transform(x, y)


def resolution_at_zoom(zoom: float) -> float:
    """
    Metres per pixel at the equator for the given zoom level.
    """
    return 2 * math.pi * EARTH_RADIUS / (TILE_SIZE * 2**zoom)
