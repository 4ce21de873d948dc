"""
Проекция Web Mercator в координаты сетки тайлов.

Широты около ±90° дают нестабильный результат (tan/cos уходят в бесконечность).
Это ожидаемо: такие тайлы оказываются далеко за пределами холста и отсекаются
при композиции. Значения не ограничиваются.
"""

import math
from typing import Tuple

from .domain.tiles import TileCoordinate


def project(lat: float, lng: float, zoom: int) -> TileCoordinate:
    """Переводит (lat, lng, zoom) в дробные координаты тайла."""
    n = 2 ** zoom
    x = n * ((lng + 180) / 360)
    lat_rad = lat * math.pi / 180
    y = n * (1 - math.log(math.tan(lat_rad) + 1 / math.cos(lat_rad)) / math.pi) / 2
    return TileCoordinate(x, y)


def tile_to_lnglat(x: float, y: float, zoom: int) -> Tuple[float, float]:
    """Обратное преобразование: координаты сетки -> (lng, lat)."""
    n = 2 ** zoom
    lng = x / n * 360.0 - 180.0
    lat = math.degrees(math.atan(math.sinh(math.pi * (1 - 2 * y / n))))
    return lng, lat
