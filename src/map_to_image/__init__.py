"""Статическое изображение карты из растровых XYZ-тайлов."""

from .domain.settings import MapToImageSettings, TileLayer, validate_settings
from .domain.tiles import GridTile, PlacementRecord, TileCoordinate, TileSource
from .errors import InvalidInputError, MapToImageError, TileFetchError
from .geo import project
from .grid import TILE_SIZE, iter_grid_tiles
from .layers import resolve_layer
from .plan import build_composite_plan, deduplicate_placements
from .services.render import map_to_image, materialize_plan, render_map_image

__version__ = "1.0.0"

__all__ = [
    "MapToImageSettings",
    "TileLayer",
    "validate_settings",
    "GridTile",
    "PlacementRecord",
    "TileCoordinate",
    "TileSource",
    "InvalidInputError",
    "MapToImageError",
    "TileFetchError",
    "project",
    "TILE_SIZE",
    "iter_grid_tiles",
    "resolve_layer",
    "build_composite_plan",
    "deduplicate_placements",
    "map_to_image",
    "materialize_plan",
    "render_map_image",
]
