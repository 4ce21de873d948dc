"""
Сборка плана композиции.

Для каждого слоя по порядку: проекция центра, обход сетки, разрешение
источников. Затем глобальная дедупликация по TileSource.key — остаётся
первая запись. Одинаковый URL в двух разных слоях схлопывается в одну
загрузку и одну позицию (в первом слое), верхний слой при этом свою
позицию в стопке теряет. Поведение сохранено намеренно.
"""

from typing import Dict, Iterable, List

from .domain.settings import MapToImageSettings
from .domain.tiles import CompositePlan, PlacementRecord
from .errors import InvalidInputError
from .geo import project
from .grid import iter_grid_tiles
from .layers import resolve_layer


def deduplicate_placements(records: Iterable[PlacementRecord]) -> CompositePlan:
    """Оставляет первую запись для каждого ключа источника, сохраняя порядок."""
    seen = set()
    result: CompositePlan = []
    for rec in records:
        if rec.source.key in seen:
            continue
        seen.add(rec.source.key)
        result.append(rec)
    return result


def build_composite_plan(settings: MapToImageSettings) -> CompositePlan:
    dims = settings.image.dimensions
    center = settings.map.center
    zoom = settings.map.zoom

    records: List[PlacementRecord] = []
    generator_ids: Dict[int, int] = {}
    for layer in settings.map.layers:
        # проекция пересчитывается для каждого слоя
        try:
            anchor = project(center.lat, center.lng, zoom)
        except ValueError as e:
            # log от неположительного аргумента на самом полюсе
            raise InvalidInputError(f"Центр карты не проецируется: {center.lat}, {center.lng}") from e
        for tile in iter_grid_tiles(anchor, dims.width, dims.height):
            source, opacity = resolve_layer(layer, zoom, tile.x, tile.y, generator_ids)
            records.append(PlacementRecord(source, tile.left, tile.top, opacity))

    return deduplicate_placements(records)
