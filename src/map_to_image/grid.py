"""
Планировщик сетки тайлов.

Обход от опорного тайла: вправо (для каждой колонки вниз, затем вверх),
потом влево (аналогично). Порядок обхода фиксирован — при дедупликации
побеждает первое вхождение источника, поэтому позиции должны совпадать
с порядком обхода один в один. Повторы опорной строки в каждой колонке
ожидаемы и снимаются на этапе дедупликации.
"""

import math
from typing import Iterator

from .domain.tiles import GridTile, TileCoordinate
from .errors import InvalidInputError

TILE_SIZE = 256
_HALF = TILE_SIZE // 2


def _round(value: float) -> int:
    # округление половины вверх: round() в Python округляет 0.5 к чётному
    return math.floor(value + 0.5)


def anchor_placement(anchor: TileCoordinate, width: int, height: int) -> GridTile:
    """Позиция опорного тайла так, чтобы точка anchor оказалась в центре холста."""
    if not (math.isfinite(anchor.x) and math.isfinite(anchor.y)):
        raise InvalidInputError(f"Центр карты вне сетки тайлов: {anchor}")
    offset_x = (anchor.x - math.floor(anchor.x)) * TILE_SIZE
    offset_y = (anchor.y - math.floor(anchor.y)) * TILE_SIZE
    left = _round(width / 2 - _HALF) + _round(_HALF - offset_x)
    top = _round(height / 2 - _HALF) + _round(_HALF - offset_y)
    return GridTile(math.floor(anchor.x), math.floor(anchor.y), left, top)


def _column(x: int, base: GridTile, height: int) -> Iterator[GridTile]:
    # вниз
    top = base.top
    step = 0
    while top < height:
        yield GridTile(x, base.y + step, base.left, top)
        top += TILE_SIZE
        step += 1
    # вверх
    top = base.top
    step = 0
    while top > -TILE_SIZE:
        yield GridTile(x, base.y - step, base.left, top)
        top -= TILE_SIZE
        step += 1


def iter_grid_tiles(anchor: TileCoordinate, width: int, height: int) -> Iterator[GridTile]:
    """
    Лениво выдаёт (x, y, left, top) всех тайлов, покрывающих холст width x height.

    Args:
        anchor: Дробные координаты центра карты в сетке тайлов
        width: Ширина холста, px
        height: Высота холста, px

    Yields:
        GridTile, включая повторы опорной строки (до дедупликации)
    """
    origin = anchor_placement(anchor, width, height)
    yield origin

    for direction in (1, -1):
        left = origin.left
        step = 0
        while (left < width) if direction > 0 else (left > -TILE_SIZE):
            x = origin.x + direction * step
            column = GridTile(x, origin.y, left, origin.top)
            yield column
            yield from _column(x, column, height)
            left += direction * TILE_SIZE
            step += 1
