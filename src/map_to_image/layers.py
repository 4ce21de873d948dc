"""Разрешение слоя в конкретный источник тайла (URL или отложенный вызов функции)."""

import math
from typing import Any, Callable, Dict, Mapping, Tuple

from pydantic import ValidationError

from .domain.settings import LayerSpec, TileLayer
from .domain.tiles import TileBytes, TileSource
from .errors import InvalidInputError


def tile_url(template: str, z: int, x: int, y: int) -> str:
    """Подставляет {z}, {x}, {y} в шаблон URL."""
    return template.replace("{x}", str(x)).replace("{y}", str(y)).replace("{z}", str(z))


def url_key(url: str) -> str:
    return f"url:{url}"


def generator_key(num: int, z: int, x: int, y: int) -> str:
    return f"generator:{num}/{z}/{x}/{y}"


def _as_tile_layer(layer: Any) -> TileLayer:
    if isinstance(layer, TileLayer):
        return layer
    if isinstance(layer, Mapping):
        try:
            return TileLayer.model_validate(dict(layer))
        except ValidationError as e:
            raise InvalidInputError(f"Некорректный слой {layer!r}: {e}") from e
    raise InvalidInputError(f"Неподдерживаемый тип слоя: {type(layer).__name__}")


def _generator_call(func: Callable[..., TileBytes], z: int, x: int, y: int) -> Callable[[], TileBytes]:
    # вызов функции откладывается до материализации
    def call() -> TileBytes:
        return func(z, x, y)
    return call


def resolve_layer(
    layer: LayerSpec,
    zoom: int,
    x: float,
    y: float,
    generator_ids: Dict[int, int],
) -> Tuple[TileSource, float]:
    """
    Превращает слой и координаты тайла в (TileSource, opacity).

    Координаты всегда усекаются через floor до подстановки.
    generator_ids — реестр {id(func): номер} в пределах одной сборки плана,
    номера выдаются в порядке первого появления функции.
    """
    tx, ty = math.floor(x), math.floor(y)

    if isinstance(layer, str):
        url = tile_url(layer, zoom, tx, ty)
        return TileSource(key=url_key(url), url=url), 1.0

    if callable(layer) and not isinstance(layer, TileLayer):
        num = generator_ids.setdefault(id(layer), len(generator_ids))
        return TileSource(key=generator_key(num, zoom, tx, ty), generator=_generator_call(layer, zoom, tx, ty)), 1.0

    tile_layer = _as_tile_layer(layer)
    url = tile_url(tile_layer.url, zoom, tx, ty)
    return TileSource(key=url_key(url), url=url), tile_layer.opacity
