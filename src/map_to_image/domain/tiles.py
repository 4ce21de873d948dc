from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, NamedTuple, Optional, Union

TileBytes = Union[bytes, Awaitable[bytes]]


class TileCoordinate(NamedTuple):
    # дробные координаты в сетке 2^zoom x 2^zoom
    x: float
    y: float


class GridTile(NamedTuple):
    x: int
    y: int
    left: int
    top: int


@dataclass(frozen=True)
class TileSource:
    """
    Идентичность одного запроса тайла.

    key — явный ключ дедупликации: "url:<URL>" для шаблонных слоёв или
    "generator:<n>/<z>/<x>/<y>" для слоёв-функций. Сравнение и хеш только по key.
    """
    key: str
    url: Optional[str] = field(default=None, compare=False)
    generator: Optional[Callable[[], TileBytes]] = field(default=None, compare=False, repr=False)

    @property
    def is_url(self) -> bool:
        return self.url is not None


@dataclass(frozen=True)
class PlacementRecord:
    source: TileSource
    left: int
    top: int
    opacity: float = 1.0


CompositePlan = List[PlacementRecord]
