from typing import Any, Callable, Dict, List, Union

from pydantic import BaseModel, Field, ValidationError

from ..errors import InvalidInputError


class TileLayer(BaseModel):
    # Шаблон URL с {z}, {x}, {y}
    url: str
    # Прозрачность слоя, (0, 1]
    opacity: float = Field(1.0, gt=0, le=1)


# Слой: шаблон URL, объект {url, opacity} или функция (z, x, y) -> bytes
LayerSpec = Union[str, TileLayer, Callable[..., Any]]


class Dimensions(BaseModel):
    width: int = Field(gt=0)
    height: int = Field(gt=0)


class ImageOptions(BaseModel):
    dimensions: Dimensions


class GeoPoint(BaseModel):
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class MapOptions(BaseModel):
    center: GeoPoint
    # Только целый zoom: 5.0 приводится к 5, 5.5 — ошибка валидации
    zoom: int = Field(ge=0)
    # Порядок = порядок наложения, первый слой внизу
    layers: List[LayerSpec] = Field(min_length=1)


class MapToImageSettings(BaseModel):
    image: ImageOptions
    map: MapOptions

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "MapToImageSettings":
        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            raise InvalidInputError(f"Некорректные параметры карты: {e}") from e


def validate_settings(settings: Union["MapToImageSettings", Dict[str, Any]]) -> MapToImageSettings:
    """Принимает готовую модель или сырой словарь и возвращает проверенную модель."""
    if isinstance(settings, MapToImageSettings):
        return settings
    if not isinstance(settings, dict):
        raise InvalidInputError(f"Ожидался dict или MapToImageSettings, получено {type(settings).__name__}")
    return MapToImageSettings.from_dict(settings)
