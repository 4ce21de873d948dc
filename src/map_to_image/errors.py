"""Исключения рендера карты."""

from typing import Optional


class MapToImageError(Exception):
    """Базовая ошибка построения изображения карты."""


class InvalidInputError(MapToImageError, ValueError):
    """Некорректные входные параметры. Поднимается до начала загрузки тайлов."""


class TileFetchError(MapToImageError):
    """Не удалось получить или обработать тайл. Прерывает весь рендер."""

    def __init__(self, key: str, reason: Optional[str] = None):
        self.key = key
        self.reason = reason
        msg = f"Ошибка загрузки тайла {key}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
