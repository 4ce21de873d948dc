from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Dict, List, Optional, Tuple, Union

import requests
from PIL import Image

from ..config import REQUEST_TIMEOUT, TILE_CONCURRENCY
from ..config.settings import settings as app_settings
from ..domain.settings import MapToImageSettings, validate_settings
from ..domain.tiles import CompositePlan, PlacementRecord
from ..errors import MapToImageError, TileFetchError
from ..infra.tiles import apply_opacity, composite_tiles, decode_tile, fetch_tile, make_session
from ..plan import build_composite_plan
from ..utils.logging import log_print

logger = logging.getLogger("map_to_image")


async def _load_record(
    record: PlacementRecord,
    session: requests.Session,
    timeout: float,
    sem: Optional[asyncio.Semaphore],
) -> Tuple[Image.Image, int, int]:
    source = record.source
    try:
        if sem is not None:
            await sem.acquire()
        try:
            if source.is_url:
                log_print(logger, f"Fetching tile: {source.url}")
                data = await asyncio.to_thread(fetch_tile, session, source.url, timeout)
            else:
                log_print(logger, f"Generating tile: {source.key}", "DEBUG")
                # синхронная функция не должна блокировать цикл событий
                data = await asyncio.to_thread(source.generator)
                if inspect.isawaitable(data):
                    data = await data
            if record.opacity != 1:
                data = await asyncio.to_thread(apply_opacity, data, record.opacity)
            tile = await asyncio.to_thread(decode_tile, data)
        finally:
            if sem is not None:
                sem.release()
    except MapToImageError:
        raise
    except Exception as e:
        log_print(logger, f"Ошибка тайла {source.key}: {e}", "ERROR")
        raise TileFetchError(source.key, str(e)) from e
    return tile, record.left, record.top


async def materialize_plan(
    plan: CompositePlan,
    session: requests.Session,
    timeout: float = REQUEST_TIMEOUT,
    concurrency: int = TILE_CONCURRENCY,
) -> List[Tuple[Image.Image, int, int]]:
    """
    Загружает все тайлы плана параллельно и возвращает [(RGBA-тайл, left, top)] в порядке плана.

    Ошибка любого тайла отменяет остальные задачи и пробрасывается наружу.
    """
    sem = asyncio.Semaphore(concurrency) if concurrency and concurrency > 0 else None
    tasks = [asyncio.ensure_future(_load_record(rec, session, timeout, sem)) for rec in plan]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for t in tasks:
            t.cancel()
        # даём отменённым задачам завершиться, чтобы не было "Task was destroyed"
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def map_to_image(
    settings: Union[MapToImageSettings, Dict[str, Any]],
    session: Optional[requests.Session] = None,
) -> Image.Image:
    """
    Строит RGBA-изображение карты по центру, zoom и списку слоёв.

    Ошибки входных данных поднимаются до начала загрузки (InvalidInputError).
    Частичных результатов нет: любой сбой тайла — TileFetchError.
    """
    opts = validate_settings(settings)
    dims = opts.image.dimensions

    plan = build_composite_plan(opts)
    log_print(
        logger,
        f"map_to_image: {dims.width}x{dims.height}, zoom={opts.map.zoom}, "
        f"слоёв={len(opts.map.layers)}, тайлов={len(plan)}",
    )

    own_session = session is None
    if own_session:
        session = make_session(app_settings.headers)
    try:
        tiles = await materialize_plan(plan, session)
    finally:
        if own_session:
            session.close()

    return await asyncio.to_thread(composite_tiles, dims.width, dims.height, tiles)


def render_map_image(
    settings: Union[MapToImageSettings, Dict[str, Any]],
    session: Optional[requests.Session] = None,
) -> Image.Image:
    """Синхронная обёртка над map_to_image."""
    return asyncio.run(map_to_image(settings, session=session))
