# tiles.py
import io
from typing import Dict, Iterable, Optional, Tuple, Union

import requests
from PIL import Image

from ..config import REQUEST_TIMEOUT


def make_session(headers: Optional[Dict[str, str]] = None) -> requests.Session:
    sess = requests.Session()
    if headers:
        sess.headers.update(headers)
    return sess


def fetch_tile(session: requests.Session, url: str, timeout: float = REQUEST_TIMEOUT) -> bytes:
    """Скачивает тайл и возвращает сырые байты. HTTP-ошибки пробрасываются."""
    resp = session.get(url, timeout=timeout)
    resp.raise_for_status()
    return resp.content


def decode_tile(data: bytes) -> Image.Image:
    """Декодирует байты тайла в RGBA. Не-картинка (HTML-заглушка и т.п.) — ошибка Pillow."""
    img = Image.open(io.BytesIO(data))
    img.load()
    return img.convert("RGBA")


def apply_opacity(data: bytes, opacity: float) -> bytes:
    """Домножает альфа-канал тайла на opacity и перекодирует в PNG."""
    img = decode_tile(data)
    alpha = img.getchannel("A").point(lambda a: int(round(a * opacity)))
    img.putalpha(alpha)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def _clip(left: int, top: int, size: Tuple[int, int], canvas: Tuple[int, int]) -> Optional[Tuple[Tuple[int, int, int, int], Tuple[int, int]]]:
    # (box в координатах тайла, позиция на холсте) или None, если тайл целиком снаружи
    w, h = size
    cw, ch = canvas
    x0, y0 = max(left, 0), max(top, 0)
    x1, y1 = min(left + w, cw), min(top + h, ch)
    if x0 >= x1 or y0 >= y1:
        return None
    return (x0 - left, y0 - top, x1 - left, y1 - top), (x0, y0)


def composite_tiles(
    width: int,
    height: int,
    tiles: Iterable[Tuple[Union[bytes, Image.Image], int, int]],
) -> Image.Image:
    """
    Накладывает тайлы на прозрачный RGBA-холст в заданном порядке.

    Части тайлов за пределами холста (в т.ч. при отрицательных смещениях) отсекаются.
    """
    base = Image.new("RGBA", (width, height), (0, 0, 0, 0))
    for data, left, top in tiles:
        tile = data if isinstance(data, Image.Image) else decode_tile(data)
        clipped = _clip(left, top, tile.size, base.size)
        if clipped is None:
            continue
        box, dest = clipped
        base.alpha_composite(tile.crop(box), dest=dest)
    return base
