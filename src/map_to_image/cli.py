"""
CLI: python -m map_to_image --lat 59.93 --lng 30.31 --zoom 12 --out map.png

Приоритет значений: аргументы > .env/окружение > дефолты.
"""

import argparse
import json
import re
import sys
from pathlib import Path
from typing import List, Optional, Tuple, Union

from .config import LOG_LEVEL, MAP_OUT, MAP_PROVIDER, MAP_SIZE, MAP_ZOOM
from .domain.settings import TileLayer
from .errors import MapToImageError
from .services.render import render_map_image
from .utils.logging import configure_logging, log_print


def parse_size(s: str) -> Tuple[int, int]:
    m = re.match(r"^(\d+)[xX](\d+)$", s.strip())
    if not m:
        raise argparse.ArgumentTypeError(f"Размер должен быть в формате WxH, получено {s!r}")
    return (int(m.group(1)), int(m.group(2)))


def parse_layer(raw: str) -> Union[str, TileLayer]:
    """
    Слой из командной строки: "URL" или "URL@opacity".

    Шаблоны URL не содержат "@" в хвосте после последнего "/", поэтому
    суффикс @0.5 однозначно отделяется.
    """
    head, sep, tail = raw.rpartition("@")
    if sep and "/" not in tail:
        try:
            return TileLayer(url=head, opacity=float(tail))
        except ValueError as e:
            raise argparse.ArgumentTypeError(f"Некорректная прозрачность слоя {raw!r}: {e}")
    return raw


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="map-to-image", description="Рендер статической карты из XYZ-тайлов")
    p.add_argument("--lat", type=float, required=True)
    p.add_argument("--lng", type=float, required=True)
    p.add_argument("--zoom", type=int, default=MAP_ZOOM)
    p.add_argument("--size", type=parse_size, default=MAP_SIZE)
    p.add_argument(
        "--layer",
        dest="layers",
        action="append",
        type=parse_layer,
        help="шаблон URL с {z}/{x}/{y}, опционально @opacity; можно повторять, первый — нижний",
    )
    p.add_argument("--out", default=MAP_OUT)
    p.add_argument("--debug", action="store_true")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = configure_logging("DEBUG" if args.debug else LOG_LEVEL)

    width, height = args.size
    layers = args.layers or [MAP_PROVIDER]
    settings = {
        "image": {"dimensions": {"width": width, "height": height}},
        "map": {
            "center": {"lat": args.lat, "lng": args.lng},
            "zoom": args.zoom,
            "layers": layers,
        },
    }

    try:
        img = render_map_image(settings)
    except MapToImageError as e:
        log_print(logger, str(e), "ERROR", echo=True)
        return 1

    out_path = Path(args.out)
    if out_path.parent and not out_path.parent.exists():
        out_path.parent.mkdir(parents=True, exist_ok=True)
    img.save(out_path, format="PNG")
    print(json.dumps({"generated": str(out_path), "size": list(img.size)}, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
