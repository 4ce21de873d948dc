import logging
import sys


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Инициализирует базовое логирование в stderr."""
    logging.basicConfig(
        format="%(asctime)s - [%(levelname)s] %(name)s: %(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )
    # urllib3 логирует каждый запрос тайла на DEBUG — держим его на WARNING+.
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)
    logger = logging.getLogger("map_to_image")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logger


def log_print(logger: logging.Logger, msg: str, level: str = "INFO", echo: bool = False) -> None:
    """Пишет в лог; с echo=True дублирует сообщение в stderr для гарантированной видимости."""
    level_upper = level.upper()
    if echo:
        print(f"[{level_upper}] {msg}", file=sys.stderr, flush=True)
    if level_upper == "ERROR":
        logger.error(msg)
    elif level_upper == "WARNING":
        logger.warning(msg)
    elif level_upper == "DEBUG":
        logger.debug(msg)
    else:
        logger.info(msg)
