from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    # HTTP
    user_agent: str = Field("map-to-image/1.0", alias="MAP_USER_AGENT")
    referer: str = Field("", alias="MAP_REFERER")
    request_timeout: float = Field(20.0, alias="REQUEST_TIMEOUT")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    # Параллельная загрузка тайлов (0 — без ограничения)
    tile_concurrency: int = Field(8, alias="MAP_TILE_CONCURRENCY")

    # Дефолты для CLI
    map_provider: str = Field("https://tile.openstreetmap.org/{z}/{x}/{y}.png", alias="MAP_PROVIDER")
    map_zoom: int = Field(12, alias="MAP_ZOOM")
    map_size: str = Field("1280x720", alias="MAP_SIZE")
    map_out: str = Field("map.png", alias="MAP_OUT")

    @property
    def headers(self) -> dict:
        out = {}
        if self.user_agent:
            out["User-Agent"] = self.user_agent
        if self.referer:
            out["Referer"] = self.referer
        return out


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
