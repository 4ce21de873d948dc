from .settings import settings

USER_AGENT = settings.user_agent
REFERER = settings.referer
REQUEST_TIMEOUT = settings.request_timeout
LOG_LEVEL = settings.log_level.upper()
TILE_CONCURRENCY = settings.tile_concurrency

# --- CLI defaults ---
MAP_PROVIDER = settings.map_provider
MAP_ZOOM = settings.map_zoom
MAP_SIZE = settings.map_size
MAP_OUT = settings.map_out
