from functools import lru_cache

from redfish_exporter.config import Settings


@lru_cache()
def get_settings() -> Settings:
    return Settings()
