"""Upgrader configuration.

    from rage.config import get_settings

    settings = get_settings()
    settings.storage.documents.connection_url
"""

from functools import lru_cache

from rage.config.settings import Settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings for this process, read from disk on first use."""
    return Settings.from_files()


def reload_settings() -> Settings:
    get_settings.cache_clear()
    return get_settings()


__all__ = ["get_settings", "reload_settings", "Settings"]
