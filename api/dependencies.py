"""
FastAPI dependency injection providers.

Provides settings and service instances to route handlers. Both are built
once per process, so every request shares one jobs API client session.
"""

from functools import lru_cache

from config.settings import AppSettings
from core.service import JobInsightsService, ServiceBuilder


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return AppSettings.from_env()


@lru_cache(maxsize=1)
def get_service() -> JobInsightsService:
    """Build a JobInsightsService with a jobs API client configured from settings."""
    return ServiceBuilder(get_settings()).with_client().build()
