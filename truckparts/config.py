"""
Application Configuration

Loads settings from environment variables
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Application
    APP_NAME: str = "Truck Parts Chat"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # API
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # Dialogue backend (the conversational server we proxy to)
    DIALOGUE_BACKEND_URL: str = "http://localhost:8000"
    DIALOGUE_BACKEND_API_KEY: Optional[str] = None
    DIALOGUE_BACKEND_TIMEOUT: float = 60.0

    # Parts catalog (Intella Parts)
    CATALOG_API_URL: str = "https://api.intellaparts.com"
    CATALOG_API_KEY: Optional[str] = None
    CATALOG_AUTH_METHOD: str = "bearer"  # bearer | api-key | basic | none
    CATALOG_ENDPOINTS: str = "default"  # default | v1 | restful
    CATALOG_TIMEOUT: float = 30.0

    # Local conversation graph searches the catalog instead of mock data
    LOCAL_GRAPH_USE_CATALOG: bool = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
