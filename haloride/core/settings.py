from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "HaloRide"
    api_version: str = "1.0.0"
    environment: str = "development"
    lead_store: Literal["memory", "database", "supabase"] = "memory"
    database_url: str = "sqlite:///./haloride.db"
    supabase_url: Optional[str] = None
    supabase_anon_key: Optional[str] = None
    supabase_table: str = "halorides-form"
    supabase_timeout: float = 10.0
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]
    log_level: str = "INFO"
    log_file: Optional[str] = None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


_settings_instance = None


def get_settings():
    """Return a singleton Settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
