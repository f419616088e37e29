import os
from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file if it exists, for local development
# In production, environment variables should be set directly.
if os.path.exists(".env"):
    from dotenv import load_dotenv
    load_dotenv()


class Settings(BaseSettings):
    database_url: str = "sqlite:///./prototype.db"
    sql_echo: bool = False
    create_tables: bool = False
    log_level: str = "INFO"

    # Archetype scoring
    archetype_catalog_path: Optional[str] = None  # YAML catalog replacing the built-in archetypes
    voice_blend_threshold: float = 15.0
    apply_value_bonus: bool = False
    blend_inspirations: bool = False

    cors_origins: List[str] = ["*"]
    assistant_name: str = "Opus"

    model_config = SettingsConfigDict(env_prefix='PROTOTYPE_')


settings = Settings()


@lru_cache()
def get_settings() -> Settings:
    return settings
