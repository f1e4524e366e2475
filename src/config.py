"""Application configuration loaded from environment variables and .env file."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Values are loaded from environment variables first,
    then from a .env file in the project root as fallback.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    DATABASE_URL: str = "sqlite:///./combat.db"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Combat settings
    UNARMED_ATTACK_POWER: int = 0

    # Seed data, loaded into an empty database at startup
    SEED_ON_STARTUP: bool = True
    SEED_DATA_PATH: str = "src/data/seed_encounter.json"


settings = Settings()
