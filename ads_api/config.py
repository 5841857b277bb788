# ads_api/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, AliasChoices


class Settings(BaseSettings):
    # read .env, ignore unknown keys
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    # Database
    DATABASE_URL: str = "sqlite:///./database.db"

    # Telegram channel publishing
    TELEGRAM_BOT_TOKEN: str | None = Field(
        default=None,
        validation_alias=AliasChoices("TELEGRAM_BOT_TOKEN", "BOT_TOKEN"),
    )
    TELEGRAM_CHANNEL_ID: str | None = None
    TELEGRAM_API_URL: str = "https://api.telegram.org"
    TELEGRAM_TIMEOUT_SEC: float = 10.0

    # Runtime
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "info"

    # CORS
    ALLOWED_ORIGINS: str = "*"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def telegram_configured(self) -> bool:
        return bool(self.TELEGRAM_BOT_TOKEN) and bool(self.TELEGRAM_CHANNEL_ID)


def get_settings() -> Settings:
    return Settings()
