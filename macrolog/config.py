# macrolog/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API / Server
    API_HOST: str = "127.0.0.1"
    API_PORT: int = 8090

    # Logging
    LOG_LEVEL: str = "INFO"

    # Comma-separated origins, "*" for any
    CORS_ORIGINS: str = "*"

    # Zone used to resolve "today" when a request does not send one
    TIMEZONE: str = "UTC"

    # Default look-back for activity recommendations (days)
    ACTIVITY_WINDOW_DAYS: int = 14

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
