from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Wordbank"
    environment: str = "dev"

    # SQLite for local dev, PostgreSQL for ranked full-text search
    database_url: str = "sqlite:///./wordbank.db"
    sql_echo: bool = False

    # Shared secret expected in the x-api-key header
    x_api_key: str | None = None
    public_paths: list[str] = ["/health"]

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def _normalize_database_url(cls, value: str) -> str:
        # SQLAlchemy dropped the legacy "postgres" alias
        if isinstance(value, str) and value.startswith("postgres://"):
            return "postgresql://" + value[len("postgres://"):]
        return value


settings = Settings()
