"""Application configuration using pydantic-settings."""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """API configuration from environment variables."""

    # HTTP
    port: int = Field(default=5001, alias="PORT")
    allowed_origins: str = Field(
        default="http://localhost:3000,http://localhost:8081",
        alias="ALLOWED_ORIGINS",
    )

    # Database
    db_host: str = Field(default="db", alias="DB_HOST")
    db_port: int = Field(default=5432, alias="DB_PORT")
    db_name: str = Field(default="staticfund", alias="DB_NAME")
    db_user: str = Field(default="postgres", alias="DB_USER")
    db_password: str = Field(..., alias="DB_PASSWORD")

    # Gemini
    google_api_key: str | None = Field(default=None, alias="GOOGLE_API_KEY")
    gemini_model: str = Field(default="gemini-2.5-flash", alias="GEMINI_MODEL")

    # Auth
    jwt_secret_key: str = Field(default="change-me", alias="JWT_SECRET_KEY")
    jwt_expiration_hours: int = Field(default=168, alias="JWT_EXPIRATION_HOURS")

    # Advice caches: capacity and TTL (seconds) per category
    tips_cache_size: int = Field(default=50, alias="TIPS_CACHE_SIZE")
    tips_cache_ttl: int = Field(default=3600, alias="TIPS_CACHE_TTL")
    habits_cache_size: int = Field(default=50, alias="HABITS_CACHE_SIZE")
    habits_cache_ttl: int = Field(default=86400, alias="HABITS_CACHE_TTL")
    completeness_cache_size: int = Field(default=30, alias="COMPLETENESS_CACHE_SIZE")
    completeness_cache_ttl: int = Field(default=1800, alias="COMPLETENESS_CACHE_TTL")
    solar_cache_size: int = Field(default=30, alias="SOLAR_CACHE_SIZE")
    solar_cache_ttl: int = Field(default=3600, alias="SOLAR_CACHE_TTL")

    # Rate limits
    api_rate_limit: int = Field(default=100, alias="API_RATE_LIMIT")  # per minute
    login_rate_limit: int = Field(default=5, alias="LOGIN_RATE_LIMIT")  # per 15 minutes
    register_rate_limit: int = Field(default=3, alias="REGISTER_RATE_LIMIT")  # per hour
    ai_rate_limit: int = Field(default=10, alias="AI_RATE_LIMIT")  # per minute

    # Scheduler
    cache_stats_interval_minutes: int = Field(default=30, alias="CACHE_STATS_INTERVAL_MINUTES")

    @property
    def database_url(self) -> str:
        """Build async PostgreSQL connection string."""
        return f"postgresql+asyncpg://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    @property
    def cors_origins(self) -> list[str]:
        """Split ALLOWED_ORIGINS into a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Singleton instance
settings = Settings()
