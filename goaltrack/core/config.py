from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "postgresql://goaltrack:goaltrack@db:5432/goaltrack"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Comma-separated allowed origins, or "*" to allow all.
    # Example: "https://myapp.com,https://api.myapp.com"
    CORS_ORIGINS: str = "*"

    # Goal defaults applied to newly created users.
    DEFAULT_DAILY_GOAL_HOURS: float = 2.0
    DEFAULT_WEEKLY_GOAL_HOURS: float = 10.0

    # Look-back window for GET /users/{id}/streak/stats when `days` is omitted.
    STATS_DEFAULT_DAYS: int = 30

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
