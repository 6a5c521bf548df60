from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    ENV: str = "local"
    DB_HOST: str = "db"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "postgres"
    DB_NAME: str = "musclegram"
    DB_URL: str | None = None  # full override, e.g. sqlite:///./musclegram.db

    # Auth (tokens are issued by the identity provider; we only verify them)
    SECRET_KEY: str = "dev-secret-change-me"       # set a strong one in prod
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Fetch limits
    FEED_LIMIT: int = 50
    NOTIFICATION_LIMIT: int = 50
    USER_LIST_LIMIT: int = 50

    DEFAULT_MONTHLY_TARGET: int = 12

    # Caches
    ENGAGEMENT_CACHE_ENABLED: bool = False
    LOCAL_CACHE_DIR: str | None = None
    LOCAL_CACHE_TTL_SECONDS: int = 300

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def DATABASE_URL(self) -> str:
        if self.DB_URL:
            return self.DB_URL
        return (
            f"postgresql+psycopg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

@lru_cache
def get_settings() -> Settings:
    return Settings()
