from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

class Settings(BaseSettings):

    STRIPE_SECRET_KEY: str
    STRIPE_TIMEOUT_SECONDS: float = 10.0

    PAYMENT_CURRENCY: str = "inr"
    MINIMUM_DONATION: int = 50

    SESSION_COOKIE_NAME: str = "sid"
    SESSION_COOKIE_SECURE: bool = False
    SESSION_TTL_SECONDS: int = 86400
    SESSION_CHECK_PERIOD_SECONDS: int = 86400

    CORS_ALLOW_ORIGINS: list[str] = ["*"]
    LOG_LEVEL: str = "INFO"
    ROOT_PATH: str = ""
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

@lru_cache()
def get_settings() -> Settings:
    return Settings()
