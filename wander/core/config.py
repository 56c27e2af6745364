# path: wander/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
    # read from .env
    WANDER_API_BASE_URL: str = Field(
        "https://wander-api-196ebd783842.herokuapp.com/api",
        description="Root of the remote Wander API (places, check-ins, users)",
    )
    HTTP_TIMEOUT_SECONDS: float = 10.0
    NEARBY_RADIUS_KM: float = Field(5.0, gt=0)
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["*"]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
