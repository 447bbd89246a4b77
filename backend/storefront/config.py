from typing import List, Optional

from pydantic import PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 8000
    FRONTEND_ORIGINS: List[str] = ["http://localhost:3000"]
    LOG_LEVEL: str = "INFO"
    CATALOGUE_FILE: Optional[str] = None  # defaults to the bundled data/catalogue.json
    PAYMENT_MOCK_DELAY_MS: int = 100
    PAYMENT_SUCCESS_RATE: float = 0.95
    DISCOUNT_EVERY_N_ORDERS: PositiveInt = 3


settings = Settings()
