from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]
    LOG_LEVEL: str = "INFO"
    APP_VERSION: str = "0.1.0"

    # Simulation horizon used when a request does not supply one
    DEFAULT_DAYS: int = 30

    # Day-event generator
    EVENT_SEED: Optional[int] = None
    CAPITAL_CALL_PROBABILITY: float = 0.10
    DISTRIBUTION_PROBABILITY: float = 0.07
    EVENT_MIN_AMOUNT: float = 0.5
    EVENT_MAX_AMOUNT: float = 7.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
