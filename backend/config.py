from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Field encryption
    encryption_key: str = ""
    encryption_salt: str = "privacy-shield-field-encryption"
    key_derivation_iterations: int = 600_000

    log_level: str = "INFO"

    # CORS — comma-separated origins allowed to access the API
    cors_origins: str = "http://localhost:5173"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
