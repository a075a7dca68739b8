# Configuração via variáveis de ambiente (.env)
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    MONGO_URI: str = "mongodb://localhost:27017"  # prod/staging separados se precisar
    MONGO_DB: str = "fitchef"

    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL: str = "gpt-4o"
    OPENAI_TIMEOUT: float = 120.0

    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    LOG_LEVEL: str = "INFO"

    # limite por arquivo no upload multipart (10MB)
    MAX_IMAGE_BYTES: int = 10 * 1024 * 1024


settings = Settings()
