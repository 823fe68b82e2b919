from pydantic_settings import BaseSettings
from functools import lru_cache

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./customer.db"
    SQL_ECHO: bool = False
    RUN_MIGRATIONS: bool = True

    HOST: str = "0.0.0.0"
    PORT: int = 8000
    CORS_ORIGIN: str = "http://localhost:3000"

    SERVICE_NAME: str = "customer-directory"
    SERVICE_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"

@lru_cache
def get_settings() -> Settings:
    return Settings()
