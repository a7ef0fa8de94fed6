from pydantic_settings import BaseSettings
from typing import List
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings and configuration"""

    # Application
    APP_NAME: str = "StudentsCRUD"
    APP_VERSION: str = "3.0.0"
    DEBUG: bool = False

    # Remote students API
    STUDENTS_API_URL: str = "http://localhost:8080/backend/server.php?module=students"
    STUDENTS_API_TIMEOUT: float = 10.0  # seconds

    # Pagination
    DEFAULT_PAGE_SIZE: int = 5
    PAGE_SIZE_OPTIONS: List[int] = [5, 10, 20]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "students.log"

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
