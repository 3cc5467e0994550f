# fairgroup/config/settings.py

from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    ENV: str = "development"
    DATABASE_URL: str = "sqlite:///./fairgroup.db"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # grades outside [GRADE_MIN, GRADE_MAX] are skipped with a warning
    VALIDATE_GRADES: bool = True
    GRADE_MIN: float = 1.0
    GRADE_MAX: float = 5.0

    MAX_BALANCE_ITERATIONS: int = 100

    class Config:
        env_file = ".env"

settings = Settings()
