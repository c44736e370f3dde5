# src/config.py

from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Directory holding one JSON file per storage key
    DATA_DIR: str = "data"

    # Key the student/subject document is stored under
    STORAGE_KEY: str = "SRMS_DATA_V1"

    LOG_LEVEL: str = "INFO"

    class Config:
        env_prefix = "SRMS_"
        case_sensitive = False


CONFIG = Settings()


def data_dir() -> Path:
    return Path(CONFIG.DATA_DIR)
