from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    host: str = "127.0.0.1"
    port: int = 9000
    log_level: str = "INFO"
    drive_api_base: str = "https://www.googleapis.com/drive/v3"
    upload_api_base: str = "https://www.googleapis.com/upload/drive/v3"
    default_page_size: int = 100

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
