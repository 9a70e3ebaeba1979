import sys
from pathlib import Path
from typing import Literal
from loguru import logger
from pydantic import BaseModel
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)


class Oracle(BaseModel):
    api_url: str = "https://api.openai.com/v1"
    # None falls back to the OPENAI_API_KEY environment variable
    api_key: str | None = None
    model: str = "gpt-4o-mini"
    think: bool = False
    retry_n: int = 3
    timeout: float = 120.0
    transport_retries: int = 2
    max_concurrent_requests: int = 8
    capacity: int | None = None


class Sort(BaseModel):
    criterion: str = ""
    chunk_size: int = 10
    extreme_k: int = 10
    iterations: int = 1
    sort_order: Literal["ascending", "descending"] = "descending"
    input_file: Path = Path("data/items.txt")
    output_file: Path = Path("output/sorted.json")
    timeout: float | None = None


class Settings(BaseSettings):
    oracle: Oracle = Oracle()
    sort: Sort = Sort()

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    model_config = SettingsConfigDict(toml_file='config/config.toml')

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, TomlConfigSettingsSource(settings_cls))


def init_log(level: str | None = None):
    logger.remove()
    logger.add(sys.stderr, level=level or settings.log_level)


settings = Settings()
