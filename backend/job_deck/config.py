"""Settings for the job_deck client, CLI and reference server."""

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="JOB_DECK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_url: str = "http://localhost:4000"
    api_token: str = ""
    timeout: int = 10

    snapshot_path: Path = Path.home() / ".job_deck" / "state.json"
    persist: bool = True
    local_only: bool = False

    log_level: str = "INFO"

    # Reference server
    data_dir: Path = Path("./data/runtime")
    default_user: str = "demo-user-1"

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
