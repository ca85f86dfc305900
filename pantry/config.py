from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATASET = Path(__file__).resolve().parents[1] / "data" / "RAW_recipes.csv"


class Settings(BaseSettings):
    """Runtime settings, read from PANTRY_* environment variables or .env"""

    dataset_path: Path = DEFAULT_DATASET
    # seconds allowed for the one-time dataset read
    load_timeout: float = 30.0
    # response cap applied by the HTTP host and CLI, not by the search engine
    search_result_limit: int = 100
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="PANTRY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
