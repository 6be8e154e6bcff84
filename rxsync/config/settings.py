from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    extraction_provider: str = "http"
    extraction_base_url: str = "http://localhost:5000"
    extraction_endpoint: str = "/api/process-image"
    extraction_timeout_seconds: int = 120

    failure_policy: Literal["abort", "isolate"] = "abort"

    phase_ocr_after_seconds: float = 2.0
    phase_reasoning_after_seconds: float = 5.0
    phase_validating_after_seconds: float = 9.0
    progress_tick_seconds: float = 0.8
    results_delay_seconds: float = 0.8

    export_basename: str = "RxSync_Medical_Data"
