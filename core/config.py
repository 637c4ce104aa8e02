from __future__ import annotations
import os
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Base .env load first
load_dotenv()

class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # ignore unknown env keys to avoid crashes
    )

    # Environment
    environment: Literal["development", "staging", "production", "test"] = Field(default="development")
    log_level: str = Field(default="INFO")
    app_port: int = Field(default=8501, ge=1, le=65535)

    # Analyzer service
    backend_url: str = Field(default=os.getenv("BACKEND_URL", "http://localhost:8000"))
    analyze_path: str = Field(default="/analyze")
    export_csv_path: str = Field(default="/export/csv")
    export_excel_path: str = Field(default="/export/excel")
    request_timeout: float = Field(default=120.0, gt=0)

    # Upload policy
    max_total_mb: int = Field(default=50, ge=1)
    max_files: int = Field(default=12, ge=1)
    allowed_ext: tuple[str, ...] = ("pdf",)

    # Dashboard
    top_merchants: int = Field(default=15, ge=1)
    deep_dive_top_merchants: int = Field(default=10, ge=1)
    currency: str = Field(default="USD")

    # Paths
    logs_dir: Path = Field(default=Path(os.getenv("LOGS_DIR", "data/output")))
    log_file: Path | None = None

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = str(value).upper() if value else "INFO"
        allowed = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}
        if level not in allowed:
            # Fallback to INFO instead of raising to avoid boot failure
            return "INFO"
        return level

    @field_validator("backend_url", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @model_validator(mode="after")
    def _derive_paths_and_ensure_dirs(self) -> "AppConfig":
        # Layered environment loading: .env.<ENVIRONMENT> overrides base
        env_file_variant = Path(f".env.{self.environment}")
        if env_file_variant.exists():
            load_dotenv(dotenv_path=env_file_variant, override=True)
            self.backend_url = os.getenv("BACKEND_URL", self.backend_url).rstrip("/")

        if self.log_file is None:
            self.log_file = self.logs_dir / "app.log"

        self.logs_dir.mkdir(parents=True, exist_ok=True)
        return self

config = AppConfig()
