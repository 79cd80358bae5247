"""Configuration management for framelens.

Loads settings from a YAML configuration file with environment variable
overrides (``FRAMELENS_`` prefix, ``__`` for nested sections). Supports
.env files.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from framelens.domain.models import OcrEngineKind

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/framelens.yaml")


class CaptureConfig(BaseModel):
    monitor_id: int = Field(default=1, ge=0, description="mss monitor index (0 = all monitors)")
    capture_windows: bool = Field(default=True)
    capture_interval: float = Field(default=2.0, gt=0)
    capture_timeout: float = Field(default=10.0, gt=0)


class SimilarityConfig(BaseModel):
    skip_identical: bool = Field(
        default=False,
        description="Skip OCR when the fingerprint matches the previous frame",
    )
    ssim_window: int = Field(default=11, ge=3)
    ssim_sigma: float = Field(default=1.5, gt=0)


class OcrConfig(BaseModel):
    enabled: bool = Field(default=True)
    engine: OcrEngineKind = Field(default=OcrEngineKind.TESSERACT)
    lang: str = Field(default="eng")
    # Larger values give more granular output; 600 is also faster than 150 in practice
    dpi: int = Field(default=600, gt=0)
    psm: int = Field(default=1, ge=0, le=13, description="Page segmentation mode")
    oem: int = Field(default=1, ge=0, le=3, description="0 legacy, 1 LSTM, 3 default")
    tesseract_cmd: str | None = Field(default=None)


class OutputConfig(BaseModel):
    save_text_files: bool = Field(default=False)
    text_dir: str = Field(default="text_json")
    capture_test_file: str = Field(default="capture_test.png")


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)
    quiet_loggers: list[str] = Field(
        default_factory=lambda: ["PIL", "pytesseract"],
        description="Third-party loggers held at WARNING",
    )


class Settings(BaseSettings):
    """Root configuration for framelens.

    Loads from YAML file and supports environment variable overrides.
    Reads .env files automatically.
    """

    model_config = {
        "env_prefix": "FRAMELENS_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    capture: CaptureConfig = Field(default_factory=CaptureConfig)
    similarity: SimilarityConfig = Field(default_factory=SimilarityConfig)
    ocr: OcrConfig = Field(default_factory=OcrConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # YAML values arrive as init kwargs; the environment must win over them
        return env_settings, dotenv_settings, init_settings, file_secret_settings


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML + .env + environment variables.

    Priority: env vars > .env file > YAML file > defaults
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    yaml_data = {}
    if path.exists():
        with open(path) as f:
            yaml_data = yaml.safe_load(f) or {}
        logger.info("Loaded configuration from %s", path)
    else:
        logger.warning("Config file %s not found, using defaults + env vars", path)

    return Settings(**yaml_data)
