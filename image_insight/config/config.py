import os
from dataclasses import dataclass

from . import env_config
from .constants import MAX_DIMENSION_PX, MAX_SIZE_MB, MAX_UPLOAD_MB, MODEL_NAME


@dataclass(frozen=True)
class Config:
    """
    Application settings, built once at startup and handed to the components that need them.
    """
    gemini_api_key: str | None = None
    model_name: str = MODEL_NAME
    ui_url: str = "http://localhost:4200"
    max_size_mb: float = MAX_SIZE_MB
    max_dimension_px: int = MAX_DIMENSION_PX
    max_upload_mb: int = MAX_UPLOAD_MB
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """
        Reads the settings from the environment (and `.env`, already loaded by `env_config`).
        Returns:
            config (Config): Settings with defaults for every unset variable.
        """
        return cls(
            gemini_api_key=env_config.GEMINI_API_KEY or None,
            model_name=env_config.GEMINI_MODEL or MODEL_NAME,
            ui_url=env_config.UI_URL,
            max_size_mb=float(os.getenv("MAX_IMAGE_SIZE_MB", MAX_SIZE_MB)),
            max_dimension_px=int(os.getenv("MAX_IMAGE_DIMENSION_PX", MAX_DIMENSION_PX)),
            max_upload_mb=int(os.getenv("MAX_UPLOAD_MB", MAX_UPLOAD_MB)),
            log_level=env_config.LOG_LEVEL,
        )

    def __repr__(self) -> str:
        key = "set" if self.gemini_api_key else "unset"
        return f"Config(gemini_api_key=<{key}>, model_name={self.model_name!r}, ui_url={self.ui_url!r})"
