from dataclasses import dataclass
from dotenv import load_dotenv
import os

load_dotenv()  # take environment variables from .env


def env_get(key: str, default: str | None = None) -> str | None:
    """Get environment variable or return default."""
    return os.getenv(key, default)


def env_int(key: str, default: int) -> int:
    """Get an integer environment variable, raising on malformed values."""
    value = env_get(key)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"Environment variable {key} must be an integer, got {value!r}") from e


@dataclass(frozen=True)
class PipelineSettings:
    """Runtime settings for the rescale pipeline"""

    output_dir: str = "output"
    log_dir: str = "logs"
    log_level: str = "INFO"
    http_timeout: int = 30
    http_retries: int = 3

    @classmethod
    def from_env(cls) -> "PipelineSettings":
        """Build settings from RESCALE_* environment variables"""
        return cls(
            output_dir=env_get("RESCALE_OUTPUT_DIR", "output"),
            log_dir=env_get("RESCALE_LOG_DIR", "logs"),
            log_level=env_get("RESCALE_LOG_LEVEL", "INFO").upper(),
            http_timeout=env_int("RESCALE_HTTP_TIMEOUT", 30),
            http_retries=env_int("RESCALE_HTTP_RETRIES", 3),
        )
