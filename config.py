import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip()


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list) -> Tuple[str, ...]:
    raw = _get_env(name)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",") if item.strip()]
    return tuple(values) if values else tuple(default)


@dataclass(frozen=True)
class Settings:
    base_dir: str
    database_url: str
    log_level: str
    analysis_delay_seconds: float
    max_upload_mb: float
    cors_allowed_origins: Tuple[str, ...]

    @property
    def max_upload_bytes(self) -> int:
        return int(self.max_upload_mb * 1024 * 1024)


def get_settings() -> Settings:
    """Read settings from the environment (and .env, loaded at import)."""
    is_hf = os.environ.get("SPACE_ID") is not None
    base_dir = _get_env("BASE_DIR", "/tmp/data" if is_hf else "data")
    default_db = f"sqlite:///{os.path.join(base_dir, 'resumes.db')}"

    return Settings(
        base_dir=base_dir,
        database_url=_get_env("DATABASE_URL", default_db),
        log_level=_get_env("LOG_LEVEL", "INFO").upper(),
        analysis_delay_seconds=max(0.0, _get_env_float("ANALYSIS_DELAY_SECONDS", 0.0)),
        max_upload_mb=_get_env_float("MAX_UPLOAD_MB", 10.0),
        cors_allowed_origins=_get_env_list("CORS_ALLOWED_ORIGINS", ["*"]),
    )
