import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _optional_float(name: str) -> float | None:
    raw = os.getenv(name, "").strip()
    return float(raw) if raw else None


@dataclass(frozen=True)
class Settings:
    host: str = os.getenv("RELAY_HOST", "0.0.0.0")
    port: int = int(os.getenv("RELAY_PORT", "5001"))
    upstream_url: str = os.getenv("UPSTREAM_UPLOAD_URL", "https://stacks.targetr.net/upload")
    max_upload_bytes: int = int(os.getenv("MAX_UPLOAD_BYTES", str(100 * 1024 * 1024)))
    # None leaves the upstream call without a timeout.
    upstream_timeout_s: float | None = _optional_float("UPSTREAM_TIMEOUT_SECONDS")
    upstream_authorization: str = os.getenv("UPSTREAM_AUTHORIZATION", "")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_json: bool = os.getenv("LOG_JSON", "true").lower() == "true"


settings = Settings()
