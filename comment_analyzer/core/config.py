# comment_analyzer/core/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# project root (the directory holding pyproject.toml)
BASE_DIR = Path(__file__).resolve().parents[2]

# .env loading
ENV_PATH = BASE_DIR / ".env"
if ENV_PATH.exists():
    load_dotenv(ENV_PATH)

# log level (.env LOG_LEVEL, default INFO)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# CORS
# - CORS_ORIGINS="http://localhost:3000,http://127.0.0.1:8000" in .env restricts origins
# - otherwise everything is allowed (["*"])
_cors_raw = os.getenv("CORS_ORIGINS", "")
if _cors_raw:
    CORS_ORIGINS = [o.strip() for o in _cors_raw.split(",") if o.strip()]
else:
    CORS_ORIGINS = ["*"]

DEFAULT_REMOTE_API_BASE = "https://hf-mediator.onrender.com"


def _env_bool(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return v.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    v = os.getenv(name)
    if v is None:
        return default
    try:
        return float(v)
    except ValueError:
        return default


@dataclass(frozen=True)
class AnalysisConfig:
    """Runtime settings for the analysis services.

    - remote_enabled: call the external API before the local heuristics
    - remote_api_base: base URL of the external sentiment/summary API
    - remote_timeout: seconds before a remote call is abandoned
    - demo_password: shared password accepted for every mock account
    - save_reports: write combined-insight reports to output_dir as YAML
    - output_dir: where reports and rendered word clouds go
    """

    remote_enabled: bool = False
    remote_api_base: str = DEFAULT_REMOTE_API_BASE
    remote_timeout: float = 10.0
    demo_password: str = "password123"
    save_reports: bool = False
    output_dir: str = str(BASE_DIR / "output")


def load_analysis_config() -> AnalysisConfig:
    """
    Build AnalysisConfig from the environment.

    Environment variables
    - REMOTE_ENABLED (default: 0)
    - REMOTE_API_BASE (default: https://hf-mediator.onrender.com)
    - REMOTE_TIMEOUT (default: 10)
    - DEMO_PASSWORD (default: password123)
    - SAVE_REPORTS (default: 0)
    - OUTPUT_DIR (default: <project>/output)
    """
    base = os.getenv("REMOTE_API_BASE", DEFAULT_REMOTE_API_BASE).strip().rstrip("/")
    timeout = _env_float("REMOTE_TIMEOUT", 10.0)
    if timeout <= 0:
        timeout = 10.0

    return AnalysisConfig(
        remote_enabled=_env_bool("REMOTE_ENABLED", False),
        remote_api_base=base or DEFAULT_REMOTE_API_BASE,
        remote_timeout=timeout,
        demo_password=os.getenv("DEMO_PASSWORD", "password123"),
        save_reports=_env_bool("SAVE_REPORTS", False),
        output_dir=os.getenv("OUTPUT_DIR", str(BASE_DIR / "output")),
    )
