"""Configuration loading and startup validation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List

import yaml

DEFAULT_CONFIG_PATH = "config/config.local.yaml"
FALLBACK_CONFIG_PATH = "config/config.yaml"
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


@dataclass
class TailorConfig:
    """Settings for the tailoring client, PDF service and uploads."""
    api_key: str = ""
    api_base: str = ""
    model: str = "gpt-4o"
    temperature: float = 0.7
    pdf_service_url: str = "http://127.0.0.1:8000"
    request_timeout: float = 60.0
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class ConfigError:
    """A single configuration issue."""
    field: str
    message: str
    severity: Severity


def load_raw_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """Load the raw YAML mapping.

    Priority order:
    1. *config_path* (normally ``config.local.yaml`` with secrets)
    2. ``config/config.yaml`` (template/defaults)

    Returns an empty dict when neither file exists.
    """
    repo_root = Path(__file__).resolve().parents[1]

    def _resolve(candidate: str) -> Path:
        path = Path(candidate)
        if path.exists():
            return path
        alt = repo_root / candidate
        if alt.exists():
            return alt
        return path

    for candidate in (config_path, FALLBACK_CONFIG_PATH):
        path = _resolve(candidate)
        if not path.exists():
            continue
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file must be a mapping: {path}")
        return data

    return {}


def resolve_placeholder(value: str) -> str:
    """Expand a ``${VAR_NAME}`` placeholder from the environment."""
    if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
        return os.environ.get(value[2:-1], "")
    return value


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> TailorConfig:
    """Build a :class:`TailorConfig` from YAML, then apply env overrides."""
    data = load_raw_config(config_path)
    defaults = TailorConfig()

    config = TailorConfig(
        api_key=resolve_placeholder(data.get("api_key", "")) or "",
        api_base=resolve_placeholder(data.get("api_base", "")) or "",
        model=data.get("model", defaults.model),
        temperature=data.get("temperature", defaults.temperature),
        pdf_service_url=data.get("pdf_service_url", defaults.pdf_service_url),
        request_timeout=data.get("request_timeout", defaults.request_timeout),
        max_upload_bytes=data.get("max_upload_bytes", defaults.max_upload_bytes),
    )

    # Env vars take priority over the file
    config.api_key = os.environ.get("OPENAI_API_KEY", "") or config.api_key
    config.api_base = os.environ.get("RESUME_TAILOR_API_BASE", "") or config.api_base
    config.model = os.environ.get("RESUME_TAILOR_MODEL", "") or config.model
    config.pdf_service_url = os.environ.get("RESUME_TAILOR_PDF_SERVICE_URL", "") or config.pdf_service_url
    max_upload = os.environ.get("RESUME_TAILOR_MAX_UPLOAD_BYTES", "")
    if max_upload:
        try:
            config.max_upload_bytes = int(max_upload)
        except ValueError:
            raise ValueError(f"RESUME_TAILOR_MAX_UPLOAD_BYTES must be an integer, got {max_upload!r}") from None

    return config


def validate_config(config: TailorConfig, require_api_key: bool = True) -> List[ConfigError]:
    """Return a list of issues (empty = valid)."""
    errors: List[ConfigError] = []

    # --- API key ---
    if not config.api_key:
        errors.append(ConfigError(
            field="api_key",
            message="OPENAI_API_KEY not set. Set the env var or add api_key to config/config.local.yaml",
            severity=Severity.ERROR if require_api_key else Severity.WARNING,
        ))

    # --- Model ---
    if not config.model or not isinstance(config.model, str):
        errors.append(ConfigError(
            field="model",
            message="model must be a non-empty string",
            severity=Severity.ERROR,
        ))

    # --- Temperature ---
    temperature = config.temperature
    if isinstance(temperature, bool) or not isinstance(temperature, (int, float)) or not 0 <= temperature <= 2:
        errors.append(ConfigError(
            field="temperature",
            message=f"temperature must be a number between 0 and 2, got {temperature}",
            severity=Severity.ERROR,
        ))

    # --- PDF service ---
    url = config.pdf_service_url
    if not isinstance(url, str) or not url.startswith(("http://", "https://")):
        errors.append(ConfigError(
            field="pdf_service_url",
            message=f"pdf_service_url must be an http(s) URL, got {url!r}",
            severity=Severity.WARNING,
        ))

    # --- Timeouts and limits ---
    timeout = config.request_timeout
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        errors.append(ConfigError(
            field="request_timeout",
            message=f"request_timeout must be a positive number, got {timeout}",
            severity=Severity.ERROR,
        ))

    max_upload = config.max_upload_bytes
    if isinstance(max_upload, bool) or not isinstance(max_upload, int) or max_upload <= 0:
        errors.append(ConfigError(
            field="max_upload_bytes",
            message=f"max_upload_bytes must be a positive integer, got {max_upload}",
            severity=Severity.ERROR,
        ))

    return errors
