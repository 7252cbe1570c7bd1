"""
Client configuration.

Settings come from, in increasing priority:
1. an optional YAML file (flat keys matching KountSettings fields)
2. environment variables (KOUNT_*), including values loaded from a .env file
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from kount.errors import ConfigurationError

logger = logging.getLogger(__name__)

ENV_VARS = {
    "api_key": "KOUNT_API_KEY",
    "client_id": "KOUNT_CLIENT_ID",
    "auth_url": "KOUNT_AUTH_URL",
    "host": "KOUNT_HOST",
    "redis_url": "KOUNT_REDIS_URL",
    "timeout_seconds": "KOUNT_TIMEOUT_SECONDS",
    "debug_http": "KOUNT_DEBUG_HTTP",
    "transport": "KOUNT_TRANSPORT",
}


class KountSettings(BaseModel):
    api_key: str
    client_id: str
    auth_url: str
    host: str
    redis_url: Optional[str] = None
    timeout_seconds: float = Field(default=30.0, gt=0)
    debug_http: bool = False
    transport: Literal["requests", "httpx"] = "requests"

    @field_validator("api_key", "client_id", "auth_url", "host")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be empty")
        return value.strip()

    @field_validator("redis_url")
    @classmethod
    def _blank_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value


def _read_yaml(config_path: Path) -> Dict[str, Any]:
    if not config_path.exists():
        raise ConfigurationError(f"Kount config file not found: {config_path}")
    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Kount config file must contain a mapping: {config_path}")
    return data


def load_settings(config_path: Optional[Path] = None) -> KountSettings:
    """
    Build KountSettings from YAML (optional) and the environment.

    Raises:
        ConfigurationError: file missing/invalid, or settings fail validation
    """
    load_dotenv()

    data: Dict[str, Any] = _read_yaml(Path(config_path)) if config_path is not None else {}
    for field_name, env_name in ENV_VARS.items():
        value = os.getenv(env_name)
        if value is not None and value != "":
            data[field_name] = value

    try:
        settings = KountSettings(**data)
    except ValidationError as e:
        logger.error(f"Kount settings validation failed: {e}")
        raise ConfigurationError(f"Invalid Kount settings: {e}") from e

    logger.debug("Loaded Kount settings for client %s (host=%s)", settings.client_id, settings.host)
    return settings
