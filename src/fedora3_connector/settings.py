"""
Settings and configuration for the Fedora 3 connector.

Centralizes configuration values and provides validation with fail-fast behavior.
Loads settings from environment variables at client construction time.
"""
from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Optional

__all__ = ["Settings", "create_settings_from_env", "DEFAULT_CHUNK_SIZE"]

DEFAULT_CHUNK_SIZE = 1024 * 1024  # 1 MiB


@dataclass(frozen=True)
class Settings:
    """
    Configuration settings for the Fedora 3 REST client.

    Repository Settings:
        fedora_url: Base URL of the Fedora 3 webapp, e.g. http://localhost:8080/fedora (required)
        fedora_user: Username for HTTP basic authentication
        fedora_pass: Password for HTTP basic authentication
        fedora_insecure: Skip TLS certificate verification for local/dev use
        http_timeout_s: HTTP request timeout in seconds

    Content Settings:
        chunk_size: Bytes read per step when streaming content through a digest
    """
    fedora_url: str
    fedora_user: Optional[str] = None
    fedora_pass: Optional[str] = None
    fedora_insecure: bool = False
    http_timeout_s: float = 30.0
    chunk_size: int = DEFAULT_CHUNK_SIZE

    def __post_init__(self):
        """Validate settings on construction."""
        if not self.fedora_url:
            raise ValueError("fedora_url is required")

        # Scheme is required: the REST API is always reached over http(s)
        url_pattern = r"^https?://[a-zA-Z0-9.-]+(?::[0-9]+)?(?:/.*)?$"
        if not re.match(url_pattern, self.fedora_url):
            raise ValueError(f"Invalid fedora_url format: {self.fedora_url}")

        if self.http_timeout_s <= 0:
            raise ValueError(f"http_timeout_s must be positive, got {self.http_timeout_s}")

        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")

        if self.fedora_user and not self.fedora_pass:
            raise ValueError("fedora_user specified but fedora_pass is missing")
        if self.fedora_pass and not self.fedora_user:
            raise ValueError("fedora_pass specified but fedora_user is missing")

    @property
    def has_credentials(self) -> bool:
        return bool(self.fedora_user and self.fedora_pass)


def create_settings_from_env() -> Settings:
    """
    Load settings from environment variables.

    Environment Variables:
        - FEDORA3_URL (required)
        - FEDORA3_USERNAME (optional)
        - FEDORA3_PASSWORD (optional)
        - FEDORA3_INSECURE (default: false)
        - FEDORA3_HTTP_TIMEOUT (default: 30.0)
        - FEDORA3_CHUNK_SIZE (default: 1048576)

    Returns:
        Settings object with validated configuration

    Raises:
        ValueError: If configuration is invalid or required values missing

    Note:
        Creates a fresh Settings instance every time (no caching).
    """
    def str_to_bool(value: str) -> bool:
        return value.lower() in ('true', '1', 'yes', 'on')

    def get_float(key: str, default: float) -> float:
        value = os.getenv(key)
        return float(value) if value else default

    def get_int(key: str, default: int) -> int:
        value = os.getenv(key)
        return int(value) if value else default

    fedora_url = os.getenv("FEDORA3_URL")
    if not fedora_url:
        raise ValueError("FEDORA3_URL environment variable is required")

    return Settings(
        fedora_url=fedora_url,
        fedora_user=os.getenv("FEDORA3_USERNAME"),
        fedora_pass=os.getenv("FEDORA3_PASSWORD"),
        fedora_insecure=str_to_bool(os.getenv("FEDORA3_INSECURE", "false")),
        http_timeout_s=get_float("FEDORA3_HTTP_TIMEOUT", 30.0),
        chunk_size=get_int("FEDORA3_CHUNK_SIZE", DEFAULT_CHUNK_SIZE),
    )
