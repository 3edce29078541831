"""Configuration for the privacy SDK."""

import os
from dataclasses import dataclass, fields


@dataclass
class PrivacyConfig:
    """
    Configuration for the privacy SDK client and its local caches.

    Attributes:
        base_url: Base URL for the privacy API (default: hosted service)
        api_key: API key sent as ``X-API-Key`` on every request
        timeout: Request timeout in seconds (default: 10.0)
        max_retries: Maximum number of attempts for transport errors (default: 3)
        retry_min_wait: Minimum wait time between retries in seconds (default: 1)
        retry_max_wait: Maximum wait time between retries in seconds (default: 10)
        verify_ssl: Whether to verify SSL certificates (default: True)
        cache_ttl_ms: Default TTL for generic cache entries (default: 5 minutes)
        cache_cleanup_interval_ms: Sweep interval for expired entries; 0 disables it
        encryption_cache_ttl_ms: TTL for memoized encrypt/decrypt results (default: 10 minutes)
        lazy_decryption_ttl_ms: TTL for lazy decryption sessions (default: 30 minutes)
        decrypt_batch_size: Max in-flight decrypt calls during batched decryption (default: 5)

    Example:
        ```python
        config = PrivacyConfig(
            api_key="your-api-key",
            base_url="http://localhost:3000/api/v1",
            timeout=5.0,
        )
        ```
    """

    base_url: str = "https://api.arcium-privacy.com/api/v1"
    api_key: str | None = None
    timeout: float = 10.0
    max_retries: int = 3
    retry_min_wait: int = 1
    retry_max_wait: int = 10
    verify_ssl: bool = True
    cache_ttl_ms: int = 300_000
    cache_cleanup_interval_ms: int = 60_000
    encryption_cache_ttl_ms: int = 600_000
    lazy_decryption_ttl_ms: int = 1_800_000
    decrypt_batch_size: int = 5

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self.base_url = self.base_url.rstrip("/")

        if self.timeout <= 0:
            raise ValueError("timeout must be greater than 0")

        if self.max_retries < 0:
            raise ValueError("max_retries must be non-negative")

        if self.retry_min_wait < 0:
            raise ValueError("retry_min_wait must be non-negative")

        if self.retry_max_wait < self.retry_min_wait:
            raise ValueError("retry_max_wait must be >= retry_min_wait")

        for name in ("cache_ttl_ms", "encryption_cache_ttl_ms", "lazy_decryption_ttl_ms"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be greater than 0")

        if self.cache_cleanup_interval_ms < 0:
            raise ValueError("cache_cleanup_interval_ms must be non-negative")

        if self.decrypt_batch_size < 1:
            raise ValueError("decrypt_batch_size must be at least 1")

    @classmethod
    def from_env(cls, prefix: str = "PRIVACY_SDK_") -> "PrivacyConfig":
        """
        Build a config from environment variables.

        Each field maps to ``<prefix><FIELD_NAME>`` in upper case, e.g.
        ``PRIVACY_SDK_API_KEY``. Unset variables keep their defaults.
        """
        values: dict[str, object] = {}
        for f in fields(cls):
            raw = os.getenv(f"{prefix}{f.name.upper()}")
            if raw is None:
                continue
            if f.type in (bool, "bool"):
                values[f.name] = raw.strip().lower() in ("1", "true", "yes", "on")
            elif f.type in (int, "int"):
                values[f.name] = int(raw)
            elif f.type in (float, "float"):
                values[f.name] = float(raw)
            else:
                values[f.name] = raw
        return cls(**values)  # type: ignore[arg-type]
