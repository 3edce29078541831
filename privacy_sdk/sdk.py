"""High level entry point tying the client, services and composition context together."""

from typing import Any, Dict, List, Optional

import structlog

from .cache import EncryptionCache, TTLCache
from .client import PrivacyClient
from .composability import (
    ComposabilityEngine,
    CrossProtocolBridge,
    PluginManager,
    PrimitiveRegistry,
    PrivacyContext,
)
from .config import PrivacyConfig
from .exceptions import ValidationError
from .models import EncryptionResult, ZkProof
from .primitives import register_standard_primitives
from .services.encryption import EncryptedItem, EncryptionService
from .services.zkproof import ZkProofService
from .types import PrivacyPrimitive

logger = structlog.get_logger(__name__)


class PrivacySDK:
    """
    Facade over the privacy service.

    Example:
        ```python
        from privacy_sdk import PrivacySDK, PrivacyConfig

        async with PrivacySDK(PrivacyConfig(api_key="your-api-key")) as privacy:
            encrypted = await privacy.encrypt("sensitive data", "my-password")
            proof = await privacy.prove("range", value=25, min=18, max=100)

            privacy.register_standard_primitives()
            privacy.engine.create_workflow_from_operations(
                "encrypt-then-decrypt", "Round trip", "", [
                    privacy.registry.get("encrypt"),
                    privacy.registry.get("decrypt"),
                ],
            )
        ```
    """

    def __init__(
        self,
        config: Optional[PrivacyConfig] = None,
        client: Optional[PrivacyClient] = None,
        context: Optional[PrivacyContext] = None,
    ) -> None:
        if config is None:
            config = client.config if client is not None else PrivacyConfig()
        self.config = config
        self.client = client if client is not None else PrivacyClient(self.config)
        self.context = context if context is not None else PrivacyContext()
        self._caches: List[TTLCache[Any]] = []
        self.encryption_cache = EncryptionCache(
            ttl_ms=self.config.encryption_cache_ttl_ms,
            cleanup_interval_ms=self.config.cache_cleanup_interval_ms,
        )
        self.encryption = EncryptionService(
            self.client,
            cache=self.encryption_cache,
            batch_size=self.config.decrypt_batch_size,
        )
        self.zk_proof = ZkProofService(self.client)

    async def __aenter__(self) -> "PrivacySDK":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Stop every cache sweeper this SDK started and close the HTTP client."""
        for cache in self._caches:
            cache.close()
        self._caches.clear()
        self.encryption_cache.close()
        await self.client.close()

    def create_cache(self, ttl_ms: Optional[int] = None) -> TTLCache[Any]:
        """
        Build a TTL cache from the SDK config, owned by this SDK.

        Entries default to ``config.cache_ttl_ms`` and the sweeper runs every
        ``config.cache_cleanup_interval_ms``. The cache is closed by
        ``close()``; pass it to ``memoize(cache=...)`` to memoize remote calls.
        """
        cache: TTLCache[Any] = TTLCache(
            cleanup_interval_ms=self.config.cache_cleanup_interval_ms,
            default_ttl_ms=ttl_ms if ttl_ms is not None else self.config.cache_ttl_ms,
        )
        self._caches.append(cache)
        return cache

    # Composition

    @property
    def registry(self) -> PrimitiveRegistry:
        return self.context.registry

    @property
    def engine(self) -> ComposabilityEngine:
        return self.context.engine

    @property
    def plugins(self) -> PluginManager:
        return self.context.plugins

    @property
    def bridge(self) -> CrossProtocolBridge:
        return self.context.bridge

    def register_standard_primitives(self) -> List[PrivacyPrimitive]:
        return register_standard_primitives(self.registry, self.encryption, self.zk_proof)

    # Encryption

    async def encrypt(self, data: str | bytes, password: str, method: str = "aes256") -> EncryptionResult:
        return await self.encryption.encrypt(data, password, method=method)

    async def decrypt(self, encrypted_data: Any, password: str, method: str = "aes256") -> str:
        return await self.encryption.decrypt(encrypted_data, password, method=method)

    def init_lazy_decryption(self, ttl_ms: Optional[int] = None) -> TTLCache[str]:
        """Start a decryption session cache; it is closed with the SDK."""
        return self.create_cache(
            ttl_ms if ttl_ms is not None else self.config.lazy_decryption_ttl_ms
        )

    async def decrypt_on_demand(
        self, encrypted_data: Any, password: str, cache: Optional[TTLCache[str]] = None
    ) -> str:
        return await self.encryption.decrypt_on_demand(encrypted_data, password, cache)

    async def decrypt_batch_lazy(
        self,
        items: List[EncryptedItem],
        password: str,
        cache: Optional[TTLCache[str]] = None,
    ) -> Dict[str, str]:
        return await self.encryption.decrypt_batch_lazy(items, password, cache)

    # Zero-knowledge proofs

    async def prove(self, proof_type: str, **params: Any) -> ZkProof:
        """
        Generate a proof by type.

        ``range`` takes ``value``, ``min``, ``max``; ``balance`` takes
        ``balance``, ``threshold``; ``custom`` takes ``circuit_name`` and
        ``inputs``.
        """
        if proof_type == "range":
            return await self.zk_proof.generate_range_proof(params["value"], params["min"], params["max"])
        if proof_type == "balance":
            return await self.zk_proof.generate_balance_proof(params["balance"], params["threshold"])
        if proof_type == "custom":
            return await self.zk_proof.generate_proof(params["circuit_name"], params.get("inputs", {}))
        raise ValidationError(f"Unsupported proof type: {proof_type}")

    async def verify(self, proof: ZkProof | Dict[str, Any] | str) -> bool:
        return await self.zk_proof.verify_proof(proof)

    # Account

    async def get_balance(self) -> float:
        return (await self.client.get_balance()).balance

    async def get_usage(self) -> Dict[str, Any]:
        return await self.client.get_usage()

    async def health_check(self) -> Dict[str, Any]:
        return await self.client.health_check()
