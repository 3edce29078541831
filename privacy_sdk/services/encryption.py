"""
Encryption Service

Thin translator over the remote encrypt/decrypt endpoints. Results are
memoized in an ``EncryptionCache`` so repeated calls with identical
arguments skip the round trip.

Batched lazy decryption processes items in fixed-size windows: every
decrypt in a window runs concurrently, and the next window starts only
after the whole current window has resolved.
"""

import asyncio
import json
from typing import Any, Dict, List, Optional, Set, TypedDict

import structlog

from ..cache import DEFAULT_CLEANUP_INTERVAL_MS, EncryptionCache, TTLCache
from ..exceptions import DecryptionError, EncryptionError, KeyDerivationError, ValidationError
from ..models import EncryptionResult
from ..types import RemoteInvoker

logger = structlog.get_logger(__name__)

DEFAULT_METHOD = "aes256"
DECRYPT_BATCH_SIZE = 5
LAZY_DECRYPTION_TTL_MS = 1_800_000


class EncryptedItem(TypedDict):
    id: str
    data: Any


class EncryptionService:
    def __init__(
        self,
        client: RemoteInvoker,
        cache: Optional[EncryptionCache] = None,
        batch_size: int = DECRYPT_BATCH_SIZE,
    ) -> None:
        self.client = client
        self.cache = cache if cache is not None else EncryptionCache()
        self.batch_size = batch_size

    async def encrypt(
        self, data: str | bytes, password: str, method: str = DEFAULT_METHOD
    ) -> EncryptionResult:
        """
        Encrypt ``data`` with ``password`` via the remote service.

        Raises:
            EncryptionError: If the remote call fails or returns no data
        """
        plaintext = data.decode("utf-8") if isinstance(data, bytes) else data

        cached = self.cache.get_cached_encryption(plaintext, password)
        if cached is not None:
            return cached

        response = await self.client.invoke(
            "/encrypt",
            {"data": plaintext, "method": method, "password": password},
        )
        if not response.success or not response.data:
            raise EncryptionError(response.error or "Encryption failed")

        result = EncryptionResult.model_validate({"method": method, **response.data})
        self.cache.cache_encryption(plaintext, password, result)
        return result

    async def decrypt(
        self, encrypted_data: Any, password: str, method: str = DEFAULT_METHOD
    ) -> str:
        """
        Decrypt ``encrypted_data`` with ``password`` via the remote service.

        Raises:
            DecryptionError: If the remote call fails or returns no data
        """
        cached = self.cache.get_cached_decryption(encrypted_data, password)
        if cached is not None:
            return cached

        response = await self.client.invoke(
            "/decrypt",
            {"encryptedData": encrypted_data, "method": method, "password": password},
        )
        if not response.success or not response.data:
            raise DecryptionError(response.error or "Decryption failed")

        decrypted = response.data.get("decryptedData")
        if decrypted is None:
            raise DecryptionError("Decryption response did not include decryptedData")

        self.cache.cache_decryption(encrypted_data, password, decrypted)
        return decrypted

    async def derive_key(
        self, password: str, salt: Optional[str] = None, iterations: int = 100_000
    ) -> str:
        response = await self.client.invoke(
            "/derive-key",
            {"input": password, "method": "pbkdf2", "salt": salt, "iterations": iterations},
        )
        if not response.success or not response.data:
            raise KeyDerivationError(response.error or "Key derivation failed")
        return response.data["key"]

    async def encrypt_text(self, text: str, password: str) -> EncryptionResult:
        return await self.encrypt(text, password)

    async def encrypt_json(self, obj: Any, password: str) -> EncryptionResult:
        return await self.encrypt(json.dumps(obj), password)

    async def decrypt_json(self, encrypted_data: Any, password: str) -> Any:
        decrypted = await self.decrypt(encrypted_data, password)
        try:
            return json.loads(decrypted)
        except json.JSONDecodeError as e:
            raise DecryptionError(
                f"Decrypted data is not valid JSON: {e}", code="JSON_PARSE_ERROR"
            ) from e

    # Lazy decryption

    def init_lazy_decryption(
        self,
        ttl_ms: int = LAZY_DECRYPTION_TTL_MS,
        cleanup_interval_ms: int = DEFAULT_CLEANUP_INTERVAL_MS,
    ) -> TTLCache[str]:
        """
        Create a session cache for decrypt-on-demand results.

        The caller owns the returned cache and must ``close()`` it to stop
        its sweeper. ``PrivacySDK.init_lazy_decryption`` does this on
        ``PrivacySDK.close()``.
        """
        return TTLCache(cleanup_interval_ms=cleanup_interval_ms, default_ttl_ms=ttl_ms)

    async def decrypt_on_demand(
        self,
        encrypted_data: Any,
        password: str,
        cache: Optional[TTLCache[str]] = None,
    ) -> str:
        key = EncryptionCache.decryption_key(encrypted_data, password)
        if cache is not None:
            cached = cache.get(key)
            if cached is not None:
                return cached

        decrypted = await self.decrypt(encrypted_data, password)

        if cache is not None:
            cache.set(key, decrypted)
        return decrypted

    async def decrypt_batch_lazy(
        self,
        items: List[EncryptedItem],
        password: str,
        cache: Optional[TTLCache[str]] = None,
    ) -> Dict[str, str]:
        """
        Decrypt ``items`` in windows of ``batch_size`` concurrent calls.

        Returns:
            Mapping of item id to plaintext, in input order

        Raises:
            ValidationError: If two items share an id; nothing is decrypted
        """
        seen: Set[str] = set()
        duplicates: List[str] = []
        for item in items:
            if item["id"] in seen and item["id"] not in duplicates:
                duplicates.append(item["id"])
            seen.add(item["id"])
        if duplicates:
            raise ValidationError(f"Duplicate item ids in batch: {', '.join(duplicates)}")

        results: Dict[str, str] = {}

        for start in range(0, len(items), self.batch_size):
            window = items[start:start + self.batch_size]
            decrypted = await asyncio.gather(
                *(self.decrypt_on_demand(item["data"], password, cache) for item in window)
            )
            for item, plaintext in zip(window, decrypted):
                results[item["id"]] = plaintext

        logger.debug("Batch decryption finished", items=len(items), batch_size=self.batch_size)
        return results
