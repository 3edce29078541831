"""Example plugin contributing a salted, obfuscating hash primitive."""

import asyncio
import json
from typing import Any, Dict

import structlog

from ..cache import simple_hash
from ..composability.plugins import PluginMetadata, PrivacyPlugin
from ..composability.registry import PrimitiveRegistry
from ..types import PrivacyPrimitive

logger = structlog.get_logger(__name__)

DEFAULT_SALT = "default-salt"


class CustomHashPrimitive(PrivacyPrimitive):
    id = "custom-hash"
    name = "Custom Hash Primitive"
    description = "Creates a privacy-preserving hash of input data"
    category = "hash"
    version = "1.0.0"
    author = "Custom Plugin"
    tags = ("hash", "obfuscation", "privacy")
    inputs = {"data": {}, "salt": {"type": "string"}}
    outputs = {"hashedData": {"type": "string"}, "salt": {"type": "string"}}

    async def execute(self, input: Dict[str, Any]) -> Dict[str, Any]:
        data = input.get("data")
        if not data:
            raise ValueError("Data is required for hashing")

        salt = input.get("salt") or DEFAULT_SALT
        # Yield to the loop like a remote call would
        await asyncio.sleep(0)
        digest = simple_hash(json.dumps(data, sort_keys=True, default=str) + salt)

        return {
            "hashedData": f"hash_{digest.lstrip('-')}",
            "salt": salt,
            "success": True,
            "originalLength": len(data) if isinstance(data, (str, list, tuple)) else 0,
        }


class CustomPrivacyPlugin(PrivacyPlugin):
    metadata = PluginMetadata(
        id="custom-privacy-plugin",
        name="Custom Privacy Plugin",
        version="1.0.0",
        description="Adds custom privacy primitives to the system",
        author="Arcium Team",
        license="MIT",
    )

    def __init__(self) -> None:
        self.primitives = [CustomHashPrimitive()]

    async def init(self, registry: PrimitiveRegistry) -> None:
        logger.info("Plugin initialized", id=self.metadata.id, name=self.metadata.name)

    async def destroy(self) -> None:
        logger.info("Plugin destroyed", id=self.metadata.id, name=self.metadata.name)
