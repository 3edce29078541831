"""
Composability System

Registry, workflow engine, plugin lifecycle and cross-protocol bridge for
privacy primitives.

Usage:
    from privacy_sdk.composability import PrivacyContext

    ctx = PrivacyContext()
    ctx.registry.register(my_primitive)
    result = await ctx.engine.execute_workflow("kyc-check", {"age": 30})
"""

from .bridge import BridgeConfig, BridgeOperation, CrossProtocolBridge
from .context import PrivacyContext
from .engine import ComposabilityEngine
from .plugins import PluginConfig, PluginManager, PluginMetadata, PrivacyPlugin
from .registry import PrimitiveRegistry

__all__ = [
    "BridgeConfig",
    "BridgeOperation",
    "ComposabilityEngine",
    "CrossProtocolBridge",
    "PluginConfig",
    "PluginManager",
    "PluginMetadata",
    "PrimitiveRegistry",
    "PrivacyContext",
    "PrivacyPlugin",
]
