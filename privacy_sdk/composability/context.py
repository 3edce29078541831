"""Explicitly constructed composition context."""

from typing import Optional

from .bridge import CrossProtocolBridge
from .engine import ComposabilityEngine
from .plugins import PluginManager
from .registry import PrimitiveRegistry


class PrivacyContext:
    """
    Wires one registry into an engine and a plugin manager.

    Each context is isolated; build one per tenant or per test instead of
    relying on module-level singletons.
    """

    def __init__(
        self,
        registry: Optional[PrimitiveRegistry] = None,
        bridge: Optional[CrossProtocolBridge] = None,
    ) -> None:
        self.registry = registry if registry is not None else PrimitiveRegistry()
        self.engine = ComposabilityEngine(self.registry)
        self.plugins = PluginManager(self.registry)
        self.bridge = bridge if bridge is not None else CrossProtocolBridge()
