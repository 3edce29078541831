"""
Plugin Manager

Plugins are bundles of primitives with an init/destroy lifecycle. The
manager keeps loaded plugins and per-plugin configs, and registers or
unregisters each plugin's primitives in the shared registry.

Error contract:
    - ``load_plugin`` raises: duplicates raise ``PluginAlreadyLoadedError``
      and ``init`` failures propagate with nothing registered.
    - ``unload_plugin`` and ``reload_plugin`` never raise; failures are
      logged and reported as ``False``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import structlog

from ..exceptions import PluginAlreadyLoadedError
from ..types import PrivacyPrimitive, maybe_await
from .registry import PrimitiveRegistry

logger = structlog.get_logger(__name__)


@dataclass
class PluginMetadata:
    id: str
    name: str
    version: str
    description: str = ""
    author: str = ""
    license: str = ""
    repository: Optional[str] = None
    dependencies: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)


@dataclass
class PluginConfig:
    enabled: bool = True
    config: Dict[str, Any] = field(default_factory=dict)


class PrivacyPlugin(ABC):
    """
    A deployable bundle of primitives.

    ``init`` runs before the plugin's primitives are registered and
    ``destroy`` runs before they are unregistered. Either may be a
    coroutine.
    """

    metadata: PluginMetadata
    primitives: Sequence[PrivacyPrimitive] = ()

    @abstractmethod
    def init(self, registry: PrimitiveRegistry) -> Any:
        ...

    def destroy(self) -> Any:
        return None


class PluginManager:
    def __init__(self, registry: PrimitiveRegistry) -> None:
        self.registry = registry
        self._plugins: Dict[str, PrivacyPlugin] = {}
        self._configs: Dict[str, PluginConfig] = {}

    def _ensure_config(self, plugin_id: str) -> PluginConfig:
        config = self._configs.get(plugin_id)
        if config is None:
            config = PluginConfig()
            self._configs[plugin_id] = config
        return config

    def preconfigure_plugin(
        self,
        plugin_id: str,
        enabled: bool = True,
        config: Optional[Dict[str, Any]] = None,
    ) -> PluginConfig:
        """Set a plugin's config before it is first loaded."""
        plugin_config = PluginConfig(enabled=enabled, config=dict(config or {}))
        self._configs[plugin_id] = plugin_config
        return plugin_config

    async def load_plugin(self, plugin: PrivacyPlugin) -> None:
        """
        Initialize a plugin and register its primitives.

        A plugin whose config is disabled is skipped without error.

        Raises:
            TypeError: If ``plugin`` is not a ``PrivacyPlugin``
            PluginAlreadyLoadedError: If the plugin id is already loaded
            Exception: Anything raised by ``plugin.init``
        """
        if not isinstance(plugin, PrivacyPlugin):
            raise TypeError(f"Expected a PrivacyPlugin, got {type(plugin).__name__}")

        plugin_id = plugin.metadata.id
        if plugin_id in self._plugins:
            raise PluginAlreadyLoadedError(plugin_id)

        config = self._ensure_config(plugin_id)
        if not config.enabled:
            logger.info("Plugin not enabled", id=plugin_id)
            return

        try:
            await maybe_await(plugin.init(self.registry))
        except Exception as e:
            logger.error("Failed to load plugin", id=plugin_id, error=str(e))
            raise

        for primitive in plugin.primitives:
            self.registry.register(primitive)

        self._plugins[plugin_id] = plugin
        logger.info(
            "Plugin loaded successfully",
            id=plugin_id,
            name=plugin.metadata.name,
            primitive_count=len(plugin.primitives),
        )

    async def unload_plugin(self, plugin_id: str) -> bool:
        plugin = self._plugins.get(plugin_id)
        if plugin is None:
            return False

        try:
            await maybe_await(plugin.destroy())
            for primitive in plugin.primitives:
                self.registry.unregister(primitive.id)
        except Exception as e:
            logger.error("Failed to unload plugin", id=plugin_id, error=str(e))
            return False

        del self._plugins[plugin_id]
        logger.info("Plugin unloaded successfully", id=plugin_id)
        return True

    async def reload_plugin(self, plugin_id: str) -> bool:
        """Unload then load the same plugin object; ``False`` on any failure."""
        plugin = self._plugins.get(plugin_id)
        if plugin is None:
            return False

        if not await self.unload_plugin(plugin_id):
            return False

        try:
            await self.load_plugin(plugin)
        except Exception as e:
            logger.error("Failed to reload plugin", id=plugin_id, error=str(e))
            return False
        return True

    def is_plugin_loaded(self, plugin_id: str) -> bool:
        return plugin_id in self._plugins

    def get_plugin(self, plugin_id: str) -> Optional[PrivacyPlugin]:
        return self._plugins.get(plugin_id)

    def get_all_plugins(self) -> List[PrivacyPlugin]:
        return list(self._plugins.values())

    def set_plugin_enabled(self, plugin_id: str, enabled: bool) -> bool:
        if plugin_id not in self._plugins:
            return False

        self._ensure_config(plugin_id).enabled = enabled
        logger.info("Plugin enabled status changed", id=plugin_id, enabled=enabled)
        return True

    def is_plugin_enabled(self, plugin_id: str) -> bool:
        config = self._configs.get(plugin_id)
        return config.enabled if config else False

    def update_plugin_config(self, plugin_id: str, config: Dict[str, Any]) -> bool:
        if plugin_id not in self._plugins:
            return False

        plugin_config = self._ensure_config(plugin_id)
        plugin_config.config = {**plugin_config.config, **config}
        return True

    def get_plugin_config(self, plugin_id: str) -> Optional[Dict[str, Any]]:
        config = self._configs.get(plugin_id)
        return dict(config.config) if config else None

    def get_plugin_metadata(self, plugin_id: str) -> Optional[PluginMetadata]:
        plugin = self._plugins.get(plugin_id)
        return plugin.metadata if plugin else None

    def get_all_plugin_metadata(self) -> List[PluginMetadata]:
        return [plugin.metadata for plugin in self._plugins.values()]
