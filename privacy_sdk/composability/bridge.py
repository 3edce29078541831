"""Cross-protocol bridge: routes operations between named privacy protocols."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import structlog

from ..exceptions import BridgeDisabledError, BridgeNotFoundError
from ..types import PrivacyInput, PrivacyOutput

logger = structlog.get_logger(__name__)


@dataclass
class BridgeConfig:
    source_protocol: str
    target_protocol: str
    enabled: bool = True
    mapping_rules: Dict[str, str] = field(default_factory=dict)


class BridgeOperation(ABC):
    """Maps privacy data from ``source_protocol`` into ``target_protocol``."""

    id: str
    name: str
    description: str = ""
    source_protocol: str
    target_protocol: str

    @abstractmethod
    async def execute(self, input: PrivacyInput) -> PrivacyOutput:
        ...


class CrossProtocolBridge:
    """
    Registry and router for bridge operations.

    An operation and its config are stored and removed together.
    """

    def __init__(self) -> None:
        self._bridges: Dict[str, BridgeOperation] = {}
        self._configs: Dict[str, BridgeConfig] = {}
        self._enabled = True

    def register_bridge(self, bridge: BridgeOperation, config: BridgeConfig) -> None:
        if not isinstance(bridge, BridgeOperation):
            raise TypeError(f"Expected a BridgeOperation, got {type(bridge).__name__}")

        self._bridges[bridge.id] = bridge
        self._configs[bridge.id] = config
        logger.info(
            "Cross-protocol bridge registered",
            id=bridge.id,
            source_protocol=config.source_protocol,
            target_protocol=config.target_protocol,
        )

    def unregister_bridge(self, bridge_id: str) -> bool:
        if self._bridges.pop(bridge_id, None) is None:
            return False
        self._configs.pop(bridge_id, None)
        logger.info("Cross-protocol bridge unregistered", id=bridge_id)
        return True

    async def execute_bridge(self, bridge_id: str, input: PrivacyInput) -> PrivacyOutput:
        """
        Run a bridge operation.

        Raises:
            BridgeNotFoundError: If ``bridge_id`` is unknown
            BridgeDisabledError: If the bridge or the bridge system is disabled
        """
        bridge = self._bridges.get(bridge_id)
        if bridge is None:
            raise BridgeNotFoundError(bridge_id)

        config = self._configs.get(bridge_id)
        if config is None or not config.enabled:
            raise BridgeDisabledError(f"Bridge is not enabled: {bridge_id}")

        if not self._enabled:
            raise BridgeDisabledError("Cross-protocol privacy bridge is disabled")

        logger.debug(
            "Executing cross-protocol bridge",
            id=bridge_id,
            source_protocol=config.source_protocol,
            target_protocol=config.target_protocol,
        )
        return await bridge.execute(input)

    def get_bridges_between_protocols(self, source: str, target: str) -> List[BridgeOperation]:
        result = []
        for bridge_id, bridge in self._bridges.items():
            config = self._configs.get(bridge_id)
            if (
                config is not None
                and config.enabled
                and config.source_protocol == source
                and config.target_protocol == target
            ):
                result.append(bridge)
        return result

    def get_all_bridges(self) -> List[BridgeOperation]:
        return list(self._bridges.values())

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled
        logger.info("Cross-protocol privacy bridge system", enabled=enabled)

    def is_enabled(self) -> bool:
        return self._enabled

    def get_bridge_config(self, bridge_id: str) -> Optional[BridgeConfig]:
        return self._configs.get(bridge_id)

    def update_bridge_config(self, bridge_id: str, **updates: Any) -> bool:
        config = self._configs.get(bridge_id)
        if config is None:
            return False

        for key, value in updates.items():
            if not hasattr(config, key):
                raise ValueError(f"Unknown bridge config field: {key}")
            setattr(config, key, value)
        return True
