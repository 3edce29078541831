"""Tests for CrossProtocolBridge."""

import pytest

from privacy_sdk import (
    BridgeConfig,
    BridgeDisabledError,
    BridgeNotFoundError,
    BridgeOperation,
)


class UpperCaseBridge(BridgeOperation):
    def __init__(self, bridge_id="arcium-to-zk", source="arcium", target="zk"):
        self.id = bridge_id
        self.name = "Upper"
        self.source_protocol = source
        self.target_protocol = target

    async def execute(self, input):
        return {"payload": input["payload"].upper(), "target": self.target_protocol}


@pytest.fixture
def bridge(context):
    return context.bridge


def _config(source="arcium", target="zk", **kwargs):
    return BridgeConfig(source_protocol=source, target_protocol=target, **kwargs)


@pytest.mark.asyncio
async def test_execute_registered_bridge(bridge):
    bridge.register_bridge(UpperCaseBridge(), _config())

    result = await bridge.execute_bridge("arcium-to-zk", {"payload": "abc"})

    assert result == {"payload": "ABC", "target": "zk"}


@pytest.mark.asyncio
async def test_unknown_bridge_raises(bridge):
    with pytest.raises(BridgeNotFoundError, match="Bridge not found: nope"):
        await bridge.execute_bridge("nope", {})


@pytest.mark.asyncio
async def test_disabled_bridge_raises(bridge):
    bridge.register_bridge(UpperCaseBridge(), _config(enabled=False))

    with pytest.raises(BridgeDisabledError, match="Bridge is not enabled: arcium-to-zk"):
        await bridge.execute_bridge("arcium-to-zk", {"payload": "abc"})


@pytest.mark.asyncio
async def test_system_disable_blocks_every_bridge(bridge):
    bridge.register_bridge(UpperCaseBridge(), _config())
    bridge.set_enabled(False)

    assert bridge.is_enabled() is False
    with pytest.raises(BridgeDisabledError, match="privacy bridge is disabled"):
        await bridge.execute_bridge("arcium-to-zk", {"payload": "abc"})

    bridge.set_enabled(True)
    result = await bridge.execute_bridge("arcium-to-zk", {"payload": "abc"})
    assert result["payload"] == "ABC"


def test_register_rejects_non_bridge(bridge):
    with pytest.raises(TypeError, match="Expected a BridgeOperation"):
        bridge.register_bridge(object(), _config())


def test_bridges_between_protocols_only_lists_enabled_matches(bridge):
    bridge.register_bridge(UpperCaseBridge("a"), _config())
    bridge.register_bridge(UpperCaseBridge("b"), _config(enabled=False))
    bridge.register_bridge(UpperCaseBridge("c"), _config(target="mpc"))

    assert [b.id for b in bridge.get_bridges_between_protocols("arcium", "zk")] == ["a"]
    assert bridge.get_bridges_between_protocols("zk", "arcium") == []
    assert [b.id for b in bridge.get_all_bridges()] == ["a", "b", "c"]


def test_unregister_removes_operation_and_config(bridge):
    bridge.register_bridge(UpperCaseBridge(), _config())

    assert bridge.unregister_bridge("arcium-to-zk") is True
    assert bridge.get_bridge_config("arcium-to-zk") is None
    assert bridge.get_all_bridges() == []
    assert bridge.unregister_bridge("arcium-to-zk") is False


@pytest.mark.asyncio
async def test_update_bridge_config(bridge):
    bridge.register_bridge(UpperCaseBridge(), _config())

    assert bridge.update_bridge_config("arcium-to-zk", enabled=False, mapping_rules={"a": "b"}) is True
    config = bridge.get_bridge_config("arcium-to-zk")
    assert config.enabled is False
    assert config.mapping_rules == {"a": "b"}

    with pytest.raises(BridgeDisabledError):
        await bridge.execute_bridge("arcium-to-zk", {"payload": "x"})

    assert bridge.update_bridge_config("missing", enabled=True) is False
    with pytest.raises(ValueError, match="Unknown bridge config field"):
        bridge.update_bridge_config("arcium-to-zk", colour="red")
