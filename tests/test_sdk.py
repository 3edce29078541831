"""Tests for the PrivacySDK facade."""

import pytest
import pytest_asyncio
from unittest.mock import AsyncMock, patch

from privacy_sdk import (
    BalanceResponse,
    ConfigurationError,
    OperationRef,
    PrimitiveRegistry,
    PrivacyClient,
    PrivacyConfig,
    PrivacyContext,
    PrivacySDK,
    RemoteResult,
    ValidationError,
    ZkProof,
)
from privacy_sdk.plugins import CustomPrivacyPlugin

from helpers import FakeInvoker


def _proof(payload):
    return RemoteResult(success=True, data={"proof": "p", "publicSignals": ["1"]})


@pytest.fixture
def invoker():
    return FakeInvoker(
        responses={
            "/encrypt": lambda payload: RemoteResult(
                success=True, data={"encryptedData": f"enc:{payload['data']}"}
            ),
            "/decrypt": lambda payload: RemoteResult(
                success=True, data={"decryptedData": payload["encryptedData"][4:]}
            ),
            "/zk-proof/generate": _proof,
            "/zk-proof/generate-range-proof": _proof,
            "/zk-proof/generate-balance-proof": _proof,
            "/zk-proof/verify": lambda payload: RemoteResult(success=True, data={"verified": True}),
        }
    )


@pytest_asyncio.fixture
async def sdk(invoker):
    privacy = PrivacySDK(PrivacyConfig(api_key="test-api-key", cache_cleanup_interval_ms=0))
    with patch.object(privacy.client, "invoke", invoker.invoke):
        yield privacy
    await privacy.close()


def test_sdk_requires_api_key():
    with pytest.raises(ConfigurationError):
        PrivacySDK()


def test_sdk_uses_client_config_when_only_client_given():
    client = PrivacyClient(PrivacyConfig(api_key="k", decrypt_batch_size=2, cache_cleanup_interval_ms=0))
    privacy = PrivacySDK(client=client)

    assert privacy.config is client.config
    assert privacy.encryption.batch_size == 2
    privacy.encryption_cache.close()


def test_sdk_shares_supplied_context():
    context = PrivacyContext()
    privacy = PrivacySDK(
        PrivacyConfig(api_key="k", cache_cleanup_interval_ms=0), context=context
    )

    assert privacy.registry is context.registry
    assert privacy.engine is context.engine
    assert privacy.plugins is context.plugins
    assert privacy.bridge is context.bridge
    privacy.encryption_cache.close()


@pytest.mark.asyncio
async def test_encrypt_and_decrypt(sdk):
    encrypted = await sdk.encrypt("secret", "pw")

    assert encrypted.encrypted_data == "enc:secret"
    assert await sdk.decrypt(encrypted.encrypted_data, "pw") == "secret"


@pytest.mark.asyncio
async def test_lazy_decryption_session(sdk, invoker):
    session = sdk.init_lazy_decryption()
    try:
        assert session.default_ttl_ms == 1_800_000
        items = [{"id": str(i), "data": f"enc:v{i}"} for i in range(7)]

        results = await sdk.decrypt_batch_lazy(items, "pw", session)
        again = await sdk.decrypt_on_demand("enc:v3", "pw", session)
    finally:
        session.close()

    assert results == {str(i): f"v{i}" for i in range(7)}
    assert again == "v3"
    assert len(invoker.calls_to("/decrypt")) == 7


@pytest.mark.asyncio
async def test_prove_dispatches_by_type(sdk, invoker):
    range_proof = await sdk.prove("range", value=25, min=18, max=100)
    balance_proof = await sdk.prove("balance", balance=1500, threshold=1000)
    custom_proof = await sdk.prove("custom", circuit_name="membership", inputs={"x": 1})

    assert isinstance(range_proof, ZkProof)
    assert balance_proof.circuit_name == "balance_proof"
    assert custom_proof.circuit_name == "membership"
    assert invoker.calls_to("/zk-proof/generate") == [{"circuitName": "membership", "inputs": {"x": 1}}]
    assert await sdk.verify(range_proof) is True


@pytest.mark.asyncio
async def test_prove_rejects_unknown_type(sdk):
    with pytest.raises(ValidationError, match="Unsupported proof type: magic"):
        await sdk.prove("magic")


@pytest.mark.asyncio
async def test_standard_primitives_in_a_workflow(sdk):
    sdk.register_standard_primitives()
    await sdk.plugins.load_plugin(CustomPrivacyPlugin())
    sdk.engine.create_workflow_from_operations(
        "encrypt-and-hash",
        "Encrypt then hash",
        "",
        [OperationRef("encrypt"), OperationRef("custom-hash")],
    )

    result = await sdk.engine.execute_workflow(
        "encrypt-and-hash", {"data": "secret", "password": "pw"}
    )

    assert result.success is True
    assert result.operations_executed == 2
    assert result.outputs["encryptedData"] == "enc:secret"
    assert result.outputs["hashedData"].startswith("hash_")
    assert sorted(sdk.registry.get_categories()) == ["encryption", "hash", "zk-proof"]


@pytest.mark.asyncio
async def test_account_passthroughs(sdk):
    with patch.object(sdk.client, "get_balance", AsyncMock(return_value=BalanceResponse(balance=12.0))):
        assert await sdk.get_balance() == 12.0

    with patch.object(sdk.client, "health_check", AsyncMock(return_value={"status": "ok"})):
        assert await sdk.health_check() == {"status": "ok"}

    with patch.object(sdk.client, "get_usage", AsyncMock(return_value={"calls": 3})):
        assert await sdk.get_usage() == {"calls": 3}


@pytest.mark.asyncio
async def test_session_caches_follow_config_and_stop_on_close():
    privacy = PrivacySDK(PrivacyConfig(api_key="k", cache_cleanup_interval_ms=0))
    session = privacy.init_lazy_decryption()

    assert session.cleanup_running is False
    assert session.default_ttl_ms == 1_800_000
    await privacy.close()

    privacy = PrivacySDK(PrivacyConfig(api_key="k", cache_cleanup_interval_ms=10))
    session = privacy.init_lazy_decryption(ttl_ms=5_000)
    assert session.cleanup_running is True
    assert session.default_ttl_ms == 5_000

    await privacy.close()

    assert session.cleanup_running is False


@pytest.mark.asyncio
async def test_create_cache_uses_configured_ttl():
    privacy = PrivacySDK(
        PrivacyConfig(api_key="k", cache_ttl_ms=1_234, cache_cleanup_interval_ms=10)
    )

    cache = privacy.create_cache()
    assert cache.default_ttl_ms == 1_234
    assert cache.cleanup_running is True
    assert privacy.create_cache(ttl_ms=50).default_ttl_ms == 50

    await privacy.close()

    assert cache.cleanup_running is False


@pytest.mark.asyncio
async def test_sdk_keeps_supplied_empty_registry():
    registry = PrimitiveRegistry()
    privacy = PrivacySDK(
        PrivacyConfig(api_key="k", cache_cleanup_interval_ms=0),
        context=PrivacyContext(registry=registry),
    )

    privacy.register_standard_primitives()

    assert len(registry) == 4
    await privacy.close()


@pytest.mark.asyncio
async def test_close_stops_cache_and_client():
    privacy = PrivacySDK(PrivacyConfig(api_key="k", cache_cleanup_interval_ms=10))
    privacy.client._get_client()

    async with privacy:
        pass

    assert privacy.client._client is None
    assert privacy.encryption_cache._cache.cleanup_running is False
