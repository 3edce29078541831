"""
Privacy SDK - Python SDK for the Arcium Privacy service

Encryption, zero-knowledge proofs and the rest of the privacy capabilities
run remotely; this package provides the client for them plus a local
composability layer: a registry of privacy primitives, a workflow engine
that chains them, a plugin manager and a cross-protocol bridge.

Example:
    ```python
    from privacy_sdk import PrivacySDK, PrivacyConfig, OperationRef

    async with PrivacySDK(PrivacyConfig(api_key="your-api-key")) as privacy:
        privacy.register_standard_primitives()
        privacy.engine.create_workflow_from_operations(
            "prove-balance",
            "Prove balance",
            "Generate a balance proof",
            [OperationRef("balance-proof")],
        )
        result = await privacy.engine.execute_workflow(
            "prove-balance", {"balance": 1500, "threshold": 1000}
        )
        print(result.success, result.operations_executed)
    ```
"""

from .cache import EncryptionCache, TTLCache, memoize, simple_hash
from .client import PrivacyClient
from .composability import (
    BridgeConfig,
    BridgeOperation,
    ComposabilityEngine,
    CrossProtocolBridge,
    PluginConfig,
    PluginManager,
    PluginMetadata,
    PrimitiveRegistry,
    PrivacyContext,
    PrivacyPlugin,
)
from .config import PrivacyConfig
from .exceptions import (
    AuthenticationError,
    BridgeDisabledError,
    BridgeNotFoundError,
    ConfigurationError,
    DecryptionError,
    EncryptionError,
    KeyDerivationError,
    OperationNotFoundError,
    PermissionDeniedError,
    PluginAlreadyLoadedError,
    PrivacySDKError,
    ProofGenerationError,
    ProofVerificationError,
    RateLimitError,
    ResourceNotFoundError,
    ServiceUnavailableError,
    ValidationError,
    WorkflowNotFoundError,
)
from .models import BalanceResponse, EncryptionResult, RemoteResult, ZkProof
from .sdk import PrivacySDK
from .services import EncryptionService, ZkProofService
from .types import (
    ChainResult,
    ExecutionResult,
    OperationRef,
    PrimitiveDefinition,
    PrimitiveMetadata,
    PrivacyPrimitive,
    RemoteInvoker,
    Workflow,
)
from .version import __version__

__all__ = [
    # Entry points
    "PrivacySDK",
    "PrivacyClient",
    "PrivacyConfig",
    "PrivacyContext",
    # Composition
    "PrimitiveRegistry",
    "ComposabilityEngine",
    "PluginManager",
    "PluginConfig",
    "PluginMetadata",
    "PrivacyPlugin",
    "CrossProtocolBridge",
    "BridgeConfig",
    "BridgeOperation",
    # Types
    "PrivacyPrimitive",
    "PrimitiveDefinition",
    "PrimitiveMetadata",
    "OperationRef",
    "Workflow",
    "ExecutionResult",
    "ChainResult",
    "RemoteInvoker",
    # Services
    "EncryptionService",
    "ZkProofService",
    # Cache
    "TTLCache",
    "EncryptionCache",
    "memoize",
    "simple_hash",
    # Models
    "RemoteResult",
    "EncryptionResult",
    "ZkProof",
    "BalanceResponse",
    # Exceptions
    "PrivacySDKError",
    "AuthenticationError",
    "PermissionDeniedError",
    "ResourceNotFoundError",
    "ValidationError",
    "RateLimitError",
    "ServiceUnavailableError",
    "ConfigurationError",
    "PluginAlreadyLoadedError",
    "BridgeNotFoundError",
    "BridgeDisabledError",
    "WorkflowNotFoundError",
    "OperationNotFoundError",
    "EncryptionError",
    "DecryptionError",
    "KeyDerivationError",
    "ProofGenerationError",
    "ProofVerificationError",
    # Version
    "__version__",
]
