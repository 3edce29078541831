"""Exceptions for the privacy SDK."""

_HELPFUL_MESSAGES = {
    "INVALID_API_KEY": (
        "Invalid API key provided. Please check your API key and ensure it's correctly configured."
    ),
    "INSUFFICIENT_CREDITS": (
        "Insufficient credits for this operation. Please add more credits to your account."
    ),
    "INVALID_PROOF_INPUTS": (
        "Invalid inputs provided for proof generation. Please ensure all required parameters "
        "are provided and within valid ranges. For range proofs, ensure min <= value <= max."
    ),
    "PROOF_VERIFICATION_FAILED": (
        "Proof verification failed. This could be due to invalid proof data or mismatched parameters."
    ),
    "ENCRYPTION_FAILED": (
        "Encryption failed. Please ensure the data and password are properly formatted "
        "and within acceptable length limits."
    ),
    "DECRYPTION_FAILED": (
        "Decryption failed. This could be due to an incorrect password, corrupt encrypted data, "
        "or an unsupported encryption format."
    ),
    "NETWORK_ERROR": (
        "Network error occurred. Please check your connection and ensure the privacy API is accessible."
    ),
    "RATE_LIMIT_EXCEEDED": (
        "Rate limit exceeded. Please wait before making more requests."
    ),
}


class PrivacySDKError(Exception):
    """Base exception for all privacy SDK errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str = "SDK_ERROR",
    ) -> None:
        """
        Initialize PrivacySDKError.

        Args:
            message: Error message
            status_code: HTTP status code if applicable
            code: Machine readable error code
        """
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(self.message)

    @staticmethod
    def helpful_message(code: str, context: str | None = None) -> str:
        """Return a human oriented hint for a well known error code."""
        if code in _HELPFUL_MESSAGES:
            return _HELPFUL_MESSAGES[code]
        return (
            f"{context or 'An error occurred'}: {code}. "
            "Please check the parameters and try again."
        )


class AuthenticationError(PrivacySDKError):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication failed - check your API key") -> None:
        super().__init__(message, status_code=401, code="AUTHENTICATION_FAILED")


class PermissionDeniedError(PrivacySDKError):
    """Raised when the API key lacks required permissions."""

    def __init__(self, message: str = "Permission denied") -> None:
        super().__init__(message, status_code=403, code="PERMISSION_DENIED")


class ResourceNotFoundError(PrivacySDKError):
    """Raised when the requested remote resource is not found."""

    def __init__(self, message: str = "Requested resource not found") -> None:
        super().__init__(message, status_code=404, code="RESOURCE_NOT_FOUND")


class ValidationError(PrivacySDKError):
    """Raised when inputs are invalid."""

    def __init__(self, message: str = "Validation failed") -> None:
        super().__init__(message, status_code=422, code="VALIDATION_ERROR")


class RateLimitError(PrivacySDKError):
    """Raised when rate limit is exceeded."""

    def __init__(self, message: str = "Rate limit exceeded - please try again later") -> None:
        super().__init__(message, status_code=429, code="RATE_LIMIT_EXCEEDED")


class ServiceUnavailableError(PrivacySDKError):
    """Raised when the privacy service is unavailable."""

    def __init__(self, message: str = "Privacy service unavailable") -> None:
        super().__init__(message, status_code=503, code="SERVICE_UNAVAILABLE")


# Configuration errors are raised, never returned as soft failures.


class ConfigurationError(PrivacySDKError):
    """Raised for invalid configuration or lifecycle misuse."""

    def __init__(self, message: str, code: str = "INVALID_CONFIG") -> None:
        super().__init__(message, code=code)


class PluginAlreadyLoadedError(ConfigurationError):
    """Raised when loading a plugin id that is already loaded."""

    def __init__(self, plugin_id: str) -> None:
        self.plugin_id = plugin_id
        super().__init__(f"Plugin already loaded: {plugin_id}", code="PLUGIN_ALREADY_LOADED")


class BridgeNotFoundError(ConfigurationError):
    """Raised when executing an unknown bridge."""

    def __init__(self, bridge_id: str) -> None:
        self.bridge_id = bridge_id
        super().__init__(f"Bridge not found: {bridge_id}", code="BRIDGE_NOT_FOUND")


class BridgeDisabledError(ConfigurationError):
    """Raised when a bridge, or the whole bridge system, is disabled."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="BRIDGE_DISABLED")


# Composition errors


class WorkflowNotFoundError(PrivacySDKError):
    """Raised when executing a workflow id that is not registered."""

    def __init__(self, workflow_id: str) -> None:
        self.workflow_id = workflow_id
        super().__init__(f"Workflow not found: {workflow_id}", code="WORKFLOW_NOT_FOUND")


class OperationNotFoundError(PrivacySDKError):
    """Raised when a workflow step cannot be resolved to a primitive."""

    def __init__(self, operation_id: str) -> None:
        self.operation_id = operation_id
        super().__init__(
            f"Operation not found in registry: {operation_id}",
            code="OPERATION_NOT_FOUND",
        )


# Remote operation failures


class EncryptionError(PrivacySDKError):
    """Raised when the remote encrypt call fails."""

    def __init__(self, message: str = "Encryption failed") -> None:
        super().__init__(message, code="ENCRYPTION_FAILED")


class DecryptionError(PrivacySDKError):
    """Raised when the remote decrypt call fails or returns unusable data."""

    def __init__(self, message: str = "Decryption failed", code: str = "DECRYPTION_FAILED") -> None:
        super().__init__(message, code=code)


class KeyDerivationError(PrivacySDKError):
    """Raised when remote key derivation fails."""

    def __init__(self, message: str = "Key derivation failed") -> None:
        super().__init__(message, code="KEY_DERIVATION_FAILED")


class ProofGenerationError(PrivacySDKError):
    """Raised when a zero-knowledge proof cannot be generated."""

    def __init__(self, message: str = "Proof generation failed") -> None:
        super().__init__(message, code="PROOF_GENERATION_FAILED")


class ProofVerificationError(PrivacySDKError):
    """Raised when the remote proof verification call fails."""

    def __init__(self, message: str = "Proof verification failed") -> None:
        super().__init__(message, code="PROOF_VERIFICATION_FAILED")
