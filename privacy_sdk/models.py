"""Data models for the privacy SDK."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RemoteResult(BaseModel):
    """Outcome of a single remote operation."""

    success: bool = Field(..., description="Whether the remote call succeeded")
    data: Any = Field(None, description="Decoded response body on success")
    error: str | None = Field(None, description="Error message on failure")
    status_code: int | None = Field(None, description="HTTP status code, if a response was received")


class EncryptionResult(BaseModel):
    """Response from the encrypt endpoint."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    encrypted_data: str = Field(..., alias="encryptedData", description="Ciphertext")
    method: str = Field(default="aes256", description="Encryption method")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Service metadata")


class ZkProof(BaseModel):
    """A zero-knowledge proof returned by the proof endpoints."""

    model_config = ConfigDict(populate_by_name=True)

    proof: Any = Field(..., description="Opaque proof payload")
    public_inputs: Any = Field(None, alias="publicInputs", description="Public signals")
    circuit_name: str | None = Field(None, alias="circuitName", description="Circuit used")
    inputs: dict[str, Any] = Field(default_factory=dict, description="Non-secret inputs echoed back")


class BalanceResponse(BaseModel):
    """Account credit balance."""

    balance: float = Field(..., description="Remaining credits")
