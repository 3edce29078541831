"""Service for zero-knowledge proof operations."""

import json
from typing import Any, Dict

import structlog

from ..exceptions import ProofGenerationError, ProofVerificationError, ValidationError
from ..models import ZkProof
from ..types import RemoteInvoker

logger = structlog.get_logger(__name__)


class ZkProofService:
    def __init__(self, client: RemoteInvoker) -> None:
        self.client = client

    async def _generate(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        response = await self.client.invoke(endpoint, payload)
        if not response.success or not response.data:
            raise ProofGenerationError(response.error or "Proof generation failed")
        return response.data

    async def generate_proof(self, circuit_name: str, inputs: Dict[str, Any]) -> ZkProof:
        data = await self._generate(
            "/zk-proof/generate", {"circuitName": circuit_name, "inputs": inputs}
        )
        return ZkProof(
            proof=data["proof"],
            public_inputs=data.get("publicSignals"),
            circuit_name=data.get("circuitName", circuit_name),
            inputs=data.get("inputs") or {},
        )

    async def verify_proof(self, proof: ZkProof | Dict[str, Any] | str) -> bool:
        if isinstance(proof, str):
            proof = json.loads(proof)
        if isinstance(proof, dict):
            proof = ZkProof.model_validate(proof)

        response = await self.client.invoke(
            "/zk-proof/verify",
            {
                "proof": proof.proof,
                "publicInputs": proof.public_inputs or [],
                "circuitName": proof.circuit_name or "unknown",
            },
        )
        if not response.success:
            raise ProofVerificationError(response.error or "Proof verification failed")
        return bool((response.data or {}).get("verified", False))

    async def generate_range_proof(self, value: float, min: float, max: float) -> ZkProof:
        """
        Prove ``min <= value <= max`` without revealing ``value``.

        Raises:
            ValidationError: If ``value`` is outside the range
            ProofGenerationError: If the remote call fails
        """
        if value < min or value > max:
            raise ValidationError(f"Value {value} is not within range [{min}, {max}]")

        data = await self._generate(
            "/zk-proof/generate-range-proof", {"value": value, "min": min, "max": max}
        )
        return ZkProof(
            proof=data["proof"],
            public_inputs=data.get("publicSignals"),
            circuit_name="range_proof",
            inputs={"min": min, "max": max},
        )

    async def generate_balance_proof(self, balance: float, threshold: float) -> ZkProof:
        """Prove ``balance > threshold`` without revealing ``balance``."""
        if balance <= threshold:
            raise ValidationError(
                f"Balance {balance} is not greater than threshold {threshold}"
            )

        data = await self._generate(
            "/zk-proof/generate-balance-proof", {"balance": balance, "threshold": threshold}
        )
        return ZkProof(
            proof=data["proof"],
            public_inputs=data.get("publicSignals"),
            circuit_name="balance_proof",
            inputs={"threshold": threshold},
        )

    async def generate_age_proof(self, age: int, min_age: int = 18, max_age: int = 100) -> ZkProof:
        return await self.generate_range_proof(age, min_age, max_age)
