"""Zero-knowledge proof primitives."""

from typing import Any, Dict

from ..services.zkproof import ZkProofService
from ..types import PrivacyPrimitive


class RangeProofPrimitive(PrivacyPrimitive):
    id = "range-proof"
    name = "Range Proof Primitive"
    description = "Generates zero-knowledge proof that a value is within a range"
    category = "zk-proof"
    version = "1.0.0"
    author = "Arcium Team"
    tags = ("zk-proof", "range", "privacy")
    inputs = {"value": {"type": "number"}, "min": {"type": "number"}, "max": {"type": "number"}}
    outputs = {"proof": {"type": "object"}, "range": {"type": "array"}, "success": {"type": "boolean"}}

    def __init__(self, service: ZkProofService) -> None:
        self.service = service

    async def execute(self, input: Dict[str, Any]) -> Dict[str, Any]:
        value, low, high = input.get("value"), input.get("min"), input.get("max")
        if value is None or low is None or high is None:
            raise ValueError("Value, min, and max are required for range proof")

        proof = await self.service.generate_range_proof(value, low, high)
        return {"proof": proof, "value": value, "range": [low, high], "success": True}


class BalanceProofPrimitive(PrivacyPrimitive):
    id = "balance-proof"
    name = "Balance Proof Primitive"
    description = "Generates zero-knowledge proof of a balance being above threshold"
    category = "zk-proof"
    version = "1.0.0"
    author = "Arcium Team"
    tags = ("zk-proof", "balance", "financial-privacy")
    inputs = {"balance": {"type": "number"}, "threshold": {"type": "number"}}
    outputs = {"proof": {"type": "object"}, "isAboveThreshold": {"type": "boolean"}, "success": {"type": "boolean"}}

    def __init__(self, service: ZkProofService) -> None:
        self.service = service

    async def execute(self, input: Dict[str, Any]) -> Dict[str, Any]:
        balance, threshold = input.get("balance"), input.get("threshold")
        if balance is None or threshold is None:
            raise ValueError("Balance and threshold are required for balance proof")

        proof = await self.service.generate_balance_proof(balance, threshold)
        return {
            "proof": proof,
            "balance": balance,
            "threshold": threshold,
            "isAboveThreshold": balance >= threshold,
            "success": True,
        }
