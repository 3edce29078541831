"""
Standard privacy primitives backed by the remote services.

Usage:
    from privacy_sdk.primitives import register_standard_primitives

    register_standard_primitives(registry, encryption_service, zk_service)
"""

from typing import List

import structlog

from ..composability.registry import PrimitiveRegistry
from ..services.encryption import EncryptionService
from ..services.zkproof import ZkProofService
from ..types import PrivacyPrimitive
from .encryption import DecryptionPrimitive, EncryptionPrimitive
from .zkproof import BalanceProofPrimitive, RangeProofPrimitive

logger = structlog.get_logger(__name__)


def create_standard_primitives(
    encryption_service: EncryptionService,
    zk_proof_service: ZkProofService,
) -> List[PrivacyPrimitive]:
    return [
        EncryptionPrimitive(encryption_service),
        DecryptionPrimitive(encryption_service),
        RangeProofPrimitive(zk_proof_service),
        BalanceProofPrimitive(zk_proof_service),
    ]


def register_standard_primitives(
    registry: PrimitiveRegistry,
    encryption_service: EncryptionService,
    zk_proof_service: ZkProofService,
) -> List[PrivacyPrimitive]:
    primitives = create_standard_primitives(encryption_service, zk_proof_service)
    for primitive in primitives:
        registry.register(primitive)
    logger.info("Registered standard primitives", count=len(primitives))
    return primitives


__all__ = [
    "BalanceProofPrimitive",
    "DecryptionPrimitive",
    "EncryptionPrimitive",
    "RangeProofPrimitive",
    "create_standard_primitives",
    "register_standard_primitives",
]
