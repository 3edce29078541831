"""Remote-backed privacy services."""

from .encryption import EncryptionService
from .zkproof import ZkProofService

__all__ = ["EncryptionService", "ZkProofService"]
