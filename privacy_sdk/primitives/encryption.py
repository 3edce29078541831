"""Encryption primitives."""

from typing import Any, Dict

from ..services.encryption import DEFAULT_METHOD, EncryptionService
from ..types import PrivacyPrimitive


class EncryptionPrimitive(PrivacyPrimitive):
    id = "encrypt"
    name = "Encryption Primitive"
    description = "Encrypts data using various encryption methods"
    category = "encryption"
    version = "1.0.0"
    author = "Arcium Team"
    tags = ("encryption", "aes", "symmetric")
    inputs = {"data": {"type": "string"}, "password": {"type": "string"}, "method": {"type": "string"}}
    outputs = {"encryptedData": {"type": "string"}, "method": {"type": "string"}, "success": {"type": "boolean"}}

    def __init__(self, service: EncryptionService) -> None:
        self.service = service

    async def execute(self, input: Dict[str, Any]) -> Dict[str, Any]:
        data = input.get("data")
        password = input.get("password")
        method = input.get("method") or DEFAULT_METHOD

        if not data or not password:
            raise ValueError("Data and password are required for encryption")

        result = await self.service.encrypt(str(data), password, method=method)
        return {"encryptedData": result.encrypted_data, "method": method, "success": True}


class DecryptionPrimitive(PrivacyPrimitive):
    id = "decrypt"
    name = "Decryption Primitive"
    description = "Decrypts data using various decryption methods"
    category = "encryption"
    version = "1.0.0"
    author = "Arcium Team"
    tags = ("decryption", "aes", "symmetric")
    inputs = {"encryptedData": {"type": "string"}, "password": {"type": "string"}, "method": {"type": "string"}}
    outputs = {"decryptedData": {"type": "string"}, "method": {"type": "string"}, "success": {"type": "boolean"}}

    def __init__(self, service: EncryptionService) -> None:
        self.service = service

    async def execute(self, input: Dict[str, Any]) -> Dict[str, Any]:
        encrypted_data = input.get("encryptedData")
        password = input.get("password")
        method = input.get("method") or DEFAULT_METHOD

        if not encrypted_data or not password:
            raise ValueError("Encrypted data and password are required for decryption")

        decrypted = await self.service.decrypt(str(encrypted_data), password, method=method)
        return {"decryptedData": decrypted, "method": method, "success": True}
