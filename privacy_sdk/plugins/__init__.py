"""Bundled example plugins."""

from .custom_hash import CustomHashPrimitive, CustomPrivacyPlugin

__all__ = ["CustomHashPrimitive", "CustomPrivacyPlugin"]
