"""Version information for the privacy SDK."""

__version__ = "0.2.0"
