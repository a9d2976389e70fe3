"""Test factories for the API key client."""

from .api_keys import APIKeyFactory

__all__ = [
    "APIKeyFactory",
]
