from .client import APIKeysClientSettings

__all__ = ["APIKeysClientSettings"]
