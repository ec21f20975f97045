"""Secret keys that unlock unpublished photos and write endpoints."""

from .models import SecretKey
from .repository import SecretKeyRepository, get_secret_key_repository

__all__ = ["SecretKey", "SecretKeyRepository", "get_secret_key_repository"]
