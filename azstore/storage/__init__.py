"""Blob service client, entities and request builders."""

from .blob.models import Blob, BlobType
from .client import Client
from .container.models import Container, PublicAccess

__all__ = ["Blob", "BlobType", "Client", "Container", "PublicAccess"]
