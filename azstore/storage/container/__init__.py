"""
Container operations.

Builders and entities for Azure Blob Storage containers and container leases.
"""

from .models import (
    Container,
    CreateContainerResponse,
    DeleteContainerResponse,
    GetContainerPropertiesResponse,
    ListContainersResponse,
    PublicAccess,
)

__all__ = [
    "Container",
    "CreateContainerResponse",
    "DeleteContainerResponse",
    "GetContainerPropertiesResponse",
    "ListContainersResponse",
    "PublicAccess",
]
