"""
Blob operations.

Builders and entities for block blobs and blob leases.
"""

from .models import (
    Blob,
    BlobType,
    DeleteBlobResponse,
    GetBlobResponse,
    ListBlobsResponse,
    PutBlobResponse,
)

__all__ = [
    "Blob",
    "BlobType",
    "DeleteBlobResponse",
    "GetBlobResponse",
    "ListBlobsResponse",
    "PutBlobResponse",
]
