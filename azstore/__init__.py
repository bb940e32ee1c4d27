"""
azstore: typed request builders for Azure Blob Storage.

Each operation starts from a ``Client`` method returning an empty builder;
mandatory parameters are tracked in the builder's type so that ``finalize``
is only available once all of them were supplied.
"""

__version__ = "0.1.0"

from .core import (
    AzStoreConfig,
    AzureError,
    ConfigManager,
    HttpxTransport,
    LeaseAction,
    LeaseDuration,
    LeaseId,
    LeaseState,
    LeaseStatus,
    MissingHeaderError,
    MissingParameterError,
    ParsingError,
    TransportError,
    UnexpectedStatusCodeError,
    UnexpectedXMLError,
    configure_logging,
)
from .storage import Blob, BlobType, Client, Container, PublicAccess

__all__ = [
    "AzStoreConfig",
    "AzureError",
    "Blob",
    "BlobType",
    "Client",
    "ConfigManager",
    "Container",
    "HttpxTransport",
    "LeaseAction",
    "LeaseDuration",
    "LeaseId",
    "LeaseState",
    "LeaseStatus",
    "MissingHeaderError",
    "MissingParameterError",
    "ParsingError",
    "PublicAccess",
    "TransportError",
    "UnexpectedStatusCodeError",
    "UnexpectedXMLError",
    "configure_logging",
    "__version__",
]
