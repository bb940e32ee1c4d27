"""
Blob service client.

Entry point for every operation: each method returns an empty typestate
builder bound to this client.

Example:
    async with Client("myaccount") as client:
        response = await (
            client.create_container()
            .with_container_name("logs")
            .with_public_access(PublicAccess.BLOB)
            .finalize()
        )
"""

import logging
from typing import Optional

from ..core.config_manager import AzStoreConfig
from ..core.transport import HeaderWriter, HttpxTransport, RawResponse, Transport
from ..core.typestate import No
from .blob.requests import (
    AcquireBlobLeaseBuilder,
    BreakBlobLeaseBuilder,
    ChangeBlobLeaseBuilder,
    DeleteBlobBuilder,
    GetBlobBuilder,
    ListBlobsBuilder,
    PutBlockBlobBuilder,
    ReleaseBlobLeaseBuilder,
    RenewBlobLeaseBuilder,
)
from .container.requests import (
    AcquireContainerLeaseBuilder,
    BreakContainerLeaseBuilder,
    ChangeContainerLeaseBuilder,
    CreateContainerBuilder,
    DeleteContainerBuilder,
    GetContainerPropertiesBuilder,
    ListContainersBuilder,
    ReleaseContainerLeaseBuilder,
    RenewContainerLeaseBuilder,
)

logger = logging.getLogger(__name__)


class Client:
    """
    Azure Blob Storage client.

    Holds the account, the blob endpoint and the transport used by every
    builder. Authentication is the transport's concern.
    """

    def __init__(
        self,
        account: str,
        transport: Optional[Transport] = None,
        blob_endpoint: Optional[str] = None,
    ):
        """
        Args:
            account: Storage account name
            transport: Request executor; defaults to ``HttpxTransport``
            blob_endpoint: Override of ``https://{account}.blob.core.windows.net``
        """
        self._account = account
        self._transport: Transport = transport or HttpxTransport()
        self._blob_endpoint = (blob_endpoint or f"https://{account}.blob.core.windows.net").rstrip("/")

    @classmethod
    def from_config(cls, config: AzStoreConfig, transport: Optional[Transport] = None) -> "Client":
        """
        Build a client from a validated configuration.

        Raises:
            ValueError: If the configuration names neither account nor endpoint
        """
        endpoint = config.resolved_blob_endpoint()
        if transport is None:
            transport = HttpxTransport(api_version=config.api_version, timeout=config.request_timeout)
        account = config.account or endpoint.rsplit("/", 1)[-1]
        logger.debug(f"Client for account {account} at {endpoint}")
        return cls(account, transport=transport, blob_endpoint=endpoint)

    def account(self) -> str:
        return self._account

    def blob_uri(self) -> str:
        return self._blob_endpoint

    async def perform_request(
        self,
        uri: str,
        method: str,
        header_writer: HeaderWriter,
        body: Optional[bytes] = None,
    ) -> RawResponse:
        return await self._transport.perform_request(uri, method, header_writer, body)

    async def close(self) -> None:
        await self._transport.aclose()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # Containers

    def list_containers(self) -> ListContainersBuilder:
        return ListContainersBuilder(self)

    def create_container(self) -> "CreateContainerBuilder[No]":
        return CreateContainerBuilder(self)

    def get_container_properties(self) -> "GetContainerPropertiesBuilder[No]":
        return GetContainerPropertiesBuilder(self)

    def delete_container(self) -> "DeleteContainerBuilder[No]":
        return DeleteContainerBuilder(self)

    def acquire_container_lease(self) -> "AcquireContainerLeaseBuilder[No, No]":
        return AcquireContainerLeaseBuilder(self)

    def renew_container_lease(self) -> "RenewContainerLeaseBuilder[No, No]":
        return RenewContainerLeaseBuilder(self)

    def release_container_lease(self) -> "ReleaseContainerLeaseBuilder[No, No]":
        return ReleaseContainerLeaseBuilder(self)

    def break_container_lease(self) -> "BreakContainerLeaseBuilder[No]":
        return BreakContainerLeaseBuilder(self)

    def change_container_lease(self) -> "ChangeContainerLeaseBuilder[No, No, No]":
        return ChangeContainerLeaseBuilder(self)

    # Blobs

    def list_blobs(self) -> "ListBlobsBuilder[No]":
        return ListBlobsBuilder(self)

    def put_block_blob(self) -> "PutBlockBlobBuilder[No, No, No]":
        return PutBlockBlobBuilder(self)

    def get_blob(self) -> "GetBlobBuilder[No, No]":
        return GetBlobBuilder(self)

    def delete_blob(self) -> "DeleteBlobBuilder[No, No]":
        return DeleteBlobBuilder(self)

    def acquire_blob_lease(self) -> "AcquireBlobLeaseBuilder[No, No, No]":
        return AcquireBlobLeaseBuilder(self)

    def renew_blob_lease(self) -> "RenewBlobLeaseBuilder[No, No, No]":
        return RenewBlobLeaseBuilder(self)

    def release_blob_lease(self) -> "ReleaseBlobLeaseBuilder[No, No, No]":
        return ReleaseBlobLeaseBuilder(self)

    def break_blob_lease(self) -> "BreakBlobLeaseBuilder[No, No]":
        return BreakBlobLeaseBuilder(self)

    def change_blob_lease(self) -> "ChangeBlobLeaseBuilder[No, No, No, No]":
        return ChangeBlobLeaseBuilder(self)
