"""
Blob Request Builders

Typestate builders for the blob-level operations of the Blob service:
list, put block blob, get, delete and the five lease actions.

Author: Ayodele Oladeji
Date: 2025
"""

import logging
from typing import Generic

from ...core import headers as h
from ...core.capabilities import (
    BlobNameRequired,
    BlobNameSet,
    BodyRequired,
    BodySet,
    ClientRequestIdOption,
    ClientRequestIdSupport,
    ContainerNameRequired,
    ContainerNameSet,
    ContentMD5Option,
    ContentMD5Support,
    ContentTypeOption,
    ContentTypeSupport,
    DelimiterOption,
    DelimiterSupport,
    Headers,
    IncludeMetadataOption,
    IncludeMetadataSupport,
    LeaseBreakPeriodOption,
    LeaseBreakPeriodSupport,
    LeaseDurationRequired,
    LeaseDurationSet,
    LeaseIdOption,
    LeaseIdRequired,
    LeaseIdSet,
    LeaseIdSupport,
    MaxResultsOption,
    MaxResultsSupport,
    MetadataOption,
    MetadataSupport,
    NextMarkerOption,
    NextMarkerSupport,
    PrefixOption,
    PrefixSupport,
    ProposedLeaseIdOption,
    ProposedLeaseIdRequired,
    ProposedLeaseIdSet,
    ProposedLeaseIdSupport,
    TimeoutOption,
    TimeoutSupport,
)
from ...core.errors import check_status_extract_headers_and_body
from ...core.lease import LeaseAction, LeaseId
from ...core.typestate import Yes
from ...core.uri import build_query, generate_blob_uri, generate_container_uri
from ..responses import (
    AcquireLeaseResponse,
    BreakLeaseResponse,
    ChangeLeaseResponse,
    ReleaseLeaseResponse,
    RenewLeaseResponse,
)
from .models import BlobType, DeleteBlobResponse, GetBlobResponse, ListBlobsResponse, PutBlobResponse

logger = logging.getLogger(__name__)

BLOB_LEASE_MARKER = "comp=lease"


class ListBlobsBuilder(
    ContainerNameRequired,
    PrefixOption, PrefixSupport,
    DelimiterOption, DelimiterSupport,
    NextMarkerOption, NextMarkerSupport,
    MaxResultsOption, MaxResultsSupport,
    IncludeMetadataOption, IncludeMetadataSupport,
    TimeoutOption, TimeoutSupport,
    ClientRequestIdOption, ClientRequestIdSupport,
    Generic[ContainerNameSet],
):
    MANDATORY = ("container_name",)

    def with_container_name(self, container_name: str) -> "ListBlobsBuilder[Yes]":
        return self._assign("container_name", container_name)

    async def finalize(self: "ListBlobsBuilder[Yes]") -> ListBlobsResponse:
        self.ensure_complete()
        params = build_query(
            "restype=container&comp=list",
            self.prefix_uri_parameter(),
            self.delimiter_uri_parameter(),
            self.next_marker_uri_parameter(),
            self.max_results_uri_parameter(),
            self.include_metadata_uri_parameter(),
            self.timeout_uri_parameter(),
        )
        uri = generate_container_uri(self, params)
        response = await self.client().perform_request(uri, "GET", self.add_client_request_id_header)
        headers, body = check_status_extract_headers_and_body(response, 200)
        return ListBlobsResponse.parse(self.container_name(), body, headers)


class PutBlockBlobBuilder(
    ContainerNameRequired,
    BlobNameRequired,
    BodyRequired,
    ContentTypeOption, ContentTypeSupport,
    ContentMD5Option, ContentMD5Support,
    MetadataOption, MetadataSupport,
    LeaseIdOption, LeaseIdSupport,
    TimeoutOption, TimeoutSupport,
    ClientRequestIdOption, ClientRequestIdSupport,
    Generic[ContainerNameSet, BlobNameSet, BodySet],
):
    MANDATORY = ("container_name", "blob_name", "body")

    def with_container_name(self, container_name: str) -> "PutBlockBlobBuilder[Yes, BlobNameSet, BodySet]":
        return self._assign("container_name", container_name)

    def with_blob_name(self, blob_name: str) -> "PutBlockBlobBuilder[ContainerNameSet, Yes, BodySet]":
        return self._assign("blob_name", blob_name)

    def with_body(self, body: bytes) -> "PutBlockBlobBuilder[ContainerNameSet, BlobNameSet, Yes]":
        return self._assign("body", bytes(body))

    async def finalize(self: "PutBlockBlobBuilder[Yes, Yes, Yes]") -> PutBlobResponse:
        self.ensure_complete()
        uri = generate_blob_uri(self, build_query(None, self.timeout_uri_parameter()))

        def write_headers(headers: Headers) -> None:
            headers[h.BLOB_TYPE] = BlobType.BLOCK_BLOB.value
            self.add_content_type_header(headers)
            self.add_content_md5_header(headers)
            self.add_metadata_headers(headers)
            self.add_lease_id_header(headers)
            self.add_client_request_id_header(headers)

        logger.debug(f"Uploading {len(self.body())} bytes to {self.container_name()}/{self.blob_name()}")
        response = await self.client().perform_request(uri, "PUT", write_headers, self.body())
        headers, _ = check_status_extract_headers_and_body(response, 201)
        return PutBlobResponse.from_headers(headers)


class GetBlobBuilder(
    ContainerNameRequired,
    BlobNameRequired,
    LeaseIdOption, LeaseIdSupport,
    TimeoutOption, TimeoutSupport,
    ClientRequestIdOption, ClientRequestIdSupport,
    Generic[ContainerNameSet, BlobNameSet],
):
    MANDATORY = ("container_name", "blob_name")

    def with_container_name(self, container_name: str) -> "GetBlobBuilder[Yes, BlobNameSet]":
        return self._assign("container_name", container_name)

    def with_blob_name(self, blob_name: str) -> "GetBlobBuilder[ContainerNameSet, Yes]":
        return self._assign("blob_name", blob_name)

    async def finalize(self: "GetBlobBuilder[Yes, Yes]") -> GetBlobResponse:
        self.ensure_complete()
        uri = generate_blob_uri(self, build_query(None, self.timeout_uri_parameter()))

        def write_headers(headers: Headers) -> None:
            self.add_lease_id_header(headers)
            self.add_client_request_id_header(headers)

        response = await self.client().perform_request(uri, "GET", write_headers)
        headers, body = check_status_extract_headers_and_body(response, 200)
        return GetBlobResponse.from_response(self.container_name(), self.blob_name(), headers, body)


class DeleteBlobBuilder(
    ContainerNameRequired,
    BlobNameRequired,
    LeaseIdOption, LeaseIdSupport,
    TimeoutOption, TimeoutSupport,
    ClientRequestIdOption, ClientRequestIdSupport,
    Generic[ContainerNameSet, BlobNameSet],
):
    MANDATORY = ("container_name", "blob_name")

    def with_container_name(self, container_name: str) -> "DeleteBlobBuilder[Yes, BlobNameSet]":
        return self._assign("container_name", container_name)

    def with_blob_name(self, blob_name: str) -> "DeleteBlobBuilder[ContainerNameSet, Yes]":
        return self._assign("blob_name", blob_name)

    async def finalize(self: "DeleteBlobBuilder[Yes, Yes]") -> DeleteBlobResponse:
        self.ensure_complete()
        uri = generate_blob_uri(self, build_query(None, self.timeout_uri_parameter()))

        def write_headers(headers: Headers) -> None:
            self.add_lease_id_header(headers)
            self.add_client_request_id_header(headers)

        logger.debug(f"Deleting blob {self.container_name()}/{self.blob_name()}")
        response = await self.client().perform_request(uri, "DELETE", write_headers)
        headers, _ = check_status_extract_headers_and_body(response, 202)
        return DeleteBlobResponse.from_headers(headers)


# ============================================================================
# Blob leases
# ============================================================================


class AcquireBlobLeaseBuilder(
    ContainerNameRequired,
    BlobNameRequired,
    LeaseDurationRequired,
    ProposedLeaseIdOption, ProposedLeaseIdSupport,
    TimeoutOption, TimeoutSupport,
    ClientRequestIdOption, ClientRequestIdSupport,
    Generic[ContainerNameSet, BlobNameSet, LeaseDurationSet],
):
    MANDATORY = ("container_name", "blob_name", "lease_duration")

    def with_container_name(
        self, container_name: str
    ) -> "AcquireBlobLeaseBuilder[Yes, BlobNameSet, LeaseDurationSet]":
        return self._assign("container_name", container_name)

    def with_blob_name(
        self, blob_name: str
    ) -> "AcquireBlobLeaseBuilder[ContainerNameSet, Yes, LeaseDurationSet]":
        return self._assign("blob_name", blob_name)

    def with_lease_duration(
        self, lease_duration: int
    ) -> "AcquireBlobLeaseBuilder[ContainerNameSet, BlobNameSet, Yes]":
        return self._assign("lease_duration", lease_duration)

    async def finalize(self: "AcquireBlobLeaseBuilder[Yes, Yes, Yes]") -> AcquireLeaseResponse:
        self.ensure_complete()
        uri = generate_blob_uri(self, build_query(BLOB_LEASE_MARKER, self.timeout_uri_parameter()))

        def write_headers(headers: Headers) -> None:
            headers[h.LEASE_ACTION] = LeaseAction.ACQUIRE.value
            self.add_lease_duration_header(headers)
            self.add_proposed_lease_id_header(headers)
            self.add_client_request_id_header(headers)

        response = await self.client().perform_request(uri, "PUT", write_headers)
        headers, _ = check_status_extract_headers_and_body(response, 201)
        return AcquireLeaseResponse.from_headers(headers)


class RenewBlobLeaseBuilder(
    ContainerNameRequired,
    BlobNameRequired,
    LeaseIdRequired,
    TimeoutOption, TimeoutSupport,
    ClientRequestIdOption, ClientRequestIdSupport,
    Generic[ContainerNameSet, BlobNameSet, LeaseIdSet],
):
    MANDATORY = ("container_name", "blob_name", "lease_id")

    def with_container_name(self, container_name: str) -> "RenewBlobLeaseBuilder[Yes, BlobNameSet, LeaseIdSet]":
        return self._assign("container_name", container_name)

    def with_blob_name(self, blob_name: str) -> "RenewBlobLeaseBuilder[ContainerNameSet, Yes, LeaseIdSet]":
        return self._assign("blob_name", blob_name)

    def with_lease_id(self, lease_id: LeaseId) -> "RenewBlobLeaseBuilder[ContainerNameSet, BlobNameSet, Yes]":
        return self._assign("lease_id", lease_id)

    async def finalize(self: "RenewBlobLeaseBuilder[Yes, Yes, Yes]") -> RenewLeaseResponse:
        self.ensure_complete()
        uri = generate_blob_uri(self, build_query(BLOB_LEASE_MARKER, self.timeout_uri_parameter()))

        def write_headers(headers: Headers) -> None:
            headers[h.LEASE_ACTION] = LeaseAction.RENEW.value
            self.add_lease_id_header(headers)
            self.add_client_request_id_header(headers)

        response = await self.client().perform_request(uri, "PUT", write_headers)
        headers, _ = check_status_extract_headers_and_body(response, 200)
        return RenewLeaseResponse.from_headers(headers)


class ReleaseBlobLeaseBuilder(
    ContainerNameRequired,
    BlobNameRequired,
    LeaseIdRequired,
    TimeoutOption, TimeoutSupport,
    ClientRequestIdOption, ClientRequestIdSupport,
    Generic[ContainerNameSet, BlobNameSet, LeaseIdSet],
):
    MANDATORY = ("container_name", "blob_name", "lease_id")

    def with_container_name(self, container_name: str) -> "ReleaseBlobLeaseBuilder[Yes, BlobNameSet, LeaseIdSet]":
        return self._assign("container_name", container_name)

    def with_blob_name(self, blob_name: str) -> "ReleaseBlobLeaseBuilder[ContainerNameSet, Yes, LeaseIdSet]":
        return self._assign("blob_name", blob_name)

    def with_lease_id(self, lease_id: LeaseId) -> "ReleaseBlobLeaseBuilder[ContainerNameSet, BlobNameSet, Yes]":
        return self._assign("lease_id", lease_id)

    async def finalize(self: "ReleaseBlobLeaseBuilder[Yes, Yes, Yes]") -> ReleaseLeaseResponse:
        self.ensure_complete()
        uri = generate_blob_uri(self, build_query(BLOB_LEASE_MARKER, self.timeout_uri_parameter()))

        def write_headers(headers: Headers) -> None:
            self.add_lease_id_header(headers)
            headers[h.LEASE_ACTION] = LeaseAction.RELEASE.value
            self.add_client_request_id_header(headers)

        response = await self.client().perform_request(uri, "PUT", write_headers)
        headers, _ = check_status_extract_headers_and_body(response, 200)
        return ReleaseLeaseResponse.from_headers(headers)


class BreakBlobLeaseBuilder(
    ContainerNameRequired,
    BlobNameRequired,
    LeaseBreakPeriodOption, LeaseBreakPeriodSupport,
    LeaseIdOption, LeaseIdSupport,
    TimeoutOption, TimeoutSupport,
    ClientRequestIdOption, ClientRequestIdSupport,
    Generic[ContainerNameSet, BlobNameSet],
):
    MANDATORY = ("container_name", "blob_name")

    def with_container_name(self, container_name: str) -> "BreakBlobLeaseBuilder[Yes, BlobNameSet]":
        return self._assign("container_name", container_name)

    def with_blob_name(self, blob_name: str) -> "BreakBlobLeaseBuilder[ContainerNameSet, Yes]":
        return self._assign("blob_name", blob_name)

    async def finalize(self: "BreakBlobLeaseBuilder[Yes, Yes]") -> BreakLeaseResponse:
        self.ensure_complete()
        uri = generate_blob_uri(self, build_query(BLOB_LEASE_MARKER, self.timeout_uri_parameter()))

        def write_headers(headers: Headers) -> None:
            headers[h.LEASE_ACTION] = LeaseAction.BREAK.value
            self.add_lease_break_period_header(headers)
            self.add_lease_id_header(headers)
            self.add_client_request_id_header(headers)

        response = await self.client().perform_request(uri, "PUT", write_headers)
        headers, _ = check_status_extract_headers_and_body(response, 202)
        return BreakLeaseResponse.from_headers(headers)


class ChangeBlobLeaseBuilder(
    ContainerNameRequired,
    BlobNameRequired,
    LeaseIdRequired,
    ProposedLeaseIdRequired,
    TimeoutOption, TimeoutSupport,
    ClientRequestIdOption, ClientRequestIdSupport,
    Generic[ContainerNameSet, BlobNameSet, LeaseIdSet, ProposedLeaseIdSet],
):
    MANDATORY = ("container_name", "blob_name", "lease_id", "proposed_lease_id")

    def with_container_name(
        self, container_name: str
    ) -> "ChangeBlobLeaseBuilder[Yes, BlobNameSet, LeaseIdSet, ProposedLeaseIdSet]":
        return self._assign("container_name", container_name)

    def with_blob_name(
        self, blob_name: str
    ) -> "ChangeBlobLeaseBuilder[ContainerNameSet, Yes, LeaseIdSet, ProposedLeaseIdSet]":
        return self._assign("blob_name", blob_name)

    def with_lease_id(
        self, lease_id: LeaseId
    ) -> "ChangeBlobLeaseBuilder[ContainerNameSet, BlobNameSet, Yes, ProposedLeaseIdSet]":
        return self._assign("lease_id", lease_id)

    def with_proposed_lease_id(
        self, proposed_lease_id: LeaseId
    ) -> "ChangeBlobLeaseBuilder[ContainerNameSet, BlobNameSet, LeaseIdSet, Yes]":
        return self._assign("proposed_lease_id", proposed_lease_id)

    async def finalize(self: "ChangeBlobLeaseBuilder[Yes, Yes, Yes, Yes]") -> ChangeLeaseResponse:
        self.ensure_complete()
        uri = generate_blob_uri(self, build_query(BLOB_LEASE_MARKER, self.timeout_uri_parameter()))

        def write_headers(headers: Headers) -> None:
            headers[h.LEASE_ACTION] = LeaseAction.CHANGE.value
            self.add_lease_id_header(headers)
            self.add_proposed_lease_id_header(headers)
            self.add_client_request_id_header(headers)

        response = await self.client().perform_request(uri, "PUT", write_headers)
        headers, _ = check_status_extract_headers_and_body(response, 200)
        return ChangeLeaseResponse.from_headers(headers)
