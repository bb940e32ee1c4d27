"""
Container Request Builders

Typestate builders for the container-level operations of the Blob service:
list, create, get properties, delete and the five lease actions.

Author: Ayodele Oladeji
Date: 2025
"""

import logging
from typing import Generic, Optional

from ...core import headers as h
from ...core.capabilities import (
    ClientRequestIdOption,
    ClientRequestIdSupport,
    ContainerNameRequired,
    ContainerNameSet,
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
from ...core.typestate import B, RequestBuilder, Yes
from ...core.uri import build_query, generate_account_uri, generate_container_uri
from ..responses import (
    AcquireLeaseResponse,
    BreakLeaseResponse,
    ChangeLeaseResponse,
    ReleaseLeaseResponse,
    RenewLeaseResponse,
)
from .models import (
    CreateContainerResponse,
    DeleteContainerResponse,
    GetContainerPropertiesResponse,
    ListContainersResponse,
    PublicAccess,
)

logger = logging.getLogger(__name__)

CONTAINER_MARKER = "restype=container"
CONTAINER_LEASE_MARKER = "restype=container&comp=lease"


class PublicAccessOption(RequestBuilder):
    def public_access(self) -> Optional[PublicAccess]:
        return self._get("public_access")

    def add_public_access_header(self, headers: Headers) -> None:
        public_access = self.public_access()
        if public_access is not None and public_access != PublicAccess.NONE:
            headers[h.BLOB_PUBLIC_ACCESS] = public_access.value


class PublicAccessSupport(RequestBuilder):
    def with_public_access(self: B, public_access: PublicAccess) -> B:
        return self._assign("public_access", public_access)


class ListContainersBuilder(
    PrefixOption, PrefixSupport,
    NextMarkerOption, NextMarkerSupport,
    MaxResultsOption, MaxResultsSupport,
    IncludeMetadataOption, IncludeMetadataSupport,
    TimeoutOption, TimeoutSupport,
    ClientRequestIdOption, ClientRequestIdSupport,
):
    """List Containers has no mandatory parameter; it can be finalized at once."""

    async def finalize(self) -> ListContainersResponse:
        params = build_query(
            "comp=list",
            self.prefix_uri_parameter(),
            self.next_marker_uri_parameter(),
            self.max_results_uri_parameter(),
            self.include_metadata_uri_parameter(),
            self.timeout_uri_parameter(),
        )
        uri = generate_account_uri(self, params)
        response = await self.client().perform_request(uri, "GET", self.add_client_request_id_header)
        headers, body = check_status_extract_headers_and_body(response, 200)
        return ListContainersResponse.parse(body, headers)


class CreateContainerBuilder(
    ContainerNameRequired,
    PublicAccessOption, PublicAccessSupport,
    MetadataOption, MetadataSupport,
    TimeoutOption, TimeoutSupport,
    ClientRequestIdOption, ClientRequestIdSupport,
    Generic[ContainerNameSet],
):
    MANDATORY = ("container_name",)

    def with_container_name(self, container_name: str) -> "CreateContainerBuilder[Yes]":
        return self._assign("container_name", container_name)

    async def finalize(self: "CreateContainerBuilder[Yes]") -> CreateContainerResponse:
        self.ensure_complete()
        uri = generate_container_uri(self, build_query(CONTAINER_MARKER, self.timeout_uri_parameter()))

        def write_headers(headers: Headers) -> None:
            self.add_public_access_header(headers)
            self.add_metadata_headers(headers)
            self.add_client_request_id_header(headers)

        logger.debug(f"Creating container {self.container_name()}")
        response = await self.client().perform_request(uri, "PUT", write_headers)
        headers, _ = check_status_extract_headers_and_body(response, 201)
        return CreateContainerResponse.from_headers(headers)


class GetContainerPropertiesBuilder(
    ContainerNameRequired,
    LeaseIdOption, LeaseIdSupport,
    TimeoutOption, TimeoutSupport,
    ClientRequestIdOption, ClientRequestIdSupport,
    Generic[ContainerNameSet],
):
    MANDATORY = ("container_name",)

    def with_container_name(self, container_name: str) -> "GetContainerPropertiesBuilder[Yes]":
        return self._assign("container_name", container_name)

    async def finalize(self: "GetContainerPropertiesBuilder[Yes]") -> GetContainerPropertiesResponse:
        self.ensure_complete()
        uri = generate_container_uri(self, build_query(CONTAINER_MARKER, self.timeout_uri_parameter()))

        def write_headers(headers: Headers) -> None:
            self.add_lease_id_header(headers)
            self.add_client_request_id_header(headers)

        response = await self.client().perform_request(uri, "GET", write_headers)
        headers, _ = check_status_extract_headers_and_body(response, 200)
        return GetContainerPropertiesResponse.from_headers(self.container_name(), headers)


class DeleteContainerBuilder(
    ContainerNameRequired,
    LeaseIdOption, LeaseIdSupport,
    TimeoutOption, TimeoutSupport,
    ClientRequestIdOption, ClientRequestIdSupport,
    Generic[ContainerNameSet],
):
    MANDATORY = ("container_name",)

    def with_container_name(self, container_name: str) -> "DeleteContainerBuilder[Yes]":
        return self._assign("container_name", container_name)

    async def finalize(self: "DeleteContainerBuilder[Yes]") -> DeleteContainerResponse:
        self.ensure_complete()
        uri = generate_container_uri(self, build_query(CONTAINER_MARKER, self.timeout_uri_parameter()))

        def write_headers(headers: Headers) -> None:
            self.add_lease_id_header(headers)
            self.add_client_request_id_header(headers)

        logger.debug(f"Deleting container {self.container_name()}")
        response = await self.client().perform_request(uri, "DELETE", write_headers)
        headers, _ = check_status_extract_headers_and_body(response, 202)
        return DeleteContainerResponse.from_headers(headers)


# ============================================================================
# Container leases
# ============================================================================


class AcquireContainerLeaseBuilder(
    ContainerNameRequired,
    LeaseDurationRequired,
    ProposedLeaseIdOption, ProposedLeaseIdSupport,
    TimeoutOption, TimeoutSupport,
    ClientRequestIdOption, ClientRequestIdSupport,
    Generic[ContainerNameSet, LeaseDurationSet],
):
    MANDATORY = ("container_name", "lease_duration")

    def with_container_name(
        self, container_name: str
    ) -> "AcquireContainerLeaseBuilder[Yes, LeaseDurationSet]":
        return self._assign("container_name", container_name)

    def with_lease_duration(
        self, lease_duration: int
    ) -> "AcquireContainerLeaseBuilder[ContainerNameSet, Yes]":
        return self._assign("lease_duration", lease_duration)

    async def finalize(self: "AcquireContainerLeaseBuilder[Yes, Yes]") -> AcquireLeaseResponse:
        self.ensure_complete()
        uri = generate_container_uri(self, build_query(CONTAINER_LEASE_MARKER, self.timeout_uri_parameter()))

        def write_headers(headers: Headers) -> None:
            headers[h.LEASE_ACTION] = LeaseAction.ACQUIRE.value
            self.add_lease_duration_header(headers)
            self.add_proposed_lease_id_header(headers)
            self.add_client_request_id_header(headers)

        response = await self.client().perform_request(uri, "PUT", write_headers)
        headers, _ = check_status_extract_headers_and_body(response, 201)
        return AcquireLeaseResponse.from_headers(headers)


class RenewContainerLeaseBuilder(
    ContainerNameRequired,
    LeaseIdRequired,
    TimeoutOption, TimeoutSupport,
    ClientRequestIdOption, ClientRequestIdSupport,
    Generic[ContainerNameSet, LeaseIdSet],
):
    MANDATORY = ("container_name", "lease_id")

    def with_container_name(self, container_name: str) -> "RenewContainerLeaseBuilder[Yes, LeaseIdSet]":
        return self._assign("container_name", container_name)

    def with_lease_id(self, lease_id: LeaseId) -> "RenewContainerLeaseBuilder[ContainerNameSet, Yes]":
        return self._assign("lease_id", lease_id)

    async def finalize(self: "RenewContainerLeaseBuilder[Yes, Yes]") -> RenewLeaseResponse:
        self.ensure_complete()
        uri = generate_container_uri(self, build_query(CONTAINER_LEASE_MARKER, self.timeout_uri_parameter()))

        def write_headers(headers: Headers) -> None:
            headers[h.LEASE_ACTION] = LeaseAction.RENEW.value
            self.add_lease_id_header(headers)
            self.add_client_request_id_header(headers)

        response = await self.client().perform_request(uri, "PUT", write_headers)
        headers, _ = check_status_extract_headers_and_body(response, 200)
        return RenewLeaseResponse.from_headers(headers)


class ReleaseContainerLeaseBuilder(
    ContainerNameRequired,
    LeaseIdRequired,
    TimeoutOption, TimeoutSupport,
    ClientRequestIdOption, ClientRequestIdSupport,
    Generic[ContainerNameSet, LeaseIdSet],
):
    MANDATORY = ("container_name", "lease_id")

    def with_container_name(self, container_name: str) -> "ReleaseContainerLeaseBuilder[Yes, LeaseIdSet]":
        return self._assign("container_name", container_name)

    def with_lease_id(self, lease_id: LeaseId) -> "ReleaseContainerLeaseBuilder[ContainerNameSet, Yes]":
        return self._assign("lease_id", lease_id)

    async def finalize(self: "ReleaseContainerLeaseBuilder[Yes, Yes]") -> ReleaseLeaseResponse:
        self.ensure_complete()
        uri = generate_container_uri(self, build_query(CONTAINER_LEASE_MARKER, self.timeout_uri_parameter()))

        def write_headers(headers: Headers) -> None:
            headers[h.LEASE_ACTION] = LeaseAction.RELEASE.value
            self.add_lease_id_header(headers)
            self.add_client_request_id_header(headers)

        response = await self.client().perform_request(uri, "PUT", write_headers)
        headers, _ = check_status_extract_headers_and_body(response, 200)
        return ReleaseLeaseResponse.from_headers(headers)


class BreakContainerLeaseBuilder(
    ContainerNameRequired,
    LeaseBreakPeriodOption, LeaseBreakPeriodSupport,
    LeaseIdOption, LeaseIdSupport,
    TimeoutOption, TimeoutSupport,
    ClientRequestIdOption, ClientRequestIdSupport,
    Generic[ContainerNameSet],
):
    MANDATORY = ("container_name",)

    def with_container_name(self, container_name: str) -> "BreakContainerLeaseBuilder[Yes]":
        return self._assign("container_name", container_name)

    async def finalize(self: "BreakContainerLeaseBuilder[Yes]") -> BreakLeaseResponse:
        self.ensure_complete()
        uri = generate_container_uri(self, build_query(CONTAINER_LEASE_MARKER, self.timeout_uri_parameter()))

        def write_headers(headers: Headers) -> None:
            headers[h.LEASE_ACTION] = LeaseAction.BREAK.value
            self.add_lease_break_period_header(headers)
            self.add_lease_id_header(headers)
            self.add_client_request_id_header(headers)

        response = await self.client().perform_request(uri, "PUT", write_headers)
        headers, _ = check_status_extract_headers_and_body(response, 202)
        return BreakLeaseResponse.from_headers(headers)


class ChangeContainerLeaseBuilder(
    ContainerNameRequired,
    LeaseIdRequired,
    ProposedLeaseIdRequired,
    TimeoutOption, TimeoutSupport,
    ClientRequestIdOption, ClientRequestIdSupport,
    Generic[ContainerNameSet, LeaseIdSet, ProposedLeaseIdSet],
):
    MANDATORY = ("container_name", "lease_id", "proposed_lease_id")

    def with_container_name(
        self, container_name: str
    ) -> "ChangeContainerLeaseBuilder[Yes, LeaseIdSet, ProposedLeaseIdSet]":
        return self._assign("container_name", container_name)

    def with_lease_id(
        self, lease_id: LeaseId
    ) -> "ChangeContainerLeaseBuilder[ContainerNameSet, Yes, ProposedLeaseIdSet]":
        return self._assign("lease_id", lease_id)

    def with_proposed_lease_id(
        self, proposed_lease_id: LeaseId
    ) -> "ChangeContainerLeaseBuilder[ContainerNameSet, LeaseIdSet, Yes]":
        return self._assign("proposed_lease_id", proposed_lease_id)

    async def finalize(self: "ChangeContainerLeaseBuilder[Yes, Yes, Yes]") -> ChangeLeaseResponse:
        self.ensure_complete()
        uri = generate_container_uri(self, build_query(CONTAINER_LEASE_MARKER, self.timeout_uri_parameter()))

        def write_headers(headers: Headers) -> None:
            headers[h.LEASE_ACTION] = LeaseAction.CHANGE.value
            self.add_lease_id_header(headers)
            self.add_proposed_lease_id_header(headers)
            self.add_client_request_id_header(headers)

        response = await self.client().perform_request(uri, "PUT", write_headers)
        headers, _ = check_status_extract_headers_and_body(response, 200)
        return ChangeLeaseResponse.from_headers(headers)
