"""
Capability mixins.

Each request parameter contributes small mixins that concrete builders
compose:

- ``<Field>Required``: accessor for a mandatory parameter, plus its header
  writer when the parameter travels as a header;
- ``<Field>Option``: accessor for an optional parameter returning ``None``
  when absent, plus its header writer or query parameter;
- ``<Field>Support``: mutator for an optional parameter. It keeps the
  builder's type unchanged, so it is available in every state.

Mutators for mandatory parameters change the builder's type and are
therefore declared on each builder with an exact return annotation.

Header writers are no-ops when the value is absent and otherwise write
exactly one header with a fixed name (metadata writes one header per entry).
"""

import base64
from typing import Dict, Mapping, Optional, TypeVar
from urllib.parse import quote

from . import headers as h
from .lease import LeaseId
from .typestate import B, RequestBuilder, ToAssign

# Phantom parameters shared by the concrete builders
ContainerNameSet = TypeVar("ContainerNameSet", bound=ToAssign)
BlobNameSet = TypeVar("BlobNameSet", bound=ToAssign)
BodySet = TypeVar("BodySet", bound=ToAssign)
LeaseIdSet = TypeVar("LeaseIdSet", bound=ToAssign)
LeaseDurationSet = TypeVar("LeaseDurationSet", bound=ToAssign)
ProposedLeaseIdSet = TypeVar("ProposedLeaseIdSet", bound=ToAssign)

Headers = Dict[str, str]


def _param(key: str, value: object) -> str:
    return f"{key}={quote(str(value), safe='')}"


# ============================================================================
# Mandatory parameters
# ============================================================================


class ContainerNameRequired(RequestBuilder):
    def container_name(self) -> str:
        return self._require("container_name")


class BlobNameRequired(RequestBuilder):
    def blob_name(self) -> str:
        return self._require("blob_name")


class BodyRequired(RequestBuilder):
    def body(self) -> bytes:
        return self._require("body")


class LeaseIdRequired(RequestBuilder):
    def lease_id(self) -> LeaseId:
        return self._require("lease_id")

    def add_lease_id_header(self, headers: Headers) -> None:
        headers[h.LEASE_ID] = str(self.lease_id())


class LeaseDurationRequired(RequestBuilder):
    """Lease duration in seconds (15 to 60), or -1 for an infinite lease."""

    def lease_duration(self) -> int:
        return self._require("lease_duration")

    def add_lease_duration_header(self, headers: Headers) -> None:
        headers[h.LEASE_DURATION] = str(self.lease_duration())


class ProposedLeaseIdRequired(RequestBuilder):
    def proposed_lease_id(self) -> LeaseId:
        return self._require("proposed_lease_id")

    def add_proposed_lease_id_header(self, headers: Headers) -> None:
        headers[h.PROPOSED_LEASE_ID] = str(self.proposed_lease_id())


# ============================================================================
# Optional parameters
# ============================================================================


class TimeoutOption(RequestBuilder):
    def timeout(self) -> Optional[int]:
        return self._get("timeout")

    def timeout_uri_parameter(self) -> Optional[str]:
        timeout = self.timeout()
        return None if timeout is None else _param("timeout", timeout)


class TimeoutSupport(RequestBuilder):
    def with_timeout(self: B, timeout: int) -> B:
        """Server-side timeout in seconds."""
        return self._assign("timeout", timeout)


class ClientRequestIdOption(RequestBuilder):
    def client_request_id(self) -> Optional[str]:
        return self._get("client_request_id")

    def add_client_request_id_header(self, headers: Headers) -> None:
        client_request_id = self.client_request_id()
        if client_request_id is not None:
            headers[h.CLIENT_REQUEST_ID] = client_request_id


class ClientRequestIdSupport(RequestBuilder):
    def with_client_request_id(self: B, client_request_id: str) -> B:
        return self._assign("client_request_id", client_request_id)


class MetadataOption(RequestBuilder):
    def metadata(self) -> Optional[Mapping[str, str]]:
        return self._get("metadata")

    def add_metadata_headers(self, headers: Headers) -> None:
        for key, value in (self.metadata() or {}).items():
            headers[f"{h.META_PREFIX}{key}"] = value


class MetadataSupport(RequestBuilder):
    def with_metadata(self: B, metadata: Mapping[str, str]) -> B:
        """Replace the metadata sent with the request."""
        return self._assign("metadata", dict(metadata))


class ContentTypeOption(RequestBuilder):
    def content_type(self) -> Optional[str]:
        return self._get("content_type")

    def add_content_type_header(self, headers: Headers) -> None:
        content_type = self.content_type()
        if content_type is not None:
            headers[h.CONTENT_TYPE] = content_type


class ContentTypeSupport(RequestBuilder):
    def with_content_type(self: B, content_type: str) -> B:
        return self._assign("content_type", content_type)


class ContentMD5Option(RequestBuilder):
    def content_md5(self) -> Optional[bytes]:
        return self._get("content_md5")

    def add_content_md5_header(self, headers: Headers) -> None:
        digest = self.content_md5()
        if digest is not None:
            headers[h.CONTENT_MD5] = base64.b64encode(digest).decode("ascii")


class ContentMD5Support(RequestBuilder):
    def with_content_md5(self: B, content_md5: bytes) -> B:
        """Raw MD5 digest of the body; the service rejects mismatching uploads."""
        return self._assign("content_md5", bytes(content_md5))


class LeaseIdOption(RequestBuilder):
    def lease_id(self) -> Optional[LeaseId]:
        return self._get("lease_id")

    def add_lease_id_header(self, headers: Headers) -> None:
        lease_id = self.lease_id()
        if lease_id is not None:
            headers[h.LEASE_ID] = str(lease_id)


class LeaseIdSupport(RequestBuilder):
    def with_lease_id(self: B, lease_id: LeaseId) -> B:
        return self._assign("lease_id", lease_id)


class ProposedLeaseIdOption(RequestBuilder):
    def proposed_lease_id(self) -> Optional[LeaseId]:
        return self._get("proposed_lease_id")

    def add_proposed_lease_id_header(self, headers: Headers) -> None:
        proposed = self.proposed_lease_id()
        if proposed is not None:
            headers[h.PROPOSED_LEASE_ID] = str(proposed)


class ProposedLeaseIdSupport(RequestBuilder):
    def with_proposed_lease_id(self: B, proposed_lease_id: LeaseId) -> B:
        return self._assign("proposed_lease_id", proposed_lease_id)


class LeaseBreakPeriodOption(RequestBuilder):
    def lease_break_period(self) -> Optional[int]:
        return self._get("lease_break_period")

    def add_lease_break_period_header(self, headers: Headers) -> None:
        period = self.lease_break_period()
        if period is not None:
            headers[h.LEASE_BREAK_PERIOD] = str(period)


class LeaseBreakPeriodSupport(RequestBuilder):
    def with_lease_break_period(self: B, lease_break_period: int) -> B:
        """Seconds (0 to 60) the lease keeps running before it is broken."""
        return self._assign("lease_break_period", lease_break_period)


class PrefixOption(RequestBuilder):
    def prefix(self) -> Optional[str]:
        return self._get("prefix")

    def prefix_uri_parameter(self) -> Optional[str]:
        prefix = self.prefix()
        return None if prefix is None else _param("prefix", prefix)


class PrefixSupport(RequestBuilder):
    def with_prefix(self: B, prefix: str) -> B:
        return self._assign("prefix", prefix)


class DelimiterOption(RequestBuilder):
    def delimiter(self) -> Optional[str]:
        return self._get("delimiter")

    def delimiter_uri_parameter(self) -> Optional[str]:
        delimiter = self.delimiter()
        return None if delimiter is None else _param("delimiter", delimiter)


class DelimiterSupport(RequestBuilder):
    def with_delimiter(self: B, delimiter: str) -> B:
        return self._assign("delimiter", delimiter)


class NextMarkerOption(RequestBuilder):
    def next_marker(self) -> Optional[str]:
        return self._get("next_marker")

    def next_marker_uri_parameter(self) -> Optional[str]:
        marker = self.next_marker()
        return None if marker is None else _param("marker", marker)


class NextMarkerSupport(RequestBuilder):
    def with_next_marker(self: B, next_marker: str) -> B:
        """Continue a listing from the ``next_marker`` of a previous page."""
        return self._assign("next_marker", next_marker)


class MaxResultsOption(RequestBuilder):
    def max_results(self) -> Optional[int]:
        return self._get("max_results")

    def max_results_uri_parameter(self) -> Optional[str]:
        max_results = self.max_results()
        return None if max_results is None else _param("maxresults", max_results)


class MaxResultsSupport(RequestBuilder):
    def with_max_results(self: B, max_results: int) -> B:
        return self._assign("max_results", max_results)


class IncludeMetadataOption(RequestBuilder):
    def include_metadata(self) -> bool:
        return bool(self._get("include_metadata"))

    def include_metadata_uri_parameter(self) -> Optional[str]:
        return "include=metadata" if self.include_metadata() else None


class IncludeMetadataSupport(RequestBuilder):
    def with_include_metadata(self: B) -> B:
        return self._assign("include_metadata", True)
