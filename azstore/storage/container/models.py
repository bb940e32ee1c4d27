"""
Container Models

Pydantic models for Azure Blob Storage containers and the responses of the
container operations.

Author: Ayodele Oladeji
Date: 2025
"""

import xml.etree.ElementTree as ET
from datetime import datetime
from enum import Enum
from typing import Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from ...core import headers as h
from ...core.lease import LeaseDuration, LeaseState, LeaseStatus
from ...core.parsing import (
    cast_header_must,
    cast_header_optional,
    cast_must,
    cast_optional,
    header_must,
    header_optional,
    metadata_from_element,
    metadata_from_headers,
    parse_xml,
    traverse,
)
from ..responses import ModifiedResponse, StorageResponse


class PublicAccess(str, Enum):
    """Container public access levels."""
    NONE = "none"
    CONTAINER = "container"
    BLOB = "blob"


def public_access_from_header(headers: Mapping[str, str]) -> PublicAccess:
    """An absent x-ms-blob-public-access header means the container is private."""
    return cast_header_optional(headers, h.BLOB_PUBLIC_ACCESS, PublicAccess) or PublicAccess.NONE


class Container(BaseModel):
    """
    Azure Blob Storage container.

    Built either from the headers of Get Container Properties or from a
    ``<Container>`` element of a List Containers body.
    """

    name: str
    last_modified: datetime
    e_tag: str
    lease_status: LeaseStatus
    lease_state: LeaseState
    lease_duration: Optional[LeaseDuration] = None
    public_access: PublicAccess = PublicAccess.NONE
    has_immutability_policy: bool = False
    has_legal_hold: bool = False
    metadata: Dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.name

    @classmethod
    def from_headers(cls, name: str, headers: Mapping[str, str]) -> "Container":
        """
        Decode container properties from response headers.

        Raises:
            MissingHeaderError: If a mandatory header is absent
            ParsingError: If a header value is malformed
        """
        return cls(
            name=name,
            last_modified=cast_header_must(headers, h.LAST_MODIFIED, datetime),
            e_tag=header_must(headers, h.ETAG),
            lease_status=cast_header_must(headers, h.LEASE_STATUS, LeaseStatus),
            lease_state=cast_header_must(headers, h.LEASE_STATE, LeaseState),
            lease_duration=cast_header_optional(headers, h.LEASE_DURATION, LeaseDuration),
            public_access=public_access_from_header(headers),
            has_immutability_policy=cast_header_must(headers, h.HAS_IMMUTABILITY_POLICY, bool),
            has_legal_hold=cast_header_must(headers, h.HAS_LEGAL_HOLD, bool),
            metadata=metadata_from_headers(headers),
        )

    @classmethod
    def parse(cls, elem: ET.Element) -> "Container":
        """
        Decode a ``<Container>`` element.

        Raises:
            UnexpectedXMLError: If a mandatory element is missing or malformed
            ParsingError: If a leaf value is malformed
        """
        return cls(
            name=cast_must(elem, ["Name"], str),
            last_modified=cast_must(elem, ["Properties", "Last-Modified"], datetime),
            e_tag=cast_must(elem, ["Properties", "Etag"], str),
            lease_status=cast_must(elem, ["Properties", "LeaseStatus"], LeaseStatus),
            lease_state=cast_must(elem, ["Properties", "LeaseState"], LeaseState),
            lease_duration=cast_optional(elem, ["Properties", "LeaseDuration"], LeaseDuration),
            public_access=cast_optional(elem, ["Properties", "PublicAccess"], PublicAccess) or PublicAccess.NONE,
            has_immutability_policy=cast_must(elem, ["Properties", "HasImmutabilityPolicy"], bool),
            has_legal_hold=cast_must(elem, ["Properties", "HasLegalHold"], bool),
            metadata=metadata_from_element(elem),
        )


class CreateContainerResponse(ModifiedResponse):
    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "CreateContainerResponse":
        return cls(**cls.modified_fields(headers))


class DeleteContainerResponse(StorageResponse):
    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "DeleteContainerResponse":
        return cls(**cls.common_fields(headers))


class GetContainerPropertiesResponse(StorageResponse):
    container: Container

    @classmethod
    def from_headers(cls, name: str, headers: Mapping[str, str]) -> "GetContainerPropertiesResponse":
        return cls(container=Container.from_headers(name, headers), **cls.common_fields(headers))


class ListContainersResponse(BaseModel):
    """
    One page of a List Containers call.

    ``next_marker`` is ``None`` on the last page.
    """

    incomplete_vector: List[Container] = Field(default_factory=list)
    next_marker: Optional[str] = None
    request_id: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def parse(cls, body: bytes, headers: Optional[Mapping[str, str]] = None) -> "ListContainersResponse":
        root = parse_xml(body)
        containers = [
            Container.parse(elem)
            for elem in traverse(root, ["Containers", "Container"], ignore_empty_leaf=True)
        ]
        return cls(
            incomplete_vector=containers,
            next_marker=cast_optional(root, ["NextMarker"], str),
            request_id=header_optional(headers, h.REQUEST_ID) if headers is not None else None,
        )
