"""
Blob Models

Pydantic models for Azure Blob Storage blobs and the responses of the blob
operations.

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


class BlobType(str, Enum):
    """Blob type."""
    BLOCK_BLOB = "BlockBlob"
    PAGE_BLOB = "PageBlob"
    APPEND_BLOB = "AppendBlob"


class Blob(BaseModel):
    """
    Azure Blob Storage blob.

    Built either from the headers of Get Blob or from a ``<Blob>`` element of
    a List Blobs body. ``content_md5`` is kept base64-encoded, as sent by the
    service.
    """

    name: str
    container_name: str
    snapshot: Optional[str] = None
    creation_time: Optional[datetime] = None
    last_modified: datetime
    e_tag: str
    content_length: int
    content_type: Optional[str] = None
    content_encoding: Optional[str] = None
    content_language: Optional[str] = None
    content_md5: Optional[str] = None
    cache_control: Optional[str] = None
    blob_type: BlobType
    access_tier: Optional[str] = None
    lease_status: LeaseStatus
    lease_state: LeaseState
    lease_duration: Optional[LeaseDuration] = None
    server_encrypted: bool = False
    metadata: Dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_headers(cls, container_name: str, name: str, headers: Mapping[str, str]) -> "Blob":
        """
        Decode blob properties from response headers.

        Raises:
            MissingHeaderError: If a mandatory header is absent
            ParsingError: If a header value is malformed
        """
        return cls(
            name=name,
            container_name=container_name,
            creation_time=cast_header_optional(headers, h.CREATION_TIME, datetime),
            last_modified=cast_header_must(headers, h.LAST_MODIFIED, datetime),
            e_tag=header_must(headers, h.ETAG),
            content_length=cast_header_must(headers, h.CONTENT_LENGTH, int),
            content_type=header_optional(headers, h.CONTENT_TYPE),
            content_encoding=header_optional(headers, h.CONTENT_ENCODING),
            content_language=header_optional(headers, h.CONTENT_LANGUAGE),
            content_md5=header_optional(headers, h.CONTENT_MD5),
            cache_control=header_optional(headers, h.CACHE_CONTROL),
            blob_type=cast_header_must(headers, h.BLOB_TYPE, BlobType),
            access_tier=header_optional(headers, h.ACCESS_TIER),
            lease_status=cast_header_must(headers, h.LEASE_STATUS, LeaseStatus),
            lease_state=cast_header_must(headers, h.LEASE_STATE, LeaseState),
            lease_duration=cast_header_optional(headers, h.LEASE_DURATION, LeaseDuration),
            server_encrypted=cast_header_optional(headers, h.SERVER_ENCRYPTED, bool) or False,
            metadata=metadata_from_headers(headers),
        )

    @classmethod
    def parse(cls, elem: ET.Element, container_name: str) -> "Blob":
        """
        Decode a ``<Blob>`` element.

        Raises:
            UnexpectedXMLError: If a mandatory element is missing or malformed
            ParsingError: If a leaf value is malformed
        """
        return cls(
            name=cast_must(elem, ["Name"], str),
            container_name=container_name,
            snapshot=cast_optional(elem, ["Snapshot"], str),
            creation_time=cast_optional(elem, ["Properties", "Creation-Time"], datetime),
            last_modified=cast_must(elem, ["Properties", "Last-Modified"], datetime),
            e_tag=cast_must(elem, ["Properties", "Etag"], str),
            content_length=cast_must(elem, ["Properties", "Content-Length"], int),
            content_type=cast_optional(elem, ["Properties", "Content-Type"], str),
            content_encoding=cast_optional(elem, ["Properties", "Content-Encoding"], str),
            content_language=cast_optional(elem, ["Properties", "Content-Language"], str),
            content_md5=cast_optional(elem, ["Properties", "Content-MD5"], str),
            cache_control=cast_optional(elem, ["Properties", "Cache-Control"], str),
            blob_type=cast_must(elem, ["Properties", "BlobType"], BlobType),
            access_tier=cast_optional(elem, ["Properties", "AccessTier"], str),
            lease_status=cast_must(elem, ["Properties", "LeaseStatus"], LeaseStatus),
            lease_state=cast_must(elem, ["Properties", "LeaseState"], LeaseState),
            lease_duration=cast_optional(elem, ["Properties", "LeaseDuration"], LeaseDuration),
            server_encrypted=cast_optional(elem, ["Properties", "ServerEncrypted"], bool) or False,
            metadata=metadata_from_element(elem),
        )


class PutBlobResponse(ModifiedResponse):
    content_md5: Optional[str] = None
    request_server_encrypted: bool = False

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "PutBlobResponse":
        return cls(
            content_md5=header_optional(headers, h.CONTENT_MD5),
            request_server_encrypted=cast_header_optional(headers, h.REQUEST_SERVER_ENCRYPTED, bool) or False,
            **cls.modified_fields(headers),
        )


class GetBlobResponse(StorageResponse):
    blob: Blob
    data: bytes

    @classmethod
    def from_response(
        cls,
        container_name: str,
        blob_name: str,
        headers: Mapping[str, str],
        body: bytes,
    ) -> "GetBlobResponse":
        return cls(
            blob=Blob.from_headers(container_name, blob_name, headers),
            data=body,
            **cls.common_fields(headers),
        )


class DeleteBlobResponse(StorageResponse):
    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "DeleteBlobResponse":
        return cls(**cls.common_fields(headers))


class ListBlobsResponse(BaseModel):
    """
    One page of a List Blobs call.

    With a delimiter, virtual directories are reported in ``blob_prefixes``.
    ``next_marker`` is ``None`` on the last page.
    """

    container_name: str
    incomplete_vector: List[Blob] = Field(default_factory=list)
    blob_prefixes: List[str] = Field(default_factory=list)
    prefix: Optional[str] = None
    delimiter: Optional[str] = None
    next_marker: Optional[str] = None
    request_id: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def parse(
        cls,
        container_name: str,
        body: bytes,
        headers: Optional[Mapping[str, str]] = None,
    ) -> "ListBlobsResponse":
        root = parse_xml(body)
        blobs = [
            Blob.parse(elem, container_name)
            for elem in traverse(root, ["Blobs", "Blob"], ignore_empty_leaf=True)
        ]
        prefixes = [
            cast_must(elem, ["Name"], str)
            for elem in traverse(root, ["Blobs", "BlobPrefix"], ignore_empty_leaf=True)
        ]
        return cls(
            container_name=container_name,
            incomplete_vector=blobs,
            blob_prefixes=prefixes,
            prefix=cast_optional(root, ["Prefix"], str),
            delimiter=cast_optional(root, ["Delimiter"], str),
            next_marker=cast_optional(root, ["NextMarker"], str),
            request_id=header_optional(headers, h.REQUEST_ID) if headers is not None else None,
        )
