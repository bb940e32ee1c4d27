"""
Lease Responses

Header-only responses shared by the container and blob lease operations.

Author: Ayodele Oladeji
Date: 2025
"""

from datetime import datetime
from typing import Mapping
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from ..core import headers as h
from ..core.errors import ParsingError
from ..core.lease import LeaseId
from ..core.parsing import cast_header_must, header_must


class StorageResponse(BaseModel):
    """Fields every storage response carries."""

    request_id: str = Field(description="x-ms-request-id assigned by the service")
    date: datetime = Field(description="Service time the response was generated")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def common_fields(cls, headers: Mapping[str, str]) -> dict:
        return {
            "request_id": header_must(headers, h.REQUEST_ID),
            "date": cast_header_must(headers, h.DATE, datetime),
        }


class ModifiedResponse(StorageResponse):
    """Response describing the resource version after the call."""

    e_tag: str
    last_modified: datetime

    @classmethod
    def modified_fields(cls, headers: Mapping[str, str]) -> dict:
        fields = cls.common_fields(headers)
        fields["e_tag"] = header_must(headers, h.ETAG)
        fields["last_modified"] = cast_header_must(headers, h.LAST_MODIFIED, datetime)
        return fields


def _lease_id(headers: Mapping[str, str]) -> LeaseId:
    value = header_must(headers, h.LEASE_ID)
    try:
        return UUID(value)
    except ValueError as e:
        raise ParsingError(value, "lease id") from e


class AcquireLeaseResponse(ModifiedResponse):
    lease_id: LeaseId

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "AcquireLeaseResponse":
        return cls(lease_id=_lease_id(headers), **cls.modified_fields(headers))


class RenewLeaseResponse(ModifiedResponse):
    lease_id: LeaseId

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "RenewLeaseResponse":
        return cls(lease_id=_lease_id(headers), **cls.modified_fields(headers))


class ChangeLeaseResponse(ModifiedResponse):
    lease_id: LeaseId

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "ChangeLeaseResponse":
        return cls(lease_id=_lease_id(headers), **cls.modified_fields(headers))


class ReleaseLeaseResponse(ModifiedResponse):
    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "ReleaseLeaseResponse":
        return cls(**cls.modified_fields(headers))


class BreakLeaseResponse(ModifiedResponse):
    lease_time: int = Field(description="Seconds remaining before the lease is broken")

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "BreakLeaseResponse":
        return cls(lease_time=cast_header_must(headers, h.LEASE_TIME, int), **cls.modified_fields(headers))
