"""
Unit tests for container models.

Tests decoding of container properties from headers and from List
Containers XML bodies.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from azstore.core.errors import DateParseError, EnumParseError, MissingHeaderError, UnexpectedXMLError
from azstore.core.lease import LeaseDuration, LeaseState, LeaseStatus
from azstore.storage.container.models import (
    Container,
    CreateContainerResponse,
    DeleteContainerResponse,
    GetContainerPropertiesResponse,
    ListContainersResponse,
    PublicAccess,
)

from conftest import DATE, LAST_MODIFIED, common_headers, modified_headers

CONTAINER_HEADERS = {
    "Last-Modified": LAST_MODIFIED,
    "ETag": '"0x8D4BCC2E4835CD0"',
    "x-ms-lease-status": "unlocked",
    "x-ms-lease-state": "available",
    "x-ms-has-immutability-policy": "false",
    "x-ms-has-legal-hold": "false",
}

CONTAINER_XML = """<Container>
  <Name>{name}</Name>
  <Properties>
    <Last-Modified>Tue, 22 Oct 2024 08:30:00 GMT</Last-Modified>
    <Etag>"0x8D4BCC2E4835CD0"</Etag>
    <LeaseStatus>locked</LeaseStatus>
    <LeaseState>leased</LeaseState>
    <LeaseDuration>infinite</LeaseDuration>
    <PublicAccess>container</PublicAccess>
    <HasImmutabilityPolicy>false</HasImmutabilityPolicy>
    <HasLegalHold>true</HasLegalHold>
  </Properties>
  {metadata}
</Container>"""


def _listing(*containers, next_marker=""):
    marker = f"<NextMarker>{next_marker}</NextMarker>" if next_marker is not None else ""
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        '<EnumerationResults ServiceEndpoint="https://testaccount.blob.core.windows.net/">'
        f"<Containers>{''.join(containers)}</Containers>{marker}"
        "</EnumerationResults>"
    ).encode("utf-8")


class TestContainerFromHeaders:
    """Test decoding container properties from headers."""

    def test_all_headers_present(self):
        """Test every field is decoded from its header."""
        headers = dict(CONTAINER_HEADERS, **{
            "x-ms-lease-duration": "fixed",
            "x-ms-blob-public-access": "blob",
            "x-ms-meta-owner": "alice",
        })

        container = Container.from_headers("logs", headers)

        assert container.name == "logs"
        assert container.last_modified == datetime(2024, 10, 22, 8, 30, tzinfo=timezone.utc)
        assert container.e_tag == '"0x8D4BCC2E4835CD0"'
        assert container.lease_status == LeaseStatus.UNLOCKED
        assert container.lease_state == LeaseState.AVAILABLE
        assert container.lease_duration == LeaseDuration.FIXED
        assert container.public_access == PublicAccess.BLOB
        assert container.has_immutability_policy is False
        assert container.has_legal_hold is False
        assert container.metadata == {"owner": "alice"}

    def test_optional_headers_absent(self):
        """Test absent optional headers fall back to their defaults."""
        container = Container.from_headers("logs", CONTAINER_HEADERS)

        assert container.lease_duration is None
        assert container.public_access == PublicAccess.NONE
        assert container.metadata == {}

    @pytest.mark.parametrize("header", sorted(CONTAINER_HEADERS))
    def test_missing_mandatory_header(self, header):
        """Test each mandatory header is named when missing."""
        headers = {k: v for k, v in CONTAINER_HEADERS.items() if k != header}

        with pytest.raises(MissingHeaderError) as exc_info:
            Container.from_headers("logs", headers)

        assert exc_info.value.header.lower() == header.lower()

    def test_malformed_date(self):
        """Test a malformed Last-Modified is rejected."""
        headers = dict(CONTAINER_HEADERS, **{"Last-Modified": "not a date"})

        with pytest.raises(DateParseError):
            Container.from_headers("logs", headers)

    def test_unknown_lease_state(self):
        headers = dict(CONTAINER_HEADERS, **{"x-ms-lease-state": "frozen"})

        with pytest.raises(EnumParseError):
            Container.from_headers("logs", headers)

    def test_decoding_is_deterministic(self):
        """Test decoding the same headers twice yields equal containers."""
        assert Container.from_headers("logs", CONTAINER_HEADERS) == Container.from_headers("logs", CONTAINER_HEADERS)

    def test_container_is_frozen(self):
        container = Container.from_headers("logs", CONTAINER_HEADERS)

        with pytest.raises(ValidationError):
            container.name = "other"


class TestContainerFromXML:
    """Test decoding <Container> elements."""

    def test_parse_single_container(self):
        """Test every property is read from the element."""
        body = _listing(CONTAINER_XML.format(name="c1", metadata="<Metadata><foo>bar</foo></Metadata>"))

        response = ListContainersResponse.parse(body)

        assert len(response.incomplete_vector) == 1
        container = response.incomplete_vector[0]
        assert container.name == "c1"
        assert container.lease_status == LeaseStatus.LOCKED
        assert container.lease_state == LeaseState.LEASED
        assert container.lease_duration == LeaseDuration.INFINITE
        assert container.public_access == PublicAccess.CONTAINER
        assert container.has_legal_hold is True
        assert container.metadata == {"foo": "bar"}

    def test_parse_without_metadata(self):
        """Test a container without a Metadata node has empty metadata."""
        body = _listing(CONTAINER_XML.format(name="c1", metadata=""))

        container = ListContainersResponse.parse(body).incomplete_vector[0]

        assert container.metadata == {}

    def test_missing_mandatory_element(self):
        """Test a container without a name is rejected."""
        body = _listing(CONTAINER_XML.format(name="c1", metadata="").replace("<Name>c1</Name>", ""))

        with pytest.raises(UnexpectedXMLError, match="Element not found"):
            ListContainersResponse.parse(body)


class TestListContainersResponse:
    """Test pages of List Containers."""

    def test_multiple_containers_and_marker(self):
        """Test order is preserved and the continuation marker is read."""
        body = _listing(
            CONTAINER_XML.format(name="a", metadata=""),
            CONTAINER_XML.format(name="b", metadata=""),
            next_marker="/testaccount/c",
        )

        response = ListContainersResponse.parse(body, {"x-ms-request-id": "req-9"})

        assert [c.name for c in response.incomplete_vector] == ["a", "b"]
        assert response.next_marker == "/testaccount/c"
        assert response.request_id == "req-9"

    def test_last_page(self):
        """Test an empty NextMarker means there are no more pages."""
        response = ListContainersResponse.parse(_listing(CONTAINER_XML.format(name="a", metadata="")))

        assert response.next_marker is None

    def test_empty_account(self):
        response = ListContainersResponse.parse(_listing(next_marker=None))

        assert response.incomplete_vector == []
        assert response.next_marker is None

    def test_body_with_byte_order_mark(self):
        body = b"\xef\xbb\xbf" + _listing(CONTAINER_XML.format(name="a", metadata=""))

        assert ListContainersResponse.parse(body).incomplete_vector[0].name == "a"


class TestContainerResponses:
    """Test header-only container responses."""

    def test_create_container_response(self):
        response = CreateContainerResponse.from_headers(modified_headers())

        assert response.request_id == "req-1"
        assert response.date == datetime(2024, 10, 23, 10, 0, tzinfo=timezone.utc)
        assert response.e_tag == '"0x8D4BCC2E4835CD0"'
        assert response.last_modified == datetime(2024, 10, 22, 8, 30, tzinfo=timezone.utc)

    def test_create_container_response_missing_etag(self):
        headers = {k: v for k, v in modified_headers().items() if k != "ETag"}

        with pytest.raises(MissingHeaderError):
            CreateContainerResponse.from_headers(headers)

    def test_delete_container_response(self):
        response = DeleteContainerResponse.from_headers(common_headers())

        assert response.request_id == "req-1"

    def test_delete_container_response_missing_date(self):
        with pytest.raises(MissingHeaderError) as exc_info:
            DeleteContainerResponse.from_headers({"x-ms-request-id": "r"})

        assert exc_info.value.header == "Date"

    def test_get_properties_response(self):
        headers = common_headers(**CONTAINER_HEADERS)

        response = GetContainerPropertiesResponse.from_headers("logs", headers)

        assert response.container.name == "logs"
        assert response.date.strftime("%a, %d %b %Y %H:%M:%S GMT") == DATE
