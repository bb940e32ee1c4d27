"""
Unit tests for typestate builders.

Tests immutability of builder chains, the runtime backstop of finalize and
the shape of the query string assembled from optional parameters.
"""

import itertools
from urllib.parse import parse_qsl

import pytest

from azstore.core.errors import MissingParameterError
from azstore.core.typestate import No, RequestBuilder, ToAssign, Yes
from azstore.storage.client import Client

from conftest import ACCOUNT, modified_headers


@pytest.fixture
def offline_client():
    return Client(ACCOUNT)


class TestMarkers:
    """Test the set/unset markers."""

    def test_markers_are_distinct_assignment_states(self):
        """Test Yes and No share the ToAssign base but are unrelated."""
        assert issubclass(Yes, ToAssign)
        assert issubclass(No, ToAssign)
        assert not issubclass(Yes, No)
        assert not issubclass(No, Yes)


class TestBuilderChaining:
    """Test immutable builder transformations."""

    def test_mutator_returns_new_builder(self, offline_client):
        """Test mandatory mutators never modify the receiver."""
        empty = offline_client.create_container()
        named = empty.with_container_name("logs")

        assert named is not empty
        assert empty.missing_parameters() == ("container_name",)
        assert named.missing_parameters() == ()
        assert named.container_name() == "logs"

    def test_optional_mutator_keeps_missing_state(self, offline_client):
        """Test optional mutators are available before mandatory ones."""
        builder = offline_client.release_blob_lease().with_timeout(30).with_client_request_id("abc")

        assert builder.missing_parameters() == ("container_name", "blob_name", "lease_id")
        assert builder.timeout() == 30
        assert builder.client_request_id() == "abc"

    def test_optional_accessors_default_to_none(self, offline_client):
        """Test optional parameters are absent until set."""
        builder = offline_client.put_block_blob()

        assert builder.timeout() is None
        assert builder.content_type() is None
        assert builder.metadata() is None
        assert builder.lease_id() is None

    def test_branching_chains_are_independent(self, offline_client):
        """Test two chains derived from one builder do not share state."""
        base = offline_client.list_blobs().with_container_name("logs")
        left = base.with_prefix("a/")
        right = base.with_prefix("b/")

        assert base.prefix() is None
        assert left.prefix() == "a/"
        assert right.prefix() == "b/"

    def test_metadata_last_write_wins(self, offline_client):
        """Test a second with_metadata call replaces the first mapping."""
        builder = (
            offline_client.create_container()
            .with_metadata({"owner": "alice", "env": "dev"})
            .with_metadata({"env": "prod"})
        )

        assert builder.metadata() == {"env": "prod"}

    def test_metadata_is_copied(self, offline_client):
        """Test mutating the caller's mapping does not leak into the builder."""
        metadata = {"owner": "alice"}
        builder = offline_client.create_container().with_metadata(metadata)
        metadata["owner"] = "bob"

        assert builder.metadata() == {"owner": "alice"}

    def test_structural_equality(self, offline_client):
        """Test builders with the same values compare equal."""
        first = offline_client.get_blob().with_container_name("c").with_blob_name("b")
        second = offline_client.get_blob().with_blob_name("b").with_container_name("c")

        assert first == second
        assert first != first.with_timeout(5)

    def test_required_accessor_on_unset_builder_raises(self, offline_client):
        """Test required accessors cannot silently return None."""
        with pytest.raises(MissingParameterError):
            offline_client.get_blob().container_name()

    def test_builders_share_base(self, offline_client):
        """Test every operation builder is a RequestBuilder."""
        assert isinstance(offline_client.list_containers(), RequestBuilder)
        assert isinstance(offline_client.change_blob_lease(), RequestBuilder)


class TestFinalizeBackstop:
    """Test finalize refuses incomplete builders before any I/O."""

    @pytest.mark.asyncio
    async def test_missing_blob_name(self, client, service):
        """Test finalize names the first missing parameter."""
        builder = client.release_blob_lease().with_container_name("logs")

        with pytest.raises(MissingParameterError) as exc_info:
            await builder.finalize()

        assert exc_info.value.parameter == "blob_name"
        assert exc_info.value.builder == "ReleaseBlobLeaseBuilder"
        assert service.requests == []

    @pytest.mark.asyncio
    async def test_empty_body_counts_as_set(self, client, service):
        """Test an empty payload is a valid body."""
        service.respond(201, modified_headers())

        await client.put_block_blob().with_container_name("c").with_blob_name("b").with_body(b"").finalize()

        assert service.last_request.content == b""


class TestQueryAssembly:
    """Test query strings produced by optional parameters."""

    @pytest.mark.asyncio
    async def test_query_independent_of_call_order(self, client, service):
        """Test every ordering of optional mutators yields the same query."""
        mutators = [
            lambda b: b.with_prefix("logs/"),
            lambda b: b.with_max_results(10),
            lambda b: b.with_timeout(20),
            lambda b: b.with_next_marker("m1"),
        ]
        body = b"<EnumerationResults><Blobs/></EnumerationResults>"
        queries = set()

        for ordering in itertools.permutations(mutators):
            service.respond(200, {"x-ms-request-id": "r"}, body)
            builder = client.list_blobs().with_container_name("logs")
            for mutate in ordering:
                builder = mutate(builder)
            await builder.finalize()

            query = service.last_request.url.query.decode()
            pairs = parse_qsl(query)
            keys = [key for key, _ in pairs]
            assert len(keys) == len(set(keys))
            assert dict(pairs) == {
                "restype": "container",
                "comp": "list",
                "prefix": "logs/",
                "marker": "m1",
                "maxresults": "10",
                "timeout": "20",
            }
            queries.add(query)

        assert len(queries) == 1

    @pytest.mark.asyncio
    async def test_absent_optionals_are_skipped(self, client, service):
        """Test only the operation marker is sent without optional values."""
        service.respond(200, {}, b"<EnumerationResults><Containers/></EnumerationResults>")

        await client.list_containers().finalize()

        assert service.last_request.url.query.decode() == "comp=list"
