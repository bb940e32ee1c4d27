"""
URI assembly for finalized builders.

Resource paths follow ``{endpoint}/{container}[/{blob}]`` where the endpoint
defaults to ``https://{account}.blob.core.windows.net``. Path segments are
percent-encoded with no safe characters.
"""

from typing import TYPE_CHECKING, Optional, Protocol
from urllib.parse import quote

if TYPE_CHECKING:
    from ..storage.client import Client


class AccountAddressable(Protocol):
    def client(self) -> "Client": ...


class ContainerAddressable(AccountAddressable, Protocol):
    def container_name(self) -> str: ...


class BlobAddressable(ContainerAddressable, Protocol):
    def blob_name(self) -> str: ...


def encode_segment(segment: str) -> str:
    return quote(segment, safe="")


def build_query(marker: Optional[str], *parameters: Optional[str]) -> Optional[str]:
    """
    Join the operation marker and every present parameter with ``&``.

    Parameters keep the order they are given in; ``None`` entries are skipped.

    Example:
        build_query("comp=lease", "timeout=30", None)  # "comp=lease&timeout=30"
    """
    parts = [part for part in (marker, *parameters) if part]
    return "&".join(parts) or None


def _with_query(uri: str, params: Optional[str]) -> str:
    return f"{uri}?{params}" if params else uri


def generate_account_uri(builder: AccountAddressable, params: Optional[str] = None) -> str:
    return _with_query(f"{builder.client().blob_uri()}/", params)


def generate_container_uri(builder: ContainerAddressable, params: Optional[str] = None) -> str:
    uri = f"{builder.client().blob_uri()}/{encode_segment(builder.container_name())}"
    return _with_query(uri, params)


def generate_blob_uri(builder: BlobAddressable, params: Optional[str] = None) -> str:
    uri = "{}/{}/{}".format(
        builder.client().blob_uri(),
        encode_segment(builder.container_name()),
        encode_segment(builder.blob_name()),
    )
    return _with_query(uri, params)
