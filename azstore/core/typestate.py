"""
Typestate request builders.

A builder is an immutable value that accumulates request parameters. Each
concrete builder is generic over one phantom marker per mandatory parameter:
``No`` while the parameter is unset, ``Yes`` once its ``with_*`` mutator was
called. ``finalize`` is declared on the fully-set parameterization only
(``self: "SomeBuilder[Yes, Yes]"``), so a static type checker rejects a
``finalize`` call on an incomplete chain.

Example:
    builder = client.release_blob_lease()          # ReleaseBlobLeaseBuilder[No, No, No]
    builder = builder.with_container_name("logs")  # ReleaseBlobLeaseBuilder[Yes, No, No]
    builder = builder.with_timeout(30)             # state unchanged
    ...
    response = await builder.finalize()            # only valid on [Yes, Yes, Yes]

The markers are erased at runtime, so ``finalize`` also calls
``ensure_complete`` before touching the network.
"""

from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar, Mapping, Optional, Tuple, TypeVar

from .errors import MissingParameterError

if TYPE_CHECKING:
    from ..storage.client import Client


class ToAssign:
    """Marker base for the set/unset state of a mandatory parameter."""


class Yes(ToAssign):
    """The parameter has been assigned."""


class No(ToAssign):
    """The parameter has not been assigned yet."""


B = TypeVar("B", bound="RequestBuilder")


class RequestBuilder:
    """
    Immutable parameter accumulator bound to a client.

    Subclasses list their mandatory parameters in ``MANDATORY``; every mutator
    goes through ``_assign`` and returns a new instance.
    """

    MANDATORY: ClassVar[Tuple[str, ...]] = ()

    def __init__(self, client: "Client", **values: Any):
        self._client = client
        self._values: Mapping[str, Any] = MappingProxyType(dict(values))

    def client(self) -> "Client":
        return self._client

    def _assign(self, name: str, value: Any) -> Any:
        values = dict(self._values)
        values[name] = value
        return type(self)(self._client, **values)

    def _get(self, name: str) -> Optional[Any]:
        return self._values.get(name)

    def _require(self, name: str) -> Any:
        value = self._values.get(name)
        if value is None:
            raise MissingParameterError(type(self).__name__, name)
        return value

    def missing_parameters(self) -> Tuple[str, ...]:
        """Names of mandatory parameters that are still unset."""
        return tuple(name for name in self.MANDATORY if self._values.get(name) is None)

    def ensure_complete(self) -> None:
        """
        Raises:
            MissingParameterError: For the first mandatory parameter left unset
        """
        missing = self.missing_parameters()
        if missing:
            raise MissingParameterError(type(self).__name__, missing[0])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RequestBuilder) or type(other) is not type(self):
            return NotImplemented
        return self._client is other._client and dict(self._values) == dict(other._values)

    def __hash__(self) -> int:
        return hash((type(self), id(self._client), tuple(sorted(self._values))))

    def __repr__(self) -> str:
        values = ", ".join(f"{k}={v!r}" for k, v in self._values.items())
        return f"{type(self).__name__}({values})"
