"""Core module initialization."""

from .config_manager import AzStoreConfig, ConfigManager, LoggingConfig
from .errors import (
    AzureError,
    BoolParseError,
    DateParseError,
    EnumParseError,
    IntParseError,
    MissingHeaderError,
    MissingParameterError,
    ParsingError,
    TransportError,
    UnexpectedStatusCodeError,
    UnexpectedXMLError,
    Utf8ParseError,
)
from .lease import LeaseAction, LeaseDuration, LeaseId, LeaseState, LeaseStatus
from .logging_config import configure_logging, setup_logging
from .transport import HttpxTransport, RawResponse, Transport
from .typestate import No, RequestBuilder, ToAssign, Yes

__all__ = [
    "AzStoreConfig",
    "ConfigManager",
    "LoggingConfig",
    "AzureError",
    "BoolParseError",
    "DateParseError",
    "EnumParseError",
    "IntParseError",
    "MissingHeaderError",
    "MissingParameterError",
    "ParsingError",
    "TransportError",
    "UnexpectedStatusCodeError",
    "UnexpectedXMLError",
    "Utf8ParseError",
    "LeaseAction",
    "LeaseDuration",
    "LeaseId",
    "LeaseState",
    "LeaseStatus",
    "configure_logging",
    "setup_logging",
    "HttpxTransport",
    "RawResponse",
    "Transport",
    "No",
    "RequestBuilder",
    "ToAssign",
    "Yes",
]
