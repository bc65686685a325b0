# cpsclient/__init__.py

from .client import CpsClient
from .errors import (
    ConnectionRefusedTransportError,
    CpsError,
    HostNotFoundError,
    HttpStatusError,
    MalformedResponseError,
    TransportError,
    TransportTimeoutError,
    UnknownTransportError,
    UpstreamError,
    is_transport_error,
)
from .response_models import CpsResponse, ResponseEnvelope, parse_response
from .utils import build_request_xml

__all__: list[str] = [
    # client.py
    'CpsClient',
    # errors.py
    'ConnectionRefusedTransportError',
    'CpsError',
    'HostNotFoundError',
    'HttpStatusError',
    'MalformedResponseError',
    'TransportError',
    'TransportTimeoutError',
    'UnknownTransportError',
    'UpstreamError',
    'is_transport_error',
    # response_models
    'CpsResponse',
    'ResponseEnvelope',
    'parse_response',
    # utils
    'build_request_xml',
]
