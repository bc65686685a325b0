# cpsclient/transport.py
"""
HTTP transport for the CPS XML API.

HttpTransport POSTs a rendered request document and returns the raw reply
text. It knows nothing about XML; its only job besides sending is to turn
every requests failure into the TransportError taxonomy, so callers can tell
network problems apart from rejected transactions.
"""

import logging
import socket
from collections.abc import Iterator

import requests
from pydantic import BaseModel, ConfigDict

from cpsclient.errors import (
    ConnectionRefusedTransportError,
    HostNotFoundError,
    HttpStatusError,
    TransportError,
    TransportTimeoutError,
    UnknownTransportError,
)

logger: logging.Logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT: float = 30.0


class HttpResponse(BaseModel):
    """Raw HTTP reply: body text and status code."""

    model_config = ConfigDict(frozen=True)

    data: str
    status_code: int


def _iter_causes(error: BaseException) -> Iterator[BaseException]:
    """
    Yield an exception and everything it wraps.

    requests wraps urllib3 errors in ConnectionError.args, urllib3 keeps the
    socket error in MaxRetryError.reason and chains it via __cause__; all
    three links are followed.
    """
    pending: list[object] = [error]
    seen: set[int] = set()

    while pending:
        current: object = pending.pop(0)
        if not isinstance(current, BaseException) or id(current) in seen:
            continue
        seen.add(id(current))
        yield current

        pending.extend(current.args)
        pending.append(getattr(current, 'reason', None))
        pending.append(current.__cause__)
        pending.append(current.__context__)


class HttpTransport:
    """
    Sends request documents to the CPS endpoint with requests.

    Attributes:
        endpoint_url: The API endpoint all requests are POSTed to.
        timeout: Connect/read timeout in seconds.
        verify_ssl: Whether TLS certificates are verified.
        headers: HTTP headers sent with every request.
    """

    def __init__(
        self,
        endpoint_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        verify_ssl: bool = True,
    ) -> None:
        self.endpoint_url: str = endpoint_url
        self.timeout: float = timeout
        self.verify_ssl: bool = verify_ssl
        self.headers: dict[str, str] = {
            'Content-Type': 'application/x-www-form-urlencoded',
        }

        if not verify_ssl:
            logger.warning(
                'TLS certificate verification is DISABLED for %r', endpoint_url
            )

    def send(self, body: str) -> HttpResponse:
        """
        POST a request document and return the reply.

        Args:
            body: The XML request document.

        Returns:
            The reply body and HTTP status code.

        Raises:
            TransportTimeoutError: The request exceeded the timeout.
            ConnectionRefusedTransportError: The server refused the connection.
            HostNotFoundError: The endpoint host could not be resolved.
            HttpStatusError: The server answered with a 4xx/5xx status.
            UnknownTransportError: Any other requests failure.
        """
        logger.debug(
            'Sending request to %r (timeout=%rs)', self.endpoint_url, self.timeout
        )

        try:
            response: requests.Response = requests.post(
                self.endpoint_url,
                data=body.encode('utf-8'),
                headers=self.headers,
                timeout=self.timeout,
                verify=self.verify_ssl,
            )
            response.raise_for_status()

        except requests.exceptions.RequestException as request_error:
            transport_error: TransportError = self.classify(request_error)
            logger.error(
                'Transport error talking to %r: %r', self.endpoint_url, transport_error
            )
            raise transport_error from request_error

        # requests assumes ISO-8859-1 for text/* without a charset; replies are UTF-8
        if 'charset' not in response.headers.get('Content-Type', '').lower():
            response.encoding = 'utf-8'

        logger.debug('Received HTTP %r from %r', response.status_code, self.endpoint_url)
        return HttpResponse(data=response.text, status_code=response.status_code)

    def classify(self, error: requests.exceptions.RequestException) -> TransportError:
        """
        Map a requests exception onto the TransportError taxonomy.

        Args:
            error: The exception raised by requests.

        Returns:
            The matching TransportError subclass instance (not raised).
        """
        if isinstance(error, requests.exceptions.Timeout):
            return TransportTimeoutError(self.endpoint_url, self.timeout)

        if isinstance(error, requests.exceptions.HTTPError) and error.response is not None:
            return HttpStatusError(
                self.endpoint_url,
                status_code=error.response.status_code,
                reason=error.response.reason or '',
                response_text=error.response.text or '',
                timeout=self.timeout,
            )

        if isinstance(error, requests.exceptions.ConnectionError):
            for cause in _iter_causes(error):
                if isinstance(cause, socket.gaierror):
                    return HostNotFoundError(self.endpoint_url, self.timeout)
                if isinstance(cause, ConnectionRefusedError):
                    return ConnectionRefusedTransportError(self.endpoint_url, self.timeout)

        return UnknownTransportError(self.endpoint_url, error, self.timeout)
