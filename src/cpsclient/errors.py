# cpsclient/errors.py
"""
Error taxonomy for the CPS API client.

Every failure the client can surface is a CpsError carrying a machine-readable
code, a human message and an optional detail payload. Two families are
distinguished by origin:

- TransportError: the HTTP exchange failed before any XML was received.
- UpstreamError: a response was received and parsed, but its result code
  was not the '1000' success sentinel.

MalformedResponseError sits beside them for replies that arrived but cannot
be interpreted as a CPS response envelope.
"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from cpsclient.response_models.envelope import ResponseEnvelope


class CpsError(Exception):
    """Base exception for all errors raised by this library."""

    def __init__(self, code: str, message: str, detail: Any = None) -> None:
        self.code: str = code
        self.message: str = message
        self.detail: Any = detail
        super().__init__(message)

    def __str__(self) -> str:
        return f'[{self.code}] {self.message}'

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}(code={self.code!r}, message={self.message!r})'

    def to_dict(self) -> dict[str, Any]:
        """Convert the error to a dictionary for structured logging."""
        return {
            'error_type': self.__class__.__name__,
            'code': self.code,
            'message': self.message,
            'detail': self.detail,
        }


# =============================================================================
# Transport Errors
# =============================================================================


class TransportError(CpsError):
    """
    Raised when the HTTP request fails before a response body is received.

    Attributes:
        url: The endpoint the request was sent to.
        timeout: The timeout (in seconds) that was in effect.
    """

    def __init__(
        self,
        code: str,
        message: str,
        url: str,
        timeout: float | None = None,
        detail: Any = None,
    ) -> None:
        self.url: str = url
        self.timeout: float | None = timeout
        super().__init__(code, message, detail if detail is not None else {'url': url})


class TransportTimeoutError(TransportError):
    """The request did not complete within the configured timeout."""

    def __init__(self, url: str, timeout: float | None) -> None:
        super().__init__(
            'REQUEST_TIMEOUT',
            f'Request timed out after {timeout}s',
            url=url,
            timeout=timeout,
        )


class ConnectionRefusedTransportError(TransportError):
    """The server actively refused the connection."""

    def __init__(self, url: str, timeout: float | None = None) -> None:
        super().__init__(
            'CONNECTION_REFUSED',
            'Connection refused by the server',
            url=url,
            timeout=timeout,
        )


class HostNotFoundError(TransportError):
    """The endpoint host name could not be resolved."""

    def __init__(self, url: str, timeout: float | None = None) -> None:
        super().__init__('HOST_NOT_FOUND', 'Host not found', url=url, timeout=timeout)


class HttpStatusError(TransportError):
    """
    The server answered with a non-2xx HTTP status.

    Attributes:
        status_code: The HTTP status code returned.
        reason: The HTTP reason phrase, if any.
        response_text: The raw response body, kept for diagnostics.
    """

    def __init__(
        self,
        url: str,
        status_code: int,
        reason: str = '',
        response_text: str = '',
        timeout: float | None = None,
    ) -> None:
        self.status_code: int = status_code
        self.reason: str = reason
        self.response_text: str = response_text
        super().__init__(
            f'HTTP_{status_code}',
            f'HTTP error {status_code}: {reason}' if reason else f'HTTP error {status_code}',
            url=url,
            timeout=timeout,
            detail={
                'url': url,
                'status': status_code,
                'status_text': reason,
                'response_data': response_text,
            },
        )


class UnknownTransportError(TransportError):
    """Any other failure raised while sending the request."""

    def __init__(
        self, url: str, original: BaseException, timeout: float | None = None
    ) -> None:
        self.original: BaseException = original
        super().__init__(
            'UNKNOWN_ERROR',
            f'Unexpected error: {original or "Unknown error"}',
            url=url,
            timeout=timeout,
            detail={'url': url, 'original_error': repr(original)},
        )


# =============================================================================
# Response Errors
# =============================================================================


class MalformedResponseError(CpsError):
    """
    Raised when the reply cannot be parsed as a CPS response envelope, or
    when a successful reply holds data its typed projection cannot read.

    Attributes:
        raw: The raw response text (or the offending fragment).
        envelope: The parsed envelope, when parsing got that far.
    """

    def __init__(
        self,
        message: str,
        raw: str = '',
        envelope: 'ResponseEnvelope | None' = None,
    ) -> None:
        self.raw: str = raw
        self.envelope: ResponseEnvelope | None = envelope
        super().__init__('MALFORMED_RESPONSE', message, {'raw': raw})


class UpstreamError(CpsError):
    """
    Raised when the API rejected the transaction (result code other than '1000').

    Attributes:
        envelope: The full parsed response, for diagnostics.
    """

    def __init__(
        self,
        code: str,
        message: str,
        detail: Any,
        envelope: 'ResponseEnvelope',
    ) -> None:
        self.envelope: ResponseEnvelope = envelope
        super().__init__(code, message, detail)


def is_transport_error(error: BaseException) -> bool:
    """
    Tell whether an error came from the transport layer.

    Transport failures (timeouts, refused connections, HTTP errors) may be
    worth retrying; upstream rejections and malformed replies are not. This
    library performs no retries itself, the predicate only classifies.

    Args:
        error: Any exception raised by the client.

    Returns:
        True for TransportError and its subclasses, False otherwise.
    """
    return isinstance(error, TransportError)
