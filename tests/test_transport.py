"""Tests for the HTTP transport and its error classification."""

import socket
from collections.abc import Callable
from unittest.mock import Mock, patch

import pytest
import requests
from requests import Response

from cpsclient.errors import (
    ConnectionRefusedTransportError,
    HostNotFoundError,
    HttpStatusError,
    TransportTimeoutError,
    UnknownTransportError,
)
from cpsclient.transport import DEFAULT_TIMEOUT, HttpResponse, HttpTransport

URL: str = 'https://test.example.com/api'


@pytest.fixture
def transport() -> HttpTransport:
    return HttpTransport(URL, timeout=12.5)


class TestHttpTransportSend:
    """Tests for HttpTransport.send."""

    @patch('cpsclient.transport.requests.post')
    def test_send_success(
        self, mock_post: Mock, transport: HttpTransport, mock_requests_response: Mock
    ) -> None:
        """Test that the body is POSTed and the reply returned."""
        mock_post.return_value = mock_requests_response

        response: HttpResponse = transport.send('<request/>')

        assert response.status_code == 200
        assert response.data == mock_requests_response.text
        mock_post.assert_called_once_with(
            URL,
            data=b'<request/>',
            headers={'Content-Type': 'application/x-www-form-urlencoded'},
            timeout=12.5,
            verify=True,
        )

    @patch('cpsclient.transport.requests.post')
    def test_send_utf8_body(
        self, mock_post: Mock, transport: HttpTransport, mock_requests_response: Mock
    ) -> None:
        mock_post.return_value = mock_requests_response

        transport.send('<orgname>Müller</orgname>')

        assert mock_post.call_args.kwargs['data'] == '<orgname>Müller</orgname>'.encode('utf-8')

    @patch('cpsclient.transport.requests.post')
    def test_timeout(self, mock_post: Mock, transport: HttpTransport) -> None:
        mock_post.side_effect = requests.exceptions.ReadTimeout('read timed out')

        with pytest.raises(TransportTimeoutError) as exc_info:
            transport.send('<request/>')

        assert exc_info.value.code == 'REQUEST_TIMEOUT'
        assert exc_info.value.timeout == 12.5
        assert isinstance(exc_info.value.__cause__, requests.exceptions.Timeout)

    @patch('cpsclient.transport.requests.post')
    def test_connection_refused(self, mock_post: Mock, transport: HttpTransport) -> None:
        mock_post.side_effect = requests.exceptions.ConnectionError(
            ConnectionRefusedError(111, 'Connection refused')
        )

        with pytest.raises(ConnectionRefusedTransportError) as exc_info:
            transport.send('<request/>')

        assert exc_info.value.code == 'CONNECTION_REFUSED'
        assert exc_info.value.url == URL

    @patch('cpsclient.transport.requests.post')
    def test_host_not_found(self, mock_post: Mock, transport: HttpTransport) -> None:
        mock_post.side_effect = requests.exceptions.ConnectionError(
            socket.gaierror(-2, 'Name or service not known')
        )

        with pytest.raises(HostNotFoundError):
            transport.send('<request/>')

    @patch('cpsclient.transport.requests.post')
    def test_http_status_error(
        self, mock_post: Mock, transport: HttpTransport, mock_requests_response: Mock
    ) -> None:
        mock_requests_response.status_code = 503
        mock_requests_response.reason = 'Service Unavailable'
        mock_requests_response.text = 'maintenance'
        mock_requests_response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            response=mock_requests_response
        )
        mock_post.return_value = mock_requests_response

        with pytest.raises(HttpStatusError) as exc_info:
            transport.send('<request/>')

        error: HttpStatusError = exc_info.value
        assert error.code == 'HTTP_503'
        assert error.status_code == 503
        assert error.reason == 'Service Unavailable'
        assert error.response_text == 'maintenance'

    @patch('cpsclient.transport.requests.post')
    def test_unknown_error(self, mock_post: Mock, transport: HttpTransport) -> None:
        mock_post.side_effect = requests.exceptions.TooManyRedirects('redirect loop')

        with pytest.raises(UnknownTransportError) as exc_info:
            transport.send('<request/>')

        assert exc_info.value.code == 'UNKNOWN_ERROR'


class TestHttpTransportInit:
    """Tests for HttpTransport construction."""

    def test_defaults(self) -> None:
        transport = HttpTransport(URL)

        assert transport.timeout == DEFAULT_TIMEOUT
        assert transport.verify_ssl is True

    def test_disabled_verification_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level('WARNING', logger='cpsclient.transport'):
            HttpTransport(URL, verify_ssl=False)

        assert 'verification is DISABLED' in caplog.text

    @patch('cpsclient.transport.requests.post')
    def test_verify_flag_is_passed(self, mock_post: Mock, mock_requests_response: Mock) -> None:
        mock_post.return_value = mock_requests_response

        HttpTransport(URL, verify_ssl=False).send('<request/>')

        assert mock_post.call_args.kwargs['verify'] is False


class TestHttpTransportDecoding:
    """Tests for how reply bytes are decoded."""

    @patch('cpsclient.transport.requests.post')
    def test_utf8_reply_without_charset(
        self,
        mock_post: Mock,
        transport: HttpTransport,
        make_http_response: Callable[..., Response],
    ) -> None:
        """Test that text/xml without a charset is read as UTF-8, not ISO-8859-1."""
        body: str = '<?xml version="1.0" encoding="utf-8"?><r>Jürgen Müller</r>'
        mock_post.return_value = make_http_response(body.encode('utf-8'), 'text/xml')

        assert transport.send('<request/>').data == body

    @patch('cpsclient.transport.requests.post')
    def test_declared_charset_is_honoured(
        self,
        mock_post: Mock,
        transport: HttpTransport,
        make_http_response: Callable[..., Response],
    ) -> None:
        body: str = '<r>Müller</r>'
        mock_post.return_value = make_http_response(
            body.encode('iso-8859-1'), 'text/xml; charset=ISO-8859-1'
        )

        assert transport.send('<request/>').data == body
