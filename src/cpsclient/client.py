# cpsclient/client.py
"""
CPS API Client

This module provides the high-level client for the CPS domain registration
XML API. It owns the credentials and transport, renders request envelopes,
sends them, and interprets the replies. Resource-specific operations live in
cpsclient.resources and are reachable as client.contacts / client.domains.
"""

import logging
from pathlib import Path

from cpsclient.models import AuthCredential, Language, RequestEnvelope, TransactionDescriptor
from cpsclient.resources import ContactsResource, DomainsResource
from cpsclient.response_models import ResponseEnvelope
from cpsclient.transport import DEFAULT_TIMEOUT, HttpResponse, HttpTransport
from cpsclient.utils import CpsConfig, build_request_xml, load_config

logger: logging.Logger = logging.getLogger(__name__)


class CpsClient:
    """
    Client for the CPS XML API.

    Every call is a single stateless round trip: build the XML envelope,
    POST it, parse the reply, and raise UpstreamError if the result code is
    not '1000'. The client holds no state between calls beyond its
    configuration, so one instance can be shared freely.

    Attributes:
        config: The validated client configuration.
        auth: The credential triple attached to every request.
        transport: The HTTP transport used to send requests.
        contacts: Contact operations.
        domains: Domain and TLD operations.

    Usage:
        From a config file:
            >>> client = CpsClient(Path('/etc/cpsclient/config.yaml'))
            >>> tld = client.domains.infotld('de')

        From credentials:
            >>> client = CpsClient.from_credentials(
            ...     api_url='https://orms.example.com/',
            ...     customer_id='12345',
            ...     user='api-user',
            ...     password='secret',
            ... )
    """

    def __init__(
        self, config_path: Path | str | None = None, config: CpsConfig | None = None
    ) -> None:
        """
        Initialize the client from a configuration.

        Args:
            config_path: Optional path to a config file. If None, the default
                         location as defined in load_config() is used.
            config: Optional pre-loaded CpsConfig. If provided, config_path
                    is ignored.

        Raises:
            FileNotFoundError: If the config file doesn't exist.
            pydantic.ValidationError: If the config is invalid.
        """
        if config is not None:
            self.config: CpsConfig = config
            logger.debug('Initializing CpsClient with injected configuration')
        elif config_path is not None:
            logger.info('Loading CPS configuration from: %r', config_path)
            self.config = load_config(config_path)
        else:
            logger.info('Loading CPS configuration from default location')
            self.config = load_config()

        self.auth: AuthCredential = AuthCredential(
            customer_id=self.config.api.customer_id,
            user=self.config.api.user,
            password=self.config.api.password,
        )

        self.transport: HttpTransport = HttpTransport(
            str(self.config.api.endpoint_url),
            timeout=self.config.client.request_timeout,
            verify_ssl=self.config.client.verify_ssl,
        )

        self.contacts: ContactsResource = ContactsResource(self)
        self.domains: DomainsResource = DomainsResource(self)

        logger.info('CPS client initialized for %r', self.api_url)

    @classmethod
    def from_credentials(
        cls,
        api_url: str,
        customer_id: str,
        user: str,
        password: str,
        timeout: float = DEFAULT_TIMEOUT,
        verify_ssl: bool = True,
    ) -> 'CpsClient':
        """
        Build a client directly from endpoint, credentials and timeout.

        Raises:
            pydantic.ValidationError: If any value is invalid.
        """
        config: CpsConfig = CpsConfig.model_validate(
            {
                'api': {
                    'endpoint_url': api_url,
                    'customer_id': customer_id,
                    'user': user,
                    'password': password,
                },
                'client': {'request_timeout': timeout, 'verify_ssl': verify_ssl},
            }
        )
        return cls(config=config)

    @property
    def api_url(self) -> str:
        return self.transport.endpoint_url

    def build_request(
        self,
        transaction: TransactionDescriptor,
        lang: Language | None = None,
        version: str | None = None,
    ) -> str:
        """
        Render the request document for a transaction.

        lang and version fall back to the configured defaults.
        """
        envelope: RequestEnvelope = RequestEnvelope(
            auth=self.auth,
            transaction=transaction,
            lang=lang or self.config.client.default_lang,
            version=version or self.config.client.api_version,
        )
        return build_request_xml(envelope)

    def execute(
        self,
        transaction: TransactionDescriptor,
        lang: Language | None = None,
        version: str | None = None,
    ) -> ResponseEnvelope:
        """
        Execute a transaction against the CPS API.

        Args:
            transaction: The operation to perform.
            lang: Language of result messages (defaults to config).
            version: API version (defaults to config).

        Returns:
            The parsed response envelope of a successful transaction.

        Raises:
            TransportError: If the request could not be delivered.
            MalformedResponseError: If the reply is not a CPS response.
            UpstreamError: If the API rejected the transaction.
        """
        operation: str = f'{transaction.group}/{transaction.action}/{transaction.attribute}'
        logger.info('Executing CPS transaction: %s', operation)

        body: str = self.build_request(transaction, lang=lang, version=version)
        response: HttpResponse = self.transport.send(body)
        logger.debug('Raw response for %s:\n%s', operation, response.data)

        envelope: ResponseEnvelope = ResponseEnvelope.from_xml(response.data)
        envelope.raise_for_result()

        logger.info(
            'Transaction %s completed (id=%r)', operation, envelope.transaction_id
        )
        return envelope

    def __repr__(self) -> str:
        return (
            f'CpsClient('
            f'endpoint={self.api_url}, '
            f'customer_id={self.auth.customer_id}'
            f')'
        )
