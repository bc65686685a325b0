# cpsclient/resources/domains.py
"""Domain and TLD operations of the CPS API."""

import logging
from typing import TYPE_CHECKING

from cpsclient.models import (
    AutoRenewDomainRequest,
    CreateDomainRequest,
    DeleteDomainRequest,
    InfoDomainRequest,
    InfoTldRequest,
    ListDomainsRequest,
    UpdateDomainRequest,
)
from cpsclient.response_models import (
    AutoRenewResult,
    CpsResponse,
    DomainInfo,
    DomainListItem,
    DomainResult,
    ResponseEnvelope,
    TldInfo,
)

if TYPE_CHECKING:
    from cpsclient.client import CpsClient

logger: logging.Logger = logging.getLogger(__name__)


class DomainsResource:
    """
    Register, inspect, list, modify and delete domains, and read TLD data.

    All methods perform one transaction, except update(), which reads the
    current domain first to fill in whatever the caller left unset.
    """

    def __init__(self, client: 'CpsClient') -> None:
        self._client: CpsClient = client

    def infotld(self, tld: str) -> CpsResponse[TldInfo]:
        """Get registry data (rights, policy, workflow, ...) about a TLD."""
        envelope: ResponseEnvelope = self._client.execute(
            InfoTldRequest(tld=tld).to_transaction()
        )
        return CpsResponse[TldInfo](data=TldInfo.from_envelope(tld, envelope), meta=envelope)

    def create(self, request: CreateDomainRequest) -> CpsResponse[DomainResult]:
        envelope: ResponseEnvelope = self._client.execute(request.to_transaction())
        return CpsResponse[DomainResult](data=DomainResult(domain=request.domain), meta=envelope)

    def info(self, domain: str) -> CpsResponse[DomainInfo]:
        envelope: ResponseEnvelope = self._client.execute(
            InfoDomainRequest(domain=domain).to_transaction()
        )
        return CpsResponse[DomainInfo](
            data=DomainInfo.from_envelope(domain, envelope), meta=envelope
        )

    def update(self, request: UpdateDomainRequest) -> CpsResponse[DomainResult]:
        """
        Modify a domain's contacts and/or nameservers.

        The modify transaction replaces the complete record, so contacts and
        nameservers not given in the request are taken from the domain's
        current data.
        """
        current: DomainInfo = self.info(request.domain).data

        complete: UpdateDomainRequest = request.model_copy(
            update={
                'ownerc': request.ownerc or current.ownerc,
                'adminc': request.adminc or current.adminc,
                'techc': request.techc or current.techc,
                'billc': request.billc or current.billc,
                'nameservers': (
                    request.nameservers
                    if request.nameservers is not None
                    else current.nameservers
                ),
            }
        )
        logger.debug('Resolved update for %r: %r', request.domain, complete)

        envelope: ResponseEnvelope = self._client.execute(complete.to_transaction())
        return CpsResponse[DomainResult](data=DomainResult(domain=request.domain), meta=envelope)

    def autorenew(self, request: AutoRenewDomainRequest) -> CpsResponse[AutoRenewResult]:
        """Switch a domain's auto-renew setting to 'active' or 'disabled'."""
        envelope: ResponseEnvelope = self._client.execute(request.to_transaction())
        return CpsResponse[AutoRenewResult](
            data=AutoRenewResult(domain=request.domain, auto_renew=request.status),
            meta=envelope,
        )

    def delete(self, domain: str) -> CpsResponse[DomainResult]:
        envelope: ResponseEnvelope = self._client.execute(
            DeleteDomainRequest(domain=domain).to_transaction()
        )
        return CpsResponse[DomainResult](data=DomainResult(domain=domain), meta=envelope)

    def list(
        self, request: ListDomainsRequest | None = None
    ) -> CpsResponse[list[DomainListItem]]:
        """List domains in the portfolio matching the filters."""
        envelope: ResponseEnvelope = self._client.execute(
            (request or ListDomainsRequest()).to_transaction()
        )
        return CpsResponse[list[DomainListItem]](
            data=DomainListItem.list_from_envelope(envelope), meta=envelope
        )
