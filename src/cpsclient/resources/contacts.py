# cpsclient/resources/contacts.py
"""Contact operations of the CPS API."""

import logging
from typing import TYPE_CHECKING

from cpsclient.errors import MalformedResponseError
from cpsclient.models import (
    CheckContactRequest,
    CreateContactRequest,
    DeleteContactRequest,
    InfoContactRequest,
    ListContactsRequest,
)
from cpsclient.response_models import (
    ContactAvailability,
    ContactDetails,
    ContactListItem,
    CpsResponse,
    CreatedContact,
    DeletedContact,
    ResponseEnvelope,
)

if TYPE_CHECKING:
    from cpsclient.client import CpsClient

logger: logging.Logger = logging.getLogger(__name__)


class ContactsResource:
    """
    Create, list, inspect, check and delete contact handles.

    Every method performs exactly one transaction and returns a CpsResponse
    pairing the typed result with the response envelope.
    """

    def __init__(self, client: 'CpsClient') -> None:
        self._client: CpsClient = client

    def create(self, request: CreateContactRequest) -> CpsResponse[CreatedContact]:
        """
        Create a contact.

        When request.contact_id is None the server allocates a handle and
        reports it in <auto_values><contact_id>.

        Raises:
            MalformedResponseError: If an allocated handle was expected but
                                    the reply does not carry one.
        """
        envelope: ResponseEnvelope = self._client.execute(request.to_transaction())

        if request.contact_id:
            contact_id: str = request.contact_id
        else:
            allocated: str | None = (envelope.auto_values or {}).get('contact_id')
            if not allocated:
                error_msg: str = (
                    'Contact was created with %%AUTO%% but no contact_id was returned'
                )
                logger.error(error_msg)
                raise MalformedResponseError(error_msg, envelope=envelope)
            contact_id = allocated
            logger.info('Server allocated contact_id %r', contact_id)

        return CpsResponse[CreatedContact](
            data=CreatedContact(contact_id=contact_id), meta=envelope
        )

    def list(
        self, request: ListContactsRequest | None = None
    ) -> CpsResponse[list[ContactListItem]]:
        """List contacts matching the filters (all contacts by default)."""
        envelope: ResponseEnvelope = self._client.execute(
            (request or ListContactsRequest()).to_transaction()
        )
        return CpsResponse[list[ContactListItem]](
            data=ContactListItem.list_from_envelope(envelope), meta=envelope
        )

    def info(self, contact_id: str) -> CpsResponse[ContactDetails]:
        envelope: ResponseEnvelope = self._client.execute(
            InfoContactRequest(contact_id=contact_id).to_transaction()
        )
        return CpsResponse[ContactDetails](
            data=ContactDetails.from_envelope(envelope), meta=envelope
        )

    def delete(self, contact_id: str) -> CpsResponse[DeletedContact]:
        envelope: ResponseEnvelope = self._client.execute(
            DeleteContactRequest(contact_id=contact_id).to_transaction()
        )
        return CpsResponse[DeletedContact](
            data=DeletedContact(contact_id=contact_id), meta=envelope
        )

    def check(self, contact_id: str) -> CpsResponse[ContactAvailability]:
        """Check whether a contact handle is still available."""
        envelope: ResponseEnvelope = self._client.execute(
            CheckContactRequest(contact_id=contact_id).to_transaction()
        )
        return CpsResponse[ContactAvailability](
            data=ContactAvailability.from_envelope(contact_id, envelope), meta=envelope
        )
