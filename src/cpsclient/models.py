# cpsclient/models.py
"""
Pydantic models for CPS API requests.

The core types describe one round trip: who is asking (AuthCredential), what
is being asked (TransactionDescriptor) and how it is wrapped (RequestEnvelope).

Operation-specific request models sit on top of them. Each one validates the
caller's input and knows how to turn itself into a TransactionDescriptor, so
resources never assemble transaction dictionaries by hand.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

# Valid languages for API messages
Language = Literal['de', 'en', 'fr']

# Placeholder object id that asks the server to allocate an identifier
AUTO_OBJECT_ID: str = '%%AUTO%%'

# The domain modify/list schemas expect exactly this many <dns> entries
NAMESERVER_SLOTS: int = 5

ActiveState = Literal['active', 'disabled']
FilterState = Literal['*', 'active', 'disabled']


# =============================================================================
# Core Envelope Types
# =============================================================================


class AuthCredential(BaseModel):
    """
    Credential triple attached to every request.

    Rendered as <auth><cid/><user/><pwd/></auth>.
    """

    model_config = ConfigDict(frozen=True)

    customer_id: str = Field(..., min_length=1)
    user: str = Field(..., min_length=1)
    password: SecretStr


class TransactionDescriptor(BaseModel):
    """
    The logical operation being requested, independent of its XML encoding.

    ``values`` takes one of two shapes:

    - a mapping of field name to value, rendered as one child per key;
    - a list of single-key mappings, rendered as repeated siblings in list
      order. The upstream schema needs this whenever a tag must repeat,
      e.g. several <dns> entries on domain create/modify/list.

    Values themselves may be scalars or nested mappings/lists of the same
    two shapes.
    """

    model_config = ConfigDict(frozen=True)

    group: str = Field(..., min_length=1)
    action: str = Field(..., min_length=1)
    attribute: str = Field(..., min_length=1)
    object: str | None = None
    customer_ref: str | None = None
    values: dict[str, Any] | list[dict[str, Any]] = Field(default_factory=dict)

    @field_validator('values')
    @classmethod
    def list_items_have_one_key(
        cls, v: dict[str, Any] | list[dict[str, Any]]
    ) -> dict[str, Any] | list[dict[str, Any]]:
        """Ensure every entry of a list payload names exactly one element."""
        if isinstance(v, list):
            for index, item in enumerate(v):
                if len(item) != 1:
                    raise ValueError(
                        f'values[{index}] must contain exactly one key, got {len(item)}'
                    )
        return v


class RequestEnvelope(BaseModel):
    """Everything needed to render one <request> document."""

    model_config = ConfigDict(frozen=True)

    auth: AuthCredential
    transaction: TransactionDescriptor
    lang: Language | None = None
    version: str | None = None


# =============================================================================
# Operation Requests
# =============================================================================


class CpsOperationRequest(BaseModel, ABC):
    """
    Abstract base class for all resource operation requests.

    Subclasses set the transaction group/action/attribute as class
    attributes and implement to_transaction() to build the payload.
    """

    group: ClassVar[str] = ''
    action: ClassVar[str] = ''
    attribute: ClassVar[str] = ''

    @abstractmethod
    def to_transaction(self) -> TransactionDescriptor:
        """Convert the validated request into a TransactionDescriptor."""

    def _transaction(
        self,
        values: Mapping[str, Any] | list[dict[str, Any]] | None = None,
        object_id: str | None = None,
        customer_ref: str | None = None,
    ) -> TransactionDescriptor:
        return TransactionDescriptor(
            group=self.group,
            action=self.action,
            attribute=self.attribute,
            object=object_id,
            customer_ref=customer_ref,
            values=dict(values) if isinstance(values, Mapping) else (values or {}),
        )


class Nameserver(BaseModel):
    """A nameserver entry (<dns>) of a domain."""

    model_config = ConfigDict(populate_by_name=True)

    hostname: str = ''
    hostip: str | None = None


# --- Contacts ---


class CreateContactRequest(CpsOperationRequest):
    """
    Request model for contact/create/contact.

    If contact_id is omitted the server allocates one and reports it back
    in <auto_values>.
    """

    group: ClassVar[str] = 'contact'
    action: ClassVar[str] = 'create'
    attribute: ClassVar[str] = 'contact'

    contact_id: str | None = None
    firstname: str = Field(..., min_length=1)
    lastname: str = Field(..., min_length=1)
    orgname: str | None = None
    street: str
    postal: str
    city: str
    state: str
    iso_country: str = Field(..., min_length=2, max_length=2)
    phone: str
    fax: str | None = None
    email: str = Field(..., min_length=3)
    contact_type: Literal['person', 'organisation'] = 'person'
    disclosure: ActiveState | None = None

    def to_transaction(self) -> TransactionDescriptor:
        values: dict[str, Any] = self.model_dump(exclude={'contact_id'}, exclude_none=True)
        return self._transaction(values, object_id=self.contact_id or AUTO_OBJECT_ID)


class ListContactsRequest(CpsOperationRequest):
    """Request model for contact/list/contact. Every filter defaults to '*'."""

    group: ClassVar[str] = 'contact'
    action: ClassVar[str] = 'list'
    attribute: ClassVar[str] = 'contact'

    user: str = '*'
    firstname: str = '*'
    lastname: str = '*'
    orgname: str = '*'
    city: str = '*'
    email: str = '*'
    contact_type: Literal['*', 'person', 'organisation'] = '*'
    workgroup: Literal['include', 'exclude'] = 'exclude'
    disclosure: FilterState = '*'

    def to_transaction(self) -> TransactionDescriptor:
        return self._transaction(self.model_dump())


class ContactObjectRequest(CpsOperationRequest):
    """Base for contact operations that only name the contact."""

    group: ClassVar[str] = 'contact'
    attribute: ClassVar[str] = 'contact'

    contact_id: str = Field(..., min_length=1)

    def to_transaction(self) -> TransactionDescriptor:
        return self._transaction(object_id=self.contact_id)


class InfoContactRequest(ContactObjectRequest):
    action: ClassVar[str] = 'info'


class DeleteContactRequest(ContactObjectRequest):
    action: ClassVar[str] = 'delete'


class CheckContactRequest(ContactObjectRequest):
    """Availability check for a contact handle (contact/info/check)."""

    action: ClassVar[str] = 'info'
    attribute: ClassVar[str] = 'check'


# --- Domains ---


def _dns_entry(nameserver: Nameserver, include_empty_ip: bool) -> dict[str, Any]:
    entry: dict[str, Any] = {'hostname': nameserver.hostname}
    if nameserver.hostip or include_empty_ip:
        entry['hostip'] = nameserver.hostip or ''
    return {'dns': entry}


class InfoTldRequest(CpsOperationRequest):
    """Request model for domain/info/tld."""

    group: ClassVar[str] = 'domain'
    action: ClassVar[str] = 'info'
    attribute: ClassVar[str] = 'tld'

    tld: str = Field(..., min_length=1)

    def to_transaction(self) -> TransactionDescriptor:
        return self._transaction(object_id=self.tld)


class CreateDomainRequest(CpsOperationRequest):
    """
    Request model for domain/create/domain.

    The payload is an ordered list: the four contact handles followed by one
    <dns> entry (hostname + hostip) per nameserver.
    """

    group: ClassVar[str] = 'domain'
    action: ClassVar[str] = 'create'
    attribute: ClassVar[str] = 'domain'

    domain: str = Field(..., min_length=1)
    ownerc: str = Field(..., min_length=1)
    adminc: str = Field(..., min_length=1)
    techc: str = Field(..., min_length=1)
    billc: str = Field(..., min_length=1)
    nameservers: list[Nameserver] = Field(default_factory=list)
    customer_ref: str | None = None

    def to_transaction(self) -> TransactionDescriptor:
        values: list[dict[str, Any]] = [
            {'ownerc': self.ownerc},
            {'adminc': self.adminc},
            {'techc': self.techc},
            {'billc': self.billc},
        ]
        values.extend(_dns_entry(ns, include_empty_ip=True) for ns in self.nameservers)
        return self._transaction(values, object_id=self.domain, customer_ref=self.customer_ref)


class DomainObjectRequest(CpsOperationRequest):
    """Base for domain operations that only name the domain."""

    group: ClassVar[str] = 'domain'
    attribute: ClassVar[str] = 'domain'

    domain: str = Field(..., min_length=1)

    def to_transaction(self) -> TransactionDescriptor:
        return self._transaction(object_id=self.domain)


class InfoDomainRequest(DomainObjectRequest):
    action: ClassVar[str] = 'info'


class DeleteDomainRequest(DomainObjectRequest):
    action: ClassVar[str] = 'delete'


class ListDomainsRequest(CpsOperationRequest):
    """
    Request model for domain/list/domain.

    Filters default to '*' (expiry bounds to empty). The schema takes five
    literal <dns><hostname/></dns> filters; unused slots are sent as '*'.
    Nameserver filters may be given as hostnames or Nameserver entries.
    """

    group: ClassVar[str] = 'domain'
    action: ClassVar[str] = 'list'
    attribute: ClassVar[str] = 'domain'

    domain: str = '*'
    native_domain: str = '*'
    user: str = '*'
    contact_id: str = '*'
    status: str = '*'
    registry_sync: Literal['*', 'true', 'false'] = '*'
    auto_renew: FilterState = '*'
    transfer_lock: FilterState = '*'
    delegation: FilterState = '*'
    whois_proxy: FilterState = '*'
    expire_begin: str = ''
    expire_end: str = ''
    dataquality: str = '*'
    nameservers: list[str | Nameserver] = Field(
        default_factory=list, max_length=NAMESERVER_SLOTS
    )

    def to_transaction(self) -> TransactionDescriptor:
        values: list[dict[str, Any]] = [
            {key: value} for key, value in self.model_dump(exclude={'nameservers'}).items()
        ]
        hostnames: list[str] = [
            (ns.hostname or '*') if isinstance(ns, Nameserver) else ns
            for ns in self.nameservers
        ]
        hostnames.extend('*' for _ in range(NAMESERVER_SLOTS - len(hostnames)))
        values.extend({'dns': {'hostname': hostname}} for hostname in hostnames)
        return self._transaction(values)


class UpdateDomainRequest(CpsOperationRequest):
    """
    Request model for domain/modify/domain.

    Unset contacts/nameservers are filled from the current domain data by
    DomainsResource.update() before the transaction is built.
    """

    group: ClassVar[str] = 'domain'
    action: ClassVar[str] = 'modify'
    attribute: ClassVar[str] = 'domain'

    domain: str = Field(..., min_length=1)
    ownerc: str | None = None
    adminc: str | None = None
    techc: str | None = None
    billc: str | None = None
    nameservers: list[Nameserver] | None = None
    customer_ref: str | None = None

    @field_validator('nameservers')
    @classmethod
    def at_most_five_nameservers(
        cls, v: list[Nameserver] | None
    ) -> list[Nameserver] | None:
        if v is not None and len(v) > NAMESERVER_SLOTS:
            raise ValueError(
                f'At most {NAMESERVER_SLOTS} nameservers are supported, got {len(v)}'
            )
        return v

    def to_transaction(self) -> TransactionDescriptor:
        values: list[dict[str, Any]] = [
            {'ownerc': self.ownerc or ''},
            {'adminc': self.adminc or ''},
            {'techc': self.techc or ''},
            {'billc': self.billc or ''},
        ]
        nameservers: list[Nameserver] = list(self.nameservers or [])[:NAMESERVER_SLOTS]
        nameservers.extend(Nameserver() for _ in range(NAMESERVER_SLOTS - len(nameservers)))
        values.extend(_dns_entry(ns, include_empty_ip=False) for ns in nameservers)
        return self._transaction(values, object_id=self.domain, customer_ref=self.customer_ref)


class AutoRenewDomainRequest(CpsOperationRequest):
    """Request model for domain/modify/auto_renew."""

    group: ClassVar[str] = 'domain'
    action: ClassVar[str] = 'modify'
    attribute: ClassVar[str] = 'auto_renew'

    domain: str = Field(..., min_length=1)
    status: ActiveState
    customer_ref: str | None = None

    def to_transaction(self) -> TransactionDescriptor:
        return self._transaction(
            {'status': self.status}, object_id=self.domain, customer_ref=self.customer_ref
        )
