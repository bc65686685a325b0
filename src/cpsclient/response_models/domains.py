# cpsclient/response_models/domains.py
"""
Pydantic models for domain operation responses.

Domain records repeat several tags (<dns>, <life_cycle>); the list-typed
fields below always come back as lists, whether the server sent one entry,
many, or none.
"""

from pydantic import BaseModel, ConfigDict, Field

from cpsclient.models import Nameserver
from cpsclient.utils.xml_parser import XmlNode

from .envelope import ResponseEnvelope


class DomainOptions(BaseModel):
    auto_renew: str = 'disabled'
    delegation: str = 'disabled'
    transfer_lock: str = 'disabled'
    whois_proxy: str = 'disabled'


class AuthInfo(BaseModel):
    pw: str = ''
    validity: str = ''


class LifeCycle(BaseModel):
    keydate: str = ''
    period: str = ''


class TransactionLock(BaseModel):
    reason: str = ''
    status: str = ''


class DomainListItem(BaseModel):
    """One entry of a domain listing."""

    model_config = ConfigDict(populate_by_name=True)

    domain: str = ''
    native_domain: str = ''
    status: str = ''
    registry_sync: bool = False
    dataquality: str = ''
    created: str = ''
    modified: str = ''
    expire: str = ''
    keydate: str = ''
    ownerc: str = ''
    adminc: str = ''
    techc: str = ''
    billc: str = ''
    nameservers: list[Nameserver] = Field(default_factory=list, alias='dns')
    options: DomainOptions = Field(default_factory=DomainOptions)
    user: str = ''
    transaction_lock: TransactionLock = Field(default_factory=TransactionLock)

    @classmethod
    def list_from_envelope(cls, envelope: ResponseEnvelope) -> list['DomainListItem']:
        detail: XmlNode | None = envelope.detail_node
        if detail is None:
            return []
        return [envelope.project(values, cls) for values in detail.get_all('values')]


class DomainInfo(BaseModel):
    """Full domain record returned by domain/info/domain."""

    model_config = ConfigDict(populate_by_name=True)

    adminc: str = ''
    auth_info: str = ''
    authinfo: AuthInfo = Field(default_factory=AuthInfo)
    billc: str = ''
    child_host: str = ''
    chreseller_auth: str = ''
    created: str = ''
    created_by: str = ''
    dataquality: str = ''
    nameservers: list[Nameserver] = Field(default_factory=list, alias='dns')
    dnssec: str = ''
    domain: str = ''
    expire: str = ''
    external_roid: str = ''
    keydate: str = ''
    life_cycle: list[LifeCycle] = Field(default_factory=list)
    modified: str = ''
    modified_by: str = ''
    native_domain: str = ''
    options: DomainOptions = Field(default_factory=DomainOptions)
    ownerc: str = ''
    registry_sync: bool = False
    restricted: str = ''
    status: str = ''
    task: str = ''
    techc: str = ''
    tld: str = ''
    transaction_lock: TransactionLock = Field(default_factory=TransactionLock)
    user: str = ''

    @classmethod
    def from_envelope(cls, domain: str, envelope: ResponseEnvelope) -> 'DomainInfo':
        """
        Project <detail><values> onto a DomainInfo.

        Args:
            domain: The requested domain, used when the reply omits <domain>.
            envelope: The parsed info response.
        """
        values: XmlNode | None = envelope.raw.find('result', 'detail', 'values')
        info: DomainInfo = envelope.project(values, cls)
        if not info.domain:
            info = info.model_copy(update={'domain': domain})
        return info


class DomainResult(BaseModel):
    """Minimal result of create/modify/delete operations."""

    domain: str


class AutoRenewResult(BaseModel):
    domain: str
    auto_renew: str
