# cpsclient/response_models/tld.py
"""
Pydantic models for the domain/info/tld response.

TLD metadata is mostly flags ('true'/'1' or 'false'/'0'), which Pydantic
converts to bool. Flags missing from the reply default to False.
"""

from pydantic import BaseModel, ConfigDict, Field

from cpsclient.utils.xml_parser import XmlNode

from .envelope import ResponseEnvelope


class TldAccessRights(BaseModel):
    application: bool = False
    auto_renew: bool = False
    chstatus: bool = False
    create: bool = False
    delegation: bool = False
    delete: bool = False
    dnssec: bool = False
    host: bool = False
    modify: bool = False
    owner_change: bool = False
    release: bool = False
    restore: bool = False
    transfer: bool = False
    transfer_lock: bool = False
    whois_proxy: bool = False


class TldConfig(BaseModel):
    dns_check: bool = False
    period_yrs: int = 0
    slds: str = ''
    transfer_auto_sync: bool = False


class FaqTopic(BaseModel):
    title: str = ''
    text: str = ''


class TldFaq(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    topics: list[FaqTopic] = Field(default_factory=list, alias='topic')


class TldPolicy(BaseModel):
    email_validation: bool = False
    expire_notification: bool = False
    owchg_notification: bool = False
    registration_data_directory_notification: bool = False
    transfer_authorization_notification: bool = False


class TldSpecifications(BaseModel):
    legal: str = ''
    tech: str = ''


class WorkflowItem(BaseModel):
    description: str = ''
    processing_time: float = 0
    pt_unit: str = ''


class TldWorkflow(BaseModel):
    auto_renew: WorkflowItem = Field(default_factory=WorkflowItem)
    chstatus: WorkflowItem = Field(default_factory=WorkflowItem)
    create: WorkflowItem = Field(default_factory=WorkflowItem)
    delegation: WorkflowItem = Field(default_factory=WorkflowItem)
    delete: WorkflowItem = Field(default_factory=WorkflowItem)
    dnssec: WorkflowItem = Field(default_factory=WorkflowItem)
    host: WorkflowItem = Field(default_factory=WorkflowItem)
    modify: WorkflowItem = Field(default_factory=WorkflowItem)
    owner_change: WorkflowItem = Field(default_factory=WorkflowItem)
    release: WorkflowItem = Field(default_factory=WorkflowItem)
    restore: WorkflowItem = Field(default_factory=WorkflowItem)
    transfer: WorkflowItem = Field(default_factory=WorkflowItem)
    transfer_lock: WorkflowItem = Field(default_factory=WorkflowItem)
    whois_proxy: WorkflowItem = Field(default_factory=WorkflowItem)


class TldInfo(BaseModel):
    """General registry data about a top level domain."""

    access_rights: TldAccessRights = Field(default_factory=TldAccessRights)
    classification: str = ''
    config: TldConfig = Field(default_factory=TldConfig)
    faq: TldFaq | None = None
    launch_date: str = ''
    modified: str = ''
    policy: TldPolicy = Field(default_factory=TldPolicy)
    policy_url: str = ''
    rdap_url: str = ''
    registry_name: str = ''
    remarks: str = ''
    specifications: TldSpecifications = Field(default_factory=TldSpecifications)
    tld: str = ''
    usage: str = ''
    website_url: str = ''
    whois_hostname: str = ''
    workflow: TldWorkflow = Field(default_factory=TldWorkflow)

    @classmethod
    def from_envelope(cls, tld: str, envelope: ResponseEnvelope) -> 'TldInfo':
        values: XmlNode | None = envelope.raw.find('result', 'detail', 'values')
        info: TldInfo = envelope.project(values, cls)
        if not info.tld:
            info = info.model_copy(update={'tld': tld})
        return info
