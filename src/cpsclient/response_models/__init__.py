"""
Response models for CPS API operations.

envelope.py holds the generic response envelope shared by every
transaction; the other modules project its <detail> tree into
resource-specific models.
"""

from cpsclient.response_models.contacts import (
    ContactAvailability,
    ContactDetails,
    ContactListItem,
    CreatedContact,
    DeletedContact,
)
from cpsclient.response_models.domains import (
    AuthInfo,
    AutoRenewResult,
    DomainInfo,
    DomainListItem,
    DomainOptions,
    DomainResult,
    LifeCycle,
    TransactionLock,
)
from cpsclient.response_models.envelope import (
    SUCCESS_CODE,
    CpsResponse,
    ResponseEnvelope,
    parse_response,
)
from cpsclient.response_models.tld import (
    FaqTopic,
    TldAccessRights,
    TldConfig,
    TldFaq,
    TldInfo,
    TldPolicy,
    TldSpecifications,
    TldWorkflow,
    WorkflowItem,
)

__all__: list[str] = [
    # envelope.py
    'SUCCESS_CODE',
    'CpsResponse',
    'ResponseEnvelope',
    'parse_response',
    # contacts.py
    'ContactAvailability',
    'ContactDetails',
    'ContactListItem',
    'CreatedContact',
    'DeletedContact',
    # domains.py
    'AuthInfo',
    'AutoRenewResult',
    'DomainInfo',
    'DomainListItem',
    'DomainOptions',
    'DomainResult',
    'LifeCycle',
    'TransactionLock',
    # tld.py
    'FaqTopic',
    'TldAccessRights',
    'TldConfig',
    'TldFaq',
    'TldInfo',
    'TldPolicy',
    'TldSpecifications',
    'TldWorkflow',
    'WorkflowItem',
]
