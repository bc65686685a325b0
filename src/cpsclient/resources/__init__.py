"""Resource groups of the CPS API, bound to a CpsClient."""

from cpsclient.resources.contacts import ContactsResource
from cpsclient.resources.domains import DomainsResource

__all__: list[str] = [
    'ContactsResource',
    'DomainsResource',
]
