# cpsclient/response_models/contacts.py
"""
Pydantic models for contact operation responses.

Fields are filled from <detail><values> by the generic XmlNode mapper;
anything the server leaves out falls back to the field default.
"""

from pydantic import BaseModel, ConfigDict

from cpsclient.utils.xml_parser import XmlNode

from .envelope import ResponseEnvelope


class ContactListItem(BaseModel):
    """One entry of a contact listing."""

    model_config = ConfigDict(populate_by_name=True)

    contact_id: str = ''
    user: str = ''
    firstname: str = ''
    lastname: str = ''
    orgname: str = ''
    city: str = ''
    email: str = ''
    contact_type: str = 'person'
    disclosure: str = ''
    created: str = ''
    modified: str = ''

    @classmethod
    def list_from_envelope(cls, envelope: ResponseEnvelope) -> list['ContactListItem']:
        """
        Collect every <detail><values> block of a listing.

        A listing with one hit and a listing with many are handled alike;
        a listing without a <detail> tree yields an empty list.
        """
        detail: XmlNode | None = envelope.detail_node
        if detail is None:
            return []
        return [envelope.project(values, cls) for values in detail.get_all('values')]


class ContactDetails(BaseModel):
    """Full contact record returned by contact/info/contact."""

    model_config = ConfigDict(populate_by_name=True)

    contact_id: str = ''
    firstname: str = ''
    lastname: str = ''
    orgname: str | None = None
    street: str = ''
    postal: str = ''
    city: str = ''
    state: str = ''
    iso_country: str = ''
    phone: str = ''
    fax: str | None = None
    email: str = ''
    contact_type: str = 'person'
    disclosure: str | None = None
    created: str = ''
    created_by: str = ''
    modified: str = ''
    modified_by: str = ''
    user: str = ''

    @classmethod
    def from_envelope(cls, envelope: ResponseEnvelope) -> 'ContactDetails':
        values: XmlNode | None = envelope.raw.find('result', 'detail', 'values')
        return envelope.project(values, cls)


class CreatedContact(BaseModel):
    contact_id: str


class DeletedContact(BaseModel):
    contact_id: str


class ContactAvailability(BaseModel):
    """Result of a contact handle availability check."""

    contact_id: str
    available: bool

    @classmethod
    def from_envelope(cls, contact_id: str, envelope: ResponseEnvelope) -> 'ContactAvailability':
        values: XmlNode | None = envelope.raw.find('result', 'detail', 'values')
        avail: str | None = values.text_of('avail') if values is not None else None
        return cls(contact_id=contact_id, available=avail == 'true')
