"""Tests for request envelope construction."""

import pytest
from lxml import etree

from cpsclient.models import AuthCredential, RequestEnvelope, TransactionDescriptor
from cpsclient.utils.xml_builder import build_request_xml, normalize_values


def _parse(xml: str) -> etree._Element:
    return etree.fromstring(xml.encode('utf-8'))


class TestBuildRequestXml:
    """Tests for build_request_xml function."""

    def test_declaration_and_root(
        self, auth: AuthCredential, contact_transaction: TransactionDescriptor
    ) -> None:
        """Test that output starts with the declaration and has a <request> root."""
        xml: str = build_request_xml(
            RequestEnvelope(auth=auth, transaction=contact_transaction)
        )

        assert xml.startswith('<?xml version="1.0" encoding="utf-8" ?>\n<request>')
        assert _parse(xml).tag == 'request'

    def test_auto_contact_scenario(
        self, auth: AuthCredential, contact_transaction: TransactionDescriptor
    ) -> None:
        """Test the %%AUTO%% contact create document."""
        xml: str = build_request_xml(
            RequestEnvelope(auth=auth, transaction=contact_transaction)
        )

        assert '<object>%%AUTO%%</object>' in xml
        assert '<firstname>Jane</firstname>' in xml
        assert '<lastname>Doe</lastname>' in xml

        transaction = _parse(xml).find('transaction')
        assert transaction is not None
        assert transaction.findtext('values/firstname') == 'Jane'
        assert transaction.findtext('values/lastname') == 'Doe'

    def test_child_order(self, auth: AuthCredential) -> None:
        """Test auth, transaction, lang, version order and transaction children order."""
        transaction = TransactionDescriptor(
            group='domain',
            action='create',
            attribute='domain',
            object='example.de',
            customer_ref='REF-1',
            values={'ownerc': 'C1'},
        )
        root = _parse(
            build_request_xml(
                RequestEnvelope(auth=auth, transaction=transaction, lang='de', version='1.8.12')
            )
        )

        assert [child.tag for child in root] == ['auth', 'transaction', 'lang', 'version']
        assert [child.tag for child in root.find('transaction')] == [
            'group',
            'action',
            'attribute',
            'object',
            'customer_ref',
            'values',
        ]
        assert root.findtext('lang') == 'de'
        assert root.findtext('version') == '1.8.12'

    def test_auth_block(
        self, auth: AuthCredential, contact_transaction: TransactionDescriptor
    ) -> None:
        root = _parse(
            build_request_xml(RequestEnvelope(auth=auth, transaction=contact_transaction))
        )

        assert root.findtext('auth/cid') == 'test_cid'
        assert root.findtext('auth/user') == 'test_user'
        assert root.findtext('auth/pwd') == 'test_password'

    def test_optional_elements_omitted(self, auth: AuthCredential) -> None:
        """Test that object, customer_ref, lang and version are left out when unset."""
        transaction = TransactionDescriptor(
            group='contact', action='list', attribute='contact', values={'user': '*'}
        )
        root = _parse(build_request_xml(RequestEnvelope(auth=auth, transaction=transaction)))

        assert root.find('lang') is None
        assert root.find('version') is None
        assert root.find('transaction/object') is None
        assert root.find('transaction/customer_ref') is None

    def test_flat_mapping_round_trip(self, auth: AuthCredential) -> None:
        """Test that a flat payload can be read back, with scalars as strings."""
        values = {'street': 'Main St 1', 'postal': 12345, 'active': True, 'fax': None}
        transaction = TransactionDescriptor(
            group='contact', action='create', attribute='contact', object='JD1', values=values
        )
        root = _parse(build_request_xml(RequestEnvelope(auth=auth, transaction=transaction)))
        tx = root.find('transaction')

        assert tx.findtext('group') == 'contact'
        assert tx.findtext('action') == 'create'
        assert tx.findtext('attribute') == 'contact'
        assert tx.findtext('object') == 'JD1'
        assert {child.tag: (child.text or '') for child in tx.find('values')} == {
            'street': 'Main St 1',
            'postal': '12345',
            'active': 'true',
            'fax': '',
        }

    def test_sequence_payload_preserves_order(self, auth: AuthCredential) -> None:
        """Test that repeated <dns> siblings keep input count and order."""
        hostnames = ['ns3.example.net', 'ns1.example.net', 'ns2.example.net']
        values = [{'ownerc': 'C1'}] + [
            {'dns': {'hostname': hostname, 'hostip': ''}} for hostname in hostnames
        ]
        transaction = TransactionDescriptor(
            group='domain', action='create', attribute='domain', object='x.de', values=values
        )
        root = _parse(build_request_xml(RequestEnvelope(auth=auth, transaction=transaction)))

        dns_elements = root.findall('transaction/values/dns')
        assert len(dns_elements) == len(hostnames)
        assert [dns.findtext('hostname') for dns in dns_elements] == hostnames
        assert [child.tag for child in root.find('transaction/values')] == [
            'ownerc',
            'dns',
            'dns',
            'dns',
        ]

    def test_special_characters_are_escaped(self, auth: AuthCredential) -> None:
        transaction = TransactionDescriptor(
            group='contact',
            action='create',
            attribute='contact',
            values={'orgname': 'Smith & Sons <GmbH>'},
        )
        xml: str = build_request_xml(RequestEnvelope(auth=auth, transaction=transaction))

        assert 'Smith &amp; Sons &lt;GmbH&gt;' in xml
        assert _parse(xml).findtext('transaction/values/orgname') == 'Smith & Sons <GmbH>'

    def test_password_is_escaped(self, contact_transaction: TransactionDescriptor) -> None:
        auth = AuthCredential(customer_id='1', user='u', password='p<&>w')
        root = _parse(
            build_request_xml(RequestEnvelope(auth=auth, transaction=contact_transaction))
        )
        assert root.findtext('auth/pwd') == 'p<&>w'

    def test_empty_values(self, auth: AuthCredential) -> None:
        transaction = TransactionDescriptor(
            group='contact', action='info', attribute='contact', object='JD1'
        )
        xml: str = build_request_xml(RequestEnvelope(auth=auth, transaction=transaction))

        assert '<values></values>' in xml
        assert len(_parse(xml).find('transaction/values')) == 0

    def test_deterministic(
        self, auth: AuthCredential, contact_transaction: TransactionDescriptor
    ) -> None:
        envelope = RequestEnvelope(auth=auth, transaction=contact_transaction, lang='en')
        assert build_request_xml(envelope) == build_request_xml(envelope)

    def test_invalid_tag_raises_error(self, auth: AuthCredential) -> None:
        transaction = TransactionDescriptor(
            group='contact', action='create', attribute='contact', values={'bad tag': 'x'}
        )
        with pytest.raises(ValueError, match='Invalid XML element name'):
            build_request_xml(RequestEnvelope(auth=auth, transaction=transaction))

    @pytest.mark.parametrize('value', ['a\x01b', 'nul\x00', 'esc\x1b[0m', 'bad\U0000fffe'])
    def test_control_characters_raise_error(self, auth: AuthCredential, value: str) -> None:
        """Test that text XML 1.0 cannot hold is rejected before rendering."""
        transaction = TransactionDescriptor(
            group='contact', action='create', attribute='contact', values={'firstname': value}
        )
        with pytest.raises(ValueError, match='not allowed in XML text'):
            build_request_xml(RequestEnvelope(auth=auth, transaction=transaction))

    def test_control_character_in_object_raises_error(self, auth: AuthCredential) -> None:
        transaction = TransactionDescriptor(
            group='contact', action='info', attribute='contact', object='JD\x071'
        )
        with pytest.raises(ValueError, match='not allowed in XML text'):
            build_request_xml(RequestEnvelope(auth=auth, transaction=transaction))

    def test_control_character_in_password_is_not_echoed(
        self, contact_transaction: TransactionDescriptor
    ) -> None:
        auth = AuthCredential(customer_id='1', user='u', password='se\x02cret')

        with pytest.raises(ValueError) as exc_info:
            build_request_xml(RequestEnvelope(auth=auth, transaction=contact_transaction))

        assert 'cret' not in str(exc_info.value)

    def test_whitespace_and_non_ascii_are_kept(self, auth: AuthCredential) -> None:
        value: str = 'line one\nline two\tJürgen'
        transaction = TransactionDescriptor(
            group='contact', action='create', attribute='contact', values={'remarks': value}
        )
        root = _parse(build_request_xml(RequestEnvelope(auth=auth, transaction=transaction)))

        assert root.findtext('transaction/values/remarks') == value


class TestNormalizeValues:
    """Tests for normalize_values function."""

    def test_nested_mapping(self) -> None:
        assert normalize_values({'dns': {'hostname': 'ns1', 'hostip': '1.2.3.4'}}) == (
            ('dns', (('hostname', 'ns1'), ('hostip', '1.2.3.4'))),
        )

    def test_sequence(self) -> None:
        assert normalize_values([{'a': '1'}, {'a': '2'}]) == (('a', '1'), ('a', '2'))

    def test_multi_key_sequence_item_raises_error(self) -> None:
        with pytest.raises(ValueError, match='exactly one key'):
            normalize_values([{'a': '1', 'b': '2'}])
