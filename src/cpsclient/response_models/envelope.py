# cpsclient/response_models/envelope.py
"""
Pydantic models for the generic CPS response envelope.

Every CPS reply has the same outer shape:

    <response>
        <result>
            <code>1000</code>
            <message>...</message>
            <detail>...</detail>          (text or a nested tree)
            <note>...</note>              (optional)
            <auto_values>...</auto_values> (optional)
        </result>
        <transaction>
            <active_transactions_id>...</active_transactions_id>
            <created>...</created>
            <customer_ref>...</customer_ref> (optional)
        </transaction>
    </response>

ResponseEnvelope captures that meta information and keeps the whole parsed
tree for resource-specific mapping. It knows nothing about contacts, domains
or TLDs.
"""

import logging
from typing import Generic, TypeVar

from lxml import etree
from pydantic import BaseModel, ConfigDict

from cpsclient.errors import MalformedResponseError, UpstreamError
from cpsclient.utils.model_tools import ModelT, model_from_node
from cpsclient.utils.xml_parser import XmlNode, parse_xml

logger: logging.Logger = logging.getLogger(__name__)

# The only result code that signals success
SUCCESS_CODE: str = '1000'

DataT = TypeVar('DataT')


class ResponseEnvelope(BaseModel):
    """
    Meta information of a parsed CPS response.

    Attributes:
        result_code: Upstream status code; '1000' is success.
        result_message: Human-readable result message.
        result_detail: Scalar detail text, or the <detail> subtree when the
                       response carries structured data (listings, info).
        result_note: Optional additional note.
        transaction_id: The server's active_transactions_id.
        created_at: Server timestamp of the transaction.
        customer_ref: Echo of the caller's customer reference, if any.
        auto_values: Server-allocated identifiers, present only when the
                     request asked the server to allocate one.
        raw: The complete parsed <response> tree.
    """

    model_config = ConfigDict(frozen=True)

    result_code: str
    result_message: str = ''
    result_detail: str | XmlNode = ''
    result_note: str | None = None
    transaction_id: str = ''
    created_at: str = ''
    customer_ref: str | None = None
    auto_values: dict[str, str] | None = None
    raw: XmlNode

    @property
    def is_success(self) -> bool:
        return self.result_code == SUCCESS_CODE

    @property
    def detail_node(self) -> XmlNode | None:
        """The <detail> subtree, or None when the detail is plain text."""
        return self.result_detail if isinstance(self.result_detail, XmlNode) else None

    def raise_for_result(self) -> None:
        """
        Raise UpstreamError unless the result code is the success sentinel.

        Raises:
            UpstreamError: Carrying code, message, detail and this envelope.
        """
        if self.is_success:
            return

        logger.error(
            'CPS API rejected transaction %r: [%s] %s',
            self.transaction_id,
            self.result_code,
            self.result_message,
        )
        raise UpstreamError(
            code=self.result_code,
            message=self.result_message,
            detail=self.result_detail,
            envelope=self,
        )

    def project(self, node: XmlNode | None, model_class: type[ModelT]) -> ModelT:
        """
        Read a typed model out of a node of this response.

        A missing node yields the model's defaults.

        Args:
            node: Usually a <detail><values> block of this envelope.
            model_class: The resource model to build.

        Returns:
            The validated model instance.

        Raises:
            MalformedResponseError: If the node holds values the model cannot
                                    accept (e.g. a non-numeric period).
        """
        source: XmlNode = node if node is not None else XmlNode(tag='values')
        try:
            return model_from_node(source, model_class)
        except ValueError as e:
            logger.error(
                'Cannot read %s from transaction %r: %s',
                model_class.__name__,
                self.transaction_id,
                e,
            )
            raise MalformedResponseError(
                f'Response data does not fit {model_class.__name__}: {e}',
                raw=source.to_xml(),
                envelope=self,
            ) from e

    @classmethod
    def from_xml(cls, xml_string: str) -> 'ResponseEnvelope':
        """
        Parse a raw CPS XML reply into a ResponseEnvelope.

        Parsing does not judge the result code; call raise_for_result() for
        that.

        Args:
            xml_string: The raw XML response body.

        Returns:
            The parsed envelope.

        Raises:
            MalformedResponseError: If the XML cannot be parsed or lacks the
                                    mandatory response/result/transaction
                                    nodes or the result code.
        """
        logger.debug('Parsing CPS response envelope')

        if not xml_string or not xml_string.strip():
            logger.error('Received an empty response body')
            raise MalformedResponseError('Empty response body', raw=xml_string or '')

        try:
            root: XmlNode = parse_xml(xml_string)
        except etree.XMLSyntaxError as e:
            logger.error('Failed to parse response XML: %s', e)
            raise MalformedResponseError(f'Response is not valid XML: {e}', raw=xml_string) from e

        if root.tag != 'response':
            error_msg: str = f'Expected <response> root element, got <{root.tag}>'
            logger.error(error_msg)
            raise MalformedResponseError(error_msg, raw=xml_string)

        result: XmlNode | None = root.get('result')
        transaction: XmlNode | None = root.get('transaction')

        if result is None or transaction is None:
            error_msg = 'Response lacks the mandatory <result> or <transaction> node'
            logger.error(error_msg)
            raise MalformedResponseError(error_msg, raw=xml_string)

        code: str | None = result.text_of('code')
        if code is None:
            error_msg = 'Response lacks <result><code>'
            logger.error(error_msg)
            raise MalformedResponseError(error_msg, raw=xml_string)

        detail_node: XmlNode | None = result.get('detail')
        if detail_node is None:
            detail: str | XmlNode = ''
        elif detail_node.is_leaf:
            detail = detail_node.text
        else:
            detail = detail_node

        auto_values_node: XmlNode | None = result.get('auto_values')

        return cls(
            result_code=code,
            result_message=result.text_of('message') or '',
            result_detail=detail,
            result_note=result.text_of('note'),
            transaction_id=transaction.text_of('active_transactions_id') or '',
            created_at=transaction.text_of('created') or '',
            customer_ref=transaction.text_of('customer_ref'),
            auto_values=(
                auto_values_node.to_flat_dict() if auto_values_node is not None else None
            ),
            raw=root,
        )


def parse_response(xml_string: str) -> ResponseEnvelope:
    """Parse a raw CPS XML reply. See ResponseEnvelope.from_xml()."""
    return ResponseEnvelope.from_xml(xml_string)


class CpsResponse(BaseModel, Generic[DataT]):
    """
    Typed result of a resource operation.

    Attributes:
        data: The resource-specific projection of the response.
        meta: The generic response envelope it was built from.
    """

    data: DataT
    meta: ResponseEnvelope
