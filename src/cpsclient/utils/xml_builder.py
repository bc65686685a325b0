# cpsclient/utils/xml_builder.py
"""
Request envelope construction for the CPS API.

A RequestEnvelope is rendered through the Jinja2 template
templates/request.xml. Autoescaping is enabled, so every text value and
credential is XML-escaped here; callers pass plain strings.

Transaction payloads are first normalized into nested tuples of
(tag, text-or-children) pairs. The template then only has to distinguish a
text leaf from a container, and element order is exactly the order of the
input mapping or list.
"""

import logging
import re
from collections.abc import Mapping, Sequence
from functools import lru_cache
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, Template

from cpsclient.models import RequestEnvelope, TransactionDescriptor

logger: logging.Logger = logging.getLogger(__name__)

TEMPLATE_NAME: str = 'request.xml'
INDENT: str = '    '

# A pragmatic subset of XML element names (no namespace prefixes)
_XML_NAME: re.Pattern[str] = re.compile(r'^[A-Za-z_][A-Za-z0-9_.\-]*$')

# Complement of the XML 1.0 Char production
_XML_INVALID_CHAR: re.Pattern[str] = re.compile(
    '[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]'
)

# (tag, text) for a leaf, (tag, (child, child, ...)) for a container
XmlPair = tuple[str, Any]


@lru_cache(maxsize=1)
def _get_environment() -> Environment:
    """Create the Jinja2 environment bound to the package templates directory."""
    templates_dir: Path = Path(__file__).resolve().parent.parent / 'templates'

    if not templates_dir.exists():
        error_message: str = f'Templates directory not found at: {templates_dir}'
        logger.error(error_message)
        raise FileNotFoundError(error_message)

    logger.debug('Jinja2 environment initialized with templates from: %r', templates_dir)
    return Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=True,  # XML-escape every rendered value
        trim_blocks=True,
        lstrip_blocks=True,
    )


def _check_tag(tag: Any) -> str:
    if not isinstance(tag, str) or not _XML_NAME.match(tag):
        raise ValueError(f'Invalid XML element name: {tag!r}')
    return tag


def _check_text(text: str) -> str:
    """Reject text holding characters that XML 1.0 cannot represent."""
    invalid: re.Match[str] | None = _XML_INVALID_CHAR.search(text)
    if invalid is not None:
        raise ValueError(
            f'Character {invalid.group()!r} at position {invalid.start()} '
            'is not allowed in XML text'
        )
    return text


def _to_text(value: Any) -> str:
    """Convert a scalar payload value to element text."""
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return _check_text(str(value))


def _normalize_value(value: Any) -> str | tuple[XmlPair, ...]:
    if isinstance(value, (Mapping, list, tuple)):
        return normalize_values(value)
    return _to_text(value)


def normalize_values(values: Mapping[str, Any] | Sequence[Mapping[str, Any]]) -> tuple[XmlPair, ...]:
    """
    Flatten a transaction payload into ordered (tag, content) pairs.

    Args:
        values: Either a mapping (one element per key, insertion order) or a
                sequence of single-key mappings (one element per item, list
                order; the same tag may repeat).

    Returns:
        A tuple of (tag, content) pairs where content is the element text or
        a nested tuple of pairs.

    Raises:
        ValueError: If a tag is not a valid XML name or a sequence item does
                    not hold exactly one key.

    Example:
        >>> normalize_values([{'ownerc': 'C1'}, {'dns': {'hostname': 'ns1'}}])
        (('ownerc', 'C1'), ('dns', (('hostname', 'ns1'),)))
    """
    if isinstance(values, Mapping):
        return tuple(
            (_check_tag(tag), _normalize_value(value)) for tag, value in values.items()
        )

    pairs: list[XmlPair] = []
    for index, item in enumerate(values):
        if not isinstance(item, Mapping) or len(item) != 1:
            raise ValueError(
                f'Sequence payload item {index} must be a mapping with exactly one key'
            )
        ((tag, value),) = item.items()
        pairs.append((_check_tag(tag), _normalize_value(value)))
    return tuple(pairs)


def _transaction_nodes(transaction: TransactionDescriptor) -> tuple[XmlPair, ...]:
    """Lay out the <transaction> children in the order the API expects."""
    nodes: list[XmlPair] = [
        ('group', _check_text(transaction.group)),
        ('action', _check_text(transaction.action)),
        ('attribute', _check_text(transaction.attribute)),
    ]
    if transaction.object is not None:
        nodes.append(('object', _check_text(transaction.object)))
    if transaction.customer_ref is not None:
        nodes.append(('customer_ref', _check_text(transaction.customer_ref)))
    nodes.append(('values', normalize_values(transaction.values)))
    return tuple(nodes)


def build_request_xml(envelope: RequestEnvelope) -> str:
    """
    Render a RequestEnvelope as the XML document the CPS API expects.

    The output starts with the XML declaration followed by a single
    <request> root holding <auth>, <transaction> and, when set, <lang> and
    <version>. Rendering is deterministic for identical input.

    Args:
        envelope: The validated request to render.

    Returns:
        The request document as a string (to be sent UTF-8 encoded).

    Raises:
        ValueError: If the payload contains an invalid element name, or any
                    text holds a character XML 1.0 cannot represent.
        jinja2.TemplateNotFound: If the request template is missing.
    """
    template: Template = _get_environment().get_template(TEMPLATE_NAME)

    context: dict[str, Any] = {
        'indent': INDENT,
        'customer_id': _check_text(envelope.auth.customer_id),
        'user': _check_text(envelope.auth.user),
        'password': _check_text(envelope.auth.password.get_secret_value()),
        'transaction_nodes': _transaction_nodes(envelope.transaction),
        'lang': envelope.lang,
        'version': envelope.version,
    }

    logger.debug(
        'Rendering request for %s/%s/%s',
        envelope.transaction.group,
        envelope.transaction.action,
        envelope.transaction.attribute,
    )
    return template.render(context)
