# cpsclient/utils/xml_parser.py
"""
XML parsing utilities for CPS API responses.

Raw response text is parsed with lxml and converted into an immutable XmlNode
tree. Callers traverse the tree through safe accessors that return None (or an
empty list) for missing nodes instead of raising, so that optional parts of a
response never need try/except around every lookup.
"""

import logging
from typing import Optional

from lxml import etree
from pydantic import BaseModel, ConfigDict

logger: logging.Logger = logging.getLogger(__name__)

# Entity expansion and network lookups are never needed for API replies
_PARSER: etree.XMLParser = etree.XMLParser(
    resolve_entities=False,
    no_network=True,
    remove_comments=True,
    remove_pis=True,
)


class XmlNode(BaseModel):
    """
    A single element of a parsed XML document.

    A node is either a text leaf (no children, text holds the stripped
    content) or a container (one or more children, text is ignored).
    Repeated child tags are kept in document order, so a tag that appears
    once and a tag that appears many times are read the same way via
    get_all().

    Attributes:
        tag: The element name (namespace-free).
        text: Stripped text content. Empty string when the element is empty.
        children: Child elements in document order.
    """

    model_config = ConfigDict(frozen=True)

    tag: str
    text: str = ''
    children: tuple['XmlNode', ...] = ()

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def get(self, tag: str) -> Optional['XmlNode']:
        """Return the first child with the given tag, or None."""
        for child in self.children:
            if child.tag == tag:
                return child
        return None

    def get_all(self, tag: str) -> list['XmlNode']:
        """Return every child with the given tag (possibly an empty list)."""
        return [child for child in self.children if child.tag == tag]

    def find(self, *path: str) -> Optional['XmlNode']:
        """
        Walk down a path of tags, returning None as soon as a step is missing.

        Example:
            >>> envelope.raw.find('result', 'detail', 'values')
        """
        node: XmlNode | None = self
        for tag in path:
            if node is None:
                return None
            node = node.get(tag)
        return node

    def text_of(self, tag: str) -> str | None:
        """
        Return the text of a direct child leaf.

        Returns:
            The stripped text, or None when the child is missing, is a
            container, or is empty.
        """
        child: XmlNode | None = self.get(tag)
        if child is None or not child.is_leaf or not child.text:
            return None
        return child.text

    def to_flat_dict(self) -> dict[str, str]:
        """Map each leaf child tag to its text (later duplicates win)."""
        return {child.tag: child.text for child in self.children if child.is_leaf}

    def to_element(self) -> etree._Element:
        element: etree._Element = etree.Element(self.tag)
        if self.children:
            element.extend(child.to_element() for child in self.children)
        elif self.text:
            element.text = self.text
        return element

    def to_xml(self) -> str:
        """Serialize the node (and its subtree) back to XML text."""
        return etree.tostring(self.to_element(), encoding='unicode')


def _local_name(tag: str) -> str:
    """Strip a '{namespace}' prefix from an lxml tag."""
    return tag.rsplit('}', 1)[-1]


def element_to_node(element: etree._Element) -> XmlNode:
    """
    Convert an lxml element (and its subtree) into an XmlNode.

    Args:
        element: The element to convert.

    Returns:
        The equivalent immutable XmlNode tree.
    """
    children: tuple[XmlNode, ...] = tuple(
        element_to_node(child)
        for child in element
        if isinstance(child.tag, str)  # skip comments / PIs if any survived
    )
    text: str = '' if children else (element.text or '').strip()
    return XmlNode(tag=_local_name(element.tag), text=text, children=children)


def parse_xml(xml_string: str) -> XmlNode:
    """
    Parse an XML response string into an XmlNode tree.

    Args:
        xml_string: The raw XML text returned by the API.

    Returns:
        The root node of the parsed document.

    Raises:
        etree.XMLSyntaxError: If the XML is malformed or empty.
    """
    # Encode first: lxml refuses str input that carries an encoding declaration
    root: etree._Element = etree.fromstring(xml_string.encode('utf-8'), parser=_PARSER)
    return element_to_node(root)
