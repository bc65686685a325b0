# cpsclient/utils/model_tools.py
"""
Tools for converting XmlNode trees into Pydantic-ready dictionaries.

Resource response models declare their fields with the upstream XML tag as
alias. parse_node_to_dict() introspects such a model and pulls each field out
of an XmlNode, recursing into nested models and collecting repeated tags into
lists. Type conversion ('true' -> True, '3' -> 3) is left to Pydantic.
"""

import logging
import types
from typing import Any, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel, ValidationError

from .xml_parser import XmlNode

logger: logging.Logger = logging.getLogger(__name__)

ModelT = TypeVar('ModelT', bound=BaseModel)


# --- Type Introspection Helpers ---


def _unwrap_optional(field_type: Any) -> Any:
    """
    Unwrap Optional[X] or X | None to get the actual type X.

    Example:
        >>> _unwrap_optional(str | None)
        str
    """
    origin: Any = get_origin(field_type)
    args: tuple[Any, ...] = get_args(field_type)

    if origin is Union or origin is types.UnionType:
        non_none_types: list[type] = [arg for arg in args if arg is not type(None)]
        if non_none_types:
            return non_none_types[0]

    return field_type


def _is_list_type(field_type: Any) -> bool:
    return get_origin(field_type) is list


def _get_list_item_type(field_type: Any) -> Any | None:
    """Extract X from list[X], unwrapping Optional on the item type."""
    if not _is_list_type(field_type):
        return None
    args: tuple[Any, ...] = get_args(field_type)
    if not args:
        return None
    return _unwrap_optional(args[0])


def _is_pydantic_model(field_type: Any) -> bool:
    return isinstance(field_type, type) and issubclass(field_type, BaseModel)


# --- Main Parser ---


def parse_node_to_dict(node: XmlNode, model_class: type[BaseModel]) -> dict[str, Any]:
    """
    Extract the fields of a Pydantic model from an XmlNode.

    For each model field the XML tag is the field alias (or the field name).
    Dispatch depends on the annotation:
    - list[Model]: every child with the tag, each parsed recursively
    - list[primitive]: the text of every child with the tag
    - Model: the first child with the tag, parsed recursively
    - primitive: the text of the child leaf

    Missing or empty tags are left out of the result so that model
    defaults apply.

    Args:
        node: The XML node holding this model's data.
        model_class: The Pydantic model to inspect.

    Returns:
        A dictionary keyed by field name, ready for model_validate().
    """
    data: dict[str, Any] = {}

    for field_name, field_info in model_class.model_fields.items():
        xml_tag: str = field_info.alias or field_name
        actual_type: Any = _unwrap_optional(field_info.annotation)

        if _is_list_type(actual_type):
            item_type: Any | None = _get_list_item_type(actual_type)
            matches: list[XmlNode] = node.get_all(xml_tag)

            if item_type and _is_pydantic_model(item_type):
                data[field_name] = [
                    parse_node_to_dict(match, item_type) for match in matches
                ]
            else:
                data[field_name] = [match.text for match in matches if match.is_leaf]

        elif _is_pydantic_model(actual_type):
            nested: XmlNode | None = node.get(xml_tag)
            if nested is not None:
                data[field_name] = parse_node_to_dict(nested, actual_type)

        else:
            text: str | None = node.text_of(xml_tag)
            if text is not None:
                data[field_name] = text

    return data


def model_from_node(node: XmlNode, model_class: type[ModelT]) -> ModelT:
    """
    Parse an XmlNode into a validated model instance.

    Raises:
        ValueError: If the extracted data fails Pydantic validation.
    """
    data: dict[str, Any] = parse_node_to_dict(node, model_class)

    try:
        return model_class.model_validate(data)
    except ValidationError as e:
        logger.error(
            'Failed to validate %s from <%s>: %s\nData: %r',
            model_class.__name__,
            node.tag,
            e,
            data,
        )
        raise ValueError(f'Pydantic validation failed for {model_class.__name__}: {e}') from e
