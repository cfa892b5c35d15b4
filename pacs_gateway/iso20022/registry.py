"""
Message-type registry and auto-detection.

Message classes register themselves with :func:`register_message`; the
gateway's generic ``/parse`` endpoint dispatches through
:func:`parse_message`.
"""

import logging
from typing import Optional

from ..errors import InvalidXmlError, UnsupportedMessageError
from . import xmltree as x
from .constants import MESSAGE_NAME_PATTERN, ROOT_ELEMENTS

logger = logging.getLogger(__name__)

_MESSAGES: dict[str, type] = {}


def register_message(cls):
    """Class decorator registering ``cls`` under ``cls.MESSAGE_TYPE``."""
    _MESSAGES[cls.MESSAGE_TYPE] = cls
    return cls


def get_message_class(message_type: str):
    try:
        return _MESSAGES[message_type]
    except KeyError:
        raise UnsupportedMessageError(
            f"Unsupported message type: {message_type}. "
            f"Supported: {', '.join(supported_messages())}"
        ) from None


def supported_messages() -> list[str]:
    return sorted(_MESSAGES)


def detect_message_type(xml_content: str | bytes) -> Optional[str]:
    """
    Detect the ISO 20022 message type (e.g. ``pacs.008``) of a document.

    Examines the namespace first, then the element under ``Document``.
    Returns ``None`` when the document is not recognisable or not XML.
    """
    try:
        root = x.parse_xml(xml_content)
    except InvalidXmlError:
        return None

    namespace = x.namespace_of(root)
    if namespace:
        match = MESSAGE_NAME_PATTERN.search(namespace)
        if match:
            return match.group(1)

    if x.local_name(root) == "Document":
        for element in root:
            if isinstance(element.tag, str) and x.local_name(element) in ROOT_ELEMENTS:
                return ROOT_ELEMENTS[x.local_name(element)]
    return None


def parse_message(xml_content: str | bytes, strict: Optional[bool] = None):
    """Detect the message type and parse with the registered class."""
    message_type = detect_message_type(xml_content)
    if message_type is None:
        # Distinguish malformed XML from unknown documents
        x.parse_xml(xml_content)
        raise UnsupportedMessageError("Could not detect ISO 20022 message type")
    logger.debug("Detected message type %s", message_type)
    return get_message_class(message_type).from_xml(xml_content, strict=strict)
