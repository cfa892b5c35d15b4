"""
Base class for the pacs message mappers.

A message object wraps one immutable typed record (``data``) and knows how
to read it from XML, write it back to XML and round-trip it through JSON.
Subclasses provide the message constants plus ``parse`` and ``to_element``.
"""

import logging
from typing import Any, ClassVar, Optional

from lxml import etree
from pydantic import BaseModel, ValidationError

from ..config import settings
from ..errors import InvalidStructureError, InvalidXmlNamespaceError
from . import xmltree as x
from .constants import MESSAGE_NAME_PATTERN

logger = logging.getLogger(__name__)


class Iso20022Message:
    MESSAGE_TYPE: ClassVar[str]
    NAMESPACE: ClassVar[str]
    ROOT: ClassVar[str]
    SUPPORTED_NAMESPACES: ClassVar[tuple[str, ...]]
    DATA_MODEL: ClassVar[type[BaseModel]]

    def __init__(self, data: BaseModel):
        if not isinstance(data, self.DATA_MODEL):
            raise TypeError(
                f"{type(self).__name__} expects {self.DATA_MODEL.__name__}, "
                f"got {type(data).__name__}"
            )
        self.data = data

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message_id={self.data.header.message_id!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Iso20022Message):
            return NotImplemented
        return type(self) is type(other) and self.data == other.data

    # =========================================================================
    # XML -> record
    # =========================================================================

    @classmethod
    def from_xml(cls, xml_content: str | bytes, strict: Optional[bool] = None):
        """Parse an XML document into a message object."""
        document = x.parse_xml(xml_content)
        if x.local_name(document) != "Document":
            raise InvalidStructureError(
                f"Invalid {cls.MESSAGE_TYPE}: root element is "
                f"{x.local_name(document)}, expected Document",
                element="Document",
            )
        cls.check_namespace(x.namespace_of(document), strict)
        try:
            data = cls.parse(document)
        except ValidationError as e:
            raise cls._invalid_record(e) from e
        message = cls(data)
        logger.debug(
            "Parsed %s message %s", cls.MESSAGE_TYPE, message.data.header.message_id,
            extra={"message_type": cls.MESSAGE_TYPE, "message_id": message.data.header.message_id},
        )
        return message

    @classmethod
    def check_namespace(cls, namespace: Optional[str], strict: Optional[bool] = None) -> None:
        """
        Reject documents whose namespace does not belong to this message type.

        Strict mode only accepts ``SUPPORTED_NAMESPACES``. Lenient mode also
        accepts other versions of the same message and namespace-less
        documents. A namespace of a different message type always fails.
        """
        if strict is None:
            strict = settings.strict_namespaces
        if namespace in cls.SUPPORTED_NAMESPACES:
            return

        if namespace is None:
            if strict:
                raise InvalidXmlNamespaceError(
                    f"Document has no namespace; expected one of {', '.join(cls.SUPPORTED_NAMESPACES)}"
                )
            logger.debug("Accepting namespace-less %s document", cls.MESSAGE_TYPE)
            return

        match = MESSAGE_NAME_PATTERN.search(namespace)
        if match and match.group(1) != cls.MESSAGE_TYPE:
            raise InvalidXmlNamespaceError(
                f"Namespace {namespace} is not a {cls.MESSAGE_TYPE} namespace"
            )
        if strict:
            raise InvalidXmlNamespaceError(f"Unsupported {cls.MESSAGE_TYPE} namespace {namespace}")
        logger.warning("Accepting unsupported %s namespace %s", cls.MESSAGE_TYPE, namespace)

    @classmethod
    def body(cls, root: etree._Element) -> etree._Element:
        """Resolve ``Document/<ROOT>``; ``root`` may be either element."""
        if x.local_name(root) == cls.ROOT:
            return root
        body = x.child(root, cls.ROOT)
        if body is None:
            raise InvalidStructureError(
                f"Invalid {cls.MESSAGE_TYPE}: root Document/{cls.ROOT} not found",
                element=cls.ROOT,
            )
        return body

    @classmethod
    def parse(cls, root: etree._Element) -> BaseModel:
        raise NotImplementedError

    # =========================================================================
    # record -> XML
    # =========================================================================

    def to_element(self) -> etree._Element:
        raise NotImplementedError

    def serialize(self, pretty: bool = True) -> str:
        """Export the record as an XML document string."""
        return x.to_string(self.to_element(), pretty=pretty)

    # =========================================================================
    # JSON
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        return self.data.model_dump(mode="json")

    def to_json(self, indent: Optional[int] = None) -> str:
        return self.data.model_dump_json(indent=indent)

    @classmethod
    def from_json(cls, payload: str | bytes | dict):
        """Rebuild a message from ``to_json()`` / ``to_dict()`` output."""
        try:
            if isinstance(payload, dict):
                data = cls.DATA_MODEL.model_validate(payload)
            else:
                data = cls.DATA_MODEL.model_validate_json(payload)
        except ValidationError as e:
            raise cls._invalid_record(e) from e
        return cls(data)

    @classmethod
    def _invalid_record(cls, e: ValidationError) -> InvalidStructureError:
        return InvalidStructureError(
            f"Invalid {cls.MESSAGE_TYPE} record: {e.error_count()} validation error(s): "
            + "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
        )

    # =========================================================================
    # Header accessors
    # =========================================================================

    @property
    def message_id(self) -> str:
        return self.data.header.message_id

    @property
    def creation_date(self):
        return self.data.header.creation_date_time
