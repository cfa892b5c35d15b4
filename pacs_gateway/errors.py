"""
Exception hierarchy for ISO 20022 parsing, export and building.

Every error carries a machine-readable ``code`` so the API layer can return
a stable error payload.
"""

from typing import Optional


class Iso20022Error(Exception):
    """Base class for all mapper errors."""

    code = "ISO20022_ERROR"

    def __init__(self, message: str, *, element: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.element = element

    def to_dict(self) -> dict:
        payload = {"error": self.code, "message": self.message}
        if self.element:
            payload["element"] = self.element
        return payload


class InvalidXmlError(Iso20022Error):
    """Input is not well-formed XML or not an ISO 20022 Document."""

    code = "INVALID_XML"


class InvalidXmlNamespaceError(Iso20022Error):
    """Document namespace does not belong to the expected message type."""

    code = "INVALID_NAMESPACE"


class InvalidStructureError(Iso20022Error):
    """A mandatory element is missing or holds an unusable value."""

    code = "INVALID_STRUCTURE"


class UnknownStatusError(InvalidStructureError):
    code = "UNKNOWN_STATUS"


class InvalidAmountError(InvalidStructureError):
    code = "INVALID_AMOUNT"


class BuilderInputError(Iso20022Error, ValueError):
    """Rejected input to one of the string builders."""

    code = "INVALID_BUILDER_INPUT"


class UnsupportedMessageError(Iso20022Error):
    code = "UNSUPPORTED_MESSAGE"
