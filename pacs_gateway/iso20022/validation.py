"""
ISO 20022 XSD Schema Validation

Loads the pacs.008 / pacs.002 XSD schemas once and validates raw documents
against them. Schemas are not bundled; point ``PACS_SCHEMA_DIR`` at a
directory holding the official XSD files.
"""

import logging
from pathlib import Path
from typing import Optional

from lxml import etree

from ..config import settings
from ..errors import InvalidXmlError
from .constants import PACS002, PACS008
from .xmltree import parse_xml

logger = logging.getLogger(__name__)

MAX_REPORTED_ERRORS = 10


# =============================================================================
# Schema Registry
# =============================================================================

class SchemaRegistry:
    """
    Manages ISO 20022 XSD schemas for message validation.

    Loads schemas at construction and caches compiled validators.
    """

    def __init__(self, schema_dir: Optional[str | Path] = None, schema_files: Optional[dict[str, str]] = None):
        """
        Args:
            schema_dir: XSD directory. Defaults to ``settings.schema_dir``,
                then the ``xsd`` directory next to this module.
            schema_files: message type -> file name overrides.
        """
        if schema_dir is None:
            schema_dir = settings.schema_dir or Path(__file__).parent / "xsd"

        self.schema_dir = Path(schema_dir)
        self.schema_files = schema_files or {
            PACS008: settings.pacs008_schema_file,
            PACS002: settings.pacs002_schema_file,
        }
        self._schemas: dict[str, etree.XMLSchema] = {}
        self._load_errors: dict[str, str] = {}

        self._load_schemas()

    def _load_schemas(self):
        if not self.schema_dir.exists():
            logger.warning("Schema directory not found: %s", self.schema_dir)
            for msg_type in self.schema_files:
                self._load_errors[msg_type] = f"Schema directory not found: {self.schema_dir}"
            return

        for msg_type, filename in self.schema_files.items():
            schema_path = self.schema_dir / filename
            if not schema_path.exists():
                self._load_errors[msg_type] = f"File not found: {schema_path}"
                logger.warning("Schema not found: %s", schema_path)
                continue
            try:
                schema_doc = etree.parse(str(schema_path))
                self._schemas[msg_type] = etree.XMLSchema(schema_doc)
                logger.info("Loaded schema: %s from %s", msg_type, filename)
            except (etree.XMLSyntaxError, etree.XMLSchemaParseError, OSError) as e:
                self._load_errors[msg_type] = str(e)
                logger.error("Failed to load schema %s: %s", msg_type, e)

    def get_schema(self, msg_type: str) -> Optional[etree.XMLSchema]:
        return self._schemas.get(msg_type)

    def is_loaded(self, msg_type: str) -> bool:
        return msg_type in self._schemas

    def get_loaded_schemas(self) -> list[str]:
        return list(self._schemas.keys())

    def get_load_errors(self) -> dict[str, str]:
        return self._load_errors.copy()


# Lazy initialization to avoid import-time file access
_registry: Optional[SchemaRegistry] = None


def get_registry() -> SchemaRegistry:
    """Get or create the global schema registry."""
    global _registry
    if _registry is None:
        _registry = SchemaRegistry()
    return _registry


def reset_registry(registry: Optional[SchemaRegistry] = None) -> None:
    """Replace (or drop) the global registry; the next call reloads it."""
    global _registry
    _registry = registry


# =============================================================================
# Validation
# =============================================================================

class ValidationResult:
    """Result of XSD schema validation."""

    def __init__(
        self,
        valid: bool,
        message_type: str,
        errors: Optional[list[str]] = None,
        warnings: Optional[list[str]] = None,
    ):
        self.valid = valid
        self.message_type = message_type
        self.errors = errors or []
        self.warnings = warnings or []

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "valid": self.valid,
            "messageType": self.message_type,
            "errors": self.errors,
            "warnings": self.warnings,
        }


def validate_xml(xml_content: str | bytes, msg_type: str) -> ValidationResult:
    """
    Validate XML content against the XSD schema of ``msg_type``.

    Args:
        xml_content: XML string or bytes
        msg_type: Message type ("pacs.008" or "pacs.002")
    """
    registry = get_registry()

    if not registry.is_loaded(msg_type):
        return ValidationResult(
            valid=False,
            message_type=msg_type,
            errors=[f"Schema not loaded for {msg_type}"],
            warnings=[f"Schema load error: {registry.get_load_errors().get(msg_type, 'Unknown message type')}"],
        )

    try:
        doc = parse_xml(xml_content)
    except InvalidXmlError as e:
        return ValidationResult(valid=False, message_type=msg_type, errors=[e.message])

    schema = registry.get_schema(msg_type)
    if schema.validate(doc):
        return ValidationResult(valid=True, message_type=msg_type)

    errors = [f"Line {error.line}: {error.message}" for error in schema.error_log]
    logger.debug("%s failed XSD validation with %d error(s)", msg_type, len(errors))
    return ValidationResult(
        valid=False,
        message_type=msg_type,
        errors=errors[:MAX_REPORTED_ERRORS],
    )


def get_validation_health() -> dict:
    """Get health status of schema validation system."""
    registry = get_registry()

    loaded = registry.get_loaded_schemas()
    errors = registry.get_load_errors()

    return {
        "status": "healthy" if loaded else "degraded",
        "schemasLoaded": loaded,
        "schemasTotal": len(loaded),
        "schemaLoadErrors": errors,
        "schemaDirectory": str(registry.schema_dir),
    }
