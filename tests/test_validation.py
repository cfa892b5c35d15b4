"""
Tests for XSD schema loading and validation.
"""

from pacs_gateway.iso20022 import build_pacs008_single_tx, validation


class TestSchemaRegistry:
    def test_missing_directory(self, tmp_path):
        registry = validation.SchemaRegistry(tmp_path / "absent")

        assert registry.get_loaded_schemas() == []
        assert "pacs.008" in registry.get_load_errors()
        assert "pacs.002" in registry.get_load_errors()

    def test_missing_file(self, tmp_path):
        registry = validation.SchemaRegistry(tmp_path)
        assert registry.get_load_errors()["pacs.008"].startswith("File not found")

    def test_broken_schema(self, tmp_path):
        (tmp_path / "broken.xsd").write_text("<xs:schema", encoding="utf-8")
        registry = validation.SchemaRegistry(tmp_path, schema_files={"pacs.008": "broken.xsd"})

        assert not registry.is_loaded("pacs.008")
        assert "pacs.008" in registry.get_load_errors()

    def test_loads_schema(self, schema_registry):
        assert schema_registry.is_loaded("pacs.008")
        assert schema_registry.get_schema("pacs.008") is not None


class TestValidateXml:
    def test_valid_document(self, schema_registry, pacs008_xml: str):
        result = validation.validate_xml(pacs008_xml, "pacs.008")

        assert result.valid is True
        assert result.errors == []

    def test_builder_output_is_valid(self, schema_registry):
        xml = build_pacs008_single_tx(
            msg_id="MSG-1", end_to_end_id="E2E-1", amount="10.00", currency="EUR",
            creditor_name="Ant", creditor_iban="FR7612345678901234567890185",
        )
        assert validation.validate_xml(xml, "pacs.008").valid is True

    def test_schema_violation(self, schema_registry, pacs008_xml: str):
        xml = pacs008_xml.replace("<CreDtTm>2025-10-06T10:15:00Z</CreDtTm>", "<CreDtTm>later</CreDtTm>")
        result = validation.validate_xml(xml, "pacs.008")

        assert result.valid is False
        assert result.errors
        assert len(result.errors) <= validation.MAX_REPORTED_ERRORS

    def test_syntax_error(self, schema_registry):
        result = validation.validate_xml("<Document>", "pacs.008")

        assert result.valid is False
        assert result.errors[0].startswith("XML syntax error")

    def test_schema_not_loaded(self, schema_registry, pacs002_acsp_xml: str):
        result = validation.validate_xml(pacs002_acsp_xml, "pacs.002")

        assert result.valid is False
        assert result.errors == ["Schema not loaded for pacs.002"]
        assert result.warnings[0].startswith("Schema load error")

    def test_to_dict(self, schema_registry, pacs008_xml: str):
        assert validation.validate_xml(pacs008_xml, "pacs.008").to_dict() == {
            "valid": True,
            "messageType": "pacs.008",
            "errors": [],
            "warnings": [],
        }


class TestValidationHealth:
    def test_healthy_with_loaded_schema(self, schema_registry):
        health = validation.get_validation_health()

        assert health["status"] == "healthy"
        assert health["schemasLoaded"] == ["pacs.008"]
        assert health["schemasTotal"] == 1

    def test_degraded_without_schemas(self, tmp_path):
        validation.reset_registry(validation.SchemaRegistry(tmp_path))
        try:
            health = validation.get_validation_health()
        finally:
            validation.reset_registry()

        assert health["status"] == "degraded"
        assert health["schemaDirectory"] == str(tmp_path)
