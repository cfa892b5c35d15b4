"""
API tests for the ISO 20022 endpoints.
"""

import pytest
from httpx import AsyncClient

from pacs_gateway.iso20022 import CustomerCreditTransfer, PaymentStatusReport

XML_HEADERS = {"Content-Type": "application/xml"}


class TestParseEndpoints:
    """POST /v1/iso20022/*/parse"""

    @pytest.mark.asyncio
    async def test_parse_pacs008(self, async_client: AsyncClient, pacs008_xml: str):
        response = await async_client.post(
            "/v1/iso20022/pacs008/parse", content=pacs008_xml, headers=XML_HEADERS
        )

        assert response.status_code == 200
        body = response.json()
        assert body["messageType"] == "pacs.008"
        assert body["data"]["header"]["message_id"] == "GW-2025-10-06-001"
        assert body["data"]["transactions"][0]["amount"] == 100000

    @pytest.mark.asyncio
    async def test_parse_pacs002(self, async_client: AsyncClient, pacs002_rjct_xml: str):
        response = await async_client.post(
            "/v1/iso20022/pacs002/parse", content=pacs002_rjct_xml, headers=XML_HEADERS
        )

        assert response.status_code == 200
        statuses = response.json()["data"]["status_informations"]
        assert [s["status"] for s in statuses] == ["RJCT", "RJCT"]
        assert statuses[1]["reasons"][0]["code"] == "AC04"

    @pytest.mark.asyncio
    async def test_parse_auto_detects(self, async_client: AsyncClient, pacs002_acsc_xml: str):
        response = await async_client.post(
            "/v1/iso20022/parse", content=pacs002_acsc_xml, headers=XML_HEADERS
        )

        assert response.status_code == 200
        assert response.json()["messageType"] == "pacs.002"

    @pytest.mark.asyncio
    async def test_malformed_xml(self, async_client: AsyncClient):
        response = await async_client.post(
            "/v1/iso20022/pacs008/parse", content="<Document>", headers=XML_HEADERS
        )

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "INVALID_XML"

    @pytest.mark.asyncio
    async def test_wrong_message_type(self, async_client: AsyncClient, pacs008_xml: str):
        response = await async_client.post(
            "/v1/iso20022/pacs002/parse", content=pacs008_xml, headers=XML_HEADERS
        )

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "INVALID_NAMESPACE"

    @pytest.mark.asyncio
    async def test_strict_query_parameter(self, async_client: AsyncClient, pacs008_xml: str):
        xml = pacs008_xml.replace("pacs.008.001.08", "pacs.008.001.02")
        lenient = await async_client.post("/v1/iso20022/pacs008/parse", content=xml, headers=XML_HEADERS)
        strict = await async_client.post(
            "/v1/iso20022/pacs008/parse", params={"strict": "true"}, content=xml, headers=XML_HEADERS
        )

        assert lenient.status_code == 200
        assert strict.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_status(self, async_client: AsyncClient, pacs002_rjct_xml: str):
        xml = pacs002_rjct_xml.replace("<TxSts>RJCT</TxSts>", "<TxSts>NOPE</TxSts>")
        response = await async_client.post("/v1/iso20022/pacs002/parse", content=xml, headers=XML_HEADERS)

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["error"] == "UNKNOWN_STATUS"
        assert detail["element"] == "TxSts"

    @pytest.mark.asyncio
    async def test_negative_nb_of_txs(self, async_client: AsyncClient, pacs008_xml: str):
        xml = pacs008_xml.replace("<NbOfTxs>1</NbOfTxs>", "<NbOfTxs>-1</NbOfTxs>")
        response = await async_client.post("/v1/iso20022/pacs008/parse", content=xml, headers=XML_HEADERS)

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["error"] == "INVALID_STRUCTURE"
        assert detail["element"] == "NbOfTxs"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["1E5000000", "1E200000"])
    async def test_exponent_amount(self, async_client: AsyncClient, pacs008_xml: str, value: str):
        xml = pacs008_xml.replace(">1000.00<", f">{value}<")
        response = await async_client.post("/v1/iso20022/pacs008/parse", content=xml, headers=XML_HEADERS)

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "INVALID_AMOUNT"

    @pytest.mark.asyncio
    async def test_latin1_body(self, async_client: AsyncClient, pacs008_xml: str):
        xml = pacs008_xml.replace('encoding="UTF-8"', 'encoding="ISO-8859-1"').replace(
            "<Nm>Ant</Nm>", "<Nm>Müller</Nm>"
        )
        response = await async_client.post(
            "/v1/iso20022/pacs008/parse", content=xml.encode("iso-8859-1"), headers=XML_HEADERS
        )

        assert response.status_code == 200
        assert response.json()["data"]["transactions"][0]["creditor"]["name"] == "Müller"

    @pytest.mark.asyncio
    async def test_unsupported_message(self, async_client: AsyncClient):
        xml = '<Document xmlns="urn:iso:std:iso:20022:tech:xsd:camt.054.001.13"><BkToCstmrDbtCdtNtfctn/></Document>'
        response = await async_client.post("/v1/iso20022/parse", content=xml, headers=XML_HEADERS)

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "UNSUPPORTED_MESSAGE"


class TestBuildEndpoints:
    """POST /v1/iso20022/pacs008/build, /pacs002/acsp, /pacs002/status"""

    @pytest.mark.asyncio
    async def test_build_pacs008(self, async_client: AsyncClient):
        response = await async_client.post(
            "/v1/iso20022/pacs008/build",
            json={
                "msgId": "GW-2025-10-06-001",
                "creDtTm": "2025-10-06T10:15:00Z",
                "endToEndId": "E2E-001",
                "amount": {"ccy": "EUR", "value": "1000.00"},
                "creditorName": "Ant",
                "creditorIban": "FR7612345678901234567890185",
                "chargeBearer": "SLEV",
                "instgAgtBIC": "GATEFRPPXXX",
            },
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/xml")
        tx = CustomerCreditTransfer.from_xml(response.text).transactions[0]
        assert tx.amount == 100000
        assert tx.charge_bearer == "SLEV"
        assert tx.instructing_agent_bic == "GATEFRPPXXX"

    @pytest.mark.asyncio
    async def test_build_pacs008_bad_amount(self, async_client: AsyncClient):
        response = await async_client.post(
            "/v1/iso20022/pacs008/build",
            json={
                "msgId": "M", "endToEndId": "E", "amount": {"ccy": "EUR", "value": "1,00"},
                "creditorName": "Ant", "creditorIban": "FR76",
            },
        )

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "INVALID_BUILDER_INPUT"

    @pytest.mark.asyncio
    async def test_build_pacs008_unknown_charge_bearer(self, async_client: AsyncClient):
        response = await async_client.post(
            "/v1/iso20022/pacs008/build",
            json={
                "msgId": "M", "endToEndId": "E", "amount": {"ccy": "EUR", "value": "1.00"},
                "creditorName": "Ant", "creditorIban": "FR76", "chargeBearer": "OURS",
            },
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_build_acsp(self, async_client: AsyncClient):
        response = await async_client.post(
            "/v1/iso20022/pacs002/acsp",
            json={
                "now": "2025-10-06T10:15:10Z",
                "related": {"orgnlMsgId": "GW-2025-10-06-001", "orgnlEndToEndId": "E2E-001"},
            },
        )

        assert response.status_code == 200
        report = PaymentStatusReport.from_xml(response.text)
        assert report.message_id == "MCB-20251006101510-ACSP"
        assert report.group_status.reason.code == "G000"
        assert report.find_transaction(end_to_end_id="E2E-001").status == "ACSP"

    @pytest.mark.asyncio
    async def test_build_status(self, async_client: AsyncClient):
        response = await async_client.post(
            "/v1/iso20022/pacs002/status",
            json={
                "status": "ACSC",
                "related": {"orgnlMsgId": "GW-1", "orgnlTxId": "TX-001"},
                "acceptanceDateTime": "2025-10-06T10:15:38Z",
                "settlementDate": "2025-10-06",
            },
        )

        assert response.status_code == 200
        tx = PaymentStatusReport.from_xml(response.text).find_transaction(transaction_id="TX-001")
        assert tx.status == "ACSC"
        assert tx.settlement_date.isoformat() == "2025-10-06"


class TestValidateAndTemplates:
    """POST /v1/iso20022/validate, GET /templates, GET /schemas/health"""

    @pytest.mark.asyncio
    async def test_validate(self, async_client: AsyncClient, schema_registry, pacs008_xml: str):
        response = await async_client.post(
            "/v1/iso20022/validate", content=pacs008_xml, headers=XML_HEADERS
        )

        assert response.status_code == 200
        assert response.json() == {
            "valid": True, "messageType": "pacs.008", "errors": [], "warnings": [],
        }

    @pytest.mark.asyncio
    async def test_validate_explicit_type(self, async_client: AsyncClient, schema_registry, pacs008_xml: str):
        response = await async_client.post(
            "/v1/iso20022/validate",
            params={"messageType": "pacs.002"},
            content=pacs008_xml,
            headers=XML_HEADERS,
        )

        assert response.status_code == 200
        assert response.json()["valid"] is False

    @pytest.mark.asyncio
    async def test_validate_undetectable(self, async_client: AsyncClient):
        response = await async_client.post(
            "/v1/iso20022/validate", content="<Document/>", headers=XML_HEADERS
        )

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "UNSUPPORTED_MESSAGE"

    @pytest.mark.asyncio
    async def test_templates_parse(self, async_client: AsyncClient):
        response = await async_client.get("/v1/iso20022/templates")

        assert response.status_code == 200
        templates = response.json()
        assert set(templates) == {"pacs.008", "pacs.002.ACSP", "pacs.002.ACSC", "pacs.002.RJCT"}
        for template in templates.values():
            parse = await async_client.post(
                "/v1/iso20022/parse", content=template["sampleXml"], headers=XML_HEADERS
            )
            assert parse.json()["messageType"] == template["messageType"]

    @pytest.mark.asyncio
    async def test_schema_health(self, async_client: AsyncClient, schema_registry):
        response = await async_client.get("/v1/iso20022/schemas/health")

        assert response.status_code == 200
        assert response.json()["schemasLoaded"] == ["pacs.008"]


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, async_client: AsyncClient):
        response = await async_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["supportedMessages"] == ["pacs.002", "pacs.008"]
