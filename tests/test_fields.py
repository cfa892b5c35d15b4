"""
Tests for currency minor units and the shared field helpers.
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from pacs_gateway.config import settings
from pacs_gateway.errors import InvalidAmountError, InvalidStructureError, UnknownStatusError
from pacs_gateway.iso20022 import PaymentStatus, StatusReason
from pacs_gateway.iso20022 import xmltree as x
from pacs_gateway.iso20022.currencies import from_minor_units, minor_unit_exponent, to_minor_units
from pacs_gateway.iso20022.fields import (
    export_reason,
    format_datetime,
    parse_agent,
    parse_date,
    parse_datetime,
    parse_reasons,
    parse_status,
)


class TestMinorUnits:
    """ISO 4217 exponents and conversion."""

    @pytest.mark.parametrize("currency,exponent", [
        ("EUR", 2), ("USD", 2), ("JPY", 0), ("KRW", 0), ("KWD", 3), ("BHD", 3), ("CLF", 4),
    ])
    def test_exponent(self, currency, exponent):
        assert minor_unit_exponent(currency) == exponent

    def test_unknown_currency_uses_default(self, monkeypatch):
        assert minor_unit_exponent("XYZ") == 2
        monkeypatch.setattr(settings, "default_minor_units", 3)
        assert minor_unit_exponent("XYZ") == 3

    def test_invalid_currency(self):
        with pytest.raises(InvalidAmountError) as exc_info:
            minor_unit_exponent("EURO")
        assert exc_info.value.element == "Ccy"

    def test_to_minor_units(self):
        assert to_minor_units("1000.00", "EUR") == 100000
        assert to_minor_units(Decimal("1500"), "JPY") == 1500
        assert to_minor_units("0.5", "KWD") == 500
        assert to_minor_units("0", "EUR") == 0

    def test_to_minor_units_rounds_half_up(self):
        assert to_minor_units("0.125", "EUR") == 13
        assert to_minor_units("0.124", "EUR") == 12
        assert to_minor_units("99.5", "JPY") == 100

    @pytest.mark.parametrize("value", ["-1.00", "abc", "NaN", "Infinity", "", "1E5", "1e-2", "+1.00", " 1 . 0"])
    def test_to_minor_units_rejects(self, value):
        with pytest.raises(InvalidAmountError):
            to_minor_units(value, "EUR")

    def test_to_minor_units_digit_limit(self):
        assert to_minor_units("9999999999999999.99", "EUR") == 999999999999999999
        assert to_minor_units("000001.50000", "EUR") == 150
        with pytest.raises(InvalidAmountError, match="18 digits"):
            to_minor_units("99999999999999999.99", "EUR")
        with pytest.raises(InvalidAmountError):
            to_minor_units("1" + "0" * 200000, "EUR")

    def test_from_minor_units(self):
        assert from_minor_units(100000, "EUR") == "1000.00"
        assert from_minor_units(1000, "JPY") == "1000"
        assert from_minor_units(12345, "KWD") == "12.345"
        assert from_minor_units(5, "EUR") == "0.05"

    def test_from_minor_units_rejects_negative(self):
        with pytest.raises(InvalidAmountError):
            from_minor_units(-1, "EUR")


class TestDates:
    """Date and date-time handling."""

    def test_parse_datetime_normalizes_to_utc(self):
        assert parse_datetime("2025-10-06T12:15:38+02:00") == datetime(
            2025, 10, 6, 10, 15, 38, tzinfo=timezone.utc
        )

    def test_parse_datetime_naive_is_utc(self):
        assert parse_datetime("2025-10-06T10:15:38").tzinfo == timezone.utc

    def test_parse_datetime_none(self):
        assert parse_datetime(None) is None

    def test_parse_datetime_invalid(self):
        with pytest.raises(InvalidStructureError) as exc_info:
            parse_datetime("06/10/2025", "AccptncDtTm")
        assert exc_info.value.element == "AccptncDtTm"

    def test_parse_date(self):
        assert parse_date("2025-10-06") == date(2025, 10, 6)
        with pytest.raises(InvalidStructureError):
            parse_date("2025-13-45")

    def test_format_datetime(self):
        assert format_datetime(datetime(2025, 10, 6, 10, 15, 38, tzinfo=timezone.utc)) == "2025-10-06T10:15:38Z"
        assert format_datetime(
            datetime(2025, 10, 6, 12, 15, 38, 250000, tzinfo=timezone(timedelta(hours=2)))
        ) == "2025-10-06T10:15:38.250Z"
        assert format_datetime(None) is None


class TestStatusAndReasons:
    """Status codes and StsRsnInf blocks."""

    def test_parse_status(self):
        assert parse_status("ACSC") is PaymentStatus.ACSC
        assert parse_status("RJCT") is PaymentStatus.RJCT

    def test_parse_status_is_case_sensitive(self):
        with pytest.raises(UnknownStatusError):
            parse_status("acsp")

    def test_parse_status_unknown(self):
        with pytest.raises(UnknownStatusError):
            parse_status("RJCR")

    def test_parse_status_missing(self):
        with pytest.raises(InvalidStructureError, match="Missing TxSts"):
            parse_status(None)

    def test_reason_code_or_proprietary(self):
        node = x.parse_xml("""<TxInfAndSts>
            <StsRsnInf><Rsn><Cd>AC01</Cd></Rsn></StsRsnInf>
            <StsRsnInf><Rsn><Prtry>G000</Prtry></Rsn><AddtlInf>one</AddtlInf><AddtlInf>two</AddtlInf></StsRsnInf>
            <StsRsnInf><AddtlInf>text only</AddtlInf></StsRsnInf>
        </TxInfAndSts>""")

        assert parse_reasons(node) == [
            StatusReason(code="AC01"),
            StatusReason(code="G000", proprietary=True, additional_information="one | two"),
            StatusReason(additional_information="text only"),
        ]

    def test_export_reason(self):
        parent = x.make_document("urn:test")
        export_reason(parent, StatusReason(code="G000", proprietary=True, additional_information="a | b"))
        export_reason(parent, StatusReason(code="AM04"))

        assert parse_reasons(parent) == [
            StatusReason(code="G000", proprietary=True, additional_information="a | b"),
            StatusReason(code="AM04"),
        ]


class TestAgents:
    def test_bicfi_preferred_over_legacy_bic(self):
        node = x.parse_xml(
            "<InstgAgt><FinInstnId><BIC>LEGACYXXX</BIC><BICFI>CURRENTXXX</BICFI></FinInstnId></InstgAgt>"
        )
        assert parse_agent(node).bic == "CURRENTXXX"

    def test_missing_agent(self):
        assert parse_agent(None) is None


class TestXmlPlumbing:
    """Hardened parsing and namespace-agnostic lookups."""

    def test_entities_are_not_expanded(self):
        xml = """<?xml version="1.0"?>
<!DOCTYPE Document [<!ENTITY secret SYSTEM "file:///etc/passwd">]>
<Document><MsgId>&secret;</MsgId></Document>"""
        root = x.parse_xml(xml)
        assert "root:" not in (x.text(root, "MsgId") or "")

    def test_lookups_ignore_namespace(self):
        root = x.parse_xml('<a:Doc xmlns:a="urn:one"><a:Hdr><a:Id> 42 </a:Id></a:Hdr><a:Id/></a:Doc>')

        assert x.text(root, "Hdr", "Id") == "42"
        assert x.text(root, "Id") is None
        assert x.children(root, "Missing") == []
        assert x.child(None, "Hdr") is None

    def test_escape(self):
        assert x.escape("""<a href="x">Tom & Jerry's</a>""") == (
            "&lt;a href=&quot;x&quot;&gt;Tom &amp; Jerry&apos;s&lt;/a&gt;"
        )
