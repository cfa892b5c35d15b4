"""
Field-level helpers shared by the pacs.008 and pacs.002 mappers.

``parse_*`` functions read an lxml node into a model; ``export_*`` functions
append the model back under a parent element. Both sides tolerate absent
optional blocks: parsers return ``None``, exporters write nothing.
"""

import logging
from datetime import date, datetime, timezone
from typing import Optional

from dateutil.parser import isoparse
from lxml import etree

from ..config import settings
from ..errors import InvalidStructureError, UnknownStatusError
from . import xmltree as x
from .constants import ADDITIONAL_INFO_SEPARATOR, NB_OF_TXS_PATTERN, PaymentStatus
from .currencies import from_minor_units, to_minor_units
from .models import Account, Agent, MessageHeader, Party, PostalAddress, StatusReason

logger = logging.getLogger(__name__)


# =============================================================================
# Dates and Times
# =============================================================================

def parse_datetime(value: Optional[str], element: str = "CreDtTm") -> Optional[datetime]:
    """ISO 8601 -> aware UTC datetime. Naive values are taken as UTC."""
    if value is None:
        return None
    try:
        dt = isoparse(value)
    except (ValueError, OverflowError) as e:
        raise InvalidStructureError(f"Invalid date-time {value!r}", element=element) from e
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_date(value: Optional[str], element: str = "Dt") -> Optional[date]:
    if value is None:
        return None
    try:
        return isoparse(value).date()
    except (ValueError, OverflowError) as e:
        raise InvalidStructureError(f"Invalid date {value!r}", element=element) from e


def format_datetime(dt: Optional[datetime]) -> Optional[str]:
    """Aware datetime -> ``2025-10-06T10:15:38Z`` (milliseconds kept when set)."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    if dt.microsecond:
        return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")


def format_date(d: Optional[date]) -> Optional[str]:
    return d.isoformat() if d is not None else None


# =============================================================================
# Amounts
# =============================================================================

def parse_amount(node: Optional[etree._Element]) -> Optional[tuple[int, str]]:
    """Active/instructed amount element -> ``(minor_units, currency)``."""
    if node is None:
        return None
    value = x.text(node)
    if value is None:
        raise InvalidStructureError("Amount element has no value", element=x.local_name(node))
    currency = x.attr(node, "Ccy")
    if currency is None:
        currency = settings.default_currency
        logger.warning(
            "%s has no Ccy attribute, defaulting to %s", x.local_name(node), currency
        )
    return to_minor_units(value, currency), currency.upper()


def export_amount(parent: etree._Element, tag: str, amount: int, currency: str) -> etree._Element:
    return x.sub(parent, tag, from_minor_units(amount, currency), Ccy=currency)


# =============================================================================
# Parties, Accounts and Agents
# =============================================================================

def parse_postal_address(node: Optional[etree._Element]) -> Optional[PostalAddress]:
    if node is None:
        return None
    address = PostalAddress(
        country=x.text(node, "Ctry"),
        town_name=x.text(node, "TwnNm"),
        post_code=x.text(node, "PstCd"),
        street_name=x.text(node, "StrtNm"),
        building_number=x.text(node, "BldgNb"),
        address_lines=x.texts(node, "AdrLine"),
    )
    if address == PostalAddress():
        return None
    return address


def parse_party(node: Optional[etree._Element]) -> Optional[Party]:
    """Dbtr / Cdtr / InitgPty -> :class:`Party`."""
    if node is None:
        return None
    return Party(
        name=x.text(node, "Nm"),
        id=x.first_text(
            node,
            ("Id", "OrgId", "Othr", "Id"),
            ("Id", "PrvtId", "Othr", "Id"),
        ),
        bic=x.text(node, "Id", "OrgId", "AnyBIC"),
        postal_address=parse_postal_address(x.child(node, "PstlAdr")),
    )


def parse_account(node: Optional[etree._Element]) -> Optional[Account]:
    if node is None:
        return None
    return Account(
        iban=x.text(node, "Id", "IBAN"),
        other_id=x.text(node, "Id", "Othr", "Id"),
        currency=x.text(node, "Ccy"),
        name=x.text(node, "Nm"),
    )


def parse_agent(node: Optional[etree._Element]) -> Optional[Agent]:
    """``*Agt`` block -> :class:`Agent`; accepts BICFI and the legacy BIC tag."""
    if node is None:
        return None
    return Agent(
        bic=x.first_text(node, ("FinInstnId", "BICFI"), ("FinInstnId", "BIC")),
        clearing_system_member_id=x.text(node, "FinInstnId", "ClrSysMmbId", "MmbId"),
        name=x.text(node, "FinInstnId", "Nm"),
    )


def parse_header(grp_hdr: Optional[etree._Element]) -> MessageHeader:
    if grp_hdr is None:
        raise InvalidStructureError("Missing GrpHdr", element="GrpHdr")
    message_id = x.text(grp_hdr, "MsgId")
    if message_id is None:
        raise InvalidStructureError("Missing GrpHdr/MsgId", element="MsgId")

    nb_of_txs = x.text(grp_hdr, "NbOfTxs")
    if nb_of_txs is not None:
        if not NB_OF_TXS_PATTERN.match(nb_of_txs):
            raise InvalidStructureError(
                f"Invalid NbOfTxs {nb_of_txs!r}: expected 1 to 15 digits", element="NbOfTxs"
            )
        nb_of_txs = int(nb_of_txs)

    return MessageHeader(
        message_id=message_id,
        creation_date_time=parse_datetime(x.text(grp_hdr, "CreDtTm"), "CreDtTm"),
        number_of_transactions=nb_of_txs,
        initiating_party=parse_party(x.child(grp_hdr, "InitgPty")),
        instructing_agent=parse_agent(x.child(grp_hdr, "InstgAgt")),
        instructed_agent=parse_agent(x.child(grp_hdr, "InstdAgt")),
    )


def export_postal_address(parent: etree._Element, address: Optional[PostalAddress]) -> None:
    if address is None:
        return
    el = x.sub(parent, "PstlAdr")
    x.add(el, "StrtNm", address.street_name)
    x.add(el, "BldgNb", address.building_number)
    x.add(el, "PstCd", address.post_code)
    x.add(el, "TwnNm", address.town_name)
    x.add(el, "Ctry", address.country)
    for line in address.address_lines:
        x.add(el, "AdrLine", line)
    x.prune(el)


def export_party(parent: etree._Element, tag: str, party: Optional[Party]) -> None:
    if party is None:
        return
    el = x.sub(parent, tag)
    x.add(el, "Nm", party.name)
    export_postal_address(el, party.postal_address)
    if party.bic or party.id:
        org_id = x.sub(x.sub(el, "Id"), "OrgId")
        x.add(org_id, "AnyBIC", party.bic)
        if party.id:
            x.sub(x.sub(org_id, "Othr"), "Id", party.id)
    x.prune(el)


def export_account(parent: etree._Element, tag: str, account: Optional[Account]) -> None:
    if account is None or account.identification is None:
        return
    el = x.sub(parent, tag)
    id_el = x.sub(el, "Id")
    if account.iban:
        x.sub(id_el, "IBAN", account.iban)
    else:
        x.sub(x.sub(id_el, "Othr"), "Id", account.other_id)
    x.add(el, "Ccy", account.currency)
    x.add(el, "Nm", account.name)


def export_agent(parent: etree._Element, tag: str, agent: Optional[Agent]) -> None:
    if agent is None:
        return
    el = x.sub(parent, tag)
    fin = x.sub(el, "FinInstnId")
    x.add(fin, "BICFI", agent.bic)
    if agent.clearing_system_member_id:
        x.sub(x.sub(fin, "ClrSysMmbId"), "MmbId", agent.clearing_system_member_id)
    x.add(fin, "Nm", agent.name)
    if len(fin) == 0:
        parent.remove(el)


def export_header(
    parent: etree._Element,
    header: MessageHeader,
    settlement_date: Optional[date] = None,
    settlement_method: Optional[str] = None,
) -> etree._Element:
    """Write ``GrpHdr`` (pacs.008 also passes its settlement information)."""
    el = x.sub(parent, "GrpHdr")
    x.sub(el, "MsgId", header.message_id)
    x.add(el, "CreDtTm", format_datetime(header.creation_date_time))
    # Not in the pacs.008.001.08 / pacs.002.001.10 GrpHdr; written only when a
    # parsed document carried it, so such output will not pass XSD validation
    export_party(el, "InitgPty", header.initiating_party)
    if header.number_of_transactions is not None:
        x.sub(el, "NbOfTxs", header.number_of_transactions)
    x.add(el, "IntrBkSttlmDt", format_date(settlement_date))
    if settlement_method:
        x.sub(x.sub(el, "SttlmInf"), "SttlmMtd", settlement_method)
    export_agent(el, "InstgAgt", header.instructing_agent)
    export_agent(el, "InstdAgt", header.instructed_agent)
    return el


# =============================================================================
# Status and Reasons
# =============================================================================

def parse_status(value: Optional[str], element: str = "TxSts") -> PaymentStatus:
    if value is None:
        raise InvalidStructureError(f"Missing {element}", element=element)
    try:
        return PaymentStatus(value)
    except ValueError as e:
        raise UnknownStatusError(f"Unknown payment status {value!r}", element=element) from e


def parse_reasons(node: Optional[etree._Element]) -> list[StatusReason]:
    """Every ``StsRsnInf`` under ``node``."""
    reasons = []
    for info in x.children(node, "StsRsnInf"):
        code = x.text(info, "Rsn", "Cd")
        proprietary = False
        if code is None:
            code = x.text(info, "Rsn", "Prtry")
            proprietary = code is not None
        additional = x.texts(info, "AddtlInf")
        reasons.append(StatusReason(
            code=code,
            proprietary=proprietary,
            additional_information=ADDITIONAL_INFO_SEPARATOR.join(additional) or None,
        ))
    return reasons


def export_reason(parent: etree._Element, reason: StatusReason) -> etree._Element:
    el = x.sub(parent, "StsRsnInf")
    if reason.code:
        x.sub(x.sub(el, "Rsn"), "Prtry" if reason.proprietary else "Cd", reason.code)
    if reason.additional_information:
        for line in reason.additional_information.split(ADDITIONAL_INFO_SEPARATOR):
            x.add(el, "AddtlInf", line)
    return el
