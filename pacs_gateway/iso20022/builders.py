"""
ISO 20022 Message Builders.

String templates producing ready-to-send pacs.008 / pacs.002 documents
without going through the typed records. All interpolated text is escaped;
output parses back with :mod:`.pacs008` / :mod:`.pacs002`.
"""

import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional

from ..config import settings
from ..errors import BuilderInputError
from .constants import (
    AMOUNT_PATTERN,
    CURRENCY_PATTERN,
    PACS002_NAMESPACE,
    PACS008_NAMESPACE,
    ChargeBearer,
    PaymentStatus,
)
from .fields import format_datetime
from .xmltree import escape

logger = logging.getLogger(__name__)


def _el(tag: str, value, indent: int) -> str:
    """Optional single-line element, or an empty string when unset."""
    if value is None or value == "":
        return ""
    return f"\n{' ' * indent}<{tag}>{escape(value)}</{tag}>"


def _agent(tag: str, bic: Optional[str], indent: int) -> str:
    if not bic:
        return ""
    return f"\n{' ' * indent}<{tag}><FinInstnId><BICFI>{escape(bic)}</BICFI></FinInstnId></{tag}>"


def _reason(code: Optional[str], proprietary: bool, additional_info: Optional[str], indent: int) -> str:
    if not code and not additional_info:
        return ""
    pad = " " * indent
    rsn = ""
    if code:
        kind = "Prtry" if proprietary else "Cd"
        rsn = f"\n{pad}  <Rsn><{kind}>{escape(code)}</{kind}></Rsn>"
    return f"\n{pad}<StsRsnInf>{rsn}{_el('AddtlInf', additional_info, indent + 2)}\n{pad}</StsRsnInf>"


def _message_id(now: datetime, suffix: str) -> str:
    # Naive datetimes are already UTC
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return f"{settings.message_id_prefix}-{now:%Y%m%d%H%M%S}-{suffix}"


def _status(value) -> PaymentStatus:
    try:
        return PaymentStatus(str(getattr(value, "value", value)))
    except ValueError as e:
        raise BuilderInputError(f"Unknown payment status: {value!r}") from e


# =============================================================================
# pacs.008
# =============================================================================

def build_pacs008_single_tx(
    msg_id: str,
    end_to_end_id: str,
    amount: str | Decimal,
    currency: str,
    creditor_name: str,
    creditor_iban: str,
    now: Optional[datetime] = None,
    instr_id: Optional[str] = None,
    tx_id: Optional[str] = None,
    uetr: Optional[str] = None,
    debtor_name: Optional[str] = None,
    debtor_iban: Optional[str] = None,
    debtor_agent_bic: Optional[str] = None,
    creditor_agent_bic: Optional[str] = None,
    settlement_method: Optional[str] = "CLRG",
    charge_bearer: Optional[str] = None,
    instructing_agent_bic: Optional[str] = None,
    instructed_agent_bic: Optional[str] = None,
    remittance_information: Optional[str] = None,
) -> str:
    """
    Build a single-transaction pacs.008.001.08 Customer Credit Transfer.

    ``amount`` is a major-unit decimal string such as ``"1000.00"``.

    Raises:
        BuilderInputError: malformed amount, currency or charge bearer.
    """
    value = str(amount).strip()
    if not AMOUNT_PATTERN.match(value):
        raise BuilderInputError(f'Amount value must be a decimal string (e.g., "1000.00"), got {amount!r}')
    if not CURRENCY_PATTERN.match(currency or ""):
        raise BuilderInputError(f"Amount currency must be a 3-letter code, got {currency!r}")
    if charge_bearer is not None:
        charge_bearer = str(getattr(charge_bearer, "value", charge_bearer))
        if charge_bearer not in ChargeBearer.__members__:
            raise BuilderInputError(
                f"Charge bearer must be one of {', '.join(ChargeBearer.__members__)}, got {charge_bearer!r}"
            )

    created = format_datetime(now or datetime.now(timezone.utc))
    sttlm_inf = ""
    if settlement_method:
        sttlm_inf = f"\n      <SttlmInf><SttlmMtd>{escape(settlement_method)}</SttlmMtd></SttlmInf>"

    debtor = ""
    if debtor_name:
        debtor = f"\n      <Dbtr><Nm>{escape(debtor_name)}</Nm></Dbtr>"
    if debtor_iban:
        debtor += f"\n      <DbtrAcct><Id><IBAN>{escape(debtor_iban)}</IBAN></Id></DbtrAcct>"

    remittance = ""
    if remittance_information:
        remittance = f"\n      <RmtInf><Ustrd>{escape(remittance_information)}</Ustrd></RmtInf>"

    logger.debug("Building pacs.008 %s (%s %s)", msg_id, value, currency)

    return f"""<?xml version="1.0" encoding="UTF-8"?>
<Document xmlns="{PACS008_NAMESPACE}">
  <FIToFICstmrCdtTrf>
    <GrpHdr>
      <MsgId>{escape(msg_id)}</MsgId>
      <CreDtTm>{created}</CreDtTm>
      <NbOfTxs>1</NbOfTxs>{sttlm_inf}
    </GrpHdr>
    <CdtTrfTxInf>
      <PmtId>{_el('InstrId', instr_id, 8)}
        <EndToEndId>{escape(end_to_end_id)}</EndToEndId>{_el('TxId', tx_id, 8)}{_el('UETR', uetr, 8)}
      </PmtId>
      <IntrBkSttlmAmt Ccy="{escape(currency)}">{escape(value)}</IntrBkSttlmAmt>{_el('ChrgBr', charge_bearer, 6)}{_agent('InstgAgt', instructing_agent_bic, 6)}{_agent('InstdAgt', instructed_agent_bic, 6)}{debtor}{_agent('DbtrAgt', debtor_agent_bic, 6)}{_agent('CdtrAgt', creditor_agent_bic, 6)}
      <Cdtr><Nm>{escape(creditor_name)}</Nm></Cdtr>
      <CdtrAcct><Id><IBAN>{escape(creditor_iban)}</IBAN></Id></CdtrAcct>{remittance}
    </CdtTrfTxInf>
  </FIToFICstmrCdtTrf>
</Document>"""


# =============================================================================
# pacs.002
# =============================================================================

def build_pacs002_status(
    original_message_id: str,
    status: str | PaymentStatus,
    msg_id: Optional[str] = None,
    now: Optional[datetime] = None,
    original_message_name_id: Optional[str] = None,
    original_instruction_id: Optional[str] = None,
    original_end_to_end_id: Optional[str] = None,
    original_transaction_id: Optional[str] = None,
    original_uetr: Optional[str] = None,
    reason_code: Optional[str] = None,
    reason_proprietary: bool = False,
    additional_info: Optional[str] = None,
    reason_at_group_level: bool = False,
    acceptance_date_time: Optional[datetime] = None,
    settlement_date: Optional[date] = None,
) -> str:
    """
    Build a pacs.002.001.10 status report with a group status and one
    transaction status (both ``status``).

    The optional reason is written on the transaction entry, or on the group
    entry when ``reason_at_group_level`` is set.
    """
    status = _status(status)
    now = now or datetime.now(timezone.utc)
    msg_id = msg_id or _message_id(now, status.value)

    reason = _reason(reason_code, reason_proprietary, additional_info, 6)
    group_reason = reason if reason_at_group_level else ""
    tx_reason = "" if reason_at_group_level else reason

    settlement = ""
    if settlement_date is not None:
        settlement = f"\n      <FctvIntrBkSttlmDt><Dt>{settlement_date.isoformat()}</Dt></FctvIntrBkSttlmDt>"

    logger.debug("Building pacs.002 %s (%s) for %s", msg_id, status.value, original_message_id)

    return f"""<?xml version="1.0" encoding="UTF-8"?>
<Document xmlns="{PACS002_NAMESPACE}">
  <FIToFIPmtStsRpt>
    <GrpHdr>
      <MsgId>{escape(msg_id)}</MsgId>
      <CreDtTm>{format_datetime(now)}</CreDtTm>
    </GrpHdr>
    <OrgnlGrpInfAndSts>
      <OrgnlMsgId>{escape(original_message_id)}</OrgnlMsgId>{_el('OrgnlMsgNmId', original_message_name_id, 6)}
      <GrpSts>{status.value}</GrpSts>{group_reason}
    </OrgnlGrpInfAndSts>
    <TxInfAndSts>{_el('OrgnlInstrId', original_instruction_id, 6)}{_el('OrgnlEndToEndId', original_end_to_end_id, 6)}{_el('OrgnlTxId', original_transaction_id, 6)}{_el('OrgnlUETR', original_uetr, 6)}
      <TxSts>{status.value}</TxSts>{tx_reason}{_el('AccptncDtTm', format_datetime(acceptance_date_time), 6)}{settlement}
    </TxInfAndSts>
  </FIToFIPmtStsRpt>
</Document>"""


def build_pacs002_acsp(
    original_message_id: str,
    msg_id: Optional[str] = None,
    now: Optional[datetime] = None,
    original_message_name_id: Optional[str] = None,
    original_instruction_id: Optional[str] = None,
    original_end_to_end_id: Optional[str] = None,
    original_transaction_id: Optional[str] = None,
    reason_code: Optional[str] = None,
    additional_info: Optional[str] = None,
) -> str:
    """
    Build an ACSP (Accepted Settlement In Process) provisional acceptance.

    Defaults: message id ``MCB-<YYYYMMDDHHMMSS>-ACSP``, proprietary reason
    ``G000`` with "Accepted for processing; funds hold placed".
    """
    return build_pacs002_status(
        original_message_id=original_message_id,
        status=PaymentStatus.ACSP,
        msg_id=msg_id,
        now=now,
        original_message_name_id=original_message_name_id,
        original_instruction_id=original_instruction_id,
        original_end_to_end_id=original_end_to_end_id,
        original_transaction_id=original_transaction_id,
        reason_code=reason_code or settings.acsp_reason_code,
        reason_proprietary=True,
        additional_info=additional_info or settings.acsp_additional_info,
        reason_at_group_level=True,
    )
