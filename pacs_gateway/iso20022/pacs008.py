"""
FI To FI Customer Credit Transfer (pacs.008)

Reads every CdtTrfTxInf of a pacs.008 document into a
:class:`~.models.CreditTransferData` record and writes it back in
pacs.008.001.08 element order.

Amounts are taken from the first of IntrBkSttlmAmt, Amt/InstdAmt and
Amt/EqvtAmt/Amt, and carried as integer minor units.
"""

import logging
from datetime import date
from typing import Optional

from lxml import etree

from ..errors import InvalidStructureError
from . import xmltree as x
from .constants import (
    PACS008,
    PACS008_NAMESPACE,
    PACS008_ROOT,
    PACS008_SUPPORTED_NAMESPACES,
    REMITTANCE_SEPARATOR,
)
from .fields import (
    export_account,
    export_agent,
    export_amount,
    export_header,
    export_party,
    format_date,
    parse_account,
    parse_agent,
    parse_amount,
    parse_date,
    parse_header,
    parse_party,
)
from .message import Iso20022Message
from .models import CreditTransferData, CreditTransferTransaction, MessageHeader
from .registry import register_message

logger = logging.getLogger(__name__)

AMOUNT_PATHS = (
    ("IntrBkSttlmAmt",),
    ("Amt", "InstdAmt"),
    ("Amt", "EqvtAmt", "Amt"),
)


@register_message
class CustomerCreditTransfer(Iso20022Message):
    """pacs.008 mapper."""

    MESSAGE_TYPE = PACS008
    NAMESPACE = PACS008_NAMESPACE
    ROOT = PACS008_ROOT
    SUPPORTED_NAMESPACES = PACS008_SUPPORTED_NAMESPACES
    DATA_MODEL = CreditTransferData

    # =========================================================================
    # Parsing
    # =========================================================================

    @classmethod
    def parse(cls, root: etree._Element) -> CreditTransferData:
        body = cls.body(root)
        grp_hdr = x.child(body, "GrpHdr")
        header = parse_header(grp_hdr)

        settlement_date = parse_date(
            x.first_text(grp_hdr, ("IntrBkSttlmDt",), ("SttlmInf", "SttlmDt")),
            "IntrBkSttlmDt",
        )
        transactions = [
            cls._parse_transaction(tx, header)
            for tx in x.children(body, "CdtTrfTxInf")
        ]

        if header.number_of_transactions is not None and header.number_of_transactions != len(transactions):
            logger.warning(
                "pacs.008 %s: NbOfTxs is %d but %d CdtTrfTxInf found",
                header.message_id, header.number_of_transactions, len(transactions),
            )

        return CreditTransferData(
            header=header,
            settlement_date=settlement_date,
            settlement_method=x.text(grp_hdr, "SttlmInf", "SttlmMtd"),
            transactions=transactions,
        )

    @staticmethod
    def _parse_transaction(tx: etree._Element, header: MessageHeader) -> CreditTransferTransaction:
        amount_node = None
        for path in AMOUNT_PATHS:
            amount_node = x.child(tx, *path)
            if amount_node is not None:
                break
        if amount_node is None:
            raise InvalidStructureError(
                "CdtTrfTxInf has no IntrBkSttlmAmt or Amt", element="IntrBkSttlmAmt"
            )
        amount, currency = parse_amount(amount_node)

        remittance = x.texts(tx, "RmtInf", "Ustrd")

        return CreditTransferTransaction(
            instruction_id=x.text(tx, "PmtId", "InstrId"),
            end_to_end_id=x.text(tx, "PmtId", "EndToEndId"),
            transaction_id=x.text(tx, "PmtId", "TxId"),
            uetr=x.text(tx, "PmtId", "UETR"),
            amount=amount,
            currency=currency,
            interbank_settlement_date=parse_date(x.text(tx, "IntrBkSttlmDt"), "IntrBkSttlmDt"),
            charge_bearer=x.text(tx, "ChrgBr"),
            debtor=parse_party(x.child(tx, "Dbtr")),
            debtor_account=parse_account(x.child(tx, "DbtrAcct")),
            debtor_agent=parse_agent(x.child(tx, "DbtrAgt")),
            creditor=parse_party(x.child(tx, "Cdtr")),
            creditor_account=parse_account(x.child(tx, "CdtrAcct")),
            creditor_agent=parse_agent(x.child(tx, "CdtrAgt")),
            instructing_agent=parse_agent(x.child(tx, "InstgAgt")) or header.instructing_agent,
            instructed_agent=parse_agent(x.child(tx, "InstdAgt")) or header.instructed_agent,
            purpose_code=x.first_text(tx, ("Purp", "Cd"), ("Purp", "Prtry")),
            remittance_information=REMITTANCE_SEPARATOR.join(remittance) or None,
        )

    # =========================================================================
    # Export
    # =========================================================================

    def to_element(self) -> etree._Element:
        data: CreditTransferData = self.data
        document = x.make_document(self.NAMESPACE)
        body = x.sub(document, self.ROOT)

        export_header(body, data.header, data.settlement_date, data.settlement_method)
        for tx in data.transactions:
            self._export_transaction(body, tx)

        logger.debug(
            "Exported pacs.008 %s with %d transaction(s)",
            data.header.message_id, len(data.transactions),
        )
        return document

    @staticmethod
    def _export_transaction(parent: etree._Element, tx: CreditTransferTransaction) -> None:
        el = x.sub(parent, "CdtTrfTxInf")

        pmt_id = x.sub(el, "PmtId")
        x.add(pmt_id, "InstrId", tx.instruction_id)
        x.add(pmt_id, "EndToEndId", tx.end_to_end_id)
        x.add(pmt_id, "TxId", tx.transaction_id)
        x.add(pmt_id, "UETR", tx.uetr)

        export_amount(el, "IntrBkSttlmAmt", tx.amount, tx.currency)
        x.add(el, "IntrBkSttlmDt", format_date(tx.interbank_settlement_date))
        x.add(el, "ChrgBr", tx.charge_bearer)
        export_agent(el, "InstgAgt", tx.instructing_agent)
        export_agent(el, "InstdAgt", tx.instructed_agent)

        export_party(el, "Dbtr", tx.debtor)
        export_account(el, "DbtrAcct", tx.debtor_account)
        export_agent(el, "DbtrAgt", tx.debtor_agent)
        export_agent(el, "CdtrAgt", tx.creditor_agent)
        export_party(el, "Cdtr", tx.creditor)
        export_account(el, "CdtrAcct", tx.creditor_account)

        if tx.purpose_code:
            x.sub(x.sub(el, "Purp"), "Cd", tx.purpose_code)
        if tx.remittance_information:
            rmt_inf = x.sub(el, "RmtInf")
            for line in tx.remittance_information.split(REMITTANCE_SEPARATOR):
                x.add(rmt_inf, "Ustrd", line)
            x.prune(rmt_inf)

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def settlement_date(self) -> Optional[date]:
        return self.data.settlement_date

    @property
    def settlement_method(self) -> Optional[str]:
        return self.data.settlement_method

    @property
    def number_of_transactions(self) -> int:
        """Declared NbOfTxs, or the parsed count when the header omits it."""
        declared = self.data.header.number_of_transactions
        return declared if declared is not None else len(self.data.transactions)

    @property
    def transactions(self) -> list[CreditTransferTransaction]:
        return list(self.data.transactions)
