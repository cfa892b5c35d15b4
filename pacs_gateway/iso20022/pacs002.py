"""
FI To FI Payment Status Report (pacs.002)

Status entries are read at three levels:

- group:        OrgnlGrpInfAndSts/GrpSts
- payment:      OrgnlGrpInfAndSts/OrgnlPmtInfAndSts[]/PmtInfSts
- transaction:  OrgnlGrpInfAndSts/OrgnlPmtInfAndSts[]/TxInfAndSts[],
                root TxInfAndSts[] and root OrgnlTxInfAndSts[]

and kept in that order in ``status_informations``. Export writes one root
TxInfAndSts per transaction entry (pacs.002.001.10 layout).
"""

import logging
from typing import Optional

from lxml import etree

from . import xmltree as x
from .constants import (
    PACS002,
    PACS002_NAMESPACE,
    PACS002_ROOT,
    PACS002_SUPPORTED_NAMESPACES,
)
from .fields import (
    export_amount,
    export_header,
    export_reason,
    format_date,
    format_datetime,
    parse_amount,
    parse_date,
    parse_datetime,
    parse_header,
    parse_reasons,
    parse_status,
)
from .message import Iso20022Message
from .models import (
    GroupStatusInformation,
    OriginalGroupInformation,
    Party,
    PaymentStatusInformation,
    PaymentStatusReportData,
    TransactionStatusInformation,
)
from .registry import register_message

logger = logging.getLogger(__name__)


@register_message
class PaymentStatusReport(Iso20022Message):
    """pacs.002 mapper."""

    MESSAGE_TYPE = PACS002
    NAMESPACE = PACS002_NAMESPACE
    ROOT = PACS002_ROOT
    SUPPORTED_NAMESPACES = PACS002_SUPPORTED_NAMESPACES
    DATA_MODEL = PaymentStatusReportData

    # =========================================================================
    # Parsing
    # =========================================================================

    @classmethod
    def parse(cls, root: etree._Element) -> PaymentStatusReportData:
        body = cls.body(root)
        header = parse_header(x.child(body, "GrpHdr"))
        orgnl_grp = x.child(body, "OrgnlGrpInfAndSts")

        original_group = None
        if orgnl_grp is not None:
            original_group = OriginalGroupInformation(
                original_message_id=x.text(orgnl_grp, "OrgnlMsgId"),
                original_message_name_id=x.text(orgnl_grp, "OrgnlMsgNmId"),
                original_creation_date_time=parse_datetime(
                    x.text(orgnl_grp, "OrgnlCreDtTm"), "OrgnlCreDtTm"
                ),
            )

        statuses = []
        if x.text(orgnl_grp, "GrpSts") is not None:
            statuses.append(GroupStatusInformation(
                original_message_id=x.text(orgnl_grp, "OrgnlMsgId"),
                original_message_name_id=x.text(orgnl_grp, "OrgnlMsgNmId"),
                status=parse_status(x.text(orgnl_grp, "GrpSts"), "GrpSts"),
                reasons=parse_reasons(orgnl_grp),
            ))

        payments = x.children(orgnl_grp, "OrgnlPmtInfAndSts")
        for payment in payments:
            if x.text(payment, "PmtInfSts") is None:
                continue
            statuses.append(PaymentStatusInformation(
                original_payment_information_id=x.text(payment, "OrgnlPmtInfId"),
                status=parse_status(x.text(payment, "PmtInfSts"), "PmtInfSts"),
                reasons=parse_reasons(payment),
            ))

        tx_nodes = [tx for payment in payments for tx in x.children(payment, "TxInfAndSts")]
        tx_nodes += x.children(body, "TxInfAndSts")
        tx_nodes += x.children(body, "OrgnlTxInfAndSts")
        statuses.extend(cls._parse_transaction(tx) for tx in tx_nodes)

        return PaymentStatusReportData(
            header=header,
            original_group_information=original_group,
            status_informations=statuses,
        )

    @staticmethod
    def _parse_transaction(tx: etree._Element) -> TransactionStatusInformation:
        original_amount = parse_amount(x.child(tx, "OrgnlTxRef", "IntrBkSttlmAmt"))
        amount, currency = original_amount if original_amount else (None, None)

        return TransactionStatusInformation(
            original_instruction_id=x.first_text(tx, ("OrgnlInstrId",), ("OrgnlPmtId", "InstrId")),
            original_end_to_end_id=x.first_text(tx, ("OrgnlEndToEndId",), ("OrgnlPmtId", "EndToEndId")),
            original_transaction_id=x.first_text(tx, ("OrgnlTxId",), ("OrgnlPmtId", "TxId")),
            original_uetr=x.first_text(tx, ("OrgnlUETR",), ("OrgnlPmtId", "UETR")),
            status=parse_status(x.text(tx, "TxSts"), "TxSts"),
            reasons=parse_reasons(tx),
            acceptance_date_time=parse_datetime(x.text(tx, "AccptncDtTm"), "AccptncDtTm"),
            settlement_date=parse_date(
                x.first_text(
                    tx,
                    ("SttlmDt",),
                    ("FctvIntrBkSttlmDt", "Dt"),
                    ("OrgnlTxRef", "IntrBkSttlmDt"),
                ),
                "SttlmDt",
            ),
            original_amount=amount,
            original_currency=currency,
        )

    # =========================================================================
    # Export
    # =========================================================================

    def to_element(self) -> etree._Element:
        data: PaymentStatusReportData = self.data
        document = x.make_document(self.NAMESPACE)
        body = x.sub(document, self.ROOT)
        export_header(body, data.header)

        group = self.group_status
        original = data.original_group_information
        payments = self.payment_statuses

        if original is not None or group is not None or payments:
            orgnl_grp = x.sub(body, "OrgnlGrpInfAndSts")
            x.add(orgnl_grp, "OrgnlMsgId", _first(
                original and original.original_message_id,
                group and group.original_message_id,
            ))
            x.add(orgnl_grp, "OrgnlMsgNmId", _first(
                original and original.original_message_name_id,
                group and group.original_message_name_id,
            ))
            if original is not None:
                x.add(orgnl_grp, "OrgnlCreDtTm", format_datetime(original.original_creation_date_time))
            if group is not None:
                x.sub(orgnl_grp, "GrpSts", group.status.value)
                for reason in group.reasons:
                    export_reason(orgnl_grp, reason)
            for payment in payments:
                pmt = x.sub(orgnl_grp, "OrgnlPmtInfAndSts")
                x.add(pmt, "OrgnlPmtInfId", payment.original_payment_information_id)
                x.sub(pmt, "PmtInfSts", payment.status.value)
                for reason in payment.reasons:
                    export_reason(pmt, reason)

        for tx in self.transaction_statuses:
            self._export_transaction(body, tx)

        logger.debug(
            "Exported pacs.002 %s with %d status entries",
            data.header.message_id, len(data.status_informations),
        )
        return document

    @staticmethod
    def _export_transaction(parent: etree._Element, tx: TransactionStatusInformation) -> None:
        el = x.sub(parent, "TxInfAndSts")
        x.add(el, "OrgnlInstrId", tx.original_instruction_id)
        x.add(el, "OrgnlEndToEndId", tx.original_end_to_end_id)
        x.add(el, "OrgnlTxId", tx.original_transaction_id)
        x.add(el, "OrgnlUETR", tx.original_uetr)
        x.sub(el, "TxSts", tx.status.value)
        for reason in tx.reasons:
            export_reason(el, reason)
        x.add(el, "AccptncDtTm", format_datetime(tx.acceptance_date_time))
        if tx.settlement_date is not None:
            x.sub(x.sub(el, "FctvIntrBkSttlmDt"), "Dt", format_date(tx.settlement_date))
        if tx.original_amount is not None and tx.original_currency:
            export_amount(x.sub(el, "OrgnlTxRef"), "IntrBkSttlmAmt", tx.original_amount, tx.original_currency)

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def initiating_party(self) -> Optional[Party]:
        return self.data.header.initiating_party

    @property
    def original_group_information(self) -> Optional[OriginalGroupInformation]:
        return self.data.original_group_information

    @property
    def status_informations(self) -> list:
        return list(self.data.status_informations)

    @property
    def group_status(self) -> Optional[GroupStatusInformation]:
        for info in self.data.status_informations:
            if isinstance(info, GroupStatusInformation):
                return info
        return None

    @property
    def payment_statuses(self) -> list[PaymentStatusInformation]:
        return [i for i in self.data.status_informations if isinstance(i, PaymentStatusInformation)]

    @property
    def transaction_statuses(self) -> list[TransactionStatusInformation]:
        return [i for i in self.data.status_informations if isinstance(i, TransactionStatusInformation)]

    def find_transaction(
        self,
        end_to_end_id: Optional[str] = None,
        transaction_id: Optional[str] = None,
        uetr: Optional[str] = None,
    ) -> Optional[TransactionStatusInformation]:
        """First transaction status matching every given original identifier."""
        if end_to_end_id is None and transaction_id is None and uetr is None:
            raise ValueError("find_transaction needs end_to_end_id, transaction_id or uetr")
        for tx in self.transaction_statuses:
            if end_to_end_id is not None and tx.original_end_to_end_id != end_to_end_id:
                continue
            if transaction_id is not None and tx.original_transaction_id != transaction_id:
                continue
            if uetr is not None and tx.original_uetr != uetr:
                continue
            return tx
        return None


def _first(*values):
    for value in values:
        if value:
            return value
    return None
