"""
ISO 20022 pacs.008 / pacs.002 mapping.

Importing the package registers both message classes with the registry.
"""

from .builders import build_pacs002_acsp, build_pacs002_status, build_pacs008_single_tx
from .constants import ChargeBearer, PaymentStatus
from .models import (
    Account,
    Agent,
    CreditTransferData,
    CreditTransferTransaction,
    GroupStatusInformation,
    MessageHeader,
    OriginalGroupInformation,
    Party,
    PaymentStatusInformation,
    PaymentStatusReportData,
    PostalAddress,
    StatusReason,
    TransactionStatusInformation,
)
from .pacs002 import PaymentStatusReport
from .pacs008 import CustomerCreditTransfer
from .registry import detect_message_type, get_message_class, parse_message, supported_messages

__all__ = [
    "Account",
    "Agent",
    "ChargeBearer",
    "CreditTransferData",
    "CreditTransferTransaction",
    "CustomerCreditTransfer",
    "GroupStatusInformation",
    "MessageHeader",
    "OriginalGroupInformation",
    "Party",
    "PaymentStatus",
    "PaymentStatusInformation",
    "PaymentStatusReport",
    "PaymentStatusReportData",
    "PostalAddress",
    "StatusReason",
    "TransactionStatusInformation",
    "build_pacs002_acsp",
    "build_pacs002_status",
    "build_pacs008_single_tx",
    "detect_message_type",
    "get_message_class",
    "parse_message",
    "supported_messages",
]
