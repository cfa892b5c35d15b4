"""
ISO 20022 Constants for pacs.008 / pacs.002 mapping

This module contains the namespaces, root element names and external code
sets used when parsing, exporting and building pacs messages.

Reference: https://www.iso20022.org/catalogue-messages/iso-20022-messages-archive
"""

import re
from enum import Enum

# =============================================================================
# Namespaces
# =============================================================================

NAMESPACE_PREFIX = "urn:iso:std:iso:20022:tech:xsd:"

PACS008 = "pacs.008"
PACS002 = "pacs.002"

PACS008_NAMESPACE = NAMESPACE_PREFIX + "pacs.008.001.08"
PACS008_SUPPORTED_NAMESPACES = (
    PACS008_NAMESPACE,
    NAMESPACE_PREFIX + "pacs.008.001.10",
    NAMESPACE_PREFIX + "pacs.008.001.13",
)
PACS008_ROOT = "FIToFICstmrCdtTrf"

PACS002_NAMESPACE = NAMESPACE_PREFIX + "pacs.002.001.10"
PACS002_SUPPORTED_NAMESPACES = (
    PACS002_NAMESPACE,
    NAMESPACE_PREFIX + "pacs.002.001.12",
    NAMESPACE_PREFIX + "pacs.002.001.14",
    NAMESPACE_PREFIX + "pacs.002.001.15",
)
PACS002_ROOT = "FIToFIPmtStsRpt"

# Document child element -> message type, for namespace-less documents
ROOT_ELEMENTS = {
    PACS008_ROOT: PACS008,
    PACS002_ROOT: PACS002,
}

# "pacs.008.001.08" inside a namespace URI
MESSAGE_NAME_PATTERN = re.compile(r"([a-z]{4}\.\d{3})\.\d{3}\.\d{2}")

# =============================================================================
# ISO 20022 ExternalPaymentTransactionStatus1Code
# =============================================================================

class PaymentStatus(str, Enum):
    """ISO 20022 ExternalPaymentTransactionStatus1Code."""
    ACCC = "ACCC"  # Accepted Credit Settlement Completed
    ACCP = "ACCP"  # Accepted Customer Profile
    ACFC = "ACFC"  # Accepted Funds Checked
    ACIS = "ACIS"  # Accepted and Change Information Sent
    ACPD = "ACPD"  # Accepted Clearing Processed
    ACSC = "ACSC"  # Accepted Settlement Completed
    ACSP = "ACSP"  # Accepted Settlement In Process
    ACTC = "ACTC"  # Accepted Technical Validation
    ACWC = "ACWC"  # Accepted With Change
    ACWP = "ACWP"  # Accepted Without Posting
    BLCK = "BLCK"  # Blocked
    CANC = "CANC"  # Cancelled
    PART = "PART"  # Partially Accepted
    PATC = "PATC"  # Partially Accepted Technical Correct
    PDNG = "PDNG"  # Pending
    PRES = "PRES"  # Presented
    RCVD = "RCVD"  # Received
    RJCT = "RJCT"  # Rejected


FINAL_STATUSES = {PaymentStatus.ACCC, PaymentStatus.ACSC, PaymentStatus.RJCT, PaymentStatus.CANC}


# =============================================================================
# ISO 20022 ChargeBearerType1Code
# =============================================================================

class ChargeBearer(str, Enum):
    CHQB = "CHQB"  # Charges borne by the debtor's agent on behalf of creditor
    CRED = "CRED"  # Borne by creditor
    DEBT = "DEBT"  # Borne by debtor
    SHAR = "SHAR"  # Shared
    SLEV = "SLEV"  # Following service level


# =============================================================================
# Amount and count patterns
# =============================================================================

# Builder input
AMOUNT_PATTERN = re.compile(r"^\d+(\.\d{1,6})?$")
CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")

# Parsed amounts: plain decimal notation only, ActiveCurrencyAndAmount totalDigits
DECIMAL_AMOUNT_PATTERN = re.compile(r"^[0-9]+(\.[0-9]+)?$")
MAX_AMOUNT_DIGITS = 18

# GrpHdr/NbOfTxs is Max15NumericText
NB_OF_TXS_PATTERN = re.compile(r"^[0-9]{1,15}$")

# AddtlInf entries are joined with this separator when a reason repeats it
ADDITIONAL_INFO_SEPARATOR = " | "
REMITTANCE_SEPARATOR = "\n"
