"""
Typed records for pacs.008 and pacs.002 messages.

These are the in-memory side of the mapping: parsers produce them,
exporters consume them. All models are frozen; a record is built once per
parse/build call and never mutated.
"""

from datetime import date, datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from .constants import FINAL_STATUSES, PaymentStatus


class FrozenModel(BaseModel):
    """Immutable base for all message records."""

    class Config:
        frozen = True


# =============================================================================
# 1. Common Building Blocks
# =============================================================================

class PostalAddress(FrozenModel):
    """ISO 20022 PstlAdr (Postal Address)."""
    country: Optional[str] = None
    town_name: Optional[str] = None
    post_code: Optional[str] = None
    street_name: Optional[str] = None
    building_number: Optional[str] = None
    address_lines: list[str] = Field(default_factory=list)


class Party(FrozenModel):
    """Debtor, creditor or initiating party."""
    name: Optional[str] = None
    id: Optional[str] = None        # OrgId/Othr/Id or PrvtId/Othr/Id
    bic: Optional[str] = None       # OrgId/AnyBIC
    postal_address: Optional[PostalAddress] = None


class Account(FrozenModel):
    """Cash account identification (IBAN or proprietary)."""
    iban: Optional[str] = None
    other_id: Optional[str] = None
    currency: Optional[str] = None
    name: Optional[str] = None

    @property
    def identification(self) -> Optional[str]:
        return self.iban or self.other_id


class Agent(FrozenModel):
    """Financial institution identification."""
    bic: Optional[str] = None
    clearing_system_member_id: Optional[str] = None
    name: Optional[str] = None


class MessageHeader(FrozenModel):
    """GrpHdr block shared by both message types."""
    message_id: str
    creation_date_time: Optional[datetime] = None
    number_of_transactions: Optional[int] = Field(default=None, ge=0)
    initiating_party: Optional[Party] = None
    instructing_agent: Optional[Agent] = None
    instructed_agent: Optional[Agent] = None


# =============================================================================
# 2. pacs.008 FI To FI Customer Credit Transfer
# =============================================================================

class CreditTransferTransaction(FrozenModel):
    """One CdtTrfTxInf entry. ``amount`` is in minor units of ``currency``."""
    instruction_id: Optional[str] = None
    end_to_end_id: Optional[str] = None
    transaction_id: Optional[str] = None
    uetr: Optional[str] = None

    amount: int = Field(ge=0)
    currency: str

    interbank_settlement_date: Optional[date] = None
    charge_bearer: Optional[str] = None

    debtor: Optional[Party] = None
    debtor_account: Optional[Account] = None
    debtor_agent: Optional[Agent] = None

    creditor: Optional[Party] = None
    creditor_account: Optional[Account] = None
    creditor_agent: Optional[Agent] = None

    instructing_agent: Optional[Agent] = None
    instructed_agent: Optional[Agent] = None

    purpose_code: Optional[str] = None
    remittance_information: Optional[str] = None

    @property
    def debtor_agent_bic(self) -> Optional[str]:
        return self.debtor_agent.bic if self.debtor_agent else None

    @property
    def creditor_agent_bic(self) -> Optional[str]:
        return self.creditor_agent.bic if self.creditor_agent else None

    @property
    def instructing_agent_bic(self) -> Optional[str]:
        return self.instructing_agent.bic if self.instructing_agent else None

    @property
    def instructed_agent_bic(self) -> Optional[str]:
        return self.instructed_agent.bic if self.instructed_agent else None


class CreditTransferData(FrozenModel):
    """A whole pacs.008 document."""
    header: MessageHeader
    settlement_date: Optional[date] = None
    settlement_method: Optional[str] = None
    transactions: list[CreditTransferTransaction] = Field(default_factory=list)


# =============================================================================
# 3. pacs.002 FI To FI Payment Status Report
# =============================================================================

class StatusReason(FrozenModel):
    """StsRsnInf: reason code (Cd or Prtry) and free text."""
    code: Optional[str] = None
    proprietary: bool = False
    additional_information: Optional[str] = None


class BaseStatusInformation(FrozenModel):
    status: PaymentStatus
    reasons: list[StatusReason] = Field(default_factory=list)

    @property
    def reason(self) -> Optional[StatusReason]:
        return self.reasons[0] if self.reasons else None

    @property
    def is_final(self) -> bool:
        return self.status in FINAL_STATUSES


class GroupStatusInformation(BaseStatusInformation):
    type: Literal["group"] = "group"
    original_message_id: Optional[str] = None
    original_message_name_id: Optional[str] = None


class PaymentStatusInformation(BaseStatusInformation):
    type: Literal["payment"] = "payment"
    original_payment_information_id: Optional[str] = None


class TransactionStatusInformation(BaseStatusInformation):
    type: Literal["transaction"] = "transaction"
    original_instruction_id: Optional[str] = None
    original_end_to_end_id: Optional[str] = None
    original_transaction_id: Optional[str] = None
    original_uetr: Optional[str] = None

    acceptance_date_time: Optional[datetime] = None
    settlement_date: Optional[date] = None

    original_amount: Optional[int] = Field(default=None, ge=0)
    original_currency: Optional[str] = None


StatusInformation = Annotated[
    Union[GroupStatusInformation, PaymentStatusInformation, TransactionStatusInformation],
    Field(discriminator="type"),
]


class OriginalGroupInformation(FrozenModel):
    original_message_id: Optional[str] = None
    original_message_name_id: Optional[str] = None     # e.g. "pacs.008.001.08"
    original_creation_date_time: Optional[datetime] = None


class PaymentStatusReportData(FrozenModel):
    """A whole pacs.002 document."""
    header: MessageHeader
    original_group_information: Optional[OriginalGroupInformation] = None
    status_informations: list[StatusInformation] = Field(default_factory=list)
