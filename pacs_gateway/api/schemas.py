"""
Pydantic Schemas for the pacs gateway API

Request bodies for the builder endpoints and the response envelopes shared
by the ISO 20022 routes. Field names are camelCase on the wire.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field

from ..iso20022.constants import ChargeBearer, PaymentStatus


# =============================================================================
# 1. Common Models
# =============================================================================

class ErrorDetail(BaseModel):
    """Error payload returned as the ``detail`` of a 400 response."""
    error: str                       # Machine-readable error code
    message: str                     # Human-readable message
    element: Optional[str] = None    # ISO 20022 element at fault


class ErrorResponse(BaseModel):
    detail: ErrorDetail


# =============================================================================
# 2. Builder Requests
# =============================================================================

class AmountInput(BaseModel):
    """Major-unit amount, e.g. ``{"ccy": "EUR", "value": "1000.00"}``."""
    ccy: str
    value: str


class Pacs008BuildRequest(BaseModel):
    msg_id: str = Field(alias="msgId")
    cre_dt_tm: Optional[datetime] = Field(default=None, alias="creDtTm")

    instr_id: Optional[str] = Field(default=None, alias="instrId")
    end_to_end_id: str = Field(alias="endToEndId")
    tx_id: Optional[str] = Field(default=None, alias="txId")
    uetr: Optional[str] = None

    amount: AmountInput

    creditor_name: str = Field(alias="creditorName")
    creditor_iban: str = Field(alias="creditorIban")
    debtor_name: Optional[str] = Field(default=None, alias="debtorName")
    debtor_iban: Optional[str] = Field(default=None, alias="debtorIban")
    debtor_agent_bic: Optional[str] = Field(default=None, alias="debtorAgentBIC")
    creditor_agent_bic: Optional[str] = Field(default=None, alias="creditorAgentBIC")

    settlement_method: Optional[str] = Field(default="CLRG", alias="settlementMethod")
    charge_bearer: Optional[ChargeBearer] = Field(default=None, alias="chargeBearer")
    instg_agt_bic: Optional[str] = Field(default=None, alias="instgAgtBIC")
    instd_agt_bic: Optional[str] = Field(default=None, alias="instdAgtBIC")

    remittance_information: Optional[str] = Field(default=None, alias="remittanceInformation")

    class Config:
        populate_by_name = True


class RelatedIds(BaseModel):
    """Identifiers of the pacs.008 a status report refers to."""
    orgnl_msg_id: str = Field(alias="orgnlMsgId")
    orgnl_msg_nm_id: Optional[str] = Field(default=None, alias="orgnlMsgNmId")
    orgnl_instr_id: Optional[str] = Field(default=None, alias="orgnlInstrId")
    orgnl_end_to_end_id: Optional[str] = Field(default=None, alias="orgnlEndToEndId")
    orgnl_tx_id: Optional[str] = Field(default=None, alias="orgnlTxId")
    orgnl_uetr: Optional[str] = Field(default=None, alias="orgnlUETR")

    class Config:
        populate_by_name = True


class Pacs002AcspRequest(BaseModel):
    msg_id: Optional[str] = Field(default=None, alias="msgId")
    now: Optional[datetime] = None
    related: RelatedIds
    reason_code: Optional[str] = Field(default=None, alias="reasonCode")
    additional_info: Optional[str] = Field(default=None, alias="additionalInfo")

    class Config:
        populate_by_name = True


class Pacs002StatusRequest(BaseModel):
    status: PaymentStatus
    msg_id: Optional[str] = Field(default=None, alias="msgId")
    now: Optional[datetime] = None
    related: RelatedIds
    reason_code: Optional[str] = Field(default=None, alias="reasonCode")
    reason_proprietary: bool = Field(default=False, alias="reasonProprietary")
    additional_info: Optional[str] = Field(default=None, alias="additionalInfo")
    acceptance_date_time: Optional[datetime] = Field(default=None, alias="acceptanceDateTime")
    settlement_date: Optional[date] = Field(default=None, alias="settlementDate")

    class Config:
        populate_by_name = True


# =============================================================================
# 3. Responses
# =============================================================================

class ParsedMessageResponse(BaseModel):
    """Typed record of a parsed message."""
    messageType: str
    data: dict


class Iso20022Template(BaseModel):
    """Sample ISO 20022 message template."""
    messageType: str
    name: str
    description: str
    sample_xml: str = Field(alias="sampleXml")

    class Config:
        populate_by_name = True


class ValidationResponse(BaseModel):
    """Response from XSD schema validation endpoint."""
    valid: bool
    messageType: Optional[str] = None
    errors: list[str] = []
    warnings: list[str] = []
