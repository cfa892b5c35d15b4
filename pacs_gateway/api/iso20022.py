"""
ISO 20022 pacs.008 / pacs.002 API

Parse endpoints take the raw XML document as the request body and return
the typed record as JSON. Build endpoints take JSON and return
``application/xml``.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request, Response

from ..errors import Iso20022Error
from ..iso20022 import builders, registry
from ..iso20022 import validation as xsd_validation
from ..iso20022.pacs002 import PaymentStatusReport
from ..iso20022.pacs008 import CustomerCreditTransfer
from ..iso20022.templates import TEMPLATES
from .schemas import (
    ErrorResponse,
    Iso20022Template,
    Pacs002AcspRequest,
    Pacs002StatusRequest,
    Pacs008BuildRequest,
    ParsedMessageResponse,
    ValidationResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ISO 20022 Messages"], responses={400: {"model": ErrorResponse}})

XML_MEDIA_TYPE = "application/xml"


async def _read_xml(request: Request) -> bytes:
    # Raw bytes so lxml decodes with the encoding the XML declaration names
    return await request.body()


def _bad_request(e: Iso20022Error, endpoint: str) -> HTTPException:
    logger.info("%s rejected: %s", endpoint, e.message, extra={"endpoint": endpoint})
    return HTTPException(status_code=400, detail=e.to_dict())


def _parsed(message) -> ParsedMessageResponse:
    return ParsedMessageResponse(messageType=message.MESSAGE_TYPE, data=message.to_dict())


# =============================================================================
# Parse
# =============================================================================

@router.post(
    "/pacs008/parse",
    response_model=ParsedMessageResponse,
    summary="Parse pacs.008 Customer Credit Transfer",
)
async def parse_pacs008(
    request: Request,
    strict: Optional[bool] = Query(None, description="Only accept supported schema versions"),
) -> ParsedMessageResponse:
    xml_content = await _read_xml(request)
    try:
        return _parsed(CustomerCreditTransfer.from_xml(xml_content, strict=strict))
    except Iso20022Error as e:
        raise _bad_request(e, "pacs008/parse") from e


@router.post(
    "/pacs002/parse",
    response_model=ParsedMessageResponse,
    summary="Parse pacs.002 Payment Status Report",
)
async def parse_pacs002(
    request: Request,
    strict: Optional[bool] = Query(None, description="Only accept supported schema versions"),
) -> ParsedMessageResponse:
    xml_content = await _read_xml(request)
    try:
        return _parsed(PaymentStatusReport.from_xml(xml_content, strict=strict))
    except Iso20022Error as e:
        raise _bad_request(e, "pacs002/parse") from e


@router.post(
    "/parse",
    response_model=ParsedMessageResponse,
    summary="Parse any supported ISO 20022 message (auto-detected)",
)
async def parse_any(request: Request) -> ParsedMessageResponse:
    xml_content = await _read_xml(request)
    try:
        return _parsed(registry.parse_message(xml_content))
    except Iso20022Error as e:
        raise _bad_request(e, "parse") from e


# =============================================================================
# Build
# =============================================================================

@router.post(
    "/pacs008/build",
    response_class=Response,
    summary="Build a single-transaction pacs.008",
)
async def build_pacs008(request: Pacs008BuildRequest) -> Response:
    try:
        xml = builders.build_pacs008_single_tx(
            msg_id=request.msg_id,
            end_to_end_id=request.end_to_end_id,
            amount=request.amount.value,
            currency=request.amount.ccy,
            creditor_name=request.creditor_name,
            creditor_iban=request.creditor_iban,
            now=request.cre_dt_tm,
            instr_id=request.instr_id,
            tx_id=request.tx_id,
            uetr=request.uetr,
            debtor_name=request.debtor_name,
            debtor_iban=request.debtor_iban,
            debtor_agent_bic=request.debtor_agent_bic,
            creditor_agent_bic=request.creditor_agent_bic,
            settlement_method=request.settlement_method,
            charge_bearer=request.charge_bearer,
            instructing_agent_bic=request.instg_agt_bic,
            instructed_agent_bic=request.instd_agt_bic,
            remittance_information=request.remittance_information,
        )
    except Iso20022Error as e:
        raise _bad_request(e, "pacs008/build") from e
    return Response(content=xml, media_type=XML_MEDIA_TYPE)


@router.post(
    "/pacs002/acsp",
    response_class=Response,
    summary="Build a pacs.002 ACSP provisional acceptance",
)
async def build_pacs002_acsp(request: Pacs002AcspRequest) -> Response:
    related = request.related
    try:
        xml = builders.build_pacs002_acsp(
            original_message_id=related.orgnl_msg_id,
            msg_id=request.msg_id,
            now=request.now,
            original_message_name_id=related.orgnl_msg_nm_id,
            original_instruction_id=related.orgnl_instr_id,
            original_end_to_end_id=related.orgnl_end_to_end_id,
            original_transaction_id=related.orgnl_tx_id,
            reason_code=request.reason_code,
            additional_info=request.additional_info,
        )
    except Iso20022Error as e:
        raise _bad_request(e, "pacs002/acsp") from e
    return Response(content=xml, media_type=XML_MEDIA_TYPE)


@router.post(
    "/pacs002/status",
    response_class=Response,
    summary="Build a pacs.002 status report",
)
async def build_pacs002_status(request: Pacs002StatusRequest) -> Response:
    related = request.related
    try:
        xml = builders.build_pacs002_status(
            original_message_id=related.orgnl_msg_id,
            status=request.status,
            msg_id=request.msg_id,
            now=request.now,
            original_message_name_id=related.orgnl_msg_nm_id,
            original_instruction_id=related.orgnl_instr_id,
            original_end_to_end_id=related.orgnl_end_to_end_id,
            original_transaction_id=related.orgnl_tx_id,
            original_uetr=related.orgnl_uetr,
            reason_code=request.reason_code,
            reason_proprietary=request.reason_proprietary,
            additional_info=request.additional_info,
            acceptance_date_time=request.acceptance_date_time,
            settlement_date=request.settlement_date,
        )
    except Iso20022Error as e:
        raise _bad_request(e, "pacs002/status") from e
    return Response(content=xml, media_type=XML_MEDIA_TYPE)


# =============================================================================
# Validation and Templates
# =============================================================================

@router.post(
    "/validate",
    response_model=ValidationResponse,
    summary="Validate a pacs.008 / pacs.002 message against its XSD schema",
)
async def validate_message(
    request: Request,
    message_type: Optional[str] = Query(
        None,
        alias="messageType",
        description="Message type (auto-detected if not specified)",
    ),
) -> ValidationResponse:
    xml_content = await _read_xml(request)

    if not message_type:
        message_type = registry.detect_message_type(xml_content)
        if not message_type:
            raise HTTPException(
                status_code=400,
                detail={
                    "error": "UNSUPPORTED_MESSAGE",
                    "message": "Could not detect message type. Please specify messageType parameter.",
                },
            )

    result = xsd_validation.validate_xml(xml_content, message_type)
    return ValidationResponse(**result.to_dict())


@router.get(
    "/schemas/health",
    tags=["Validation Health"],
    summary="Check XSD schema validation health",
)
async def get_schema_health() -> dict:
    return xsd_validation.get_validation_health()


@router.get(
    "/templates",
    response_model=dict[str, Iso20022Template],
    summary="Sample pacs.008 / pacs.002 documents",
)
async def get_templates() -> dict[str, Iso20022Template]:
    return {key: Iso20022Template(**template) for key, template in TEMPLATES.items()}
