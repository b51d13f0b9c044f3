"""Privacy endpoints.

POST /api/privacy/compliance-check  — validate a payload against a rule set
POST /api/privacy/pii-redact        — redact PII from an arbitrary JSON value
POST /api/privacy/data-encrypt      — seal a JSON value into an AES-GCM envelope

Bodies are parsed inside each handler so that malformed JSON or a bad
shape maps to the handler's own generic error instead of a 422.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.dependencies import get_encryptor
from schemas.api import (
    ComplianceCheckRequest,
    ComplianceCheckResponse,
    EncryptRequest,
    EncryptResponse,
    ErrorResponse,
    RedactRequest,
    RedactResponse,
)
from shield.encryption import EncryptionError, FieldEncryptor
from shield.redactor import redact_envelope
from shield.rules import RULE_SETS, UnknownRuleSetError, check_compliance, is_truthy

logger = logging.getLogger(__name__)
router = APIRouter()

INVALID_COMPLIANCE_TYPE = "Invalid compliance type"
COMPLIANCE_FAILED = "Failed to validate compliance"
REDACTION_FAILED = "Failed to process data"
ENCRYPTION_FAILED = "Failed to encrypt data"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


@router.post(
    "/compliance-check",
    response_model=ComplianceCheckResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def compliance_check(request: Request):
    """Check a payload against the GDPR or CCPA rule set."""
    try:
        payload = await request.json()
        if not isinstance(payload, dict):
            raise TypeError("Request body must be a JSON object")

        # The type is checked before anything about the data is looked at.
        compliance_type = payload.get("type")
        if not isinstance(compliance_type, str) or compliance_type not in RULE_SETS:
            logger.info("Rejected compliance check with unknown type")
            return error_response(400, INVALID_COMPLIANCE_TYPE)

        body = ComplianceCheckRequest.model_validate(payload)
        result = check_compliance(body.type, body.data)
    except UnknownRuleSetError:
        return error_response(400, INVALID_COMPLIANCE_TYPE)
    except (ValueError, TypeError) as exc:
        logger.warning("Compliance check failed: %s", type(exc).__name__)
        return error_response(500, COMPLIANCE_FAILED)
    except Exception:
        logger.exception("Unexpected error during compliance check")
        return error_response(500, COMPLIANCE_FAILED)

    if not result.compliant:
        logger.info(
            "Payload not %s compliant (%d required fields missing)",
            body.type,
            len(result.missing),
        )
    return ComplianceCheckResponse(compliant=result.compliant, missing=result.missing)


@router.post(
    "/pii-redact",
    response_model=RedactResponse,
    responses={500: {"model": ErrorResponse}},
)
async def pii_redact(request: Request):
    """Redact emails, phone numbers, IPs and national-ID numbers from ``data``."""
    try:
        payload = await request.json()
        body = RedactRequest.model_validate(payload)
        bypass = is_truthy(body.sys)
        envelope = redact_envelope(body.data, sys=bypass)
    except (ValueError, TypeError) as exc:
        logger.warning("PII redaction failed: %s", type(exc).__name__)
        return error_response(500, REDACTION_FAILED)
    except Exception:
        logger.exception("Unexpected error during PII redaction")
        return error_response(500, REDACTION_FAILED)

    if bypass:
        logger.debug("Redaction skipped for system payload")
    return RedactResponse(**envelope)


@router.post(
    "/data-encrypt",
    response_model=EncryptResponse,
    responses={500: {"model": ErrorResponse}},
)
async def data_encrypt(
    request: Request,
    encryptor: FieldEncryptor = Depends(get_encryptor),
):
    """Encrypt ``data`` under the configured key with a fresh nonce."""
    try:
        payload = await request.json()
        body = EncryptRequest.model_validate(payload)
        encrypted = encryptor.seal(body.data)
    except (EncryptionError, ValueError, TypeError) as exc:
        logger.warning("Field encryption failed: %s", type(exc).__name__)
        return error_response(500, ENCRYPTION_FAILED)
    except Exception:
        logger.exception("Unexpected error during field encryption")
        return error_response(500, ENCRYPTION_FAILED)

    return EncryptResponse(encrypted=encrypted)
