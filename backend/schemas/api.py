from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


# --- Compliance Schemas ---

class ComplianceCheckRequest(BaseModel):
    type: str
    data: dict[str, Any]


class ComplianceCheckResponse(BaseModel):
    compliant: bool
    missing: list[str] = Field(default_factory=list)


# --- Redaction Schemas ---

class RedactRequest(BaseModel):
    data: Any = None
    sys: Any = None


class RedactResponse(BaseModel):
    data: Any = None


# --- Encryption Schemas ---

class EncryptRequest(BaseModel):
    data: Any = None


class EncryptResponse(BaseModel):
    encrypted: str


# --- Errors ---

class ErrorResponse(BaseModel):
    error: str
