"""Async client for the privacy-shield HTTP endpoints.

Callers that hold user data use this to redact it, check it against a
compliance rule set, or seal it into an encrypted envelope before storing
it elsewhere. Redaction and encryption are independent calls; a caller
that wants both redacts first and encrypts the redacted value.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from shield.encryption import ENVELOPE_DELIMITER

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "/api/privacy"


class ShieldRequestError(Exception):
    """A privacy-shield endpoint answered with a non-2xx status."""

    def __init__(self, status_code: int, error: str) -> None:
        super().__init__(f"{status_code}: {error}")
        self.status_code = status_code
        self.error = error


class ShieldClient:
    """Thin wrapper over ``httpx.AsyncClient`` for the three handlers."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        prefix: str = DEFAULT_PREFIX,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ):
        self.prefix = prefix.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"), timeout=timeout
        )

    async def __aenter__(self) -> "ShieldClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # -- public API ----------------------------------------------------------

    async def redact(self, data: Any) -> Any:
        """Return *data* with PII replaced by redaction tokens."""
        body = await self._post("pii-redact", {"data": data})
        return body["data"]

    async def check(self, data: dict[str, Any], compliance_type: str) -> dict[str, Any]:
        """Return ``{"compliant": bool, "missing": [...]}`` for *data*."""
        return await self._post("compliance-check", {"type": compliance_type, "data": data})

    async def encrypt(self, data: Any) -> str:
        """Return the ``<ciphertext_b64>.<nonce_b64>`` envelope for *data*."""
        body = await self._post("data-encrypt", {"data": data})
        return body["encrypted"]

    async def encrypt_parts(self, data: Any) -> tuple[str, str]:
        """Encrypt *data* and return the base64 ciphertext and nonce separately."""
        envelope = await self.encrypt(data)
        ciphertext_b64, nonce_b64 = envelope.split(ENVELOPE_DELIMITER)
        return ciphertext_b64, nonce_b64

    # -- internals -----------------------------------------------------------

    async def _post(self, route: str, payload: dict[str, Any]) -> dict[str, Any]:
        resp = await self._client.post(f"{self.prefix}/{route}", json=payload)
        if resp.is_success:
            return resp.json()

        error = resp.reason_phrase
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and "error" in body:
            error = body["error"]
        logger.warning("Privacy shield %s failed with status %d", route, resp.status_code)
        raise ShieldRequestError(resp.status_code, error)
