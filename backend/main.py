import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from config import get_settings
from api.routes import privacy
from api.routes.privacy import ENCRYPTION_FAILED, error_response
from shield.encryption import EncryptionConfigError

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Privacy Shield API")

    # Safety checks
    if not settings.encryption_key:
        logger.warning(
            "ENCRYPTION_KEY is not set! /data-encrypt will fail. "
            "Generate one with: openssl rand -hex 32"
        )
    elif len(settings.encryption_key) < 32:
        logger.warning(
            "ENCRYPTION_KEY looks too short (%d chars). "
            "Use a 64-char hex string (256 bits).",
            len(settings.encryption_key),
        )

    yield
    logger.info("Shutting down Privacy Shield API")


app = FastAPI(
    title="Privacy Shield",
    description="PII redaction, compliance checks and field encryption",
    version="0.1.0",
    lifespan=lifespan,
)

cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "X-Requested-With"],
)

app.include_router(privacy.router, prefix="/api/privacy", tags=["privacy"])


@app.exception_handler(EncryptionConfigError)
async def encryption_config_error(request: Request, exc: EncryptionConfigError):
    # Raised while building the encryptor dependency, before the handler runs.
    logger.error("Field encryption is not configured: %s", exc)
    return error_response(500, ENCRYPTION_FAILED)


@app.get("/api/health")
async def health():
    return {"status": "ok"}
