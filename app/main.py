import logging
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.errors import ClientError
from app.dtos import EmailConfig
from app.pipeline.llm import is_llm_available
from app.services import get_email_service, init_email_service
from app.controllers import (
    chat_controller,
    tools_controller,
    email_controller,
)

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(title=settings.APP_TITLE)


@app.on_event("startup")
def startup():
    """
    Initialize the email provider from environment variables if configured
    """
    if settings.mailgun_configured and get_email_service() is None:
        init_email_service(EmailConfig(
            api_key=settings.MAILGUN_API_KEY,
            domain=settings.MAILGUN_DOMAIN,
            from_address=settings.MAILGUN_FROM,
            base_url=settings.MAILGUN_BASE_URL
        ))
    if not is_llm_available():
        logger.warning("Completion service not configured, using deterministic fallbacks")


@app.exception_handler(ClientError)
async def client_error_handler(request: Request, exc: ClientError):
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_body()))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # Malformed payloads are client errors (400), not 422
    return JSONResponse(
        status_code=400,
        content=jsonable_encoder({"error": "Missing or invalid fields", "details": exc.errors()})
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "details": str(exc)}
    )


# Include routers
app.include_router(chat_controller.router)
app.include_router(tools_controller.router)
app.include_router(email_controller.router)


@app.get("/health")
def health():
    return {
        "status": "ok",
        "llm_available": is_llm_available(),
        "email_configured": get_email_service() is not None or settings.mailgun_configured
    }


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": settings.APP_TITLE,
        "docs": "/docs",
        "version": "1.0"
    }
