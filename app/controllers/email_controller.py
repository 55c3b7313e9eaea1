"""
Email Controller - Direct sends and invoice reminders
"""
import logging
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.core.errors import ClientError
from app.dtos import EmailMessage
from app.schemas import SendEmailRequest, InvoiceReminderRequest, SingleReminderRequest
from app.services import resolve_email_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/email", tags=["Email"])


@router.post("/send")
async def send_email(req: SendEmailRequest):
    service = resolve_email_service(req.config)

    try:
        outcome = await service.send_email(EmailMessage(
            to=req.to,
            subject=req.subject,
            text=req.text,
            html=req.html
        ))
    except Exception as e:
        logger.error(f"Email send error: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to send email", "details": str(e)}
        )

    return JSONResponse(
        status_code=200 if outcome.success else 500,
        content=outcome.model_dump(exclude_none=True)
    )


@router.post("/invoice-reminder")
async def send_invoice_reminder(req: InvoiceReminderRequest):
    """
    Invoice reminders

    - `mode: "single"` → one EmailSendOutcome
    - `mode: "bulk"` → BulkEmailResult, 500 only when every recipient failed
    """
    body = req.root
    service = resolve_email_service(body.config)

    try:
        if isinstance(body, SingleReminderRequest):
            r = body.recipient
            outcome = await service.send_invoice_reminder(
                r.email, r.name, r.invoice_number, r.amount_due, r.due_date
            )
            return JSONResponse(
                status_code=200 if outcome.success else 500,
                content=outcome.model_dump(exclude_none=True)
            )

        result = await service.send_bulk_invoice_reminders(body.recipients)
    except ClientError:
        raise
    except Exception as e:
        logger.error(f"Invoice reminder error: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to send invoice reminders", "details": str(e)}
        )

    return JSONResponse(
        status_code=200 if result.success else 500,
        content=result.model_dump(exclude_none=True)
    )
