"""
generateInvoice: invoice content rendered to PDF
"""
import logging
import time
from datetime import date, timedelta
from typing import Any, Dict, List, Sequence

from app.dtos import FileArtifact, ToolInvocationResult
from app.pipeline.llm.prompts import build_invoice_prompt
from app.schemas import GenerateInvoiceParams
from app.services.tools.base import generate_json, safe_filename
from app.services.tools.rendering import render_pdf_async

logger = logging.getLogger(__name__)

PAYMENT_TERMS_DAYS = 30


def _amount(row: Dict[str, Any]) -> float:
    value = row.get("amount")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return 0.0


def fallback_invoice(rows: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
    """Invoice over the given rows, totals summed from their `amount` field"""
    today = date.today()
    subtotal = sum(_amount(r) for r in rows)
    return {
        "invoiceNumber": f"INV-{int(time.time() * 1000)}",
        "date": today.isoformat(),
        "dueDate": (today + timedelta(days=PAYMENT_TERMS_DAYS)).isoformat(),
        "items": list(rows),
        "subtotal": subtotal,
        "tax": 0,
        "total": subtotal
    }


def _money(value: Any) -> str:
    try:
        return f"${float(value):,.2f}"
    except (TypeError, ValueError):
        return "$0.00"


def invoice_sections(invoice: Dict[str, Any]) -> List[tuple]:
    details = [
        f"Invoice #: {invoice['invoiceNumber']}",
        f"Date: {invoice.get('date', '')}",
        f"Due Date: {invoice.get('dueDate', '')}",
    ]
    if invoice.get("paymentTerms"):
        details.append(f"Payment Terms: {invoice['paymentTerms']}")

    totals = [
        f"Subtotal: {_money(invoice.get('subtotal'))}",
        f"Tax: {_money(invoice.get('tax'))}",
        f"Total: {_money(invoice.get('total'))}",
    ]
    return [("Details", details), ("Totals", totals)]


async def generate_invoice(params: GenerateInvoiceParams) -> ToolInvocationResult:
    invoice = await generate_json(build_invoice_prompt(params.data, params.context), temperature=0.2)
    if invoice is None or not invoice.get("invoiceNumber"):
        invoice = fallback_invoice(params.data)

    items = invoice.get("items")
    if not isinstance(items, list) or not all(isinstance(i, dict) for i in items):
        items = list(params.data)

    number = safe_filename(str(invoice["invoiceNumber"]), default="invoice")
    content = await render_pdf_async(
        "INVOICE",
        invoice_sections(invoice),
        items,
        table_title="Items",
        chart=False
    )

    logger.info(f"Invoice {number} rendered ({len(items)} items)")
    return ToolInvocationResult.ok(
        "invoice",
        payload={"invoice_number": str(invoice["invoiceNumber"]), "total": invoice.get("total")},
        file=FileArtifact(
            filename=f"invoice_{number}.pdf",
            mime_type="application/pdf",
            content=content
        )
    )
