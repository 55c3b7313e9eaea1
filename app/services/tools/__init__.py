"""
Tool handlers

Each handler takes its validated params model and returns a ToolInvocationResult.
"""
from app.services.tools.email_tool import generate_email
from app.services.tools.export_tool import export_data, export_to_csv
from app.services.tools.invoice_tool import generate_invoice
from app.services.tools.report_tool import generate_report
from app.services.tools.send_email_tool import send_email

__all__ = [
    "generate_report",
    "generate_email",
    "generate_invoice",
    "send_email",
    "export_data",
    "export_to_csv",
]
