from .chat_schema import (
    ChatRequest,
    AnalysisResponse,
    QueryGenerationResponse,
    ConversationContextResponse,
)
from .tool_schema import (
    ToolRequest,
    ToolListResponse,
    GenerateReportParams,
    GenerateEmailParams,
    GenerateInvoiceParams,
    SendEmailParams,
    ExportDataParams,
)
from .email_schema import (
    SendEmailRequest,
    SingleReminderRequest,
    BulkReminderRequest,
    InvoiceReminderRequest,
)

__all__ = [
    "ChatRequest",
    "AnalysisResponse",
    "QueryGenerationResponse",
    "ConversationContextResponse",
    "ToolRequest",
    "ToolListResponse",
    "GenerateReportParams",
    "GenerateEmailParams",
    "GenerateInvoiceParams",
    "SendEmailParams",
    "ExportDataParams",
    "SendEmailRequest",
    "SingleReminderRequest",
    "BulkReminderRequest",
    "InvoiceReminderRequest",
]
