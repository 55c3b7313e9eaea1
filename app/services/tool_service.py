"""
Service for tool dispatch
Closed registry of named tools, each bound to a params model and a handler
"""
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Tuple, Type

from pydantic import BaseModel, ValidationError

from app.core.errors import ClientError, UnknownToolError
from app.dtos import ToolInvocationResult
from app.schemas import (
    ExportDataParams,
    GenerateEmailParams,
    GenerateInvoiceParams,
    GenerateReportParams,
    SendEmailParams,
)
from app.services.tools import (
    export_data,
    generate_email,
    generate_invoice,
    generate_report,
    send_email,
)

logger = logging.getLogger(__name__)


class ToolName(str, Enum):
    GENERATE_REPORT = "generateReport"
    GENERATE_EMAIL = "generateEmail"
    GENERATE_INVOICE = "generateInvoice"
    SEND_EMAIL = "sendEmail"
    EXPORT_DATA = "exportData"


Handler = Callable[[Any], Awaitable[ToolInvocationResult]]

TOOL_REGISTRY: Dict[ToolName, Tuple[Type[BaseModel], Handler]] = {
    ToolName.GENERATE_REPORT: (GenerateReportParams, generate_report),
    ToolName.GENERATE_EMAIL: (GenerateEmailParams, generate_email),
    ToolName.GENERATE_INVOICE: (GenerateInvoiceParams, generate_invoice),
    ToolName.SEND_EMAIL: (SendEmailParams, send_email),
    ToolName.EXPORT_DATA: (ExportDataParams, export_data),
}

_RESULT_TYPES = {
    ToolName.GENERATE_REPORT: "report",
    ToolName.GENERATE_EMAIL: "email",
    ToolName.GENERATE_INVOICE: "invoice",
    ToolName.SEND_EMAIL: "email",
    ToolName.EXPORT_DATA: "export",
}


class ToolService:
    """
    Dispatches tool invocations

    Client errors (unknown tool, invalid params, unconfigured provider)
    raise ClientError before any handler side effect. Anything a handler
    raises otherwise is reported as a failed ToolInvocationResult.
    """

    def __init__(self, registry: Dict[ToolName, Tuple[Type[BaseModel], Handler]] = None):
        self.registry = registry if registry is not None else TOOL_REGISTRY

    def list_tools(self) -> List[str]:
        return [name.value for name in self.registry]

    def resolve(self, tool_name: str) -> ToolName:
        try:
            name = ToolName(tool_name)
        except ValueError:
            raise UnknownToolError(tool_name)
        if name not in self.registry:
            raise UnknownToolError(tool_name)
        return name

    async def invoke(self, tool_name: str, params: Dict[str, Any]) -> ToolInvocationResult:
        name = self.resolve(tool_name)
        params_model, handler = self.registry[name]

        try:
            validated = params_model.model_validate(params)
        except ValidationError as e:
            raise ClientError(
                f"Invalid parameters for tool {name.value}",
                extra={"details": e.errors(include_url=False, include_context=False)}
            )

        logger.info(f"Invoking tool {name.value}")
        try:
            return await handler(validated)
        except ClientError:
            raise
        except Exception as e:
            logger.error(f"Tool {name.value} failed: {e}", exc_info=True)
            return ToolInvocationResult.fail(_RESULT_TYPES[name], str(e) or "Tool execution failed")


tool_service = ToolService()


def get_tool_service() -> ToolService:
    return tool_service
