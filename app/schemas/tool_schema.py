from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any, Literal, Union

from app.dtos import EmailConfig


class ToolRequest(BaseModel):
    """Named tool invocation"""
    tool: Optional[str] = None
    params: Optional[Dict[str, Any]] = None


class ToolListResponse(BaseModel):
    tools: List[str]


class GenerateReportParams(BaseModel):
    title: str = "Data Report"
    data: List[Dict[str, Any]] = Field(default_factory=list)
    analysis: Optional[str] = None
    format: str = "pdf"  # pdf | html
    user_query: str = ""


class GenerateEmailParams(BaseModel):
    type: Literal["invoice", "report", "reminder", "statement"] = "report"
    recipient: str
    data: List[Dict[str, Any]] = Field(default_factory=list)
    context: str = ""


class GenerateInvoiceParams(BaseModel):
    data: List[Dict[str, Any]] = Field(default_factory=list)
    context: str = ""


class SendEmailParams(BaseModel):
    to: Union[str, List[str]]
    subject: str
    message: str
    data: Optional[List[Dict[str, Any]]] = None
    mailgun_config: Optional[EmailConfig] = None


class ExportDataParams(BaseModel):
    data: Optional[List[Dict[str, Any]]] = None  # Empty/missing is a handler failure, not a client error
    filename: str = "export.csv"
