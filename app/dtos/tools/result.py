"""
Tool invocation result DTOs
"""
from typing import Any, Dict, Optional, Union
from pydantic import BaseModel, model_validator


class FileArtifact(BaseModel):
    """File produced by a tool (returned to the caller as an attachment)"""
    filename: str
    mime_type: str
    content: Union[bytes, str]

    def as_bytes(self) -> bytes:
        if isinstance(self.content, bytes):
            return self.content
        return self.content.encode("utf-8")


class ToolInvocationResult(BaseModel):
    """
    Uniform outcome of every tool handler

    Invariants:
    - success=False requires a non-empty error
    - a file artifact is only carried by a successful result
    """
    success: bool
    type: Optional[str] = None  # report, email, invoice, export
    error: Optional[str] = None
    file: Optional[FileArtifact] = None
    payload: Optional[Dict[str, Any]] = None

    @model_validator(mode="after")
    def _check_invariants(self) -> "ToolInvocationResult":
        if not self.success and not self.error:
            raise ValueError("failed tool result must carry an error message")
        if self.file is not None and not self.success:
            raise ValueError("file artifact requires a successful result")
        return self

    @classmethod
    def ok(cls, type: str, payload: Optional[Dict[str, Any]] = None,
           file: Optional[FileArtifact] = None) -> "ToolInvocationResult":
        return cls(success=True, type=type, payload=payload, file=file)

    @classmethod
    def fail(cls, type: Optional[str], error: str) -> "ToolInvocationResult":
        return cls(success=False, type=type, error=error or "Tool execution failed")
