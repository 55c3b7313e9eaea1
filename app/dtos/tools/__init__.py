"""
Tool DTOs
"""
from app.dtos.tools.result import FileArtifact, ToolInvocationResult

__all__ = [
    "FileArtifact",
    "ToolInvocationResult",
]
