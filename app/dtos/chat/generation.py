"""
Query generation and analysis DTOs
"""
from typing import Optional, List, Literal
from pydantic import BaseModel, Field

SemanticType = Literal["string", "number", "currency", "date", "boolean"]


class ColumnSchema(BaseModel):
    """One column of a caller-supplied table"""
    name: str
    type: SemanticType = "string"
    nullable: Optional[bool] = None


class TableSchema(BaseModel):
    """
    Table description supplied by the caller per request

    Not owned by this service - only embedded in prompts and used to
    resolve column names for the pattern fallback.
    """
    table_name: str
    columns: List[ColumnSchema] = Field(default_factory=list)
    row_count: Optional[int] = None

    def describe(self) -> str:
        cols = ", ".join(f"{c.name} ({c.type})" for c in self.columns)
        rows = self.row_count if self.row_count is not None else "unknown"
        return f"Table: {self.table_name}\nColumns: {cols}\nRows: {rows}"


class QueryGenerationResult(BaseModel):
    """
    Outcome of natural language -> query generation

    A non-empty error means no executable query was produced,
    whatever the other fields contain.
    """
    query: Optional[str] = None
    explanation: Optional[str] = None
    suggestions: List[str] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def is_executable(self) -> bool:
        return bool(self.query) and not self.error


class ToolSuggestion(BaseModel):
    """Hint rendered as an actionable button by the caller (no payload)"""
    id: str
    label: str
    category: Literal["invoice", "voucher", "approval", "export", "analysis"]


class AnalysisResult(BaseModel):
    """Output of the result analysis responder"""
    content: str
    suggestions: List[ToolSuggestion] = Field(default_factory=list)
    llm_used: bool = False
