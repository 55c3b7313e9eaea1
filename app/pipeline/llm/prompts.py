"""
All LLM prompts consolidated in one place
"""
import json
from typing import Any, Dict, List, Optional, Sequence

from app.dtos import TableSchema

SAMPLE_ROWS = 10


def _json_sample(rows: Sequence[Dict[str, Any]], limit: int = SAMPLE_ROWS) -> str:
    return json.dumps(list(rows[:limit]), indent=2, default=str)


def describe_schemas(schemas: Sequence[TableSchema]) -> str:
    if not schemas:
        return "(no schema supplied)"
    return "\n\n".join(s.describe() for s in schemas)


# ============================================
# QUERY GENERATION PROMPTS
# ============================================

def build_query_generation_prompt(
    message: str,
    schemas: Sequence[TableSchema],
    history: Optional[List[Dict[str, str]]] = None
) -> list[dict]:
    """Build NL→SQL prompt (DuckDB dialect, executed client-side)"""
    system = """You are a SQL expert helping to analyze financial data in DuckDB. Always respond with valid JSON.

CRITICAL: respond with ONLY a JSON object, no text before or after, in this EXACT format:
{
  "query": "SELECT ...",
  "explanation": "Brief explanation of what the query does",
  "suggestions": ["Optional follow-up question 1", "Optional follow-up question 2"]
}

SQL REQUIREMENTS:
- Use DuckDB SQL syntax
- Generate ONLY a read-only SELECT (or WITH ... SELECT) query
- Use double quotes for column names with spaces or special characters
- For date comparisons, use CURRENT_DATE
- Handle currency/amount columns as DOUBLE or DECIMAL
- Include JOINs if the question spans multiple tables
- Include ORDER BY and LIMIT clauses when appropriate
- No comments, no semicolon at the end"""

    user = f"""Database Schema:
{describe_schemas(schemas)}

Question: {message}"""

    messages = [{"role": "system", "content": system}]
    # Prior turns ground follow-up questions ("and by vendor?")
    messages.extend(history or [])
    messages.append({"role": "user", "content": user})
    return messages


# ============================================
# RESULT ANALYSIS PROMPTS
# ============================================

def build_analysis_prompt(
    message: str,
    rows: Sequence[Dict[str, Any]],
    schemas: Sequence[TableSchema]
) -> list[dict]:
    """Build narrative analysis prompt for client-computed results"""
    system = "You are a financial data analyst. Explain results in plain business language."

    user = f"""Analyze the following query results and provide insights.

Question: {message}

Schema:
{describe_schemas(schemas)}

Query Results (first {SAMPLE_ROWS} rows):
{_json_sample(rows)}

Total rows returned: {len(rows)}

Provide:
1. A clear summary of the findings
2. Key insights from the data
3. Any patterns or anomalies you notice
4. Suggestions for follow-up analysis

Format your response in markdown with clear headings."""

    return [
        {"role": "system", "content": system},
        {"role": "user", "content": user}
    ]


# ============================================
# TOOL CONTENT PROMPTS
# ============================================

def build_report_prompt(
    title: str,
    user_query: str,
    rows: Sequence[Dict[str, Any]],
    analysis: Optional[str] = None
) -> list[dict]:
    """Build structured report content prompt"""
    system = "You are a financial analyst creating professional reports. Always respond with valid JSON."

    user = f"""Analyze the following data and create a structured report.

User Query: {user_query}
Report Title: {title}
Prior Analysis: {analysis or "none"}
Data Sample (first {SAMPLE_ROWS} rows): {_json_sample(rows)}
Total Records: {len(rows)}

Respond with JSON in this structure:
{{
  "title": "Report title",
  "executiveSummary": "Brief overview",
  "keyFindings": ["finding 1", "finding 2"],
  "analysis": {{
    "summary": "Analysis summary",
    "metrics": [{{"name": "metric", "value": "value", "trend": "up/down/stable"}}]
  }},
  "insights": ["insight 1"],
  "recommendations": ["recommendation 1"],
  "nextSteps": ["step 1"]
}}"""

    return [
        {"role": "system", "content": system},
        {"role": "user", "content": user}
    ]


def build_email_prompt(
    email_type: str,
    recipient: str,
    context: str,
    row_count: int
) -> list[dict]:
    """Build email drafting prompt"""
    system = "You are a professional business communication expert. Always respond with valid JSON."

    user = f"""Generate professional email content for a financial context.

Type: {email_type}
Recipient: {recipient}
Context: {context}
Data Summary: {row_count} records

Respond with JSON in this structure:
{{
  "subject": "Email subject line",
  "greeting": "Dear...",
  "body": "Main email content",
  "closing": "Professional closing",
  "signature": "Sender signature",
  "attachmentNote": "Note about attachments if applicable",
  "plainText": "Plain text version of the email"
}}

For invoices: include payment terms, due dates and total amounts
For reports: include executive summary and key findings
For reminders: include urgency and specific action items
For statements: include account summary and period covered"""

    return [
        {"role": "system", "content": system},
        {"role": "user", "content": user}
    ]


def build_invoice_prompt(
    rows: Sequence[Dict[str, Any]],
    context: str
) -> list[dict]:
    """Build invoice content prompt"""
    system = "You generate invoices. Always respond with valid JSON."

    user = f"""Generate a professional invoice based on this data:
Context: {context}
Data: {_json_sample(rows)}

Respond with JSON in this structure:
{{
  "invoiceNumber": "INV-...",
  "date": "YYYY-MM-DD",
  "dueDate": "YYYY-MM-DD",
  "items": [{{"description": "...", "quantity": 1, "amount": 0.0}}],
  "subtotal": 0.0,
  "tax": 0.0,
  "total": 0.0,
  "paymentTerms": "Net 30"
}}"""

    return [
        {"role": "system", "content": system},
        {"role": "user", "content": user}
    ]
