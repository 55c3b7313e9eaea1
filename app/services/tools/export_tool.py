"""
exportData: records to CSV
"""
import json
from typing import Any, Dict, List, Sequence

from app.dtos import FileArtifact, ToolInvocationResult
from app.schemas import ExportDataParams

QUOTE_TRIGGERS = (",", '"', "\r", "\n")


def _csv_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def _csv_field(text: str) -> str:
    if any(trigger in text for trigger in QUOTE_TRIGGERS):
        return '"' + text.replace('"', '""') + '"'
    return text


def _csv_line(values: List[str]) -> str:
    return ",".join(_csv_field(v) for v in values)


def export_to_csv(rows: Sequence[Dict[str, Any]]) -> str:
    """
    Header from the first record's keys, one line per record

    Fields containing a comma, quote, CR or LF are quoted and inner quotes
    doubled. Null and keys missing from a later record are written empty.
    """
    headers = list(rows[0].keys())
    lines = [_csv_line([str(h) for h in headers])]
    for row in rows:
        lines.append(_csv_line([_csv_value(row.get(h)) for h in headers]))
    return "\n".join(lines)


def normalize_filename(filename: str) -> str:
    name = filename.strip() or "export"
    return name if name.lower().endswith(".csv") else f"{name}.csv"


async def export_data(params: ExportDataParams) -> ToolInvocationResult:
    if not params.data:
        return ToolInvocationResult.fail("export", "No data to export")

    return ToolInvocationResult.ok("export", file=FileArtifact(
        filename=normalize_filename(params.filename),
        mime_type="text/csv",
        content=export_to_csv(params.data)
    ))
