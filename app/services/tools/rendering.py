"""
Document rendering for tool outputs
PDF pages via matplotlib (Agg) and small HTML fragments
"""
import asyncio
import os
import textwrap
from functools import partial
from html import escape
from io import BytesIO
from typing import Any, Dict, List, Optional, Sequence, Tuple

# Set matplotlib backend before any figure is created
os.environ.setdefault("MPLBACKEND", "Agg")
import matplotlib
matplotlib.use("Agg", force=True)
# Amounts like "$1,200 vs $900" are plain text, not math
matplotlib.rcParams["text.parse_math"] = False
from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.figure import Figure

PAGE_SIZE = (8.27, 11.69)  # A4, inches
TABLE_ROWS = 25
TABLE_COLUMNS = 6
CHART_BARS = 20
WRAP_WIDTH = 90


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or value is None:
        return False
    try:
        float(value)
        return True
    except (TypeError, ValueError):
        return False


def pick_chart_axes(rows: Sequence[Dict[str, Any]]) -> Optional[Tuple[List[str], List[float], str]]:
    """
    Auto-detect categorical and numerical columns for charting
    """
    if not rows:
        return None
    cols = list(rows[0].keys())
    sample = rows[:10]

    # First column that is mostly non-numeric is the label
    cat_col = None
    for c in cols:
        non_num = sum(1 for r in sample if not _is_number(r.get(c)))
        if non_num >= max(1, len(sample) // 2):
            cat_col = c
            break
    if cat_col is None:
        cat_col = cols[0]

    num_col = None
    for c in cols:
        if c != cat_col and all(_is_number(r.get(c)) for r in sample):
            num_col = c
            break
    if num_col is None:
        return None

    shown = rows[:CHART_BARS]
    labels = [str(r.get(cat_col)) for r in shown]
    values = [float(r.get(num_col)) if _is_number(r.get(num_col)) else 0.0 for r in shown]
    return labels, values, f"{num_col} by {cat_col}"


def _page() -> Figure:
    # Figure API only: no pyplot state shared between worker threads
    return Figure(figsize=PAGE_SIZE)


def _next_page(pdf: PdfPages, fig: Figure):
    pdf.savefig(fig)
    return _page(), 0.95


def _text_page(pdf: PdfPages, title: str, sections: Sequence[Tuple[str, List[str]]]) -> None:
    fig = _page()
    fig.text(0.08, 0.95, title, fontsize=16, weight="bold", va="top")

    y = 0.90
    for heading, lines in sections:
        if not lines:
            continue
        if y < 0.12:
            fig, y = _next_page(pdf, fig)
        fig.text(0.08, y, heading, fontsize=12, weight="bold", va="top")
        y -= 0.03
        for line in lines:
            for wrapped in textwrap.wrap(line, WRAP_WIDTH) or [""]:
                if y < 0.05:
                    fig, y = _next_page(pdf, fig)
                fig.text(0.10, y, wrapped, fontsize=9, va="top")
                y -= 0.02
        y -= 0.015

    pdf.savefig(fig)


def _table_page(pdf: PdfPages, rows: Sequence[Dict[str, Any]], title: str) -> None:
    columns = list(rows[0].keys())[:TABLE_COLUMNS]
    cells = [
        [textwrap.shorten(_cell(r.get(c)), 24, placeholder="...") for c in columns]
        for r in rows[:TABLE_ROWS]
    ]

    fig = _page()
    ax = fig.add_subplot()
    ax.axis("off")
    ax.set_title(title, fontsize=12, weight="bold")
    table = ax.table(cellText=cells, colLabels=[str(c) for c in columns], loc="upper center")
    table.auto_set_font_size(False)
    table.set_fontsize(7)
    table.scale(1, 1.3)

    if len(rows) > TABLE_ROWS:
        fig.text(0.08, 0.04, f"Showing {TABLE_ROWS} of {len(rows)} rows", fontsize=8)

    pdf.savefig(fig)


def _chart_page(pdf: PdfPages, rows: Sequence[Dict[str, Any]]) -> None:
    picked = pick_chart_axes(rows)
    if not picked:
        return
    labels, values, title = picked

    fig = _page()
    ax = fig.add_subplot()
    positions = range(len(labels))
    ax.bar(positions, values)
    ax.set_xticks(list(positions))
    ax.set_xticklabels(labels, rotation=45, ha="right")
    ax.set_title(title)
    fig.tight_layout()

    pdf.savefig(fig)


def render_pdf(
    title: str,
    sections: Sequence[Tuple[str, List[str]]],
    rows: Sequence[Dict[str, Any]] = (),
    table_title: str = "Data",
    chart: bool = True
) -> bytes:
    """
    Render a multi-page PDF

    Page 1: title and text sections. Then a data table and, when a numeric
    column exists, a bar chart. CPU bound: async callers run it in an executor.
    """
    buf = BytesIO()
    with PdfPages(buf) as pdf:
        _text_page(pdf, title, sections)
        if rows and rows[0]:
            _table_page(pdf, rows, table_title)
            if chart:
                _chart_page(pdf, rows)
    return buf.getvalue()


async def render_pdf_async(*args, **kwargs) -> bytes:
    """render_pdf on the default executor so the event loop keeps serving"""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(render_pdf, *args, **kwargs))


def html_table(rows: Sequence[Dict[str, Any]], limit: int = 50) -> str:
    """Data rows as an HTML table (empty string when there are no rows)"""
    if not rows:
        return ""
    columns = list(rows[0].keys())
    head = "".join(f"<th>{escape(str(c))}</th>" for c in columns)
    body = "".join(
        "<tr>" + "".join(f"<td>{escape(_cell(r.get(c)))}</td>" for c in columns) + "</tr>"
        for r in rows[:limit]
    )
    return (
        '<table border="1" cellpadding="4" cellspacing="0" style="border-collapse: collapse;">'
        f"<thead><tr>{head}</tr></thead><tbody>{body}</tbody></table>"
    )


def html_list(items: Sequence[Any]) -> str:
    if not items:
        return ""
    return "<ul>" + "".join(f"<li>{escape(str(i))}</li>" for i in items) + "</ul>"


def html_paragraphs(text: str) -> str:
    return "".join(f"<p>{escape(p.strip())}</p>" for p in text.split("\n\n") if p.strip())


def _cell(value: Any) -> str:
    return "" if value is None else str(value)
