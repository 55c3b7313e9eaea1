"""Unit tests for the individual tool handlers (completion service disabled)."""

import asyncio
import threading
from unittest.mock import patch

import pytest

from app.schemas import (
    ExportDataParams,
    GenerateEmailParams,
    GenerateInvoiceParams,
    GenerateReportParams,
)
from app.services.tools import (
    export_data,
    export_to_csv,
    generate_email,
    generate_invoice,
    generate_report,
)
from app.services.tools.rendering import render_pdf, render_pdf_async

ROWS = [
    {"vendor": "Acme", "amount": 120.5, "due_date": "2024-01-10"},
    {"vendor": "Globex", "amount": 80, "due_date": "2024-02-01"},
]


class TestExportData:
    def test_csv_quoting(self):
        csv_text = export_to_csv([{"a": 1, "b": "x,y"}, {"a": 2, "b": 'say "hi"'}])
        assert csv_text == 'a,b\n1,"x,y"\n2,"say ""hi"""'

    def test_value_stringification(self):
        csv_text = export_to_csv([{"a": None, "b": True, "c": {"k": 1}}, {"a": 0}])
        lines = csv_text.split("\n")
        assert lines[1] == ',true,"{""k"": 1}"'
        assert lines[2] == "0,,"

    def test_null_only_row_is_an_empty_line(self):
        assert export_to_csv([{"a": None}, {"a": 1}]) == "a\n\n1"

    def test_carriage_return_is_quoted(self):
        assert export_to_csv([{"a": "x\ry"}, {"a": "p\nq"}]) == 'a\n"x\ry"\n"p\nq"'

    @pytest.mark.asyncio
    async def test_filename_gets_csv_extension(self):
        result = await export_data(ExportDataParams(
            data=[{"a": 1, "b": "x,y"}, {"a": 2, "b": 'say "hi"'}],
            filename="out"
        ))
        assert result.success
        assert result.file.filename == "out.csv"
        assert result.file.mime_type == "text/csv"
        assert result.file.as_bytes() == b'a,b\n1,"x,y"\n2,"say ""hi"""'

    @pytest.mark.asyncio
    async def test_existing_extension_kept(self):
        result = await export_data(ExportDataParams(data=[{"a": 1}], filename="Report.CSV"))
        assert result.file.filename == "Report.CSV"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("data", [None, []])
    async def test_no_data_is_a_failure(self, data):
        result = await export_data(ExportDataParams(data=data))
        assert not result.success
        assert result.error == "No data to export"
        assert result.file is None


class TestRenderPdf:
    @pytest.mark.parametrize(
        "line",
        ["Revenue $1,200 (up 5%) vs $900", "Paid $100 for item #42 and $50 more"],
    )
    def test_dollar_amounts_are_plain_text(self, line):
        content = render_pdf("R", [("Summary", [line])], [{"item": line, "amount": 100}])
        assert content.startswith(b"%PDF")

    def test_long_sections_continue_on_new_pages(self):
        lines = [f"Finding {i}: $ {i * 10} owed" for i in range(120)]
        assert render_pdf("Long", [("Findings", lines)]).startswith(b"%PDF")

    @pytest.mark.asyncio
    async def test_concurrent_renders_off_the_event_loop(self):
        threads = []

        def recording(*args, **kwargs):
            threads.append(threading.current_thread())
            return render_pdf(*args, **kwargs)

        with patch("app.services.tools.rendering.render_pdf", new=recording):
            pages = await asyncio.gather(*(
                render_pdf_async(f"Report {i}", [("Summary", [f"Total ${i}00"])], ROWS)
                for i in range(4)
            ))

        assert all(p.startswith(b"%PDF") for p in pages)
        assert len(threads) == 4
        assert threading.main_thread() not in threads


class TestGenerateReport:
    @pytest.mark.asyncio
    async def test_pdf(self):
        result = await generate_report(GenerateReportParams(title="Q1 Payables", data=ROWS))
        assert result.success
        assert result.file.filename == "Q1_Payables.pdf"
        assert result.file.mime_type == "application/pdf"
        assert result.file.as_bytes().startswith(b"%PDF")

    @pytest.mark.asyncio
    async def test_html_escapes_content(self):
        rows = [{"vendor": "<script>", "amount": 1}]
        result = await generate_report(GenerateReportParams(title="R", data=rows, format="html"))
        html = result.file.as_bytes().decode()
        assert result.file.mime_type == "text/html"
        assert "&lt;script&gt;" in html
        assert "<script>" not in html

    @pytest.mark.asyncio
    async def test_unsupported_format_fails(self):
        result = await generate_report(GenerateReportParams(data=ROWS, format="xlsx"))
        assert not result.success
        assert "xlsx" in result.error


class TestGenerateEmail:
    @pytest.mark.asyncio
    async def test_fallback_draft(self):
        result = await generate_email(GenerateEmailParams(type="invoice", recipient="Acme", data=ROWS))
        assert result.success
        assert result.file is None
        assert set(result.payload) == {"subject", "html", "content"}
        assert result.payload["content"].startswith("Dear Acme,")
        assert "Total: $200.50" in result.payload["html"]


class TestGenerateInvoice:
    @pytest.mark.asyncio
    async def test_fallback_invoice_pdf(self):
        result = await generate_invoice(GenerateInvoiceParams(data=ROWS))
        assert result.success
        assert result.file.filename.startswith("invoice_INV-")
        assert result.file.filename.endswith(".pdf")
        assert result.payload["total"] == pytest.approx(200.5)
        assert result.file.as_bytes().startswith(b"%PDF")
