"""Tests for CSV and PDF exports."""

import csv
import importlib
import sys
from decimal import Decimal

import pytest

from vn_tax_calculator.core.calculators.mortgage import calculate_mortgage
from vn_tax_calculator.core.calculators.salary import calculate_salary_tax
from vn_tax_calculator.infrastructure.reports import export_schedule_csv
from vn_tax_calculator.infrastructure.reports.csv_exporter import SCHEDULE_FIELDS, schedule_to_rows
from vn_tax_calculator.shared.exceptions import ReportGenerationError


class TestCSVExport:
    """Tests for the amortization CSV."""

    def test_one_line_per_month(self, tmp_path, mortgage_input):
        """Header plus 240 monthly rows."""
        result = calculate_mortgage(mortgage_input)
        path = export_schedule_csv(result.schedule, tmp_path / "schedule.csv")

        with open(path, encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == 240
        assert list(rows[0].keys()) == SCHEDULE_FIELDS
        assert rows[0]["month"] == "1"
        assert rows[0]["phase"] == "preferential"
        assert rows[-1]["remaining_balance"] == "0"

    def test_rows_are_plain_numbers(self, mortgage_input):
        """Amounts are written without grouping separators."""
        result = calculate_mortgage(mortgage_input)
        row = schedule_to_rows(result.schedule[:1])[0]
        assert Decimal(row["principal"]) + Decimal(row["interest"]) == Decimal(row["total_payment"])

    def test_unwritable_path(self, tmp_path, mortgage_input):
        """Write failures surface as ReportGenerationError."""
        result = calculate_mortgage(mortgage_input)
        with pytest.raises(ReportGenerationError):
            export_schedule_csv(result.schedule, tmp_path / "missing" / "schedule.csv")


class TestPDFExport:
    """Tests for PDF reports (need reportlab)."""

    def test_salary_pdf(self, tmp_path, salary_30m):
        """A salary report is written to disk."""
        pytest.importorskip("reportlab")
        from vn_tax_calculator.infrastructure.reports import generate_salary_pdf

        path = generate_salary_pdf(calculate_salary_tax(salary_30m), tmp_path / "salary.pdf")
        assert path.exists()
        assert path.read_bytes().startswith(b"%PDF")

    def test_mortgage_pdf(self, tmp_path, mortgage_input):
        """A mortgage report is written to disk."""
        pytest.importorskip("reportlab")
        from vn_tax_calculator.infrastructure.reports import generate_mortgage_pdf

        result = calculate_mortgage(mortgage_input)
        path = generate_mortgage_pdf(mortgage_input, result, tmp_path / "mortgage.pdf", max_years=5)
        assert path.exists()
        assert path.stat().st_size > 0


@pytest.fixture
def without_reportlab(monkeypatch):
    """Reload the PDF module as if the pdf extra were not installed."""
    from vn_tax_calculator.infrastructure.reports import pdf_generator

    for name in list(sys.modules):
        if name == "reportlab" or name.startswith("reportlab."):
            monkeypatch.delitem(sys.modules, name)
    monkeypatch.setitem(sys.modules, "reportlab", None)
    yield importlib.reload(pdf_generator)
    monkeypatch.undo()
    importlib.reload(pdf_generator)


class TestWithoutReportlab:
    """Tests for the default install, where reportlab is absent."""

    def test_pdf_module_imports(self, without_reportlab):
        """The module loads and reports that PDF export is unavailable."""
        assert without_reportlab.REPORTLAB_AVAILABLE is False
        with pytest.raises(ReportGenerationError, match="reportlab"):
            without_reportlab.check_reportlab_available()

    def test_salary_pdf_raises_friendly_error(self, tmp_path, salary_30m, without_reportlab):
        """Generating a PDF fails with ReportGenerationError, not NameError."""
        with pytest.raises(ReportGenerationError):
            without_reportlab.generate_salary_pdf(
                calculate_salary_tax(salary_30m), tmp_path / "salary.pdf"
            )

    def test_csv_export_still_works(self, tmp_path, mortgage_input, without_reportlab):
        """The CSV exporter does not need reportlab."""
        result = calculate_mortgage(mortgage_input)
        path = export_schedule_csv(result.schedule, tmp_path / "schedule.csv")
        assert path.exists()
