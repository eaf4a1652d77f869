"""Report exporters for VN Tax Calculator.

The PDF generator needs the optional reportlab extra, so its names are
resolved on first access; the CSV exporter never depends on it.
"""

from importlib import import_module

from vn_tax_calculator.infrastructure.reports.csv_exporter import export_schedule_csv

_PDF_NAMES = {
    "REPORTLAB_AVAILABLE",
    "PDFReportGenerator",
    "check_reportlab_available",
    "generate_mortgage_pdf",
    "generate_salary_pdf",
}


def __getattr__(name: str):
    if name in _PDF_NAMES:
        module = import_module("vn_tax_calculator.infrastructure.reports.pdf_generator")
        return getattr(module, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "export_schedule_csv",
    "REPORTLAB_AVAILABLE",
    "PDFReportGenerator",
    "check_reportlab_available",
    "generate_mortgage_pdf",
    "generate_salary_pdf",
]
