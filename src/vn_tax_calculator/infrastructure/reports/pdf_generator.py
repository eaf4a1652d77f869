"""PDF export of salary and mortgage results."""

from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Optional

try:
    from reportlab.lib import colors
    from reportlab.lib.pagesizes import A4
    from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
    from reportlab.lib.units import cm
    from reportlab.platypus import (
        Paragraph,
        SimpleDocTemplate,
        Spacer,
        Table,
        TableStyle,
    )

    REPORTLAB_AVAILABLE = True
except ImportError:
    REPORTLAB_AVAILABLE = False

from vn_tax_calculator import __version__
from vn_tax_calculator.shared.exceptions import ReportGenerationError
from vn_tax_calculator.shared.formatters import format_currency, format_percent

if TYPE_CHECKING:
    from vn_tax_calculator.core.models.mortgage import MortgageInput, MortgageResult
    from vn_tax_calculator.core.models.salary import SalaryTaxResult

HEADER_BG = "#2c5282"
ROW_ALT_BG = "#f7fafc"
BORDER = "#e2e8f0"


def check_reportlab_available() -> None:
    """Check if reportlab is available, raise if not."""
    if not REPORTLAB_AVAILABLE:
        raise ReportGenerationError(
            "ReportLab chưa được cài đặt. "
            "Cài bằng: pip install 'vn-tax-calculator[pdf]' hoặc pip install reportlab"
        )


class PDFReportGenerator:
    """Shared layout for one-result PDF reports."""

    def __init__(self, title: str, subtitle: str = ""):
        check_reportlab_available()
        self.title = title
        self.subtitle = subtitle
        self.page_width = A4[0] - 3 * cm
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()

    def _setup_custom_styles(self) -> None:
        self.styles.add(
            ParagraphStyle(
                name="ReportTitle",
                parent=self.styles["Heading1"],
                fontSize=18,
                spaceAfter=8,
                textColor=colors.HexColor("#1a365d"),
                alignment=1,
            )
        )
        self.styles.add(
            ParagraphStyle(
                name="Subtitle",
                parent=self.styles["Normal"],
                fontSize=11,
                textColor=colors.HexColor("#4a5568"),
                alignment=1,
                spaceAfter=12,
            )
        )
        self.styles.add(
            ParagraphStyle(
                name="SectionHeader",
                parent=self.styles["Heading2"],
                fontSize=13,
                spaceBefore=16,
                spaceAfter=8,
                textColor=colors.HexColor(HEADER_BG),
            )
        )
        self.styles.add(
            ParagraphStyle(
                name="SmallText",
                parent=self.styles["Normal"],
                fontSize=8,
                textColor=colors.gray,
                alignment=1,
            )
        )

    def _build_header(self) -> list:
        elements = [Paragraph(self.title, self.styles["ReportTitle"])]
        if self.subtitle:
            elements.append(Paragraph(self.subtitle, self.styles["Subtitle"]))
        return elements

    def _section(self, title: str) -> "Paragraph":
        return Paragraph(title, self.styles["SectionHeader"])

    def _key_value_table(self, rows: list[tuple[str, str]]) -> "Table":
        """Two-column label/value table."""
        table = Table(rows, colWidths=[self.page_width * 0.55, self.page_width * 0.45])
        table.setStyle(
            TableStyle([
                ("BACKGROUND", (0, 0), (-1, -1), colors.HexColor(ROW_ALT_BG)),
                ("BOX", (0, 0), (-1, -1), 1, colors.HexColor(BORDER)),
                ("LINEBELOW", (0, 0), (-1, -2), 0.5, colors.HexColor(BORDER)),
                ("ALIGN", (1, 0), (1, -1), "RIGHT"),
                ("FONTSIZE", (0, 0), (-1, -1), 9),
                ("TOPPADDING", (0, 0), (-1, -1), 5),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
            ])
        )
        return table

    def _data_table(self, header: list[str], rows: list[list[str]]) -> "Table":
        """Table with a coloured header row and right-aligned numbers."""
        table = Table([header] + rows, repeatRows=1)
        style = [
            ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor(HEADER_BG)),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 8),
            ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor(BORDER)),
        ]
        for i in range(2, len(rows) + 1, 2):
            style.append(("BACKGROUND", (0, i), (-1, i), colors.HexColor(ROW_ALT_BG)))
        table.setStyle(TableStyle(style))
        return table

    def _build_footer(self) -> list:
        return [
            Spacer(1, 0.6 * cm),
            Paragraph(
                f"Báo cáo tạo lúc {datetime.now().strftime('%d/%m/%Y %H:%M')} "
                f"bởi VN Tax Calculator v{__version__}",
                self.styles["SmallText"],
            ),
            Paragraph(
                "Kết quả chỉ mang tính tham khảo. Vui lòng liên hệ cơ quan thuế hoặc "
                "chuyên gia tư vấn cho các quyết định chính thức.",
                self.styles["SmallText"],
            ),
        ]

    def build(self, elements: list, output_path: Path) -> Path:
        output_path = Path(output_path)
        doc = SimpleDocTemplate(
            str(output_path),
            pagesize=A4,
            rightMargin=1.5 * cm,
            leftMargin=1.5 * cm,
            topMargin=1.5 * cm,
            bottomMargin=1.5 * cm,
        )
        try:
            doc.build(self._build_header() + elements + self._build_footer())
        except OSError as e:
            raise ReportGenerationError(f"Không thể ghi file PDF {output_path}: {e}") from e
        return output_path


def generate_salary_pdf(result: "SalaryTaxResult", output_path: Path) -> Path:
    """Write a gross-to-net salary report."""
    generator = PDFReportGenerator(
        "Tính thuế thu nhập cá nhân",
        f"Lương gross {format_currency(result.gross_income)} - luật {result.law_version.value}",
    )
    insurance = result.insurance
    summary = [
        ("Lương gross", format_currency(result.gross_income)),
        ("BHXH (8%)", format_currency(insurance.bhxh)),
        ("BHYT (1.5%)", format_currency(insurance.bhyt)),
        ("BHTN (1%)", format_currency(insurance.bhtn)),
        ("Giảm trừ bản thân", format_currency(result.personal_deduction)),
        ("Giảm trừ người phụ thuộc", format_currency(result.dependent_deduction)),
        ("Giảm trừ khác", format_currency(result.other_deductions)),
        ("Thu nhập tính thuế", format_currency(result.taxable_income)),
        ("Thuế TNCN", format_currency(result.tax_amount)),
        ("Lương net", format_currency(result.net_income)),
        ("Thuế suất thực tế", f"{result.effective_rate}%"),
    ]
    elements = [generator._section("Tổng quan"), generator._key_value_table(summary)]

    if result.breakdown:
        rows = [
            [
                f"Bậc {line.index}",
                format_percent(line.bracket.rate, 0),
                format_currency(line.taxable_in_bracket),
                format_currency(line.tax),
            ]
            for line in result.breakdown
        ]
        elements.append(generator._section("Chi tiết theo bậc thuế"))
        elements.append(generator._data_table(["Bậc", "Thuế suất", "Thu nhập", "Thuế"], rows))

    return generator.build(elements, output_path)


def generate_mortgage_pdf(
    data: "MortgageInput",
    result: "MortgageResult",
    output_path: Path,
    max_years: Optional[int] = None,
) -> Path:
    """Write a mortgage report with yearly amortization and sensitivity."""
    generator = PDFReportGenerator(
        "Kế hoạch vay mua nhà",
        f"Giá nhà {format_currency(data.property_price)} - vay {data.loan_term_years} năm",
    )
    summary = [
        ("Số tiền vay", format_currency(result.loan_amount)),
        ("Trả trước", format_currency(result.down_payment)),
        (f"Trả hàng tháng (ưu đãi {data.preferential_rate_percent}%)", format_currency(result.preferential_payment)),
        (f"Trả hàng tháng (thả nổi {data.floating_rate_percent}%)", format_currency(result.floating_payment)),
        ("Tổng lãi", format_currency(result.total_interest)),
        ("Tổng phải trả", format_currency(result.total_payment)),
        ("Tỷ lệ nợ/thu nhập (DTI)", f"{result.dti_ratio}%"),
        ("Khoản vay tối đa theo thu nhập", format_currency(result.max_loan_by_income)),
    ]
    fees = result.fees
    costs = [
        ("Lệ phí trước bạ", format_currency(fees.registration_fee)),
        ("Phí công chứng", format_currency(fees.notary_fee)),
        ("Phí thẩm định", format_currency(fees.appraisal_fee)),
        ("Phí bảo trì", format_currency(fees.maintenance_fee)),
        ("VAT", format_currency(fees.vat)),
        ("Tổng chi phí ban đầu", format_currency(result.total_upfront_cost)),
    ]
    yearly = result.yearly if max_years is None else result.yearly[:max_years]
    yearly_rows = [
        [
            str(y.year),
            format_currency(y.total_principal),
            format_currency(y.total_interest),
            format_currency(y.total_payment),
            format_currency(y.ending_balance),
        ]
        for y in yearly
    ]
    sensitivity_rows = [
        [
            s.label,
            f"{s.rate_percent}%",
            format_currency(s.monthly_payment),
            format_currency(s.difference_from_base),
            format_currency(s.total_interest),
        ]
        for s in result.sensitivity
    ]

    elements = [
        generator._section("Tổng quan khoản vay"),
        generator._key_value_table(summary),
        generator._section("Chi phí ban đầu"),
        generator._key_value_table(costs),
        generator._section("Lịch trả nợ theo năm"),
        generator._data_table(["Năm", "Gốc", "Lãi", "Tổng trả", "Dư nợ cuối năm"], yearly_rows),
    ]
    if sensitivity_rows:
        elements.append(generator._section("Độ nhạy lãi suất thả nổi"))
        elements.append(
            generator._data_table(
                ["Kịch bản", "Lãi suất", "Trả/tháng", "Chênh lệch", "Tổng lãi"], sensitivity_rows
            )
        )
    return generator.build(elements, output_path)
