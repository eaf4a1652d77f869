"""Main Typer application for VN Tax Calculator."""

from decimal import Decimal
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.panel import Panel
from rich.table import Table

from vn_tax_calculator import __version__
from vn_tax_calculator.cli.console import (
    console,
    money_table,
    print_error,
    print_flat_result,
    print_success,
    print_warning,
)
from vn_tax_calculator.config import configure_logging, get_settings
from vn_tax_calculator.core.analyzers.freelancer import (
    calculate_freelancer_comparison,
    find_freelancer_break_even,
    scan_freelancer_break_even,
)
from vn_tax_calculator.core.analyzers.vat_comparison import compare_vat_methods
from vn_tax_calculator.core.calculators.mortgage import calculate_mortgage
from vn_tax_calculator.core.calculators.salary import calculate_salary_tax, compare_law_versions
from vn_tax_calculator.core.calculators.withholding import calculate_lottery_tax
from vn_tax_calculator.core.models.enums import BusinessCategory, IncomeFrequency, LawVersion, RegionType
from vn_tax_calculator.core.models.freelancer import FreelancerInput
from vn_tax_calculator.core.models.mortgage import MortgageInput
from vn_tax_calculator.core.models.salary import TaxableIncomeInput
from vn_tax_calculator.core.models.vat import VATDeductionInput
from vn_tax_calculator.shared.exceptions import ValidationError, VNTaxCalculatorError
from vn_tax_calculator.shared.formatters import format_currency, format_percent
from vn_tax_calculator.shared.validators import MAX_MONTHLY_INCOME, parse_currency_input

# Property prices and loans exceed the monthly-income cap
MAX_PROPERTY_PRICE = Decimal("1000000000000")

app = typer.Typer(
    name="vn-tax",
    help="Máy tính thuế thu nhập cá nhân Việt Nam",
    add_completion=True,
    no_args_is_help=True,
)

AmountArg = Annotated[str, typer.Argument(help="Số tiền, ví dụ 30.000.000 hoặc 30000000")]
DependentsOpt = Annotated[int, typer.Option("--dependents", "-d", min=0, help="Số người phụ thuộc")]
RegionOpt = Annotated[int, typer.Option("--region", "-r", min=1, max=4, help="Vùng lương tối thiểu (1-4)")]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"VN Tax Calculator v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-v",
            help="Hiển thị phiên bản và thoát",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """VN Tax Calculator - thuế TNCN, so sánh và vay mua nhà."""
    configure_logging()


def _amount(text: str, max_value: Decimal = MAX_MONTHLY_INCOME) -> Decimal:
    parsed = parse_currency_input(text, max_value)
    if "negative" in parsed.issues:
        print_warning("Số tiền âm được tính là 0")
        return Decimal("0")
    if "decimal" in parsed.issues:
        print_warning("Phần thập phân đã được bỏ qua")
    if "overflow" in parsed.issues:
        print_warning(f"Số tiền vượt giới hạn, dùng {format_currency(parsed.value)}")
    return parsed.value


def _law(value: Optional[str]) -> LawVersion:
    return LawVersion(value or get_settings().default_law_version)


def _percent(value: float, label: str) -> Decimal:
    if not 0 <= value <= 100:
        raise ValidationError(f"{label} phải nằm trong khoảng 0-100%, nhận được {value}")
    return Decimal(str(value))


@app.command()
def salary(
    gross: AmountArg,
    dependents: DependentsOpt = 0,
    region: RegionOpt = 1,
    law: Annotated[Optional[str], typer.Option("--law", "-l", help="Phiên bản luật: 2025 hoặc 2026")] = None,
    no_insurance: Annotated[bool, typer.Option("--no-insurance", help="Không đóng bảo hiểm bắt buộc")] = False,
    pdf: Annotated[Optional[Path], typer.Option("--pdf", help="Xuất kết quả ra file PDF")] = None,
) -> None:
    """Tính lương net từ lương gross."""
    try:
        result = calculate_salary_tax(
            TaxableIncomeInput(
                gross_income=_amount(gross),
                dependents=dependents,
                has_insurance=not no_insurance,
                region=RegionType(region),
            ),
            _law(law),
        )
        console.print()
        console.print(
            money_table(
                f"Lương gross → net (luật {result.law_version.value})",
                [
                    ("Lương gross", result.gross_income),
                    ("Bảo hiểm", result.insurance.total),
                    ("Giảm trừ gia cảnh", result.personal_deduction + result.dependent_deduction),
                    ("Thu nhập tính thuế", result.taxable_income),
                    ("Thuế TNCN", result.tax_amount),
                    ("Lương net", result.net_income),
                ],
            )
        )
        console.print(f"Thuế suất thực tế: [value]{result.effective_rate}%[/value]")

        if result.breakdown:
            table = Table(title="Chi tiết theo bậc", header_style="bold")
            table.add_column("Bậc", justify="center")
            table.add_column("Thuế suất", justify="right")
            table.add_column("Thu nhập", justify="right")
            table.add_column("Thuế", justify="right", style="currency")
            for line in result.breakdown:
                table.add_row(
                    str(line.index),
                    format_percent(line.bracket.rate, 0),
                    format_currency(line.taxable_in_bracket),
                    format_currency(line.tax),
                )
            console.print(table)

        if pdf is not None:
            from vn_tax_calculator.infrastructure.reports import generate_salary_pdf

            generate_salary_pdf(result, pdf)
            print_success(f"Đã xuất PDF: {pdf}")
    except (VNTaxCalculatorError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("compare-laws")
def compare_laws(
    gross: AmountArg,
    dependents: DependentsOpt = 0,
    region: RegionOpt = 1,
) -> None:
    """So sánh thuế theo luật 2025 và luật 2026."""
    try:
        result = compare_law_versions(
            TaxableIncomeInput(gross_income=_amount(gross), dependents=dependents, region=RegionType(region))
        )
        table = Table(title="Luật 2025 vs 2026", header_style="bold")
        table.add_column("Khoản mục")
        table.add_column("Luật 2025", justify="right")
        table.add_column("Luật 2026", justify="right")
        rows = [
            ("Thu nhập tính thuế", result.old.taxable_income, result.new.taxable_income),
            ("Thuế TNCN", result.old.tax_amount, result.new.tax_amount),
            ("Lương net", result.old.net_income, result.new.net_income),
        ]
        for label, old, new in rows:
            table.add_row(label, format_currency(old), format_currency(new))
        console.print(table)
        console.print(f"Tiết kiệm thuế: [currency]{format_currency(result.tax_saving)}[/currency]/tháng")
    except (VNTaxCalculatorError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command()
def freelancer(
    gross: AmountArg,
    frequency: Annotated[
        IncomeFrequency, typer.Option("--frequency", "-f", help="monthly, project hoặc annual")
    ] = IncomeFrequency.MONTHLY,
    dependents: DependentsOpt = 0,
    region: RegionOpt = 1,
    law: Annotated[Optional[str], typer.Option("--law", "-l", help="Phiên bản luật: 2025 hoặc 2026")] = None,
) -> None:
    """So sánh freelancer (khấu trừ 10%) với nhân viên cùng mức gross."""
    try:
        max_value = MAX_MONTHLY_INCOME * 12 if frequency == IncomeFrequency.ANNUAL else MAX_MONTHLY_INCOME
        result = calculate_freelancer_comparison(
            FreelancerInput(
                gross_income=_amount(gross, max_value),
                frequency=frequency,
                dependents=dependents,
                region=RegionType(region),
                law_version=_law(law),
            )
        )
        table = Table(title="Freelancer vs Nhân viên (tháng)", header_style="bold")
        table.add_column("Khoản mục")
        table.add_column("Freelancer", justify="right")
        table.add_column("Nhân viên", justify="right")
        for label, a, b in [
            ("Gross", result.freelancer.gross_income, result.employee.gross_income),
            ("Bảo hiểm", result.freelancer.insurance, result.employee.insurance),
            ("Thuế", result.freelancer.tax, result.employee.tax),
            ("Net", result.freelancer.net_income, result.employee.net_income),
        ]:
            table.add_row(label, format_currency(a), format_currency(b))
        console.print(table)

        winner = result.comparison.winner.label
        console.print(
            f"Có lợi hơn: [value]{winner}[/value] "
            f"(chênh lệch {format_currency(result.comparison.difference)}/tháng)"
        )
        if result.break_even.found:
            console.print(f"Điểm hòa vốn: [value]{format_currency(result.break_even.break_even)}[/value]/tháng")
        else:
            console.print(f"[muted]{result.break_even.note}[/muted]")
    except (VNTaxCalculatorError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command()
def lottery(amount: AmountArg) -> None:
    """Thuế trúng thưởng (10% trên phần vượt 10 triệu)."""
    try:
        print_flat_result("Thuế trúng thưởng", calculate_lottery_tax(_amount(amount, MAX_PROPERTY_PRICE)))
    except (VNTaxCalculatorError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command()
def vat(
    sales: AmountArg,
    purchases: Annotated[str, typer.Argument(help="Giá trị mua vào có hóa đơn GTGT")] = "0",
    category: Annotated[
        BusinessCategory, typer.Option("--category", "-c", help="Ngành nghề cho phương pháp trực tiếp")
    ] = BusinessCategory.SERVICES,
) -> None:
    """So sánh thuế GTGT theo phương pháp khấu trừ và trực tiếp."""
    try:
        result = compare_vat_methods(
            VATDeductionInput(sales_revenue=_amount(sales), purchase_value=_amount(purchases)),
            category,
        )
        console.print(
            money_table(
                "Thuế GTGT phải nộp",
                [
                    ("Phương pháp khấu trừ", result.deduction.vat_payable),
                    ("Phương pháp trực tiếp", result.direct.vat_payable),
                ],
            )
        )
        label = "khấu trừ" if result.recommendation.value == "deduction" else "trực tiếp"
        console.print(f"Khuyến nghị: [value]phương pháp {label}[/value]")
        for note in result.notes:
            console.print(f"  • {note}")
    except (VNTaxCalculatorError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command()
def mortgage(
    price: Annotated[str, typer.Argument(help="Giá nhà")],
    down_payment: Annotated[float, typer.Option("--down-payment", help="Trả trước (%)")] = 30.0,
    years: Annotated[int, typer.Option("--years", "-y", min=1, max=50, help="Thời hạn vay (năm)")] = 20,
    preferential_rate: Annotated[float, typer.Option("--pref-rate", help="Lãi suất ưu đãi (%/năm)")] = 7.0,
    preferential_months: Annotated[int, typer.Option("--pref-months", min=0, help="Số tháng ưu đãi")] = 12,
    floating_rate: Annotated[float, typer.Option("--floating-rate", help="Lãi suất thả nổi (%/năm)")] = 10.5,
    grace_months: Annotated[int, typer.Option("--grace-months", min=0, help="Số tháng ân hạn gốc")] = 0,
    income: Annotated[str, typer.Option("--income", help="Thu nhập hàng tháng")] = "30000000",
    csv_path: Annotated[Optional[Path], typer.Option("--csv", help="Xuất lịch trả nợ ra CSV")] = None,
    pdf: Annotated[Optional[Path], typer.Option("--pdf", help="Xuất báo cáo PDF")] = None,
) -> None:
    """Lịch trả nợ vay mua nhà, chi phí ban đầu và khả năng chi trả."""
    try:
        data = MortgageInput(
            property_price=_amount(price, MAX_PROPERTY_PRICE),
            down_payment_percent=_percent(down_payment, "Tỷ lệ trả trước"),
            loan_term_years=years,
            preferential_rate_percent=Decimal(str(preferential_rate)),
            preferential_months=preferential_months,
            floating_rate_percent=Decimal(str(floating_rate)),
            grace_period_months=grace_months,
            monthly_income=_amount(income),
        )
        result = calculate_mortgage(data)

        console.print(
            Panel.fit(
                f"[header]Số tiền vay:[/header] {format_currency(result.loan_amount)}\n"
                f"[header]Trả trước:[/header] {format_currency(result.down_payment)}\n"
                f"[header]Trả/tháng (ưu đãi):[/header] {format_currency(result.preferential_payment)}\n"
                f"[header]Trả/tháng (thả nổi):[/header] {format_currency(result.floating_payment)}\n"
                f"[header]Tổng lãi:[/header] {format_currency(result.total_interest)}\n"
                f"[header]DTI:[/header] {result.dti_ratio}%",
                title="Khoản vay",
                border_style="blue",
            )
        )
        if result.dti_ratio > 50:
            print_warning("Tỷ lệ nợ/thu nhập vượt 50% - ngân hàng có thể từ chối khoản vay")

        table = Table(title="Lịch trả nợ theo năm", header_style="bold")
        table.add_column("Năm", justify="center")
        table.add_column("Gốc", justify="right")
        table.add_column("Lãi", justify="right")
        table.add_column("Dư nợ cuối năm", justify="right")
        for year in result.yearly:
            table.add_row(
                str(year.year),
                format_currency(year.total_principal),
                format_currency(year.total_interest),
                format_currency(year.ending_balance),
            )
        console.print(table)

        if csv_path is not None:
            from vn_tax_calculator.infrastructure.reports import export_schedule_csv

            export_schedule_csv(result.schedule, csv_path)
            print_success(f"Đã xuất CSV: {csv_path}")
        if pdf is not None:
            from vn_tax_calculator.infrastructure.reports import generate_mortgage_pdf

            generate_mortgage_pdf(data, result, pdf)
            print_success(f"Đã xuất PDF: {pdf}")
    except (VNTaxCalculatorError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("break-even")
def break_even(
    dependents: DependentsOpt = 0,
    region: RegionOpt = 1,
    law: Annotated[Optional[str], typer.Option("--law", "-l", help="Phiên bản luật: 2025 hoặc 2026")] = None,
    no_insurance: Annotated[bool, typer.Option("--no-insurance", help="Nhân viên không đóng bảo hiểm")] = False,
    scan_step: Annotated[
        Optional[str], typer.Option("--scan-step", help="Quét toàn bộ khoảng với bước này")
    ] = None,
) -> None:
    """Mức gross mà freelancer và nhân viên nhận net bằng nhau."""
    try:
        employee = dict(
            dependents=dependents,
            has_insurance=not no_insurance,
            region=RegionType(region),
            law_version=_law(law),
        )
        result = find_freelancer_break_even(**employee)
        if result.found:
            above = "freelancer" if result.a_better_above else "nhân viên"
            console.print(
                f"Điểm hòa vốn: [value]{format_currency(result.break_even)}[/value]/tháng "
                f"({above} có lợi hơn ở mức cao hơn, {result.iterations} vòng lặp)"
            )
        else:
            console.print(f"Không có điểm hòa vốn trong khoảng: [muted]{result.note}[/muted]")

        if scan_step is not None:
            crossings = scan_freelancer_break_even(_amount(scan_step), **employee)
            if crossings:
                console.print("Các điểm đổi chiều: " + ", ".join(format_currency(c) for c in crossings))
            else:
                console.print("[muted]Không có điểm đổi chiều trên lưới quét[/muted]")
    except (VNTaxCalculatorError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
