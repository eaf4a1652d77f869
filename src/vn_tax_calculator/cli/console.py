"""Rich console and shared renderers for CLI output."""

from decimal import Decimal

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

from vn_tax_calculator.core.models.flat_rate import FlatRateResult
from vn_tax_calculator.shared.formatters import format_currency

THEME = Theme(
    {
        "warning": "yellow",
        "error": "red bold",
        "success": "green",
        "muted": "dim",
        "header": "bold blue",
        "value": "bold",
        "currency": "green",
        "exempt": "magenta",
    }
)

console = Console(theme=THEME)


def print_error(message: str) -> None:
    """Print error message."""
    console.print(f"[error]Lỗi:[/error] {message}")


def print_warning(message: str) -> None:
    console.print(f"[warning]Cảnh báo:[/warning] {message}")


def print_success(message: str) -> None:
    console.print(f"[success]{message}[/success]")


def money_table(title: str, rows: list[tuple[str, Decimal]]) -> Table:
    """Two-column table of labelled VND amounts."""
    table = Table(title=title, show_header=False, title_style="header")
    table.add_column("Khoản mục")
    table.add_column("Số tiền", justify="right", style="currency")
    for label, value in rows:
        table.add_row(label, format_currency(value))
    return table


def print_flat_result(title: str, result: FlatRateResult) -> None:
    """Render a flat-rate result, stating the exemption when there is one."""
    console.print(
        money_table(
            title,
            [
                ("Giá trị nhận", result.gross_amount),
                ("Thu nhập tính thuế", result.taxable_amount),
                ("Thuế", result.tax_amount),
                ("Thực nhận", result.net_amount),
            ],
        )
    )
    if result.is_exempt:
        console.print(f"[exempt]Miễn thuế:[/exempt] {result.exemption_reason}")
    elif result.legal_note:
        console.print(f"[muted]{result.legal_note}[/muted]")
