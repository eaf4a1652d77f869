"""CSV export of amortization schedules."""

import csv
from pathlib import Path

from vn_tax_calculator.core.models.mortgage import AmortizationRow
from vn_tax_calculator.shared.exceptions import ReportGenerationError

SCHEDULE_FIELDS = ["month", "phase", "principal", "interest", "total_payment", "remaining_balance"]


def schedule_to_rows(schedule: list[AmortizationRow]) -> list[dict[str, str]]:
    """Flatten schedule rows to plain strings (whole VND, no grouping)."""
    return [
        {
            "month": str(row.month),
            "phase": row.phase.value,
            "principal": str(row.principal),
            "interest": str(row.interest),
            "total_payment": str(row.total_payment),
            "remaining_balance": str(row.remaining_balance),
        }
        for row in schedule
    ]


def export_schedule_csv(schedule: list[AmortizationRow], output_path: Path) -> Path:
    """Write one line per month to a UTF-8 CSV file with a header row."""
    output_path = Path(output_path)
    try:
        with open(output_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=SCHEDULE_FIELDS)
            writer.writeheader()
            writer.writerows(schedule_to_rows(schedule))
    except OSError as e:
        raise ReportGenerationError(f"Không thể ghi file CSV {output_path}: {e}") from e
    return output_path
