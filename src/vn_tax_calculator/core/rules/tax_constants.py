"""Law-version constant tables for salary PIT and mandatory insurance.

Values follow Vietnamese regulations:
- Luật Thuế TNCN 04/2007/QH12 (biểu thuế 7 bậc) and Nghị quyết 954/2020/UBTVQH14
  (giảm trừ 11 triệu / 4,4 triệu) for the 2025 tables.
- Luật Thuế TNCN sửa đổi 109/2025/QH15 (biểu thuế 5 bậc) and Nghị quyết
  110/2025/UBTVQH15 (giảm trừ 15,5 triệu / 6,2 triệu) for the 2026 tables.
- Luật BHXH 2024, Nghị định 74/2024/NĐ-CP and 293/2025/NĐ-CP (lương tối thiểu vùng).

Tables are immutable and selected explicitly by LawVersion; engine
functions receive them as arguments.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from vn_tax_calculator.core.models.brackets import TaxBracket
from vn_tax_calculator.core.models.enums import LawVersion, RegionType
from vn_tax_calculator.shared.exceptions import ConfigurationError

# === Employee insurance rates (người lao động đóng) ===
BHXH_RATE = Decimal("0.08")  # Bảo hiểm xã hội
BHYT_RATE = Decimal("0.015")  # Bảo hiểm y tế
BHTN_RATE = Decimal("0.01")  # Bảo hiểm thất nghiệp
EMPLOYEE_INSURANCE_RATE = BHXH_RATE + BHYT_RATE + BHTN_RATE  # 10.5%

# === Employer insurance rates (doanh nghiệp đóng) ===
EMPLOYER_BHXH_RATE = Decimal("0.175")
EMPLOYER_BHYT_RATE = Decimal("0.03")
EMPLOYER_BHTN_RATE = Decimal("0.01")
EMPLOYER_INSURANCE_RATE = EMPLOYER_BHXH_RATE + EMPLOYER_BHYT_RATE + EMPLOYER_BHTN_RATE  # 21.5%

# Contribution base is capped at 20x the reference wage
INSURANCE_CAP_MULTIPLE = Decimal("20")

# Lương cơ sở (BHXH/BHYT cap reference), from 01/07/2024
BASE_SALARY = Decimal("2340000")

# Voluntary pension contributions deductible up to this amount per month
MAX_VOLUNTARY_PENSION_DEDUCTION = Decimal("1000000")


def _brackets(rows: list[tuple[int, int | None, str]]) -> tuple[TaxBracket, ...]:
    return tuple(
        TaxBracket(
            min=Decimal(lower),
            max=None if upper is None else Decimal(upper),
            rate=Decimal(rate),
        )
        for lower, upper, rate in rows
    )


# === Tax Brackets (Monthly taxable income) ===

BRACKETS_2025 = _brackets(
    [
        (0, 5_000_000, "0.05"),
        (5_000_000, 10_000_000, "0.10"),
        (10_000_000, 18_000_000, "0.15"),
        (18_000_000, 32_000_000, "0.20"),
        (32_000_000, 52_000_000, "0.25"),
        (52_000_000, 80_000_000, "0.30"),
        (80_000_000, None, "0.35"),
    ]
)

BRACKETS_2026 = _brackets(
    [
        (0, 10_000_000, "0.05"),
        (10_000_000, 30_000_000, "0.10"),
        (30_000_000, 60_000_000, "0.20"),
        (60_000_000, 100_000_000, "0.30"),
        (100_000_000, None, "0.35"),
    ]
)

# === Regional minimum wages (BHTN cap reference) ===

REGIONAL_MIN_WAGE_2025 = {
    RegionType.REGION_1: Decimal("4960000"),
    RegionType.REGION_2: Decimal("4410000"),
    RegionType.REGION_3: Decimal("3860000"),
    RegionType.REGION_4: Decimal("3450000"),
}

REGIONAL_MIN_WAGE_2026 = {
    RegionType.REGION_1: Decimal("5310000"),
    RegionType.REGION_2: Decimal("4730000"),
    RegionType.REGION_3: Decimal("4140000"),
    RegionType.REGION_4: Decimal("3700000"),
}


def validate_brackets(brackets: tuple[TaxBracket, ...]) -> tuple[TaxBracket, ...]:
    """Check that a schedule is contiguous, ascending and unbounded at the top.

    Args:
        brackets: Schedule to check

    Returns:
        The same schedule

    Raises:
        ConfigurationError: If the schedule is malformed
    """
    if not brackets:
        raise ConfigurationError("Biểu thuế rỗng")
    if brackets[0].min != 0:
        raise ConfigurationError("Bậc đầu tiên phải bắt đầu từ 0")
    for lower, upper in zip(brackets, brackets[1:]):
        if lower.max is None or lower.max != upper.min:
            raise ConfigurationError(f"Biểu thuế không liên tục tại {lower.max}")
        if upper.min <= lower.min:
            raise ConfigurationError("Biểu thuế phải tăng dần")
    if brackets[-1].max is not None:
        raise ConfigurationError("Bậc cuối cùng phải không giới hạn")
    return brackets


class LawConstants(BaseModel):
    """Immutable rule table for one law version."""

    model_config = {"frozen": True}

    version: LawVersion
    label: str = Field(..., description="Human readable name")
    brackets: tuple[TaxBracket, ...] = Field(..., description="Monthly progressive schedule")
    personal_deduction: Decimal = Field(..., description="Giảm trừ bản thân per month")
    dependent_deduction: Decimal = Field(..., description="Giảm trừ người phụ thuộc per month")
    base_salary: Decimal = Field(default=BASE_SALARY, description="Lương cơ sở")
    regional_min_wages: dict[RegionType, Decimal] = Field(..., description="Lương tối thiểu vùng")
    insurance_cap_multiple: Decimal = Field(default=INSURANCE_CAP_MULTIPLE)

    @property
    def social_insurance_cap(self) -> Decimal:
        """Maximum BHXH/BHYT contribution base (20 x lương cơ sở)."""
        return self.base_salary * self.insurance_cap_multiple

    def unemployment_insurance_cap(self, region: RegionType) -> Decimal:
        """Maximum BHTN contribution base (20 x regional minimum wage)."""
        return self.regional_min_wages[region] * self.insurance_cap_multiple


LAW_TABLES: dict[LawVersion, LawConstants] = {
    LawVersion.LAW_2025: LawConstants(
        version=LawVersion.LAW_2025,
        label="Luật cũ (7 bậc)",
        brackets=validate_brackets(BRACKETS_2025),
        personal_deduction=Decimal("11000000"),
        dependent_deduction=Decimal("4400000"),
        regional_min_wages=REGIONAL_MIN_WAGE_2025,
    ),
    LawVersion.LAW_2026: LawConstants(
        version=LawVersion.LAW_2026,
        label="Luật mới 2026 (5 bậc)",
        brackets=validate_brackets(BRACKETS_2026),
        personal_deduction=Decimal("15500000"),
        dependent_deduction=Decimal("6200000"),
        regional_min_wages=REGIONAL_MIN_WAGE_2026,
    ),
}


def get_law_constants(version: LawVersion | str = LawVersion.LAW_2026) -> LawConstants:
    """Select the rule table for a law version.

    Args:
        version: LawVersion member or its value ("2025", "2026")

    Returns:
        LawConstants for that version

    Raises:
        ConfigurationError: If the version is unknown
    """
    try:
        return LAW_TABLES[LawVersion(version)]
    except ValueError as e:
        raise ConfigurationError(f"Phiên bản luật không hỗ trợ: {version!r}") from e
