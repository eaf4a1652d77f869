"""Domain models for Vietnamese tax calculations."""

from vn_tax_calculator.core.models.enums import (
    BusinessCategory,
    IncomeFrequency,
    LawVersion,
    RegionType,
    Relationship,
    Residency,
)
from vn_tax_calculator.core.models.brackets import BracketBreakdown, TaxBracket
from vn_tax_calculator.core.models.flat_rate import FlatRateResult, FlatRateRule, ThresholdMode
from vn_tax_calculator.core.models.salary import (
    InsuranceBreakdown,
    InsuranceOptions,
    LawComparison,
    SalaryTaxResult,
    TaxableIncomeInput,
)
from vn_tax_calculator.core.models.comparison import (
    BreakEvenResult,
    ComparisonResult,
    ComparisonSide,
    NetResult,
    ScanPoint,
)
from vn_tax_calculator.core.models.mortgage import (
    AmortizationRow,
    MortgageInput,
    MortgagePhaseConfig,
    MortgageResult,
    RepaymentMethod,
)

__all__ = [
    # Enums
    "BusinessCategory",
    "IncomeFrequency",
    "LawVersion",
    "RegionType",
    "Relationship",
    "Residency",
    # Engine
    "BracketBreakdown",
    "TaxBracket",
    "FlatRateResult",
    "FlatRateRule",
    "ThresholdMode",
    # Salary
    "InsuranceBreakdown",
    "InsuranceOptions",
    "LawComparison",
    "SalaryTaxResult",
    "TaxableIncomeInput",
    # Comparison
    "BreakEvenResult",
    "ComparisonResult",
    "ComparisonSide",
    "NetResult",
    "ScanPoint",
    # Mortgage
    "AmortizationRow",
    "MortgageInput",
    "MortgagePhaseConfig",
    "MortgageResult",
    "RepaymentMethod",
]
