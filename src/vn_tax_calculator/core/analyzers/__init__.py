"""Comparison and optimization across alternative tax treatments."""

from vn_tax_calculator.core.analyzers.comparison import (
    compare,
    find_break_even,
    scan_break_even,
    scan_comparison,
)
from vn_tax_calculator.core.analyzers.business_form import compare_business_forms
from vn_tax_calculator.core.analyzers.couple import optimize_couple_tax
from vn_tax_calculator.core.analyzers.freelancer import (
    calculate_creator_income_comparison,
    calculate_freelancer_comparison,
    find_freelancer_break_even,
    generate_comparison_range,
    scan_freelancer_break_even,
)
from vn_tax_calculator.core.analyzers.multi_source import calculate_multi_source_tax
from vn_tax_calculator.core.analyzers.salary_comparison import compare_company_offers
from vn_tax_calculator.core.analyzers.vat_comparison import compare_vat_methods

__all__ = [
    "compare",
    "find_break_even",
    "scan_break_even",
    "scan_comparison",
    "compare_business_forms",
    "optimize_couple_tax",
    "calculate_creator_income_comparison",
    "calculate_freelancer_comparison",
    "find_freelancer_break_even",
    "generate_comparison_range",
    "scan_freelancer_break_even",
    "calculate_multi_source_tax",
    "compare_company_offers",
    "compare_vat_methods",
]
