"""Tax rule modules: bracket engine, insurance and flat-rate calculators."""

from vn_tax_calculator.core.calculators.brackets import (
    calculate_bracket_breakdown,
    compute_progressive_tax,
    get_marginal_rate,
)
from vn_tax_calculator.core.calculators.flat_rate import evaluate_rule, sum_tax
from vn_tax_calculator.core.calculators.insurance import (
    compute_employer_insurance,
    compute_insurance,
    compute_taxable_income,
)
from vn_tax_calculator.core.calculators.salary import (
    SalaryTaxCalculator,
    calculate_gross_from_net,
    calculate_salary_tax,
    compare_law_versions,
)
from vn_tax_calculator.core.calculators.withholding import (
    calculate_foreign_contractor_tax,
    calculate_lottery_tax,
    calculate_withholding,
)
from vn_tax_calculator.core.calculators.vat import calculate_vat_deduction, calculate_vat_direct
from vn_tax_calculator.core.calculators.rental import calculate_rental_income_tax
from vn_tax_calculator.core.calculators.inheritance import calculate_inheritance_gift_tax
from vn_tax_calculator.core.calculators.gold import calculate_gold_transfer_tax
from vn_tax_calculator.core.calculators.securities import calculate_securities_tax
from vn_tax_calculator.core.calculators.real_estate import calculate_real_estate_transfer_tax
from vn_tax_calculator.core.calculators.severance import calculate_severance_tax
from vn_tax_calculator.core.calculators.content_creator import calculate_content_creator_tax
from vn_tax_calculator.core.calculators.crypto import calculate_crypto_tax
from vn_tax_calculator.core.calculators.household import calculate_household_business_tax
from vn_tax_calculator.core.calculators.late_payment import calculate_late_payment
from vn_tax_calculator.core.calculators.mortgage import calculate_mortgage, calculate_pmt
from vn_tax_calculator.core.calculators.foreigner import calculate_foreigner_tax
from vn_tax_calculator.core.calculators.exemption import check_exemption, search_exemptions

__all__ = [
    # Engine
    "calculate_bracket_breakdown",
    "compute_progressive_tax",
    "get_marginal_rate",
    "evaluate_rule",
    "sum_tax",
    # Salary and insurance
    "compute_employer_insurance",
    "compute_insurance",
    "compute_taxable_income",
    "SalaryTaxCalculator",
    "calculate_gross_from_net",
    "calculate_salary_tax",
    "compare_law_versions",
    # Flat-rate family
    "calculate_foreign_contractor_tax",
    "calculate_lottery_tax",
    "calculate_withholding",
    "calculate_vat_deduction",
    "calculate_vat_direct",
    "calculate_rental_income_tax",
    "calculate_inheritance_gift_tax",
    "calculate_gold_transfer_tax",
    "calculate_securities_tax",
    "calculate_real_estate_transfer_tax",
    "calculate_severance_tax",
    "calculate_content_creator_tax",
    "calculate_crypto_tax",
    "calculate_household_business_tax",
    "calculate_late_payment",
    "calculate_foreigner_tax",
    "check_exemption",
    "search_exemptions",
    # Amortization
    "calculate_mortgage",
    "calculate_pmt",
]
