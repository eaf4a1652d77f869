"""Tax exemption eligibility checker."""

import logging
from datetime import date
from typing import Optional

from vn_tax_calculator.core.models.exemption import (
    ConditionCheck,
    ExemptionCategory,
    ExemptionCheckInput,
    ExemptionCheckResult,
    ExemptionRule,
    ExemptionStatus,
)
from vn_tax_calculator.core.rules.exemptions import EXEMPTION_RULES
from vn_tax_calculator.shared.validators import ZERO, coerce_enum, non_negative

logger = logging.getLogger(__name__)


def get_exemption_rule(category: ExemptionCategory | str) -> Optional[ExemptionRule]:
    try:
        return EXEMPTION_RULES[ExemptionCategory(category)]
    except ValueError:
        return None


def get_new_2026_exemptions() -> list[ExemptionRule]:
    """Categories added by the 2025 amendment."""
    return [r for r in EXEMPTION_RULES.values() if r.is_new_2026]


def get_original_exemptions() -> list[ExemptionRule]:
    return [r for r in EXEMPTION_RULES.values() if not r.is_new_2026]


def search_exemptions(keyword: str) -> list[ExemptionRule]:
    """Case-insensitive search over names, descriptions and conditions."""
    needle = keyword.strip().lower()
    if not needle:
        return list(EXEMPTION_RULES.values())
    return [
        rule
        for rule in EXEMPTION_RULES.values()
        if needle in rule.name.lower()
        or needle in rule.description.lower()
        or any(needle in c.lower() for c in rule.conditions)
    ]


def check_exemption(data: ExemptionCheckInput, as_of: Optional[date] = None) -> ExemptionCheckResult:
    """Decide whether an income qualifies for an exemption category.

    Every condition confirmed gives EXEMPT, some confirmed gives
    NEEDS_REVIEW, none gives NOT_EXEMPT. A category not yet in force on
    ``as_of`` is never exempt.

    Args:
        data: Category, income and the taxpayer's answers per condition
        as_of: Date the check applies to (today when None)

    Returns:
        ExemptionCheckResult with the exempt and taxable split
    """
    income = non_negative(data.income_amount, "income_amount")
    category = coerce_enum(ExemptionCategory, data.category, ExemptionCategory.REAL_ESTATE_ONLY_HOME)
    rule = EXEMPTION_RULES[category]
    as_of = as_of or date.today()

    if as_of < rule.effective_from:
        return ExemptionCheckResult(
            category=category,
            category_name=rule.name,
            status=ExemptionStatus.NOT_EXEMPT,
            exempt_amount=ZERO,
            taxable_amount=income,
            explanation=f"Quy định này có hiệu lực từ {rule.effective_from:%d/%m/%Y}",
            conditions=[ConditionCheck(condition=c, met=False, note="Chưa có hiệu lực") for c in rule.conditions],
            required_documents=list(rule.required_documents),
            legal_reference=rule.legal_reference,
        )

    answers = list(data.conditions_met)
    checks = []
    for index, condition in enumerate(rule.conditions):
        met = index < len(answers) and answers[index] is True
        checks.append(
            ConditionCheck(condition=condition, met=met, note="Đáp ứng điều kiện" if met else "Cần xác nhận")
        )

    exempt = ZERO
    if all(c.met for c in checks):
        status = ExemptionStatus.EXEMPT
        exempt = income if rule.max_exempt_amount is None else min(income, rule.max_exempt_amount)
        explanation = f"Đủ điều kiện miễn thuế theo {rule.legal_reference}"
    elif any(c.met for c in checks):
        status = ExemptionStatus.NEEDS_REVIEW
        explanation = "Cần xác nhận thêm các điều kiện còn lại"
    else:
        status = ExemptionStatus.NOT_EXEMPT
        explanation = "Không đáp ứng điều kiện miễn thuế"

    logger.debug("exemption %s: %s (%d/%d conditions)", category.value, status.value,
                 sum(c.met for c in checks), len(checks))
    return ExemptionCheckResult(
        category=category,
        category_name=rule.name,
        status=status,
        exempt_amount=exempt,
        taxable_amount=income - exempt,
        explanation=explanation,
        conditions=checks,
        required_documents=list(rule.required_documents),
        legal_reference=rule.legal_reference,
    )
