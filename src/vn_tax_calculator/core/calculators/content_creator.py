"""Content creator income: VAT 5% + PIT 2% above the annual threshold.

Domestic affiliate platforms withhold 10% on payouts of 2 triệu or more;
foreign platforms (YouTube, TikTok...) pay gross and the creator declares.
"""

import logging
from decimal import Decimal
from typing import Optional

from vn_tax_calculator.core.calculators.flat_rate import evaluate_rule
from vn_tax_calculator.core.models.content_creator import (
    ContentCreatorInput,
    ContentCreatorTaxResult,
    CreatorMonth,
    CreatorPlatform,
    CreatorQuarter,
    Currency,
    PlatformIncome,
    PlatformTotal,
    Recommendation,
    RecommendationKind,
)
from vn_tax_calculator.core.models.flat_rate import FlatRateRule, ThresholdMode
from vn_tax_calculator.core.rules.flat_rates import (
    CREATOR_PIT_RATE,
    CREATOR_THRESHOLD_2025,
    CREATOR_THRESHOLD_2026,
    CREATOR_VAT_RATE,
    CREATOR_WITHHOLDING_RATE,
    WITHHOLDING_MIN_PAYMENT,
)
from vn_tax_calculator.shared.formatters import format_currency
from vn_tax_calculator.shared.validators import ZERO, effective_rate_percent, non_negative, round_money

logger = logging.getLogger(__name__)

PLATFORM_NAMES = {
    CreatorPlatform.SHOPEE: "Shopee Affiliate",
    CreatorPlatform.LAZADA: "Lazada Affiliate",
    CreatorPlatform.TIKI: "Tiki Affiliate",
    CreatorPlatform.SENDO: "Sendo Affiliate",
    CreatorPlatform.YOUTUBE: "YouTube",
    CreatorPlatform.TIKTOK: "TikTok",
    CreatorPlatform.FACEBOOK: "Facebook/Meta",
    CreatorPlatform.INSTAGRAM: "Instagram",
    CreatorPlatform.TWITCH: "Twitch",
    CreatorPlatform.PATREON: "Patreon",
    CreatorPlatform.OTHER: "Khác",
}

DOMESTIC_PLATFORMS = frozenset(
    {CreatorPlatform.SHOPEE, CreatorPlatform.LAZADA, CreatorPlatform.TIKI, CreatorPlatform.SENDO}
)

QUARTER_DEADLINES = {1: "30/04", 2: "30/07", 3: "30/10", 4: "30/01 năm sau"}


def get_creator_threshold(tax_year: int) -> Decimal:
    return CREATOR_THRESHOLD_2026 if tax_year >= 2026 else CREATOR_THRESHOLD_2025


def _foreign_platform(platform: CreatorPlatform) -> Optional[str]:
    if platform not in DOMESTIC_PLATFORMS:
        return "Nền tảng nước ngoài không khấu trừ tại nguồn - tự kê khai"
    return None


def _below_threshold(context: tuple[Decimal, Decimal]) -> Optional[str]:
    annual_income, threshold = context
    if annual_income <= threshold:
        return f"Tổng thu nhập không vượt ngưỡng {format_currency(threshold)}/năm"
    return None


PLATFORM_WITHHOLDING_RULE = FlatRateRule(
    name="creator_withholding",
    rate=CREATOR_WITHHOLDING_RATE,
    threshold_mode=ThresholdMode.EXEMPT_BELOW,
    threshold=WITHHOLDING_MIN_PAYMENT,
    exemption_predicate=_foreign_platform,
    below_threshold_reason="Khoản chi trả dưới 2 triệu - không khấu trừ",
)

CREATOR_VAT_RULE = FlatRateRule(
    name="creator_vat",
    rate=CREATOR_VAT_RATE,
    exemption_predicate=_below_threshold,
    legal_note="Thuế GTGT 5% trên doanh thu cá nhân kinh doanh dịch vụ.",
)

CREATOR_PIT_RULE = FlatRateRule(
    name="creator_pit",
    rate=CREATOR_PIT_RATE,
    exemption_predicate=_below_threshold,
    legal_note="Thuế TNCN 2% trên doanh thu cá nhân kinh doanh dịch vụ.",
)


class ContentCreatorTaxCalculator:
    """Annual tax position of a creator earning across several platforms."""

    def __init__(self, data: ContentCreatorInput):
        self.data = data
        self.rate = non_negative(data.usd_exchange_rate, "usd_exchange_rate")
        self.threshold = get_creator_threshold(data.tax_year)

    def _to_vnd(self, amount: Decimal, currency: Currency) -> Decimal:
        amount = non_negative(amount, "monthly_income")
        if currency == Currency.USD:
            return round_money(amount * self.rate)
        return amount

    def _months(self, income: PlatformIncome) -> list[Decimal]:
        values = [self._to_vnd(v, income.currency) for v in income.monthly_income[:12]]
        return values + [ZERO] * (12 - len(values))

    def _withholding(self, platform: CreatorPlatform, payout: Decimal) -> Decimal:
        return evaluate_rule(PLATFORM_WITHHOLDING_RULE, payout, platform).tax_amount

    def calculate(self) -> ContentCreatorTaxResult:
        totals = []
        month_income = [ZERO] * 12
        month_withheld = [ZERO] * 12

        for income in self.data.platforms:
            months = self._months(income)
            estimated = [self._withholding(income.platform, m) for m in months]
            withheld = (
                non_negative(income.withheld_tax, "withheld_tax")
                if income.withheld_tax is not None
                else sum(estimated, ZERO)
            )
            for i in range(12):
                month_income[i] += months[i]
                month_withheld[i] += estimated[i]
            totals.append(
                PlatformTotal(
                    platform=income.platform,
                    name=PLATFORM_NAMES[income.platform],
                    is_domestic=income.platform in DOMESTIC_PLATFORMS,
                    income=sum(months, ZERO),
                    withheld=withheld,
                )
            )

        total_income = sum((t.income for t in totals), ZERO)
        total_withheld = sum((t.withheld for t in totals), ZERO)
        context = (total_income, self.threshold)
        vat = evaluate_rule(CREATOR_VAT_RULE, total_income, context)
        pit = evaluate_rule(CREATOR_PIT_RULE, total_income, context)
        logger.debug("creator income=%s threshold=%s exempt=%s", total_income, self.threshold, pit.is_exempt)

        monthly = [
            CreatorMonth(
                month=i + 1,
                income=month_income[i],
                vat_due=evaluate_rule(CREATOR_VAT_RULE, month_income[i], context).tax_amount,
                pit_due=evaluate_rule(CREATOR_PIT_RULE, month_income[i], context).tax_amount,
                withheld=month_withheld[i],
            )
            for i in range(12)
        ]

        result = ContentCreatorTaxResult(
            total_income=total_income,
            platforms=totals,
            threshold=self.threshold,
            vat=vat,
            pit=pit,
            total_withheld=total_withheld,
            effective_rate=effective_rate_percent(vat.tax_amount + pit.tax_amount, total_income),
            monthly=monthly,
            quarterly=get_quarterly_summary(monthly),
            recommendations=[],
        )
        return result.model_copy(update={"recommendations": self._recommendations(result)})

    def _recommendations(self, result: ContentCreatorTaxResult) -> list[Recommendation]:
        tips = []
        if self.threshold * Decimal("0.8") < result.total_income < self.threshold:
            tips.append(
                Recommendation(
                    kind=RecommendationKind.WARNING,
                    title="Gần ngưỡng chịu thuế",
                    description=(
                        f"Thu nhập đang gần ngưỡng {format_currency(self.threshold)}/năm. "
                        "Nếu vượt ngưỡng, thuế 7% tính trên toàn bộ doanh thu."
                    ),
                )
            )
        if any(not t.is_domestic and t.income > 0 for t in result.platforms):
            tips.append(
                Recommendation(
                    kind=RecommendationKind.INFO,
                    title="Thu nhập từ nền tảng nước ngoài",
                    description="Thu nhập từ YouTube, TikTok, Facebook không được khấu trừ tại nguồn. "
                    "Cần tự kê khai và nộp thuế.",
                )
            )
        if result.total_withheld > 0 and result.remaining_tax < 0:
            tips.append(
                Recommendation(
                    kind=RecommendationKind.TIP,
                    title="Có thể được hoàn thuế",
                    description=(
                        f"Đã bị khấu trừ {format_currency(result.total_withheld)} nhưng thuế thực tế chỉ "
                        f"{format_currency(result.total_tax_due)}. Có thể làm hồ sơ hoàn thuế."
                    ),
                )
            )
        if not self.data.is_registered_business and result.total_income > self.threshold:
            tips.append(
                Recommendation(
                    kind=RecommendationKind.TIP,
                    title="Cân nhắc đăng ký hộ kinh doanh",
                    description="Đăng ký hộ kinh doanh giúp quản lý thuế minh bạch hơn.",
                )
            )
        tips.append(
            Recommendation(
                kind=RecommendationKind.INFO,
                title="Mốc kê khai quan trọng",
                description="Kê khai thuế quý: ngày 30 tháng đầu quý sau. Quyết toán năm: 31/03 năm sau.",
            )
        )
        return tips


def get_quarterly_summary(monthly: list[CreatorMonth]) -> list[CreatorQuarter]:
    quarters = []
    for quarter in range(1, 5):
        months = [m for m in monthly if (m.month - 1) // 3 + 1 == quarter]
        quarters.append(
            CreatorQuarter(
                quarter=quarter,
                income=sum((m.income for m in months), ZERO),
                tax=sum((m.vat_due + m.pit_due for m in months), ZERO),
                withheld=sum((m.withheld for m in months), ZERO),
                deadline=QUARTER_DEADLINES[quarter],
            )
        )
    return quarters


def calculate_content_creator_tax(data: ContentCreatorInput) -> ContentCreatorTaxResult:
    """Convenience function for ContentCreatorTaxCalculator."""
    return ContentCreatorTaxCalculator(data).calculate()
