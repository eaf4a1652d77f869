"""Gold transfer tax: 0.1% on sales of gold bars from 01/07/2026.

Jewelry and purchases are never taxed; the seller pays.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from vn_tax_calculator.core.calculators.flat_rate import evaluate_rule
from vn_tax_calculator.core.models.flat_rate import FlatRateRule
from vn_tax_calculator.core.models.gold import (
    GoldProfit,
    GoldTransaction,
    GoldTransactionResult,
    GoldTransferTaxInput,
    GoldTransferTaxResult,
    GoldType,
    GoldUnit,
    TradeSide,
)
from vn_tax_calculator.core.rules.flat_rates import (
    GOLD_TAX_EFFECTIVE_DATE,
    GOLD_TRANSFER_RATE,
    GRAMS_PER_CHI,
    GRAMS_PER_LUONG,
)
from vn_tax_calculator.shared.validators import ZERO, non_negative, round_money, round_to, safe_divide

GOLD_UNIT_TO_GRAMS = {
    GoldUnit.LUONG: GRAMS_PER_LUONG,
    GoldUnit.CHI: GRAMS_PER_CHI,
    GoldUnit.GRAM: Decimal("1"),
}

GOLD_TYPE_LABELS = {
    GoldType.SJC: "Vàng miếng SJC",
    GoldType.PNJ: "Vàng miếng PNJ",
    GoldType.DOJI: "Vàng miếng DOJI",
    GoldType.OTHER_BAR: "Vàng miếng khác",
    GoldType.JEWELRY: "Vàng trang sức",
}


def is_gold_tax_effective(on_date: Optional[date]) -> bool:
    """True on or after 01/07/2026. A missing date is treated as in force."""
    return on_date is None or on_date >= GOLD_TAX_EFFECTIVE_DATE


def convert_to_grams(quantity: Decimal, unit: GoldUnit) -> Decimal:
    return non_negative(quantity, "quantity") * GOLD_UNIT_TO_GRAMS[unit]


def _gold_exemption(context: tuple[GoldTransaction, Optional[date]]) -> Optional[str]:
    transaction, on_date = context
    if not is_gold_tax_effective(on_date):
        return f"Luật chưa có hiệu lực (hiệu lực từ {GOLD_TAX_EFFECTIVE_DATE:%d/%m/%Y})"
    if transaction.gold_type == GoldType.JEWELRY:
        return "Vàng trang sức không chịu thuế chuyển nhượng vàng miếng"
    if transaction.side == TradeSide.BUY:
        return "Giao dịch mua vào - không chịu thuế (người bán chịu thuế)"
    return None


GOLD_TRANSFER_RULE = FlatRateRule(
    name="gold_transfer",
    rate=GOLD_TRANSFER_RATE,
    exemption_predicate=_gold_exemption,
    legal_note="Thuế chuyển nhượng vàng miếng 0,1% trên giá trị bán ra.",
)


def calculate_gold_transaction_tax(
    transaction: GoldTransaction, calculation_date: Optional[date] = None
) -> GoldTransactionResult:
    value = non_negative(transaction.quantity, "quantity") * non_negative(
        transaction.price_per_unit, "price_per_unit"
    )
    on_date = transaction.transaction_date or calculation_date
    return GoldTransactionResult(
        transaction=transaction,
        grams=convert_to_grams(transaction.quantity, transaction.unit),
        tax=evaluate_rule(GOLD_TRANSFER_RULE, value, (transaction, on_date)),
    )


def calculate_gold_transfer_tax(data: GoldTransferTaxInput) -> GoldTransferTaxResult:
    """Tax every gold transaction and summarise.

    Args:
        data: Transactions plus an optional calculation date used for
            transactions without their own date

    Returns:
        GoldTransferTaxResult with per-transaction lines
    """
    results = [calculate_gold_transaction_tax(t, data.calculation_date) for t in data.transactions]

    taxable_value = sum((r.tax.gross_amount for r in results if r.is_taxable), ZERO)
    non_taxable_value = sum((r.tax.gross_amount for r in results if not r.is_taxable), ZERO)
    total_tax = sum((r.tax.tax_amount for r in results), ZERO)
    total_value = taxable_value + non_taxable_value

    return GoldTransferTaxResult(
        transactions=results,
        total_taxable_value=taxable_value,
        total_non_taxable_value=non_taxable_value,
        total_tax=total_tax,
        effective_rate=round_to(safe_divide(total_tax, total_value) * 100, 3),
        is_law_effective=is_gold_tax_effective(data.calculation_date),
        effective_date=GOLD_TAX_EFFECTIVE_DATE,
    )


def calculate_gold_profit(
    buy_price: Decimal, sell_price: Decimal, quantity: Decimal
) -> GoldProfit:
    """Profit on a round trip, net of the 0.1% tax on the sale."""
    quantity = non_negative(quantity, "quantity")
    buy_value = non_negative(buy_price, "buy_price") * quantity
    sell_value = non_negative(sell_price, "sell_price") * quantity
    profit = sell_value - buy_value
    tax_on_sale = round_money(sell_value * GOLD_TRANSFER_RATE)
    return GoldProfit(
        buy_value=buy_value,
        sell_value=sell_value,
        profit=profit,
        profit_percent=round_to(safe_divide(profit, buy_value) * 100, 2),
        tax_on_sale=tax_on_sale,
        net_profit=profit - tax_on_sale,
    )
