"""Digital asset transfer tax: 0.1% of each sell or swap from 01/07/2026."""

from typing import Optional

from vn_tax_calculator.core.calculators.flat_rate import evaluate_rule
from vn_tax_calculator.core.models.crypto import (
    AssetRateComparison,
    AssetTaxSummary,
    CryptoAssetType,
    CryptoTaxResult,
    CryptoTransaction,
    CryptoTransactionResult,
    CryptoTransactionType,
    MonthlyCryptoSummary,
)
from vn_tax_calculator.core.models.flat_rate import FlatRateRule
from vn_tax_calculator.core.rules.flat_rates import (
    CRYPTO_TAX_EFFECTIVE_DATE,
    CRYPTO_TRANSFER_RATE,
    GOLD_TRANSFER_RATE,
    REAL_ESTATE_PIT_RATE,
    SECURITIES_TRANSFER_RATE,
)
from vn_tax_calculator.shared.validators import ZERO, effective_rate_percent, round_money

ASSET_NAMES = {
    CryptoAssetType.BTC: "Bitcoin",
    CryptoAssetType.ETH: "Ethereum",
    CryptoAssetType.STABLECOIN: "Stablecoin",
    CryptoAssetType.ALTCOIN: "Altcoin",
    CryptoAssetType.NFT: "NFT",
    CryptoAssetType.OTHER: "Tài sản số khác",
}

# Transfer rates of comparable asset classes
COMPARISON_RATES = [
    ("Chứng khoán", SECURITIES_TRANSFER_RATE),
    ("Vàng miếng", GOLD_TRANSFER_RATE),
    ("Tài sản số", CRYPTO_TRANSFER_RATE),
    ("Bất động sản", REAL_ESTATE_PIT_RATE),
]

TAXABLE_TYPES = frozenset({CryptoTransactionType.SELL, CryptoTransactionType.SWAP})


def _crypto_exemption(transaction: CryptoTransaction) -> Optional[str]:
    if transaction.transaction_date < CRYPTO_TAX_EFFECTIVE_DATE:
        return "Giao dịch trước ngày luật có hiệu lực (1/7/2026)"
    if transaction.transaction_type == CryptoTransactionType.BUY:
        return "Mua vào không chịu thuế"
    if transaction.transaction_type == CryptoTransactionType.TRANSFER:
        return "Chuyển ví không chịu thuế"
    return None


CRYPTO_TRANSFER_RULE = FlatRateRule(
    name="crypto_transfer",
    rate=CRYPTO_TRANSFER_RATE,
    exemption_predicate=_crypto_exemption,
    legal_note="Thuế 0,1% trên giá trị giao dịch bán/hoán đổi, không phân biệt lãi lỗ.",
)


def calculate_crypto_tax(transactions: list[CryptoTransaction]) -> CryptoTaxResult:
    """Tax a year of crypto transactions.

    Args:
        transactions: Dated transactions valued in VND

    Returns:
        CryptoTaxResult with per-asset, per-month and cross-asset comparisons
    """
    results = [
        CryptoTransactionResult(transaction=t, tax=evaluate_rule(CRYPTO_TRANSFER_RULE, t.total_value, t))
        for t in transactions
    ]

    totals = {kind: ZERO for kind in CryptoTransactionType}
    by_asset: dict[CryptoAssetType, list[CryptoTransactionResult]] = {}
    by_month: dict[int, list[CryptoTransactionResult]] = {}
    for result in results:
        tx = result.transaction
        totals[tx.transaction_type] += result.tax.gross_amount
        by_asset.setdefault(tx.asset_type, []).append(result)
        by_month.setdefault(tx.transaction_date.month, []).append(result)

    taxable_value = sum((r.tax.gross_amount for r in results if r.is_taxable), ZERO)
    total_tax = sum((r.tax.tax_amount for r in results), ZERO)
    traded_value = (
        totals[CryptoTransactionType.BUY] + totals[CryptoTransactionType.SELL] + totals[CryptoTransactionType.SWAP]
    )

    asset_summaries = [
        AssetTaxSummary(
            asset_type=asset_type,
            asset_name=items[0].transaction.asset_name or ASSET_NAMES[asset_type],
            transaction_count=len(items),
            total_value=sum((r.tax.gross_amount for r in items), ZERO),
            tax_amount=sum((r.tax.tax_amount for r in items), ZERO),
        )
        for asset_type, items in by_asset.items()
    ]
    monthly = [
        MonthlyCryptoSummary(
            month=month,
            transaction_count=len(by_month.get(month, [])),
            total_value=sum((r.tax.gross_amount for r in by_month.get(month, [])), ZERO),
            tax_amount=sum((r.tax.tax_amount for r in by_month.get(month, [])), ZERO),
        )
        for month in range(1, 13)
    ]
    comparison = []
    for name, rate in COMPARISON_RATES:
        tax_at_rate = round_money(taxable_value * rate)
        comparison.append(
            AssetRateComparison(asset=name, rate=rate, tax_amount=tax_at_rate, difference=tax_at_rate - total_tax)
        )

    return CryptoTaxResult(
        transactions=results,
        total_buy_value=totals[CryptoTransactionType.BUY],
        total_sell_value=totals[CryptoTransactionType.SELL],
        total_swap_value=totals[CryptoTransactionType.SWAP],
        total_taxable_value=taxable_value,
        total_tax=total_tax,
        effective_rate=effective_rate_percent(total_tax, traded_value),
        by_asset=asset_summaries,
        monthly=monthly,
        rate_comparison=comparison,
    )
