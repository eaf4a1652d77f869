"""Securities taxes: 0.1% on transfers, 5% on dividends and corporate bond interest."""

from typing import Optional

from vn_tax_calculator.core.calculators.flat_rate import evaluate_rule, sum_tax
from vn_tax_calculator.core.models.flat_rate import FlatRateResult, FlatRateRule
from vn_tax_calculator.core.models.securities import (
    BondInterestEntry,
    BondType,
    DividendEntry,
    SecuritiesTaxInput,
    SecuritiesTaxMethod,
    SecuritiesTaxResult,
    SecuritiesTransaction,
    SecuritiesType,
    TransactionTaxResult,
    UnlistedMethodComparison,
)
from vn_tax_calculator.core.rules.flat_rates import (
    CORPORATE_BOND_INTEREST_RATE,
    DIVIDEND_RATE,
    SECURITIES_CAPITAL_GAINS_RATE,
    SECURITIES_TRANSFER_RATE,
)
from vn_tax_calculator.shared.validators import ZERO, effective_rate_percent, non_negative


def _bond_transfer_exemption(securities_type: SecuritiesType) -> Optional[str]:
    if securities_type == SecuritiesType.BOND:
        return "Chuyển nhượng trái phiếu - thuế tính trên lãi trái phiếu"
    return None


def _government_bond_exemption(bond_type: BondType) -> Optional[str]:
    if bond_type == BondType.GOVERNMENT:
        return "Lãi trái phiếu Chính phủ được miễn thuế TNCN"
    return None


TRANSFER_RULE = FlatRateRule(
    name="securities_transfer",
    rate=SECURITIES_TRANSFER_RATE,
    exemption_predicate=_bond_transfer_exemption,
    legal_note="Thuế TNCN 0,1% trên giá chuyển nhượng từng lần.",
)

CAPITAL_GAINS_RULE = FlatRateRule(
    name="securities_capital_gains",
    rate=SECURITIES_CAPITAL_GAINS_RATE,
    legal_note="Thuế TNCN 20% trên thu nhập tính thuế (chứng khoán chưa niêm yết).",
)

DIVIDEND_RULE = FlatRateRule(
    name="dividend",
    rate=DIVIDEND_RATE,
    legal_note="Thuế TNCN 5% trên cổ tức bằng tiền.",
)

BOND_INTEREST_RULE = FlatRateRule(
    name="bond_interest",
    rate=CORPORATE_BOND_INTEREST_RATE,
    exemption_predicate=_government_bond_exemption,
    legal_note="Thuế TNCN 5% trên lãi trái phiếu doanh nghiệp.",
)


def calculate_transaction_tax(
    transaction: SecuritiesTransaction,
    method: SecuritiesTaxMethod = SecuritiesTaxMethod.TRANSACTION,
) -> TransactionTaxResult:
    """Tax one sale. Only unlisted shares may use the capital gains method."""
    quantity = non_negative(transaction.quantity, "quantity")
    buy_value = quantity * non_negative(transaction.buy_price, "buy_price")
    sell_value = quantity * non_negative(transaction.sell_price, "sell_price")
    fees = non_negative(transaction.buy_fee, "buy_fee") + non_negative(transaction.sell_fee, "sell_fee")
    capital_gain = sell_value - buy_value - fees

    if transaction.securities_type == SecuritiesType.UNLISTED and method == SecuritiesTaxMethod.CAPITAL_GAINS:
        used_method = SecuritiesTaxMethod.CAPITAL_GAINS
        tax = evaluate_rule(CAPITAL_GAINS_RULE, max(ZERO, capital_gain))
    else:
        used_method = SecuritiesTaxMethod.TRANSACTION
        tax = evaluate_rule(TRANSFER_RULE, sell_value, transaction.securities_type)

    return TransactionTaxResult(
        symbol=transaction.symbol,
        securities_type=transaction.securities_type,
        method=used_method,
        buy_value=buy_value,
        sell_value=sell_value,
        total_fees=fees,
        capital_gain=capital_gain,
        tax=tax,
    )


def calculate_dividend_tax(dividend: DividendEntry) -> FlatRateResult:
    gross = non_negative(dividend.dividend_per_share, "dividend_per_share") * non_negative(
        dividend.shares, "shares"
    )
    return evaluate_rule(DIVIDEND_RULE, gross)


def calculate_bond_interest_tax(bond: BondInterestEntry) -> FlatRateResult:
    return evaluate_rule(BOND_INTEREST_RULE, bond.interest_received, bond.bond_type)


def calculate_securities_tax(data: SecuritiesTaxInput) -> SecuritiesTaxResult:
    """Aggregate tax on a year of securities activity.

    Income counts capital gains (which may be negative), gross dividends
    and bond interest.
    """
    transactions = [calculate_transaction_tax(t, data.tax_method) for t in data.transactions]
    dividends = [calculate_dividend_tax(d) for d in data.dividends]
    bonds = [calculate_bond_interest_tax(b) for b in data.bonds]

    total_gain = sum((t.capital_gain for t in transactions), ZERO)
    total_income = (
        total_gain
        + sum((d.gross_amount for d in dividends), ZERO)
        + sum((b.gross_amount for b in bonds), ZERO)
    )
    total_tax = sum((t.tax.tax_amount for t in transactions), ZERO) + sum_tax(dividends) + sum_tax(bonds)

    return SecuritiesTaxResult(
        transactions=transactions,
        dividends=dividends,
        bonds=bonds,
        total_capital_gain=total_gain,
        total_income=total_income,
        total_tax=total_tax,
        effective_rate=effective_rate_percent(total_tax, total_income),
    )


def compare_unlisted_methods(transactions: list[SecuritiesTransaction]) -> UnlistedMethodComparison:
    """Compare 0.1% of sale value with 20% of gain for unlisted shares.

    Ties recommend the transaction method, which needs no cost records.
    """
    unlisted = [t for t in transactions if t.securities_type == SecuritiesType.UNLISTED]
    by_transaction = sum(
        (calculate_transaction_tax(t, SecuritiesTaxMethod.TRANSACTION).tax.tax_amount for t in unlisted), ZERO
    )
    by_gain = sum(
        (calculate_transaction_tax(t, SecuritiesTaxMethod.CAPITAL_GAINS).tax.tax_amount for t in unlisted), ZERO
    )
    recommendation = (
        SecuritiesTaxMethod.TRANSACTION if by_transaction <= by_gain else SecuritiesTaxMethod.CAPITAL_GAINS
    )
    return UnlistedMethodComparison(
        transaction_method_tax=by_transaction,
        capital_gains_method_tax=by_gain,
        recommendation=recommendation,
    )
