"""Real estate transfer: 2% PIT on transfer value plus 0.5% registration fee."""

from datetime import date
from decimal import Decimal
from typing import Optional

from vn_tax_calculator.core.calculators.flat_rate import evaluate_rule
from vn_tax_calculator.core.models.enums import Relationship
from vn_tax_calculator.core.models.flat_rate import FlatRateRule
from vn_tax_calculator.core.models.real_estate import (
    RealEstateTransfer,
    RealEstateTransferResult,
    RealEstateTransferTaxResult,
    TransferTaxEstimate,
    TransferType,
)
from vn_tax_calculator.core.rules.flat_rates import REAL_ESTATE_PIT_RATE, REGISTRATION_FEE_RATE
from vn_tax_calculator.shared.validators import (
    ZERO,
    effective_rate_percent,
    non_negative,
    round_money,
)

FAMILY_TRANSFER_EXEMPT = {
    Relationship.SPOUSE: "Chuyển nhượng giữa vợ và chồng được miễn thuế TNCN",
    Relationship.PARENT_CHILD: "Chuyển nhượng giữa cha mẹ và con cái được miễn thuế TNCN",
    Relationship.SIBLING: "Chuyển nhượng giữa anh chị em ruột được miễn thuế TNCN",
}

INHERITANCE_EXEMPT = frozenset({Relationship.SPOUSE, Relationship.PARENT_CHILD})

GIFT_EXEMPT = frozenset(
    {
        Relationship.SPOUSE,
        Relationship.PARENT_CHILD,
        Relationship.SIBLING,
        Relationship.GRANDPARENT_GRANDCHILD,
    }
)


def check_exemption(transfer: RealEstateTransfer) -> Optional[str]:
    """Return the exemption reason for a transfer, or None when PIT is due."""
    kind, relationship = transfer.transfer_type, transfer.relationship
    if kind == TransferType.FAMILY:
        return FAMILY_TRANSFER_EXEMPT.get(relationship)
    if kind == TransferType.INHERITANCE and relationship in INHERITANCE_EXEMPT:
        return "Thừa kế từ vợ/chồng, cha mẹ/con cái được miễn thuế TNCN"
    if kind == TransferType.GIFT and relationship in GIFT_EXEMPT:
        return "Tặng cho trong gia đình (vợ chồng, cha mẹ con, anh chị em, ông bà cháu) được miễn thuế"
    return None


def _transfer_note(transfer: RealEstateTransfer) -> Optional[str]:
    if transfer.transfer_type == TransferType.INHERITANCE and transfer.relationship not in INHERITANCE_EXEMPT:
        return "Thừa kế từ người khác chịu thuế 10% trên phần giá trị trên 10 triệu"
    if transfer.is_first_home and transfer.transfer_type == TransferType.SALE:
        return "Mua nhà lần đầu: cần kiểm tra điều kiện cụ thể theo quy định"
    return None


def calculate_holding_months(purchase_date: Optional[date], transfer_date: Optional[date]) -> int:
    if purchase_date is None or transfer_date is None:
        return 0
    months = (transfer_date.year - purchase_date.year) * 12 + (transfer_date.month - purchase_date.month)
    return max(0, months)


REAL_ESTATE_PIT_RULE = FlatRateRule(
    name="real_estate_pit",
    rate=REAL_ESTATE_PIT_RATE,
    exemption_predicate=check_exemption,
    legal_note="Thông tư 111/2013/TT-BTC: thuế TNCN 2% trên giá chuyển nhượng.",
)


def calculate_transfer_tax(transfer: RealEstateTransfer) -> RealEstateTransferResult:
    """PIT and registration fee for one transfer. Exempt transfers pay no fee."""
    value = non_negative(transfer.transfer_value, "transfer_value")
    pit = evaluate_rule(REAL_ESTATE_PIT_RULE, value, transfer)

    if pit.is_exempt:
        registration_fee = ZERO
        exemption_amount = round_money(value * REAL_ESTATE_PIT_RATE)
    else:
        registration_fee = round_money(value * REGISTRATION_FEE_RATE)
        exemption_amount = ZERO

    capital_gain = ZERO
    if transfer.purchase_value is not None:
        capital_gain = value - non_negative(transfer.purchase_value, "purchase_value")

    return RealEstateTransferResult(
        transfer=transfer,
        pit=pit,
        registration_fee=registration_fee,
        capital_gain=capital_gain,
        holding_months=calculate_holding_months(transfer.purchase_date, transfer.transfer_date),
        exemption_amount=exemption_amount,
        note=_transfer_note(transfer),
    )


def calculate_real_estate_transfer_tax(transfers: list[RealEstateTransfer]) -> RealEstateTransferTaxResult:
    results = [calculate_transfer_tax(t) for t in transfers]
    total_value = sum((r.pit.gross_amount for r in results), ZERO)
    total_pit = sum((r.pit.tax_amount for r in results), ZERO)
    total_fee = sum((r.registration_fee for r in results), ZERO)
    return RealEstateTransferTaxResult(
        transfers=results,
        total_transfer_value=total_value,
        total_capital_gain=sum((r.capital_gain for r in results), ZERO),
        total_pit=total_pit,
        total_registration_fee=total_fee,
        total_exemptions=sum((r.exemption_amount for r in results), ZERO),
        effective_rate=effective_rate_percent(total_pit + total_fee, total_value),
    )


def estimate_transfer_tax(transfer_value: Decimal, is_exempt: bool = False) -> TransferTaxEstimate:
    """Quick estimate without exemption checks."""
    value = non_negative(transfer_value, "transfer_value")
    pit = ZERO if is_exempt else round_money(value * REAL_ESTATE_PIT_RATE)
    fee = ZERO if is_exempt else round_money(value * REGISTRATION_FEE_RATE)
    return TransferTaxEstimate(
        pit=pit,
        registration_fee=fee,
        total=pit + fee,
        net_proceeds=value - pit - fee,
    )
