"""Flat and threshold rates for non-salary income, VAT and transfers.

Sources:
- Luật Thuế TNCN and Thông tư 111/2013/TT-BTC (khấu trừ 10% từ 2 triệu,
  trúng thưởng/thừa kế 10% trên phần vượt 10 triệu)
- Thông tư 40/2021/TT-BTC (cho thuê tài sản, hộ kinh doanh)
- Luật Thuế GTGT 48/2024/QH15, Nghị định 72/2024 và 180/2024 (giảm 2% VAT)
- Luật Thuế TNCN sửa đổi 109/2025/QH15 (vàng miếng, tài sản số, hộ kinh doanh 2026)
- Luật Phí và lệ phí, Nghị định 10/2022/NĐ-CP (lệ phí trước bạ)
"""

from datetime import date
from decimal import Decimal

from vn_tax_calculator.core.models.enums import BusinessCategory

# === Withholding (khấu trừ tại nguồn) ===
WITHHOLDING_MIN_PAYMENT = Decimal("2000000")  # payments from 2 triệu/lần
FREELANCE_ANNUAL_EXEMPT_REVENUE = Decimal("100000000")  # cá nhân kinh doanh dưới 100 triệu/năm
FREELANCE_RATE = Decimal("0.10")
NON_RESIDENT_RATE = Decimal("0.20")
ROYALTY_RATE = Decimal("0.05")
DIVIDEND_RATE = Decimal("0.05")
INTEREST_RATE = Decimal("0.05")
CAPITAL_INVESTMENT_RATE = Decimal("0.05")

# === Lottery, prizes, inheritance and gifts ===
WINNINGS_THRESHOLD = Decimal("10000000")
WINNINGS_RATE = Decimal("0.10")
INHERITANCE_THRESHOLD = Decimal("10000000")
INHERITANCE_RATE = Decimal("0.10")
INHERITANCE_DECLARATION_DAYS = 10

# === Rental income (cho thuê tài sản) ===
RENTAL_PIT_RATE = Decimal("0.05")
RENTAL_VAT_RATE = Decimal("0.05")
RENTAL_ANNUAL_THRESHOLD = Decimal("100000000")
RENTAL_DEEMED_EXPENSE_RATE = Decimal("0.10")

# === Securities ===
SECURITIES_TRANSFER_RATE = Decimal("0.001")
SECURITIES_CAPITAL_GAINS_RATE = Decimal("0.20")
CORPORATE_BOND_INTEREST_RATE = Decimal("0.05")

# === Real estate transfer ===
REAL_ESTATE_PIT_RATE = Decimal("0.02")
REGISTRATION_FEE_RATE = Decimal("0.005")  # lệ phí trước bạ

# === Gold bars and digital assets (from 01/07/2026) ===
GOLD_TRANSFER_RATE = Decimal("0.001")
GOLD_TAX_EFFECTIVE_DATE = date(2026, 7, 1)
CRYPTO_TRANSFER_RATE = Decimal("0.001")
CRYPTO_TAX_EFFECTIVE_DATE = date(2026, 7, 1)

# Gold weight units in grams
GRAMS_PER_LUONG = Decimal("37.5")
GRAMS_PER_CHI = Decimal("3.75")

# === Severance and lump sums ===
SEVERANCE_EXEMPT_MONTHS = Decimal("10")  # exempt up to 10x average salary
SEVERANCE_EXCESS_RATE = Decimal("0.10")
SEVERANCE_MONTHS_PER_YEAR = Decimal("0.5")  # trợ cấp thôi việc: nửa tháng lương/năm
JOB_LOSS_MIN_MONTHS = Decimal("2")  # trợ cấp mất việc: tối thiểu 2 tháng lương
PENSION_LUMP_SUM_RATE = Decimal("0.10")

# === Content creators ===
CREATOR_VAT_RATE = Decimal("0.05")
CREATOR_PIT_RATE = Decimal("0.02")
CREATOR_WITHHOLDING_RATE = Decimal("0.10")  # domestic platforms, payments from 2 triệu
CREATOR_THRESHOLD_2025 = Decimal("100000000")
CREATOR_THRESHOLD_2026 = Decimal("500000000")
DEFAULT_USD_EXCHANGE_RATE = Decimal("25400")

# === VAT ===
VAT_STANDARD_RATE = Decimal("0.10")
VAT_REDUCED_RATE = Decimal("0.08")
VAT_SPECIAL_RATE = Decimal("0.05")
VAT_REGISTRATION_THRESHOLD = Decimal("200000000")  # doanh thu/năm
VAT_MANDATORY_DEDUCTION_REVENUE = Decimal("1000000000")
VAT_REDUCTION_START = date(2024, 1, 1)
VAT_REDUCTION_END = date(2026, 12, 31)  # Nghị quyết 204/2025/QH15
VAT_REFUND_EXPORT_RATIO = Decimal("0.6")
VAT_REFUND_CONSECUTIVE_MONTHS = 12

# Direct method: VAT = revenue x rate
DIRECT_VAT_RATES = {
    BusinessCategory.DISTRIBUTION: Decimal("0.01"),
    BusinessCategory.SERVICES: Decimal("0.05"),
    BusinessCategory.PRODUCTION: Decimal("0.03"),
    BusinessCategory.OTHER: Decimal("0.02"),
}

# === Household business (hộ kinh doanh) ===
HOUSEHOLD_THRESHOLD_2025 = Decimal("100000000")
HOUSEHOLD_THRESHOLD_2026 = Decimal("500000000")

HOUSEHOLD_PIT_RATES = {
    BusinessCategory.DISTRIBUTION: Decimal("0.005"),
    BusinessCategory.SERVICES: Decimal("0.02"),
    BusinessCategory.PRODUCTION: Decimal("0.015"),
    BusinessCategory.OTHER: Decimal("0.01"),
}

HOUSEHOLD_VAT_RATES = DIRECT_VAT_RATES

# Income method (from 2026): rate by annual revenue applied to profit
HOUSEHOLD_INCOME_METHOD_BRACKETS = [
    (Decimal("3000000000"), Decimal("0.15")),  # 500 triệu - 3 tỷ
    (Decimal("50000000000"), Decimal("0.17")),  # 3 tỷ - 50 tỷ
    (None, Decimal("0.20")),  # trên 50 tỷ
]

# === Freelancer vs employee ===
FREELANCER_SELF_INSURANCE_ANNUAL = Decimal("1500000")  # BHYT tự nguyện ước tính
BREAK_EVEN_LOW = Decimal("0")
BREAK_EVEN_HIGH = Decimal("500000000")
BREAK_EVEN_TOLERANCE = Decimal("10000")

# === Late payment (Luật Quản lý thuế 38/2019, Điều 59) ===
LATE_PAYMENT_DAILY_RATE = Decimal("0.0003")
