"""Home-purchase fee schedules and lending limits."""

from decimal import Decimal

# === Notary fee (Thông tư 257/2016/TT-BTC) ===
# (upper bound of property value, fixed part, rate on the part above the previous bound)
NOTARY_FLAT_FEES = [
    (Decimal("50000000"), Decimal("50000")),
    (Decimal("100000000"), Decimal("100000")),
]
NOTARY_TIERS = [
    (Decimal("1000000000"), Decimal("0"), Decimal("0"), Decimal("0.001")),
    (Decimal("3000000000"), Decimal("1000000000"), Decimal("1000000"), Decimal("0.0006")),
    (Decimal("5000000000"), Decimal("3000000000"), Decimal("2200000"), Decimal("0.0005")),
    (Decimal("10000000000"), Decimal("5000000000"), Decimal("3200000"), Decimal("0.0004")),
    (Decimal("100000000000"), Decimal("10000000000"), Decimal("5200000"), Decimal("0.0003")),
    (None, Decimal("100000000000"), Decimal("32200000"), Decimal("0.0002")),
]
NOTARY_FEE_CAP = Decimal("70000000")

# === Purchase costs ===
PROPERTY_REGISTRATION_FEE_RATE = Decimal("0.005")
APPRAISAL_FEE_RATE = Decimal("0.0015")
APPRAISAL_FEE_MIN = Decimal("100000")
APPRAISAL_FEE_MAX = Decimal("5000000")
MAINTENANCE_FEE_RATE = Decimal("0.02")  # phí bảo trì 2%, nhà mua từ chủ đầu tư
CONSTRUCTION_SHARE = Decimal("0.7")  # VAT applies to the construction part of the price
CONSTRUCTION_VAT_RATE = Decimal("0.10")

# === Affordability ===
MAX_DEBT_SERVICE_RATIO = Decimal("0.5")  # tối đa 50% thu nhập cho trả nợ
SENSITIVITY_DELTAS = [Decimal("0"), Decimal("1"), Decimal("2")]  # điểm % trên lãi thả nổi
