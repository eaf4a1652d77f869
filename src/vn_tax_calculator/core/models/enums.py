"""Enumerations shared across tax domain models."""

from enum import Enum


class LawVersion(str, Enum):
    """PIT law version selecting bracket and deduction tables."""

    LAW_2025 = "2025"  # 7 bậc, giảm trừ 11 triệu
    LAW_2026 = "2026"  # 5 bậc (Luật 109/2025), giảm trừ 15,5 triệu


class RegionType(int, Enum):
    """Minimum-wage regions (vùng lương tối thiểu)."""

    REGION_1 = 1
    REGION_2 = 2
    REGION_3 = 3
    REGION_4 = 4


class Residency(str, Enum):
    """Tax residency status."""

    RESIDENT = "resident"
    NON_RESIDENT = "non_resident"


class Relationship(str, Enum):
    """Relationship between the giver and the receiver of an asset."""

    SPOUSE = "spouse"
    PARENT_CHILD = "parent_child"
    GRANDPARENT_GRANDCHILD = "grandparent_grandchild"
    SIBLING = "sibling"
    OTHER_RELATIVE = "other_relative"
    NON_RELATIVE = "non_relative"


class BusinessCategory(str, Enum):
    """Business line used by the direct VAT method and household business rates."""

    DISTRIBUTION = "distribution"  # phân phối, cung cấp hàng hóa
    SERVICES = "services"  # dịch vụ, xây dựng không bao thầu nguyên vật liệu
    PRODUCTION = "production"  # sản xuất, vận tải, dịch vụ gắn với hàng hóa
    OTHER = "other"  # hoạt động kinh doanh khác


class IncomeFrequency(str, Enum):
    """How often a freelance amount is received."""

    MONTHLY = "monthly"
    PROJECT = "project"
    ANNUAL = "annual"
