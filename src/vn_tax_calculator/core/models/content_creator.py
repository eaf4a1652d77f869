"""Content creator (YouTuber, TikToker, KOL, affiliate) models."""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from vn_tax_calculator.core.models.flat_rate import FlatRateResult


class CreatorPlatform(str, Enum):
    SHOPEE = "shopee"
    LAZADA = "lazada"
    TIKI = "tiki"
    SENDO = "sendo"
    YOUTUBE = "youtube"
    TIKTOK = "tiktok"
    FACEBOOK = "facebook"
    INSTAGRAM = "instagram"
    TWITCH = "twitch"
    PATREON = "patreon"
    OTHER = "other"


class Currency(str, Enum):
    VND = "VND"
    USD = "USD"


class RecommendationKind(str, Enum):
    WARNING = "warning"
    INFO = "info"
    TIP = "tip"


class PlatformIncome(BaseModel):
    model_config = {"frozen": True}

    platform: CreatorPlatform = Field(default=CreatorPlatform.OTHER)
    monthly_income: list[Decimal] = Field(
        default_factory=list, description="Up to 12 monthly payouts, January first"
    )
    currency: Currency = Field(default=Currency.VND)
    withheld_tax: Optional[Decimal] = Field(
        default=None, description="Tax withheld in VND; estimated from payouts when missing"
    )


class ContentCreatorInput(BaseModel):
    model_config = {"frozen": True}

    tax_year: int = Field(default=2026)
    platforms: list[PlatformIncome] = Field(default_factory=list)
    is_registered_business: bool = False
    usd_exchange_rate: Decimal = Field(default=Decimal("25400"))


class PlatformTotal(BaseModel):
    model_config = {"frozen": True}

    platform: CreatorPlatform
    name: str
    is_domestic: bool
    income: Decimal
    withheld: Decimal


class CreatorMonth(BaseModel):
    model_config = {"frozen": True}

    month: int
    income: Decimal
    vat_due: Decimal
    pit_due: Decimal
    withheld: Decimal

    @computed_field
    @property
    def net_tax(self) -> Decimal:
        return self.vat_due + self.pit_due - self.withheld


class CreatorQuarter(BaseModel):
    model_config = {"frozen": True}

    quarter: int
    income: Decimal
    tax: Decimal
    withheld: Decimal
    deadline: str


class Recommendation(BaseModel):
    model_config = {"frozen": True}

    kind: RecommendationKind
    title: str
    description: str


class ContentCreatorTaxResult(BaseModel):
    model_config = {"frozen": True}

    total_income: Decimal
    platforms: list[PlatformTotal]
    threshold: Decimal
    vat: FlatRateResult
    pit: FlatRateResult
    total_withheld: Decimal
    effective_rate: Decimal
    monthly: list[CreatorMonth]
    quarterly: list[CreatorQuarter]
    recommendations: list[Recommendation]

    @computed_field
    @property
    def is_exempt(self) -> bool:
        return self.pit.is_exempt

    @computed_field
    @property
    def total_tax_due(self) -> Decimal:
        return self.vat.tax_amount + self.pit.tax_amount

    @computed_field
    @property
    def remaining_tax(self) -> Decimal:
        """Negative when more was withheld than is due."""
        return self.total_tax_due - self.total_withheld
