"""Rental income (cho thuê tài sản) models."""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, computed_field

from vn_tax_calculator.core.models.flat_rate import FlatRateResult


class RentalPropertyType(str, Enum):
    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"
    LAND = "land"
    VEHICLE = "vehicle"
    EQUIPMENT = "equipment"


class ExpenseMethod(str, Enum):
    """How expenses are accounted for when comparing net rental income."""

    DEEMED = "deemed"  # 10% of revenue
    ACTUAL = "actual"  # documented expenses


class RentalExpenses(BaseModel):
    """Documented annual expenses of a rental property."""

    model_config = {"frozen": True}

    maintenance: Decimal = Field(default=Decimal("0"))
    utilities: Decimal = Field(default=Decimal("0"))
    management: Decimal = Field(default=Decimal("0"))
    depreciation: Decimal = Field(default=Decimal("0"))
    insurance: Decimal = Field(default=Decimal("0"))
    other: Decimal = Field(default=Decimal("0"))

    @computed_field
    @property
    def total(self) -> Decimal:
        return (
            self.maintenance
            + self.utilities
            + self.management
            + self.depreciation
            + self.insurance
            + self.other
        )


class RentalProperty(BaseModel):
    model_config = {"frozen": True}

    name: str = Field(default="")
    property_type: RentalPropertyType = Field(default=RentalPropertyType.RESIDENTIAL)
    monthly_rent: Decimal = Field(default=Decimal("0"))
    occupied_months: int = Field(default=12, description="Months rented out in the year (0-12)")
    expenses: RentalExpenses = Field(default_factory=RentalExpenses)


class RentalMethodResult(BaseModel):
    """Taxes and net income for one expense method."""

    model_config = {"frozen": True}

    method: ExpenseMethod
    expenses: Decimal
    pit: FlatRateResult
    vat: FlatRateResult
    net_income: Decimal

    @computed_field
    @property
    def total_tax(self) -> Decimal:
        return self.pit.tax_amount + self.vat.tax_amount


class PropertyTaxResult(BaseModel):
    model_config = {"frozen": True}

    name: str
    property_type: RentalPropertyType
    annual_rent: Decimal
    occupied_months: int
    deemed: RentalMethodResult
    actual: RentalMethodResult
    recommended_method: ExpenseMethod
    savings: Decimal


class RentalIncomeTaxInput(BaseModel):
    model_config = {"frozen": True}

    properties: list[RentalProperty] = Field(default_factory=list)
    use_actual_expenses: bool = Field(default=False, description="Method used for the effective rate")


class RentalIncomeTaxResult(BaseModel):
    model_config = {"frozen": True}

    properties: list[PropertyTaxResult] = Field(default_factory=list)
    total_annual_rent: Decimal = Field(default=Decimal("0"))
    total_deemed_tax: Decimal = Field(default=Decimal("0"))
    total_actual_tax: Decimal = Field(default=Decimal("0"))
    total_deemed_net: Decimal = Field(default=Decimal("0"))
    total_actual_net: Decimal = Field(default=Decimal("0"))
    recommended_method: ExpenseMethod = ExpenseMethod.DEEMED
    potential_savings: Decimal = Field(default=Decimal("0"))
    is_taxable: bool = Field(default=False, description="Total annual rent above 100 triệu")
    effective_rate: Decimal = Field(default=Decimal("0"), description="Percent of annual rent")
