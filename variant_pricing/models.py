"""
Data models for the product variant pricing engine.
All models use Pydantic for validation and static typing.

Field names are snake_case in Python and camelCase on the wire, so a
configuration stored by the storefront loads without translation.
"""

from typing import Dict, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime


OptionType = Literal["select", "radio", "swatch"]
RuleType = Literal["fixed", "percentage"]

# Option name -> chosen value token, e.g. {"Size": "L", "Color": "red"}
SelectedVariants = Dict[str, str]


class CamelModel(BaseModel):
    """Base model accepting both camelCase aliases and field names."""
    model_config = ConfigDict(populate_by_name=True)


class VariantValue(CamelModel):
    """
    One concrete choice within an option (e.g. "Large").
    `value` is the token stored in a selection map.
    """
    id: str
    label: str
    value: str
    price_modifier: Optional[float] = Field(default=None, alias="priceModifier")
    image: Optional[str] = None  # Swatch asset reference, opaque here
    is_default: Optional[bool] = Field(default=None, alias="isDefault")
    is_available: Optional[bool] = Field(default=None, alias="isAvailable")


class VariantOption(CamelModel):
    """
    One configurable axis of a product (e.g. "Size").
    `type` is a presentation hint only.
    """
    name: str
    type: OptionType
    required: bool = False
    values: List[VariantValue]

    def find_value(self, token: Optional[str]) -> Optional[VariantValue]:
        """Return the first value whose token equals `token` exactly."""
        for variant_value in self.values:
            if variant_value.value == token:
                return variant_value
        return None


class PricingRule(CamelModel):
    """
    Conditional price adjustment firing when every condition matches
    the selection. Percentage rules are a percent of the base price.
    """
    conditions: Dict[str, str]
    price_modifier: float = Field(alias="priceModifier")
    type: RuleType
    description: Optional[str] = None


class ProductVariantConfig(CamelModel):
    """
    Full variant configuration attached to a product.
    """
    options: List[VariantOption]
    pricing_rules: Optional[List[PricingRule]] = Field(default=None, alias="pricingRules")

    def find_option(self, name: str) -> Optional[VariantOption]:
        for option in self.options:
            if option.name == name:
                return option
        return None


class VariantPriceCalculation(CamelModel):
    """
    Result of resolving a price for a selection.
    final_price = max(0, base_price + total_modifier)
    """
    base_price: float = Field(alias="basePrice")
    total_modifier: float = Field(alias="totalModifier")
    final_price: float = Field(alias="finalPrice")
    applied_rules: List[PricingRule] = Field(default_factory=list, alias="appliedRules")


class VariantAvailability(CamelModel):
    """
    Whether a selection may currently be purchased.
    `reason` explains the first problem found.
    """
    is_available: bool = Field(alias="isAvailable")
    reason: Optional[str] = None
    stock_quantity: Optional[int] = Field(default=None, alias="stockQuantity")


class VariantSelection(CamelModel):
    """A selected option resolved against its configured value."""
    option_name: str = Field(alias="optionName")
    value_id: str = Field(alias="valueId")
    value: str
    label: str
    price_modifier: Optional[float] = Field(default=None, alias="priceModifier")


class ConfigValidationResult(CamelModel):
    is_valid: bool = Field(alias="isValid")
    errors: List[str] = Field(default_factory=list)


class VariantQuote(CamelModel):
    """
    Priced, availability-checked selection for one cart line.
    This is the internal representation handed to the view.
    """
    price: VariantPriceCalculation
    availability: VariantAvailability
    selected_variants: SelectedVariants = Field(alias="selectedVariants")
    selections: List[VariantSelection] = Field(default_factory=list)
    sku: Optional[str] = None
    display_name: str = Field(default="", alias="displayName")
    quantity: int = 1
    unit_price: float = Field(alias="unitPrice")
    total_price: float = Field(alias="totalPrice")


class VariantCombination(CamelModel):
    selected_variants: SelectedVariants = Field(alias="selectedVariants")
    sku: Optional[str] = None
    final_price: Optional[float] = Field(default=None, alias="finalPrice")
    display_name: str = Field(default="", alias="displayName")


# Request / response models for the HTTP layer.
# `config` stays raw (decoded JSON or a JSON string, as stored) so
# structural problems are reported by the validator instead of surfacing
# as pydantic 422 errors.

class ConfigRequest(CamelModel):
    config: Union[dict, str]


class QuoteRequest(CamelModel):
    base_price: float = Field(alias="basePrice")
    config: Optional[Union[dict, str]] = None
    selected_variants: Optional[SelectedVariants] = Field(default=None, alias="selectedVariants")
    quantity: int = 1
    base_sku: Optional[str] = Field(default=None, alias="baseSku")

    @field_validator('quantity')
    @classmethod
    def validate_quantity(cls, v: int) -> int:
        """
        Quantity validation: must not be negative.
        Zero is clamped to one later on, matching the storefront selector.
        """
        if v < 0:
            raise ValueError('Quantity must not be negative')
        return v


class CombinationsRequest(CamelModel):
    config: Union[dict, str]
    base_price: Optional[float] = Field(default=None, alias="basePrice")
    base_sku: Optional[str] = Field(default=None, alias="baseSku")


class DefaultsResponse(CamelModel):
    selected_variants: SelectedVariants = Field(alias="selectedVariants")


class QuoteResponse(CamelModel):
    """
    API response model for POST /variants/quote.
    """
    price: VariantPriceCalculation
    availability: VariantAvailability
    selected_variants: SelectedVariants = Field(alias="selectedVariants")
    selections: List[VariantSelection]
    sku: Optional[str] = None
    display_name: str = Field(alias="displayName")
    quantity: int
    unit_price: float = Field(alias="unitPrice")
    total_price: float = Field(alias="totalPrice")
    status: Literal["AVAILABLE", "UNAVAILABLE"]
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class CombinationsResponse(CamelModel):
    count: int
    combinations: List[VariantCombination]


class ErrorResponse(BaseModel):
    """
    Standard error response model.
    """
    error: str
    detail: Optional[str] = None
    errors: Optional[List[str]] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)
