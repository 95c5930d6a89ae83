"""
Price resolution for product variant selections.
Combines per-value price modifiers with cross-option pricing rules.
"""

from typing import List, Mapping
import logging
from variant_pricing.models import (
    PricingRule,
    ProductVariantConfig,
    VariantPriceCalculation,
)

logger = logging.getLogger(__name__)


def rule_matches(rule: PricingRule, selected_variants: Mapping[str, str]) -> bool:
    """
    True when every (option, value) condition equals the selection.
    A rule without conditions always matches.
    """
    return all(
        selected_variants.get(option_name) == required_value
        for option_name, required_value in rule.conditions.items()
    )


def rule_contribution(rule: PricingRule, base_price: float) -> float:
    """
    Amount a matching rule adds to the price.
    Percentage rules are always taken from the base price, never from a
    running total, so they do not compound.
    """
    if rule.type == "percentage":
        return base_price * rule.price_modifier / 100
    return rule.price_modifier


def calculate_variant_price(
    base_price: float,
    selected_variants: Mapping[str, str],
    config: ProductVariantConfig,
) -> VariantPriceCalculation:
    """
    Calculate the final price for a selection.

    Business Rules:
    - Each selected value adds its price modifier (missing modifier = 0)
    - Selections with no matching value are ignored, not rejected
    - Every matching pricing rule applies, in configuration order
    - The final price never goes below 0

    Args:
        base_price: Product price before variants
        selected_variants: Option name -> chosen value token
        config: Variant configuration of the product

    Returns:
        VariantPriceCalculation with the applied rules
    """
    total_modifier = 0.0
    applied_rules: List[PricingRule] = []

    for option in config.options:
        selected_value = selected_variants.get(option.name)
        if not selected_value:
            continue
        variant_value = option.find_value(selected_value)
        if variant_value is not None and variant_value.price_modifier:
            total_modifier += variant_value.price_modifier

    for rule in config.pricing_rules or []:
        if rule_matches(rule, selected_variants):
            total_modifier += rule_contribution(rule, base_price)
            applied_rules.append(rule)

    final_price = max(0, base_price + total_modifier)

    logger.debug(
        f"Priced selection {dict(selected_variants)}: base={base_price}, "
        f"modifier={total_modifier}, final={final_price}, rules={len(applied_rules)}"
    )

    return VariantPriceCalculation(
        base_price=base_price,
        total_modifier=total_modifier,
        final_price=final_price,
        applied_rules=applied_rules,
    )
