"""
Availability checks for a customer's variant selection.
First failure wins: the reason describes the first problem found.
"""

from typing import Mapping
import logging
from variant_pricing.models import ProductVariantConfig, VariantAvailability

logger = logging.getLogger(__name__)


def is_variant_available(
    selected_variants: Mapping[str, str],
    config: ProductVariantConfig,
) -> VariantAvailability:
    """
    Check whether a selection can be purchased.

    Checks, in order:
    1. Every required option has a non-empty selection
    2. Each selected token matches a configured value
    3. No selected value is flagged unavailable

    Args:
        selected_variants: Option name -> chosen value token
        config: Variant configuration of the product

    Returns:
        VariantAvailability with a reason when unavailable
    """
    missing_required = [
        option.name for option in config.options
        if option.required and not selected_variants.get(option.name)
    ]
    if missing_required:
        reason = f"Please select: {', '.join(missing_required)}"
        logger.debug(reason)
        return VariantAvailability(is_available=False, reason=reason)

    for option in config.options:
        selected_value = selected_variants.get(option.name)
        if not selected_value:
            continue

        variant_value = option.find_value(selected_value)
        if variant_value is None:
            logger.debug(f"No value '{selected_value}' configured for {option.name}")
            return VariantAvailability(
                is_available=False,
                reason=f"Invalid selection for {option.name}",
            )

        if variant_value.is_available is False:
            return VariantAvailability(
                is_available=False,
                reason=f"{variant_value.label} is currently unavailable",
            )

    return VariantAvailability(is_available=True)
