"""
Variant service - business logic behind the variant endpoints.
Parses stored configurations and combines the pricing engine's
functions into quotes and catalogue listings.
"""

from typing import Any, List, Mapping, Optional
import logging
from variant_pricing.models import (
    ConfigValidationResult,
    ProductVariantConfig,
    SelectedVariants,
    VariantAvailability,
    VariantCombination,
    VariantPriceCalculation,
    VariantQuote,
)
from variant_pricing.core.availability import is_variant_available
from variant_pricing.core.normalizer import (
    VariantConfigError,
    decode_variant_config,
    parse_variant_config,
)
from variant_pricing.core.pricing import calculate_variant_price
from variant_pricing.core.selection import (
    count_variant_combinations,
    format_variant_selection,
    generate_variant_sku,
    get_all_variant_combinations,
    get_default_variant_selection,
    resolve_variant_selection,
)
from variant_pricing.core.validator import validate_variant_config

logger = logging.getLogger(__name__)


class CombinationLimitExceeded(ValueError):
    def __init__(self, count: int, limit: int):
        self.count = count
        self.limit = limit
        super().__init__(f"Configuration has {count} combinations, limit is {limit}")


class VariantService:
    """
    Service layer for variant operations.
    Stateless: every call works only on its arguments.
    """

    def validate(self, raw_config: Any) -> ConfigValidationResult:
        try:
            raw_config = decode_variant_config(raw_config)
        except VariantConfigError as e:
            return ConfigValidationResult(is_valid=False, errors=e.errors)
        result = validate_variant_config(raw_config)
        logger.info(f"Validated variant config: valid={result.is_valid}, errors={len(result.errors)}")
        return result

    def default_selection(self, raw_config: Any) -> SelectedVariants:
        config = parse_variant_config(raw_config)
        if config is None:
            return {}
        return get_default_variant_selection(config)

    def quote(
        self,
        base_price: float,
        raw_config: Any,
        selected_variants: Optional[Mapping[str, str]] = None,
        quantity: int = 1,
        base_sku: Optional[str] = None,
    ) -> VariantQuote:
        """
        Price one cart line.

        Business Logic:
        1. Parse and validate the stored configuration
        2. Fall back to the default selection when none is given
        3. Resolve price and availability for the selection
        4. Unit price = final price; total = unit price x quantity (min 1)

        Args:
            base_price: Product price before variants
            raw_config: Stored configuration (JSON string, dict or None)
            selected_variants: Customer selection, optional
            quantity: Number of units
            base_sku: Product SKU used to derive the variant SKU

        Returns:
            VariantQuote

        Raises:
            VariantConfigError: If the configuration is malformed
        """
        config = parse_variant_config(raw_config)
        quantity = max(1, quantity)

        if config is None:
            # Product without variants: plain base price
            logger.info(f"Quoting product without variants at {base_price} x {quantity}")
            unit_price = max(0, base_price)
            return VariantQuote(
                price=VariantPriceCalculation(
                    base_price=base_price,
                    total_modifier=0,
                    final_price=unit_price,
                    applied_rules=[],
                ),
                availability=VariantAvailability(is_available=True),
                selected_variants={},
                sku=base_sku,
                quantity=quantity,
                unit_price=unit_price,
                total_price=unit_price * quantity,
            )

        if selected_variants is None:
            selected_variants = get_default_variant_selection(config)
            logger.info(f"No selection given, using defaults: {selected_variants}")

        selected_variants = dict(selected_variants)
        price = calculate_variant_price(base_price, selected_variants, config)
        availability = is_variant_available(selected_variants, config)

        if not availability.is_available:
            logger.info(f"Selection {selected_variants} unavailable: {availability.reason}")

        return VariantQuote(
            price=price,
            availability=availability,
            selected_variants=selected_variants,
            selections=resolve_variant_selection(selected_variants, config),
            sku=generate_variant_sku(base_sku, selected_variants) if base_sku else base_sku,
            display_name=format_variant_selection(selected_variants, config),
            quantity=quantity,
            unit_price=price.final_price,
            total_price=price.final_price * quantity,
        )

    def combinations(
        self,
        raw_config: Any,
        max_combinations: int,
        base_price: Optional[float] = None,
        base_sku: Optional[str] = None,
    ) -> List[VariantCombination]:
        """
        List every purchasable combination, optionally priced and SKU'd.

        Raises:
            VariantConfigError: If the configuration is malformed
            CombinationLimitExceeded: If there are more than max_combinations
        """
        config = parse_variant_config(raw_config)
        if config is None:
            config = ProductVariantConfig(options=[])

        count = count_variant_combinations(config)
        if count > max_combinations:
            logger.warning(f"Refusing to enumerate {count} combinations (limit {max_combinations})")
            raise CombinationLimitExceeded(count, max_combinations)

        listing = []
        for selection in get_all_variant_combinations(config):
            final_price = None
            if base_price is not None:
                final_price = calculate_variant_price(base_price, selection, config).final_price
            listing.append(
                VariantCombination(
                    selected_variants=selection,
                    sku=generate_variant_sku(base_sku, selection) if base_sku else None,
                    final_price=final_price,
                    display_name=format_variant_selection(selection, config),
                )
            )

        logger.info(f"Enumerated {len(listing)} variant combinations")
        return listing
