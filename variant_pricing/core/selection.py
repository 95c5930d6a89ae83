"""
Derived data over a variant configuration: default selection, SKU
suffixes, combination enumeration and display formatting.
"""

from itertools import product
from typing import List, Mapping
import logging
import re
from variant_pricing.models import (
    ProductVariantConfig,
    SelectedVariants,
    VariantSelection,
)

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r'[^A-Za-z0-9]')


def get_default_variant_selection(config: ProductVariantConfig) -> SelectedVariants:
    """
    Pick the initial selection shown on a product page.

    - The first value flagged as default wins
    - Otherwise a required option falls back to its first available value
    - Optional options without a default stay unselected
    """
    default_selection: SelectedVariants = {}

    for option in config.options:
        default_value = next((v for v in option.values if v.is_default), None)
        if default_value is not None:
            default_selection[option.name] = default_value.value
        elif option.required and option.values:
            first_available = next(
                (v for v in option.values if v.is_available is not False), None
            )
            if first_available is not None:
                default_selection[option.name] = first_available.value

    return default_selection


def generate_variant_sku(base_sku: str, selected_variants: Mapping[str, str]) -> str:
    """
    Build a variant SKU such as SHIRT-SL-CRED from SHIRT and
    {"Size": "L", "Color": "Red"}.

    Each part is the option's first letter followed by the value with
    non-alphanumerics stripped, upper-cased, in selection order.
    """
    if not base_sku or not selected_variants:
        return base_sku

    variant_parts = [
        f"{option_name[:1].upper()}{_NON_ALNUM.sub('', str(value)).upper()}"
        for option_name, value in selected_variants.items()
    ]
    return f"{base_sku}-{'-'.join(variant_parts)}"


def count_variant_combinations(config: ProductVariantConfig) -> int:
    """Number of combinations get_all_variant_combinations would return."""
    count = 1
    for option in config.options:
        count *= sum(1 for v in option.values if v.is_available is not False)
    return count


def get_all_variant_combinations(config: ProductVariantConfig) -> List[SelectedVariants]:
    """
    Cartesian product of every option's available values.

    Returns [{}] for a configuration without options, and an empty list
    when any option has no available value.
    """
    if not config.options:
        return [{}]

    option_values = [
        [v.value for v in option.values if v.is_available is not False]
        for option in config.options
    ]
    names = [option.name for option in config.options]

    combinations = [dict(zip(names, combination)) for combination in product(*option_values)]
    logger.debug(f"Enumerated {len(combinations)} variant combinations")
    return combinations


def format_variant_selection(
    selected_variants: Mapping[str, str],
    config: ProductVariantConfig,
) -> str:
    """
    Human readable selection, e.g. "Size: Large, Color: Red".
    Unknown options or values fall back to the raw token.
    """
    labels = []
    for option_name, value in selected_variants.items():
        option = config.find_option(option_name)
        if option is None:
            labels.append(f"{option_name}: {value}")
            continue
        variant_value = option.find_value(value)
        label = variant_value.label if variant_value is not None else None
        labels.append(f"{option.name}: {label or value}")

    return ", ".join(labels)


def resolve_variant_selection(
    selected_variants: Mapping[str, str],
    config: ProductVariantConfig,
) -> List[VariantSelection]:
    """
    Resolve a selection to its configured values, in option order.
    Options without a matching selection are skipped.
    """
    resolved: List[VariantSelection] = []
    for option in config.options:
        variant_value = option.find_value(selected_variants.get(option.name))
        if variant_value is None:
            continue
        resolved.append(
            VariantSelection(
                option_name=option.name,
                value_id=variant_value.id,
                value=variant_value.value,
                label=variant_value.label,
                price_modifier=variant_value.price_modifier,
            )
        )
    return resolved
