"""
Structural validation of raw variant configurations.

Runs on the decoded JSON (dicts and lists) before a configuration is
saved or turned into a ProductVariantConfig. Every problem is collected;
nothing is raised.
"""

from typing import Any, List, Mapping, Optional, Tuple, Union
import logging
from pydantic import BaseModel
from variant_pricing.models import ConfigValidationResult

logger = logging.getLogger(__name__)

OPTION_TYPES = ("select", "radio", "swatch")
RULE_TYPES = ("fixed", "percentage")


def _field(obj: Any, key: str) -> Any:
    """Read a key from a mapping; anything else has no fields."""
    if isinstance(obj, Mapping):
        return obj.get(key)
    return None


def _identity(item: Any) -> Tuple[str, Any]:
    """
    Equality key for duplicate detection.
    True and 1 hash alike in Python but are different ids; 1 and 1.0 are
    the same number.
    """
    if isinstance(item, bool):
        return ("bool", item)
    if isinstance(item, (int, float)):
        return ("number", item)
    if item is None or isinstance(item, str):
        return (type(item).__name__, item)
    return ("other", repr(item))


def _duplicates(items: List[Any]) -> List[str]:
    """
    Every repeated occurrence after the first, in order.
    Missing entries render as empty strings.
    """
    seen = set()
    repeated = []
    for item in items:
        key = _identity(item)
        if key in seen:
            repeated.append("" if item is None else str(item))
        else:
            seen.add(key)
    return repeated


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _validate_option(option: Any, position: int, errors: List[str]) -> None:
    name = _field(option, "name")
    if not name or not isinstance(name, str):
        errors.append(f"Option {position}: Name is required and must be a string")

    if _field(option, "type") not in OPTION_TYPES:
        errors.append(f"Option {position}: Type must be 'select', 'radio', or 'swatch'")

    values = _field(option, "values")
    if not values or not isinstance(values, list):
        errors.append(f"Option {position}: At least one value is required")
        return

    for value_position, value in enumerate(values, start=1):
        if not _field(value, "id") or not _field(value, "label") or not _field(value, "value"):
            errors.append(
                f"Option {position}, Value {value_position}: id, label, and value are required"
            )

    duplicate_ids = _duplicates([_field(value, "id") for value in values])
    if duplicate_ids:
        errors.append(f"Option {position}: Duplicate value IDs found: {', '.join(duplicate_ids)}")


def _validate_rule(rule: Any, position: int, errors: List[str]) -> None:
    if not _is_number(_field(rule, "priceModifier")):
        errors.append(f"Pricing rule {position}: priceModifier must be a number")

    if _field(rule, "type") not in RULE_TYPES:
        errors.append(f"Pricing rule {position}: type must be 'fixed' or 'percentage'")

    if not isinstance(_field(rule, "conditions"), Mapping):
        errors.append(f"Pricing rule {position}: conditions must be an object")


def validate_variant_config(config: Union[Mapping[str, Any], BaseModel, None]) -> ConfigValidationResult:
    """
    Validate a variant configuration independent of any selection.

    Error order:
    1. options must be a list (stops here if not)
    2. at least one option
    3. per option: name, type, values, per-value fields, duplicate value ids
    4. duplicate option names across the configuration
    5. per pricing rule: priceModifier, type, conditions

    Args:
        config: Raw configuration (camelCase keys) or a ProductVariantConfig

    Returns:
        ConfigValidationResult; is_valid is True iff errors is empty
    """
    if isinstance(config, BaseModel):
        config = config.model_dump(by_alias=True, exclude_none=True)

    errors: List[str] = []

    options = _field(config, "options")
    if not isinstance(options, list):
        errors.append("Options must be an array")
        return ConfigValidationResult(is_valid=False, errors=errors)

    if not options:
        errors.append("At least one variant option is required")

    for position, option in enumerate(options, start=1):
        _validate_option(option, position, errors)

    duplicate_names = _duplicates([_field(option, "name") for option in options])
    if duplicate_names:
        errors.append(f"Duplicate option names found: {', '.join(duplicate_names)}")

    pricing_rules: Optional[Any] = _field(config, "pricingRules")
    if pricing_rules is not None:
        if not isinstance(pricing_rules, list):
            errors.append("Pricing rules must be an array")
        else:
            for position, rule in enumerate(pricing_rules, start=1):
                _validate_rule(rule, position, errors)

    if errors:
        logger.debug(f"Variant config rejected with {len(errors)} error(s)")

    return ConfigValidationResult(is_valid=not errors, errors=errors)
