"""
Normalization of stored variant configurations.

Product records keep their variant configuration either as a JSON string
or as decoded JSON. Both are validated structurally and converted into a
ProductVariantConfig.
"""

from typing import Any, List, Optional
import json
import logging
from pydantic import ValidationError
from variant_pricing.models import ProductVariantConfig
from variant_pricing.core.validator import validate_variant_config

logger = logging.getLogger(__name__)


class VariantConfigError(ValueError):
    """
    Raised when a stored configuration cannot be used.
    `errors` holds the human readable validation messages.
    """

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid variant configuration")


def decode_variant_config(raw: Any) -> Any:
    """
    Decode a configuration stored as a JSON string or bytes.
    Blank strings decode to None; anything else is returned unchanged.

    Raises:
        VariantConfigError: If the string is not valid JSON
    """
    if not isinstance(raw, (str, bytes)):
        return raw

    if not raw.strip():
        return None

    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning(f"Variant config is not valid JSON: {str(e)}")
        raise VariantConfigError([f"Variant config is not valid JSON: {e.msg}"]) from e


def parse_variant_config(raw: Any) -> Optional[ProductVariantConfig]:
    """
    Turn a stored configuration into a ProductVariantConfig.

    Rules:
    - Strings are decoded as JSON first
    - None or an empty object, decoded or not: product has no variants -> None
    - Structural problems raise VariantConfigError with every message

    Args:
        raw: JSON string, dict, or an existing ProductVariantConfig

    Returns:
        ProductVariantConfig, or None when the product has no variants

    Raises:
        VariantConfigError: If the configuration is malformed
    """
    if isinstance(raw, ProductVariantConfig):
        return raw

    raw = decode_variant_config(raw)
    if raw is None or raw == {}:
        return None

    result = validate_variant_config(raw)
    if not result.is_valid:
        logger.warning(f"Variant config failed validation: {result.errors}")
        raise VariantConfigError(result.errors)

    try:
        return ProductVariantConfig.model_validate(raw)
    except ValidationError as e:
        # Structurally sound but with wrongly typed leaves (e.g. numeric ids)
        messages = [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        ]
        logger.warning(f"Variant config has invalid field types: {messages}")
        raise VariantConfigError(messages) from e
