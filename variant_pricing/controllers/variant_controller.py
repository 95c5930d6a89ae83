"""
Variant Controller.
Orchestrates the flow between the router, service, and view.
"""

from fastapi import HTTPException
import logging
from typing import Any, List, Mapping, Optional
from variant_pricing import config
from variant_pricing.core.normalizer import VariantConfigError
from variant_pricing.models import (
    ConfigValidationResult,
    SelectedVariants,
    VariantCombination,
    VariantQuote,
)
from variant_pricing.service import CombinationLimitExceeded, VariantService

logger = logging.getLogger(__name__)


class VariantController:
    """
    Controller for variant related operations.
    Maps domain errors to HTTP errors.
    """

    def __init__(self, max_combinations: Optional[int] = None):
        self.service = VariantService()
        self.max_combinations = config.MAX_COMBINATIONS if max_combinations is None else max_combinations

    def _invalid_config(self, e: VariantConfigError) -> HTTPException:
        logger.warning(f"Rejected variant config: {e.errors}")
        return HTTPException(
            status_code=400,
            detail={
                "error": "Invalid variant configuration",
                "errors": e.errors
            }
        )

    def _internal_error(self, action: str, e: Exception) -> HTTPException:
        logger.error(f"Error while {action}: {str(e)}", exc_info=True)
        return HTTPException(
            status_code=500,
            detail={
                "error": "Internal server error",
                "detail": str(e)
            }
        )

    def validate_config(self, raw_config: Any) -> ConfigValidationResult:
        try:
            return self.service.validate(raw_config)
        except Exception as e:
            raise self._internal_error("validating config", e)

    def get_defaults(self, raw_config: Any) -> SelectedVariants:
        try:
            return self.service.default_selection(raw_config)
        except VariantConfigError as e:
            raise self._invalid_config(e)
        except Exception as e:
            raise self._internal_error("resolving defaults", e)

    def quote(
        self,
        base_price: float,
        raw_config: Any,
        selected_variants: Optional[Mapping[str, str]],
        quantity: int,
        base_sku: Optional[str],
    ) -> VariantQuote:
        """
        Handle a quote request.

        Raises:
            HTTPException: 400 for a malformed configuration, 500 otherwise
        """
        try:
            logger.info(f"Processing quote: base_price={base_price}, quantity={quantity}")
            return self.service.quote(
                base_price,
                raw_config,
                selected_variants=selected_variants,
                quantity=quantity,
                base_sku=base_sku,
            )
        except VariantConfigError as e:
            raise self._invalid_config(e)
        except Exception as e:
            raise self._internal_error("quoting selection", e)

    def list_combinations(
        self,
        raw_config: Any,
        base_price: Optional[float],
        base_sku: Optional[str],
    ) -> List[VariantCombination]:
        try:
            return self.service.combinations(
                raw_config,
                self.max_combinations,
                base_price=base_price,
                base_sku=base_sku,
            )
        except VariantConfigError as e:
            raise self._invalid_config(e)
        except CombinationLimitExceeded as e:
            logger.warning(str(e))
            raise HTTPException(
                status_code=400,
                detail={
                    "error": "Too many combinations",
                    "detail": str(e),
                    "count": e.count,
                    "limit": e.limit
                }
            )
        except Exception as e:
            raise self._internal_error("listing combinations", e)
