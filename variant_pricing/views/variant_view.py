"""
Variant View.
Responsible for formatting variant results for the API response.
"""

from typing import List
from variant_pricing.models import (
    CombinationsResponse,
    QuoteResponse,
    VariantCombination,
    VariantQuote,
)


class VariantView:
    """
    View layer for variant resources.
    Handles the transformation of domain models to API response models.
    """

    @staticmethod
    def render_quote(quote: VariantQuote) -> QuoteResponse:
        """
        Render a quote, flagging whether it can go into the cart.
        """
        return QuoteResponse(
            price=quote.price,
            availability=quote.availability,
            selected_variants=quote.selected_variants,
            selections=quote.selections,
            sku=quote.sku,
            display_name=quote.display_name,
            quantity=quote.quantity,
            unit_price=quote.unit_price,
            total_price=quote.total_price,
            status="AVAILABLE" if quote.availability.is_available else "UNAVAILABLE"
        )

    @staticmethod
    def render_combinations(combinations: List[VariantCombination]) -> CombinationsResponse:
        return CombinationsResponse(
            count=len(combinations),
            combinations=combinations
        )
