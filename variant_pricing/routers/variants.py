"""
Variant routes.
Handles variant configuration, pricing and enumeration endpoints.
"""

from fastapi import APIRouter
from variant_pricing.models import (
    CombinationsRequest,
    CombinationsResponse,
    ConfigRequest,
    ConfigValidationResult,
    DefaultsResponse,
    ErrorResponse,
    QuoteRequest,
    QuoteResponse,
)
from variant_pricing.controllers.variant_controller import VariantController
from variant_pricing.views.variant_view import VariantView

router = APIRouter(
    prefix="/variants",
    tags=["variants"]
)

# Initialize controller
controller = VariantController()

ERROR_RESPONSES = {
    400: {
        "description": "Invalid variant configuration",
        "model": ErrorResponse
    },
    500: {
        "description": "Internal server error",
        "model": ErrorResponse
    }
}


async def validate_config(request: ConfigRequest) -> ConfigValidationResult:
    """
    Validate a variant configuration before it is saved.
    Problems are returned as data, never as an error status.
    """
    return controller.validate_config(request.config)


async def get_defaults(request: ConfigRequest) -> DefaultsResponse:
    """
    Default selection for a product page.
    """
    return DefaultsResponse(selected_variants=controller.get_defaults(request.config))


async def quote(request: QuoteRequest) -> QuoteResponse:
    """
    Price and check availability of a selection.

    Args:
        request: Base price, configuration, selection and quantity

    Returns:
        QuoteResponse with price breakdown, availability, SKU and totals
    """
    quote_data = controller.quote(
        request.base_price,
        request.config,
        request.selected_variants,
        request.quantity,
        request.base_sku,
    )
    return VariantView.render_quote(quote_data)


async def list_combinations(request: CombinationsRequest) -> CombinationsResponse:
    """
    Every purchasable combination of a configuration.
    """
    combinations = controller.list_combinations(
        request.config,
        request.base_price,
        request.base_sku,
    )
    return VariantView.render_combinations(combinations)


router.add_api_route(
    "/validate",
    validate_config,
    methods=["POST"],
    response_model=ConfigValidationResult,
    responses={500: ERROR_RESPONSES[500]},
    summary="Validate a variant configuration"
)

router.add_api_route(
    "/defaults",
    get_defaults,
    methods=["POST"],
    response_model=DefaultsResponse,
    responses=ERROR_RESPONSES,
    summary="Get the default variant selection"
)

router.add_api_route(
    "/quote",
    quote,
    methods=["POST"],
    response_model=QuoteResponse,
    responses={
        200: {
            "description": "Selection priced",
            "model": QuoteResponse
        },
        **ERROR_RESPONSES
    },
    summary="Price a variant selection"
)

router.add_api_route(
    "/combinations",
    list_combinations,
    methods=["POST"],
    response_model=CombinationsResponse,
    responses=ERROR_RESPONSES,
    summary="List all variant combinations"
)
