"""
Shared fixtures: variant configurations as stored by the storefront.
"""

import pytest
from variant_pricing.models import ProductVariantConfig


@pytest.fixture
def shirt_config_data():
    return {
        "options": [
            {
                "name": "Size",
                "type": "select",
                "required": True,
                "values": [
                    {"id": "size-s", "label": "Small", "value": "S", "priceModifier": 0},
                    {"id": "size-m", "label": "Medium", "value": "M", "priceModifier": 5},
                    {"id": "size-l", "label": "Large", "value": "L", "priceModifier": 10},
                ],
            },
            {
                "name": "Color",
                "type": "swatch",
                "required": True,
                "values": [
                    {"id": "color-red", "label": "Red", "value": "Red", "image": "red.png"},
                    {"id": "color-blue", "label": "Blue", "value": "Blue", "isDefault": True},
                    {"id": "color-green", "label": "Green", "value": "Green", "isAvailable": False},
                ],
            },
            {
                "name": "Gift Wrap",
                "type": "radio",
                "required": False,
                "values": [
                    {"id": "wrap-yes", "label": "Gift wrapped", "value": "yes", "priceModifier": 2.5},
                ],
            },
        ]
    }


@pytest.fixture
def shirt_config(shirt_config_data):
    return ProductVariantConfig.model_validate(shirt_config_data)


@pytest.fixture
def size_config():
    return ProductVariantConfig.model_validate({
        "options": [
            {
                "name": "Size",
                "type": "select",
                "required": True,
                "values": [
                    {"id": "s", "label": "Small", "value": "S", "priceModifier": 0},
                    {"id": "m", "label": "Medium", "value": "M", "priceModifier": 5},
                    {"id": "l", "label": "Large", "value": "L", "priceModifier": 10},
                ],
            }
        ]
    })
