import copy

from variant_pricing.core.availability import is_variant_available
from variant_pricing.models import ProductVariantConfig


def test_complete_selection_is_available(shirt_config):
    result = is_variant_available({"Size": "M", "Color": "Red"}, shirt_config)

    assert result.is_available is True
    assert result.reason is None


def test_missing_required_option():
    config = ProductVariantConfig.model_validate({
        "options": [{"name": "Color", "type": "swatch", "required": True,
                     "values": [{"id": "red", "label": "Red", "value": "red"}]}]
    })

    result = is_variant_available({}, config)

    assert result.is_available is False
    assert result.reason == "Please select: Color"


def test_missing_required_options_listed_in_config_order(shirt_config):
    result = is_variant_available({"Gift Wrap": "yes", "Size": ""}, shirt_config)

    assert result.reason == "Please select: Size, Color"


def test_optional_option_may_be_left_out(shirt_config):
    assert is_variant_available({"Size": "S", "Color": "Blue"}, shirt_config).is_available


def test_unknown_value_is_invalid(shirt_config):
    result = is_variant_available({"Size": "XXL", "Color": "Purple"}, shirt_config)

    assert result.is_available is False
    assert result.reason == "Invalid selection for Size"


def test_unavailable_value_reports_label(shirt_config):
    result = is_variant_available({"Size": "S", "Color": "Green"}, shirt_config)

    assert result.is_available is False
    assert result.reason == "Green is currently unavailable"


def test_missing_required_wins_over_invalid_values(shirt_config):
    result = is_variant_available({"Color": "Nope"}, shirt_config)

    assert result.reason == "Please select: Size"


def test_selection_for_unknown_option_is_ignored(shirt_config):
    result = is_variant_available({"Size": "S", "Color": "Red", "Material": "silk"}, shirt_config)

    assert result.is_available is True


def test_check_is_pure(shirt_config):
    selection = {"Size": "L", "Color": "Green"}
    config_before = copy.deepcopy(shirt_config)

    first = is_variant_available(selection, shirt_config)
    second = is_variant_available(selection, shirt_config)

    assert first == second
    assert selection == {"Size": "L", "Color": "Green"}
    assert shirt_config == config_before
