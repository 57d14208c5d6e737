"""
Unit tests for order validation rules
"""

import pytest

from order_service.utils.error_handler import ValidationFailed
from order_service.utils.validation import collect_errors, validate_order, validate_order_patch

VALID = {"orderNumber": "ORD-1", "customerName": "Mary Ann", "totalValue": 10.5}

def messages_for(body, field, partial=False):
    return [error["message"] for error in collect_errors(body, partial) if error["field"] == field]

class TestOrderRules:
    """Test cases for per-field rules"""

    def test_valid_body_has_no_errors(self):
        assert collect_errors(VALID) == []

    def test_missing_fields_are_all_reported(self):
        fields = {error["field"] for error in collect_errors({})}
        assert fields == {"orderNumber", "customerName", "totalValue"}

    def test_empty_order_number_reports_every_failed_rule(self):
        assert messages_for({**VALID, "orderNumber": ""}, "orderNumber") == [
            "orderNumber is required",
            "orderNumber must be between 3 and 50 characters",
            "orderNumber can only contain letters, numbers and hyphens",
        ]

    def test_non_string_order_number(self):
        assert "orderNumber must be a string" in messages_for({**VALID, "orderNumber": 12345}, "orderNumber")

    @pytest.mark.parametrize("value", ["AB", "A" * 51, "ORD 1", "ORD_1", "   AB   "])
    def test_invalid_order_numbers(self, value):
        assert messages_for({**VALID, "orderNumber": value}, "orderNumber")

    @pytest.mark.parametrize("value", ["ABC", "A" * 50, "ord-2024-001"])
    def test_valid_order_numbers(self, value):
        assert messages_for({**VALID, "orderNumber": value}, "orderNumber") == []

    @pytest.mark.parametrize("value", ["J", "John3", "J" * 101, "Jane_Doe"])
    def test_invalid_customer_names(self, value):
        assert messages_for({**VALID, "customerName": value}, "customerName")

    @pytest.mark.parametrize("value", ["Jo", "Mary-Jane O'Neil", "  Ann  "])
    def test_valid_customer_names(self, value):
        assert messages_for({**VALID, "customerName": value}, "customerName") == []

    @pytest.mark.parametrize("value", [0.01, 1, 100, 999999.99, "12.50", "7"])
    def test_valid_total_values(self, value):
        assert messages_for({**VALID, "totalValue": value}, "totalValue") == []

    def test_total_value_out_of_range(self):
        for value in (0, 1000000):
            assert messages_for({**VALID, "totalValue": value}, "totalValue") == [
                "totalValue must be between 0.01 and 999999.99",
            ]

    def test_negative_total_value(self):
        messages = messages_for({**VALID, "totalValue": -5}, "totalValue")
        assert "totalValue must be between 0.01 and 999999.99" in messages

    def test_trailing_newline_is_rejected(self):
        assert messages_for({**VALID, "totalValue": "12.5\n"}, "totalValue") == [
            "totalValue can only have up to 2 decimal places",
        ]

    def test_total_value_precision(self):
        assert messages_for({**VALID, "totalValue": 10.555}, "totalValue") == [
            "totalValue can only have up to 2 decimal places",
        ]

    @pytest.mark.parametrize("value", ["invalid", True, [], "NaN", "Infinity"])
    def test_non_numeric_total_values(self, value):
        assert messages_for({**VALID, "totalValue": value}, "totalValue")

    def test_missing_total_value(self):
        assert "totalValue is required" in messages_for({"orderNumber": "ABC", "customerName": "Jo"}, "totalValue")

class TestValidateOrder:
    """Test cases for the validated create and patch payloads"""

    def test_validate_order_cleans_values(self):
        order = validate_order({"orderNumber": " ORD-9 ", "customerName": " Bob ", "totalValue": "12.50"})
        assert order.order_number == "ORD-9"
        assert order.customer_name == "Bob"
        assert order.total_value == 12.5

    def test_validate_order_raises_with_all_errors(self):
        with pytest.raises(ValidationFailed) as exc_info:
            validate_order({"orderNumber": "", "customerName": "", "totalValue": "invalid"})
        fields = {error["field"] for error in exc_info.value.errors}
        assert fields == {"orderNumber", "customerName", "totalValue"}

    def test_patch_skips_absent_fields(self):
        patch = validate_order_patch({"totalValue": 20})
        assert patch.total_value == 20
        assert patch.order_number is None
        assert patch.customer_name is None

    def test_patch_validates_present_fields(self):
        with pytest.raises(ValidationFailed) as exc_info:
            validate_order_patch({"customerName": ""})
        assert {error["field"] for error in exc_info.value.errors} == {"customerName"}

    def test_empty_patch_is_allowed(self):
        assert collect_errors({}, partial=True) == []
