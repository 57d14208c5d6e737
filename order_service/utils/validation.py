"""
Request body validation for orders

Each field has an ordered list of rules. Every rule of every field is
evaluated, and all failures are reported together as ``{field, message}``
entries; nothing short-circuits.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, NamedTuple, Optional

from fastapi import Request

from order_service.schemas.order import OrderCreate, OrderPatch
from order_service.utils.error_handler import ValidationFailed

MIN_TOTAL_VALUE = Decimal("0.01")
MAX_TOTAL_VALUE = Decimal("999999.99")

ORDER_NUMBER_PATTERN = re.compile(r"^[A-Za-z0-9-]+$")
CUSTOMER_NAME_PATTERN = re.compile(r"^[A-Za-z\s'-]+$")
TWO_DECIMALS_PATTERN = re.compile(r"^\d+(\.\d{1,2})?$")


class Rule(NamedTuple):
    check: Callable[[Any], bool]
    message: str


def _not_empty(value: Any) -> bool:
    return value is not None and value != ""


def _is_string(value: Any) -> bool:
    return isinstance(value, str)


def _length_between(low: int, high: int) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        return isinstance(value, str) and low <= len(value.strip()) <= high
    return check


def _matches(pattern: re.Pattern) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        return isinstance(value, str) and pattern.fullmatch(value.strip()) is not None
    return check


def _as_decimal(value: Any) -> Optional[Decimal]:
    """Numbers and numeric strings become a Decimal; anything else is None"""
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return None
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    if not number.is_finite():
        return None
    return number


def _in_range(value: Any) -> bool:
    number = _as_decimal(value)
    return number is not None and MIN_TOTAL_VALUE <= number <= MAX_TOTAL_VALUE


def _two_decimal_places(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return TWO_DECIMALS_PATTERN.fullmatch(str(value)) is not None


ORDER_RULES: dict[str, list[Rule]] = {
    "orderNumber": [
        Rule(_not_empty, "orderNumber is required"),
        Rule(_is_string, "orderNumber must be a string"),
        Rule(_length_between(3, 50), "orderNumber must be between 3 and 50 characters"),
        Rule(_matches(ORDER_NUMBER_PATTERN), "orderNumber can only contain letters, numbers and hyphens"),
    ],
    "customerName": [
        Rule(_not_empty, "customerName is required"),
        Rule(_is_string, "customerName must be a string"),
        Rule(_length_between(2, 100), "customerName must be between 2 and 100 characters"),
        Rule(
            _matches(CUSTOMER_NAME_PATTERN),
            "customerName can only contain letters, spaces, hyphens and apostrophes",
        ),
    ],
    "totalValue": [
        Rule(_not_empty, "totalValue is required"),
        Rule(_in_range, "totalValue must be between 0.01 and 999999.99"),
        Rule(_two_decimal_places, "totalValue can only have up to 2 decimal places"),
    ],
}


def collect_errors(body: dict, partial: bool = False) -> list[dict]:
    """Run every rule against ``body``; with ``partial`` absent fields are skipped"""
    errors = []
    for field, rules in ORDER_RULES.items():
        if partial and field not in body:
            continue
        value = body.get(field)
        for rule in rules:
            if not rule.check(value):
                errors.append({"field": field, "message": rule.message})
    return errors


def _clean(body: dict) -> dict:
    cleaned = {}
    for field in ("orderNumber", "customerName"):
        if field in body:
            cleaned[field] = body[field].strip()
    if "totalValue" in body:
        cleaned["totalValue"] = float(_as_decimal(body["totalValue"]))
    return cleaned


def validate_order(body: dict) -> OrderCreate:
    errors = collect_errors(body)
    if errors:
        raise ValidationFailed(errors)
    return OrderCreate(**_clean(body))


def validate_order_patch(body: dict) -> OrderPatch:
    errors = collect_errors(body, partial=True)
    if errors:
        raise ValidationFailed(errors)
    return OrderPatch(**_clean(body))


async def _json_object(request: Request) -> dict:
    try:
        body = await request.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        raise ValidationFailed([{"field": "body", "message": "Request body must be a JSON object"}])
    return body


async def order_create_body(request: Request) -> OrderCreate:
    """FastAPI dependency: validated body of a create request"""
    return validate_order(await _json_object(request))


async def order_patch_body(request: Request) -> OrderPatch:
    """FastAPI dependency: validated body of an update request"""
    return validate_order_patch(await _json_object(request))
