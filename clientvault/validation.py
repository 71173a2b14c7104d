"""
Input checks applied before anything is written.
"""

import datetime
import numbers
import re
from typing import Any, Dict, Iterable

from . import config
from .models import Client, CustomField, Order

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class ValidationError(ValueError):
    """Raised when a record or document is rejected before being saved."""


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_custom_field(custom_field: CustomField) -> None:
    """Check a custom field definition."""
    if _is_blank(custom_field.name):
        raise ValidationError("Custom field name cannot be empty")
    if custom_field.type not in config.FIELD_TYPES:
        raise ValidationError(f"Unknown custom field type: {custom_field.type}")
    if custom_field.entity_type not in config.ENTITY_TYPES:
        raise ValidationError(f"Unknown entity type: {custom_field.entity_type}")
    if custom_field.type == 'select':
        if not custom_field.options:
            raise ValidationError("Please add at least one option for select type fields")
        if any(_is_blank(option) for option in custom_field.options):
            raise ValidationError("Select options cannot be empty")


def validate_client(client: Client) -> None:
    for attr in ('name', 'email', 'phone'):
        if _is_blank(getattr(client, attr)):
            raise ValidationError(f"Client {attr} cannot be empty")


def validate_order(order: Order) -> None:
    """
    Check an order before it is saved.

    Raises:
        ValidationError: missing client, unknown status, no items, or an item
            with an empty name, a quantity below 1 or a negative price
    """
    if _is_blank(order.client_id):
        raise ValidationError("Please select a client")
    if _is_blank(order.order_number):
        raise ValidationError("Order number cannot be empty")
    if order.status not in config.ORDER_STATUSES:
        raise ValidationError(f"Unknown order status: {order.status}")
    if not order.items:
        raise ValidationError("Please add at least one item to the order")
    for item in order.items:
        if _is_blank(item.name):
            raise ValidationError("Item name cannot be empty")
        if not isinstance(item.quantity, int) or isinstance(item.quantity, bool) or item.quantity < 1:
            raise ValidationError(f"Item '{item.name}' quantity must be a whole number of at least 1")
        if not _is_number(item.price) or item.price < 0:
            raise ValidationError(f"Item '{item.name}' price must be a number of at least 0")


def _check_value(custom_field: CustomField, value: Any) -> None:
    kind = custom_field.type
    label = custom_field.name

    if kind in ('text', 'phone'):
        ok = isinstance(value, str)
    elif kind == 'email':
        ok = isinstance(value, str) and bool(EMAIL_PATTERN.match(value))
    elif kind == 'number':
        ok = _is_number(value)
    elif kind == 'date':
        ok = isinstance(value, str)
        if ok:
            try:
                datetime.date.fromisoformat(value)
            except ValueError:
                ok = False
    elif kind == 'select':
        ok = value in (custom_field.options or [])
    elif kind == 'checkbox':
        ok = isinstance(value, bool)
    else:
        raise ValidationError(f"Unknown custom field type: {kind}")

    if not ok:
        raise ValidationError(f"Invalid {kind} value for '{label}': {value!r}")


def validate_custom_values(values: Dict[str, Any], custom_fields: Iterable[CustomField], entity_type: str) -> None:
    """
    Check a record's custom values against the field definitions for its
    entity type. Values for unknown field ids are left alone.
    """
    if not isinstance(values, dict):
        raise ValidationError("Custom field values must be a mapping")
    for custom_field in custom_fields:
        if custom_field.entity_type != entity_type:
            continue
        value = values.get(custom_field.id)
        missing = _is_blank(value)
        if custom_field.type == 'checkbox' and custom_field.required:
            missing = value is not True
        if missing:
            if custom_field.required:
                raise ValidationError(f"'{custom_field.name}' is required")
            continue
        _check_value(custom_field, value)
