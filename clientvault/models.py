"""
Record types stored by ClientVault.

Attributes are snake_case in Python and camelCase in stored and exported
documents; to_dict() and from_dict() convert between the two.
"""

import numbers
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional, Union, get_args, get_origin

from . import config
from .utils import generate_order_number, new_id, now_iso


def _camel(name: str) -> str:
    head, *rest = name.split('_')
    return head + ''.join(part.title() for part in rest)


def _matches(value: Any, annotation: Any) -> bool:
    """Loose runtime check of a JSON value against a field annotation."""
    if get_origin(annotation) is Union:
        return any(_matches(value, arg) for arg in get_args(annotation))
    if annotation is type(None):
        return value is None
    if annotation is Any:
        return True
    origin = get_origin(annotation) or annotation
    if origin is list:
        return isinstance(value, list)
    if origin is dict:
        return isinstance(value, dict)
    if annotation is bool:
        return isinstance(value, bool)
    if annotation is int:
        return isinstance(value, int) and not isinstance(value, bool)
    if annotation is float:
        return isinstance(value, numbers.Real) and not isinstance(value, bool)
    return isinstance(value, annotation)


class RecordMixin:
    """Shared dict conversion for the record dataclasses."""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization. Unset optional attributes are omitted."""
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None and f.default is None:
                continue
            if isinstance(value, list):
                value = [v.to_dict() if isinstance(v, RecordMixin) else v for v in value]
            elif isinstance(value, dict):
                value = dict(value)
            data[_camel(f.name)] = value
        return data

    @classmethod
    def _kwargs_from_dict(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        if not isinstance(data, dict):
            raise TypeError(f"{cls.__name__} must be an object, got {type(data).__name__}")
        kwargs = {}
        for f in fields(cls):
            key = _camel(f.name)
            if key not in data:
                continue
            if not _matches(data[key], f.type):
                raise TypeError(f"{cls.__name__}.{key} has the wrong type: {data[key]!r}")
            kwargs[f.name] = data[key]
        return kwargs

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """
        Create from dictionary.
        Raises TypeError when required keys are missing or a value has the wrong type."""
        return cls(**cls._kwargs_from_dict(data))


@dataclass
class User(RecordMixin):
    """The single registered account."""
    id: str
    username: str
    password_hash: str
    created_at: str


@dataclass
class Client(RecordMixin):
    """Represents a single client."""
    id: str
    name: str
    email: str
    phone: str
    created_at: str
    updated_at: str
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    notes: Optional[str] = None
    custom_fields: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(cls, name: str, email: str, phone: str, **extra) -> 'Client':
        """New client with a fresh id and timestamps."""
        now = now_iso()
        return cls(id=new_id(), name=name, email=email, phone=phone,
                   created_at=now, updated_at=now, **extra)


@dataclass
class OrderItem(RecordMixin):
    """One line of an order."""
    id: str
    name: str
    quantity: int
    price: float
    description: Optional[str] = None

    @classmethod
    def create(cls, name: str, quantity: int = 1, price: float = 0, description: Optional[str] = None) -> 'OrderItem':
        return cls(id=new_id(), name=name, quantity=quantity, price=price, description=description)

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity


@dataclass
class Order(RecordMixin):
    """Represents a single order placed by a client."""
    id: str
    client_id: str
    order_number: str
    status: str
    created_at: str
    updated_at: str
    items: List[OrderItem] = field(default_factory=list)
    total: float = 0
    notes: Optional[str] = None
    custom_fields: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Order':
        kwargs = cls._kwargs_from_dict(data)
        if 'items' in kwargs:
            if not isinstance(kwargs['items'], list):
                raise TypeError("Order items must be a list")
            kwargs['items'] = [OrderItem.from_dict(item) for item in kwargs['items']]
        return cls(**kwargs)

    @classmethod
    def create(cls, client_id: str, items: List[OrderItem], order_number: Optional[str] = None,
               status: str = config.DEFAULT_ORDER_STATUS, **extra) -> 'Order':
        """New order with a fresh id, timestamps and (unless given) order number."""
        now = now_iso()
        return cls(id=new_id(), client_id=client_id,
                   order_number=order_number or generate_order_number(),
                   status=status, created_at=now, updated_at=now, items=list(items), **extra)

    def compute_total(self) -> float:
        """Sum of price x quantity over the items."""
        return sum(item.subtotal for item in self.items)


@dataclass
class CustomField(RecordMixin):
    """An operator-defined extra attribute for clients or orders."""
    id: str
    name: str
    type: str
    entity_type: str
    required: bool
    created_at: str
    options: Optional[List[str]] = None
    description: Optional[str] = None

    @classmethod
    def create(cls, name: str, type: str, entity_type: str, required: bool = False, **extra) -> 'CustomField':
        return cls(id=new_id(), name=name, type=type, entity_type=entity_type,
                   required=required, created_at=now_iso(), **extra)


@dataclass
class TopClient(RecordMixin):
    name: str
    orders: int
    revenue: float


@dataclass
class DashboardStats(RecordMixin):
    """Figures shown on the dashboard."""
    total_clients: int = 0
    total_orders: int = 0
    total_revenue: float = 0
    pending_orders: int = 0
    completed_orders: int = 0
    top_clients: List[TopClient] = field(default_factory=list)
