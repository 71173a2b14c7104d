"""
Record repositories for ClientVault.

Every bucket holds a whole collection as one encoded value. Each operation
re-reads the collection, changes it in memory and writes all of it back, so
concurrent writers to the same bucket resolve as last write wins.
"""

import logging
from typing import Generic, List, Optional, Type, TypeVar

from . import config
from .crypto import Codec, DecodeError
from .models import Client, CustomField, Order, User
from .validation import (
    validate_client,
    validate_custom_field,
    validate_custom_values,
    validate_order,
)

logger = logging.getLogger(__name__)

T = TypeVar('T')


class UserRepository:
    """Reads and writes the single User record."""

    def __init__(self, store, codec: Codec):
        self.store = store
        self.codec = codec

    def get(self) -> Optional[User]:
        encoded = self.store.read(config.BUCKET_USER)
        if not encoded:
            return None
        try:
            return User.from_dict(self.codec.decode(encoded))
        except (DecodeError, TypeError, ValueError) as e:
            logger.error(f"Failed to decrypt user data: {e}")
            return None

    def save(self, user: User) -> None:
        """Write the user, replacing any existing one. Callers enforce the single-user rule."""
        self.store.write(config.BUCKET_USER, self.codec.encode(user.to_dict()))

    def remove(self) -> None:
        self.store.remove(config.BUCKET_USER)


class CollectionRepository(Generic[T]):
    """CRUD over one bucket holding a list of records."""

    bucket: str = ""
    model: Type = None

    def __init__(self, store, codec: Codec):
        self.store = store
        self.codec = codec

    def get_all(self) -> List[T]:
        """
        Get every record in the bucket.
        An unset bucket is empty. A bucket that cannot be decoded is logged
        and also read as empty.
        """
        encoded = self.store.read(self.bucket)
        if not encoded:
            return []
        try:
            data = self.codec.decode(encoded)
            if not isinstance(data, list):
                raise TypeError(f"expected a list, got {type(data).__name__}")
            return [self.model.from_dict(item) for item in data]
        except (DecodeError, TypeError, ValueError) as e:
            logger.error(f"Failed to decrypt {self.bucket} data: {e}")
            return []

    def get(self, record_id: str) -> Optional[T]:
        for record in self.get_all():
            if record.id == record_id:
                return record
        return None

    def save_all(self, records: List[T]) -> None:
        """Replace the whole collection."""
        self.store.write(self.bucket, self.codec.encode([r.to_dict() for r in records]))

    def add(self, record: T) -> None:
        self._check(record)
        records = self.get_all()
        records.append(record)
        self.save_all(records)
        logger.debug(f"Added {self.bucket} record {record.id}")

    def update(self, record: T) -> bool:
        """
        Replace the record with the same id.
        Returns:
            True if a record was replaced, False if the id is unknown (nothing is written)
        """
        self._check(record)
        records = self.get_all()
        for i, existing in enumerate(records):
            if existing.id == record.id:
                records[i] = record
                self.save_all(records)
                return True
        return False

    def remove(self, record_id: str) -> bool:
        """
        Delete the record with this id.
        Returns:
            True if a record was removed
        """
        records = self.get_all()
        remaining = [r for r in records if r.id != record_id]
        if len(remaining) != len(records):
            self.save_all(remaining)
            return True
        return False

    def clear(self) -> None:
        self.store.remove(self.bucket)

    def _check(self, record: T) -> None:
        """Hook for validation before add/update; raises ValidationError."""


class CustomFieldRepository(CollectionRepository[CustomField]):
    bucket = config.BUCKET_CUSTOM_FIELDS
    model = CustomField

    def get_for_entity(self, entity_type: str) -> List[CustomField]:
        return [f for f in self.get_all() if f.entity_type == entity_type]

    def _check(self, record: CustomField) -> None:
        validate_custom_field(record)
        if record.type != 'select':
            record.options = None


class _CustomValuesMixin:
    """Checks a record's custom values against the current field definitions."""

    entity_type: str = ""
    custom_fields: Optional[CustomFieldRepository] = None

    def _check_custom_values(self, record) -> None:
        if self.custom_fields is None:
            return
        validate_custom_values(record.custom_fields, self.custom_fields.get_all(), self.entity_type)


class ClientRepository(_CustomValuesMixin, CollectionRepository[Client]):
    bucket = config.BUCKET_CLIENTS
    model = Client
    entity_type = 'client'

    def __init__(self, store, codec: Codec, custom_fields: Optional[CustomFieldRepository] = None):
        super().__init__(store, codec)
        self.custom_fields = custom_fields

    def search(self, term: str) -> List[Client]:
        """Clients whose name, email or phone contains the term (case-insensitive)."""
        needle = (term or "").lower()
        return [
            c for c in self.get_all()
            if needle in c.name.lower() or needle in c.email.lower() or needle in c.phone.lower()
        ]

    def _check(self, record: Client) -> None:
        validate_client(record)
        self._check_custom_values(record)


class OrderRepository(_CustomValuesMixin, CollectionRepository[Order]):
    """Orders. The total is recomputed from the items on every save."""

    bucket = config.BUCKET_ORDERS
    model = Order
    entity_type = 'order'

    def __init__(self, store, codec: Codec, custom_fields: Optional[CustomFieldRepository] = None):
        super().__init__(store, codec)
        self.custom_fields = custom_fields

    def get_client_orders(self, client_id: str) -> List[Order]:
        return [o for o in self.get_all() if o.client_id == client_id]

    @staticmethod
    def client_name(order: Order, clients: List[Client]) -> str:
        for client in clients:
            if client.id == order.client_id:
                return client.name
        return config.UNKNOWN_CLIENT_NAME

    def search(self, term: str, clients: List[Client]) -> List[Order]:
        """Orders whose number or client name contains the term (case-insensitive)."""
        needle = (term or "").lower()
        return [
            o for o in self.get_all()
            if needle in o.order_number.lower() or needle in self.client_name(o, clients).lower()
        ]

    def _check(self, record: Order) -> None:
        validate_order(record)
        self._check_custom_values(record)
        calculated = record.compute_total()
        if record.total != calculated:
            logger.debug(f"Order {record.id}: replacing total {record.total} with {calculated}")
        record.total = calculated
