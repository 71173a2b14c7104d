"""
Export, import and reset of the ClientVault collections.

LEGAL NOTICE:
Exported files are plain JSON and are NOT encrypted. Store them as carefully
as you would the records themselves.
"""

import json
import logging
from typing import Any, Dict, List

from .models import Client, CustomField, Order
from .repositories import ClientRepository, CustomFieldRepository, OrderRepository
from .validation import ValidationError

logger = logging.getLogger(__name__)

COLLECTION_KEYS = ('clients', 'orders', 'customFields')


class BulkTransfer:
    """Moves all three collections in and out as one JSON document."""

    def __init__(self, clients: ClientRepository, orders: OrderRepository, custom_fields: CustomFieldRepository):
        self.clients = clients
        self.orders = orders
        self.custom_fields = custom_fields

    def export_all(self) -> Dict[str, List[Dict[str, Any]]]:
        """Snapshot of every collection as plain dictionaries."""
        return {
            'clients': [c.to_dict() for c in self.clients.get_all()],
            'orders': [o.to_dict() for o in self.orders.get_all()],
            'customFields': [f.to_dict() for f in self.custom_fields.get_all()],
        }

    def import_all(self, document: Dict[str, Any]) -> None:
        """
        Replace every collection with the document's contents.

        The whole document is checked before the first write. The three
        buckets are then written one after the other; an interruption between
        writes leaves a partial import.

        Raises:
            ValidationError: If a collection is missing or holds an unreadable record
        """
        if not isinstance(document, dict):
            raise ValidationError("Import document must be a JSON object")

        missing = [key for key in COLLECTION_KEYS if key not in document]
        if missing:
            raise ValidationError(f"Import document is missing: {', '.join(missing)}")

        for key in COLLECTION_KEYS:
            if not isinstance(document[key], list):
                raise ValidationError(f"'{key}' must be a list")

        try:
            clients = [Client.from_dict(c) for c in document['clients']]
            orders = [Order.from_dict(o) for o in document['orders']]
            custom_fields = [CustomField.from_dict(f) for f in document['customFields']]
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Import document holds an invalid record: {e}") from e

        self.clients.save_all(clients)
        self.orders.save_all(orders)
        self.custom_fields.save_all(custom_fields)
        logger.info(f"Imported {len(clients)} clients, {len(orders)} orders, {len(custom_fields)} custom fields")

    def reset_all(self) -> None:
        """Delete clients, orders and custom fields. The user account is kept."""
        self.clients.clear()
        self.orders.clear()
        self.custom_fields.clear()
        logger.info("Database reset")

    def export_to_file(self, filepath: str) -> int:
        """
        Write export_all() to a JSON file.
        Returns:
            Number of records written
        """
        data = self.export_all()
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
        count = sum(len(data[key]) for key in COLLECTION_KEYS)
        logger.info(f"Exported {count} records to {filepath}")
        return count

    def import_from_file(self, filepath: str) -> None:
        """
        Read a JSON export file and import it.
        Raises:
            ValidationError: If the file is not valid JSON or fails import checks
            OSError: If the file cannot be read
        """
        with open(filepath, 'r', encoding='utf-8') as f:
            try:
                document = json.load(f)
            except json.JSONDecodeError as e:
                raise ValidationError(f"Failed to import data. Please check the file format: {e}") from e
        self.import_all(document)
