"""
Wires the ClientVault components together.
"""

import logging
from typing import Optional

from .auth import AuthManager
from .crypto import Codec
from .dashboard import compute_stats
from .models import DashboardStats
from .repositories import ClientRepository, CustomFieldRepository, OrderRepository, UserRepository
from .storage import FileStore, MemoryStore
from .transfer import BulkTransfer
from . import config

logger = logging.getLogger(__name__)


class ClientVault:
    """
    Owns one store, one codec and the repositories built on them.
    Create one per process and pass it to whatever needs persistence.
    """

    def __init__(self, store, codec: Codec):
        self.store = store
        self.codec = codec
        self.users = UserRepository(store, codec)
        self.custom_fields = CustomFieldRepository(store, codec)
        self.clients = ClientRepository(store, codec, self.custom_fields)
        self.orders = OrderRepository(store, codec, self.custom_fields)
        self.auth = AuthManager(self.users)
        self.transfer = BulkTransfer(self.clients, self.orders, self.custom_fields)

    @classmethod
    def open(cls, filepath: Optional[str] = None, secret: Optional[str] = None) -> 'ClientVault':
        """Vault backed by a store file (default: config.get_default_store_path())."""
        filepath = filepath or config.get_default_store_path()
        logger.debug(f"Opening store at {filepath}")
        return cls(FileStore(filepath), Codec(secret))

    @classmethod
    def in_memory(cls, secret: Optional[str] = None) -> 'ClientVault':
        return cls(MemoryStore(), Codec(secret))

    def stats(self) -> DashboardStats:
        """Dashboard figures from the current clients and orders."""
        return compute_stats(self.clients.get_all(), self.orders.get_all())
