"""
Shared helpers for the test modules.

Deriving a codec key runs Argon2, so one codec is built per secret and reused.
"""
from functools import lru_cache

from clientvault.crypto import Codec
from clientvault.models import Client, Order, OrderItem

TEST_SECRET = "test-secret-key"


@lru_cache(maxsize=None)
def get_codec(secret: str = TEST_SECRET) -> Codec:
    return Codec(secret)


def make_client(name="Acme Ltd", email="info@acme.test", phone="555-0100", **extra) -> Client:
    return Client.create(name, email, phone, **extra)


def make_order(client_id, items=(("Widget", 2, 10), ("Gadget", 1, 5)), **extra) -> Order:
    order_items = [OrderItem.create(name, quantity, price) for name, quantity, price in items]
    return Order.create(client_id, order_items, **extra)
