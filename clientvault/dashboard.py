"""
Dashboard statistics computed from the client and order collections.
"""

from typing import Dict, List

from . import config
from .models import Client, DashboardStats, Order, TopClient


def compute_stats(clients: List[Client], orders: List[Order]) -> DashboardStats:
    """
    Summarize clients and orders.

    Orders whose client no longer exists count towards the totals but not
    towards top clients. Top clients are ordered by revenue, highest first;
    clients with equal revenue keep the order in which their first order was
    seen.
    """
    names = {}
    for client in clients:
        names.setdefault(client.id, client.name)

    per_client: Dict[str, TopClient] = {}
    for order in orders:
        if order.client_id not in names:
            continue
        entry = per_client.get(order.client_id)
        if entry is None:
            entry = per_client[order.client_id] = TopClient(name=names[order.client_id], orders=0, revenue=0)
        entry.orders += 1
        entry.revenue += order.total

    top_clients = sorted(per_client.values(), key=lambda c: c.revenue, reverse=True)

    return DashboardStats(
        total_clients=len(clients),
        total_orders=len(orders),
        total_revenue=sum(order.total for order in orders),
        pending_orders=sum(1 for o in orders if o.status in config.OPEN_ORDER_STATUSES),
        completed_orders=sum(1 for o in orders if o.status == config.COMPLETED_ORDER_STATUS),
        top_clients=top_clients[:config.TOP_CLIENTS_LIMIT],
    )
