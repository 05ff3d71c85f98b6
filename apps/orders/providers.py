"""Service provider helpers for wiring the OrderEngine with its store.

The process keeps one ``Store`` for its whole lifetime: registries are in
memory and reset on restart. ``get_order_engine`` is what the views call;
``reset_store`` lets tests start every case from a fresh state.
"""

from typing import Optional

from django.conf import settings

from .engine import OrderEngine
from .repository import Store

_store: Optional[Store] = None


def _build_store() -> Store:
    if getattr(settings, "ORDERS_SEED_DATA", True):
        return Store.seeded()
    return Store()


def get_store() -> Store:
    """Return the process-wide store, creating it on first use."""
    global _store
    if _store is None:
        _store = _build_store()
    return _store


def reset_store(store: Optional[Store] = None) -> Store:
    """Replace the process-wide store.

    Args:
        store: Store to install. When omitted a new one is built from
            settings (seeded unless ``ORDERS_SEED_DATA`` is false).

    Returns:
        Store: The store now in use.
    """
    global _store
    _store = store if store is not None else _build_store()
    return _store


def get_order_engine() -> OrderEngine:
    """Return an OrderEngine bound to the process-wide store."""
    return OrderEngine(get_store())
