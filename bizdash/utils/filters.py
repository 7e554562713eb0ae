# ==============================================================================
# LIST FILTERS - Status Filter, Free-Text Search, Pending-First Sort
# ==============================================================================
# Presentation pipeline applied to client and product lists
# Accepts pydantic models or plain mappings
# ==============================================================================

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Sequence, TypeVar

from bizdash.core.constants import ClientFilter

T = TypeVar("T")

ALL = "All"

CLIENT_SEARCH_FIELDS = ("name", "cin", "email", "phone", "location")
PRODUCT_SEARCH_FIELDS = ("name", "reference", "id")


def _get(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _pending_count(record: Any) -> int:
    return _get(record, "pending_orders_count") or 0


def haystack(record: Any, fields: Sequence[str]) -> str:
    """Lowercased concatenation of the searchable fields of a record."""
    return " ".join(str(_get(record, f) or "") for f in fields).lower()


def matches_query(record: Any, query: str, fields: Sequence[str]) -> bool:
    """Case-insensitive substring match; an empty query matches everything."""
    needle = (query or "").strip().lower()
    if not needle:
        return True
    return needle in haystack(record, fields)


def _status_predicate(status: str) -> Callable[[Any], bool]:
    if not status or status == ALL:
        return lambda record: True
    if status == ClientFilter.PENDING_ORDERS.value:
        return lambda record: _pending_count(record) > 0
    return lambda record: _get(record, "status") == status


def pending_first(clients: Sequence[T]) -> List[T]:
    """
    Move clients with pending orders ahead of the others.

    The sort key is binary, so relative order inside each group is kept.

    Example:
        >>> pending_first([{"n": "A", "pending_orders_count": 0},
        ...                {"n": "B", "pending_orders_count": 2}])[0]["n"]
        'B'
    """
    return sorted(clients, key=lambda c: 0 if _pending_count(c) > 0 else 1)


def filter_clients(
    clients: Sequence[T],
    status: str = ALL,
    query: str = "",
) -> List[T]:
    """
    Apply status filter, free-text search and pending-first ordering.

    Args:
        clients: Client views carrying ``pending_orders_count``
        status: All, Active, Inactive or PendingOrders
        query: Text matched against name, cin, email, phone and location

    Returns:
        Filtered clients, those with pending orders first
    """
    keep = _status_predicate(status)
    selected = [
        c for c in clients
        if keep(c) and matches_query(c, query, CLIENT_SEARCH_FIELDS)
    ]
    return pending_first(selected)


def filter_products(
    products: Sequence[T],
    status: str = ALL,
    query: str = "",
) -> List[T]:
    """
    Apply status filter and free-text search, preserving input order.

    Args:
        products: Products to filter
        status: All or an exact product status
        query: Text matched against name, reference and id

    Returns:
        Matching products
    """
    keep = _status_predicate(status)
    return [
        p for p in products
        if keep(p) and matches_query(p, query, PRODUCT_SEARCH_FIELDS)
    ]


def status_counts(records: Sequence[Any], statuses: Sequence[str]) -> Dict[str, int]:
    """
    Number of records each status filter would keep.

    Example:
        >>> status_counts([{"status": "Active"}], ["All", "Active", "Inactive"])
        {'All': 1, 'Active': 1, 'Inactive': 0}
    """
    predicates = {status: _status_predicate(status) for status in statuses}
    return {
        status: sum(1 for record in records if keep(record))
        for status, keep in predicates.items()
    }
