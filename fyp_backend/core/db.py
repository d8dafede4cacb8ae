"""
Lookup helpers shared by the service layers.
"""

from fyp_backend.core.exceptions import NotFoundError


def get_or_not_found(queryset, label: str, **lookup):
    """Return the single row matching `lookup`, or raise NotFoundError."""
    obj = queryset.filter(**lookup).first()
    if obj is None:
        raise NotFoundError(f"{label} not found.")
    return obj


def lock_or_not_found(queryset, label: str, **lookup):
    """Same as get_or_not_found, with the row locked for the current transaction."""
    return get_or_not_found(queryset.select_for_update(), label, **lookup)
