"""
Catalog module - the composed Store API operation catalog.

``STORE_API_CATALOG`` is built once at import and never mutated.
"""

from __future__ import annotations

from ..core.catalog import compose
from .base import BASE_CATALOG
from .overrides import OVERRIDE_CATALOG

STORE_API_CATALOG = compose(BASE_CATALOG, OVERRIDE_CATALOG)

__all__ = [
    "BASE_CATALOG",
    "OVERRIDE_CATALOG",
    "STORE_API_CATALOG",
]
