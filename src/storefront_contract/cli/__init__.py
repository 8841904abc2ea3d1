"""
Storefront contract CLI.

Commands:
    storefront-contract operations   # List operation keys
    storefront-contract describe     # Show one operation contract
    storefront-contract invoke       # Call an operation
"""

from .main import app, main

__all__ = ["app", "main"]
