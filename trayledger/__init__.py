"""Mini README: Core package initializer for the Tray Ledger storefront.

This module exposes convenience imports that allow other parts of the
application to reach shared helpers without knowing the exact module
structure. Domain packages (catalog, currency, ledger, reporting, store)
are imported explicitly by callers so that importing the package stays
cheap.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
