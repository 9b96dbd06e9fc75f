"""Mini README: Service interfaces for the storefront ledger.

Exports the FastAPI application factory that serves the ledger as JSON
to the browser-side view layer.
"""

from .web_app import create_application

__all__ = ["create_application"]
