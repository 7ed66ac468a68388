"""Invoices module."""

from expohub.modules.invoices.routes import router


__module_info__ = {
    "name": "invoices",
    "version": "1.0.0",
    "description": "Organization invoices",
    "dependencies": ["organizations"],
}

__all__ = ["router"]
