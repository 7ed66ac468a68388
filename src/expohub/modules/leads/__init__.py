"""Leads module: exhibitor leads and visitor scans."""

from expohub.modules.leads.routes import router


__module_info__ = {
    "name": "leads",
    "version": "1.0.0",
    "description": "Exhibitor leads and scanned visitors",
    "dependencies": ["exhibitors", "events", "visitors"],
}

__all__ = ["router"]
