"""Visitors module: registration, check-in codes and sign-in."""

from expohub.modules.visitors.routes import router


__module_info__ = {
    "name": "visitors",
    "version": "1.0.0",
    "description": "Visitor registration, check-in codes and sign-in",
    "dependencies": ["events"],
}

__all__ = ["router"]
