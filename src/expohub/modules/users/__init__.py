"""Users module for console user management."""

from expohub.modules.users.routes import router


__module_info__ = {
    "name": "users",
    "version": "1.0.0",
    "description": "Console user management",
    "dependencies": ["organizations"],
}

__all__ = ["router"]
