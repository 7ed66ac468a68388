"""Auth module: unified sign-in."""

from expohub.modules.auth.routes import router


__module_info__ = {
    "name": "auth",
    "version": "1.0.0",
    "description": "Unified sign-in for organizations, exhibitors and visitors",
    "dependencies": ["organizations", "exhibitors", "visitors"],
}

__all__ = ["router"]
