"""Exhibitors module: exhibitor profiles, sign-in and event registration."""

from expohub.modules.exhibitors.routes import router


__module_info__ = {
    "name": "exhibitors",
    "version": "1.0.0",
    "description": "Exhibitor profiles, sign-in and event registration",
    "dependencies": ["organizations", "events"],
}

__all__ = ["router"]
