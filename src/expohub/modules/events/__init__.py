"""Events module: event creation, registration tokens and QR codes."""

from expohub.modules.events.routes import router


__module_info__ = {
    "name": "events",
    "version": "1.0.0",
    "description": "Events, registration links and QR codes",
    "dependencies": ["organizations"],
}

__all__ = ["router"]
