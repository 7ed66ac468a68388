"""Uploads module: ground layout files for events."""

from expohub.modules.uploads.routes import router


__module_info__ = {
    "name": "uploads",
    "version": "1.0.0",
    "description": "Ground layout uploads served from /uploads or S3",
    "dependencies": [],
}

__all__ = ["router"]
