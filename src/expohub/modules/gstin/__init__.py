"""GSTIN (Indian GST registration number) verification."""

from expohub.modules.gstin.routes import router


__module_info__ = {
    "name": "gstin",
    "version": "1.0.0",
    "description": "GSTIN format validation and registration lookup",
    "dependencies": [],
}

__all__ = ["router"]
