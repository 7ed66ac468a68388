"""Organizations module: tenants, invites and organization sign-in."""

from expohub.modules.organizations.routes import router


__module_info__ = {
    "name": "organizations",
    "version": "1.0.0",
    "description": "Organization onboarding, invites and sign-in",
    "dependencies": [],
}

__all__ = ["router"]
