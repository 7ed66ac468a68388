"""Plans module: pricing catalog and coupons."""

from expohub.modules.plans.routes import router


__module_info__ = {
    "name": "plans",
    "version": "1.0.0",
    "description": "Pricing plans and coupon codes",
    "dependencies": [],
}

__all__ = ["router"]
