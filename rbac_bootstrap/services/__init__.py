"""Services package."""
from rbac_bootstrap.services import rbac_seed_service, rbac_service

__all__ = [
    "rbac_seed_service",
    "rbac_service",
]
