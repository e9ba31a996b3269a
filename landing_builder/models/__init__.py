from .page import Page
from .tenant import Tenant, TenantStatus

__all__ = [
    "Page",
    "Tenant",
    "TenantStatus",
]
