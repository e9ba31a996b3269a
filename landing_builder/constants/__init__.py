from .roles import PAGE_DELETE_ROLES, PAGE_READ_ROLES, PAGE_WRITE_ROLES, RoleName

__all__ = [
    "PAGE_DELETE_ROLES",
    "PAGE_READ_ROLES",
    "PAGE_WRITE_ROLES",
    "RoleName",
]
