"""
Role Constants for the Landing Page Builder

Roles carried in the principal's access token. Route dependencies check
them through the groups below instead of hardcoding role names.
"""

from enum import Enum


class RoleName(str, Enum):
    """Enumeration of role names in the system."""

    OWNER = "OWNER"
    ADMIN = "ADMIN"
    EDITOR = "EDITOR"
    VIEWER = "VIEWER"


PAGE_READ_ROLES = [RoleName.OWNER, RoleName.ADMIN, RoleName.EDITOR, RoleName.VIEWER]
PAGE_WRITE_ROLES = [RoleName.OWNER, RoleName.ADMIN, RoleName.EDITOR]
PAGE_DELETE_ROLES = [RoleName.OWNER, RoleName.ADMIN]
