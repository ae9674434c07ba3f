"""Identity directory access and admin authorization."""

from brokerage_admin.identity.authorization import (
    AuthorizationPolicy,
    Principal,
    RoleClaimPolicy,
    require_admin,
)
from brokerage_admin.identity.directory import (
    MIN_PASSWORD_LENGTH,
    DirectoryService,
    IdentityDirectory,
    InMemoryIdentityDirectory,
)

__all__ = [
    "AuthorizationPolicy",
    "DirectoryService",
    "IdentityDirectory",
    "InMemoryIdentityDirectory",
    "MIN_PASSWORD_LENGTH",
    "Principal",
    "RoleClaimPolicy",
    "require_admin",
]
