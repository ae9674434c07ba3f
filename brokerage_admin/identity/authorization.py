"""Admin authorization as an injected predicate over role claims."""

from dataclasses import dataclass, field
from typing import Any, Protocol

from brokerage_admin.config import AuthConfig
from brokerage_admin.exceptions import AuthorizationError


@dataclass
class Principal:
    """The signed-in user as seen by the service layer."""

    uid: str
    email: str | None = None
    claims: dict[str, Any] = field(default_factory=dict)


class AuthorizationPolicy(Protocol):
    def is_admin(self, principal: Principal | None) -> bool: ...


class RoleClaimPolicy:
    """Admin when the principal's role claim names the admin role.

    The claim may hold a single role or a list of roles.
    """

    def __init__(self, role_claim: str = "role", admin_role: str = "admin") -> None:
        self.role_claim = role_claim
        self.admin_role = admin_role

    @classmethod
    def from_config(cls, config: AuthConfig) -> "RoleClaimPolicy":
        return cls(role_claim=config.role_claim, admin_role=config.admin_role)

    def is_admin(self, principal: Principal | None) -> bool:
        if principal is None:
            return False
        role = principal.claims.get(self.role_claim)
        if isinstance(role, (list, tuple, set)):
            return self.admin_role in role
        return role == self.admin_role


def require_admin(policy: AuthorizationPolicy, principal: Principal | None) -> None:
    """Raise ``AuthorizationError`` unless ``principal`` is an admin."""
    if not policy.is_admin(principal):
        who = principal.uid if principal else "anonymous"
        raise AuthorizationError(f"{who} is not authorized for admin operations")
