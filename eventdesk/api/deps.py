from dataclasses import dataclass, field
from typing import List

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from eventdesk.core.environments import EnvironmentConfig
from eventdesk.core.security import decode_token
from eventdesk.db.database import get_db  # noqa: F401  re-exported for endpoints

security = HTTPBearer()

ROLE_ADMIN = "admin"
ROLE_ORGANIZER = "organizer"


@dataclass
class AdminPrincipal:
    """Caller identity taken from a verified bearer token."""
    user_id: str
    role: str
    email: str = ""
    organization_ids: List[str] = field(default_factory=list)

    def can_manage(self, organization_id: str) -> bool:
        if self.role == ROLE_ADMIN:
            return True
        return self.role == ROLE_ORGANIZER and organization_id in self.organization_ids


def get_environment(request: Request) -> EnvironmentConfig:
    return request.app.state.environment


def get_current_admin(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> AdminPrincipal:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = decode_token(credentials.credentials)
    if payload is None:
        raise credentials_exception

    user_id = payload.get("sub")
    if not user_id:
        raise credentials_exception

    role = payload.get("role")
    if role not in (ROLE_ADMIN, ROLE_ORGANIZER):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )

    organization_ids = payload.get("organization_ids") or []
    return AdminPrincipal(
        user_id=user_id,
        role=role,
        email=payload.get("email", ""),
        organization_ids=[str(org_id) for org_id in organization_ids],
    )


def ensure_can_manage(principal: AdminPrincipal, organization_id: str) -> None:
    if not principal.can_manage(organization_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed to manage this organization",
        )
